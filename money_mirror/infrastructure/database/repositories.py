"""Profile store - data access for user profiles and financial goals"""

from abc import ABC, abstractmethod
from dataclasses import asdict, replace
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from money_mirror.domain import analysis
from money_mirror.domain.exceptions import ProfileNotFoundError
from money_mirror.domain.models import (
    ActualSide,
    Contradiction,
    Dimension,
    FinancialGoal,
    FindingType,
    LifeContext,
    MoneyStyle,
    Resolution,
    ResolutionOutcome,
    Severity,
    StatedPreferences,
    StatedSide,
    TraitScore,
    UserProfile,
)
from money_mirror.infrastructure.database.models import FindingRecord, FinancialGoalRecord, UserProfileRecord

PROFILE_FIELDS = frozenset(["email", "name", "life_context", "stated_preferences", "money_style"])


class ProfileStore(ABC):
    """
    Storage for profiles, goals and detected findings. The analysis core only
    reads profiles and goals; writes come from onboarding, profile edits,
    reassessment, goal updates and finding follow-up.
    """

    @abstractmethod
    def get(self, user_id: str) -> Optional[UserProfile]:
        ...

    @abstractmethod
    def save(self, profile: UserProfile) -> None:
        ...

    @abstractmethod
    def list_goals(self, user_id: str) -> List[FinancialGoal]:
        ...

    @abstractmethod
    def save_goal(self, user_id: str, goal: FinancialGoal) -> None:
        ...

    @abstractmethod
    def list_findings(self, user_id: str, only_unresolved: bool = False) -> List[Contradiction]:
        ...

    @abstractmethod
    def save_finding(self, user_id: str, finding: Contradiction) -> None:
        ...

    def update(self, user_id: str, **changes: Any) -> UserProfile:
        """
        Apply a partial update to a stored profile.

        Raises:
            ProfileNotFoundError: no profile for user_id
            ValueError: unknown profile field
        """
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        current = self.get(user_id)
        if current is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")

        updated = replace(current, **changes)
        self.save(updated)
        return updated

    def update_goal_progress(self, user_id: str, goal_id: str, current_amount: float) -> FinancialGoal:
        goal = next((g for g in self.list_goals(user_id) if g.id == goal_id), None)
        if goal is None:
            raise KeyError(f"Goal {goal_id} not found for user {user_id}")
        updated = replace(goal, current_amount=current_amount)
        self.save_goal(user_id, updated)
        return updated

    def resolve_finding(
        self,
        user_id: str,
        finding_id: str,
        outcome: ResolutionOutcome | str,
        notes: str = "",
    ) -> Contradiction:
        """
        Mark a stored finding resolved and persist it.

        Raises:
            KeyError: no finding with that id for the user
        """
        finding = next((f for f in self.list_findings(user_id) if f.id == finding_id), None)
        if finding is None:
            raise KeyError(f"Finding {finding_id} not found for user {user_id}")
        resolved = analysis.resolve_finding(finding, outcome, notes=notes)
        self.save_finding(user_id, resolved)
        return resolved


class InMemoryProfileStore(ProfileStore):
    """Process-local store; construct one per process or per test"""

    def __init__(self):
        self._profiles: Dict[str, UserProfile] = {}
        self._goals: Dict[str, Dict[str, FinancialGoal]] = {}
        self._findings: Dict[str, Dict[str, Contradiction]] = {}

    def get(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def save(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile

    def list_goals(self, user_id: str) -> List[FinancialGoal]:
        return list(self._goals.get(user_id, {}).values())

    def save_goal(self, user_id: str, goal: FinancialGoal) -> None:
        if user_id not in self._profiles:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        self._goals.setdefault(user_id, {})[goal.id] = goal

    def list_findings(self, user_id: str, only_unresolved: bool = False) -> List[Contradiction]:
        findings = list(self._findings.get(user_id, {}).values())
        return [f for f in findings if not f.resolved] if only_unresolved else findings

    def save_finding(self, user_id: str, finding: Contradiction) -> None:
        if user_id not in self._profiles:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        self._findings.setdefault(user_id, {})[finding.id] = finding


class SqlProfileStore(ProfileStore):
    """Repository backed by a SQLAlchemy session; caller commits"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[UserProfile]:
        record = self.db.get(UserProfileRecord, user_id)
        return _profile_from_record(record) if record else None

    def save(self, profile: UserProfile) -> None:
        record = self.db.get(UserProfileRecord, profile.user_id)
        if record is None:
            record = UserProfileRecord(user_id=profile.user_id)
            self.db.add(record)

        record.email = profile.email
        record.name = profile.name
        record.created_at = profile.created_at
        record.life_context = asdict(profile.life_context) if profile.life_context else None
        record.stated_preferences = asdict(profile.stated_preferences) if profile.stated_preferences else None
        record.money_style = _money_style_to_json(profile.money_style) if profile.money_style else None
        self.db.flush()

    def list_goals(self, user_id: str) -> List[FinancialGoal]:
        records = (
            self.db.query(FinancialGoalRecord)
            .filter(FinancialGoalRecord.user_id == user_id)
            .order_by(FinancialGoalRecord.target_date.asc())
            .all()
        )
        return [_goal_from_record(r) for r in records]

    def save_goal(self, user_id: str, goal: FinancialGoal) -> None:
        if self.db.get(UserProfileRecord, user_id) is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")

        record = (
            self.db.query(FinancialGoalRecord)
            .filter(FinancialGoalRecord.user_id == user_id, FinancialGoalRecord.goal_id == goal.id)
            .first()
        )
        if record is None:
            record = FinancialGoalRecord(user_id=user_id, goal_id=goal.id)
            self.db.add(record)

        record.title = goal.title
        record.target_amount = goal.target_amount
        record.current_amount = goal.current_amount
        record.target_date = goal.target_date
        record.category = goal.category
        record.created_on = goal.created_at
        self.db.flush()

    def list_findings(self, user_id: str, only_unresolved: bool = False) -> List[Contradiction]:
        query = self.db.query(FindingRecord).filter(FindingRecord.user_id == user_id)
        if only_unresolved:
            query = query.filter(FindingRecord.resolved.is_(False))
        records = query.order_by(FindingRecord.detected_at.asc()).all()
        return [_finding_from_json(r.document) for r in records]

    def save_finding(self, user_id: str, finding: Contradiction) -> None:
        if self.db.get(UserProfileRecord, user_id) is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")

        record = (
            self.db.query(FindingRecord)
            .filter(FindingRecord.user_id == user_id, FindingRecord.finding_id == finding.id)
            .first()
        )
        if record is None:
            record = FindingRecord(user_id=user_id, finding_id=finding.id)
            self.db.add(record)

        record.rule = finding.rule
        record.severity = finding.severity.value
        record.resolved = finding.resolved
        record.detected_at = finding.detected_at
        record.document = _finding_to_json(finding)
        self.db.flush()


def _money_style_to_json(style: MoneyStyle) -> Dict[str, Any]:
    return {
        "style_code": style.style_code,
        "scores": [{"dimension": s.dimension.value, "value": s.value} for s in style.scores],
        "assessed_at": style.assessed_at.isoformat(),
    }


def _money_style_from_json(data: Dict[str, Any]) -> MoneyStyle:
    return MoneyStyle(
        style_code=data["style_code"],
        scores=[TraitScore(dimension=Dimension(s["dimension"]), value=int(s["value"])) for s in data["scores"]],
        assessed_at=datetime.fromisoformat(data["assessed_at"]),
    )


def _profile_from_record(record: UserProfileRecord) -> UserProfile:
    return UserProfile(
        user_id=record.user_id,
        email=record.email,
        name=record.name,
        created_at=record.created_at,
        life_context=LifeContext(**record.life_context) if record.life_context else None,
        stated_preferences=StatedPreferences(**record.stated_preferences) if record.stated_preferences else None,
        money_style=_money_style_from_json(record.money_style) if record.money_style else None,
    )


def _goal_from_record(record: FinancialGoalRecord) -> FinancialGoal:
    return FinancialGoal(
        id=record.goal_id,
        title=record.title,
        target_amount=record.target_amount,
        current_amount=record.current_amount,
        target_date=record.target_date,
        category=record.category,
        created_at=record.created_on,
    )


def _finding_to_json(finding: Contradiction) -> Dict[str, Any]:
    data = asdict(finding)
    data["type"] = finding.type.value
    data["severity"] = finding.severity.value
    data["detected_at"] = finding.detected_at.isoformat()
    if finding.resolution is not None:
        data["resolution"] = {
            "resolved_at": finding.resolution.resolved_at.isoformat(),
            "outcome": finding.resolution.outcome.value,
            "notes": finding.resolution.notes,
        }
    return data


def _finding_from_json(data: Dict[str, Any]) -> Contradiction:
    resolution = data.get("resolution")
    return Contradiction(
        id=data["id"],
        detected_at=datetime.fromisoformat(data["detected_at"]),
        type=FindingType(data["type"]),
        severity=Severity(data["severity"]),
        stated=StatedSide(**data["stated"]),
        actual=ActualSide(**data["actual"]),
        suggestion=data["suggestion"],
        title=data.get("title", ""),
        description=data.get("description", ""),
        hypothesis=data.get("hypothesis"),
        potential_savings=data.get("potential_savings"),
        rule=data.get("rule", ""),
        resolved=data.get("resolved", False),
        resolution=(
            Resolution(
                resolved_at=datetime.fromisoformat(resolution["resolved_at"]),
                outcome=ResolutionOutcome(resolution["outcome"]),
                notes=resolution["notes"],
            )
            if resolution
            else None
        ),
    )
