"""Unit tests for the profile stores"""

import pytest
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session
from money_mirror.domain.exceptions import ProfileNotFoundError
from money_mirror.domain.models import (
    ActualSide,
    Contradiction,
    Dimension,
    FinancialGoal,
    FindingType,
    LifeContext,
    MoneyStyle,
    ResolutionOutcome,
    Severity,
    StatedPreferences,
    StatedSide,
    TraitScore,
    UserProfile,
)
from money_mirror.infrastructure.database.repositories import InMemoryProfileStore, ProfileStore, SqlProfileStore

NOW = datetime(2025, 2, 1, 8, 30, tzinfo=timezone.utc)


def make_profile(user_id: str = "user_1") -> UserProfile:
    return UserProfile(
        user_id=user_id,
        email=f"{user_id}@example.com",
        name="Jordan",
        created_at=NOW,
        life_context=LifeContext(age=34, income=72000, dependents=1, employment_status="employed"),
        stated_preferences=StatedPreferences(
            risk_tolerance="conservative",
            savings_goal=12000,
            priority_goals=["Pay off debt"],
        ),
    )


def make_goal(goal_id: str = "emergency", target_date: date = date(2025, 12, 31)) -> FinancialGoal:
    return FinancialGoal(
        id=goal_id,
        title="Emergency Fund",
        target_amount=10000,
        current_amount=2500,
        target_date=target_date,
        category="savings",
        created_at=date(2024, 6, 1),
    )


def make_finding(finding_id: str = "f1", severity: Severity = Severity.HIGH, detected_at: datetime = NOW) -> Contradiction:
    return Contradiction(
        id=finding_id,
        detected_at=detected_at,
        type=FindingType.STATED_VS_ACTUAL,
        severity=severity,
        stated=StatedSide(description="Conservative risk tolerance", source="assessment", value="conservative"),
        actual=ActualSide(description="Heavy discretionary spending", evidence=["Dining: $640"], value=48.5),
        suggestion="Set a weekly dining cap",
        title="Risk mismatch",
        potential_savings=320.0,
        rule="risk_vs_spending",
    )


@pytest.fixture(params=["memory", "sql"])
def store(request, db: Session) -> ProfileStore:
    if request.param == "memory":
        return InMemoryProfileStore()
    return SqlProfileStore(db)


def test_get_missing_profile(store: ProfileStore):
    assert store.get("nobody") is None
    assert store.list_goals("nobody") == []


def test_save_and_get_profile(store: ProfileStore):
    store.save(make_profile())

    profile = store.get("user_1")

    assert profile.email == "user_1@example.com"
    assert profile.life_context.dependents == 1
    assert profile.stated_preferences.risk_tolerance == "conservative"
    assert profile.stated_preferences.priority_goals == ["Pay off debt"]
    assert profile.money_style is None


def test_update_money_style(store: ProfileStore):
    store.save(make_profile())
    style = MoneyStyle(
        style_code="ISTJ",
        scores=[TraitScore(dimension=d, value=-4) for d in Dimension],
        assessed_at=NOW,
    )

    store.update("user_1", money_style=style)

    stored = store.get("user_1").money_style
    assert stored.style_code == "ISTJ"
    assert [s.dimension for s in stored.scores] == list(Dimension)
    assert all(s.value == -4 for s in stored.scores)


def test_update_unknown_profile(store: ProfileStore):
    with pytest.raises(ProfileNotFoundError):
        store.update("nobody", name="Someone")


def test_update_unknown_field(store: ProfileStore):
    store.save(make_profile())

    with pytest.raises(ValueError, match="Unknown profile fields"):
        store.update("user_1", user_id="other")


def test_goals_round_trip(store: ProfileStore):
    store.save(make_profile())
    store.save_goal("user_1", make_goal())

    goals = store.list_goals("user_1")

    assert len(goals) == 1
    assert goals[0].id == "emergency"
    assert goals[0].target_date == date(2025, 12, 31)
    assert goals[0].created_at == date(2024, 6, 1)
    assert goals[0].progress_percent == pytest.approx(25.0)


def test_save_goal_replaces_existing(store: ProfileStore):
    store.save(make_profile())
    store.save_goal("user_1", make_goal())
    store.save_goal("user_1", make_goal(target_date=date(2026, 6, 30)))

    goals = store.list_goals("user_1")

    assert len(goals) == 1
    assert goals[0].target_date == date(2026, 6, 30)


def test_goals_are_per_user(store: ProfileStore):
    store.save(make_profile("user_1"))
    store.save(make_profile("user_2"))
    store.save_goal("user_1", make_goal())

    assert store.list_goals("user_2") == []


def test_save_goal_requires_profile(store: ProfileStore):
    with pytest.raises(ProfileNotFoundError):
        store.save_goal("nobody", make_goal())


def test_update_goal_progress(store: ProfileStore):
    store.save(make_profile())
    store.save_goal("user_1", make_goal())

    updated = store.update_goal_progress("user_1", "emergency", 6000)

    assert updated.current_amount == 6000
    assert store.list_goals("user_1")[0].current_amount == 6000


def test_update_goal_progress_unknown_goal(store: ProfileStore):
    store.save(make_profile())

    with pytest.raises(KeyError):
        store.update_goal_progress("user_1", "missing", 100)


def test_findings_round_trip(store: ProfileStore):
    store.save(make_profile())
    store.save_finding("user_1", make_finding("f1"))
    store.save_finding("user_1", make_finding("f2", severity=Severity.LOW, detected_at=datetime(2025, 2, 2, tzinfo=timezone.utc)))

    findings = store.list_findings("user_1")

    assert [f.id for f in findings] == ["f1", "f2"]
    assert findings[0].severity == Severity.HIGH
    assert findings[0].stated.value == "conservative"
    assert findings[0].actual.evidence == ["Dining: $640"]
    assert findings[0].potential_savings == 320.0
    assert findings[0].resolved is False
    assert store.list_findings("someone_else") == []


def test_save_finding_replaces_existing(store: ProfileStore):
    store.save(make_profile())
    store.save_finding("user_1", make_finding("f1"))
    store.save_finding("user_1", make_finding("f1", severity=Severity.MEDIUM))

    findings = store.list_findings("user_1")

    assert len(findings) == 1
    assert findings[0].severity == Severity.MEDIUM


def test_save_finding_requires_profile(store: ProfileStore):
    with pytest.raises(ProfileNotFoundError):
        store.save_finding("nobody", make_finding())


def test_resolve_finding_is_persisted(store: ProfileStore):
    store.save(make_profile())
    store.save_finding("user_1", make_finding("f1"))
    store.save_finding("user_1", make_finding("f2"))

    resolved = store.resolve_finding("user_1", "f1", ResolutionOutcome.BEHAVIOR_CHANGED, notes="Cut dining out")

    assert resolved.resolved is True
    assert resolved.resolution.outcome == ResolutionOutcome.BEHAVIOR_CHANGED

    stored = next(f for f in store.list_findings("user_1") if f.id == "f1")
    assert stored.resolved is True
    assert stored.resolution.notes == "Cut dining out"
    assert [f.id for f in store.list_findings("user_1", only_unresolved=True)] == ["f2"]


def test_resolve_unknown_finding(store: ProfileStore):
    store.save(make_profile())

    with pytest.raises(KeyError):
        store.resolve_finding("user_1", "missing", "context_explained")
