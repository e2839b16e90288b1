"""Analysis orchestrator - turns a profile, its goals and a snapshot into ranked, tone-adapted findings"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from money_mirror.domain.engine import ContradictionEngine, severity_breakdown
from money_mirror.domain.exceptions import InsufficientDataError
from money_mirror.domain.models import (
    AnalysisResult,
    Contradiction,
    FinancialGoal,
    FinancialSnapshot,
    Resolution,
    ResolutionOutcome,
    SeverityBreakdown,
    TimeRange,
    UserProfile,
)
from money_mirror.domain.rules import RuleContext
from money_mirror.domain.spending import analyze_spending
from money_mirror.domain.tone import adapt_suggestion
from money_mirror.utils.date_utils import as_date


def build_context(
    profile: Optional[UserProfile],
    goals: Sequence[FinancialGoal],
    snapshot: Optional[FinancialSnapshot],
    time_range: TimeRange,
    detected_at: datetime,
) -> RuleContext:
    """
    Assemble the read-only rule inputs.

    Raises:
        InsufficientDataError: no profile, no stated preferences, or no snapshot
    """
    if profile is None:
        raise InsufficientDataError("No profile for user")
    if profile.stated_preferences is None:
        raise InsufficientDataError("Profile has no stated preferences yet")
    if snapshot is None:
        raise InsufficientDataError("No financial snapshot available")

    return RuleContext(
        profile=profile,
        goals=list(goals),
        snapshot=snapshot,
        spending=analyze_spending(snapshot.transactions),
        time_range=time_range,
        as_of=as_date(snapshot.timestamp),
        detected_at=detected_at,
    )


def analyze(
    profile: Optional[UserProfile],
    goals: Sequence[FinancialGoal],
    snapshot: Optional[FinancialSnapshot],
    time_range: TimeRange | str = TimeRange.MONTH,
    engine: Optional[ContradictionEngine] = None,
    detected_at: Optional[datetime] = None,
) -> AnalysisResult:
    """
    Main entry point: run every rule and return sorted, tone-adapted findings.

    Missing data is not an error: without a profile, stated preferences or a
    snapshot the result is empty with a zero breakdown.
    """
    time_range = TimeRange(time_range)
    detected_at = detected_at or datetime.now(timezone.utc)

    try:
        ctx = build_context(profile, goals, snapshot, time_range, detected_at)
    except InsufficientDataError as e:
        logging.info(
            f"Skipping analysis: {e}",
            extra={"step": "analysis_skipped", "user_id": profile.user_id if profile else None},
        )
        return AnalysisResult(
            findings=[],
            breakdown=SeverityBreakdown(),
            time_range=time_range,
            analyzed_at=detected_at,
        )

    output = (engine or ContradictionEngine()).run(ctx)
    findings: List[Contradiction] = [adapt_suggestion(f, ctx.style_code) for f in output.findings]

    return AnalysisResult(
        findings=findings,
        breakdown=severity_breakdown(findings),
        time_range=time_range,
        analyzed_at=detected_at,
        failures=output.failures,
    )


def resolve_finding(
    finding: Contradiction,
    outcome: ResolutionOutcome | str,
    notes: str = "",
    resolved_at: Optional[datetime] = None,
) -> Contradiction:
    """Return a copy of the finding marked resolved with a resolution record"""
    resolution = Resolution(
        resolved_at=resolved_at or datetime.now(timezone.utc),
        outcome=ResolutionOutcome(outcome),
        notes=notes,
    )
    return replace(finding, resolved=True, resolution=resolution)
