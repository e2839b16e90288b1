"""POST /v1/analyze - behavioral contradiction analysis endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from money_mirror.api.v1.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    BreakdownSchema,
    FindingSchema,
    RuleFailureSchema,
)
from money_mirror.api.dependencies import get_engine, get_profile_store, get_request_id, get_snapshot_client
from money_mirror.domain.analysis import analyze
from money_mirror.domain.engine import ContradictionEngine
from money_mirror.domain.exceptions import DataSourceError
from money_mirror.domain.tone import compose_nudge
from money_mirror.infrastructure.clients.snapshots import SnapshotClient
from money_mirror.infrastructure.database.repositories import ProfileStore
from money_mirror.infrastructure.observability.logging import log_analysis
from money_mirror.infrastructure.observability.metrics import record_analysis, snapshot_fetch_failures_counter

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def run_analysis(
    request_body: AnalyzeRequest,
    request_id: str = Depends(get_request_id),
    store: ProfileStore = Depends(get_profile_store),
    snapshot_client: SnapshotClient = Depends(get_snapshot_client),
    engine: ContradictionEngine = Depends(get_engine),
):
    """
    Detect contradictions between a user's stated preferences and behavior.

    Flow:
    1. Load profile and goals from the store
    2. Fetch the current snapshot from the account source (skipped when the
       profile has no stated preferences yet)
    3. Run the rule engine and tone-adapt suggestions
    4. Store the findings on the profile for later resolution
    5. Return findings sorted by severity plus the severity breakdown

    Missing profile, preferences or snapshot yield an empty result, not an error.
    """
    start_time = time.time()
    user_id = request_body.user_id

    try:
        profile = store.get(user_id)
        goals = store.list_goals(user_id) if profile else []

        snapshot = None
        if profile is not None and profile.stated_preferences is not None:
            snapshot = await snapshot_client.get_snapshot(user_id)

        result = analyze(profile, goals, snapshot, request_body.time_range, engine=engine)

        # Keep findings for follow-up and resolution
        if profile is not None:
            for finding in result.findings:
                store.save_finding(user_id, finding)

    except DataSourceError as e:
        snapshot_fetch_failures_counter.inc()
        logging.error(f"Snapshot source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Account data source unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    style_code = profile.money_style.style_code if profile and profile.money_style else None
    findings = [
        FindingSchema.model_validate(f).model_copy(update={"nudge": compose_nudge(f, style_code)})
        for f in result.findings
    ]

    duration_ms = (time.time() - start_time) * 1000
    record_analysis(result)
    log_analysis(request_id, user_id, len(findings), result.breakdown.high, len(result.failures), duration_ms)

    return AnalyzeResponse(
        user_id=user_id,
        findings=findings,
        breakdown=BreakdownSchema.model_validate(result.breakdown),
        total_detected=len(findings),
        time_range=result.time_range,
        analyzed_at=result.analyzed_at,
        failures=[RuleFailureSchema.model_validate(f) for f in result.failures],
    )
