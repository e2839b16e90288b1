"""Stored finding endpoints - review and resolve past contradictions"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException

from money_mirror.api.v1.schemas import FindingSchema, ResolveFindingRequest
from money_mirror.api.dependencies import get_profile_store, get_request_id
from money_mirror.domain.tone import compose_nudge
from money_mirror.infrastructure.database.repositories import ProfileStore
from money_mirror.infrastructure.observability.logging import log_resolution
from money_mirror.infrastructure.observability.metrics import record_resolution

router = APIRouter()


@router.get("/profiles/{user_id}/findings", response_model=List[FindingSchema])
def list_findings(user_id: str, unresolved: bool = False, store: ProfileStore = Depends(get_profile_store)):
    """Findings from earlier analyses, optionally only the open ones"""
    profile = store.get(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    style_code = profile.money_style.style_code if profile.money_style else None
    return [
        FindingSchema.model_validate(f).model_copy(update={"nudge": compose_nudge(f, style_code)})
        for f in store.list_findings(user_id, only_unresolved=unresolved)
    ]


@router.post("/profiles/{user_id}/findings/{finding_id}/resolve", response_model=FindingSchema)
def resolve_finding(
    user_id: str,
    finding_id: str,
    request_body: ResolveFindingRequest,
    request_id: str = Depends(get_request_id),
    store: ProfileStore = Depends(get_profile_store),
):
    """
    Close a finding with how it was settled: the user adjusted the stated
    preference, changed the behavior, or explained the context.
    """
    try:
        finding = store.resolve_finding(user_id, finding_id, request_body.outcome, notes=request_body.notes)
    except KeyError:
        raise HTTPException(status_code=404, detail="Finding not found")

    record_resolution(request_body.outcome.value)
    log_resolution(request_id, user_id, finding_id, request_body.outcome.value)

    return FindingSchema.model_validate(finding)
