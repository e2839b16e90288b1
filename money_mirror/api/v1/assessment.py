"""Money Style assessment endpoints"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException

from money_mirror.api.v1.schemas import AssessmentRequest, AssessmentResponse, QuestionBankResponse
from money_mirror.api.dependencies import get_profile_store, get_request_id
from money_mirror.domain.assessment import QUESTION_BANK
from money_mirror.domain.exceptions import InvalidInputError
from money_mirror.domain.models import MoneyStyle
from money_mirror.domain.styles import describe_style
from money_mirror.domain.traits import DIMENSION_ORDER, score_assessment
from money_mirror.infrastructure.database.repositories import ProfileStore
from money_mirror.infrastructure.observability.logging import log_assessment
from money_mirror.infrastructure.observability.metrics import record_assessment

router = APIRouter()


@router.get("/assessment/questions", response_model=QuestionBankResponse)
def list_questions():
    """Return the ordered assessment item bank"""
    return QuestionBankResponse.from_domain(QUESTION_BANK)


@router.post("/assessment", response_model=AssessmentResponse)
def submit_assessment(
    request_body: AssessmentRequest,
    request_id: str = Depends(get_request_id),
    store: ProfileStore = Depends(get_profile_store),
):
    """
    Score a completed assessment.

    Flow:
    1. Sum answers per dimension and derive the style code
    2. Look up description and coaching approach
    3. Store the Money Style on the profile if the user already has one
    """
    try:
        result = score_assessment([a.to_domain() for a in request_body.answers])
    except InvalidInputError as e:
        logging.warning(f"Invalid assessment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    style = describe_style(result.style_code)

    profile_updated = False
    if store.get(request_body.user_id) is not None:
        store.update(
            request_body.user_id,
            money_style=MoneyStyle(
                style_code=result.style_code,
                scores=result.scores,
                assessed_at=datetime.now(timezone.utc),
            ),
        )
        profile_updated = True

    record_assessment(result.style_code)
    log_assessment(request_id, request_body.user_id, result.style_code)

    return AssessmentResponse(
        style_code=result.style_code,
        scores={d.value: result.score_for(d) for d in DIMENSION_ORDER},
        money_style_name=style.name,
        money_style_description=style.description,
        coaching_approach=style.coaching_approach,
        profile_updated=profile_updated,
    )
