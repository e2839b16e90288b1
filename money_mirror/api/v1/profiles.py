"""Profile and goal endpoints"""

from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from money_mirror.api.v1.schemas import GoalProgressRequest, GoalSchema, ProfileRequest, ProfileResponse
from money_mirror.api.dependencies import get_profile_store
from money_mirror.domain.models import UserProfile
from money_mirror.infrastructure.database.repositories import ProfileStore

router = APIRouter()


@router.put("/profiles/{user_id}", response_model=ProfileResponse)
def upsert_profile(user_id: str, request_body: ProfileRequest, store: ProfileStore = Depends(get_profile_store)):
    """Create a profile or replace its editable fields; Money Style is kept"""
    life_context = request_body.life_context.to_domain() if request_body.life_context else None
    preferences = request_body.stated_preferences.to_domain() if request_body.stated_preferences else None

    if store.get(user_id) is None:
        profile = UserProfile(
            user_id=user_id,
            email=request_body.email,
            name=request_body.name,
            created_at=datetime.now(timezone.utc),
            life_context=life_context,
            stated_preferences=preferences,
        )
        store.save(profile)
    else:
        profile = store.update(
            user_id,
            email=request_body.email,
            name=request_body.name,
            life_context=life_context,
            stated_preferences=preferences,
        )

    return ProfileResponse.from_domain(profile)


@router.get("/profiles/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    profile = store.get(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse.from_domain(profile)


@router.get("/profiles/{user_id}/goals", response_model=List[GoalSchema])
def list_goals(user_id: str, store: ProfileStore = Depends(get_profile_store)):
    if store.get(user_id) is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return [GoalSchema.model_validate(g) for g in store.list_goals(user_id)]


@router.post("/profiles/{user_id}/goals", response_model=GoalSchema, status_code=201)
def save_goal(user_id: str, request_body: GoalSchema, store: ProfileStore = Depends(get_profile_store)):
    if store.get(user_id) is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    store.save_goal(user_id, request_body.to_domain())
    return request_body


@router.patch("/profiles/{user_id}/goals/{goal_id}", response_model=GoalSchema)
def update_goal_progress(
    user_id: str,
    goal_id: str,
    request_body: GoalProgressRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    """Record progress toward a goal"""
    try:
        goal = store.update_goal_progress(user_id, goal_id, request_body.current_amount)
    except KeyError:
        raise HTTPException(status_code=404, detail="Goal not found")
    return GoalSchema.model_validate(goal)
