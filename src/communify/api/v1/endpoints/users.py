"""Profile endpoints for the signed-in user."""

from __future__ import annotations

from fastapi import APIRouter

from communify.api.v1.dependencies import CurrentIdentityDep, SessionDep
from communify.models import User
from communify.schemas.user import ProfileResponse, ProfileUpdateRequest
from communify.services import profile_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(identity: CurrentIdentityDep, db: SessionDep) -> User:
    """Return the caller's profile, creating it on first visit."""
    return profile_service.get_or_create_profile(db, identity)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    identity: CurrentIdentityDep,
    db: SessionDep,
) -> User:
    """Update phone number, allergies, notes, avatar or name."""
    user = profile_service.get_or_create_profile(db, identity)
    return profile_service.update_profile(db, user, payload)


@router.post("/me/reset-onboarding", response_model=ProfileResponse)
async def reset_my_onboarding(identity: CurrentIdentityDep, db: SessionDep) -> User:
    """Clear onboarding answers so the client shows onboarding again."""
    user = profile_service.get_or_create_profile(db, identity)
    return profile_service.reset_onboarding(db, user)
