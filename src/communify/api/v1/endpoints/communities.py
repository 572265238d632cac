# src/communify/api/v1/endpoints/communities.py
"""Community-related endpoints for the Communify API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from communify.api.v1.dependencies import (
    CurrentIdentityDep,
    IdentityProviderDep,
    MembershipServiceDep,
    SessionDep,
)
from communify.models import Community
from communify.schemas.community import (
    CommunityCreate,
    CommunityDetailResponse,
    CommunityResponse,
)
from communify.schemas.membership import JoinRequest, JoinResponse
from communify.services import community_service
from communify.services.errors import MembershipError, TransientIOError, UnauthenticatedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/communities", tags=["communities"])


@router.get("/open", response_model=list[CommunityResponse])
async def list_open_communities(
    db: SessionDep,
    _identity: CurrentIdentityDep,
    limit: int | None = Query(None, ge=1, le=50, description="Maximum number to return"),
) -> list[Community]:
    """List the newest open communities."""
    return list(community_service.list_open_communities(db, limit))


@router.get("/mine", response_model=list[CommunityDetailResponse])
async def list_my_communities(
    db: SessionDep,
    identity: CurrentIdentityDep,
) -> list[Community]:
    """List closed communities the caller created or belongs to."""
    return community_service.list_my_communities(db, identity.email)


@router.post(
    "/",
    response_model=CommunityDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_community(
    community_data: CommunityCreate,
    identity: CurrentIdentityDep,
    db: SessionDep,
) -> Community:
    """Create a new community."""
    community = community_service.create_community(db, community_data, identity.email)
    logger.info("Community %s created by %s", community.id, identity.email)
    return community


@router.post("/join", response_model=JoinResponse)
async def join_with_code(
    payload: JoinRequest,
    provider: IdentityProviderDep,
    service: MembershipServiceDep,
) -> JoinResponse:
    """Join a closed community using its invitation code."""
    try:
        outcome = await service.join_current_user(payload.code, provider)
    except UnauthenticatedError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    except TransientIOError as err:
        logger.warning("Join failed on directory I/O: %s", err)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Community directory is temporarily unavailable",
        ) from err
    except MembershipError as err:
        logger.error("Join failed: %s", err)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Community directory returned an unexpected response",
        ) from err

    return JoinResponse(
        status=outcome.status,
        community_id=outcome.community_id,
        message=outcome.message,
    )


@router.get("/{community_id}", response_model=CommunityDetailResponse)
async def get_community(
    community_id: str,
    identity: CurrentIdentityDep,
    db: SessionDep,
) -> CommunityDetailResponse:
    """Get a specific community by ID.

    The invitation code and member list are only shown to the creator and members.
    """
    community = community_service.get_community(db, community_id)
    if community is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Community not found"
        )
    detail = CommunityDetailResponse.model_validate(community)
    if community.created_by == identity.email or identity.email in community.member_list:
        return detail
    return detail.model_copy(update={"invitation_code": None, "members": None})
