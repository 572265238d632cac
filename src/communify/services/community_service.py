"""CRUD-style helpers for managing communities."""
from __future__ import annotations

import secrets
import string
from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from communify.core.settings import settings
from communify.models import COMMUNITY_TYPE_CLOSED, COMMUNITY_TYPE_OPEN, Community
from communify.schemas.community import CommunityCreate

__all__ = [
    "generate_invitation_code",
    "get_community",
    "list_open_communities",
    "list_my_communities",
    "create_community",
]

INVITATION_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invitation_code(length: int | None = None) -> str:
    """Return a random uppercase alphanumeric invitation code."""
    size = length or settings.invitation_code_length
    return "".join(secrets.choice(INVITATION_CODE_ALPHABET) for _ in range(size))


def get_community(db: Session, community_id: str) -> Community | None:
    """Return a single community by primary key."""
    return db.get(Community, community_id)


def list_open_communities(db: Session, limit: int | None = None) -> Sequence[Community]:
    """Return the newest open communities."""
    stmt = (
        select(Community)
        .where(Community.type == COMMUNITY_TYPE_OPEN)
        .order_by(desc(Community.created_date))
        .limit(limit or settings.open_communities_limit)
    )
    return db.scalars(stmt).all()


def list_my_communities(db: Session, email: str) -> list[Community]:
    """Return closed communities the user created or is a member of, newest first."""
    stmt = (
        select(Community)
        .where(Community.type == COMMUNITY_TYPE_CLOSED)
        .order_by(desc(Community.created_date))
    )
    # Member lists are JSON, so membership is checked in Python.
    return [
        community
        for community in db.scalars(stmt)
        if community.created_by == email or email in community.member_list
    ]


def create_community(db: Session, data: CommunityCreate, creator_email: str) -> Community:
    """Persist a new community; closed communities get a fresh invitation code."""
    invitation_code = None
    if data.type == COMMUNITY_TYPE_CLOSED:
        invitation_code = _unused_invitation_code(db)

    community = Community(
        name=data.name,
        description=data.description,
        type=data.type,
        invitation_code=invitation_code,
        members=[creator_email] if data.type == COMMUNITY_TYPE_CLOSED else [],
        confirmed_attendees=[],
        location=data.location,
        cover_image=data.cover_image,
        event_date=data.event_date,
        created_by=creator_email,
        version=1,
    )
    db.add(community)
    db.commit()
    db.refresh(community)
    return community


def _unused_invitation_code(db: Session, attempts: int = 5) -> str:
    for _ in range(attempts):
        code = generate_invitation_code()
        taken = db.scalar(select(Community.id).where(Community.invitation_code == code))
        if taken is None:
            return code
    raise RuntimeError("Could not allocate an unused invitation code")
