"""SQLAlchemy models for communities and their member lists."""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from communify.db.session import Base
from communify.db.time import utcnow

COMMUNITY_TYPE_OPEN = "open"
COMMUNITY_TYPE_CLOSED = "closed"


def _new_id() -> str:
    return uuid.uuid4().hex


class Community(Base):
    """Community or event that users can browse and join."""

    __tablename__ = "community"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default=COMMUNITY_TYPE_OPEN)
    # Only closed communities carry a code; uniqueness is assumed, not enforced.
    invitation_code: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    # Stored list-shaped, treated as a set of member emails.
    members: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    confirmed_attendees: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True, default=list
    )
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    # Bumped on every member-list write; conditional updates compare against it.
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    @property
    def member_list(self) -> list[str]:
        """Return members with a missing list treated as empty."""
        return list(self.members or [])

    @property
    def attendee_count(self) -> int:
        return len(self.confirmed_attendees or [])
