# src/communify/models/user.py
"""SQLAlchemy model for user profiles keyed by email."""

from __future__ import annotations

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from communify.db.session import Base


class User(Base):
    """Profile details kept alongside the platform identity."""

    __tablename__ = "user_profile"

    email: Mapped[str] = mapped_column(String(320), primary_key=True)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    allergies: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def onboarded(self) -> bool:
        """A profile counts as onboarded once a phone number was supplied."""
        return bool(self.phone_number)
