# src/communify/schemas/community.py
"""Community-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    name: str = Field(..., min_length=1, max_length=200)
    type: Literal["open", "closed"] = "open"
    description: str | None = None
    location: str | None = None
    cover_image: str | None = None
    event_date: datetime | None = None


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    id: str
    name: str
    type: str
    description: str | None
    location: str | None
    cover_image: str | None
    event_date: datetime | None
    created_by: str | None
    created_date: datetime
    attendee_count: int

    model_config = ConfigDict(from_attributes=True)


class CommunityDetailResponse(CommunityResponse):
    """Community information visible to its creator and members."""

    invitation_code: str | None
    members: list[str] | None
