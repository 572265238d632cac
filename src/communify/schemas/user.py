"""User profile Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the caller's profile."""

    full_name: str | None = Field(None, max_length=200)
    phone_number: str | None = Field(None, max_length=64)
    allergies: list[str] | None = None
    notes: str | None = None
    avatar_url: str | None = None


class ProfileResponse(BaseModel):
    """Response schema for user profile information."""

    email: str
    full_name: str | None
    phone_number: str | None
    allergies: list[str] | None
    notes: str | None
    avatar_url: str | None
    onboarded: bool

    model_config = ConfigDict(from_attributes=True)
