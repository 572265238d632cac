"""Request and response schemas for invitation-code joins."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class JoinRequest(BaseModel):
    """Invitation code submitted by the user."""

    code: str = Field(..., description="Invitation code shared by a community creator")

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        """Trim surrounding whitespace and reject blank codes."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Invitation code must not be blank")
        return stripped


class JoinResponse(BaseModel):
    """Outcome of a join attempt."""

    status: Literal["joined", "already_member", "invalid_code"]
    community_id: str | None = Field(
        None, description="Community to redirect to; null for an invalid code"
    )
    message: str
