# src/communify/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .community import CommunityCreate, CommunityDetailResponse, CommunityResponse
from .membership import JoinRequest, JoinResponse
from .user import ProfileResponse, ProfileUpdateRequest

__all__ = [
    "CommunityCreate", "CommunityResponse", "CommunityDetailResponse",
    "JoinRequest", "JoinResponse",
    "ProfileResponse", "ProfileUpdateRequest",
]
