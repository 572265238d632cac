# src/communify/models/__init__.py
"""SQLAlchemy models for the Communify application."""

from .community import COMMUNITY_TYPE_CLOSED, COMMUNITY_TYPE_OPEN, Community
from .user import User

__all__ = [
    "Community", "COMMUNITY_TYPE_OPEN", "COMMUNITY_TYPE_CLOSED",
    "User",
]
