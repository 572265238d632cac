# src/communify/services/__init__.py
"""Business logic services for the Communify application."""

from .directory import CommunityRecord, Directory, RemoteDirectory, SqlDirectory
from .identity import IdentityProvider, TokenIdentityProvider, UserIdentity
from .membership import (
    AlreadyMember,
    InvalidCode,
    Joined,
    JoinOutcome,
    MembershipJoinService,
)

__all__ = [
    "CommunityRecord",
    "Directory",
    "SqlDirectory",
    "RemoteDirectory",
    "IdentityProvider",
    "TokenIdentityProvider",
    "UserIdentity",
    "MembershipJoinService",
    "JoinOutcome",
    "Joined",
    "AlreadyMember",
    "InvalidCode",
]
