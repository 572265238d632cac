"""Exceptions raised by the membership and directory services."""

from __future__ import annotations


class MembershipError(RuntimeError):
    """Base exception for membership-related failures."""


class UnauthenticatedError(MembershipError):
    """Raised when no user identity is available for the caller.

    Callers are expected to send the user to sign-in rather than retry.
    """


class TransientIOError(MembershipError):
    """Raised when the directory cannot be reached or fails to answer.

    The operation performed no partial mutation; whether to retry is up to
    the caller.
    """


class VersionConflictError(MembershipError):
    """Raised when a conditional write loses against a concurrent update."""

    def __init__(self, community_id: str, expected_version: int) -> None:
        super().__init__(
            f"Community {community_id} changed since version {expected_version}"
        )
        self.community_id = community_id
        self.expected_version = expected_version


class CommunityNotFoundError(MembershipError):
    """Raised when a write targets a community the directory no longer has."""

    def __init__(self, community_id: str) -> None:
        super().__init__(f"Community {community_id} not found")
        self.community_id = community_id


class JoinConflictError(TransientIOError):
    """Raised when a join keeps losing conflicting writes past its retry budget."""

    def __init__(self, community_id: str, attempts: int) -> None:
        super().__init__(
            f"Gave up joining community {community_id} after {attempts} conflicting writes"
        )
        self.community_id = community_id
        self.attempts = attempts
