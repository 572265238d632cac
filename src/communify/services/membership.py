"""Invitation-code membership join service.

A join looks the code up in the community directory, then adds the requester
to that community's member list unless they are already in it. The outcome is
one of three values:

- ``Joined``: the requester was added (exactly one directory write).
- ``AlreadyMember``: nothing to do, no write.
- ``InvalidCode``: no community carries the code, no write.

Member-list writes are conditional on the record version. When a concurrent
writer gets there first, the record is re-read and the addition re-applied,
up to ``max_conflict_retries`` times. Transport failures are never retried
here; they surface as ``TransientIOError`` for the caller to handle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

from communify.core.settings import settings
from communify.services.directory import CommunityRecord, Directory
from communify.services.errors import (
    CommunityNotFoundError,
    JoinConflictError,
    UnauthenticatedError,
    VersionConflictError,
)
from communify.services.identity import IdentityProvider, UserIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinOutcome:
    """Base for the three join results."""

    status: ClassVar[str]
    message: ClassVar[str]

    @property
    def community_id(self) -> str | None:
        return None


@dataclass(frozen=True)
class Joined(JoinOutcome):
    """The requester was added to the community."""

    status: ClassVar[str] = "joined"
    message: ClassVar[str] = "Successfully joined the community!"

    id: str

    @property
    def community_id(self) -> str | None:
        return self.id


@dataclass(frozen=True)
class AlreadyMember(JoinOutcome):
    """The requester was already in the member list."""

    status: ClassVar[str] = "already_member"
    message: ClassVar[str] = "You are already a member of this community"

    id: str

    @property
    def community_id(self) -> str | None:
        return self.id


@dataclass(frozen=True)
class InvalidCode(JoinOutcome):
    """No community matches the supplied code."""

    status: ClassVar[str] = "invalid_code"
    message: ClassVar[str] = "Invalid invitation code"


class MembershipJoinService:
    """Apply invitation-code joins against a community directory."""

    def __init__(self, directory: Directory, *, max_conflict_retries: int | None = None) -> None:
        self._directory = directory
        self._max_conflict_retries = (
            settings.join_conflict_retries
            if max_conflict_retries is None
            else max_conflict_retries
        )

    async def join(self, code: str, requester: UserIdentity | None) -> JoinOutcome:
        """Join ``requester`` to the community whose invitation code is ``code``.

        Args:
            code: Invitation code, already trimmed by the caller. Matching is
                exact and case-sensitive.
            requester: Identity of the user joining.

        Returns:
            ``Joined``, ``AlreadyMember`` or ``InvalidCode``.

        Raises:
            UnauthenticatedError: If ``requester`` is None.
            ValueError: If ``code`` is blank.
            TransientIOError: If the directory read or write fails, including
                ``JoinConflictError`` once the conflict budget is spent.
        """
        if requester is None:
            raise UnauthenticatedError("A signed-in user is required to join a community")
        if not code or not code.strip():
            raise ValueError("Invitation code must not be blank")

        matches = await self._directory.find_by_invitation_code(code)
        record = next(iter(matches), None)
        if record is None:
            logger.info("Join rejected: no community for invitation code")
            return InvalidCode()

        return await self._add_member(record, requester.email)

    async def join_current_user(
        self,
        code: str,
        identity_provider: IdentityProvider,
    ) -> JoinOutcome:
        """Resolve the caller through ``identity_provider`` and join them."""
        return await self.join(code, identity_provider.current_user())

    async def _add_member(self, record: CommunityRecord, member: str) -> JoinOutcome:
        attempts = 0
        current: CommunityRecord | None = record
        while current is not None:
            if current.has_member(member):
                return AlreadyMember(current.id)

            try:
                await self._directory.update_members(
                    current.id,
                    current.with_member(member),
                    expected_version=current.version,
                )
            except VersionConflictError:
                attempts += 1
                if attempts > self._max_conflict_retries:
                    logger.warning(
                        "Join to community %s lost %d conflicting writes", current.id, attempts
                    )
                    raise JoinConflictError(current.id, attempts) from None
                logger.debug("Version conflict on community %s, re-reading", current.id)
                current = await self._directory.get(current.id)
                continue
            except CommunityNotFoundError:
                current = None
                break

            logger.info("User joined community %s", current.id)
            return Joined(current.id)

        return InvalidCode()
