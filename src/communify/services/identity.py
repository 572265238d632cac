"""Identity provider contract and the bearer-token implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from jose import JWTError

from communify.core.security import decode_access_token
from communify.services.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserIdentity:
    """Resolved identity of the calling user.

    ``email`` is the identifier stored in community member lists.
    """

    email: str
    full_name: str | None = None


class IdentityProvider(Protocol):
    """Source of the current user's identity."""

    def current_user(self) -> UserIdentity: ...


class TokenIdentityProvider:
    """Resolve the current user from a signed bearer token."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    def current_user(self) -> UserIdentity:
        """Decode the token and return the identity it names.

        Raises:
            UnauthenticatedError: If the token is missing, invalid, expired,
                or carries no subject.
        """
        if not self._token:
            raise UnauthenticatedError("No session token supplied")
        try:
            payload = decode_access_token(self._token)
        except JWTError as err:
            logger.info("Rejected bearer token: %s", err)
            raise UnauthenticatedError("Could not validate credentials") from err

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject.strip():
            raise UnauthenticatedError("Could not validate credentials")
        name = payload.get("name")
        return UserIdentity(
            email=subject.strip(),
            full_name=name if isinstance(name, str) else None,
        )
