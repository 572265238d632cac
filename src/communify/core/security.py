"""JWT helpers for bearer tokens issued by the identity platform."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt

from communify.core.settings import settings


def create_access_token(
    email: str,
    *,
    full_name: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a signed access token whose subject is the user's email.

    Used by tests and the ``scripts/tokens.py`` helper; production tokens are
    minted by the hosting platform with the same shared secret.
    """
    to_encode: dict[str, Any] = {"sub": email}
    if full_name:
        to_encode["name"] = full_name
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a token; raises ``jose.JWTError`` on any failure."""
    payload: dict[str, Any] = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    return payload
