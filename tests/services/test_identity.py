"""Tests for bearer-token identity resolution."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from communify.core.security import create_access_token
from communify.core.settings import settings
from communify.services.errors import UnauthenticatedError
from communify.services.identity import TokenIdentityProvider, UserIdentity


def test_token_resolves_email_and_name() -> None:
    token = create_access_token("alice@x.com", full_name="Alice Adams")

    identity = TokenIdentityProvider(token).current_user()

    assert identity == UserIdentity(email="alice@x.com", full_name="Alice Adams")


def test_missing_token_is_unauthenticated() -> None:
    with pytest.raises(UnauthenticatedError):
        TokenIdentityProvider(None).current_user()


def test_garbage_token_is_unauthenticated() -> None:
    with pytest.raises(UnauthenticatedError):
        TokenIdentityProvider("not-a-jwt").current_user()


def test_expired_token_is_unauthenticated() -> None:
    token = create_access_token("alice@x.com", expires_minutes=-5)

    with pytest.raises(UnauthenticatedError):
        TokenIdentityProvider(token).current_user()


def test_wrong_secret_is_unauthenticated() -> None:
    token = jwt.encode(
        {"sub": "alice@x.com", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "some-other-secret",
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(UnauthenticatedError):
        TokenIdentityProvider(token).current_user()


def test_token_without_subject_is_unauthenticated() -> None:
    token = jwt.encode(
        {"exp": datetime.now(UTC) + timedelta(minutes=5)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(UnauthenticatedError):
        TokenIdentityProvider(token).current_user()
