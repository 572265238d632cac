# tests/conftest.py
from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Generator, Iterable, Iterator, Sequence
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

os.environ.setdefault("DIRECTORY_BACKEND", "sql")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from communify.core.security import create_access_token
from communify.db.session import Base
from communify.db.session import get_db as app_get_session
from communify.main import app as fastapi_app
from communify.models import Community
from communify.services.directory import CommunityRecord
from communify.services.errors import CommunityNotFoundError, VersionConflictError
from communify.services.identity import UserIdentity

TEST_DB_URL = "sqlite://"

_CREATED_OFFSET = count(1)
_BASE_CREATED = datetime(2026, 1, 1, tzinfo=UTC)


class InMemoryDirectory:
    """Directory fake that records every write.

    ``pause_between_read_and_write`` yields to the event loop after each
    lookup so concurrent joins interleave their read-modify-write cycles.
    """

    def __init__(self, records: Iterable[CommunityRecord] = ()) -> None:
        self.records: dict[str, CommunityRecord] = {r.id: r for r in records}
        self.writes: list[tuple[str, tuple[str, ...], int]] = []
        self.lookups: list[str] = []
        self.pause_between_read_and_write = False
        self.forced_conflicts = 0

    def add(self, community_id: str, code: str | None, members: Sequence[str] = ()) -> None:
        self.records[community_id] = CommunityRecord(
            id=community_id,
            invitation_code=code,
            members=tuple(members),
            type="closed",
            version=1,
        )

    def members_of(self, community_id: str) -> tuple[str, ...]:
        return self.records[community_id].members

    async def find_by_invitation_code(self, code: str) -> Iterator[CommunityRecord]:
        self.lookups.append(code)
        matches = [r for r in self.records.values() if r.invitation_code == code]
        if self.pause_between_read_and_write:
            await asyncio.sleep(0)
        return iter(matches)

    async def get(self, community_id: str) -> CommunityRecord | None:
        if self.pause_between_read_and_write:
            await asyncio.sleep(0)
        return self.records.get(community_id)

    async def update_members(
        self,
        community_id: str,
        members: Sequence[str],
        *,
        expected_version: int,
    ) -> None:
        current = self.records.get(community_id)
        if current is None:
            raise CommunityNotFoundError(community_id)
        if self.forced_conflicts > 0:
            self.forced_conflicts -= 1
            raise VersionConflictError(community_id, expected_version)
        if current.version != expected_version:
            raise VersionConflictError(community_id, expected_version)
        self.writes.append((community_id, tuple(members), expected_version))
        self.records[community_id] = CommunityRecord(
            id=current.id,
            invitation_code=current.invitation_code,
            members=tuple(members),
            type=current.type,
            version=current.version + 1,
        )


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def alice() -> UserIdentity:
    return UserIdentity(email="alice@x.com", full_name="Alice Adams")


@pytest.fixture()
def bob() -> UserIdentity:
    return UserIdentity(email="bob@x.com", full_name="Bob Brown")


def _headers_for(identity: UserIdentity) -> dict[str, str]:
    token = create_access_token(identity.email, full_name=identity.full_name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_headers(alice: UserIdentity) -> dict[str, str]:
    """Return authorization headers for alice."""
    return _headers_for(alice)


@pytest.fixture()
def bob_headers(bob: UserIdentity) -> dict[str, str]:
    """Return authorization headers for bob."""
    return _headers_for(bob)


@pytest.fixture()
def make_community(db_session: Session) -> Callable[..., Community]:
    """Return a factory persisting communities with increasing creation times."""

    def _make(**overrides: Any) -> Community:
        fields: dict[str, Any] = {
            "name": "Test Community",
            "type": "closed",
            "invitation_code": None,
            "members": [],
            "confirmed_attendees": [],
            "created_by": "owner@x.com",
            "created_date": _BASE_CREATED + timedelta(minutes=next(_CREATED_OFFSET)),
            "version": 1,
        }
        fields.update(overrides)
        community = Community(**fields)
        db_session.add(community)
        db_session.commit()
        db_session.refresh(community)
        return community

    return _make


@pytest.fixture()
def closed_community(make_community: Callable[..., Community]) -> Community:
    """The c1 / ABC123 community with alice as its only member."""
    return make_community(
        id="c1",
        name="Book Club",
        invitation_code="ABC123",
        members=["alice@x.com"],
    )


@pytest.fixture()
def directory_factory() -> type[InMemoryDirectory]:
    """Expose the in-memory directory class to tests that build their own."""
    return InMemoryDirectory


@pytest.fixture()
def directory() -> InMemoryDirectory:
    """In-memory directory seeded with c1 / ABC123 / [alice@x.com]."""
    fake = InMemoryDirectory()
    fake.add("c1", "ABC123", ["alice@x.com"])
    return fake
