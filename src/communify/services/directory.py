"""Community directory contract and its storage adapters.

The directory owns community records. The membership service only needs
three operations from it:

- look communities up by invitation code,
- re-read a single community by id,
- overwrite a community's member list, conditionally on its version.

Two adapters are provided:

- ``SqlDirectory`` reads and writes the local database through SQLAlchemy.
- ``RemoteDirectory`` talks to the hosted entities API over httpx.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from sqlalchemy import select, update
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from communify.core.settings import settings
from communify.models import COMMUNITY_TYPE_OPEN, Community
from communify.services.errors import (
    CommunityNotFoundError,
    MembershipError,
    TransientIOError,
    VersionConflictError,
)

logger = logging.getLogger(__name__)

# HTTP status codes
HTTP_OK = 200
HTTP_NO_CONTENT = 204
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_PRECONDITION_FAILED = 412
HTTP_INTERNAL_SERVER_ERROR = 500

_DB_UNAVAILABLE = (OperationalError, InterfaceError, PoolTimeoutError)


@dataclass(frozen=True)
class CommunityRecord:
    """Snapshot of the directory fields the membership service works with."""

    id: str
    invitation_code: str | None
    members: tuple[str, ...]
    type: str
    version: int

    def __post_init__(self) -> None:
        # Stored lists may carry repeats; members behave as a set.
        object.__setattr__(self, "members", _dedupe(self.members))

    def has_member(self, member: str) -> bool:
        return member in self.members

    def with_member(self, member: str) -> tuple[str, ...]:
        """Return the member list after adding ``member``, without repeats."""
        return _dedupe((*self.members, member))


class Directory(Protocol):
    """Minimal directory contract required by the membership service."""

    async def find_by_invitation_code(self, code: str) -> Iterable[CommunityRecord]: ...

    async def get(self, community_id: str) -> CommunityRecord | None: ...

    async def update_members(
        self,
        community_id: str,
        members: Sequence[str],
        *,
        expected_version: int,
    ) -> None: ...


def _dedupe(members: Iterable[str] | None) -> tuple[str, ...]:
    """Collapse a stored list into set semantics, keeping first-seen order."""
    return tuple(dict.fromkeys(members or ()))


def record_from_model(community: Community) -> CommunityRecord:
    """Build a record from an ORM row."""
    return CommunityRecord(
        id=community.id,
        invitation_code=community.invitation_code,
        members=tuple(community.members or ()),
        type=community.type,
        version=community.version,
    )


def record_from_payload(payload: Mapping[str, Any]) -> CommunityRecord:
    """Build a record from an entities API JSON object.

    Raises:
        MembershipError: If the object lacks an id or carries malformed fields.
    """
    try:
        return CommunityRecord(
            id=str(payload["id"]),
            invitation_code=payload.get("invitation_code"),
            members=tuple(payload.get("members") or ()),
            type=payload.get("type") or COMMUNITY_TYPE_OPEN,
            version=int(payload.get("version") or 0),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise MembershipError(f"Malformed community payload: {exc!r}") from exc


class SqlDirectory:
    """Directory backed by the local ``community`` table."""

    def __init__(self, db: Session) -> None:
        self._db = db

    async def find_by_invitation_code(self, code: str) -> Iterator[CommunityRecord]:
        """Return communities whose code matches exactly, oldest first."""
        stmt = (
            select(Community)
            .where(Community.invitation_code == code)
            .order_by(Community.created_date, Community.id)
            .execution_options(populate_existing=True)
        )
        try:
            rows = self._db.scalars(stmt).all()
        except _DB_UNAVAILABLE as err:
            raise TransientIOError(f"Directory lookup failed: {err}") from err
        return iter([record_from_model(row) for row in rows])

    async def get(self, community_id: str) -> CommunityRecord | None:
        stmt = (
            select(Community)
            .where(Community.id == community_id)
            .execution_options(populate_existing=True)
        )
        try:
            community = self._db.scalars(stmt).first()
        except _DB_UNAVAILABLE as err:
            raise TransientIOError(f"Directory read failed: {err}") from err
        return record_from_model(community) if community is not None else None

    async def update_members(
        self,
        community_id: str,
        members: Sequence[str],
        *,
        expected_version: int,
    ) -> None:
        """Overwrite the member list if the stored version still matches.

        Raises:
            VersionConflictError: The row was modified since ``expected_version``.
            CommunityNotFoundError: The row no longer exists.
            TransientIOError: The database could not be reached.
        """
        stmt = (
            update(Community)
            .where(Community.id == community_id, Community.version == expected_version)
            .values(members=list(members), version=Community.version + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self._db.execute(stmt)
            if result.rowcount == 0:
                self._db.rollback()
                exists = self._db.scalar(select(Community.id).where(Community.id == community_id))
                if exists is None:
                    raise CommunityNotFoundError(community_id)
                raise VersionConflictError(community_id, expected_version)
            self._db.commit()
        except _DB_UNAVAILABLE as err:
            self._db.rollback()
            raise TransientIOError(f"Directory write failed: {err}") from err


@dataclass(frozen=True)
class RemoteDirectoryConfig:
    """Immutable configuration for the hosted entities API."""

    base_url: str
    api_key: str | None
    timeout_seconds: float


def load_remote_directory_config() -> RemoteDirectoryConfig:
    """Build configuration object from global settings."""
    if not settings.directory_base_url:
        raise MembershipError("DIRECTORY_BASE_URL is required for the remote directory")
    return RemoteDirectoryConfig(
        base_url=settings.directory_base_url,
        api_key=settings.directory_api_key,
        timeout_seconds=float(settings.directory_http_timeout_seconds),
    )


class RemoteDirectory:
    """Directory backed by the hosting platform's entities API."""

    ENTITY_PATH = "/entities/Community"

    def __init__(
        self,
        config: RemoteDirectoryConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_remote_directory_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                headers = {"Accept": "application/json"}
                if self.config.api_key:
                    headers["Authorization"] = f"Bearer {self.config.api_key}"
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    headers=headers,
                    transport=self._transport,
                )
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = await self._ensure_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Directory %s %s failed: %s", method, path, exc)
            raise TransientIOError(f"Directory request failed: {exc}") from exc

        if response.status_code >= HTTP_INTERNAL_SERVER_ERROR:
            logger.warning("Directory %s %s answered %s", method, path, response.status_code)
            raise TransientIOError(f"Directory responded with {response.status_code}")
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MembershipError("Directory returned a non-JSON body") from exc

    async def find_by_invitation_code(self, code: str) -> Iterator[CommunityRecord]:
        response = await self._request(
            "GET", self.ENTITY_PATH, params={"invitation_code": code}
        )
        if response.status_code != HTTP_OK:
            raise MembershipError(
                f"Unexpected directory response ({response.status_code}) for code lookup"
            )
        payload = self._json(response)
        if not isinstance(payload, list):
            raise MembershipError("Directory code lookup did not return a list")
        return iter([record_from_payload(item) for item in payload])

    async def get(self, community_id: str) -> CommunityRecord | None:
        response = await self._request("GET", f"{self.ENTITY_PATH}/{community_id}")
        if response.status_code == HTTP_NOT_FOUND:
            return None
        if response.status_code != HTTP_OK:
            raise MembershipError(
                f"Unexpected directory response ({response.status_code}) for community read"
            )
        return record_from_payload(self._json(response))

    async def update_members(
        self,
        community_id: str,
        members: Sequence[str],
        *,
        expected_version: int,
    ) -> None:
        response = await self._request(
            "PATCH",
            f"{self.ENTITY_PATH}/{community_id}",
            json={"members": list(members)},
            headers={"If-Match": str(expected_version)},
        )
        if response.status_code in (HTTP_CONFLICT, HTTP_PRECONDITION_FAILED):
            raise VersionConflictError(community_id, expected_version)
        if response.status_code == HTTP_NOT_FOUND:
            raise CommunityNotFoundError(community_id)
        if response.status_code not in (HTTP_OK, HTTP_NO_CONTENT):
            raise MembershipError(
                f"Unexpected directory response ({response.status_code}) for member update"
            )

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _RemoteDirectorySingleton:
    """Singleton wrapper for RemoteDirectory."""

    _instance: RemoteDirectory | None = None

    @classmethod
    def get_instance(cls) -> RemoteDirectory:
        if cls._instance is None:
            cls._instance = RemoteDirectory()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def get_remote_directory() -> RemoteDirectory:
    """Return a singleton remote directory instance."""
    return _RemoteDirectorySingleton.get_instance()
