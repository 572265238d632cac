"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from communify.core.settings import settings
from communify.db.session import get_db
from communify.services.directory import Directory, SqlDirectory, get_remote_directory
from communify.services.errors import UnauthenticatedError
from communify.services.identity import TokenIdentityProvider, UserIdentity
from communify.services.membership import MembershipJoinService

# Missing credentials are reported as 401 by get_current_identity, not 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_identity_provider(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenIdentityProvider:
    """Wrap the request's bearer token in an identity provider."""
    return TokenIdentityProvider(credentials.credentials if credentials else None)


IdentityProviderDep = Annotated[TokenIdentityProvider, Depends(get_identity_provider)]


def get_current_identity(provider: IdentityProviderDep) -> UserIdentity:
    """Resolve the authenticated user or fail with 401.

    Raises:
        HTTPException: If no valid session token was presented
    """
    try:
        return provider.current_user()
    except UnauthenticatedError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


CurrentIdentityDep = Annotated[UserIdentity, Depends(get_current_identity)]


def get_directory(db: SessionDep) -> Directory:
    """Return the configured community directory."""
    if settings.remote_directory_enabled:
        return get_remote_directory()
    return SqlDirectory(db)


DirectoryDep = Annotated[Directory, Depends(get_directory)]


def get_membership_service(directory: DirectoryDep) -> MembershipJoinService:
    """Return a join service bound to the request's directory."""
    return MembershipJoinService(directory)


MembershipServiceDep = Annotated[MembershipJoinService, Depends(get_membership_service)]
