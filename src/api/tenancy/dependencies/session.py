"""Session lookup dependencies.

The auth provider issues opaque session tokens. A request presents one
either as ``Authorization: Bearer <token>`` or in the session cookie; the
header wins when both are present.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.dependencies import get_write_sessionmaker
from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.domain.value_objects import AuthSession, AuthUser
from tenancy.infrastructure.session_repository import SessionRepository
from tenancy.ports.repositories import ISessionRepository

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_repository(
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_write_sessionmaker)
    ],
) -> ISessionRepository:
    """Get SessionRepository bound to the write engine.

    Args:
        sessionmaker: Write sessionmaker

    Returns:
        SessionRepository instance
    """
    return SessionRepository(sessionmaker=sessionmaker)


def get_session_token(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> str | None:
    """Extract the session token from the bearer header or the cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


async def get_auth_session(
    token: Annotated[str | None, Depends(get_session_token)],
    sessions: Annotated[ISessionRepository, Depends(get_session_repository)],
) -> AuthSession:
    """Load the caller's session.

    An absent, unknown or expired token yields an empty AuthSession, which
    the resolver reports as NO_SESSION.

    Raises:
        StorageError: If the session lookup fails
    """
    if token is None:
        return AuthSession()

    record = await sessions.get_by_token(token)
    if record is None:
        return AuthSession()

    return AuthSession(session=record, user=AuthUser(id=record.user_id))


async def get_authenticated_session(
    auth_session: Annotated[AuthSession, Depends(get_auth_session)],
) -> AuthSession:
    """Require a valid session without requiring a resolved tenant.

    Used by administrative endpoints that address tenants explicitly.

    Raises:
        HTTPException 401: If the request has no valid session
    """
    if not auth_session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_session


async def get_admin_session(
    auth_session: Annotated[AuthSession, Depends(get_authenticated_session)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> AuthSession:
    """Require a session belonging to a configured administrator.

    Administrators are listed in ``WORKSHOP_TENANCY_ADMIN_USER_IDS``. Being a
    member, or even the owner, of a tenant does not grant access: these
    endpoints address any tenant, including ones the caller cannot see.

    Raises:
        HTTPException 401: If the request has no valid session
        HTTPException 403: If the user is not an administrator
    """
    if auth_session.user.id.value not in settings.admin_user_ids:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return auth_session
