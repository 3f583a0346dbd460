"""PostgreSQL adapter over the auth provider's session table.

Sessions are created, refreshed and deleted by the auth provider. This
adapter only looks them up by token and records the active tenant.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import utc_now
from tenancy.domain.value_objects import SessionId, SessionRecord, TenantId, UserId
from tenancy.infrastructure.errors import storage_errors
from tenancy.infrastructure.models import SessionModel
from tenancy.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from tenancy.ports.repositories import ISessionRepository


class SessionRepository(ISessionRepository):
    """Repository reading sessions and persisting their active tenant."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        probe: RepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a write sessionmaker.

        Args:
            sessionmaker: Sessionmaker bound to the write engine
            probe: Optional domain probe for observability
        """
        self._sessionmaker = sessionmaker
        self._probe = probe or DefaultRepositoryProbe()

    async def get_by_token(self, token: str) -> SessionRecord | None:
        """Look up an unexpired session by its token.

        Args:
            token: Opaque session token presented by the client

        Returns:
            The session, or None if the token is unknown or expired
        """
        stmt = select(SessionModel).where(
            SessionModel.token == token,
            SessionModel.expires_at > utc_now(),
        )
        with storage_errors("get_session", self._probe):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()

        if model is None:
            return None

        return SessionRecord(
            id=SessionId(value=model.id),
            user_id=UserId(value=model.user_id),
            active_tenant_id=(
                TenantId(value=model.active_organization_id)
                if model.active_organization_id
                else None
            ),
        )

    async def set_active_tenant(
        self, session_id: SessionId, tenant_id: TenantId
    ) -> bool:
        """Write the session's active organization.

        Args:
            session_id: Session to update
            tenant_id: Tenant to mark as active

        Returns:
            True if the session row still existed
        """
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id.value)
            .values(active_organization_id=tenant_id.value)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("set_active_tenant", self._probe, tenant_id.value):
            async with self._sessionmaker.begin() as session:
                result = await session.execute(stmt)

        return result.rowcount > 0
