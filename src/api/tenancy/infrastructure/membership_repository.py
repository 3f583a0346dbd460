"""PostgreSQL implementation of IMembershipRepository.

Reads the auth provider's member table. Membership rows are never written
from this context.
"""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.value_objects import TenantId, UserId
from tenancy.infrastructure.errors import storage_errors
from tenancy.infrastructure.models import MemberModel
from tenancy.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from tenancy.ports.repositories import IMembershipRepository


class MembershipRepository(IMembershipRepository):
    """Read-only repository over user-to-tenant memberships."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        probe: RepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a sessionmaker.

        Args:
            sessionmaker: Sessionmaker used for each lookup
            probe: Optional domain probe for observability
        """
        self._sessionmaker = sessionmaker
        self._probe = probe or DefaultRepositoryProbe()

    async def list_tenant_ids(self, user_id: UserId) -> list[TenantId]:
        """List the tenants a user is a member of.

        Args:
            user_id: The user whose memberships to read

        Returns:
            Distinct tenant ids, ordered for stable output
        """
        stmt = (
            select(MemberModel.organization_id)
            .where(MemberModel.user_id == user_id.value)
            .distinct()
            .order_by(MemberModel.organization_id)
        )
        with storage_errors("list_memberships", self._probe):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                organization_ids = list(result.scalars().all())

        return [TenantId(value=organization_id) for organization_id in organization_ids]

    async def is_member(self, user_id: UserId, tenant_id: TenantId) -> bool:
        """Check whether a membership row exists."""
        stmt = select(
            exists().where(
                MemberModel.user_id == user_id.value,
                MemberModel.organization_id == tenant_id.value,
            )
        )
        with storage_errors("check_membership", self._probe, tenant_id.value):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                return bool(result.scalar())
