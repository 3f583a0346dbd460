"""PostgreSQL implementation of ITenantDirectoryRepository.

Reads the auth provider's organization table. Tenants are created and
deleted by the auth provider, never from this context.
"""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.value_objects import TenantId, TenantSummary
from tenancy.infrastructure.errors import storage_errors
from tenancy.infrastructure.models import OrganizationModel
from tenancy.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from tenancy.ports.repositories import ITenantDirectoryRepository


class TenantDirectoryRepository(ITenantDirectoryRepository):
    """Read-only repository over the organization table."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        probe: RepositoryProbe | None = None,
    ) -> None:
        self._sessionmaker = sessionmaker
        self._probe = probe or DefaultRepositoryProbe()

    async def list_tenants(self) -> list[TenantSummary]:
        """List all organizations ordered by name, then id."""
        stmt = select(OrganizationModel).order_by(
            OrganizationModel.name, OrganizationModel.id
        )
        with storage_errors("list_tenants", self._probe):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                models = list(result.scalars().all())

        return [
            TenantSummary(
                id=TenantId(value=model.id),
                name=model.name,
                slug=model.slug,
                created_at=model.created_at,
            )
            for model in models
        ]

    async def exists(self, tenant_id: TenantId) -> bool:
        """Check whether an organization row exists."""
        stmt = select(exists().where(OrganizationModel.id == tenant_id.value))
        with storage_errors("check_tenant", self._probe, tenant_id.value):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                return bool(result.scalar())
