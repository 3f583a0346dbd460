"""Row counts over the tenant-scoped resource tables.

The vehicles, fleets and customers tables belong to other contexts. They
are addressed here as lightweight table clauses with only the
organization_id column, which is all a count needs.
"""

from __future__ import annotations

from sqlalchemy import column, func, select, table
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.expression import TableClause

from tenancy.domain.value_objects import ResourceType, TenantId
from tenancy.infrastructure.errors import storage_errors
from tenancy.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from tenancy.ports.repositories import IResourceCountRepository

RESOURCE_TABLES: dict[ResourceType, TableClause] = {
    ResourceType.VEHICLES: table("vehicles", column("organization_id")),
    ResourceType.FLEETS: table("fleets", column("organization_id")),
    ResourceType.CUSTOMERS: table("customers", column("organization_id")),
}


class ResourceCountRepository(IResourceCountRepository):
    """Counts a tenant's rows per resource table.

    Every count opens its own session, so counts for different resource
    types can run concurrently.
    """

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        probe: RepositoryProbe | None = None,
    ) -> None:
        self._sessionmaker = sessionmaker
        self._probe = probe or DefaultRepositoryProbe()

    async def count(self, tenant_id: TenantId, resource_type: ResourceType) -> int:
        """Count rows of ``resource_type`` owned by the tenant.

        Args:
            tenant_id: The tenant to count for
            resource_type: Which resource table to count

        Returns:
            Number of rows, zero when the tenant has none
        """
        resource_table = RESOURCE_TABLES[resource_type]
        stmt = (
            select(func.count())
            .select_from(resource_table)
            .where(resource_table.c.organization_id == tenant_id.value)
        )
        with storage_errors(
            f"count_{resource_type.value}", self._probe, tenant_id.value
        ):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                total = result.scalar_one()

        return int(total or 0)
