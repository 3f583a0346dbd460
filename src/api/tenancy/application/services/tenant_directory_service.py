"""Tenant directory application service.

Lists tenants for the administrative limits page and checks that a tenant
addressed by id actually exists.
"""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.domain.value_objects import TenantId, TenantSummary
from tenancy.ports.exceptions import UnknownTenantError
from tenancy.ports.repositories import ITenantDirectoryRepository


class TenantDirectoryService:
    """Application service over the tenants themselves."""

    def __init__(
        self,
        directory_repository: ITenantDirectoryRepository,
        probe: TenantDirectoryProbe | None = None,
    ):
        self._repository = directory_repository
        self._probe = probe or DefaultTenantDirectoryProbe()

    async def list_tenants(self) -> list[TenantSummary]:
        """List every tenant.

        Raises:
            StorageError: If the store fails
        """
        tenants = await self._repository.list_tenants()
        self._probe.tenants_listed(count=len(tenants))
        return tenants

    async def ensure_exists(self, tenant_id: TenantId) -> None:
        """Check that a tenant exists.

        Args:
            tenant_id: The tenant to look up

        Raises:
            UnknownTenantError: If there is no such tenant
            StorageError: If the store fails
        """
        if not await self._repository.exists(tenant_id):
            self._probe.tenant_not_found(tenant_id=tenant_id.value)
            raise UnknownTenantError(tenant_id.value)
