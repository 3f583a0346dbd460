"""Quota guard: may a tenant create one more unit of a resource?

Each check reads the tenant's limits (bootstrapping defaults if needed),
counts the current rows of that resource type, and compares. A tenant is
full when ``current_usage >= limit``.

The check is advisory. Counting, comparing and the eventual insert by the
create handler are separate store calls, so two concurrent creates can
both pass and briefly put a tenant over its limit. That margin is
accepted; no distributed lock is taken. A handler needing a hard
guarantee must recount inside the insert transaction under a
tenant-scoped advisory lock.
"""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultQuotaGuardProbe,
    QuotaGuardProbe,
)
from tenancy.application.services.tenant_limits_service import TenantLimitsService
from tenancy.domain.outcomes import Allowed, Denied, QuotaDecision
from tenancy.domain.value_objects import ResourceType, TenantId
from tenancy.ports.repositories import IResourceCountRepository


class QuotaGuard:
    """Application service answering per-resource quota checks."""

    def __init__(
        self,
        limits_service: TenantLimitsService,
        resource_count_repository: IResourceCountRepository,
        probe: QuotaGuardProbe | None = None,
    ):
        """Initialize QuotaGuard with dependencies.

        Args:
            limits_service: Source of the tenant's limits
            resource_count_repository: Counts rows per resource table
            probe: Optional domain probe for observability
        """
        self._limits = limits_service
        self._counts = resource_count_repository
        self._probe = probe or DefaultQuotaGuardProbe()

    async def check_limit(
        self, tenant_id: TenantId, resource_type: ResourceType
    ) -> QuotaDecision:
        """Check whether one more ``resource_type`` may be created.

        Args:
            tenant_id: The tenant creating the resource
            resource_type: Kind of resource being created

        Returns:
            Allowed or Denied, both carrying the usage and limit compared

        Raises:
            StorageError: If reading limits or counting fails
        """
        limits = await self._limits.get_limits(tenant_id)
        limit = limits.limit_for(resource_type)
        current_usage = await self._counts.count(tenant_id, resource_type)

        if current_usage >= limit:
            self._probe.quota_denied(
                tenant_id=tenant_id.value,
                resource_type=resource_type,
                current_usage=current_usage,
                limit=limit,
            )
            return Denied(
                resource_type=resource_type,
                current_usage=current_usage,
                limit=limit,
            )

        self._probe.quota_allowed(
            tenant_id=tenant_id.value,
            resource_type=resource_type,
            current_usage=current_usage,
            limit=limit,
        )
        return Allowed(
            resource_type=resource_type,
            current_usage=current_usage,
            limit=limit,
        )

    async def check_vehicle_limit(self, tenant_id: TenantId) -> QuotaDecision:
        """Check whether the tenant may create another vehicle."""
        return await self.check_limit(tenant_id, ResourceType.VEHICLES)

    async def check_fleet_limit(self, tenant_id: TenantId) -> QuotaDecision:
        """Check whether the tenant may create another fleet."""
        return await self.check_limit(tenant_id, ResourceType.FLEETS)

    async def check_customer_limit(self, tenant_id: TenantId) -> QuotaDecision:
        """Check whether the tenant may create another customer."""
        return await self.check_limit(tenant_id, ResourceType.CUSTOMERS)
