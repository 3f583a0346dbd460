"""Tenant limits application service (the quota store).

Owns the per-tenant limits record: reads it, bootstraps it with defaults
on first access, and applies administrative partial updates.
"""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantLimitsServiceProbe,
    TenantLimitsServiceProbe,
)
from tenancy.domain.aggregates import (
    SYSTEM_DEFAULT_LIMITS,
    DefaultLimits,
    LimitsUpdate,
    TenantLimits,
)
from tenancy.domain.value_objects import TenantId
from tenancy.ports.exceptions import TenantLimitsNotFoundError
from tenancy.ports.repositories import ITenantLimitsRepository


class TenantLimitsService:
    """Application service for per-tenant quota limits.

    Holds no locks. Concurrent first accesses are reconciled by the
    repository's idempotent create, so every caller observes the same
    single record.
    """

    def __init__(
        self,
        limits_repository: ITenantLimitsRepository,
        defaults: DefaultLimits = SYSTEM_DEFAULT_LIMITS,
        probe: TenantLimitsServiceProbe | None = None,
    ):
        """Initialize TenantLimitsService with dependencies.

        Args:
            limits_repository: Storage for limits records
            defaults: Limits for tenants that have none configured
            probe: Optional domain probe for observability
        """
        self._repository = limits_repository
        self._defaults = defaults
        self._probe = probe or DefaultTenantLimitsServiceProbe()

    async def get_limits(self, tenant_id: TenantId) -> TenantLimits:
        """Get a tenant's limits, creating them with defaults if absent.

        Defaults never overwrite an existing record: the record is created
        only when none exists, and a concurrent creator's record wins.

        Args:
            tenant_id: The tenant whose limits to read

        Returns:
            The tenant's single limits record

        Raises:
            StorageError: If the store fails
            UnknownTenantError: If the tenant does not exist
        """
        existing = await self._repository.get_by_tenant(tenant_id)
        if existing is not None:
            self._probe.limits_retrieved(tenant_id=tenant_id.value)
            return existing

        candidate = TenantLimits.create(tenant_id=tenant_id, defaults=self._defaults)
        stored = await self._repository.create_if_absent(candidate)

        self._probe.default_limits_bootstrapped(
            tenant_id=tenant_id.value,
            created=stored.id == candidate.id,
        )
        return stored

    async def set_limits(self, tenant_id: TenantId, update: LimitsUpdate) -> TenantLimits:
        """Create or partially update a tenant's limits.

        If the tenant has a record, only the supplied fields change. If it
        has none, one is created from the defaults with the supplied fields
        applied on top.

        Args:
            tenant_id: The tenant whose limits to set
            update: Fields to change

        Returns:
            The record after the change

        Raises:
            StorageError: If the store fails
            UnknownTenantError: If the tenant does not exist
        """
        fields = sorted(update.provided())

        try:
            updated = await self._repository.update(tenant_id, update)
        except TenantLimitsNotFoundError:
            pass
        else:
            self._probe.limits_updated(tenant_id=tenant_id.value, fields=fields)
            return updated

        candidate = TenantLimits.create(
            tenant_id=tenant_id,
            defaults=self._defaults,
            overrides=update,
        )
        stored = await self._repository.create_if_absent(candidate)

        if stored.id == candidate.id:
            self._probe.limits_created_with_overrides(
                tenant_id=tenant_id.value, fields=fields
            )
            return stored

        # Another request bootstrapped the record in between; apply on top of it
        updated = await self._repository.update(tenant_id, update)
        self._probe.limits_updated(tenant_id=tenant_id.value, fields=fields)
        return updated
