"""Usage aggregation for tenant-scoped resources."""

from __future__ import annotations

import asyncio

from tenancy.application.observability import (
    DefaultUsageServiceProbe,
    UsageServiceProbe,
)
from tenancy.domain.value_objects import ResourceType, TenantId, UsageSnapshot
from tenancy.ports.exceptions import StorageError
from tenancy.ports.repositories import IResourceCountRepository


class UsageService:
    """Computes a tenant's current resource counts.

    Each resource table is counted independently and concurrently, with no
    cross-table transaction. If any count fails, the remaining ones are
    cancelled and a single exception is raised: a StorageError wrapping
    the failed count, or the unexpected error itself. Partial snapshots are
    never returned.
    """

    def __init__(
        self,
        resource_count_repository: IResourceCountRepository,
        probe: UsageServiceProbe | None = None,
    ):
        self._counts = resource_count_repository
        self._probe = probe or DefaultUsageServiceProbe()

    async def get_usage(self, tenant_id: TenantId) -> UsageSnapshot:
        """Count vehicles, fleets and customers for a tenant.

        Args:
            tenant_id: The tenant to count for

        Returns:
            UsageSnapshot with zero for resource types without rows

        Raises:
            StorageError: If any of the counts fails
        """
        failures: list[Exception] = []
        try:
            async with asyncio.TaskGroup() as group:
                tasks = {
                    resource_type: group.create_task(
                        self._counts.count(tenant_id, resource_type)
                    )
                    for resource_type in ResourceType
                }
        except* Exception as errors:
            failures = list(errors.exceptions)

        # raised outside except* so callers get a single exception, not a group
        if failures:
            unexpected = [e for e in failures if not isinstance(e, StorageError)]
            cause = unexpected[0] if unexpected else failures[0]
            self._probe.usage_failed(tenant_id=tenant_id.value, error=cause)
            if unexpected:
                raise cause
            raise StorageError(
                "Failed to get tenant usage",
                operation="get_usage",
                tenant_id=tenant_id.value,
            ) from cause

        usage = UsageSnapshot.from_counts(
            {resource_type: task.result() for resource_type, task in tasks.items()}
        )
        self._probe.usage_computed(
            tenant_id=tenant_id.value,
            vehicle_count=usage.vehicle_count,
            fleet_count=usage.fleet_count,
            customer_count=usage.customer_count,
        )
        return usage
