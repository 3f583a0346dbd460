"""Quota store, usage, tenant directory and quota guard dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.dependencies import (
    get_read_sessionmaker,
    get_write_sessionmaker,
)
from infrastructure.settings import QuotaSettings, get_quota_settings
from shared_kernel.observability_context import ObservationContext
from tenancy.application.observability import (
    DefaultQuotaGuardProbe,
    DefaultTenantDirectoryProbe,
    DefaultTenantLimitsServiceProbe,
    DefaultUsageServiceProbe,
    QuotaGuardProbe,
    TenantDirectoryProbe,
    TenantLimitsServiceProbe,
    UsageServiceProbe,
)
from tenancy.application.services import (
    QuotaGuard,
    TenantDirectoryService,
    TenantLimitsService,
    UsageService,
)
from tenancy.dependencies.observation import get_observation_context
from tenancy.domain.aggregates import DefaultLimits
from tenancy.infrastructure.resource_count_repository import ResourceCountRepository
from tenancy.infrastructure.tenant_directory_repository import (
    TenantDirectoryRepository,
)
from tenancy.infrastructure.tenant_limits_repository import TenantLimitsRepository
from tenancy.ports.repositories import (
    IResourceCountRepository,
    ITenantDirectoryRepository,
    ITenantLimitsRepository,
)


def get_default_limits(
    settings: Annotated[QuotaSettings, Depends(get_quota_settings)],
) -> DefaultLimits:
    """Build the bootstrap limits from QuotaSettings."""
    return DefaultLimits(
        max_vehicles=settings.default_max_vehicles,
        max_fleets=settings.default_max_fleets,
        max_customers=settings.default_max_customers,
        max_monthly_invoices=settings.default_max_monthly_invoices,
    )


def get_tenant_limits_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantLimitsServiceProbe:
    """Get TenantLimitsServiceProbe bound to the request context."""
    return DefaultTenantLimitsServiceProbe().with_context(context)


def get_usage_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> UsageServiceProbe:
    """Get UsageServiceProbe bound to the request context."""
    return DefaultUsageServiceProbe().with_context(context)


def get_quota_guard_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> QuotaGuardProbe:
    """Get QuotaGuardProbe bound to the request context."""
    return DefaultQuotaGuardProbe().with_context(context)


def get_tenant_limits_repository(
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_write_sessionmaker)
    ],
) -> ITenantLimitsRepository:
    """Get TenantLimitsRepository bound to the write engine.

    Limits are bootstrapped on first read, so even reads need the write engine.
    """
    return TenantLimitsRepository(sessionmaker=sessionmaker)


def get_resource_count_repository(
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_read_sessionmaker)
    ],
) -> IResourceCountRepository:
    """Get ResourceCountRepository bound to the read engine."""
    return ResourceCountRepository(sessionmaker=sessionmaker)


def get_tenant_limits_service(
    repository: Annotated[
        ITenantLimitsRepository, Depends(get_tenant_limits_repository)
    ],
    defaults: Annotated[DefaultLimits, Depends(get_default_limits)],
    probe: Annotated[
        TenantLimitsServiceProbe, Depends(get_tenant_limits_service_probe)
    ],
) -> TenantLimitsService:
    """Get TenantLimitsService instance.

    Args:
        repository: Limits storage
        defaults: Bootstrap limits from settings
        probe: Limits service probe

    Returns:
        TenantLimitsService instance
    """
    return TenantLimitsService(
        limits_repository=repository,
        defaults=defaults,
        probe=probe,
    )


def get_usage_service(
    counts: Annotated[
        IResourceCountRepository, Depends(get_resource_count_repository)
    ],
    probe: Annotated[UsageServiceProbe, Depends(get_usage_service_probe)],
) -> UsageService:
    """Get UsageService instance."""
    return UsageService(resource_count_repository=counts, probe=probe)


def get_quota_guard(
    limits_service: Annotated[
        TenantLimitsService, Depends(get_tenant_limits_service)
    ],
    counts: Annotated[
        IResourceCountRepository, Depends(get_resource_count_repository)
    ],
    probe: Annotated[QuotaGuardProbe, Depends(get_quota_guard_probe)],
) -> QuotaGuard:
    """Get QuotaGuard instance.

    Args:
        limits_service: Source of the tenant's limits
        counts: Resource row counts
        probe: Quota guard probe

    Returns:
        QuotaGuard instance
    """
    return QuotaGuard(
        limits_service=limits_service,
        resource_count_repository=counts,
        probe=probe,
    )


def get_tenant_directory_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantDirectoryProbe:
    """Get TenantDirectoryProbe bound to the request context."""
    return DefaultTenantDirectoryProbe().with_context(context)


def get_tenant_directory_repository(
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_read_sessionmaker)
    ],
) -> ITenantDirectoryRepository:
    """Get TenantDirectoryRepository bound to the read engine."""
    return TenantDirectoryRepository(sessionmaker=sessionmaker)


def get_tenant_directory_service(
    repository: Annotated[
        ITenantDirectoryRepository, Depends(get_tenant_directory_repository)
    ],
    probe: Annotated[TenantDirectoryProbe, Depends(get_tenant_directory_probe)],
) -> TenantDirectoryService:
    """Get TenantDirectoryService instance."""
    return TenantDirectoryService(directory_repository=repository, probe=probe)
