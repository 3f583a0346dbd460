"""HTTP routes for the caller's own tenant: context, limits, usage, quota."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.application.services import QuotaGuard, TenantLimitsService, UsageService
from tenancy.dependencies.limits import (
    get_quota_guard,
    get_tenant_limits_service,
    get_usage_service,
)
from tenancy.dependencies.tenant_context import get_tenant_context
from tenancy.domain.value_objects import ResourceType, TenantId
from tenancy.presentation.models import (
    QuotaDecisionResponse,
    TenantContextResponse,
    TenantLimitsResponse,
    UsageResponse,
)

router = APIRouter()


@router.get("/context")
async def get_context(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
) -> TenantContextResponse:
    """Return the tenant the caller's session operates against.

    Resolving may auto-select and persist the caller's only organization.

    Raises:
        HTTPException: 401 without a valid session
        HTTPException: 400 if no organization could be selected
    """
    return TenantContextResponse.from_context(tenant)


@router.get("/limits")
async def get_limits(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[TenantLimitsService, Depends(get_tenant_limits_service)],
) -> TenantLimitsResponse:
    """Return the active tenant's limits, creating defaults on first access."""
    limits = await service.get_limits(TenantId(value=tenant.tenant_id))
    return TenantLimitsResponse.from_domain(limits)


@router.get("/usage")
async def get_usage(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[UsageService, Depends(get_usage_service)],
) -> UsageResponse:
    """Return the active tenant's current resource counts."""
    usage = await service.get_usage(TenantId(value=tenant.tenant_id))
    return UsageResponse.from_domain(usage)


@router.get("/quota/{resource_type}")
async def check_quota(
    resource_type: ResourceType,
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    guard: Annotated[QuotaGuard, Depends(get_quota_guard)],
) -> QuotaDecisionResponse:
    """Check whether the active tenant may create one more resource.

    A denial is reported in the body with ``allowed: false``; this endpoint
    only answers the question and never fails because of the quota.

    Args:
        resource_type: vehicles, fleets or customers
        tenant: Resolved tenant context
        guard: Quota guard

    Returns:
        QuotaDecisionResponse with the usage and the limit compared
    """
    decision = await guard.check_limit(TenantId(value=tenant.tenant_id), resource_type)
    return QuotaDecisionResponse.from_domain(decision)
