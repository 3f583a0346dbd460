"""Administrative HTTP routes addressing tenants explicitly."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tenancy.application.services import (
    TenantDirectoryService,
    TenantLimitsService,
    UsageService,
)
from tenancy.dependencies.limits import (
    get_tenant_directory_service,
    get_tenant_limits_service,
    get_usage_service,
)
from tenancy.dependencies.session import get_admin_session
from tenancy.domain.exceptions import InvalidLimitError
from tenancy.domain.value_objects import TenantId
from tenancy.ports.exceptions import UnknownTenantError
from tenancy.presentation.models import (
    TenantLimitsResponse,
    TenantSummaryResponse,
    UpdateTenantLimitsRequest,
    UsageResponse,
)

router = APIRouter(
    prefix="/admin/tenants",
    tags=["tenancy-admin"],
    dependencies=[Depends(get_admin_session)],
)


def _parse_tenant_id(tenant_id: str) -> TenantId:
    try:
        return TenantId.from_string(tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant ID: {e}",
        ) from e


@router.get("")
async def list_tenants(
    service: Annotated[TenantDirectoryService, Depends(get_tenant_directory_service)],
) -> list[TenantSummaryResponse]:
    """List every tenant, for choosing whose limits to manage."""
    tenants = await service.list_tenants()
    return [TenantSummaryResponse.from_domain(tenant) for tenant in tenants]


@router.get("/{tenant_id}/limits")
async def get_tenant_limits(
    tenant_id: str,
    service: Annotated[TenantLimitsService, Depends(get_tenant_limits_service)],
) -> TenantLimitsResponse:
    """Get a tenant's limits, creating defaults on first access.

    Args:
        tenant_id: Tenant (organization) ID
        service: Limits service

    Returns:
        TenantLimitsResponse

    Raises:
        HTTPException: 404 if the tenant does not exist
    """
    tenant_id_obj = _parse_tenant_id(tenant_id)
    try:
        limits = await service.get_limits(tenant_id_obj)
    except UnknownTenantError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {tenant_id} not found",
        )
    return TenantLimitsResponse.from_domain(limits)


@router.put("/{tenant_id}/limits")
async def set_tenant_limits(
    tenant_id: str,
    request: UpdateTenantLimitsRequest,
    service: Annotated[TenantLimitsService, Depends(get_tenant_limits_service)],
) -> TenantLimitsResponse:
    """Partially update a tenant's limits.

    Only the fields present in the body change. A tenant without a limits
    record gets one built from the defaults plus the supplied fields.

    Args:
        tenant_id: Tenant (organization) ID
        request: Fields to change
        service: Limits service

    Returns:
        TenantLimitsResponse after the update

    Raises:
        HTTPException: 422 if a limit is invalid or no field is supplied
        HTTPException: 404 if the tenant does not exist
    """
    tenant_id_obj = _parse_tenant_id(tenant_id)

    try:
        update = request.to_domain()
    except InvalidLimitError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e

    if update.is_empty:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="At least one limit must be supplied",
        )

    try:
        limits = await service.set_limits(tenant_id_obj, update)
    except UnknownTenantError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {tenant_id} not found",
        )
    return TenantLimitsResponse.from_domain(limits)


@router.get("/{tenant_id}/usage")
async def get_tenant_usage(
    tenant_id: str,
    directory: Annotated[TenantDirectoryService, Depends(get_tenant_directory_service)],
    service: Annotated[UsageService, Depends(get_usage_service)],
) -> UsageResponse:
    """Get a tenant's current resource counts.

    Raises:
        HTTPException: 404 if the tenant does not exist
    """
    tenant_id_obj = _parse_tenant_id(tenant_id)
    try:
        await directory.ensure_exists(tenant_id_obj)
    except UnknownTenantError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {tenant_id} not found",
        )
    usage = await service.get_usage(tenant_id_obj)
    return UsageResponse.from_domain(usage)
