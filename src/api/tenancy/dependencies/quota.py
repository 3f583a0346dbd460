"""Quota enforcement dependency for create handlers.

Usage:
    @router.post(
        "/vehicles",
        dependencies=[Depends(require_quota(ResourceType.VEHICLES))],
    )
    async def create_vehicle(...):
        ...

The dependency runs after tenant resolution and before the handler body.
A denial is raised as QuotaExceededError, which the application maps to a
403 response carrying the usage and the limit.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.application.services import QuotaGuard
from tenancy.dependencies.limits import get_quota_guard
from tenancy.dependencies.tenant_context import get_tenant_context
from tenancy.domain.outcomes import Allowed, Denied
from tenancy.domain.value_objects import ResourceType, TenantId
from tenancy.ports.exceptions import QuotaExceededError


def require_quota(
    resource_type: ResourceType,
) -> Callable[..., Awaitable[Allowed]]:
    """Build a dependency that rejects creates over the tenant's quota.

    Args:
        resource_type: Kind of resource the guarded handler creates

    Returns:
        FastAPI dependency returning the Allowed decision
    """

    async def _require_quota(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
        guard: Annotated[QuotaGuard, Depends(get_quota_guard)],
    ) -> Allowed:
        decision = await guard.check_limit(
            TenantId(value=tenant.tenant_id), resource_type
        )
        if isinstance(decision, Denied):
            raise QuotaExceededError(decision)
        return decision

    return _require_quota
