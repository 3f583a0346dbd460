"""Tenant context FastAPI dependency.

Resolves the tenant a request operates against from the caller's session.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        # tenant.tenant_id is the resolved tenant
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.dependencies import get_read_sessionmaker
from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext
from tenancy.application.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from tenancy.application.services import TenantContextResolver
from tenancy.dependencies.observation import get_observation_context
from tenancy.dependencies.session import get_auth_session, get_session_repository
from tenancy.domain.outcomes import Resolved, Unresolved
from tenancy.domain.value_objects import AuthSession, UnresolvedReason
from tenancy.infrastructure.membership_repository import MembershipRepository
from tenancy.ports.repositories import IMembershipRepository, ISessionRepository

_UNRESOLVED_DETAILS = {
    UnresolvedReason.NO_TENANTS: "You are not a member of any organization",
    UnresolvedReason.AMBIGUOUS_MULTIPLE_TENANTS: (
        "Multiple organizations available; select an active organization"
    ),
    UnresolvedReason.STALE_ACTIVE_TENANT: (
        "You are no longer a member of the active organization"
    ),
}


def get_tenant_context_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantContextProbe:
    """Get TenantContextProbe bound to the request's observation context.

    Returns:
        DefaultTenantContextProbe instance for observability
    """
    return DefaultTenantContextProbe().with_context(context)


def get_membership_repository(
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_read_sessionmaker)
    ],
) -> IMembershipRepository:
    """Get MembershipRepository bound to the read engine."""
    return MembershipRepository(sessionmaker=sessionmaker)


def get_tenant_context_resolver(
    memberships: Annotated[IMembershipRepository, Depends(get_membership_repository)],
    sessions: Annotated[ISessionRepository, Depends(get_session_repository)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenantContextResolver:
    """Get TenantContextResolver instance.

    Args:
        memberships: Membership lookup
        sessions: Session store adapter
        probe: Tenant context probe
        settings: Tenancy settings (strict mode flag)

    Returns:
        TenantContextResolver instance
    """
    return TenantContextResolver(
        membership_repository=memberships,
        session_repository=sessions,
        probe=probe,
        revalidate_active_tenant=settings.revalidate_active_tenant,
    )


async def get_tenant_context(
    auth_session: Annotated[AuthSession, Depends(get_auth_session)],
    resolver: Annotated[TenantContextResolver, Depends(get_tenant_context_resolver)],
) -> TenantContext:
    """Resolve the tenant context for the current request.

    Returns:
        TenantContext with the tenant id and resolution strategy

    Raises:
        HTTPException 401: If the request has no valid session
        HTTPException 400: If no tenant could be resolved
        StorageError: If a store call fails (mapped to 503 by the app)
    """
    resolution = await resolver.resolve(auth_session)

    match resolution:
        case Resolved(tenant_id=tenant_id, strategy=strategy):
            return TenantContext(
                tenant_id=tenant_id.value,
                user_id=auth_session.user.id.value,
                source=strategy.value,
            )
        case Unresolved(reason=UnresolvedReason.NO_SESSION):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        case Unresolved(reason=reason):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "reason": reason.value,
                    "message": _UNRESOLVED_DETAILS[reason],
                },
            )
