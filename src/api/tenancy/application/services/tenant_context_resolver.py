"""Tenant context resolution for authenticated requests.

Decides which tenant a request operates against:

1. No session or no user: Unresolved(NO_SESSION). The caller treats this
   as unauthenticated.
2. The session already has an active tenant: return it unchanged. No
   membership lookup is made unless ``revalidate_active_tenant`` is on.
3. Otherwise look up the user's memberships. Exactly one is auto-selected
   and persisted on the session; zero or several are reported as
   Unresolved and the session is left untouched.

Store failures propagate as StorageError and are never reported as
Unresolved.
"""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from tenancy.domain.outcomes import Resolved, TenantResolution, Unresolved
from tenancy.domain.value_objects import (
    AuthSession,
    ResolutionStrategy,
    TenantId,
    UnresolvedReason,
)
from tenancy.ports.exceptions import StorageError
from tenancy.ports.repositories import IMembershipRepository, ISessionRepository


class TenantContextResolver:
    """Application service resolving the active tenant of a session."""

    def __init__(
        self,
        membership_repository: IMembershipRepository,
        session_repository: ISessionRepository,
        probe: TenantContextProbe | None = None,
        revalidate_active_tenant: bool = False,
    ):
        """Initialize TenantContextResolver with dependencies.

        Args:
            membership_repository: Lookup of the user's tenants
            session_repository: Adapter used to persist an auto-selected tenant
            probe: Optional domain probe for observability
            revalidate_active_tenant: Re-check membership of an already-set
                active tenant on every call
        """
        self._memberships = membership_repository
        self._sessions = session_repository
        self._probe = probe or DefaultTenantContextProbe()
        self._revalidate_active_tenant = revalidate_active_tenant

    async def resolve(self, auth_session: AuthSession | None) -> TenantResolution:
        """Resolve the tenant for a session.

        Args:
            auth_session: Session data from the auth provider, or None

        Returns:
            Resolved with the tenant id and strategy, or Unresolved with a reason

        Raises:
            StorageError: If the membership lookup or session update fails
        """
        if (
            auth_session is None
            or auth_session.session is None
            or auth_session.user is None
        ):
            self._probe.tenant_unresolved(
                reason=UnresolvedReason.NO_SESSION, user_id=None
            )
            return Unresolved(reason=UnresolvedReason.NO_SESSION)

        session = auth_session.session
        user_id = auth_session.user.id

        try:
            if session.active_tenant_id is not None:
                if self._revalidate_active_tenant and not await self._memberships.is_member(
                    user_id, session.active_tenant_id
                ):
                    self._probe.stale_active_tenant(
                        tenant_id=session.active_tenant_id.value,
                        user_id=user_id.value,
                    )
                    return Unresolved(reason=UnresolvedReason.STALE_ACTIVE_TENANT)

                return self._resolved(
                    session.active_tenant_id,
                    user_id.value,
                    ResolutionStrategy.ALREADY_SET,
                )

            tenant_ids = await self._memberships.list_tenant_ids(user_id)

            if len(tenant_ids) == 1:
                tenant_id = tenant_ids[0]
                updated = await self._sessions.set_active_tenant(session.id, tenant_id)
                if updated:
                    self._probe.tenant_auto_selected(
                        tenant_id=tenant_id.value,
                        user_id=user_id.value,
                        session_id=session.id.value,
                    )
                else:
                    self._probe.auto_select_session_missing(
                        session_id=session.id.value,
                        tenant_id=tenant_id.value,
                    )
                return self._resolved(
                    tenant_id, user_id.value, ResolutionStrategy.AUTO_SELECT_SINGLE
                )

        except StorageError as e:
            self._probe.resolution_failed(user_id=user_id.value, error=e)
            raise

        reason = (
            UnresolvedReason.NO_TENANTS
            if not tenant_ids
            else UnresolvedReason.AMBIGUOUS_MULTIPLE_TENANTS
        )
        self._probe.tenant_unresolved(reason=reason, user_id=user_id.value)
        return Unresolved(reason=reason)

    async def resolve_tenant(self, auth_session: AuthSession | None) -> TenantId | None:
        """Resolve the tenant, collapsing every Unresolved case to None.

        Callers that need to tell "no session" apart from "no active tenant"
        should use resolve() instead.
        """
        match await self.resolve(auth_session):
            case Resolved(tenant_id=tenant_id):
                return tenant_id
            case _:
                return None

    def _resolved(
        self, tenant_id: TenantId, user_id: str, strategy: ResolutionStrategy
    ) -> Resolved:
        self._probe.tenant_resolved(
            tenant_id=tenant_id.value, user_id=user_id, strategy=strategy
        )
        return Resolved(tenant_id=tenant_id, strategy=strategy)
