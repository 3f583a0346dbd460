"""Repository protocols (ports) for the Tenancy bounded context.

Application services depend on these protocols only, so they can be
exercised against in-memory fakes as well as the PostgreSQL
implementations in tenancy.infrastructure.

Every method is a single store call and the unit of interleaving between
concurrent requests. Implementations must raise StorageError (never a raw
driver exception) when the store fails.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.aggregates import LimitsUpdate, TenantLimits
from tenancy.domain.value_objects import (
    ResourceType,
    SessionId,
    SessionRecord,
    TenantId,
    TenantSummary,
    UserId,
)


@runtime_checkable
class IMembershipRepository(Protocol):
    """Read-only access to user-to-tenant memberships."""

    async def list_tenant_ids(self, user_id: UserId) -> list[TenantId]:
        """List the tenants a user belongs to.

        Args:
            user_id: The user whose memberships to read

        Returns:
            Tenant ids, empty when the user belongs to no tenant
        """
        ...

    async def is_member(self, user_id: UserId, tenant_id: TenantId) -> bool:
        """Check whether a user belongs to a tenant.

        Args:
            user_id: The user to check
            tenant_id: The tenant to check against

        Returns:
            True if a membership exists
        """
        ...


@runtime_checkable
class ISessionRepository(Protocol):
    """Adapter over the auth provider's session store.

    Never creates or deletes sessions; the only write is the active tenant.
    """

    async def get_by_token(self, token: str) -> SessionRecord | None:
        """Retrieve an unexpired session by its token.

        Args:
            token: Opaque session token presented by the client

        Returns:
            The session, or None if unknown or expired
        """
        ...

    async def set_active_tenant(
        self, session_id: SessionId, tenant_id: TenantId
    ) -> bool:
        """Persist the active tenant of a session.

        The write is idempotent; concurrent writers storing the same value
        need no coordination (last writer wins).

        Args:
            session_id: Session to update
            tenant_id: Tenant to mark as active

        Returns:
            True if a session row was updated, False if it no longer exists
        """
        ...


@runtime_checkable
class ITenantLimitsRepository(Protocol):
    """Storage for TenantLimits records, at most one per tenant."""

    async def get_by_tenant(self, tenant_id: TenantId) -> TenantLimits | None:
        """Retrieve a tenant's limits.

        Args:
            tenant_id: The tenant whose limits to read

        Returns:
            The limits, or None if the tenant has no record yet
        """
        ...

    async def create_if_absent(self, limits: TenantLimits) -> TenantLimits:
        """Insert a limits record unless the tenant already has one.

        This is the idempotent-create used to bootstrap limits. When a
        concurrent request created the record first, the existing record is
        re-read and returned instead of raising a conflict. Callers can tell
        the two cases apart by comparing ``id``.

        Args:
            limits: Candidate record to insert

        Returns:
            The record stored for the tenant (the candidate or the existing one)

        Raises:
            UnknownTenantError: If the tenant itself does not exist
        """
        ...

    async def update(
        self, tenant_id: TenantId, limits_update: LimitsUpdate
    ) -> TenantLimits:
        """Apply a partial update to an existing record.

        Only the supplied fields are written; ``updated_at`` is refreshed.
        The record is never overwritten as a whole.

        Args:
            tenant_id: The tenant whose limits to change
            limits_update: Fields to change

        Returns:
            The record after the update

        Raises:
            TenantLimitsNotFoundError: If the tenant has no record
        """
        ...


@runtime_checkable
class IResourceCountRepository(Protocol):
    """Counts tenant-scoped rows in the resource tables."""

    async def count(self, tenant_id: TenantId, resource_type: ResourceType) -> int:
        """Count a tenant's rows of one resource type.

        Args:
            tenant_id: The tenant to count for
            resource_type: Which resource table to count

        Returns:
            Number of rows, zero when there are none
        """
        ...


@runtime_checkable
class ITenantDirectoryRepository(Protocol):
    """Read-only access to the tenants (organizations) themselves."""

    async def list_tenants(self) -> list[TenantSummary]:
        """List every tenant, ordered by name.

        Returns:
            All tenants, empty when none exist
        """
        ...

    async def exists(self, tenant_id: TenantId) -> bool:
        """Check whether a tenant exists.

        Args:
            tenant_id: The tenant to look up

        Returns:
            True if the tenant exists
        """
        ...
