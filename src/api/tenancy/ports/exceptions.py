"""Exceptions crossing the Tenancy context boundary.

Business outcomes (an unresolved tenant, a denied quota check) are NOT
exceptions; they are returned as values from tenancy.domain.outcomes.
These exceptions cover infrastructure failures and the few cases where an
operation needs a record that is absent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tenancy.domain.outcomes import Denied


class TenancyError(Exception):
    """Base exception for the Tenancy context."""

    pass


class StorageError(TenancyError):
    """Raised when an underlying store call fails.

    Wraps the storage-layer exception (available as ``__cause__``) so that
    raw driver or ORM exception types never leak past the repositories.
    A StorageError is a transient infrastructure error; it is never used to
    signal an unresolved tenant.

    Attributes:
        operation: The repository operation that failed
        tenant_id: Tenant the operation addressed, if any
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        tenant_id: str | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.tenant_id = tenant_id


class TenantLimitsNotFoundError(TenancyError):
    """Raised when updating limits of a tenant that has no limits record."""

    def __init__(self, tenant_id: str):
        super().__init__(f"No limits recorded for tenant '{tenant_id}'")
        self.tenant_id = tenant_id


class UnknownTenantError(TenancyError):
    """Raised when creating limits for a tenant that does not exist."""

    def __init__(self, tenant_id: str):
        super().__init__(f"Tenant '{tenant_id}' does not exist")
        self.tenant_id = tenant_id


class QuotaExceededError(TenancyError):
    """Raised by request guards when a quota check returned Denied.

    Carries the denial so the HTTP layer can report usage against limit.
    """

    def __init__(self, denied: Denied):
        super().__init__(denied.message)
        self.denied = denied
