"""Value objects for the Tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.

Tenant, user and session identifiers are issued by the external auth
provider and are treated as opaque strings. Only TenantLimitsId is
generated here, using ULID.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ulid import ULID


def _require_value(kind: str, value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid {kind}: {value!r}")
    return value.strip()


@dataclass(frozen=True)
class TenantId:
    """Identifier for a tenant (organization).

    The tenant is the unit of data isolation across all resource tables.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Raises:
            ValueError: If value is empty or blank
        """
        return cls(value=_require_value("TenantId", value))


@dataclass(frozen=True)
class UserId:
    """Identifier for an authenticated user."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is empty or blank
        """
        return cls(value=_require_value("UserId", value))


@dataclass(frozen=True)
class SessionId:
    """Identifier for an auth session record."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> SessionId:
        """Create SessionId from string value.

        Raises:
            ValueError: If value is empty or blank
        """
        return cls(value=_require_value("SessionId", value))


@dataclass(frozen=True)
class TenantLimitsId:
    """Identifier for a TenantLimits record.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantLimitsId:
        """Generate a new TenantLimitsId using ULID."""
        return cls(value=str(ULID()))


class ResourceType(StrEnum):
    """Tenant-scoped resource types subject to quota limits."""

    VEHICLES = "vehicles"
    FLEETS = "fleets"
    CUSTOMERS = "customers"

    @property
    def label(self) -> str:
        """Singular, capitalized name used in user-facing messages."""
        return {
            ResourceType.VEHICLES: "Vehicle",
            ResourceType.FLEETS: "Fleet",
            ResourceType.CUSTOMERS: "Customer",
        }[self]


class ResolutionStrategy(StrEnum):
    """How a tenant context was resolved."""

    ALREADY_SET = "already_set"
    AUTO_SELECT_SINGLE = "auto_select_single"


class UnresolvedReason(StrEnum):
    """Why a tenant context could not be resolved.

    NO_SESSION means the request is unauthenticated. The remaining reasons
    mean the user must select (or create) a tenant explicitly.
    """

    NO_SESSION = "no_session"
    NO_TENANTS = "no_tenants"
    AMBIGUOUS_MULTIPLE_TENANTS = "ambiguous_multiple_tenants"
    STALE_ACTIVE_TENANT = "stale_active_tenant"


@dataclass(frozen=True)
class TenantSummary:
    """A tenant as listed for administrators.

    The organization record itself is owned by the auth provider.
    """

    id: TenantId
    name: str
    slug: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class SessionRecord:
    """An auth session as stored by the auth provider.

    Attributes:
        id: Session identifier
        user_id: Owner of the session
        active_tenant_id: Tenant the session currently operates against,
            or None if none has been selected yet
    """

    id: SessionId
    user_id: UserId
    active_tenant_id: TenantId | None = None


@dataclass(frozen=True)
class AuthUser:
    """The user attached to an auth session."""

    id: UserId


@dataclass(frozen=True)
class AuthSession:
    """Session data handed over by the auth provider for one request.

    Either part may be missing; the resolver treats a missing session or
    user as unauthenticated.
    """

    session: SessionRecord | None = None
    user: AuthUser | None = None

    @property
    def is_authenticated(self) -> bool:
        """Whether both the session and its user are present."""
        return self.session is not None and self.user is not None


@dataclass(frozen=True)
class UsageSnapshot:
    """Current per-tenant resource counts, computed on demand.

    Not persisted. Counts are read independently per table, so the
    snapshot is approximate under concurrent writes.
    """

    vehicle_count: int = 0
    fleet_count: int = 0
    customer_count: int = 0

    @classmethod
    def from_counts(cls, counts: dict[ResourceType, int]) -> UsageSnapshot:
        """Build a snapshot from per-resource counts, defaulting to zero."""
        return cls(
            vehicle_count=counts.get(ResourceType.VEHICLES, 0),
            fleet_count=counts.get(ResourceType.FLEETS, 0),
            customer_count=counts.get(ResourceType.CUSTOMERS, 0),
        )
