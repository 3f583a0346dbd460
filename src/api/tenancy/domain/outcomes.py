"""Tagged outcomes for tenant resolution and quota checks.

Business outcomes are returned as values, never raised. Callers branch
with ``match`` or ``isinstance``:

    match await resolver.resolve(auth_session):
        case Resolved(tenant_id=tenant_id):
            ...
        case Unresolved(reason=reason):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.value_objects import (
    ResolutionStrategy,
    ResourceType,
    TenantId,
    UnresolvedReason,
)


@dataclass(frozen=True)
class Resolved:
    """The request operates against ``tenant_id``."""

    tenant_id: TenantId
    strategy: ResolutionStrategy


@dataclass(frozen=True)
class Unresolved:
    """No tenant could be resolved. This is a valid result, not an error."""

    reason: UnresolvedReason


TenantResolution = Resolved | Unresolved


@dataclass(frozen=True)
class Allowed:
    """Creating one more unit of ``resource_type`` is within the limit."""

    resource_type: ResourceType
    current_usage: int
    limit: int


@dataclass(frozen=True)
class Denied:
    """The tenant is at (or above) its limit for ``resource_type``.

    Carries the numbers the decision was based on, for user-facing messages.
    """

    resource_type: ResourceType
    current_usage: int
    limit: int

    @property
    def message(self) -> str:
        """Human-readable denial message."""
        return (
            f"{self.resource_type.label} limit exceeded. "
            f"Current: {self.current_usage}/{self.limit}"
        )


QuotaDecision = Allowed | Denied
