"""Aggregates for the Tenancy context."""

from tenancy.domain.aggregates.tenant_limits import (
    SYSTEM_DEFAULT_LIMITS,
    UNSET,
    DefaultLimits,
    LimitsUpdate,
    TenantLimits,
)

__all__ = [
    "DefaultLimits",
    "LimitsUpdate",
    "SYSTEM_DEFAULT_LIMITS",
    "TenantLimits",
    "UNSET",
]
