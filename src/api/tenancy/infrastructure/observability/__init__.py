"""Domain-Oriented Observability for Tenancy infrastructure."""

from tenancy.infrastructure.observability.repository_probe import (
    DefaultRepositoryProbe,
    DefaultTenantLimitsRepositoryProbe,
    RepositoryProbe,
    TenantLimitsRepositoryProbe,
)

__all__ = [
    "DefaultRepositoryProbe",
    "DefaultTenantLimitsRepositoryProbe",
    "RepositoryProbe",
    "TenantLimitsRepositoryProbe",
]
