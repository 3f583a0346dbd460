"""Domain-Oriented Observability for the Tenancy application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from tenancy.application.observability.quota_guard_probe import (
    DefaultQuotaGuardProbe,
    QuotaGuardProbe,
)
from tenancy.application.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from tenancy.application.observability.tenant_directory_probe import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.application.observability.tenant_limits_service_probe import (
    DefaultTenantLimitsServiceProbe,
    TenantLimitsServiceProbe,
)
from tenancy.application.observability.usage_service_probe import (
    DefaultUsageServiceProbe,
    UsageServiceProbe,
)

__all__ = [
    "DefaultQuotaGuardProbe",
    "DefaultTenantContextProbe",
    "DefaultTenantDirectoryProbe",
    "DefaultTenantLimitsServiceProbe",
    "DefaultUsageServiceProbe",
    "QuotaGuardProbe",
    "TenantContextProbe",
    "TenantDirectoryProbe",
    "TenantLimitsServiceProbe",
    "UsageServiceProbe",
]
