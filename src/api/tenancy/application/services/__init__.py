"""Application services for the Tenancy bounded context.

Application services orchestrate domain objects and repositories to
fulfill use cases. They are the "front door" to the Tenancy context.
"""

from tenancy.application.services.quota_guard import QuotaGuard
from tenancy.application.services.tenant_context_resolver import (
    TenantContextResolver,
)
from tenancy.application.services.tenant_directory_service import (
    TenantDirectoryService,
)
from tenancy.application.services.tenant_limits_service import TenantLimitsService
from tenancy.application.services.usage_service import UsageService

__all__ = [
    "QuotaGuard",
    "TenantContextResolver",
    "TenantDirectoryService",
    "TenantLimitsService",
    "UsageService",
]
