"""PostgreSQL adapters for the Tenancy bounded context."""

from tenancy.infrastructure.membership_repository import MembershipRepository
from tenancy.infrastructure.resource_count_repository import (
    RESOURCE_TABLES,
    ResourceCountRepository,
)
from tenancy.infrastructure.session_repository import SessionRepository
from tenancy.infrastructure.tenant_directory_repository import (
    TenantDirectoryRepository,
)
from tenancy.infrastructure.tenant_limits_repository import TenantLimitsRepository

__all__ = [
    "MembershipRepository",
    "RESOURCE_TABLES",
    "ResourceCountRepository",
    "SessionRepository",
    "TenantDirectoryRepository",
    "TenantLimitsRepository",
]
