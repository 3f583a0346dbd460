"""SQLAlchemy ORM models for the Tenancy bounded context."""

from tenancy.infrastructure.models.auth import (
    MemberModel,
    OrganizationModel,
    SessionModel,
)
from tenancy.infrastructure.models.tenant_limits import TenantLimitsModel

__all__ = [
    "MemberModel",
    "OrganizationModel",
    "SessionModel",
    "TenantLimitsModel",
]
