"""Pydantic models for Tenancy API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.domain.aggregates import LimitsUpdate, TenantLimits
from tenancy.domain.outcomes import Allowed, Denied, QuotaDecision
from tenancy.domain.value_objects import ResourceType, TenantSummary, UsageSnapshot


class TenantContextResponse(BaseModel):
    """Response model for the resolved tenant context."""

    tenant_id: str = Field(..., description="Active tenant (organization) ID")
    user_id: str = Field(..., description="Authenticated user ID")
    strategy: str = Field(
        ..., description="How the tenant was resolved (already_set, auto_select_single)"
    )

    @classmethod
    def from_context(cls, context: TenantContext) -> TenantContextResponse:
        """Convert a resolved TenantContext to an API response."""
        return cls(
            tenant_id=context.tenant_id,
            user_id=context.user_id,
            strategy=context.source,
        )


class TenantSummaryResponse(BaseModel):
    """Response model for a tenant in the administrative tenant list."""

    id: str = Field(..., description="Tenant (organization) ID")
    name: str = Field(..., description="Organization name")
    slug: str | None = Field(None, description="Organization slug")
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, tenant: TenantSummary) -> TenantSummaryResponse:
        """Convert a TenantSummary to an API response."""
        return cls(
            id=tenant.id.value,
            name=tenant.name,
            slug=tenant.slug,
            created_at=tenant.created_at,
        )

class TenantLimitsResponse(BaseModel):
    """Response model for a tenant's limits."""

    id: str = Field(..., description="Limits record ID (ULID format)")
    tenant_id: str = Field(..., description="Tenant (organization) ID")
    max_vehicles: int = Field(..., description="Maximum number of vehicles")
    max_fleets: int = Field(..., description="Maximum number of fleets")
    max_customers: int = Field(..., description="Maximum number of customers")
    max_monthly_invoices: int | None = Field(
        None, description="Maximum invoices per month, null for no limit"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, limits: TenantLimits) -> TenantLimitsResponse:
        """Convert a TenantLimits aggregate to an API response.

        Args:
            limits: TenantLimits domain aggregate

        Returns:
            TenantLimitsResponse
        """
        return cls(
            id=limits.id.value,
            tenant_id=limits.tenant_id.value,
            max_vehicles=limits.max_vehicles,
            max_fleets=limits.max_fleets,
            max_customers=limits.max_customers,
            max_monthly_invoices=limits.max_monthly_invoices,
            created_at=limits.created_at,
            updated_at=limits.updated_at,
        )


class UpdateTenantLimitsRequest(BaseModel):
    """Request model for a partial limits update.

    Omitted fields are left unchanged. ``max_monthly_invoices: null`` removes
    the monthly invoice limit, which differs from omitting it.
    """

    model_config = ConfigDict(extra="forbid")

    max_vehicles: int | None = Field(None, gt=0, description="Maximum vehicles")
    max_fleets: int | None = Field(None, gt=0, description="Maximum fleets")
    max_customers: int | None = Field(None, gt=0, description="Maximum customers")
    max_monthly_invoices: int | None = Field(
        None, gt=0, description="Maximum invoices per month, null for no limit"
    )

    def to_domain(self) -> LimitsUpdate:
        """Convert the explicitly supplied fields to a LimitsUpdate.

        Raises:
            InvalidLimitError: If a required limit was explicitly set to null
        """
        return LimitsUpdate.from_mapping(self.model_dump(exclude_unset=True))


class UsageResponse(BaseModel):
    """Response model for a tenant's current resource counts."""

    vehicle_count: int
    fleet_count: int
    customer_count: int

    @classmethod
    def from_domain(cls, usage: UsageSnapshot) -> UsageResponse:
        """Convert a UsageSnapshot to an API response."""
        return cls(
            vehicle_count=usage.vehicle_count,
            fleet_count=usage.fleet_count,
            customer_count=usage.customer_count,
        )


class QuotaDecisionResponse(BaseModel):
    """Response model for a quota check."""

    resource_type: ResourceType
    allowed: bool
    current_usage: int
    limit: int
    message: str | None = None

    @classmethod
    def from_domain(cls, decision: QuotaDecision) -> QuotaDecisionResponse:
        """Convert an Allowed or Denied decision to an API response."""
        match decision:
            case Denied():
                return cls(
                    resource_type=decision.resource_type,
                    allowed=False,
                    current_usage=decision.current_usage,
                    limit=decision.limit,
                    message=decision.message,
                )
            case Allowed():
                return cls(
                    resource_type=decision.resource_type,
                    allowed=True,
                    current_usage=decision.current_usage,
                    limit=decision.limit,
                )
