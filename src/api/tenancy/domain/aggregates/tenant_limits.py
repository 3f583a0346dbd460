"""TenantLimits aggregate for the Tenancy context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Final

from tenancy.domain.exceptions import InvalidLimitError
from tenancy.domain.value_objects import ResourceType, TenantId, TenantLimitsId


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET
"""Marks a field of LimitsUpdate that the caller did not supply."""

_REQUIRED_FIELDS = ("max_vehicles", "max_fleets", "max_customers")
_NULLABLE_FIELDS = ("max_monthly_invoices",)


def _validate_limit(field_name: str, value: Any, nullable: bool) -> None:
    if value is None and nullable:
        return
    # bool is an int subclass but never a meaningful limit
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidLimitError(field_name, value)


@dataclass(frozen=True)
class DefaultLimits:
    """Limits applied to a tenant that has never had any configured."""

    max_vehicles: int = 100
    max_fleets: int = 50
    max_customers: int = 200
    max_monthly_invoices: int | None = None

    def __post_init__(self) -> None:
        for name in _REQUIRED_FIELDS:
            _validate_limit(name, getattr(self, name), nullable=False)
        for name in _NULLABLE_FIELDS:
            _validate_limit(name, getattr(self, name), nullable=True)


SYSTEM_DEFAULT_LIMITS: Final = DefaultLimits()


@dataclass(frozen=True)
class LimitsUpdate:
    """A partial change to a tenant's limits.

    Fields left as UNSET are not touched. ``max_monthly_invoices=None`` is
    different from leaving it UNSET: it explicitly removes the limit.
    """

    max_vehicles: int | _Unset = UNSET
    max_fleets: int | _Unset = UNSET
    max_customers: int | _Unset = UNSET
    max_monthly_invoices: int | None | _Unset = UNSET

    def __post_init__(self) -> None:
        for name, value in self.provided().items():
            _validate_limit(name, value, nullable=name in _NULLABLE_FIELDS)

    @classmethod
    def from_mapping(cls, values: Mapping[str, int | None]) -> LimitsUpdate:
        """Build an update from the fields a caller explicitly supplied.

        Raises:
            ValueError: If the mapping names an unknown field
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown limit fields: {sorted(unknown)}")
        return cls(**values)  # type: ignore[arg-type]

    def provided(self) -> dict[str, int | None]:
        """Return only the fields that were supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    @property
    def is_empty(self) -> bool:
        """Whether no field was supplied."""
        return not self.provided()


@dataclass
class TenantLimits:
    """Per-tenant resource ceilings.

    Business rules:
    - Exactly one record per tenant once first accessed
    - Vehicle, fleet and customer limits are positive integers
    - The monthly invoice limit is a positive integer or None (no limit)
    - Records are never deleted here; they cascade with the tenant
    """

    id: TenantLimitsId
    tenant_id: TenantId
    max_vehicles: int
    max_fleets: int
    max_customers: int
    max_monthly_invoices: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        defaults: DefaultLimits = SYSTEM_DEFAULT_LIMITS,
        overrides: LimitsUpdate | None = None,
    ) -> TenantLimits:
        """Factory for a new, not yet persisted limits record.

        Unspecified fields take the defaults; fields supplied in
        ``overrides`` take the caller's values.

        Args:
            tenant_id: Tenant the record belongs to
            defaults: Limits used for every field not overridden
            overrides: Optional caller-supplied values

        Returns:
            A new TenantLimits with a freshly generated id
        """
        values: dict[str, int | None] = {
            "max_vehicles": defaults.max_vehicles,
            "max_fleets": defaults.max_fleets,
            "max_customers": defaults.max_customers,
            "max_monthly_invoices": defaults.max_monthly_invoices,
        }
        if overrides is not None:
            values.update(overrides.provided())

        return cls(
            id=TenantLimitsId.generate(),
            tenant_id=tenant_id,
            **values,  # type: ignore[arg-type]
        )

    def limit_for(self, resource_type: ResourceType) -> int:
        """Return the ceiling for a quota-enforced resource type."""
        return {
            ResourceType.VEHICLES: self.max_vehicles,
            ResourceType.FLEETS: self.max_fleets,
            ResourceType.CUSTOMERS: self.max_customers,
        }[resource_type]
