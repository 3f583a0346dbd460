"""Protocol for tenant limits service observability.

Defines the interface for domain probes that capture application-level
domain events for quota limit reads and administrative updates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantLimitsServiceProbe(Protocol):
    """Domain probe for tenant limits service operations."""

    def limits_retrieved(self, tenant_id: str) -> None:
        """Record that existing limits were read."""
        ...

    def default_limits_bootstrapped(self, tenant_id: str, created: bool) -> None:
        """Record that a missing record was bootstrapped with defaults.

        ``created`` is False when a concurrent request won the insert and
        its record was returned instead.
        """
        ...

    def limits_updated(self, tenant_id: str, fields: list[str]) -> None:
        """Record that limits were changed by an administrator."""
        ...

    def limits_created_with_overrides(self, tenant_id: str, fields: list[str]) -> None:
        """Record that an administrator update created the record."""
        ...

    def with_context(self, context: ObservationContext) -> TenantLimitsServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantLimitsServiceProbe:
    """Default implementation of TenantLimitsServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantLimitsServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantLimitsServiceProbe(logger=self._logger, context=context)

    def limits_retrieved(self, tenant_id: str) -> None:
        """Record that existing limits were read."""
        self._logger.debug(
            "tenant_limits_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def default_limits_bootstrapped(self, tenant_id: str, created: bool) -> None:
        """Record that a missing record was bootstrapped with defaults."""
        self._logger.info(
            "tenant_limits_bootstrapped",
            tenant_id=tenant_id,
            created=created,
            **self._get_context_kwargs(),
        )

    def limits_updated(self, tenant_id: str, fields: list[str]) -> None:
        """Record that limits were changed by an administrator."""
        self._logger.info(
            "tenant_limits_updated",
            tenant_id=tenant_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def limits_created_with_overrides(self, tenant_id: str, fields: list[str]) -> None:
        """Record that an administrator update created the record."""
        self._logger.info(
            "tenant_limits_created_with_overrides",
            tenant_id=tenant_id,
            fields=fields,
            **self._get_context_kwargs(),
        )
