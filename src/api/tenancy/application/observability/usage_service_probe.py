"""Protocol for usage aggregation observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UsageServiceProbe(Protocol):
    """Domain probe for usage aggregation."""

    def usage_computed(
        self,
        tenant_id: str,
        vehicle_count: int,
        fleet_count: int,
        customer_count: int,
    ) -> None:
        """Record a computed usage snapshot."""
        ...

    def usage_failed(self, tenant_id: str, error: Exception) -> None:
        """Record that one of the counts failed."""
        ...

    def with_context(self, context: ObservationContext) -> UsageServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUsageServiceProbe:
    """Default implementation of UsageServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUsageServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUsageServiceProbe(logger=self._logger, context=context)

    def usage_computed(
        self,
        tenant_id: str,
        vehicle_count: int,
        fleet_count: int,
        customer_count: int,
    ) -> None:
        """Record a computed usage snapshot."""
        self._logger.debug(
            "tenant_usage_computed",
            tenant_id=tenant_id,
            vehicle_count=vehicle_count,
            fleet_count=fleet_count,
            customer_count=customer_count,
            **self._get_context_kwargs(),
        )

    def usage_failed(self, tenant_id: str, error: Exception) -> None:
        """Record that one of the counts failed."""
        self._logger.error(
            "tenant_usage_failed",
            tenant_id=tenant_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
