"""Protocol for quota guard observability.

Quota checks are advisory: a denial is a normal business outcome and is
logged at info level, not as an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class QuotaGuardProbe(Protocol):
    """Domain probe for quota checks."""

    def quota_allowed(
        self, tenant_id: str, resource_type: str, current_usage: int, limit: int
    ) -> None:
        """Record that a create was allowed."""
        ...

    def quota_denied(
        self, tenant_id: str, resource_type: str, current_usage: int, limit: int
    ) -> None:
        """Record that a create was denied because the tenant is at its limit."""
        ...

    def with_context(self, context: ObservationContext) -> QuotaGuardProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultQuotaGuardProbe:
    """Default implementation of QuotaGuardProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultQuotaGuardProbe:
        """Create a new probe with observation context bound."""
        return DefaultQuotaGuardProbe(logger=self._logger, context=context)

    def quota_allowed(
        self, tenant_id: str, resource_type: str, current_usage: int, limit: int
    ) -> None:
        """Record that a create was allowed."""
        self._logger.debug(
            "quota_check_allowed",
            tenant_id=tenant_id,
            resource_type=resource_type,
            current_usage=current_usage,
            limit=limit,
            **self._get_context_kwargs(),
        )

    def quota_denied(
        self, tenant_id: str, resource_type: str, current_usage: int, limit: int
    ) -> None:
        """Record that a create was denied because the tenant is at its limit."""
        self._logger.info(
            "quota_check_denied",
            tenant_id=tenant_id,
            resource_type=resource_type,
            current_usage=current_usage,
            limit=limit,
            **self._get_context_kwargs(),
        )
