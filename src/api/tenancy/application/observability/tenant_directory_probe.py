"""Protocol for tenant directory observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantDirectoryProbe(Protocol):
    """Domain probe for tenant directory lookups."""

    def tenants_listed(self, count: int) -> None:
        """Record that the tenant list was read."""
        ...

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record a lookup of a tenant that does not exist."""
        ...

    def with_context(self, context: ObservationContext) -> TenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantDirectoryProbe:
    """Default implementation of TenantDirectoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantDirectoryProbe(logger=self._logger, context=context)

    def tenants_listed(self, count: int) -> None:
        """Record that the tenant list was read."""
        self._logger.debug(
            "tenants_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record a lookup of a tenant that does not exist."""
        self._logger.info(
            "tenant_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )
