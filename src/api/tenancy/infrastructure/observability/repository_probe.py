"""Domain probes for Tenancy repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events of the PostgreSQL adapters: storage failures
on every repository, plus the bootstrap and update events of the limits
repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RepositoryProbe(Protocol):
    """Domain probe shared by all Tenancy repositories."""

    def storage_failed(
        self, operation: str, tenant_id: str | None, error: Exception
    ) -> None:
        """Record that a store call failed."""
        ...

    def with_context(self, context: ObservationContext) -> RepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TenantLimitsRepositoryProbe(RepositoryProbe, Protocol):
    """Domain probe for limits persistence."""

    def limits_created(self, tenant_id: str) -> None:
        """Record that a limits row was inserted."""
        ...

    def limits_insert_conflicted(self, tenant_id: str) -> None:
        """Record that a concurrent insert won and the existing row was re-read."""
        ...

    def limits_updated(self, tenant_id: str, fields: list[str]) -> None:
        """Record that a limits row was partially updated."""
        ...


class DefaultRepositoryProbe:
    """Default implementation of RepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRepositoryProbe:
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)

    def storage_failed(
        self, operation: str, tenant_id: str | None, error: Exception
    ) -> None:
        """Record that a store call failed."""
        self._logger.error(
            "tenancy_storage_failed",
            operation=operation,
            tenant_id=tenant_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )


class DefaultTenantLimitsRepositoryProbe(DefaultRepositoryProbe):
    """Default implementation of TenantLimitsRepositoryProbe using structlog."""

    def limits_created(self, tenant_id: str) -> None:
        """Record that a limits row was inserted."""
        self._logger.info(
            "tenant_limits_row_created",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def limits_insert_conflicted(self, tenant_id: str) -> None:
        """Record that a concurrent insert won and the existing row was re-read."""
        self._logger.debug(
            "tenant_limits_insert_conflicted",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def limits_updated(self, tenant_id: str, fields: list[str]) -> None:
        """Record that a limits row was partially updated."""
        self._logger.debug(
            "tenant_limits_row_updated",
            tenant_id=tenant_id,
            fields=fields,
            **self._get_context_kwargs(),
        )
