"""Domain probe for tenant context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the active tenant of an
auth session.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context resolution operations."""

    def tenant_resolved(self, tenant_id: str, user_id: str, strategy: str) -> None:
        """Record that a tenant context was resolved."""
        ...

    def tenant_auto_selected(
        self, tenant_id: str, user_id: str, session_id: str
    ) -> None:
        """Record that the user's only tenant was persisted as active."""
        ...

    def auto_select_session_missing(self, session_id: str, tenant_id: str) -> None:
        """Record that the session vanished before the active tenant was saved."""
        ...

    def tenant_unresolved(self, reason: str, user_id: str | None) -> None:
        """Record that no tenant could be resolved."""
        ...

    def stale_active_tenant(self, tenant_id: str, user_id: str) -> None:
        """Record that the active tenant no longer matches a membership."""
        ...

    def resolution_failed(self, user_id: str, error: Exception) -> None:
        """Record that a store call failed during resolution."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_resolved(self, tenant_id: str, user_id: str, strategy: str) -> None:
        """Record that a tenant context was resolved."""
        self._logger.debug(
            "tenant_context_resolved",
            tenant_id=tenant_id,
            user_id=user_id,
            strategy=strategy,
            **self._get_context_kwargs(),
        )

    def tenant_auto_selected(
        self, tenant_id: str, user_id: str, session_id: str
    ) -> None:
        """Record that the user's only tenant was persisted as active."""
        self._logger.info(
            "tenant_context_auto_selected",
            tenant_id=tenant_id,
            user_id=user_id,
            session_id=session_id,
            **self._get_context_kwargs(),
        )

    def auto_select_session_missing(self, session_id: str, tenant_id: str) -> None:
        """Record that the session vanished before the active tenant was saved."""
        self._logger.warning(
            "tenant_context_auto_select_session_missing",
            session_id=session_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_unresolved(self, reason: str, user_id: str | None) -> None:
        """Record that no tenant could be resolved."""
        self._logger.info(
            "tenant_context_unresolved",
            reason=reason,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def stale_active_tenant(self, tenant_id: str, user_id: str) -> None:
        """Record that the active tenant no longer matches a membership."""
        self._logger.warning(
            "tenant_context_stale_active_tenant",
            tenant_id=tenant_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def resolution_failed(self, user_id: str, error: Exception) -> None:
        """Record that a store call failed during resolution."""
        self._logger.error(
            "tenant_context_resolution_failed",
            user_id=user_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
