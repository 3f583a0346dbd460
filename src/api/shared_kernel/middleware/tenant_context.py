"""Tenant context value object for resolved tenant identification.

This module contains the pure value object that represents a resolved
tenant context. It is framework-agnostic and contains no business logic,
making it safe for the shared kernel.

The actual resolution logic (session lookup, membership auto-selection)
lives in the Tenancy bounded context's dependency layer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    This is a shared kernel value object used across bounded contexts
    to carry the resolved tenant identity.

    Attributes:
        tenant_id: The tenant identifier as a string.
        user_id: The authenticated user the request acts for.
        source: How the tenant was resolved - 'already_set' if the session
            carried an active tenant, 'auto_select_single' if the user's
            only membership was selected.
    """

    tenant_id: str
    user_id: str
    source: str
