"""Shared middleware for cross-cutting concerns.

This module contains values shared across bounded contexts by the
request-scoped dependencies. The tenant context is the primary component,
carrying the tenant a request operates against.
"""

from shared_kernel.middleware.tenant_context import TenantContext

__all__ = ["TenantContext"]
