"""Tenancy presentation layer.

Routes for the caller's own tenant live in ``routes``; administrative
routes addressing arbitrary tenants live in the ``admin`` package.
"""

from __future__ import annotations

from fastapi import APIRouter

from tenancy.presentation import admin, routes

# Auth is enforced per-endpoint through the tenant context dependency, and
# router-wide for admin routes.
router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)

router.include_router(routes.router)
router.include_router(admin.router)

__all__ = ["router"]
