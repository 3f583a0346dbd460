"""Administrative tenant limits endpoints."""

from tenancy.presentation.admin.routes import router

__all__ = ["router"]
