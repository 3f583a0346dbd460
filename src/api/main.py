"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_engine,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from tenancy.ports.exceptions import QuotaExceededError, StorageError
from tenancy.presentation import router as tenancy_router


@asynccontextmanager
async def workshop_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)

    probe = DefaultStartupProbe()
    probe.application_started(app_name=settings.app_name, version=__version__)

    yield

    await close_database_connections()
    probe.application_stopped(app_name=settings.app_name)


app = FastAPI(
    title="Workshop API",
    description="Multi-tenant workshop management: tenant context and quotas",
    version=__version__,
    lifespan=workshop_lifespan,
)

# Include Tenancy bounded context routes
app.include_router(tenancy_router)


@app.exception_handler(QuotaExceededError)
async def quota_exceeded_handler(
    request: Request, exc: QuotaExceededError
) -> JSONResponse:
    """Reject a create that would exceed the tenant's quota."""
    denied = exc.denied
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "code": "LIMIT_EXCEEDED",
            "message": denied.message,
            "resource_type": denied.resource_type.value,
            "current_usage": denied.current_usage,
            "limit": denied.limit,
        },
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Report storage failures without leaking driver details."""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage temporarily unavailable"},
    )


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    engine: Annotated[AsyncEngine, Depends(get_read_engine)],
) -> dict:
    """Check database connection health."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }

    return {"status": "ok", "connected": True}
