"""Database engine creation for async SQLAlchemy.

Two engines share one configuration: the write engine serves limits
bootstrap and updates plus active-tenant selection on sessions, the read
engine serves membership lookups and resource counts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_write_engine",
    "create_read_engine",
    "build_async_url",
]


def create_write_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create async engine for write operations.

    Args:
        settings: Database connection settings

    Returns:
        Configured async engine for write operations
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_max_connections,
        max_overflow=0,  # strict pool limit
        pool_pre_ping=True,
        echo=settings.echo_sql,
    )


def create_read_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create async engine for read-only operations.

    Transactions on this engine are opened READ ONLY, so an accidental
    write through it fails instead of silently succeeding. In production
    the host may point at a read replica.

    Args:
        settings: Database connection settings

    Returns:
        Configured async engine for read operations
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_max_connections,
        max_overflow=0,
        pool_pre_ping=True,
        echo=settings.echo_sql,
        execution_options={"postgresql_readonly": True},
    )


def build_async_url(settings: DatabaseSettings) -> str:
    """Build async database URL for asyncpg.

    Credentials are percent-encoded by SQLAlchemy's URL builder.

    Args:
        settings: Database connection settings

    Returns:
        postgresql+asyncpg URL including the password
    """
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)
