"""Database dependency injection for FastAPI.

Provides async sessionmakers for read and write operations with proper
connection pooling. Repositories receive a sessionmaker rather than a single
session so that every store call runs in its own short unit of work, and
independent reads (e.g. per-table usage counts) can run concurrently.
"""

from __future__ import annotations

import threading

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine, create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultConnectionProbe()

# Module-level engine instances (created on first use)
_write_engine: AsyncEngine | None = None
_read_engine: AsyncEngine | None = None

# Module-level sessionmaker instances (created with engines)
_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_read_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine for write operations
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _write_engine is None:
                settings = get_database_settings()
                _write_engine = create_write_engine(settings)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    role="write", host=settings.host, database=settings.database
                )
    return _write_engine


def get_read_engine() -> AsyncEngine:
    """Get the read database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine for read operations
    """
    global _read_engine, _read_sessionmaker
    if _read_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _read_engine is None:
                settings = get_database_settings()
                _read_engine = create_read_engine(settings)
                _read_sessionmaker = async_sessionmaker(
                    _read_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    role="read", host=settings.host, database=settings.database
                )
    return _read_engine


def get_write_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Provide the write sessionmaker (FastAPI dependency).

    Sessions created from it do NOT auto-commit. Callers open a unit of
    work with ``async with sessionmaker.begin() as session:`` which commits
    on exit and rolls back on error.

    Returns:
        Sessionmaker bound to the write engine
    """
    get_write_engine()
    assert _write_sessionmaker is not None
    return _write_sessionmaker


def get_read_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Provide the read sessionmaker (FastAPI dependency).

    The read engine is not enforced read-only at the database level
    (that requires database role permissions); application code should
    use it only for queries.

    Returns:
        Sessionmaker bound to the read engine
    """
    get_read_engine()
    assert _read_sessionmaker is not None
    return _read_sessionmaker


async def close_database_connections() -> None:
    """Close all database engine connections.

    Should be called on application shutdown to properly cleanup connections.
    Also resets sessionmakers to allow reinitialization.
    """
    global _write_engine, _read_engine, _write_sessionmaker, _read_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.pool_closed(role="write")
        _write_engine = None
        _write_sessionmaker = None

    if _read_engine is not None:
        await _read_engine.dispose()
        _probe.pool_closed(role="read")
        _read_engine = None
        _read_sessionmaker = None
