"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. The auth provider's
tables (organization, member, session) and the resource tables are created
here when missing, because their migrations live outside this project.
"""

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_write_engine
from infrastructure.settings import DatabaseSettings

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS organization (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        slug TEXT UNIQUE,
        created_at TIMESTAMPTZ DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS organization_limits (
        id VARCHAR(26) PRIMARY KEY,
        organization_id TEXT NOT NULL
            CONSTRAINT organization_limits_organization_id_organization_id_fk
            REFERENCES organization(id) ON DELETE CASCADE,
        max_vehicles INTEGER NOT NULL DEFAULT 100,
        max_fleets INTEGER NOT NULL DEFAULT 50,
        max_customers INTEGER NOT NULL DEFAULT 200,
        max_monthly_invoices INTEGER,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        CONSTRAINT organization_limits_organization_id_unique UNIQUE (organization_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS member (
        id TEXT PRIMARY KEY,
        organization_id TEXT NOT NULL,
        user_id TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'member'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS session (
        id TEXT PRIMARY KEY,
        token TEXT NOT NULL UNIQUE,
        user_id TEXT NOT NULL,
        active_organization_id TEXT,
        expires_at TIMESTAMPTZ NOT NULL
    )
    """,
    "CREATE TABLE IF NOT EXISTS vehicles (id TEXT PRIMARY KEY, organization_id TEXT)",
    "CREATE TABLE IF NOT EXISTS fleets (id TEXT PRIMARY KEY, organization_id TEXT)",
    "CREATE TABLE IF NOT EXISTS customers (id TEXT PRIMARY KEY, organization_id TEXT)",
)

_CLEANUP = (
    "DELETE FROM vehicles",
    "DELETE FROM fleets",
    "DELETE FROM customers",
    "DELETE FROM session",
    "DELETE FROM member",
    "DELETE FROM organization",
)


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        WORKSHOP_DB_HOST, WORKSHOP_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("WORKSHOP_DB_HOST", "localhost"),
        port=int(os.getenv("WORKSHOP_DB_PORT", "5432")),
        database=os.getenv("WORKSHOP_DB_DATABASE", "workshop"),
        username=os.getenv("WORKSHOP_DB_USERNAME", "workshop"),
        password=SecretStr(os.getenv("WORKSHOP_DB_PASSWORD", "workshop_dev_password")),
    )


@pytest_asyncio.fixture
async def sessionmaker(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a write sessionmaker against a clean schema.

    Tables are created if missing and emptied before and after each test.
    Deleting organizations cascades to organization_limits.
    """
    engine = create_write_engine(integration_db_settings)
    async with engine.begin() as conn:
        for ddl in _SCHEMA:
            await conn.execute(text(ddl))
        for stmt in _CLEANUP:
            await conn.execute(text(stmt))

    yield async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        for stmt in _CLEANUP:
            await conn.execute(text(stmt))
    await engine.dispose()


@pytest_asyncio.fixture
async def organization(sessionmaker: async_sessionmaker[AsyncSession]) -> str:
    """Insert a tenant and return its id."""
    async with sessionmaker.begin() as session:
        await session.execute(
            text("INSERT INTO organization (id, name) VALUES ('org-int-1', 'Garage')")
        )
    return "org-int-1"
