"""In-memory fakes and fixtures for Tenancy unit tests.

The fakes implement the repository protocols with plain dictionaries and
yield to the event loop inside every call, so tests can interleave
concurrent requests the same way separate store round-trips would.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from infrastructure.database.models import utc_now
from tenancy.domain.aggregates import LimitsUpdate, TenantLimits
from tenancy.domain.value_objects import (
    AuthSession,
    AuthUser,
    ResourceType,
    SessionId,
    SessionRecord,
    TenantId,
    TenantSummary,
    UserId,
)
from tenancy.ports.exceptions import StorageError, TenantLimitsNotFoundError


class FakeMembershipRepository:
    """Memberships keyed by user id."""

    def __init__(self, memberships: dict[str, list[str]] | None = None):
        self.memberships = memberships or {}
        self.list_calls = 0
        self.is_member_calls = 0
        self.fail = False

    async def list_tenant_ids(self, user_id: UserId) -> list[TenantId]:
        self.list_calls += 1
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="list_memberships")
        return [TenantId(value=t) for t in self.memberships.get(user_id.value, [])]

    async def is_member(self, user_id: UserId, tenant_id: TenantId) -> bool:
        self.is_member_calls += 1
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="check_membership")
        return tenant_id.value in self.memberships.get(user_id.value, [])


class FakeSessionRepository:
    """Sessions keyed by token."""

    def __init__(self):
        self.sessions: dict[str, SessionRecord] = {}
        self.set_active_calls: list[tuple[str, str]] = []
        self.fail_writes = False

    def add(self, token: str, record: SessionRecord) -> None:
        self.sessions[token] = record

    async def get_by_token(self, token: str) -> SessionRecord | None:
        await asyncio.sleep(0)
        return self.sessions.get(token)

    async def set_active_tenant(
        self, session_id: SessionId, tenant_id: TenantId
    ) -> bool:
        await asyncio.sleep(0)
        if self.fail_writes:
            raise StorageError("boom", operation="set_active_tenant")
        self.set_active_calls.append((session_id.value, tenant_id.value))
        for token, record in self.sessions.items():
            if record.id == session_id:
                self.sessions[token] = replace(record, active_tenant_id=tenant_id)
                return True
        return False


class FakeTenantLimitsRepository:
    """Limits keyed by tenant id, honoring the one-row-per-tenant constraint."""

    def __init__(self):
        self.rows: dict[str, TenantLimits] = {}
        self.inserted = 0
        self.fail = False

    async def get_by_tenant(self, tenant_id: TenantId) -> TenantLimits | None:
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="get_limits")
        return self.rows.get(tenant_id.value)

    async def create_if_absent(self, limits: TenantLimits) -> TenantLimits:
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="create_limits")
        existing = self.rows.get(limits.tenant_id.value)
        if existing is not None:
            return existing
        now = utc_now()
        stored = replace(limits, created_at=now, updated_at=now)
        self.rows[limits.tenant_id.value] = stored
        self.inserted += 1
        return stored

    async def update(
        self, tenant_id: TenantId, limits_update: LimitsUpdate
    ) -> TenantLimits:
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="update_limits")
        existing = self.rows.get(tenant_id.value)
        if existing is None:
            raise TenantLimitsNotFoundError(tenant_id.value)
        updated = replace(
            existing, **limits_update.provided(), updated_at=utc_now()
        )
        self.rows[tenant_id.value] = updated
        return updated


class FakeResourceCountRepository:
    """Row counts keyed by (tenant id, resource type)."""

    def __init__(self):
        self.counts: dict[tuple[str, ResourceType], int] = {}
        self.failing: set[ResourceType] = set()

    def set(self, tenant_id: str, resource_type: ResourceType, count: int) -> None:
        self.counts[(tenant_id, resource_type)] = count

    async def count(self, tenant_id: TenantId, resource_type: ResourceType) -> int:
        await asyncio.sleep(0)
        if resource_type in self.failing:
            raise StorageError(
                "boom",
                operation=f"count_{resource_type.value}",
                tenant_id=tenant_id.value,
            )
        return self.counts.get((tenant_id.value, resource_type), 0)


class FakeTenantDirectoryRepository:
    """Tenants keyed by id."""

    def __init__(self):
        self.tenants: dict[str, TenantSummary] = {}
        self.fail = False

    def add(self, tenant_id: str, name: str) -> None:
        self.tenants[tenant_id] = TenantSummary(id=TenantId(value=tenant_id), name=name)

    async def list_tenants(self) -> list[TenantSummary]:
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="list_tenants")
        return sorted(self.tenants.values(), key=lambda t: (t.name, t.id.value))

    async def exists(self, tenant_id: TenantId) -> bool:
        await asyncio.sleep(0)
        if self.fail:
            raise StorageError("boom", operation="check_tenant")
        return tenant_id.value in self.tenants

def make_auth_session(
    user_id: str = "user-1",
    session_id: str = "session-1",
    active_tenant_id: str | None = None,
) -> AuthSession:
    """Build an authenticated AuthSession for tests."""
    record = SessionRecord(
        id=SessionId(value=session_id),
        user_id=UserId(value=user_id),
        active_tenant_id=TenantId(value=active_tenant_id) if active_tenant_id else None,
    )
    return AuthSession(session=record, user=AuthUser(id=record.user_id))


@pytest.fixture
def membership_repository() -> FakeMembershipRepository:
    return FakeMembershipRepository()


@pytest.fixture
def session_repository() -> FakeSessionRepository:
    return FakeSessionRepository()


@pytest.fixture
def limits_repository() -> FakeTenantLimitsRepository:
    return FakeTenantLimitsRepository()


@pytest.fixture
def count_repository() -> FakeResourceCountRepository:
    return FakeResourceCountRepository()


@pytest.fixture
def directory_repository() -> FakeTenantDirectoryRepository:
    return FakeTenantDirectoryRepository()

@pytest.fixture
def tenant_id() -> TenantId:
    return TenantId(value="org-1")


@pytest.fixture
def auth_session_factory():
    """Factory building authenticated sessions; see make_auth_session."""
    return make_auth_session
