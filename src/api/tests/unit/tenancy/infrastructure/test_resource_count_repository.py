"""Unit tests for ResourceCountRepository."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from tenancy.domain.value_objects import ResourceType, TenantId
from tenancy.infrastructure.resource_count_repository import (
    RESOURCE_TABLES,
    ResourceCountRepository,
)
from tenancy.ports.exceptions import StorageError
from tenancy.ports.repositories import IResourceCountRepository


@pytest.fixture
def repository(mock_sessionmaker, mock_probe):
    return ResourceCountRepository(sessionmaker=mock_sessionmaker, probe=mock_probe)


def test_every_resource_type_has_a_table():
    assert set(RESOURCE_TABLES) == set(ResourceType)
    assert {t.name for t in RESOURCE_TABLES.values()} == {
        "vehicles",
        "fleets",
        "customers",
    }


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IResourceCountRepository)


class TestCount:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("resource_type", list(ResourceType))
    async def test_counts_tenant_rows_in_matching_table(
        self, repository, mock_session, resource_type
    ):
        result = MagicMock()
        result.scalar_one.return_value = 12
        mock_session.execute.return_value = result

        count = await repository.count(TenantId(value="org-1"), resource_type)

        assert count == 12
        stmt = mock_session.execute.call_args[0][0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert f"FROM {resource_type.value}" in sql
        assert f"{resource_type.value}.organization_id =" in sql

    @pytest.mark.asyncio
    async def test_each_count_opens_its_own_session(
        self, repository, mock_session, mock_sessionmaker
    ):
        result = MagicMock()
        result.scalar_one.return_value = 0
        mock_session.execute.return_value = result

        await repository.count(TenantId(value="org-1"), ResourceType.VEHICLES)
        await repository.count(TenantId(value="org-1"), ResourceType.FLEETS)

        assert mock_sessionmaker.call_count == 2

    @pytest.mark.asyncio
    async def test_wraps_driver_errors(self, repository, mock_session):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("x"))

        with pytest.raises(StorageError) as exc_info:
            await repository.count(TenantId(value="org-1"), ResourceType.FLEETS)

        assert exc_info.value.operation == "count_fleets"
        assert exc_info.value.tenant_id == "org-1"
