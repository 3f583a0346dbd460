"""Unit tests for the application entry point."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from fastapi.testclient import TestClient

from infrastructure.database.dependencies import get_read_engine
from main import app
from shared_kernel.middleware import TenantContext
from tenancy.application.services import UsageService
from tenancy.dependencies.limits import get_usage_service
from tenancy.dependencies.tenant_context import get_tenant_context
from tenancy.ports.exceptions import StorageError


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_db_reports_connection_failure(self, client):
        engine = MagicMock()
        engine.connect.side_effect = OSError("connection refused")
        app.dependency_overrides[get_read_engine] = lambda: engine

        response = client.get("/health/db")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["connected"] is False


class TestRoutes:
    def test_tenancy_routes_are_mounted(self):
        paths = {route.path for route in app.routes}

        assert "/tenancy/context" in paths
        assert "/tenancy/limits" in paths
        assert "/tenancy/usage" in paths
        assert "/tenancy/admin/tenants" in paths
        assert "/tenancy/admin/tenants/{tenant_id}/limits" in paths


class TestStorageErrorHandler:
    def test_storage_error_maps_to_503(self, client):
        usage_service = Mock(spec=UsageService)
        usage_service.get_usage = AsyncMock(
            side_effect=StorageError("count failed", operation="count_vehicles")
        )
        app.dependency_overrides[get_tenant_context] = lambda: TenantContext(
            tenant_id="org-1", user_id="user-1", source="already_set"
        )
        app.dependency_overrides[get_usage_service] = lambda: usage_service

        response = client.get("/tenancy/usage")

        assert response.status_code == 503
        assert response.json() == {"detail": "Storage temporarily unavailable"}
