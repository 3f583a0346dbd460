"""Unit tests for the administrative Tenancy routes."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, HTTPException, status
from fastapi.testclient import TestClient

from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.application.services import (
    TenantDirectoryService,
    TenantLimitsService,
    UsageService,
)
from tenancy.domain.aggregates import LimitsUpdate, TenantLimits
from tenancy.domain.value_objects import TenantId, TenantSummary, UsageSnapshot
from tenancy.ports.exceptions import StorageError, UnknownTenantError


@pytest.fixture
def mock_limits_service() -> AsyncMock:
    return AsyncMock(spec=TenantLimitsService)


@pytest.fixture
def mock_usage_service() -> AsyncMock:
    return AsyncMock(spec=UsageService)


@pytest.fixture
def mock_directory_service() -> AsyncMock:
    return AsyncMock(spec=TenantDirectoryService)


def _build_app(
    mock_limits_service,
    mock_usage_service,
    mock_directory_service,
    auth_session=None,
    admin_user_ids=("admin-1",),
) -> FastAPI:
    """Build an app with mocked services and the real admin check.

    ``auth_session`` is what the session lookup yields; None means the
    request is unauthenticated.
    """
    from tenancy.dependencies.limits import (
        get_tenant_directory_service,
        get_tenant_limits_service,
        get_usage_service,
    )
    from tenancy.dependencies.session import get_authenticated_session
    from tenancy.presentation import router

    def authenticated_session():
        if auth_session is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        return auth_session

    app = FastAPI()
    app.dependency_overrides[get_tenant_limits_service] = lambda: mock_limits_service
    app.dependency_overrides[get_usage_service] = lambda: mock_usage_service
    app.dependency_overrides[get_tenant_directory_service] = (
        lambda: mock_directory_service
    )
    app.dependency_overrides[get_authenticated_session] = authenticated_session
    app.dependency_overrides[get_tenancy_settings] = lambda: TenancySettings(
        admin_user_ids=list(admin_user_ids)
    )
    app.include_router(router)
    return app


@pytest.fixture
def test_client(
    mock_limits_service, mock_usage_service, mock_directory_service, auth_session_factory
) -> TestClient:
    return TestClient(
        _build_app(
            mock_limits_service,
            mock_usage_service,
            mock_directory_service,
            auth_session=auth_session_factory(user_id="admin-1"),
        )
    )


class TestAuthorization:
    def test_requires_session(
        self, mock_limits_service, mock_usage_service, mock_directory_service
    ):
        client = TestClient(
            _build_app(mock_limits_service, mock_usage_service, mock_directory_service)
        )

        response = client.get("/tenancy/admin/tenants/org-1/limits")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        mock_limits_service.get_limits.assert_not_called()

    def test_tenant_member_cannot_raise_another_tenants_limits(
        self,
        mock_limits_service,
        mock_usage_service,
        mock_directory_service,
        auth_session_factory,
    ):
        client = TestClient(
            _build_app(
                mock_limits_service,
                mock_usage_service,
                mock_directory_service,
                auth_session=auth_session_factory(
                    user_id="user-a", active_tenant_id="org-a"
                ),
            )
        )

        response = client.put(
            "/tenancy/admin/tenants/org-b/limits", json={"max_vehicles": 999999}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_limits_service.set_limits.assert_not_called()

    def test_tenant_member_cannot_change_own_tenants_limits(
        self,
        mock_limits_service,
        mock_usage_service,
        mock_directory_service,
        auth_session_factory,
    ):
        client = TestClient(
            _build_app(
                mock_limits_service,
                mock_usage_service,
                mock_directory_service,
                auth_session=auth_session_factory(
                    user_id="user-a", active_tenant_id="org-a"
                ),
            )
        )

        response = client.put(
            "/tenancy/admin/tenants/org-a/limits", json={"max_vehicles": 999999}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_limits_service.set_limits.assert_not_called()

    @pytest.mark.parametrize(
        "path",
        [
            "/tenancy/admin/tenants",
            "/tenancy/admin/tenants/org-b/limits",
            "/tenancy/admin/tenants/org-b/usage",
        ],
    )
    def test_non_admin_cannot_read(
        self,
        mock_limits_service,
        mock_usage_service,
        mock_directory_service,
        auth_session_factory,
        path,
    ):
        client = TestClient(
            _build_app(
                mock_limits_service,
                mock_usage_service,
                mock_directory_service,
                auth_session=auth_session_factory(user_id="user-a"),
            )
        )

        response = client.get(path)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_usage_service.get_usage.assert_not_called()
        mock_directory_service.list_tenants.assert_not_called()

    def test_no_admins_configured_denies_everyone(
        self,
        mock_limits_service,
        mock_usage_service,
        mock_directory_service,
        auth_session_factory,
    ):
        client = TestClient(
            _build_app(
                mock_limits_service,
                mock_usage_service,
                mock_directory_service,
                auth_session=auth_session_factory(user_id="admin-1"),
                admin_user_ids=(),
            )
        )

        response = client.get("/tenancy/admin/tenants/org-1/limits")

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestListTenants:
    def test_lists_tenants(self, test_client, mock_directory_service):
        created = datetime(2026, 1, 5, tzinfo=UTC)
        mock_directory_service.list_tenants.return_value = [
            TenantSummary(
                id=TenantId(value="org-1"),
                name="Garage North",
                slug="garage-north",
                created_at=created,
            ),
            TenantSummary(id=TenantId(value="org-2"), name="Garage South"),
        ]

        response = test_client.get("/tenancy/admin/tenants")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [tenant["id"] for tenant in body] == ["org-1", "org-2"]
        assert body[0]["slug"] == "garage-north"
        assert body[1]["slug"] is None

    def test_empty_list(self, test_client, mock_directory_service):
        mock_directory_service.list_tenants.return_value = []

        response = test_client.get("/tenancy/admin/tenants")

        assert response.json() == []


class TestGetTenantLimits:
    def test_returns_limits(self, test_client, mock_limits_service):
        mock_limits_service.get_limits.return_value = TenantLimits.create(
            TenantId(value="org-7")
        )

        response = test_client.get("/tenancy/admin/tenants/org-7/limits")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["tenant_id"] == "org-7"

    def test_unknown_tenant_is_404(self, test_client, mock_limits_service):
        mock_limits_service.get_limits.side_effect = UnknownTenantError("ghost")

        response = test_client.get("/tenancy/admin/tenants/ghost/limits")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_blank_tenant_id_is_400(self, test_client):
        response = test_client.get("/tenancy/admin/tenants/%20/limits")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSetTenantLimits:
    def test_passes_only_supplied_fields(self, test_client, mock_limits_service):
        mock_limits_service.set_limits.return_value = TenantLimits.create(
            TenantId(value="org-1"), overrides=LimitsUpdate(max_fleets=10)
        )

        response = test_client.put(
            "/tenancy/admin/tenants/org-1/limits", json={"max_fleets": 10}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["max_fleets"] == 10
        tenant_id, update = mock_limits_service.set_limits.await_args.args
        assert tenant_id == TenantId(value="org-1")
        assert update == LimitsUpdate(max_fleets=10)

    def test_null_clears_monthly_invoices(self, test_client, mock_limits_service):
        mock_limits_service.set_limits.return_value = TenantLimits.create(
            TenantId(value="org-1")
        )

        test_client.put(
            "/tenancy/admin/tenants/org-1/limits", json={"max_monthly_invoices": None}
        )

        _, update = mock_limits_service.set_limits.await_args.args
        assert update.provided() == {"max_monthly_invoices": None}

    @pytest.mark.parametrize(
        "body",
        [
            {"max_vehicles": 0},
            {"max_fleets": -3},
            {"max_customers": "many"},
            {"max_widgets": 5},
            {"max_vehicles": None},
            {},
        ],
    )
    def test_invalid_input_is_422(self, test_client, mock_limits_service, body):
        response = test_client.put("/tenancy/admin/tenants/org-1/limits", json=body)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_limits_service.set_limits.assert_not_called()

    def test_unknown_tenant_is_404(self, test_client, mock_limits_service):
        mock_limits_service.set_limits.side_effect = UnknownTenantError("ghost")

        response = test_client.put(
            "/tenancy/admin/tenants/ghost/limits", json={"max_fleets": 2}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestGetTenantUsage:
    def test_returns_usage(self, test_client, mock_usage_service, mock_directory_service):
        mock_usage_service.get_usage.return_value = UsageSnapshot(vehicle_count=5)

        response = test_client.get("/tenancy/admin/tenants/org-1/usage")

        assert response.json() == {
            "vehicle_count": 5,
            "fleet_count": 0,
            "customer_count": 0,
        }
        mock_directory_service.ensure_exists.assert_awaited_once_with(
            TenantId(value="org-1")
        )

    def test_unknown_tenant_is_404(
        self, test_client, mock_usage_service, mock_directory_service
    ):
        mock_directory_service.ensure_exists.side_effect = UnknownTenantError("ghost")

        response = test_client.get("/tenancy/admin/tenants/ghost/usage")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        mock_usage_service.get_usage.assert_not_called()

    def test_storage_error_propagates_to_app_handler(
        self, test_client, mock_usage_service
    ):
        mock_usage_service.get_usage.side_effect = StorageError(
            "boom", operation="get_usage", tenant_id="org-1"
        )

        with pytest.raises(StorageError):
            test_client.get("/tenancy/admin/tenants/org-1/usage")
