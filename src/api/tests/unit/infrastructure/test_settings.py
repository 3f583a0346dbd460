"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    QuotaSettings,
    Settings,
    TenancySettings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)


class TestDatabaseSettingsEnvironment:
    """Tests for WORKSHOP_DB_ environment variables."""

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("WORKSHOP_DB_HOST", "db.internal")
        monkeypatch.setenv("WORKSHOP_DB_PORT", "6543")
        monkeypatch.setenv("WORKSHOP_DB_PASSWORD", "s3cret")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543
        assert settings.password.get_secret_value() == "s3cret"

    def test_connection_string_omits_password(self, mock_db_settings):
        assert mock_db_settings.connection_string == (
            "postgresql://testuser@testhost:5432/testdb"
        )
        assert "testpass" not in mock_db_settings.connection_string


class TestQuotaSettings:
    """Tests for default limit configuration."""

    def test_defaults(self):
        settings = QuotaSettings()

        assert settings.default_max_vehicles == 100
        assert settings.default_max_fleets == 50
        assert settings.default_max_customers == 200
        assert settings.default_max_monthly_invoices is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("WORKSHOP_QUOTA_DEFAULT_MAX_FLEETS", "12")
        monkeypatch.setenv("WORKSHOP_QUOTA_DEFAULT_MAX_MONTHLY_INVOICES", "40")

        settings = QuotaSettings()

        assert settings.default_max_fleets == 12
        assert settings.default_max_monthly_invoices == 40

    @pytest.mark.parametrize(
        "field", ["default_max_vehicles", "default_max_fleets", "default_max_customers"]
    )
    def test_limits_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            QuotaSettings(**{field: 0})


class TestTenancySettings:
    def test_strict_mode_off_by_default(self):
        settings = TenancySettings()

        assert settings.revalidate_active_tenant is False
        assert settings.session_cookie_name == "workshop.session_token"

    def test_strict_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("WORKSHOP_TENANCY_REVALIDATE_ACTIVE_TENANT", "true")

        assert TenancySettings().revalidate_active_tenant is True

    def test_no_admins_by_default(self):
        assert TenancySettings().admin_user_ids == []

    def test_admins_from_environment(self, monkeypatch):
        monkeypatch.setenv("WORKSHOP_TENANCY_ADMIN_USER_IDS", '["admin-1", "admin-2"]')

        assert TenancySettings().admin_user_ids == ["admin-1", "admin-2"]


class TestSettings:
    def test_app_defaults(self):
        settings = Settings()

        assert settings.app_name == "Workshop API"
        assert settings.debug is False

    def test_sections_are_available(self):
        settings = Settings()

        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.quota, QuotaSettings)
        assert isinstance(settings.tenancy, TenancySettings)
