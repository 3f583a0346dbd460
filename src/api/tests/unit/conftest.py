"""Unit test fixtures with mocked dependencies."""

import pytest
from pydantic import SecretStr

from infrastructure.settings import DatabaseSettings


@pytest.fixture
def mock_db_settings() -> DatabaseSettings:
    """Provide test database settings."""
    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
    )
