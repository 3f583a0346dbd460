"""Fixtures for repository tests with a mocked sessionmaker."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_session():
    """Create mock async session."""
    return AsyncMock()


@pytest.fixture
def mock_sessionmaker(mock_session):
    """Sessionmaker whose sessions and begin() blocks yield mock_session."""
    ctx_manager = MagicMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=mock_session)
    # Must not suppress exceptions raised inside the block
    ctx_manager.__aexit__ = AsyncMock(return_value=False)

    sessionmaker = MagicMock()
    sessionmaker.return_value = ctx_manager
    sessionmaker.begin.return_value = ctx_manager
    return sessionmaker


@pytest.fixture
def mock_probe():
    """Probe accepting every repository event."""
    return MagicMock()
