"""Unit test fixtures with mocked dependencies."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support.

    The session reports no open transaction, so repositories open their
    own with session.begin().
    """
    session = MagicMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.in_transaction = MagicMock(return_value=False)

    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    session.begin_nested = MagicMock(return_value=mock_transaction)
    return session
