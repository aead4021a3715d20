"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

import os

import pytest
from pydantic import SecretStr

from infrastructure.settings import DatabaseSettings


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        HUDDLE_DB_HOST, HUDDLE_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("HUDDLE_DB_HOST", "localhost"),
        port=int(os.getenv("HUDDLE_DB_PORT", "5432")),
        database=os.getenv("HUDDLE_DB_DATABASE", "huddle"),
        username=os.getenv("HUDDLE_DB_USERNAME", "huddle"),
        password=SecretStr(os.getenv("HUDDLE_DB_PASSWORD", "huddle_dev_password")),
        pool_min_connections=2,
        pool_max_connections=10,
    )
