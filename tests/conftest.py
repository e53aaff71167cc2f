"""
Pytest configuration and shared fixtures for interlang tests.

Provides:
- Mock fixtures for asyncpg, Pool and Store
- Configuration dictionaries for the factory methods
- Sample sites and localized values
"""

import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from interlang.core.pool import DatabaseConfig, Pool, PoolConfig
from interlang.core.store import Store
from interlang.models import LocalizedValue, Site


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


@pytest.fixture(autouse=True)
def db_password(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide the database password every default PoolConfig reads."""
    monkeypatch.setenv("INTERLANG_DB_PASSWORD", "test_password")


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_connection() -> MagicMock:
    """Create a mock asyncpg connection."""
    conn = MagicMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetchval = AsyncMock(return_value=0)
    conn.execute = AsyncMock(return_value="OK")
    conn.executemany = AsyncMock()

    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=conn)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    conn.transaction = MagicMock(return_value=mock_transaction)

    return conn


@pytest.fixture
def mock_asyncpg_pool(mock_connection: MagicMock) -> MagicMock:
    """Create a mock asyncpg pool."""
    pool = MagicMock()
    pool.close = AsyncMock()

    mock_acquire = MagicMock()
    mock_acquire.__aenter__ = AsyncMock(return_value=mock_connection)
    mock_acquire.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = MagicMock(return_value=mock_acquire)

    return pool


@pytest.fixture
def mock_pool(mock_asyncpg_pool: MagicMock, mock_connection: MagicMock) -> Pool:
    """Create a Pool with mocked internals."""
    config = PoolConfig(
        database=DatabaseConfig(
            host="localhost",
            port=5432,
            database="test_db",
            user="test_user",
        )
    )
    pool = Pool(config=config)
    pool._pool = mock_asyncpg_pool
    pool._is_connected = True

    # Store mock connection for easy access in tests
    pool._mock_connection = mock_connection  # type: ignore[attr-defined]

    return pool


@pytest.fixture
def mock_store(mock_pool: Pool) -> Store:
    """Create a Store instance with mocked pool."""
    return Store(pool=mock_pool)


@pytest.fixture
def stub_store() -> MagicMock:
    """Create a mock Store with every facade method stubbed.

    Workflow tests use it together with patched query functions so that no
    SQL is involved.
    """
    store = MagicMock(spec=Store)
    store.fetch = AsyncMock(return_value=[])
    store.fetchrow = AsyncMock(return_value=None)
    store.fetchval = AsyncMock(return_value=None)
    store.execute = AsyncMock(return_value="OK")
    store.list_site_slugs = AsyncMock(return_value=[])
    store.get_setting = AsyncMock(return_value=None)
    store.get_site_settings = AsyncMock(return_value={})
    store.set_setting = AsyncMock()
    store.delete_setting = AsyncMock(return_value=True)
    store.fetch_page_relations = AsyncMock(return_value=[])
    store.replace_page_relations = AsyncMock(return_value=(0, 0))
    return store


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def pool_config_dict() -> dict[str, Any]:
    """Sample pool configuration dictionary."""
    return {
        "database": {
            "host": "localhost",
            "port": 5432,
            "database": "test_db",
            "user": "test_user",
        },
        "size": {
            "min_size": 2,
            "max_size": 10,
            "acquire_timeout": 5.0,
        },
        "retry": {
            "attempts": 2,
            "delay": 0.5,
            "max_delay": 2.0,
        },
        "application_name": "test_app",
    }


@pytest.fixture
def store_config_dict(pool_config_dict: dict[str, Any]) -> dict[str, Any]:
    """Sample Store configuration dictionary."""
    return {
        "pool": pool_config_dict,
        "batch": {"max_size": 500},
        "timeouts": {"query": 15.0, "batch": 90.0},
    }


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def fallback_site() -> Site:
    """An English site preferring French, always showing German."""
    return Site(
        id=1,
        slug="site-en",
        locale="en",
        display_policy="site_fallback",
        fallback_locales=("fr",),
        required_languages=("de",),
    )


@pytest.fixture
def multilingual_values() -> list[LocalizedValue]:
    """One value per language, in the order they were recorded."""
    return [
        LocalizedValue("en", "A"),
        LocalizedValue("fr", "B"),
        LocalizedValue("de", "C"),
        LocalizedValue("es", "D"),
    ]
