"""
Unit tests for core.pool module.

Tests:
- Configuration models (DatabaseConfig, PoolSizeConfig, RetryConfig)
- Pool initialization and factory methods
- connect() retry and exhaustion
- Query methods and transient error retry
- Transactions and the context manager
"""

from unittest.mock import AsyncMock, MagicMock, patch

import asyncpg
import pytest
import yaml
from pydantic import ValidationError

from interlang.core.exceptions import ConnectionPoolError
from interlang.core.pool import (
    DatabaseConfig,
    Pool,
    PoolConfig,
    PoolSizeConfig,
    RetryConfig,
    _json_encode,
)


# ============================================================================
# Configuration
# ============================================================================


class TestDatabaseConfig:
    """DatabaseConfig Pydantic model."""

    def test_defaults(self):
        config = DatabaseConfig()
        assert config.host == "localhost"
        assert config.port == 5432
        assert config.database == "interlang"
        assert config.user == "interlang"
        assert config.password.get_secret_value() == "test_password"

    def test_password_from_custom_env(self, monkeypatch):
        monkeypatch.setenv("OTHER_PASSWORD", "other")
        config = DatabaseConfig(password_env="OTHER_PASSWORD")
        assert config.password.get_secret_value() == "other"

    def test_password_missing_raises(self, monkeypatch):
        monkeypatch.delenv("INTERLANG_DB_PASSWORD", raising=False)
        with pytest.raises(ValidationError, match="INTERLANG_DB_PASSWORD"):
            DatabaseConfig()

    def test_password_hidden(self):
        assert "test_password" not in repr(DatabaseConfig())

    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError):
            DatabaseConfig(port=port)


class TestPoolSizeConfig:
    def test_defaults(self):
        config = PoolSizeConfig()
        assert (config.min_size, config.max_size) == (1, 10)
        assert config.acquire_timeout == 10.0

    def test_max_gte_min(self):
        with pytest.raises(ValidationError, match="max_size"):
            PoolSizeConfig(min_size=5, max_size=2)


class TestRetryConfig:
    def test_defaults(self):
        assert RetryConfig().attempts == 3

    def test_backoff_doubles_up_to_max(self):
        retry = RetryConfig(delay=0.5, max_delay=1.5)
        assert [retry.backoff(i) for i in range(4)] == [0.5, 1.0, 1.5, 1.5]

    def test_zero_delay(self):
        assert RetryConfig(delay=0.0).backoff(3) == 0.0


class TestJsonEncode:
    def test_object(self):
        assert _json_encode({"a": [1, 2]}) == '{"a": [1, 2]}'

    def test_string_passes_through(self):
        assert _json_encode('"fr"') == '"fr"'


# ============================================================================
# Pool
# ============================================================================


class TestPoolInit:
    """Pool initialization and factories."""

    def test_defaults(self):
        pool = Pool()
        assert pool.is_connected is False
        assert pool.config.database.database == "interlang"
        assert pool.config.application_name == "interlang"

    def test_from_dict(self, pool_config_dict):
        pool = Pool.from_dict(pool_config_dict)
        assert pool.config.database.database == "test_db"
        assert pool.config.size.min_size == 2

    def test_from_yaml(self, pool_config_dict, tmp_path):
        path = tmp_path / "pool.yaml"
        path.write_text(yaml.safe_dump(pool_config_dict), encoding="utf-8")
        pool = Pool.from_yaml(str(path))
        assert pool.config.retry.attempts == 2
        assert pool.config.application_name == "test_app"

    def test_repr(self, mock_pool):
        assert repr(mock_pool) == "Pool(host=localhost, database=test_db, connected=True)"


class TestPoolConnect:
    """Pool.connect() method."""

    @pytest.mark.asyncio
    async def test_success(self):
        pool = Pool()
        with patch("asyncpg.create_pool", new_callable=AsyncMock, return_value=MagicMock()) as mock:
            await pool.connect()
        assert pool.is_connected is True
        kwargs = mock.call_args.kwargs
        assert kwargs["database"] == "interlang"
        assert kwargs["password"] == "test_password"
        assert kwargs["timeout"] == 10.0
        assert kwargs["server_settings"] == {"application_name": "interlang"}

    @pytest.mark.asyncio
    async def test_already_connected(self, mock_pool):
        with patch("asyncpg.create_pool", new_callable=AsyncMock) as mock:
            await mock_pool.connect()
            mock.assert_not_called()

    @pytest.mark.asyncio
    async def test_retry(self):
        pool = Pool(PoolConfig(retry=RetryConfig(attempts=3, delay=0.5)))
        call_count = 0

        async def mock_create(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ConnectionError("Fail")
            return MagicMock()

        with (
            patch("asyncpg.create_pool", side_effect=mock_create),
            patch("interlang.core.pool.asyncio.sleep", new_callable=AsyncMock) as sleep,
        ):
            await pool.connect()
        assert call_count == 3
        assert pool.is_connected is True
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_max_retries_exceeded(self):
        pool = Pool(PoolConfig(retry=RetryConfig(attempts=2)))

        with (
            patch(
                "asyncpg.create_pool", new_callable=AsyncMock, side_effect=OSError("refused")
            ),
            patch("interlang.core.pool.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(ConnectionPoolError, match="connect failed after 2 attempts"),
        ):
            await pool.connect()
        assert pool.is_connected is False

    @pytest.mark.asyncio
    async def test_single_attempt_does_not_sleep(self):
        pool = Pool(PoolConfig(retry=RetryConfig(attempts=1)))
        with (
            patch("asyncpg.create_pool", new_callable=AsyncMock, side_effect=OSError("x")),
            patch("interlang.core.pool.asyncio.sleep", new_callable=AsyncMock) as sleep,
            pytest.raises(ConnectionPoolError),
        ):
            await pool.connect()
        sleep.assert_not_awaited()


class TestPoolClose:
    """Pool.close() method."""

    @pytest.mark.asyncio
    async def test_close(self, mock_pool, mock_asyncpg_pool):
        await mock_pool.close()
        mock_asyncpg_pool.close.assert_awaited_once()
        assert mock_pool.is_connected is False

    @pytest.mark.asyncio
    async def test_close_not_connected(self):
        pool = Pool()
        await pool.close()
        assert pool.is_connected is False


class TestPoolAcquire:
    def test_not_connected_raises(self):
        with pytest.raises(RuntimeError, match="not connected"):
            Pool().acquire()

    @pytest.mark.asyncio
    async def test_connected(self, mock_pool, mock_connection):
        async with mock_pool.acquire() as conn:
            assert conn is mock_connection


class TestPoolQueries:
    """fetch / fetchrow / fetchval / execute."""

    @pytest.mark.asyncio
    async def test_fetch(self, mock_pool, mock_connection):
        mock_connection.fetch.return_value = [{"slug": "a"}]
        assert await mock_pool.fetch("SELECT slug FROM site") == [{"slug": "a"}]
        mock_connection.fetch.assert_awaited_once_with("SELECT slug FROM site", timeout=None)

    @pytest.mark.asyncio
    async def test_fetchrow(self, mock_pool, mock_connection):
        mock_connection.fetchrow.return_value = {"id": 1}
        assert await mock_pool.fetchrow("SELECT 1", timeout=2.0) == {"id": 1}

    @pytest.mark.asyncio
    async def test_fetchval(self, mock_pool, mock_connection):
        mock_connection.fetchval.return_value = 7
        assert await mock_pool.fetchval("SELECT $1", 7) == 7
        mock_connection.fetchval.assert_awaited_once_with("SELECT $1", 7, timeout=None, column=0)

    @pytest.mark.asyncio
    async def test_execute(self, mock_pool, mock_connection):
        mock_connection.execute.return_value = "DELETE 2"
        assert await mock_pool.execute("DELETE FROM setting") == "DELETE 2"

    @pytest.mark.asyncio
    async def test_transient_error_retried(self, mock_pool, mock_connection):
        mock_connection.fetch.side_effect = [asyncpg.InterfaceError("gone"), [{"slug": "a"}]]
        with patch("interlang.core.pool.asyncio.sleep", new_callable=AsyncMock):
            assert await mock_pool.fetch("SELECT slug FROM site") == [{"slug": "a"}]
        assert mock_connection.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_transient_error_exhausted(self, mock_pool, mock_connection):
        mock_connection.execute.side_effect = asyncpg.InterfaceError("gone")
        with (
            patch("interlang.core.pool.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(ConnectionPoolError, match="execute failed after 3 attempts"),
        ):
            await mock_pool.execute("DELETE FROM setting")

    @pytest.mark.asyncio
    async def test_query_error_not_retried(self, mock_pool, mock_connection):
        mock_connection.fetch.side_effect = asyncpg.PostgresError("syntax error")
        with pytest.raises(asyncpg.PostgresError):
            await mock_pool.fetch("SELEC 1")
        assert mock_connection.fetch.await_count == 1


class TestPoolTransaction:
    @pytest.mark.asyncio
    async def test_transaction(self, mock_pool, mock_connection):
        async with mock_pool.transaction() as conn:
            assert conn is mock_connection
        mock_connection.transaction.assert_called_once()


class TestPoolContextManager:
    @pytest.mark.asyncio
    async def test_connects_and_closes(self, mock_asyncpg_pool):
        pool = Pool()
        with patch(
            "asyncpg.create_pool", new_callable=AsyncMock, return_value=mock_asyncpg_pool
        ):
            async with pool:
                assert pool.is_connected is True
        assert pool.is_connected is False
        mock_asyncpg_pool.close.assert_awaited_once()
