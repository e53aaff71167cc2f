"""
Async PostgreSQL connection pool built on asyncpg.

Every pooled connection gets JSON/JSONB codecs, so setting values travel
as plain Python objects. Opening the pool and running a query share one
retry policy ([RetryConfig][interlang.core.pool.RetryConfig]): transient
connection failures are retried with a doubling delay, then surface as
[ConnectionPoolError][interlang.core.exceptions.ConnectionPoolError].
Query-level errors (``asyncpg.PostgresError``) propagate unchanged and are
wrapped by [Store][interlang.core.store.Store].

Examples:
    ```python
    pool = Pool.from_dict({"database": {"host": "db.internal"}})

    async with pool:
        rows = await pool.fetch("SELECT slug FROM site")

        async with pool.transaction() as conn:
            await conn.execute("DELETE FROM site_page_relation WHERE page_id = $1", 3)
    ```
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: TC003
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, TypeVar, cast

import asyncpg
from pydantic import BaseModel, Field, SecretStr, model_validator

from .exceptions import ConnectionPoolError
from .logger import Logger
from .yaml import load_yaml


_PASSWORD_ENV = "INTERLANG_DB_PASSWORD"  # pragma: allowlist secret

# Failures that a fresh connection may not hit again.
_CONNECT_ERRORS = (asyncpg.PostgresError, OSError, ConnectionError)
_QUERY_ERRORS = (asyncpg.InterfaceError, asyncpg.ConnectionDoesNotExistError)

T = TypeVar("T")


def _json_encode(value: Any) -> str:
    """Encode a JSON/JSONB parameter; strings are taken as pre-encoded JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


async def _init_connection(conn: asyncpg.Connection[asyncpg.Record]) -> None:
    for type_name in ("jsonb", "json"):
        await conn.set_type_codec(
            type_name,
            encoder=_json_encode,
            decoder=json.loads,
            schema="pg_catalog",
        )


# ---------------------------------------------------------------------------
# Configuration Models
# ---------------------------------------------------------------------------


class DatabaseConfig(BaseModel):
    """Where to connect and as whom.

    The password never comes from the configuration file: it is read from
    the environment variable named by ``password_env`` and kept as a
    ``SecretStr``.
    """

    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=5432, ge=1, le=65535)
    database: str = Field(default="interlang", min_length=1)
    user: str = Field(default="interlang", min_length=1)
    password_env: str = Field(default=_PASSWORD_ENV, min_length=1)
    password: SecretStr

    @model_validator(mode="before")
    @classmethod
    def resolve_password(cls, data: Any) -> Any:
        """Fill ``password`` from the environment when it is not given."""
        if isinstance(data, dict) and "password" not in data:
            env_var = data.get("password_env", _PASSWORD_ENV)
            value = os.getenv(env_var)
            if not value:
                raise ValueError(f"{env_var} environment variable not set")
            data = {**data, "password": SecretStr(value)}
        return data


class PoolSizeConfig(BaseModel):
    """Number of pooled connections and how long to wait for a free one."""

    min_size: int = Field(default=1, ge=1, le=100)
    max_size: int = Field(default=10, ge=1, le=200)
    acquire_timeout: float = Field(default=10.0, ge=0.1, description="Seconds")

    @model_validator(mode="after")
    def check_bounds(self) -> PoolSizeConfig:
        if self.max_size < self.min_size:
            raise ValueError(f"max_size ({self.max_size}) must be >= min_size ({self.min_size})")
        return self


class RetryConfig(BaseModel):
    """Attempts and delays for transient connection failures.

    The wait after attempt ``n`` (0-based) is ``delay * 2**n``, at most
    ``max_delay`` seconds.
    """

    attempts: int = Field(default=3, ge=1, le=10)
    delay: float = Field(default=0.5, ge=0.0)
    max_delay: float = Field(default=5.0, ge=0.0)

    def backoff(self, attempt: int) -> float:
        return float(min(self.delay * 2**attempt, self.max_delay))


class PoolConfig(BaseModel):
    """Aggregate configuration for the connection pool."""

    database: DatabaseConfig = Field(default_factory=lambda: DatabaseConfig.model_validate({}))
    size: PoolSizeConfig = Field(default_factory=PoolSizeConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    application_name: str = Field(default="interlang", min_length=1)


# ---------------------------------------------------------------------------
# Pool Class
# ---------------------------------------------------------------------------


class Pool:
    """Async PostgreSQL connection pool.

    Workflows never use it directly; they go through
    [Store][interlang.core.store.Store].
    """

    def __init__(self, config: PoolConfig | None = None) -> None:
        self._config = config or PoolConfig()
        self._pool: asyncpg.Pool[asyncpg.Record] | None = None
        self._is_connected: bool = False
        self._connection_lock = asyncio.Lock()
        self._logger = Logger("pool")

    @classmethod
    def from_yaml(cls, config_path: str) -> Pool:
        return cls.from_dict(load_yaml(config_path))

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> Pool:
        return cls(config=PoolConfig(**config_dict))

    async def _retrying(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        transient: tuple[type[BaseException], ...],
    ) -> T:
        """Await ``call()`` until it succeeds or the retry budget runs out.

        Raises:
            ConnectionPoolError: If every attempt failed with a *transient* error.
        """
        retry = self._config.retry
        attempt = 0
        while True:
            try:
                return await call()
            except transient as e:
                attempt += 1
                if attempt >= retry.attempts:
                    self._logger.error(
                        "pool_gave_up", operation=operation, attempts=attempt, error=str(e)
                    )
                    raise ConnectionPoolError(
                        f"{operation} failed after {attempt} attempts: {e}"
                    ) from e
                delay = retry.backoff(attempt - 1)
                self._logger.warning(
                    "pool_retry", operation=operation, attempt=attempt, delay=delay, error=str(e)
                )
                await asyncio.sleep(delay)

    # -------------------------------------------------------------------------
    # Connection Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        """Open the asyncpg pool. A no-op when already connected.

        Raises:
            ConnectionPoolError: If the database stays unreachable.
        """
        async with self._connection_lock:
            if self._is_connected:
                return

            db = self._config.database
            size = self._config.size
            self._logger.info("pool_connecting", host=db.host, port=db.port, database=db.database)

            async def create() -> asyncpg.Pool[asyncpg.Record]:
                return await asyncpg.create_pool(
                    host=db.host,
                    port=db.port,
                    database=db.database,
                    user=db.user,
                    password=db.password.get_secret_value(),
                    min_size=size.min_size,
                    max_size=size.max_size,
                    timeout=size.acquire_timeout,
                    init=_init_connection,
                    server_settings={"application_name": self._config.application_name},
                )

            self._pool = await self._retrying("connect", create, _CONNECT_ERRORS)
            self._is_connected = True
            self._logger.info("pool_connected")

    async def close(self) -> None:
        """Close the pool and release all connections. Idempotent."""
        async with self._connection_lock:
            if self._pool is not None:
                try:
                    await self._pool.close()
                    self._logger.info("pool_closed")
                finally:
                    self._pool = None
                    self._is_connected = False

    def acquire(self) -> AbstractAsyncContextManager[asyncpg.Connection[asyncpg.Record]]:
        """Borrow a connection for the duration of an ``async with`` block.

        Raises:
            RuntimeError: If the pool has not been connected yet.
        """
        if not self._is_connected or self._pool is None:
            raise RuntimeError("Pool not connected. Call connect() first.")
        return cast(
            "AbstractAsyncContextManager[asyncpg.Connection[asyncpg.Record]]",
            self._pool.acquire(),
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
        """Borrow a connection inside a transaction.

        Commits on normal exit and rolls back if an exception propagates.
        Transactions are not retried.
        """
        async with self.acquire() as conn, conn.transaction():
            yield conn

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    async def _run(self, method: str, query: str, args: tuple[Any, ...], **kwargs: Any) -> Any:
        async def call() -> Any:
            async with self.acquire() as conn:
                return await getattr(conn, method)(query, *args, **kwargs)

        return await self._retrying(method, call, _QUERY_ERRORS)

    async def fetch(
        self, query: str, *args: Any, timeout: float | None = None  # noqa: ASYNC109
    ) -> list[asyncpg.Record]:
        return cast("list[asyncpg.Record]", await self._run("fetch", query, args, timeout=timeout))

    async def fetchrow(
        self, query: str, *args: Any, timeout: float | None = None  # noqa: ASYNC109
    ) -> asyncpg.Record | None:
        return cast(
            "asyncpg.Record | None", await self._run("fetchrow", query, args, timeout=timeout)
        )

    async def fetchval(
        self,
        query: str,
        *args: Any,
        column: int = 0,
        timeout: float | None = None,  # noqa: ASYNC109
    ) -> Any:
        return await self._run("fetchval", query, args, timeout=timeout, column=column)

    async def execute(self, query: str, *args: Any, timeout: float | None = None) -> str:  # noqa: ASYNC109
        """Run a statement and return its status tag (``"DELETE 2"``)."""
        return cast("str", await self._run("execute", query, args, timeout=timeout))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    @property
    def config(self) -> PoolConfig:
        return self._config

    async def __aenter__(self) -> Pool:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        db = self._config.database
        return f"Pool(host={db.host}, database={db.database}, connected={self._is_connected})"
