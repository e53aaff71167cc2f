"""
Database facade for sites, settings and page relations.

[Store][interlang.core.store.Store] wraps a private
[Pool][interlang.core.pool.Pool] and exposes:

* a generic query facade (``fetch``, ``fetchrow``, ``fetchval``,
  ``execute``, ``transaction``) used by
  [interlang.services.common.queries][];
* the site directory (``list_site_slugs``);
* the settings rows, global (``setting``) and per site (``site_setting``),
  with JSONB values;
* the page relation rows of ``site_page_relation``, including the
  transactional replacement of every edge touching one page.

Permanent database errors (``asyncpg.PostgresError``) surface as
[QueryError][interlang.core.exceptions.QueryError]; exhausted connection
retries surface as
[ConnectionPoolError][interlang.core.exceptions.ConnectionPoolError].

Examples:
    ```python
    store = Store.from_yaml("config/interlang.yaml")

    async with store:
        slugs = await store.list_site_slugs()
        await store.set_setting("interlang_site_groups", {"fr": ["en", "fr"]})
    ```
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import asyncpg
from pydantic import BaseModel, Field, field_validator

from interlang.models.page_relation import PageRelation

from .exceptions import QueryError
from .logger import Logger
from .pool import Pool, PoolConfig
from .yaml import load_yaml


_MIN_TIMEOUT_SECONDS = 0.1


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator, Sequence
    from contextlib import AbstractAsyncContextManager


# ---------------------------------------------------------------------------
# Configuration Models
# ---------------------------------------------------------------------------


class BatchConfig(BaseModel):
    """Maximum number of rows written by one bulk statement."""

    max_size: int = Field(
        default=10_000, ge=1, le=100_000, description="Maximum rows per batch operation"
    )


class StoreTimeoutsConfig(BaseModel):
    """Timeout settings for Store operations (seconds, None = no limit)."""

    query: float | None = Field(default=30.0, description="Query timeout (seconds, None=infinite)")
    batch: float | None = Field(
        default=60.0, description="Batch write timeout (seconds, None=infinite)"
    )

    @field_validator("query", "batch", mode="after")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Validate timeout: None (infinite) or >= 0.1 seconds."""
        if v is not None and v < _MIN_TIMEOUT_SECONDS:
            raise ValueError(
                f"Timeout must be None (infinite) or >= {_MIN_TIMEOUT_SECONDS} seconds"
            )
        return v


class StoreConfig(BaseModel):
    """Aggregate configuration for the Store facade."""

    batch: BatchConfig = Field(default_factory=BatchConfig)
    timeouts: StoreTimeoutsConfig = Field(default_factory=StoreTimeoutsConfig)


# ---------------------------------------------------------------------------
# Store Class
# ---------------------------------------------------------------------------


class Store:
    """Async database facade shared by every workflow.

    Uses composition with a private ``Pool`` and implements the async
    context manager protocol for the pool lifecycle.
    """

    def __init__(
        self,
        pool: Pool | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            pool: Connection pool. A default Pool is created if omitted.
            config: Batch sizes and timeouts. Defaults if omitted.
        """
        self._pool = pool or Pool()
        self._config = config or StoreConfig()
        self._logger = Logger("store")

    @property
    def config(self) -> StoreConfig:
        """The Store configuration (read-only)."""
        return self._config

    @property
    def pool_config(self) -> PoolConfig:
        """Read-only access to the underlying pool configuration."""
        return self._pool.config

    @classmethod
    def from_yaml(cls, config_path: str) -> Store:
        """Create a Store from a YAML file with a ``pool`` key and Store settings."""
        return cls.from_dict(load_yaml(config_path))

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> Store:
        """Create a Store from a configuration dictionary.

        The ``pool`` key builds the Pool; remaining keys are
        [StoreConfig][interlang.core.store.StoreConfig] fields.
        """
        pool = None
        if "pool" in config_dict:
            pool = Pool.from_dict(config_dict["pool"])

        store_config_dict = {k: v for k, v in config_dict.items() if k != "pool"}
        config = StoreConfig(**store_config_dict) if store_config_dict else None

        return cls(pool=pool, config=config)

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def _errors(self, operation: str) -> AsyncIterator[None]:
        """Re-raise ``asyncpg.PostgresError`` as [QueryError][interlang.core.exceptions.QueryError]."""
        try:
            yield
        except asyncpg.PostgresError as e:
            self._logger.error("query_error", operation=operation, error=str(e))
            raise QueryError(f"{operation} failed: {e}") from e

    def _batches(self, rows: Sequence[Any]) -> Iterator[Sequence[Any]]:
        size = self._config.batch.max_size
        for start in range(0, len(rows), size):
            yield rows[start : start + size]

    # -------------------------------------------------------------------------
    # Generic Query Facade
    # -------------------------------------------------------------------------

    def _timeout(self, timeout: float | None) -> float | None:
        return timeout if timeout is not None else self._config.timeouts.query

    async def fetch(
        self,
        query: str,
        *args: Any,
        timeout: float | None = None,  # noqa: ASYNC109
    ) -> list[asyncpg.Record]:
        """Execute a query and return all rows."""
        async with self._errors("fetch"):
            return await self._pool.fetch(query, *args, timeout=self._timeout(timeout))

    async def fetchrow(
        self,
        query: str,
        *args: Any,
        timeout: float | None = None,  # noqa: ASYNC109
    ) -> asyncpg.Record | None:
        """Execute a query and return the first row."""
        async with self._errors("fetchrow"):
            return await self._pool.fetchrow(query, *args, timeout=self._timeout(timeout))

    async def fetchval(self, query: str, *args: Any, timeout: float | None = None) -> Any:  # noqa: ASYNC109
        """Execute a query and return the first column of the first row."""
        async with self._errors("fetchval"):
            return await self._pool.fetchval(query, *args, timeout=self._timeout(timeout))

    async def execute(self, query: str, *args: Any, timeout: float | None = None) -> str:  # noqa: ASYNC109
        """Execute a query and return the command status string."""
        async with self._errors("execute"):
            return await self._pool.execute(query, *args, timeout=self._timeout(timeout))

    def transaction(self) -> AbstractAsyncContextManager[asyncpg.Connection[asyncpg.Record]]:
        """Return a transaction context manager from the pool.

        Commits on normal exit and rolls back if an exception propagates.
        """
        return self._pool.transaction()

    # -------------------------------------------------------------------------
    # Sites
    # -------------------------------------------------------------------------

    async def list_site_slugs(self) -> list[str]:
        """Return the slugs of every site, ordered by slug."""
        rows = await self.fetch("SELECT slug FROM site ORDER BY slug ASC")
        return [row["slug"] for row in rows]

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    async def get_setting(self, key: str, site_id: int | None = None) -> Any:
        """Return a setting value, or None when it is not set.

        Args:
            key: Setting name.
            site_id: Site scope; None reads the global ``setting`` table.
        """
        if site_id is None:
            return await self.fetchval("SELECT value FROM setting WHERE id = $1", key)
        return await self.fetchval(
            "SELECT value FROM site_setting WHERE id = $1 AND site_id = $2", key, site_id
        )

    async def get_site_settings(self, site_id: int) -> dict[str, Any]:
        """Return every setting of one site as a ``{key: value}`` dict."""
        rows = await self.fetch("SELECT id, value FROM site_setting WHERE site_id = $1", site_id)
        return {row["id"]: row["value"] for row in rows}

    async def set_setting(self, key: str, value: Any, site_id: int | None = None) -> None:
        """Insert or overwrite a setting value (stored as JSONB).

        The value is serialized here: the connection codec passes strings
        through as JSON text.
        """
        encoded = json.dumps(value)
        if site_id is None:
            await self.execute(
                """
                INSERT INTO setting (id, value) VALUES ($1, $2::jsonb)
                ON CONFLICT (id) DO UPDATE SET value = EXCLUDED.value
                """,
                key,
                encoded,
            )
        else:
            await self.execute(
                """
                INSERT INTO site_setting (id, site_id, value) VALUES ($1, $2, $3::jsonb)
                ON CONFLICT (id, site_id) DO UPDATE SET value = EXCLUDED.value
                """,
                key,
                site_id,
                encoded,
            )
        self._logger.debug("setting_saved", key=key, site_id=site_id)

    async def delete_setting(self, key: str, site_id: int | None = None) -> bool:
        """Delete a setting. Returns whether a row was removed."""
        if site_id is None:
            status = await self.execute("DELETE FROM setting WHERE id = $1", key)
        else:
            status = await self.execute(
                "DELETE FROM site_setting WHERE id = $1 AND site_id = $2", key, site_id
            )
        return status.split()[-1] != "0"

    # -------------------------------------------------------------------------
    # Page Relations
    # -------------------------------------------------------------------------

    async def fetch_page_relations(self, page_id: int) -> list[PageRelation]:
        """Return the canonical edges touching *page_id*, ordered."""
        rows = await self.fetch(
            """
            SELECT page_id, related_page_id
            FROM site_page_relation
            WHERE page_id = $1 OR related_page_id = $1
            ORDER BY page_id, related_page_id
            """,
            page_id,
        )
        return [PageRelation(row["page_id"], row["related_page_id"]) for row in rows]

    async def replace_page_relations(
        self, page_id: int, relations: Sequence[PageRelation]
    ) -> tuple[int, int]:
        """Replace every edge touching *page_id* with *relations*, atomically.

        Existing edges touching the page are deleted, then *relations* are
        inserted with ``ON CONFLICT DO NOTHING`` so rows already present
        (for instance between two other pages of the group) stay untouched.
        Inserts are split into chunks of ``batch.max_size`` rows inside the
        same transaction. Any failure rolls the whole replacement back.

        Args:
            page_id: The page being saved.
            relations: Canonical edges to insert, typically the complete
                graph over the page and its selection.

        Returns:
            ``(removed, inserted)`` row counts.

        Raises:
            QueryError: On database errors (the transaction is rolled back).
        """
        params = [relation.to_db_params() for relation in relations]

        async with self._errors("replace_page_relations"), self._pool.transaction() as conn:
            removed: int = (
                await conn.fetchval(
                    """
                    WITH deleted AS (
                        DELETE FROM site_page_relation
                        WHERE page_id = $1 OR related_page_id = $1
                        RETURNING 1
                    )
                    SELECT count(*) FROM deleted
                    """,
                    page_id,
                    timeout=self._config.timeouts.batch,
                )
                or 0
            )
            inserted = 0
            for chunk in self._batches(params):
                inserted += (
                    await conn.fetchval(
                        """
                        WITH inserted AS (
                            INSERT INTO site_page_relation (page_id, related_page_id)
                            SELECT * FROM unnest($1::int[], $2::int[])
                            ON CONFLICT (page_id, related_page_id) DO NOTHING
                            RETURNING 1
                        )
                        SELECT count(*) FROM inserted
                        """,
                        [p.page_id for p in chunk],
                        [p.related_page_id for p in chunk],
                        timeout=self._config.timeouts.batch,
                    )
                    or 0
                )

        self._logger.debug(
            "page_relations_replaced", page_id=page_id, removed=removed, inserted=inserted
        )
        return removed, inserted

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> Store:
        await self._pool.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        await self._pool.close()

    def __repr__(self) -> str:
        db = self._pool.config.database
        return f"Store(host={db.host}, database={db.database}, connected={self._pool.is_connected})"
