"""Core layer: database access, configuration, logging, metrics and errors.

Sits in the middle of the diamond DAG -- depends only on
``interlang.models`` and is depended upon by ``interlang.services``.

Attributes:
    Pool: Async PostgreSQL connection pool with retry/backoff.
        See [Pool][interlang.core.pool.Pool].
    Store: Database facade for sites, settings and page relations.
        Workflows use [Store][interlang.core.store.Store], never
        [Pool][interlang.core.pool.Pool] directly.
    BaseWorkflow: Generic base class with a typed config, a structured
        logger, Prometheus counters and the
        [from_yaml()][interlang.core.base_workflow.BaseWorkflow.from_yaml] /
        [from_dict()][interlang.core.base_workflow.BaseWorkflow.from_dict]
        factories.
    Logger: Structured logger supporting key=value and JSON output modes.
    InterlangError: Root of the exception hierarchy.
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.

Examples:
    ```python
    from interlang.core import Pool, Store

    store = Store(pool=Pool.from_yaml("config/interlang.yaml"))
    async with store:
        slugs = await store.list_site_slugs()
    ```
"""

from .base_workflow import BaseWorkflow, BaseWorkflowConfig, ConfigT
from .exceptions import (
    ConfigurationError,
    ConnectionPoolError,
    DatabaseError,
    InterlangError,
    NotFoundError,
    PageNotFoundError,
    QueryError,
    SiteNotFoundError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs, setup_logging
from .metrics import WORKFLOW_COUNTER, MetricsConfig
from .pool import DatabaseConfig, Pool, PoolConfig, PoolSizeConfig, RetryConfig
from .store import BatchConfig, Store, StoreConfig, StoreTimeoutsConfig
from .yaml import load_yaml


__all__ = [
    "WORKFLOW_COUNTER",
    "BaseWorkflow",
    "BaseWorkflowConfig",
    "BatchConfig",
    "ConfigT",
    "ConfigurationError",
    "ConnectionPoolError",
    "DatabaseConfig",
    "DatabaseError",
    "InterlangError",
    "Logger",
    "MetricsConfig",
    "NotFoundError",
    "PageNotFoundError",
    "Pool",
    "PoolConfig",
    "PoolSizeConfig",
    "QueryError",
    "RetryConfig",
    "SiteNotFoundError",
    "Store",
    "StoreConfig",
    "StoreTimeoutsConfig",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
    "setup_logging",
]
