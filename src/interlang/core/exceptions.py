"""Interlang exception hierarchy.

Typed exceptions let callers tell transient storage failures from
permanent ones and from missing records, while ``CancelledError`` and
programming errors propagate untouched.

Exception hierarchy:

```text
InterlangError (base -- never raised directly)
├── ConfigurationError       -- config validation, missing keys, bad YAML
├── DatabaseError            -- pool/store/query failures
│   ├── ConnectionPoolError  -- transient: pool exhausted, network blip
│   └── QueryError           -- permanent: bad SQL, constraint violation
└── NotFoundError            -- a referenced record does not exist
    ├── PageNotFoundError    -- unknown page id
    └── SiteNotFoundError    -- unknown site slug or id
```

Misconfigured display policies and malformed editor input never raise:
they are cleaned or degraded to showing everything.

See Also:
    [Pool][interlang.core.pool.Pool]: Raises
        [ConnectionPoolError][interlang.core.exceptions.ConnectionPoolError]
        on transient connection failures.
    [Store][interlang.core.store.Store]: Raises
        [QueryError][interlang.core.exceptions.QueryError] on permanent
        database errors.
"""

from __future__ import annotations


class InterlangError(Exception):
    """Base exception for all interlang errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(InterlangError):
    """Invalid or missing configuration (YAML, env vars).

    See Also:
        [load_yaml()][interlang.core.yaml.load_yaml]: YAML loading function
            that may trigger configuration errors.
    """


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


class DatabaseError(InterlangError):
    """Base for all database-related errors."""


class ConnectionPoolError(DatabaseError):
    """Transient database error: pool exhausted, connection refused, network blip.

    Callers may retry after a backoff.
    """


class QueryError(DatabaseError):
    """Permanent database error: bad SQL, constraint violation, data integrity.

    Callers should NOT retry -- the query itself is wrong. A transaction
    that raised it has been rolled back.
    """


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class NotFoundError(InterlangError):
    """A referenced record does not exist.

    Raised before any mutation, so nothing needs to be undone.
    """


class PageNotFoundError(NotFoundError):
    """The page a relation update refers to does not exist.

    Attributes:
        page_id: The missing page id.
    """

    def __init__(self, page_id: int) -> None:
        super().__init__(f"Page not found: {page_id}")
        self.page_id = page_id


class SiteNotFoundError(NotFoundError):
    """The site a lookup refers to does not exist.

    Attributes:
        site: The missing slug or id.
    """

    def __init__(self, site: str | int) -> None:
        super().__init__(f"Site not found: {site}")
        self.site = site
