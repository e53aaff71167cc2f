"""Tolerant parsing of raw data into validated model instances.

Provides generic factory-based converters that iterate over database rows
or loosely typed editor input, call a factory for each element, and collect
only the successfully parsed results. Invalid entries are logged at WARNING
level and skipped, so one corrupt row never breaks a whole listing.

The module depends only on the standard library, keeping it safe to import
from any layer above ``models``.

Examples:
    ```python
    from interlang.models import PageRelation
    from interlang.utils.parsing import models_from_rows, parse_ids

    relations = models_from_rows(rows, lambda r: PageRelation(r["page_id"], r["related_page_id"]))
    parse_ids(["3", 4, "x", None])  # [3, 4]
    ```
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

logger = logging.getLogger(__name__)

_R = TypeVar("_R")
_M = TypeVar("_M")


def models_from_rows(
    rows: Sequence[_R],
    factory: Callable[[_R], _M],
) -> list[_M]:
    """Parse rows into model instances, skipping invalid entries.

    Calls ``factory(row)`` for each element.  Items that raise
    ``ValueError``, ``TypeError`` or ``KeyError`` are logged and discarded.
    """
    results: list[_M] = []
    for row in rows:
        try:
            results.append(factory(row))
        except (ValueError, TypeError, KeyError):
            logger.warning("parse_failed row=%s", row)
    return results


def parse_ids(values: Iterable[Any] | None) -> list[int]:
    """Coerce loosely typed identifiers (``"3"``, ``3``, ``3.0``) to ints.

    Values that cannot be read as an integer, booleans included, are
    dropped silently; order and duplicates are kept.
    """
    ids: list[int] = []
    for value in values or ():
        if isinstance(value, bool):
            continue
        try:
            number = int(str(value).strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError, OverflowError):
            continue
        ids.append(number)
    return ids
