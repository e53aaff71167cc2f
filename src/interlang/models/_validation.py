"""Shared validation helpers for frozen dataclass models.

Private module, not part of the public API. Used exclusively by
``__post_init__`` methods in sibling model modules to enforce runtime
type constraints, null-byte safety, and tuple normalization.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_id(value: Any, name: str) -> None:
    """Raise if *value* is not a positive ``int`` (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 1:
        raise ValueError(f"{name} must be positive")


def validate_str_no_null(value: Any, name: str) -> None:
    """Raise if *value* is not a ``str`` or contains null bytes."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    if "\x00" in value:
        raise ValueError(f"{name} contains null bytes")


def validate_str_not_empty(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty ``str`` without null bytes."""
    validate_str_no_null(value, name)
    if not value:
        raise ValueError(f"{name} must not be empty")


def unique_str_tuple(values: Iterable[Any] | None, name: str) -> tuple[str, ...]:
    """Normalize *values* to a tuple of distinct, stripped, non-empty strings.

    First occurrence wins, so the relative order of *values* is kept.
    A bare ``str`` is rejected: it would otherwise be split into characters.
    """
    if values is None:
        return ()
    if isinstance(values, str):
        raise TypeError(f"{name} must be a sequence of str, got str")
    seen: dict[str, None] = {}
    for item in values:
        validate_str_no_null(item, name)
        item = item.strip()
        if item:
            seen.setdefault(item, None)
    return tuple(seen)
