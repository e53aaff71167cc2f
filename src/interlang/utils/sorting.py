"""Natural (numeric-aware) string ordering.

Site slugs are compared the way editors read them: digit runs compare by
value, everything else compares case-sensitively, so ``site2`` sorts before
``site10``.

Examples:
    ```python
    from interlang.utils.sorting import natural_sorted

    natural_sorted(["site10", "site2", "site1"])  # ['site1', 'site2', 'site10']
    ```
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable


_CHUNKS = re.compile(r"(\d+)")


def natural_key(value: str) -> tuple[tuple[int, int | str], ...]:
    """Return a sort key splitting *value* into text and number chunks.

    Each chunk is tagged so that numbers and text never compare directly:
    a number chunk sorts before a text chunk at the same position. Leading
    zeros do not change the numeric value, the raw text breaks the tie.
    """
    key: list[tuple[int, int | str]] = []
    for chunk in _CHUNKS.split(value):
        if not chunk:
            continue
        if chunk.isdecimal():
            key.append((0, int(chunk)))
            key.append((1, chunk))
        else:
            key.append((2, chunk))
    return tuple(key)


def natural_sorted(values: Iterable[str]) -> list[str]:
    """Return *values* sorted with [natural_key()][interlang.utils.sorting.natural_key]."""
    return sorted(values, key=natural_key)
