"""Pure graph helpers for page translation relations.

A translation group of pages is stored as a complete graph: every pair of
pages in the group is one canonical [PageRelation][interlang.models.page_relation.PageRelation]
edge ``(min, max)``. Saving a page with a selection of related pages
replaces the edges touching that page with the complete graph over the
page plus its selection.
"""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING, Any

from interlang.models.page_relation import PageRelation
from interlang.utils.parsing import parse_ids


if TYPE_CHECKING:
    from collections.abc import Iterable


def clean_selection(page_id: int, selected: Iterable[Any] | None) -> tuple[int, ...]:
    """Return the sorted, distinct, positive ids of *selected* without *page_id*.

    Examples:
        ```python
        clean_selection(4, ["7", 4, 2, 7, "x", 0])  # (2, 7)
        ```
    """
    ids = {value for value in parse_ids(selected) if value > 0 and value != page_id}
    return tuple(sorted(ids))


def complete_graph(page_id: int, selected: Iterable[int]) -> tuple[PageRelation, ...]:
    """Return one canonical edge per unordered pair over ``{page_id} ∪ selected``.

    An empty selection yields no edges.

    Examples:
        ```python
        complete_graph(1, [2, 3])
        # (PageRelation(1, 2), PageRelation(1, 3), PageRelation(2, 3))
        ```
    """
    ordered = sorted({page_id, *selected})
    return tuple(PageRelation(low, high) for low, high in combinations(ordered, 2))


def related_ids(page_id: int, relations: Iterable[PageRelation]) -> tuple[int, ...]:
    """Return the sorted ids of the pages connected to *page_id*."""
    return tuple(sorted({rel.other(page_id) for rel in relations if rel.touches(page_id)}))
