"""Shared building blocks for interlang workflows.

Attributes:
    queries: Read queries taking a [Store][interlang.core.store.Store].
    types: Frozen result types (page references, selector options,
        switcher entries).
"""

from .types import PageOptionGroup, PageRef, SwitcherEntry


__all__ = [
    "PageOptionGroup",
    "PageRef",
    "SwitcherEntry",
]
