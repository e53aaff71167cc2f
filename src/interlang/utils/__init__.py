"""Small helpers shared by the i18n and services layers.

The utils layer sits in the middle of the diamond DAG and depends only on
the standard library.

Attributes:
    sorting: Natural (numeric-aware) ordering of site slugs.
    parsing: Tolerant conversion of database rows and editor input into
        validated models and identifiers.

Note:
    The utils layer has **zero** imports from ``interlang.core`` or
    ``interlang.services``.
"""

from .parsing import models_from_rows, parse_ids
from .sorting import natural_key, natural_sorted


__all__ = [
    "models_from_rows",
    "natural_key",
    "natural_sorted",
    "parse_ids",
]
