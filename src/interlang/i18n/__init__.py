"""Pure i18n algorithms: locale expansion, value filtering, site groups and page graphs.

The i18n layer sits beside ``utils`` in the middle of the diamond DAG. It
performs no I/O: services load sites, values and relations through
[Store][interlang.core.store.Store] and hand them to these functions.

Attributes:
    iso639: ISO 639 code equivalences and locale expansion.
    chain: Accepted-locale set construction per display policy.
    values: Language partitioning and display filtering with a
        request-scoped cache.
    groups: Parsing and rendering of cross-site translation groups.
    relations: Complete-graph helpers for page relations.
"""

from .chain import EMPTY, LocaleSet, build_locale_set
from .groups import (
    format_groups,
    format_restore_value,
    resolve_for_display,
    resolve_for_storage,
    split_group_lines,
    tokenize_group_line,
    unique_groups,
)
from .iso639 import expand, expand_ordered, normalize_locale
from .relations import clean_selection, complete_graph, related_ids
from .values import (
    LanguagePartition,
    RequestContext,
    build_partition,
    partition_by_language,
    resolve_display_values,
    select_display_subset,
)


__all__ = [
    "EMPTY",
    "LanguagePartition",
    "LocaleSet",
    "RequestContext",
    "build_locale_set",
    "build_partition",
    "clean_selection",
    "complete_graph",
    "expand",
    "expand_ordered",
    "format_groups",
    "format_restore_value",
    "normalize_locale",
    "partition_by_language",
    "related_ids",
    "resolve_display_values",
    "resolve_for_display",
    "resolve_for_storage",
    "select_display_subset",
    "split_group_lines",
    "tokenize_group_line",
    "unique_groups",
]
