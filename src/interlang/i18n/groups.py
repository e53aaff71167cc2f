"""Translation groups of sites, parsed from free text.

Editors describe groups in a textarea, one group per line, slugs separated by
spaces or commas:

```text
site-fr site-en, site-de
site-es site-pt
```

Two representations of the same partition are used:

* **storage** ([resolve_for_storage()][interlang.i18n.groups.resolve_for_storage]):
  only groups with at least two known sites, keyed by every member;
* **display** ([resolve_for_display()][interlang.i18n.groups.resolve_for_display]):
  a stored mapping re-validated against the current site list, with a
  one-element group synthesized for every unclaimed site, so that every
  known site maps to exactly one group.

Both share the same normalization: unknown slugs are dropped silently,
a slug belongs to the first group mentioning it, members are sorted
naturally (``site2`` before ``site10``) and so are the mapping keys.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from interlang.utils.sorting import natural_key, natural_sorted


logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\r\n|\n\r|\r")
_SEPARATORS = re.compile(r"[\s,]+")


def split_group_lines(text: str | None) -> list[str]:
    """Normalize line endings and return the non-blank, stripped lines."""
    if not text:
        return []
    lines = _LINE_BREAKS.sub("\n", text).split("\n")
    return [line.strip() for line in lines if line.strip()]


def tokenize_group_line(line: str) -> list[str]:
    """Split one line on whitespace and commas, dropping empty and repeated tokens."""
    return list(dict.fromkeys(token for token in _SEPARATORS.split(line) if token))


def _claim(
    candidates: Iterable[str],
    available: dict[str, None],
    result: dict[str, tuple[str, ...]],
) -> tuple[str, ...] | None:
    """Assign the available *candidates* to one group if it has two members or more."""
    members = [slug for slug in dict.fromkeys(candidates) if slug in available]
    if len(members) <= 1:
        return None
    group = tuple(natural_sorted(members))
    for slug in group:
        result[slug] = group
        del available[slug]
    return group


def _sorted_by_key(mapping: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
    return {slug: mapping[slug] for slug in sorted(mapping, key=natural_key)}


def resolve_for_storage(text: str | None, known_slugs: Iterable[str]) -> dict[str, tuple[str, ...]]:
    """Parse free-text groups into the mapping persisted in the settings.

    Args:
        text: Textarea content, one group per line.
        known_slugs: Slugs of the sites that currently exist.

    Returns:
        Mapping of every grouped slug to its naturally sorted group. Sites that
        are alone on their line, unknown, or already claimed by an earlier line
        do not appear.

    Examples:
        ```python
        resolve_for_storage("site1 ghost site2\\nsite3", ["site1", "site2", "site3"])
        # {'site1': ('site1', 'site2'), 'site2': ('site1', 'site2')}
        ```
    """
    available = dict.fromkeys(known_slugs)
    result: dict[str, tuple[str, ...]] = {}
    for line in split_group_lines(text):
        _claim(tokenize_group_line(line), available, result)
    return _sorted_by_key(result)


def resolve_for_display(stored: Any, known_slugs: Iterable[str]) -> dict[str, tuple[str, ...]]:
    """Re-validate stored groups and complete them into a full partition.

    Keys are visited in natural order. A stored group is kept only when its
    key is still a known, unclaimed site and at least two of its members
    remain available; the first group claiming a slug wins. Every known
    site left over gets its own one-element group.

    Args:
        stored: The persisted mapping (anything else is treated as empty).
        known_slugs: Slugs of the sites that currently exist.

    Returns:
        Mapping of every known slug to its group, keys sorted naturally.
    """
    known = list(dict.fromkeys(known_slugs))
    available = dict.fromkeys(known)
    result: dict[str, tuple[str, ...]] = {}

    if isinstance(stored, Mapping):
        for key in sorted((k for k in stored if isinstance(k, str)), key=natural_key):
            if key not in available:
                continue
            members = stored[key]
            if isinstance(members, str) or not isinstance(members, Iterable):
                logger.warning("site_group_invalid key=%s", key)
                continue
            members = [m for m in members if isinstance(m, str)]
            if key not in members:
                continue
            _claim(members, available, result)
    elif stored:
        logger.warning("site_groups_invalid type=%s", type(stored).__name__)

    for slug in known:
        if slug in available:
            result[slug] = (slug,)
    return _sorted_by_key(result)


def unique_groups(mapping: Mapping[str, Iterable[str]]) -> list[tuple[str, ...]]:
    """Return the distinct groups of *mapping*, ordered by their first member."""
    groups = {tuple(group) for group in mapping.values()}
    return sorted((g for g in groups if g), key=lambda g: natural_key(g[0]))


def format_groups(mapping: Mapping[str, Iterable[str]], *, include_singletons: bool = False) -> str:
    """Render groups as textarea content: one group per line, slugs space-separated."""
    lines = [
        " ".join(group)
        for group in unique_groups(mapping)
        if include_singletons or len(group) > 1
    ]
    return "\n".join(lines)


def format_restore_value(known_slugs: Iterable[str]) -> str:
    """Render the "no groups" textarea content: every site alone on its line."""
    return "\n".join(natural_sorted(dict.fromkeys(known_slugs)))
