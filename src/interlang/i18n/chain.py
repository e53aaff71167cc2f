"""Accepted-locale set construction for a site's display policy.

[build_locale_set()][interlang.i18n.chain.build_locale_set] turns a display
policy and the site's language configuration into an ordered, duplicate-free
[LocaleSet][interlang.i18n.chain.LocaleSet]:

```text
primary  = base locale + policy expansion (none | ISO relatives | fallbacks)
required = required languages (iteration skips those already in primary)
untagged = ""   (always accepted: untagged content is never hidden)
```

An empty ``LocaleSet`` is the "skip filtering" signal. It is returned for
``all``, for any unrecognized policy, and for a restrictive policy without a
base locale (a configuration error that degrades to showing everything).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from interlang.models.constants import UNTAGGED, DisplayPolicy, LocaleSource

from .iso639 import expand_ordered


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleSet:
    """Ordered set of language tags accepted for display.

    Iteration yields ``primary`` tags, then the ``required`` tags not already
    yielded, then the untagged marker ``""`` when ``include_untagged`` is set.

    Attributes:
        primary: Base locale followed by its policy-specific expansion.
        required: Every required language, including those already in
            ``primary``.
        include_untagged: Whether untagged values are accepted.
        restricts: Whether values outside the set are hidden (``site*``
            policies) rather than only moved last (``all_*`` policies).
    """

    primary: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    include_untagged: bool = False
    restricts: bool = False

    def __iter__(self) -> Iterator[str]:
        yield from self.primary
        for tag in self.required:
            if tag not in self.primary:
                yield tag
        if self.include_untagged:
            yield UNTAGGED

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __contains__(self, tag: object) -> bool:
        if tag == UNTAGGED:
            return self.include_untagged
        return tag in self.primary or tag in self.required

    @property
    def tags(self) -> tuple[str, ...]:
        """All accepted tags in preference order."""
        return tuple(self)


EMPTY = LocaleSet()


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values:
        value = value.strip()
        if value:
            seen.setdefault(value, None)
    return tuple(seen)


def build_locale_set(
    policy: DisplayPolicy | str | None,
    base_locale: str,
    fallback_locales: Iterable[str] = (),
    required_languages: Iterable[str] = (),
) -> LocaleSet:
    """Build the accepted-locale set for a display policy.

    Args:
        policy: A [DisplayPolicy][interlang.models.constants.DisplayPolicy] or
            its raw string. Unrecognized values behave like ``all``.
        base_locale: The site locale; may be empty.
        fallback_locales: Explicit fallback chain, used by the ``*_fallback``
            policies only.
        required_languages: Languages always accepted.

    Returns:
        The ordered [LocaleSet][interlang.i18n.chain.LocaleSet], empty when no
        filtering or reordering applies.

    Examples:
        ```python
        build_locale_set("site_fallback", "en", ["fr"], ["de"]).tags
        # ('en', 'fr', 'de', '')
        build_locale_set("all", "en").tags
        # ()
        ```
    """
    if not isinstance(policy, DisplayPolicy):
        policy, _ = DisplayPolicy.parse(policy)

    source = policy.locale_source
    if source is None:
        return EMPTY

    base_locale = (base_locale or "").strip()
    if not base_locale:
        logger.warning("locale_set_without_base_locale policy=%s", policy.value)
        return EMPTY

    if source is LocaleSource.ISO:
        expansion: Iterable[str] = expand_ordered(base_locale)
    elif source is LocaleSource.FALLBACK:
        expansion = fallback_locales
    else:
        expansion = ()

    primary = _unique((base_locale, *expansion))
    required = _unique(required_languages)
    return LocaleSet(
        primary=primary,
        required=required,
        include_untagged=True,
        restricts=policy.restricts_display,
    )
