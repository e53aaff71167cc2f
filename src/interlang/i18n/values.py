"""Locale-driven ordering and filtering of property values.

Displaying one resource usually runs the locale filter several times for the
same property (the JSON representation, the display values, the title...),
so the per-language partition of each ``(resource, property)`` pair is cached
in a [RequestContext][interlang.i18n.values.RequestContext].  The context is
owned by the caller, lives for one request, and is never shared between
requests or threads.

Two steps, always in this order:

1. [partition_by_language()][interlang.i18n.values.partition_by_language]
   groups the raw values by language, caches the groups, and returns the
   "all" reconstruction (accepted languages first);
2. [select_display_subset()][interlang.i18n.values.select_display_subset]
   applies the display policy to the cached partition.

[resolve_display_values()][interlang.i18n.values.resolve_display_values]
composes both steps for a [Site][interlang.models.site.Site].
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from interlang.models.constants import UNTAGGED, DisplayPolicy

from .chain import LocaleSet, build_locale_set


if TYPE_CHECKING:
    from collections.abc import Mapping

    from interlang.models.localized_value import LocalizedValue
    from interlang.models.site import Site


CacheKey = tuple[Hashable, str]


@dataclass(frozen=True, slots=True)
class LanguagePartition:
    """Values of one property grouped by language tag.

    Attributes:
        groups: Language tag -> values in that language, relative order kept.
            Tags appear in first-seen order.
        ordered: The "all" reconstruction returned by
            [partition_by_language()][interlang.i18n.values.partition_by_language].
        locales: The [LocaleSet][interlang.i18n.chain.LocaleSet] the
            partition was built for.
    """

    groups: Mapping[str, tuple[LocalizedValue, ...]]
    ordered: tuple[LocalizedValue, ...]
    locales: LocaleSet

    @property
    def is_multilingual(self) -> bool:
        """Whether at least one value carries a language tag."""
        return any(tag != UNTAGGED for tag in self.groups)

    def group(self, tag: str) -> tuple[LocalizedValue, ...]:
        """Return the values tagged *tag* (empty tuple when there are none)."""
        return self.groups.get(tag, ())


@dataclass(slots=True)
class RequestContext:
    """Request-scoped cache of language partitions.

    Create one per request (or per operation), pass it to every filter call
    made while handling that request, and drop it afterwards. It is not
    thread-safe.

    Examples:
        ```python
        context = RequestContext()
        values = resolve_display_values(context, 12, "dcterms:title", raw, site)
        again = resolve_display_values(context, 12, "dcterms:title", raw, site)  # cached
        ```
    """

    _partitions: dict[CacheKey, LanguagePartition] = field(
        default_factory=dict, init=False, repr=False
    )

    def get(self, resource_id: Hashable, term: str) -> LanguagePartition | None:
        """Return the cached partition for a resource property, if any."""
        return self._partitions.get((resource_id, term))

    def put(self, resource_id: Hashable, term: str, partition: LanguagePartition) -> None:
        """Cache *partition* for the rest of the request."""
        self._partitions[(resource_id, term)] = partition

    def clear(self) -> None:
        """Forget every cached partition."""
        self._partitions.clear()

    def __len__(self) -> int:
        return len(self._partitions)

    def __contains__(self, key: object) -> bool:
        return key in self._partitions


def _group_by_language(values: Iterable[LocalizedValue]) -> dict[str, tuple[LocalizedValue, ...]]:
    buckets: dict[str, list[LocalizedValue]] = {}
    for value in values:
        buckets.setdefault(value.lang, []).append(value)
    return {tag: tuple(bucket) for tag, bucket in buckets.items()}


def build_partition(values: Iterable[LocalizedValue], locales: LocaleSet) -> LanguagePartition:
    """Group *values* by language and compute the ordered reconstruction.

    Accepted languages come first, in [LocaleSet][interlang.i18n.chain.LocaleSet]
    order. Other languages follow in first-seen order, unless the set
    restricts display, in which case they are left out.
    """
    groups = _group_by_language(values)
    ordered: list[LocalizedValue] = []
    for tag in locales:
        ordered.extend(groups.get(tag, ()))
    if not locales.restricts:
        for tag, group in groups.items():
            if tag not in locales:
                ordered.extend(group)
    return LanguagePartition(
        groups=MappingProxyType(groups),
        ordered=tuple(ordered),
        locales=locales,
    )


def partition_by_language(
    context: RequestContext,
    resource_id: Hashable,
    term: str,
    raw_values: Iterable[LocalizedValue],
    locales: LocaleSet,
) -> tuple[LocalizedValue, ...]:
    """Return the values of a property ordered by accepted language.

    An empty *locales* means "no filtering": the raw values come back
    unchanged and nothing is cached. Otherwise the partition is computed on
    the first call for ``(resource_id, term)`` and served from *context* on
    later calls made with the same locale set.
    """
    if not locales:
        return tuple(raw_values)

    partition = context.get(resource_id, term)
    if partition is None or partition.locales != locales:
        partition = build_partition(raw_values, locales)
        context.put(resource_id, term, partition)
    return partition.ordered


def select_display_subset(
    partition: LanguagePartition,
    policy: DisplayPolicy | str | None,
    locales: LocaleSet | None = None,
) -> tuple[LocalizedValue, ...]:
    """Apply a display policy to a cached partition.

    *locales* defaults to the set the partition was built for.

    * ``all`` and ``all_*``: the ordered reconstruction.
    * Non-multilingual property (only untagged values): the reconstruction.
    * ``site``, ``site_iso``: every group whose tag is accepted.
    * ``site_fallback``: the first non-empty group of the primary chain, the
      required languages, and the untagged values.
    * Unrecognized policy: the reconstruction.
    """
    if not isinstance(policy, DisplayPolicy):
        policy, _ = DisplayPolicy.parse(policy)

    if not policy.restricts_display or not partition.is_multilingual:
        return partition.ordered

    if locales is None:
        locales = partition.locales
    if policy is DisplayPolicy.SITE_FALLBACK:
        selected: list[LocalizedValue] = []
        first_match = None
        for tag in locales.primary:
            group = partition.group(tag)
            if group:
                selected.extend(group)
                first_match = tag
                break
        for tag in locales.required:
            if tag != first_match:
                selected.extend(partition.group(tag))
        if locales.include_untagged:
            selected.extend(partition.group(UNTAGGED))
        return tuple(selected)

    return tuple(value for tag in locales for value in partition.group(tag))


def resolve_display_values(
    context: RequestContext,
    resource_id: Hashable,
    term: str,
    raw_values: Iterable[LocalizedValue],
    site: Site,
) -> tuple[LocalizedValue, ...]:
    """Return the values of a property to display on *site*.

    Builds the accepted-locale set from the site configuration, partitions
    the values (cached in *context*) and selects the displayed subset.
    Sites with the ``all`` policy, an unrecognized policy or no locale get
    their raw values back unchanged.
    """
    policy = site.policy
    locales = build_locale_set(
        policy, site.locale, site.fallback_locales, site.required_languages
    )
    ordered = partition_by_language(context, resource_id, term, raw_values, locales)
    if not locales:
        return ordered

    partition = context.get(resource_id, term)
    if partition is None:
        return ordered
    return select_display_subset(partition, policy)
