"""Pure frozen dataclasses with zero I/O for sites, values and page relations.

The models layer is the foundation of the diamond DAG. It has **no dependencies**
on any other interlang package -- only the Python standard library. Every model
uses ``@dataclass(frozen=True, slots=True)`` for immutability and memory
efficiency, and validates in ``__post_init__`` so invalid instances never escape
the constructor.

Attributes:
    Site: Read-only site with its base locale, display policy, fallback chain
        and required languages.
    LocalizedValue: Opaque property value tagged with a language (``""`` for
        untagged values).
    PageRelation: Canonical undirected edge between two pages, always stored
        as ``(min, max)``.
    DisplayPolicy: Closed set of display policies with a fail-open parser.
    SettingKey: Names of the persisted settings.
    SwitcherDisplay: Language switcher label modes.

See Also:
    [interlang.i18n][]: Pure algorithms operating on these models.
    [interlang.core.store][]: Database facade reading and writing them.
"""

from .constants import UNTAGGED, DisplayPolicy, LocaleSource, SettingKey, SwitcherDisplay
from .localized_value import LocalizedValue
from .page_relation import PageRelation, PageRelationDbParams
from .site import Site, SiteDbParams


SiteGroups = dict[str, tuple[str, ...]]
"""Mapping of site slug to the sorted slugs of its translation group."""


__all__ = [
    "UNTAGGED",
    "DisplayPolicy",
    "LocaleSource",
    "LocalizedValue",
    "PageRelation",
    "PageRelationDbParams",
    "SettingKey",
    "Site",
    "SiteDbParams",
    "SiteGroups",
    "SwitcherDisplay",
]
