"""
Read-only view of a site and its locale configuration.

A [Site][interlang.models.site.Site] bundles everything the locale filter
needs to know about the viewing site: its base locale, its display policy
and the two language lists that widen the accepted set.  Sites are owned by
the host platform; this package never writes them back except to heal an
unrecognized display policy (see
[LocaleDisplay][interlang.services.display.LocaleDisplay]).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from ._validation import unique_str_tuple, validate_id, validate_str_no_null, validate_str_not_empty
from .constants import DisplayPolicy, SettingKey


logger = logging.getLogger(__name__)


class SiteDbParams(NamedTuple):
    """Positional column values of a ``site`` row."""

    id: int
    slug: str
    title: str


@dataclass(frozen=True, slots=True)
class Site:
    """Immutable site with its locale settings.

    Attributes:
        id: Stable database identifier.
        slug: Unique human-readable key, used in site groups.
        locale: Base locale tag (``"fr"``, ``"en_US"``); may be empty.
        display_policy: Raw persisted policy string. Use
            [policy][interlang.models.site.Site.policy] for the parsed value.
        fallback_locales: Ordered explicit fallback chain.
        required_languages: Languages whose values are always shown.
        title: Display title, informational only.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``id`` is not positive, ``slug`` is empty, or any
            string contains null bytes.

    Examples:
        ```python
        site = Site(id=1, slug="fr-site", locale="fr", display_policy="site_fallback",
                    fallback_locales=["en"], required_languages=["la"])
        site.policy            # DisplayPolicy.SITE_FALLBACK
        site.fallback_locales  # ('en',)
        ```
    """

    id: int
    slug: str
    locale: str = ""
    display_policy: str = DisplayPolicy.ALL.value
    fallback_locales: tuple[str, ...] = field(default=())
    required_languages: tuple[str, ...] = field(default=())
    title: str = ""

    def __post_init__(self) -> None:
        validate_id(self.id, "id")
        validate_str_not_empty(self.slug, "slug")
        validate_str_no_null(self.locale, "locale")
        validate_str_no_null(self.title, "title")
        if self.display_policy is None:
            object.__setattr__(self, "display_policy", "")
        validate_str_no_null(self.display_policy, "display_policy")

        object.__setattr__(self, "locale", self.locale.strip())
        object.__setattr__(
            self, "fallback_locales", unique_str_tuple(self.fallback_locales, "fallback_locales")
        )
        object.__setattr__(
            self,
            "required_languages",
            unique_str_tuple(self.required_languages, "required_languages"),
        )

    @property
    def policy(self) -> DisplayPolicy:
        """Parsed display policy (``ALL`` when unrecognized)."""
        return DisplayPolicy.parse(self.display_policy)[0]

    @property
    def has_valid_policy(self) -> bool:
        """Whether the raw display policy is a recognized value."""
        return DisplayPolicy.parse(self.display_policy)[1]

    def to_db_params(self) -> SiteDbParams:
        """Return the ``site`` row values for this site."""
        return SiteDbParams(id=self.id, slug=self.slug, title=self.title)

    @classmethod
    def from_row(cls, row: Any, settings: Any | None = None) -> Site:
        """Build a site from a ``site`` row and its per-site settings.

        Malformed setting values never raise: a non-string locale is read as
        empty and non-string list items are dropped, each with a WARNING.

        Args:
            row: Mapping with ``id``, ``slug`` and optionally ``title``.
            settings: Optional mapping of setting name to value, as returned by
                [Store.get_site_settings()][interlang.core.store.Store.get_site_settings].
        """
        settings = settings or {}
        slug = row["slug"]
        policy = settings.get(SettingKey.DISPLAY_POLICY)
        return cls(
            id=row["id"],
            slug=slug,
            title=row.get("title") or "",
            locale=_as_str(settings.get(SettingKey.LOCALE), SettingKey.LOCALE, slug),
            display_policy=str(policy or "").replace("\x00", ""),
            fallback_locales=_as_list(
                settings.get(SettingKey.FALLBACK_LOCALES), SettingKey.FALLBACK_LOCALES, slug
            ),
            required_languages=_as_list(
                settings.get(SettingKey.REQUIRED_LANGUAGES), SettingKey.REQUIRED_LANGUAGES, slug
            ),
        )


def _is_clean_str(value: Any) -> bool:
    return isinstance(value, str) and "\x00" not in value


def _as_str(value: Any, key: str, slug: str) -> str:
    """Read a string setting, treating anything else as unset."""
    if not value:
        return ""
    if not _is_clean_str(value):
        logger.warning("site_setting_malformed site=%s key=%s value=%r", slug, key, value)
        return ""
    return value


def _as_list(value: Any, key: str, slug: str) -> list[str]:
    """Coerce a persisted language list, accepting legacy space/comma strings."""
    if not value:
        return []
    if isinstance(value, str):
        return value.replace("\x00", "").replace(",", " ").split()
    if not isinstance(value, (list, tuple)):
        logger.warning("site_setting_malformed site=%s key=%s value=%r", slug, key, value)
        return []
    items = [item for item in value if _is_clean_str(item)]
    if len(items) != len(value):
        logger.warning(
            "site_setting_items_dropped site=%s key=%s dropped=%d",
            slug,
            key,
            len(value) - len(items),
        )
    return items
