"""Shared constants for the models layer.

Defines the enumerations used across model, i18n and service modules.
Placing them here avoids circular dependencies between the models layer
and the layers above it.

See Also:
    [interlang.i18n.chain][]: Uses [DisplayPolicy][interlang.models.constants.DisplayPolicy]
        to decide which locales are accepted for display.
    [interlang.services.settings][]: Persists values under
        [SettingKey][interlang.models.constants.SettingKey] names.
"""

from __future__ import annotations

from enum import StrEnum


class LocaleSource(StrEnum):
    """Where the locales accepted next to the site locale come from.

    Attributes:
        NONE: Only the site locale itself.
        ISO: The ISO 639 relatives of the site locale
            (see [expand()][interlang.i18n.iso639.expand]).
        FALLBACK: The explicit, admin-configured fallback chain.
    """

    NONE = "none"
    ISO = "iso"
    FALLBACK = "fallback"


class DisplayPolicy(StrEnum):
    """Site-level policy controlling which languages of a property are shown.

    ``all*`` policies never hide a value: ``ALL`` leaves the values untouched
    and the ``ALL_*`` variants only move the accepted languages first.
    ``SITE*`` policies hide every value whose language is not accepted.

    Attributes:
        ALL: No filtering, no reordering (default).
        ALL_SITE: Show all values, site locale first.
        ALL_ISO: Show all values, site locale and its ISO relatives first.
        ALL_FALLBACK: Show all values, site locale and fallbacks first.
        SITE: Only the site locale (plus required and untagged values).
        SITE_ISO: The site locale and its ISO 639 relatives.
        SITE_FALLBACK: The first available language of the fallback chain.

    Examples:
        ```python
        DisplayPolicy.parse("site_iso")  # (DisplayPolicy.SITE_ISO, True)
        DisplayPolicy.parse("bogus")     # (DisplayPolicy.ALL, False)
        ```
    """

    ALL = "all"
    ALL_SITE = "all_site"
    ALL_ISO = "all_iso"
    ALL_FALLBACK = "all_fallback"
    SITE = "site"
    SITE_ISO = "site_iso"
    SITE_FALLBACK = "site_fallback"

    @classmethod
    def parse(cls, raw: object) -> tuple[DisplayPolicy, bool]:
        """Parse a persisted policy value, failing open to ``ALL``.

        Returns:
            The policy and whether *raw* was a recognized value. Missing
            values (``None`` or ``""``) count as recognized: they are the
            unset default, not a misconfiguration.
        """
        if raw is None or raw == "":
            return cls.ALL, True
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower()), True
            except ValueError:
                pass
        return cls.ALL, False

    @property
    def restricts_display(self) -> bool:
        """Whether values in non-accepted languages are hidden."""
        return self in (DisplayPolicy.SITE, DisplayPolicy.SITE_ISO, DisplayPolicy.SITE_FALLBACK)

    @property
    def locale_source(self) -> LocaleSource | None:
        """Source of the accepted locales, or ``None`` for ``ALL``."""
        return _LOCALE_SOURCES.get(self)


_LOCALE_SOURCES: dict[DisplayPolicy, LocaleSource] = {
    DisplayPolicy.ALL_SITE: LocaleSource.NONE,
    DisplayPolicy.SITE: LocaleSource.NONE,
    DisplayPolicy.ALL_ISO: LocaleSource.ISO,
    DisplayPolicy.SITE_ISO: LocaleSource.ISO,
    DisplayPolicy.ALL_FALLBACK: LocaleSource.FALLBACK,
    DisplayPolicy.SITE_FALLBACK: LocaleSource.FALLBACK,
}


class SettingKey(StrEnum):
    """Names of the persisted settings read and written by the services.

    Attributes:
        LOCALE: Per-site base locale (e.g. ``"fr"`` or ``"en_US"``).
        DISPLAY_POLICY: Per-site [DisplayPolicy][interlang.models.constants.DisplayPolicy].
        FALLBACK_LOCALES: Per-site ordered list of fallback locales.
        REQUIRED_LANGUAGES: Per-site list of languages always shown.
        SITE_GROUPS: Global mapping of site slug to its translation group.
    """

    LOCALE = "locale"
    DISPLAY_POLICY = "interlang_display_policy"
    FALLBACK_LOCALES = "interlang_fallback_locales"
    REQUIRED_LANGUAGES = "interlang_required_languages"
    SITE_GROUPS = "interlang_site_groups"


class SwitcherDisplay(StrEnum):
    """How each entry of the language switcher is labelled.

    Attributes:
        CODE: The language subtag (``"fr"``).
        FLAG: A flag-icon country code (``"fr"``, ``"gb"`` for English).
    """

    CODE = "code"
    FLAG = "flag"


UNTAGGED = ""
"""Language tag of values carrying no language metadata."""
