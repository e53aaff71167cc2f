"""Language switcher entries.

For a site (and optionally a page being viewed), the switcher lists every
site of the same translation group in natural slug order. Each entry links
to the translation of the page on that site when one exists, otherwise to
the site itself.

Labels are either the language code of the target site or a flag-icon
country code. Languages whose usual flag is not their own code
(``en`` → ``gb``) are mapped through ``flag_overrides``; a region subtag
wins over both (``pt_BR`` → ``br``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pydantic import Field

from interlang.core.base_workflow import BaseWorkflow, BaseWorkflowConfig
from interlang.i18n.iso639 import language_subtag, normalize_locale
from interlang.i18n.relations import related_ids
from interlang.models import SwitcherDisplay

from .common.queries import fetch_pages, fetch_sites
from .common.types import SwitcherEntry
from .groups import SiteGroupsWorkflow


if TYPE_CHECKING:
    from interlang.core.store import Store


_DEFAULT_FLAGS: dict[str, str] = {
    "ar": "sa",
    "ca": "es-ct",
    "cs": "cz",
    "cy": "gb-wls",
    "da": "dk",
    "el": "gr",
    "en": "gb",
    "et": "ee",
    "eu": "es-pv",
    "fa": "ir",
    "ga": "ie",
    "gd": "gb-sct",
    "he": "il",
    "hi": "in",
    "hy": "am",
    "ja": "jp",
    "ka": "ge",
    "ko": "kr",
    "la": "va",
    "nb": "no",
    "nn": "no",
    "sl": "si",
    "sq": "al",
    "sr": "rs",
    "sv": "se",
    "uk": "ua",
    "ur": "pk",
    "vi": "vn",
    "zh": "cn",
}


class SwitcherConfig(BaseWorkflowConfig):
    """Language switcher configuration."""

    display: SwitcherDisplay = Field(
        default=SwitcherDisplay.CODE, description="Label entries with a language code or a flag"
    )
    flag_overrides: dict[str, str] = Field(
        default_factory=lambda: dict(_DEFAULT_FLAGS),
        description="Language subtag -> flag-icon country code",
    )


def flag_code(locale: str, overrides: dict[str, str] | None = None) -> str:
    """Return the flag-icon country code for *locale*.

    Examples:
        ```python
        flag_code("fr")     # 'fr'
        flag_code("en")     # 'gb'
        flag_code("en_US")  # 'us'
        ```
    """
    normalized = normalize_locale(locale)
    language, _, region = normalized.partition("_")
    if region:
        return region.lower()
    table = _DEFAULT_FLAGS if overrides is None else overrides
    return table.get(language, language)


class LanguageSwitcher(BaseWorkflow[SwitcherConfig]):
    """Build the language switcher of a site.

    Examples:
        ```python
        switcher = LanguageSwitcher(store, SwitcherConfig(display="flag"))
        for entry in await switcher.entries("blog-en", page_id=12):
            print(entry.site_slug, entry.label, entry.page_id, entry.is_current)
        # blog-en gb 12 True
        # blog-fr fr 31 False
        ```
    """

    WORKFLOW_NAME: ClassVar[str] = "switcher"
    CONFIG_CLASS: ClassVar[type[SwitcherConfig]] = SwitcherConfig

    def __init__(
        self,
        store: Store,
        config: SwitcherConfig | None = None,
        groups: SiteGroupsWorkflow | None = None,
    ) -> None:
        super().__init__(store, config)
        self._groups = groups or SiteGroupsWorkflow(store)

    def label(self, locale: str, slug: str) -> str:
        """Render the label of one entry; the slug stands in for a missing locale."""
        if not locale:
            return slug
        if self._config.display is SwitcherDisplay.FLAG:
            return flag_code(locale, self._config.flag_overrides)
        return language_subtag(locale)

    async def entries(self, site_slug: str, page_id: int | None = None) -> list[SwitcherEntry]:
        """Return one entry per site of the group of *site_slug*.

        Args:
            site_slug: The site being viewed.
            page_id: The page being viewed, if any. Its translations become
                the entries' targets.

        Raises:
            SiteNotFoundError: If no site has this slug.
        """
        group = await self._groups.group_of(site_slug)
        sites = await fetch_sites(self._store, group)

        targets: dict[str, int] = {}
        if page_id is not None:
            targets[site_slug] = page_id
            related = related_ids(page_id, await self._store.fetch_page_relations(page_id))
            for page in await fetch_pages(self._store, related):
                # lowest page id wins when a site holds several translations
                targets.setdefault(page.site_slug, page.id)

        entries = []
        for slug in group:
            site = sites.get(slug)
            locale = site.locale if site is not None else ""
            entries.append(
                SwitcherEntry(
                    site_slug=slug,
                    locale=locale,
                    label=self.label(locale, slug),
                    page_id=targets.get(slug),
                    is_current=slug == site_slug,
                )
            )
        self._logger.debug("switcher_built", site=site_slug, page_id=page_id, entries=len(entries))
        return entries
