"""
Unit tests for services.switcher module.

Tests:
- flag_code(): region subtags, overrides, fallback to the language
- LanguageSwitcher.label() in code and flag modes
- LanguageSwitcher.entries() with and without a current page
"""

from unittest.mock import AsyncMock, patch

import pytest

from interlang.core.exceptions import SiteNotFoundError
from interlang.models import PageRelation, Site, SwitcherDisplay
from interlang.services.common.types import PageRef, SwitcherEntry
from interlang.services.switcher import LanguageSwitcher, SwitcherConfig, flag_code


MODULE = "interlang.services.switcher"

GROUPS = {
    slug: ["site-de", "site-en", "site-fr"] for slug in ("site-de", "site-en", "site-fr")
}
SITES = {
    "site-de": Site(id=1, slug="site-de", locale="de"),
    "site-en": Site(id=2, slug="site-en", locale="en_US"),
    "site-fr": Site(id=3, slug="site-fr", locale="fr"),
}


@pytest.fixture
def grouped_store(stub_store):
    stub_store.list_site_slugs.return_value = ["site-en", "site-fr", "site-de", "site-it"]
    stub_store.get_setting.return_value = GROUPS
    return stub_store


class TestFlagCode:
    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("fr", "fr"),
            ("en", "gb"),
            ("ja", "jp"),
            ("en_US", "us"),
            ("pt-BR", "br"),
            ("EN", "gb"),
        ],
    )
    def test_default_table(self, locale, expected):
        assert flag_code(locale) == expected

    def test_overrides_replace_table(self):
        assert flag_code("en", {"en": "us"}) == "us"
        assert flag_code("ja", {}) == "ja"


class TestLabel:
    def test_code_mode(self, stub_store):
        switcher = LanguageSwitcher(stub_store)
        assert switcher.label("en_US", "site-en") == "en"

    def test_flag_mode(self, stub_store):
        switcher = LanguageSwitcher(stub_store, SwitcherConfig(display=SwitcherDisplay.FLAG))
        assert switcher.label("en", "site-en") == "gb"

    def test_flag_mode_from_string_config(self, stub_store):
        config = SwitcherConfig.model_validate({"display": "flag", "flag_overrides": {"en": "us"}})
        assert LanguageSwitcher(stub_store, config).label("en", "site-en") == "us"

    def test_missing_locale_uses_slug(self, stub_store):
        assert LanguageSwitcher(stub_store).label("", "site-xx") == "site-xx"


class TestEntries:
    """entries()."""

    @pytest.mark.asyncio
    async def test_site_only(self, grouped_store):
        with patch(f"{MODULE}.fetch_sites", new_callable=AsyncMock, return_value=SITES):
            entries = await LanguageSwitcher(grouped_store).entries("site-fr")

        assert entries == [
            SwitcherEntry("site-de", "de", "de", None, False),
            SwitcherEntry("site-en", "en_US", "en", None, False),
            SwitcherEntry("site-fr", "fr", "fr", None, True),
        ]

    @pytest.mark.asyncio
    async def test_page_translations(self, grouped_store):
        grouped_store.fetch_page_relations.return_value = [
            PageRelation(10, 20),
            PageRelation(10, 30),
            PageRelation(10, 31),
        ]
        pages = [
            PageRef(id=20, site_id=2, site_slug="site-en"),
            PageRef(id=30, site_id=3, site_slug="site-fr"),
            PageRef(id=31, site_id=3, site_slug="site-fr"),
        ]
        with (
            patch(f"{MODULE}.fetch_sites", new_callable=AsyncMock, return_value=SITES),
            patch(f"{MODULE}.fetch_pages", new_callable=AsyncMock, return_value=pages) as pages_mock,
        ):
            entries = await LanguageSwitcher(grouped_store).entries("site-de", page_id=10)

        pages_mock.assert_awaited_once_with(grouped_store, (20, 30, 31))
        assert [(e.site_slug, e.page_id, e.is_current) for e in entries] == [
            ("site-de", 10, True),
            ("site-en", 20, False),
            ("site-fr", 30, False),
        ]

    @pytest.mark.asyncio
    async def test_ungrouped_site(self, grouped_store):
        with patch(f"{MODULE}.fetch_sites", new_callable=AsyncMock, return_value={}):
            entries = await LanguageSwitcher(grouped_store).entries("site-it")
        assert entries == [SwitcherEntry("site-it", "", "site-it", None, True)]

    @pytest.mark.asyncio
    async def test_flag_labels(self, grouped_store):
        switcher = LanguageSwitcher(grouped_store, SwitcherConfig(display="flag"))
        with patch(f"{MODULE}.fetch_sites", new_callable=AsyncMock, return_value=SITES):
            entries = await switcher.entries("site-en")
        assert [e.label for e in entries] == ["de", "us", "fr"]

    @pytest.mark.asyncio
    async def test_unknown_site(self, grouped_store):
        with pytest.raises(SiteNotFoundError):
            await LanguageSwitcher(grouped_store).entries("ghost")
