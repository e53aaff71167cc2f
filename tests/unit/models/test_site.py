"""
Unit tests for models.site module.

Tests:
- Construction and normalization of locale lists
- Validation errors
- Display policy parsing
- from_row() with settings, legacy string lists and missing values
"""

import logging

import pytest

from interlang.models import DisplayPolicy, Site, SiteDbParams


class TestSiteConstruction:
    """Site construction and normalization."""

    def test_defaults(self):
        site = Site(id=1, slug="site-en")
        assert site.locale == ""
        assert site.display_policy == "all"
        assert site.fallback_locales == ()
        assert site.required_languages == ()
        assert site.title == ""

    def test_lists_become_unique_tuples(self):
        site = Site(
            id=1,
            slug="s",
            fallback_locales=["fr", " fr", "de", ""],
            required_languages=["la", "la"],
        )
        assert site.fallback_locales == ("fr", "de")
        assert site.required_languages == ("la",)

    def test_locale_is_stripped(self):
        assert Site(id=1, slug="s", locale=" fr ").locale == "fr"

    def test_none_policy_becomes_empty(self):
        site = Site(id=1, slug="s", display_policy=None)
        assert site.display_policy == ""
        assert site.policy is DisplayPolicy.ALL
        assert site.has_valid_policy is True

    def test_frozen(self):
        site = Site(id=1, slug="s")
        with pytest.raises(AttributeError):
            site.slug = "other"  # type: ignore[misc]


class TestSiteValidation:
    """Invalid field values."""

    def test_non_positive_id(self):
        with pytest.raises(ValueError, match="id must be positive"):
            Site(id=0, slug="s")

    def test_bool_id(self):
        with pytest.raises(TypeError):
            Site(id=True, slug="s")

    def test_empty_slug(self):
        with pytest.raises(ValueError, match="slug must not be empty"):
            Site(id=1, slug="")

    def test_null_byte_in_locale(self):
        with pytest.raises(ValueError, match="null bytes"):
            Site(id=1, slug="s", locale="f\x00r")

    def test_bare_string_list_rejected(self):
        with pytest.raises(TypeError):
            Site(id=1, slug="s", fallback_locales="fr")  # type: ignore[arg-type]


class TestSitePolicy:
    """policy and has_valid_policy."""

    def test_recognized(self):
        site = Site(id=1, slug="s", display_policy="site_iso")
        assert site.policy is DisplayPolicy.SITE_ISO
        assert site.has_valid_policy is True

    def test_unrecognized(self):
        site = Site(id=1, slug="s", display_policy="sight")
        assert site.policy is DisplayPolicy.ALL
        assert site.has_valid_policy is False


class TestSiteFromRow:
    """Site.from_row()."""

    def test_with_settings(self):
        row = {"id": 3, "slug": "site-fr", "title": "Français"}
        settings = {
            "locale": "fr",
            "interlang_display_policy": "site_fallback",
            "interlang_fallback_locales": ["en", "de"],
            "interlang_required_languages": ["la"],
            "unrelated": True,
        }
        site = Site.from_row(row, settings)
        assert site.id == 3
        assert site.title == "Français"
        assert site.locale == "fr"
        assert site.policy is DisplayPolicy.SITE_FALLBACK
        assert site.fallback_locales == ("en", "de")
        assert site.required_languages == ("la",)

    def test_without_settings(self):
        site = Site.from_row({"id": 1, "slug": "s"})
        assert site.locale == ""
        assert site.title == ""
        assert site.policy is DisplayPolicy.ALL

    def test_legacy_string_lists(self):
        site = Site.from_row(
            {"id": 1, "slug": "s"},
            {"interlang_fallback_locales": "en, de  it"},
        )
        assert site.fallback_locales == ("en", "de", "it")

    def test_non_string_locale_reads_as_empty(self, caplog):
        with caplog.at_level(logging.WARNING, logger="interlang.models.site"):
            site = Site.from_row({"id": 1, "slug": "s"}, {"locale": ["fr"]})
        assert site.locale == ""
        assert "site_setting_malformed" in caplog.text

    def test_scalar_language_list_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="interlang.models.site"):
            site = Site.from_row(
                {"id": 1, "slug": "s"},
                {"interlang_fallback_locales": 5, "interlang_required_languages": {"a": 1}},
            )
        assert site.fallback_locales == ()
        assert site.required_languages == ()
        assert caplog.text.count("site_setting_malformed") == 2

    def test_non_string_list_items_dropped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="interlang.models.site"):
            site = Site.from_row(
                {"id": 1, "slug": "s"},
                {"interlang_required_languages": ["la", 7, None, "de\x00", "grc"]},
            )
        assert site.required_languages == ("la", "grc")
        assert "site_setting_items_dropped" in caplog.text

    def test_non_string_policy_is_unrecognized(self):
        site = Site.from_row({"id": 1, "slug": "s"}, {"interlang_display_policy": ["site"]})
        assert site.policy is DisplayPolicy.ALL
        assert site.has_valid_policy is False

    def test_to_db_params(self):
        site = Site(id=2, slug="s", title="T")
        assert site.to_db_params() == SiteDbParams(id=2, slug="s", title="T")
