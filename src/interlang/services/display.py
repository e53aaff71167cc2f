"""Locale-driven display of property values for a site.

[LocaleDisplay][interlang.services.display.LocaleDisplay] loads the viewing
site with its locale settings and filters property values through
[resolve_display_values()][interlang.i18n.values.resolve_display_values].

A display policy that is not a recognized value is treated as ``all`` and,
unless disabled, rewritten to ``all`` in the site settings so the
misconfiguration is reported once rather than on every request.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, ClassVar

from pydantic import Field

from interlang.core.base_workflow import BaseWorkflow, BaseWorkflowConfig
from interlang.core.exceptions import SiteNotFoundError
from interlang.i18n import values
from interlang.models import DisplayPolicy, SettingKey

from .common.queries import fetch_site


if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable

    from interlang.i18n.values import RequestContext
    from interlang.models import LocalizedValue, Site


class LocaleDisplayConfig(BaseWorkflowConfig):
    """Locale display workflow configuration."""

    heal_invalid_policy: bool = Field(
        default=True,
        description="Rewrite unrecognized display policies to 'all' in the site settings",
    )


class LocaleDisplay(BaseWorkflow[LocaleDisplayConfig]):
    """Load sites and filter property values by their display policy.

    Examples:
        ```python
        display = LocaleDisplay(store)
        site = await display.load_site("blog-fr")
        context = RequestContext()
        shown = display.resolve_display_values(context, 12, "dcterms:title", raw, site)
        ```
    """

    WORKFLOW_NAME: ClassVar[str] = "display"
    CONFIG_CLASS: ClassVar[type[LocaleDisplayConfig]] = LocaleDisplayConfig

    async def load_site(self, slug: str) -> Site:
        """Load a site with its locale settings.

        Raises:
            SiteNotFoundError: If no site has this slug.
        """
        site = await fetch_site(self._store, slug)
        if site is None:
            raise SiteNotFoundError(slug)
        if not site.has_valid_policy:
            site = await self._reset_policy(site)
        return site

    async def _reset_policy(self, site: Site) -> Site:
        self._logger.warning(
            "display_policy_invalid", site=site.slug, value=site.display_policy
        )
        self.inc_counter("display_policy_invalid")
        if self._config.heal_invalid_policy:
            await self._store.set_setting(
                SettingKey.DISPLAY_POLICY.value, DisplayPolicy.ALL.value, site_id=site.id
            )
            self._logger.info("display_policy_reset", site=site.slug)
        return dataclasses.replace(site, display_policy=DisplayPolicy.ALL.value)

    def resolve_display_values(
        self,
        context: RequestContext,
        resource_id: Hashable,
        term: str,
        raw_values: Iterable[LocalizedValue],
        site: Site,
    ) -> tuple[LocalizedValue, ...]:
        """Return the values of a property to display on *site*.

        See [resolve_display_values()][interlang.i18n.values.resolve_display_values].
        """
        return values.resolve_display_values(context, resource_id, term, raw_values, site)
