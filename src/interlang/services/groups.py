"""Cross-site translation groups.

Editors maintain the groups as free text, one group per line. Saving
resolves the text against the current site list and persists only the
multi-site groups; reading re-validates the stored mapping (sites may have
been renamed or deleted since) and completes it with one-site groups.

See Also:
    [interlang.i18n.groups][]: The pure parsing and rendering functions.
    [LanguageSwitcher][interlang.services.switcher.LanguageSwitcher]:
        Renders one link per site of the current group.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from interlang.core.base_workflow import BaseWorkflow, BaseWorkflowConfig
from interlang.core.exceptions import SiteNotFoundError
from interlang.i18n.groups import (
    format_groups,
    format_restore_value,
    resolve_for_display,
    resolve_for_storage,
    unique_groups,
)
from interlang.models import SettingKey, SiteGroups


class SiteGroupsConfig(BaseWorkflowConfig):
    """Site groups workflow configuration."""

    setting_key: str = Field(
        default=SettingKey.SITE_GROUPS.value,
        min_length=1,
        description="Global setting holding the slug -> group mapping",
    )


class SiteGroupsWorkflow(BaseWorkflow[SiteGroupsConfig]):
    """Save and list the translation groups of sites.

    Examples:
        ```python
        groups = SiteGroupsWorkflow(store)
        await groups.save("site-en site-fr\\nsite-de")
        await groups.list_groups()
        # {'site-de': ('site-de',), 'site-en': ('site-en', 'site-fr'),
        #  'site-fr': ('site-en', 'site-fr')}
        await groups.groups_text()  # 'site-en site-fr'
        ```
    """

    WORKFLOW_NAME: ClassVar[str] = "groups"
    CONFIG_CLASS: ClassVar[type[SiteGroupsConfig]] = SiteGroupsConfig

    async def save(self, text: str | None) -> SiteGroups:
        """Resolve *text* against the existing sites and persist the result.

        Unknown slugs and one-site lines are dropped silently; a slug listed
        on several lines stays in the first group.

        Returns:
            The persisted mapping (multi-site groups only).
        """
        known = await self._store.list_site_slugs()
        mapping = resolve_for_storage(text, known)
        await self._store.set_setting(
            self._config.setting_key, {slug: list(group) for slug, group in mapping.items()}
        )
        self._logger.info(
            "site_groups_saved", groups=len(unique_groups(mapping)), sites=len(mapping)
        )
        self.inc_counter("site_groups_saved")
        return mapping

    async def list_groups(self) -> SiteGroups:
        """Return the group of every existing site, one-site groups included."""
        known = await self._store.list_site_slugs()
        stored = await self._store.get_setting(self._config.setting_key)
        return resolve_for_display(stored, known)

    async def groups_text(self) -> str:
        """Return the editor textarea value: one multi-site group per line."""
        return format_groups(await self.list_groups())

    async def restore_text(self) -> str:
        """Return the textarea value that puts every site in its own group."""
        return format_restore_value(await self._store.list_site_slugs())

    async def group_of(self, slug: str) -> tuple[str, ...]:
        """Return the group of *slug*, at least ``(slug,)``.

        Raises:
            SiteNotFoundError: If no site has this slug.
        """
        groups = await self.list_groups()
        if slug not in groups:
            raise SiteNotFoundError(slug)
        return groups[slug]
