"""Global and per-site settings.

Thin workflow over the ``setting`` and ``site_setting`` tables. Values are
JSONB, so any JSON-compatible Python value round-trips unchanged.

Examples:
    ```python
    settings = Settings(store)
    await settings.set(SettingKey.LOCALE, "fr", site_id=2)
    await settings.get(SettingKey.LOCALE, site_id=2)            # 'fr'
    await settings.get("missing", default=[])                    # []
    ```
"""

from __future__ import annotations

from typing import Any, ClassVar

from interlang.core.base_workflow import BaseWorkflow, BaseWorkflowConfig


class SettingsConfig(BaseWorkflowConfig):
    """Settings workflow configuration (metrics and log format only)."""


class Settings(BaseWorkflow[SettingsConfig]):
    """Read, write and delete settings, globally or for one site."""

    WORKFLOW_NAME: ClassVar[str] = "settings"
    CONFIG_CLASS: ClassVar[type[SettingsConfig]] = SettingsConfig

    async def get(self, key: str, default: Any = None, site_id: int | None = None) -> Any:
        """Return the value of *key*, or *default* when it is not set."""
        value = await self._store.get_setting(str(key), site_id=site_id)
        return default if value is None else value

    async def set(self, key: str, value: Any, site_id: int | None = None) -> None:
        """Store *value* under *key*, replacing any previous value."""
        await self._store.set_setting(str(key), value, site_id=site_id)
        self._logger.debug("setting_set", key=key, site_id=site_id)
        self.inc_counter("settings_set")

    async def delete(self, key: str, site_id: int | None = None) -> bool:
        """Remove *key*. Returns whether it was set."""
        deleted = await self._store.delete_setting(str(key), site_id=site_id)
        if deleted:
            self._logger.debug("setting_deleted", key=key, site_id=site_id)
            self.inc_counter("settings_deleted")
        return deleted
