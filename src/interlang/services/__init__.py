"""Request-driven workflows: the top of the diamond DAG.

Each workflow derives from [BaseWorkflow][interlang.core.base_workflow.BaseWorkflow],
receives a shared [Store][interlang.core.store.Store] and a typed config, and
delegates the algorithms to the pure [interlang.i18n][] layer.

Attributes:
    Settings: Global and per-site settings.
    SiteGroupsWorkflow: Cross-site translation groups.
    PageRelations: Translation links between pages.
    LocaleDisplay: Site loading and locale-driven value filtering.
    LanguageSwitcher: Language switcher entries for a site and page.
"""

from .display import LocaleDisplay, LocaleDisplayConfig
from .groups import SiteGroupsConfig, SiteGroupsWorkflow
from .relations import PageRelations, PageRelationsConfig
from .settings import Settings, SettingsConfig
from .switcher import LanguageSwitcher, SwitcherConfig, flag_code


__all__ = [
    "LanguageSwitcher",
    "LocaleDisplay",
    "LocaleDisplayConfig",
    "PageRelations",
    "PageRelationsConfig",
    "Settings",
    "SettingsConfig",
    "SiteGroupsConfig",
    "SiteGroupsWorkflow",
    "SwitcherConfig",
    "flag_code",
]
