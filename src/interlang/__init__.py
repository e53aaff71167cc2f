r"""interlang -- cross-site translation groups and locale-driven value filtering.

Editors group sites into translation groups, link pages that translate each
other, and choose per site which languages of multilingual property values
are displayed.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              services         Request-driven workflows with I/O
             /   |   \
          core  i18n  utils    Infrastructure, pure algorithms, helpers
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Frozen dataclasses and enums. Zero I/O, depends only on stdlib.
    i18n: Locale expansion, value filtering, site groups, page graphs.
    utils: Natural sorting and tolerant parsing.
    core: Connection pool, database facade, base workflow, exceptions,
        logging, metrics.
    services: Settings, site groups, page relations, display, switcher.

Note:
    Top-level imports (``from interlang import Store``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("interlang")

__all__ = [
    "BaseWorkflow",
    "DisplayPolicy",
    "LanguageSwitcher",
    "LocaleDisplay",
    "LocaleSet",
    "LocalizedValue",
    "Logger",
    "PageRelation",
    "PageRelations",
    "Pool",
    "PoolConfig",
    "RequestContext",
    "Settings",
    "Site",
    "SiteGroupsWorkflow",
    "Store",
    "StoreConfig",
    "build_locale_set",
    "expand",
    "resolve_display_values",
    "resolve_site_groups",
    "resolve_site_groups_for_display",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BaseWorkflow": ("interlang.core", "BaseWorkflow"),
    "Logger": ("interlang.core", "Logger"),
    "Pool": ("interlang.core", "Pool"),
    "PoolConfig": ("interlang.core", "PoolConfig"),
    "Store": ("interlang.core", "Store"),
    "StoreConfig": ("interlang.core", "StoreConfig"),
    "DisplayPolicy": ("interlang.models", "DisplayPolicy"),
    "LocalizedValue": ("interlang.models", "LocalizedValue"),
    "PageRelation": ("interlang.models", "PageRelation"),
    "Site": ("interlang.models", "Site"),
    "LocaleSet": ("interlang.i18n", "LocaleSet"),
    "RequestContext": ("interlang.i18n", "RequestContext"),
    "build_locale_set": ("interlang.i18n", "build_locale_set"),
    "expand": ("interlang.i18n", "expand"),
    "resolve_display_values": ("interlang.i18n", "resolve_display_values"),
    "resolve_site_groups": ("interlang.i18n", "resolve_for_storage"),
    "resolve_site_groups_for_display": ("interlang.i18n", "resolve_for_display"),
    "LanguageSwitcher": ("interlang.services", "LanguageSwitcher"),
    "LocaleDisplay": ("interlang.services", "LocaleDisplay"),
    "PageRelations": ("interlang.services", "PageRelations"),
    "Settings": ("interlang.services", "Settings"),
    "SiteGroupsWorkflow": ("interlang.services", "SiteGroupsWorkflow"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'interlang' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
