"""Shared result types for interlang workflows.

Lightweight frozen dataclasses produced by query functions and workflows.
Keeping them in their own module avoids circular imports between
``queries`` and the individual workflow modules.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageRef:
    """A page and the site it belongs to.

    Attributes:
        id: Page id.
        site_id: Id of the owning site.
        site_slug: Slug of the owning site.
        title: Page title.
    """

    id: int
    site_id: int
    site_slug: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class PageOptionGroup:
    """Selectable pages of one site, as shown in the related-pages selector.

    Attributes:
        label: Site title, followed by ``" *"`` for private sites.
        site_slug: Slug of the site.
        options: ``(page_id, page_title)`` pairs in title order.
    """

    label: str
    site_slug: str
    options: tuple[tuple[int, str], ...]


@dataclass(frozen=True, slots=True)
class SwitcherEntry:
    """One link of the language switcher.

    Attributes:
        site_slug: Target site.
        locale: Base locale of the target site (may be empty).
        label: Rendered label: a language code or a flag-icon country code.
        page_id: Translation of the current page on that site, or ``None``
            when there is none (link to the site home page).
        is_current: Whether the entry is the site being viewed.
    """

    site_slug: str
    locale: str
    label: str
    page_id: int | None
    is_current: bool
