"""Domain-specific read queries for interlang workflows.

Each function accepts a [Store][interlang.core.store.Store] and returns
typed results. Workflows import from this module instead of writing inline
SQL; writes (settings, page relations) live on the Store itself.

The query functions are grouped into two categories:

- **Site queries**: ``fetch_site``, ``fetch_site_by_id``, ``fetch_sites``
- **Page queries**: ``page_exists``, ``filter_existing_pages``,
  ``fetch_pages``, ``fetch_site_pages``

Warning:
    Reads use ``timeouts.query`` from
    [StoreTimeoutsConfig][interlang.core.store.StoreTimeoutsConfig].
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from interlang.models.site import Site
from interlang.utils.parsing import models_from_rows

from .types import PageRef


if TYPE_CHECKING:
    from collections.abc import Iterable

    from asyncpg import Record

    from interlang.core.store import Store

logger = logging.getLogger(__name__)


# A site row with its per-site settings aggregated into one JSONB object
_SITE_SELECT = """
    SELECT s.id, s.slug, s.title,
           COALESCE(
               jsonb_object_agg(ss.id, ss.value) FILTER (WHERE ss.id IS NOT NULL),
               '{}'::jsonb
           ) AS settings
    FROM site s
    LEFT JOIN site_setting ss ON ss.site_id = s.id
"""


# =============================================================================
# Private helpers
# =============================================================================


def _site_from_row(row: Record) -> Site:
    return Site.from_row(row, row["settings"])


def _page_from_row(row: Any) -> PageRef:
    return PageRef(
        id=row["id"],
        site_id=row["site_id"],
        site_slug=row["site_slug"],
        title=row["title"] or "",
    )


# =============================================================================
# Site queries
# =============================================================================


async def fetch_site(store: Store, slug: str) -> Site | None:
    """Fetch one site with its locale settings, or None if the slug is unknown."""
    row = await store.fetchrow(f"{_SITE_SELECT} WHERE s.slug = $1 GROUP BY s.id", slug)  # noqa: S608
    if row is None:
        return None
    return _site_from_row(row)


async def fetch_site_by_id(store: Store, site_id: int) -> Site | None:
    """Fetch one site by id, or None."""
    row = await store.fetchrow(f"{_SITE_SELECT} WHERE s.id = $1 GROUP BY s.id", site_id)  # noqa: S608
    if row is None:
        return None
    return _site_from_row(row)


async def fetch_sites(store: Store, slugs: Iterable[str]) -> dict[str, Site]:
    """Fetch several sites keyed by slug. Unknown slugs and invalid rows are skipped."""
    slugs = list(slugs)
    if not slugs:
        return {}
    rows = await store.fetch(
        f"{_SITE_SELECT} WHERE s.slug = ANY($1::text[]) GROUP BY s.id",  # noqa: S608
        slugs,
    )
    return {site.slug: site for site in models_from_rows(rows, _site_from_row)}


# =============================================================================
# Page queries
# =============================================================================


async def page_exists(store: Store, page_id: int) -> bool:
    """Whether a page with this id exists."""
    return bool(
        await store.fetchval("SELECT EXISTS(SELECT 1 FROM site_page WHERE id = $1)", page_id)
    )


async def filter_existing_pages(store: Store, page_ids: Iterable[int]) -> list[int]:
    """Return the ids among *page_ids* that exist, sorted."""
    ids = sorted(set(page_ids))
    if not ids:
        return []
    rows = await store.fetch(
        "SELECT id FROM site_page WHERE id = ANY($1::int[]) ORDER BY id",
        ids,
    )
    return [row["id"] for row in rows]


async def fetch_pages(store: Store, page_ids: Iterable[int]) -> list[PageRef]:
    """Fetch pages with their owning site, ordered by page id."""
    ids = sorted(set(page_ids))
    if not ids:
        return []
    rows = await store.fetch(
        """
        SELECT p.id, p.site_id, s.slug AS site_slug, p.title
        FROM site_page p
        JOIN site s ON s.id = p.site_id
        WHERE p.id = ANY($1::int[])
        ORDER BY p.id
        """,
        ids,
    )
    return models_from_rows(rows, _page_from_row)


async def fetch_site_pages(store: Store, slugs: Iterable[str]) -> list[Record]:
    """Fetch every page of the given sites with the site title and visibility.

    Returns raw rows with ``id``, ``title``, ``site_slug``, ``site_title``
    and ``site_is_public``, ordered by site slug then page title.
    """
    slugs = list(slugs)
    if not slugs:
        return []
    return await store.fetch(
        """
        SELECT p.id, p.title, s.slug AS site_slug, s.title AS site_title,
               s.is_public AS site_is_public
        FROM site_page p
        JOIN site s ON s.id = p.site_id
        WHERE s.slug = ANY($1::text[])
        ORDER BY s.slug, p.title, p.id
        """,
        slugs,
    )
