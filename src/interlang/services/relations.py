"""Page translation relations.

Pages that translate each other are linked as a complete graph in
``site_page_relation``: saving page 1 with pages 2 and 3 selected stores the
edges ``(1, 2)``, ``(1, 3)`` and ``(2, 3)``, one canonical row per
unordered pair.

Saving a page replaces every edge touching it. Edges between two other
pages of a former group are left alone until one of those pages is saved.

See Also:
    [interlang.i18n.relations][]: Pure graph helpers.
    [Store.replace_page_relations()][interlang.core.store.Store.replace_page_relations]:
        The transactional write.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field

from interlang.core.base_workflow import BaseWorkflow, BaseWorkflowConfig
from interlang.core.exceptions import PageNotFoundError
from interlang.i18n.relations import clean_selection, complete_graph, related_ids
from interlang.utils.sorting import natural_key

from .common.queries import fetch_site_pages, filter_existing_pages, page_exists
from .common.types import PageOptionGroup
from .groups import SiteGroupsWorkflow


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from interlang.core.store import Store


class PageRelationsConfig(BaseWorkflowConfig):
    """Page relations workflow configuration."""

    json_ld_term: str = Field(
        default="o-module-language-switcher:related_page",
        min_length=1,
        description="JSON-LD key listing the related pages of a page",
    )


class PageRelations(BaseWorkflow[PageRelationsConfig]):
    """Maintain and expose the translation links between pages.

    Examples:
        ```python
        relations = PageRelations(store)
        await relations.replace_relations(1, [2, 3])  # (2, 3)
        await relations.related_pages(2)              # (1, 3)
        await relations.replace_relations(1, [])      # removes every edge of page 1
        ```
    """

    WORKFLOW_NAME: ClassVar[str] = "relations"
    CONFIG_CLASS: ClassVar[type[PageRelationsConfig]] = PageRelationsConfig

    def __init__(
        self,
        store: Store,
        config: PageRelationsConfig | None = None,
        groups: SiteGroupsWorkflow | None = None,
    ) -> None:
        super().__init__(store, config)
        self._groups = groups or SiteGroupsWorkflow(store)

    async def replace_relations(self, page_id: int, selected: Iterable[Any] | None) -> tuple[int, ...]:
        """Make *page_id* and the *selected* pages mutual translations.

        The selection is cleaned first: non-integer, non-positive and
        repeated ids, the page itself and pages that do not exist are
        dropped. Every edge touching *page_id* is then replaced, in one
        transaction, by the complete graph over the page and the cleaned
        selection. An empty selection just removes the page's edges.

        Args:
            page_id: The page being saved.
            selected: Ids of the pages it translates, as submitted.

        Returns:
            The cleaned, sorted selection actually linked.

        Raises:
            PageNotFoundError: If *page_id* does not exist. Nothing is changed.
            QueryError: On database errors. The transaction is rolled back.
        """
        selection = clean_selection(page_id, selected)
        if not await page_exists(self._store, page_id):
            raise PageNotFoundError(page_id)

        existing = tuple(await filter_existing_pages(self._store, selection))
        if len(existing) != len(selection):
            self._logger.warning(
                "relations_unknown_pages_dropped",
                page_id=page_id,
                dropped=len(selection) - len(existing),
            )

        edges = complete_graph(page_id, existing)
        removed, inserted = await self._store.replace_page_relations(page_id, edges)

        self._logger.info(
            "relations_replaced",
            page_id=page_id,
            related=len(existing),
            removed=removed,
            inserted=inserted,
        )
        self.inc_counter("relations_replaced")
        return existing

    async def related_pages(self, page_id: int) -> tuple[int, ...]:
        """Return the ids of the pages linked to *page_id*, sorted."""
        return related_ids(page_id, await self._store.fetch_page_relations(page_id))

    async def annotate(self, page_id: int, json_ld: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of *json_ld* listing the related pages as references.

        Examples:
            ```python
            await relations.annotate(1, {"o:id": 1})
            # {'o:id': 1, 'o-module-language-switcher:related_page': [{'o:id': 2}, {'o:id': 3}]}
            ```
        """
        related = await self.related_pages(page_id)
        return {**json_ld, self._config.json_ld_term: [{"o:id": pid} for pid in related]}

    async def page_options(
        self,
        site_slug: str,
        *,
        within_group: bool = True,
        exclude_current_site: bool = False,
        group_by_site: bool = True,
    ) -> list[PageOptionGroup]:
        """List the pages an editor of *site_slug* may select as translations.

        Args:
            site_slug: Site of the page being edited.
            within_group: Only offer pages of the sites in the same
                translation group; otherwise pages of every site.
            exclude_current_site: Leave out the pages of *site_slug* itself.
            group_by_site: One option group per site, ordered by site title
                (natural, case-insensitive). When false, a single unlabelled
                group ordered by page title.

        Raises:
            SiteNotFoundError: If *within_group* is set and the site does
                not exist.
        """
        if within_group:
            slugs = list(await self._groups.group_of(site_slug))
        else:
            slugs = await self._store.list_site_slugs()
        if exclude_current_site:
            slugs = [slug for slug in slugs if slug != site_slug]

        rows = await fetch_site_pages(self._store, slugs)

        if not group_by_site:
            options = sorted(
                ((row["id"], row["title"] or "") for row in rows),
                key=lambda option: (natural_key(option[1].lower()), option[0]),
            )
            return [PageOptionGroup(label="", site_slug="", options=tuple(options))]

        by_site: dict[str, list[tuple[int, str]]] = {}
        labels: dict[str, str] = {}
        for row in rows:
            slug = row["site_slug"]
            by_site.setdefault(slug, []).append((row["id"], row["title"] or ""))
            title = row["site_title"] or slug
            labels[slug] = title if row["site_is_public"] else f"{title} *"

        ordered = sorted(by_site, key=lambda slug: natural_key(labels[slug].lower()))
        return [
            PageOptionGroup(label=labels[slug], site_slug=slug, options=tuple(by_site[slug]))
            for slug in ordered
        ]
