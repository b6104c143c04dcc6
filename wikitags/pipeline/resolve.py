# wikitags/pipeline/resolve.py

from __future__ import annotations

import inspect
from typing import Awaitable, Callable, List, Optional, Union

from wikitags.models.item import ResolvedItem
from wikitags.pipeline.catalog import ItemCatalogCache
from wikitags.pipeline.category import PagedCategoryFetcher
from wikitags.scrape.sources.base import WikiSource
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)

NameToIdLookup = Callable[[str], Union[Optional[int], Awaitable[Optional[int]]]]


def _sort_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


async def _lookup_id(id_lookup: NameToIdLookup, name: str) -> Optional[int]:
    result = id_lookup(name)
    if inspect.isawaitable(result):
        result = await result
    if result is None or result < 0:
        return None
    return result


class CategoryResolutionService:
    def __init__(
        self,
        fetcher: PagedCategoryFetcher,
        catalog: ItemCatalogCache,
        source: WikiSource,
    ):
        self._fetcher = fetcher
        self._catalog = catalog
        self._source = source

    async def resolve(self, category: str, id_lookup: NameToIdLookup) -> List[ResolvedItem]:
        """
        Members of `category` that are known items, paired with their ids.

        Sorted by name (case-insensitive). Names outside the catalog, or that
        the lookup cannot resolve, are dropped silently. An empty list means
        "no items found"; fetch failures propagate.
        """
        await self._catalog.ensure_loaded()

        members = await self._fetcher.fetch_all(self._source.category_query_template, category)

        candidates = sorted((m for m in members if self._catalog.contains(m)), key=_sort_key)

        items: List[ResolvedItem] = []
        unresolved = 0
        for name in candidates:
            item_id = await _lookup_id(id_lookup, name)
            if item_id is None:
                unresolved += 1
                log.debug("No item id for %r; dropping", name)
                continue
            items.append(ResolvedItem(name=name, id=item_id))

        if unresolved:
            log.debug("%d catalog items in %r had no id", unresolved, category)

        log.info("Filtered %d out of %d items from category '%s'", len(items), len(members), category)
        return items
