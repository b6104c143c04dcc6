# wikitags/pipeline/catalog.py

from __future__ import annotations

import asyncio
from typing import FrozenSet

from wikitags.pipeline.category import PagedCategoryFetcher
from wikitags.scrape.sources.base import WikiSource
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


class ItemCatalogCache:
    """
    Set of every known item title, fetched once and never refreshed.

    Loading is always explicit. Concurrent `ensure_loaded()` callers share a
    single fetch; a failed fetch leaves the cache unloaded.
    """

    def __init__(self, fetcher: PagedCategoryFetcher, source: WikiSource):
        self._fetcher = fetcher
        self._source = source
        self._titles: FrozenSet[str] | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None
        self.load_count = 0

    def _loop_lock(self) -> asyncio.Lock:
        # a Lock is bound to the loop it first waits on; keep one per running loop
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def ensure_loaded(self) -> None:
        if self._titles is not None:
            return

        async with self._loop_lock():
            # another caller may have finished the load while we waited
            if self._titles is not None:
                return

            log.info("Loading item catalog from %s", self._source.name)
            self.load_count += 1
            titles = await self._fetcher.fetch_all(
                self._source.items_query_template,
                self._source.all_items_category,
            )
            self._titles = frozenset(titles)

        log.info("Cached %d items from the %s category", len(self._titles), self._source.all_items_category)

    def is_loaded(self) -> bool:
        return self._titles is not None

    def _require_loaded(self) -> FrozenSet[str]:
        if self._titles is None:
            raise RuntimeError("Item catalog is not loaded; await ensure_loaded() first")
        return self._titles

    def contains(self, name: str) -> bool:
        return name in self._require_loaded()

    def titles(self) -> FrozenSet[str]:
        return self._require_loaded()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __len__(self) -> int:
        return len(self._require_loaded())
