"""Tests for ItemCatalogCache lazy, single-flight loading."""

import asyncio
import json

import pytest

from helpers import ITEMS_URL, FakeWiki, members_page
from wikitags.http.errors import NetworkError
from wikitags.pipeline.catalog import ItemCatalogCache
from wikitags.pipeline.category import PagedCategoryFetcher


def make_catalog(wiki, source) -> ItemCatalogCache:
    return ItemCatalogCache(PagedCategoryFetcher(wiki), source)


class TestLoading:
    def test_not_loaded_until_ensure_loaded(self, source):
        wiki = FakeWiki({ITEMS_URL: members_page(["Bronze sword"])})
        catalog = make_catalog(wiki, source)

        assert catalog.is_loaded() is False
        assert wiki.requests == []

    def test_loads_all_pages(self, source):
        wiki = FakeWiki({
            ITEMS_URL: members_page(["Bronze sword"], token="t"),
            ITEMS_URL + "&cmcontinue=t": members_page(["Iron sword"]),
        })
        catalog = make_catalog(wiki, source)

        asyncio.run(catalog.ensure_loaded())

        assert catalog.is_loaded()
        assert catalog.titles() == {"Bronze sword", "Iron sword"}
        assert len(catalog) == 2

    def test_repeated_calls_fetch_once(self, source):
        wiki = FakeWiki({ITEMS_URL: members_page(["Bronze sword"])})
        catalog = make_catalog(wiki, source)

        async def go():
            await catalog.ensure_loaded()
            await catalog.ensure_loaded()
            await catalog.ensure_loaded()

        asyncio.run(go())

        assert wiki.count(ITEMS_URL) == 1
        assert catalog.load_count == 1

    def test_concurrent_calls_coalesce(self, source):
        """Callers overlapping the first load wait for it instead of fetching again."""
        wiki = FakeWiki({
            ITEMS_URL: members_page(["Bronze sword"], token="t"),
            ITEMS_URL + "&cmcontinue=t": members_page(["Iron sword"]),
        })
        wiki.delay = 0.01
        catalog = make_catalog(wiki, source)

        async def go():
            await asyncio.gather(*(catalog.ensure_loaded() for _ in range(5)))

        asyncio.run(go())

        assert catalog.load_count == 1
        assert wiki.requests == [ITEMS_URL, ITEMS_URL + "&cmcontinue=t"]

    def test_empty_catalog_counts_as_loaded(self, source):
        wiki = FakeWiki({ITEMS_URL: json.dumps({"batchcomplete": True})})
        catalog = make_catalog(wiki, source)

        async def go():
            await catalog.ensure_loaded()
            await catalog.ensure_loaded()

        asyncio.run(go())

        assert catalog.is_loaded()
        assert len(catalog) == 0
        assert wiki.count(ITEMS_URL) == 1

    def test_failed_load_stays_unloaded_and_can_retry(self, source):
        wiki = FakeWiki({ITEMS_URL: members_page(["Bronze sword"])})
        wiki.error = NetworkError("dns failure")
        catalog = make_catalog(wiki, source)

        with pytest.raises(NetworkError):
            asyncio.run(catalog.ensure_loaded())
        assert catalog.is_loaded() is False

        wiki.error = None
        asyncio.run(catalog.ensure_loaded())

        assert catalog.contains("Bronze sword")
        assert catalog.load_count == 2

    def test_contended_loads_across_event_loops(self, source):
        """A cache outliving one event loop still coalesces callers in the next."""
        wiki = FakeWiki({ITEMS_URL: members_page(["Bronze sword"])})
        wiki.delay = 0.01
        wiki.error = NetworkError("dns failure")
        catalog = make_catalog(wiki, source)

        async def burst():
            return await asyncio.gather(
                *(catalog.ensure_loaded() for _ in range(3)),
                return_exceptions=True,
            )

        first = asyncio.run(burst())
        assert all(isinstance(r, NetworkError) for r in first)
        assert catalog.is_loaded() is False

        wiki.error = None
        second = asyncio.run(burst())

        assert second == [None, None, None]
        assert catalog.contains("Bronze sword")
        assert catalog.load_count == 4


class TestQueries:
    def test_contains_before_load_fails_fast(self, source):
        wiki = FakeWiki({ITEMS_URL: members_page(["Bronze sword"])})
        catalog = make_catalog(wiki, source)

        with pytest.raises(RuntimeError, match="not loaded"):
            catalog.contains("Bronze sword")

        assert wiki.requests == []

    def test_contains_is_exact(self, source):
        wiki = FakeWiki({ITEMS_URL: members_page(["Bronze sword"])})
        catalog = make_catalog(wiki, source)
        asyncio.run(catalog.ensure_loaded())

        assert catalog.contains("Bronze sword")
        assert not catalog.contains("bronze sword")
        assert "Bronze sword" in catalog
        assert 1205 not in catalog
