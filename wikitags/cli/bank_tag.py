# wikitags/cli/bank_tag.py
from __future__ import annotations

import argparse
import asyncio

import aiohttp

from wikitags.config.settings import WikiTagsConfig
from wikitags.http.client import text_fetcher
from wikitags.http.errors import WikiTagsError
from wikitags.pipeline.catalog import ItemCatalogCache
from wikitags.pipeline.category import PagedCategoryFetcher
from wikitags.pipeline.resolve import CategoryResolutionService
from wikitags.scrape.sources.osrs import osrs_wiki
from wikitags.services.bank_tags import TagCreationResult, create_tag_from_category
from wikitags.services.item_lookup import ItemIdLookup
from wikitags.storage.sqlite_db import connect_sqlite
from wikitags.storage.tag_repo import TagStore
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


def build_argparser(config: WikiTagsConfig) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=f"wikitags-{config.command}",
        description="Create a bank tag from the items in a wiki category.",
    )
    p.add_argument("category", nargs="+", help="Wiki category name, e.g. Runes or Bronze equipment")
    return p


async def _amain(category: str, config: WikiTagsConfig) -> TagCreationResult:
    source = osrs_wiki(config)

    conn = connect_sqlite(config.db_path)
    try:
        store = TagStore(conn)

        async with aiohttp.ClientSession() as session:
            fetch = text_fetcher(
                session,
                timeout_s=config.timeout_seconds,
                user_agent=config.user_agent,
            )

            fetcher = PagedCategoryFetcher(fetch, continue_key=source.continue_key)
            catalog = ItemCatalogCache(fetcher, source)
            resolver = CategoryResolutionService(fetcher, catalog, source)
            lookup = ItemIdLookup(fetch, source.mapping_url, fuzzy_cutoff=config.fuzzy_cutoff)

            # nothing to fetch when the tag already exists
            if not store.get_members_of(category):
                try:
                    await lookup.load()
                except WikiTagsError as e:
                    log.exception("Failed to load item mapping")
                    print(f"Failed to fetch data: {e}")
                    return TagCreationResult.FAILED

            return await create_tag_from_category(
                category,
                resolver=resolver,
                store=store,
                id_lookup=lookup,
                notify=print,
                command=config.command,
            )
    finally:
        conn.close()


def main(argv: list[str] | None = None) -> int:
    config = WikiTagsConfig.from_env()
    args = build_argparser(config).parse_args(argv)

    category = " ".join(" ".join(args.category).split())
    if not category:
        print(f"Usage: {config.command} category")
        return 2

    result = asyncio.run(_amain(category, config))

    return 1 if result is TagCreationResult.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(main())
