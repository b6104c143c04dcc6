"""Shared fixtures for wikitags tests."""

import pytest

from helpers import CATEGORY_TEMPLATE, ITEMS_TEMPLATE, MAPPING_URL
from wikitags.scrape.sources.base import WikiSource
from wikitags.storage.sqlite_db import connect_sqlite
from wikitags.storage.tag_repo import TagStore


@pytest.fixture
def source() -> WikiSource:
    return WikiSource(
        name="Test Wiki",
        items_query_template=ITEMS_TEMPLATE,
        category_query_template=CATEGORY_TEMPLATE,
        mapping_url=MAPPING_URL,
    )


@pytest.fixture
def store():
    conn = connect_sqlite(":memory:")
    yield TagStore(conn)
    conn.close()
