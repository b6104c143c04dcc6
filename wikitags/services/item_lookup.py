# wikitags/services/item_lookup.py

from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, Optional

from rapidfuzz import fuzz, process

from wikitags.scrape.mapping.parse_mapping import MappingEntry, parse_mapping
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


def _norm(s: str) -> str:
    return " ".join(s.casefold().split())


class ItemIdLookup:
    """
    Item name -> id, backed by the price API's item mapping.

    Exact (case and whitespace insensitive) matches win, first entry first.
    Otherwise the closest name scoring at least `fuzzy_cutoff` is used.
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[str]],
        mapping_url: str,
        *,
        fuzzy_cutoff: int = 95,
    ):
        self._fetch = fetch
        self._mapping_url = mapping_url
        self._fuzzy_cutoff = fuzzy_cutoff
        self._by_name: Dict[str, int] | None = None
        self._names: List[str] = []

    @classmethod
    def from_entries(cls, entries: List[MappingEntry], *, fuzzy_cutoff: int = 95) -> "ItemIdLookup":
        lookup = cls(_no_fetch, "", fuzzy_cutoff=fuzzy_cutoff)
        lookup._index(entries)
        return lookup

    def _index(self, entries: List[MappingEntry]) -> None:
        by_name: Dict[str, int] = {}
        for entry in entries:
            by_name.setdefault(_norm(entry.name), entry.id)
        self._by_name = by_name
        self._names = list(by_name)

    @property
    def loaded(self) -> bool:
        return self._by_name is not None

    async def load(self) -> None:
        if self._by_name is not None:
            return

        log.info("Loading item mapping from %s", self._mapping_url)
        text = await self._fetch(self._mapping_url)
        self._index(parse_mapping(text))
        log.info("Indexed %d item names", len(self._names))

    def __call__(self, name: str) -> Optional[int]:
        if self._by_name is None:
            raise RuntimeError("Item mapping is not loaded; await load() first")

        key = _norm(name)
        item_id = self._by_name.get(key)
        if item_id is not None:
            return item_id

        match = process.extractOne(
            key,
            self._names,
            scorer=fuzz.ratio,
            score_cutoff=self._fuzzy_cutoff,
        )
        if match is None:
            return None

        matched_name, score, _ = match
        log.debug("Fuzzy matched %r -> %r (score=%.1f)", name, matched_name, score)
        return self._by_name[matched_name]


async def _no_fetch(url: str) -> str:
    raise RuntimeError(f"Lookup was built from entries and cannot fetch {url}")
