# wikitags/scrape/mapping/parse_mapping.py

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List

from wikitags.http.errors import MalformedResponseError
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


@dataclass(frozen=True)
class MappingEntry:
    id: int
    name: str


def parse_mapping(text: str) -> List[MappingEntry]:
    """Parse the price API's item mapping: a JSON list of {"id", "name", ...} objects."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Item mapping is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedResponseError(
            f"Item mapping must be a list, got {type(data).__name__}"
        )

    entries: List[MappingEntry] = []
    for i, row in enumerate(data):
        if not isinstance(row, dict):
            raise MalformedResponseError(f"mapping[{i}] is not an object")

        item_id = row.get("id")
        name = row.get("name")
        # bool is an int subclass
        if not isinstance(item_id, int) or isinstance(item_id, bool) or item_id < 0:
            raise MalformedResponseError(f"mapping[{i}] has no valid 'id'")
        if not isinstance(name, str):
            raise MalformedResponseError(f"mapping[{i}] has no string 'name'")

        entries.append(MappingEntry(id=item_id, name=name))

    log.debug("Parsed %d mapping entries", len(entries))
    return entries
