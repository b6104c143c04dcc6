# wikitags/services/bank_tags.py

from __future__ import annotations

from enum import Enum
from typing import Callable, List

from wikitags.http.errors import WikiTagsError
from wikitags.models.item import ResolvedItem
from wikitags.pipeline.resolve import CategoryResolutionService, NameToIdLookup
from wikitags.storage.tag_repo import TagStore
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)

Notify = Callable[[str], None]


class TagCreationResult(Enum):
    USAGE = "usage"
    EXISTS = "exists"
    FAILED = "failed"
    EMPTY = "empty"
    CREATED = "created"


def create_bank_tag(store: TagStore, tag_name: str, items: List[ResolvedItem]) -> None:
    log.info("Creating bank tag '%s' with item IDs: %s", tag_name, ",".join(str(i.id) for i in items))

    tabs = store.list_group_names()
    if tag_name.casefold() not in {t.casefold() for t in tabs}:
        store.set_group_names([*tabs, tag_name])
        store.set_icon(tag_name, items[0].id)

    for item in items:
        store.add_member(item.id, tag_name)

    log.info("Bank tag '%s' created with %d items", tag_name, len(items))


async def create_tag_from_category(
    category: str,
    *,
    resolver: CategoryResolutionService,
    store: TagStore,
    id_lookup: NameToIdLookup,
    notify: Notify,
    command: str = "bt",
) -> TagCreationResult:
    category = " ".join(category.split())
    if not category:
        notify(f"Usage: {command} category")
        return TagCreationResult.USAGE

    existing = store.get_members_of(category)
    if existing:
        notify(f"{category} already exists and contains {len(existing)} items.")
        return TagCreationResult.EXISTS

    try:
        items = await resolver.resolve(category, id_lookup)
    except WikiTagsError as e:
        log.exception("Failed to fetch data")
        notify(f"Failed to fetch data: {e}")
        return TagCreationResult.FAILED

    if not items:
        notify(f"No items found for category: {category}")
        return TagCreationResult.EMPTY

    create_bank_tag(store, category, items)
    notify(f"Created bank tag '{category}' with {len(items)} items.")
    return TagCreationResult.CREATED
