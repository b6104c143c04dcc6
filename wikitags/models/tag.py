# wikitags/models/tag.py

from dataclasses import dataclass
from typing import Optional


@dataclass
class TagMember:
    tag_name: str
    item_id: int

    # ---- DB schema (single source of truth) ----
    TABLE = "tag_members"
    DDL_COLUMNS = {
        "tag_name": "TEXT NOT NULL COLLATE NOCASE",
        "item_id": "INTEGER NOT NULL",
        "position": "INTEGER NOT NULL",
    }
    UNIQUE_CONSTRAINTS = [("tag_name", "item_id")]
    INDEXES = [("idx_tag_members_tag", ("tag_name",))]


@dataclass
class TagTab:
    name: str
    position: int
    icon_item_id: Optional[int] = None

    TABLE = "tag_tabs"
    DDL_COLUMNS = {
        "name": "TEXT PRIMARY KEY COLLATE NOCASE",
        "position": "INTEGER NOT NULL",
        "icon_item_id": "INTEGER",
    }
    INDEXES = [("idx_tag_tabs_position", ("position",))]
