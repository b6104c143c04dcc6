# wikitags/storage/tag_repo.py

from __future__ import annotations

import sqlite3
from typing import Iterable, List, Optional

from wikitags.models.tag import TagMember, TagTab
from wikitags.storage.sqlite_db import sync_schema
from wikitags.logging.logger import setup_logger

log = setup_logger(__name__)


class TagStore:
    """Persisted bank tags: item membership per tag plus the ordered list of tag tabs."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        sync_schema(conn, [TagMember, TagTab])

    def get_members_of(self, tag_name: str) -> List[int]:
        rows = self._conn.execute(
            f"SELECT item_id FROM {TagMember.TABLE} WHERE tag_name=? ORDER BY position",
            (tag_name,),
        ).fetchall()
        return [r["item_id"] for r in rows]

    def add_member(self, item_id: int, tag_name: str) -> None:
        with self._conn:
            self._conn.execute(
                f"""
                INSERT INTO {TagMember.TABLE} (tag_name, item_id, position)
                VALUES (?, ?, (SELECT COALESCE(MAX(position), -1) + 1 FROM {TagMember.TABLE} WHERE tag_name=?))
                ON CONFLICT(tag_name, item_id) DO NOTHING;
                """,
                (tag_name, item_id, tag_name),
            )

    def list_group_names(self) -> List[str]:
        rows = self._conn.execute(
            f"SELECT name FROM {TagTab.TABLE} ORDER BY position"
        ).fetchall()
        return [r["name"] for r in rows]

    def set_group_names(self, names: Iterable[str]) -> None:
        """Replace the tab list, keeping icons of tabs that survive."""
        unique: List[str] = []
        seen: set[str] = set()
        for n in names:
            if n.casefold() not in seen:
                seen.add(n.casefold())
                unique.append(n)
        names = unique

        icons = {
            r["name"].casefold(): r["icon_item_id"]
            for r in self._conn.execute(f"SELECT name, icon_item_id FROM {TagTab.TABLE}")
        }

        with self._conn:
            self._conn.execute(f"DELETE FROM {TagTab.TABLE}")
            self._conn.executemany(
                f"INSERT INTO {TagTab.TABLE} (name, position, icon_item_id) VALUES (?, ?, ?)",
                [(n, i, icons.get(n.casefold())) for i, n in enumerate(names)],
            )

        log.debug("Tag tabs set to %s", names)

    def set_icon(self, tag_name: str, item_id: int) -> None:
        with self._conn:
            cur = self._conn.execute(
                f"UPDATE {TagTab.TABLE} SET icon_item_id=? WHERE name=?",
                (item_id, tag_name),
            )
        if cur.rowcount == 0:
            raise KeyError(f"No tag tab named {tag_name!r}")

    def get_icon(self, tag_name: str) -> Optional[int]:
        row = self._conn.execute(
            f"SELECT icon_item_id FROM {TagTab.TABLE} WHERE name=?",
            (tag_name,),
        ).fetchone()
        return None if row is None else row["icon_item_id"]
