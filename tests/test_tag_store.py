"""Tests for the SQLite-backed tag store."""

import pytest

from wikitags.models.tag import TagMember, TagTab
from wikitags.storage.sqlite_db import connect_sqlite, sync_schema
from wikitags.storage.tag_repo import TagStore


class TestMembers:
    def test_unknown_tag_is_empty(self, store):
        assert store.get_members_of("Runes") == []

    def test_members_keep_insertion_order(self, store):
        for item_id in (556, 555, 557):
            store.add_member(item_id, "Runes")
        assert store.get_members_of("Runes") == [556, 555, 557]

    def test_add_member_is_idempotent(self, store):
        store.add_member(556, "Runes")
        store.add_member(556, "Runes")
        assert store.get_members_of("Runes") == [556]

    def test_tag_names_are_case_insensitive(self, store):
        store.add_member(556, "Runes")
        store.add_member(556, "runes")
        assert store.get_members_of("RUNES") == [556]

    def test_tags_are_independent(self, store):
        store.add_member(556, "Runes")
        store.add_member(1205, "Daggers")
        assert store.get_members_of("Runes") == [556]
        assert store.get_members_of("Daggers") == [1205]


class TestTabs:
    def test_set_and_list(self, store):
        store.set_group_names(["Runes", "Daggers"])
        assert store.list_group_names() == ["Runes", "Daggers"]

    def test_duplicates_collapse_case_insensitively(self, store):
        store.set_group_names(["Runes", "runes", "Daggers"])
        assert store.list_group_names() == ["Runes", "Daggers"]

    def test_icons_survive_reorder(self, store):
        store.set_group_names(["Runes"])
        store.set_icon("Runes", 556)
        store.set_group_names(["Daggers", "Runes"])
        assert store.get_icon("Runes") == 556
        assert store.get_icon("Daggers") is None

    def test_icon_for_unknown_tab(self, store):
        with pytest.raises(KeyError):
            store.set_icon("Runes", 556)
        assert store.get_icon("Runes") is None


class TestSchema:
    def test_sync_schema_is_repeatable(self, tmp_path):
        conn = connect_sqlite(tmp_path / "tags.sqlite3")
        try:
            TagStore(conn).add_member(556, "Runes")
            sync_schema(conn, [TagMember, TagTab])
            assert TagStore(conn).get_members_of("Runes") == [556]
        finally:
            conn.close()

    def test_missing_columns_are_added(self, tmp_path):
        conn = connect_sqlite(tmp_path / "tags.sqlite3")
        try:
            conn.execute("CREATE TABLE tag_tabs (name TEXT PRIMARY KEY COLLATE NOCASE, position INTEGER NOT NULL)")
            sync_schema(conn, [TagTab])
            cols = {r["name"] for r in conn.execute("PRAGMA table_info(tag_tabs)")}
            assert "icon_item_id" in cols
        finally:
            conn.close()

    def test_model_without_schema_rejected(self):
        class NotAModel:
            pass

        conn = connect_sqlite(":memory:")
        try:
            with pytest.raises(ValueError, match="TABLE"):
                sync_schema(conn, [NotAModel])
        finally:
            conn.close()
