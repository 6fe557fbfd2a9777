"""Schema contract tests.

The TABLES registry drives every CREATE and INSERT, so these tests pin the
registry itself and what create_schema() builds from it.
"""

import sqlite3

import pytest

from designindex.indexer.schema import (
    CHILD_TABLES,
    FLUSH_ORDER,
    FTS_MIRRORS,
    TABLES,
    get_table_schema,
    validate_all_tables,
    validate_foreign_keys,
)
from designindex.indexer.schemas import Column, ForeignKey


class TestRegistry:

    def test_thirteen_tables(self):
        assert len(TABLES) == 13

    def test_parents_flush_before_children(self):
        for child, (parent, _column) in CHILD_TABLES.items():
            assert FLUSH_ORDER.index(parent) < FLUSH_ORDER.index(child), child

    def test_child_table_map(self):
        assert CHILD_TABLES["component_props"] == ("components", "component_id")
        assert CHILD_TABLES["token_properties"] == ("tokens", "token_id")
        assert CHILD_TABLES["css_utility_classes"] == ("css_utilities", "utility_id")
        assert "documentation" not in CHILD_TABLES
        assert "icons" not in CHILD_TABLES

    def test_only_parents_are_keyed(self):
        keyed = {name for name, schema in TABLES.items() if schema.keyed}
        assert keyed == {"tokens", "components", "css_utilities"}

    def test_declared_foreign_keys_resolve(self):
        assert validate_foreign_keys() == {}

    def test_unknown_table(self):
        with pytest.raises(ValueError, match="Unknown table"):
            get_table_schema("widgets")

    def test_insert_columns_skip_autoincrement_id(self):
        assert "id" not in TABLES["icons"].insert_columns()
        assert TABLES["icons"].insert_columns()[0] == "name"


class TestSqlGeneration:

    def test_column_sql(self):
        column = Column("id", "INTEGER", primary_key=True, autoincrement=True)
        assert column.to_sql() == "id INTEGER PRIMARY KEY AUTOINCREMENT"
        assert Column("path", "TEXT", nullable=False, unique=True).to_sql() == "path TEXT NOT NULL UNIQUE"

    def test_foreign_key_sql(self):
        fk = ForeignKey(["token_id"], "tokens", ["id"])
        assert fk.to_sql() == "FOREIGN KEY (token_id) REFERENCES tokens (id) ON DELETE CASCADE"

    def test_cascade_trigger_sql(self):
        fk = ForeignKey(["token_id"], "tokens", ["id"])
        sql = fk.cascade_trigger_sql("token_properties")
        assert sql.startswith("CREATE TRIGGER IF NOT EXISTS token_properties_cascade_ad AFTER DELETE ON tokens")
        assert "DELETE FROM token_properties WHERE token_id = old.id;" in sql
        assert ForeignKey(["token_id"], "tokens", ["id"], on_delete=None).cascade_trigger_sql("x") is None

    def test_fts_mirror_sql(self):
        mirror = FTS_MIRRORS["icons_fts"]
        assert "content=icons" in mirror.create_sql()
        assert [sql.split()[5] for sql in mirror.trigger_sql()] == ["icons_fts_ai", "icons_fts_ad", "icons_fts_au"]


class TestCreateSchema:

    def test_every_table_and_mirror_exists(self, db_manager):
        names = {
            row[0] for row in db_manager.conn.execute(
                "SELECT name FROM sqlite_master WHERE type IN ('table', 'trigger')"
            )
        }
        assert set(TABLES) <= names
        assert set(FTS_MIRRORS) <= names
        for mirror in FTS_MIRRORS:
            assert {f"{mirror}_ai", f"{mirror}_ad", f"{mirror}_au"} <= names
        assert {f"{child}_cascade_ad" for child in CHILD_TABLES} <= names

    def test_database_matches_registry(self, db_manager):
        assert validate_all_tables(db_manager.conn.cursor()) == {}
        assert db_manager.validate_schema() is True

    def test_validation_reports_missing_table(self):
        conn = sqlite3.connect(":memory:")
        mismatches = validate_all_tables(conn.cursor())
        assert set(mismatches) == set(TABLES)
        conn.close()

    def test_create_schema_is_idempotent(self, db_manager):
        db_manager.create_schema()
        assert db_manager.validate_schema() is True
