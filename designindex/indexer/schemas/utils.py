"""Schema utility classes - Foundation for all schema definitions."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field


@dataclass
class Column:
    """Represents a database column with type and constraints."""

    name: str
    type: str
    nullable: bool = True
    default: str | None = None
    primary_key: bool = False
    autoincrement: bool = False
    unique: bool = False

    def to_sql(self) -> str:
        """Generate SQL column definition."""
        parts = [self.name, self.type]
        if not self.nullable:
            parts.append("NOT NULL")
        if self.default is not None:
            parts.append(f"DEFAULT {self.default}")
        if self.primary_key:
            parts.append("PRIMARY KEY")

            if self.autoincrement and self.type.upper() == "INTEGER":
                parts.append("AUTOINCREMENT")
        if self.unique:
            parts.append("UNIQUE")
        return " ".join(parts)


@dataclass
class ForeignKey:
    """Child-to-parent reference, rendered as a table-level FOREIGN KEY clause."""

    local_columns: list[str]
    foreign_table: str
    foreign_columns: list[str]
    on_delete: str | None = "CASCADE"

    def to_sql(self) -> str:
        clause = (
            f"FOREIGN KEY ({', '.join(self.local_columns)}) "
            f"REFERENCES {self.foreign_table} ({', '.join(self.foreign_columns)})"
        )
        if self.on_delete:
            clause += f" ON DELETE {self.on_delete}"
        return clause

    def cascade_trigger_sql(self, local_table: str) -> str | None:
        """AFTER DELETE trigger on the parent that removes ``local_table`` rows.

        Writes are not checked against the reference; only deletes propagate.
        """
        if self.on_delete != "CASCADE":
            return None
        match = " AND ".join(
            f"{local} = old.{foreign}"
            for local, foreign in zip(self.local_columns, self.foreign_columns)
        )
        return (
            f"CREATE TRIGGER IF NOT EXISTS {local_table}_cascade_ad "
            f"AFTER DELETE ON {self.foreign_table} BEGIN\n"
            f"  DELETE FROM {local_table} WHERE {match};\nEND"
        )

    def validate(self, local_table: str, all_tables: dict[str, TableSchema]) -> list[str]:
        """Validate foreign key definition against schema."""
        errors = []

        if self.foreign_table not in all_tables:
            errors.append(f"Foreign table '{self.foreign_table}' does not exist")
            return errors

        local_schema = all_tables[local_table]
        foreign_schema = all_tables[self.foreign_table]

        local_col_names = set(local_schema.column_names())
        for col in self.local_columns:
            if col not in local_col_names:
                errors.append(f"Local column '{col}' not found in table '{local_table}'")

        foreign_col_names = set(foreign_schema.column_names())
        for col in self.foreign_columns:
            if col not in foreign_col_names:
                errors.append(f"Foreign column '{col}' not found in table '{self.foreign_table}'")

        if len(self.local_columns) != len(self.foreign_columns):
            errors.append(
                f"Column count mismatch: {len(self.local_columns)} local vs "
                f"{len(self.foreign_columns)} foreign"
            )

        return errors


@dataclass
class TableSchema:
    """Represents a complete table schema.

    ``keyed`` tables are parents: their rows are inserted one at a time so the
    freshly assigned ``id`` can be handed to child rows in the same transaction.
    """

    name: str
    columns: list[Column]
    indexes: list[tuple[str, list[str]]] = field(default_factory=list)
    unique_constraints: list[list[str]] = field(default_factory=list)
    foreign_keys: list[ForeignKey] = field(default_factory=list)
    keyed: bool = False

    def column_names(self) -> list[str]:
        """Get list of column names in definition order."""
        return [col.name for col in self.columns]

    def insert_columns(self) -> list[str]:
        """Columns an insert supplies (everything but the autoincrement id)."""
        return [col.name for col in self.columns if not col.autoincrement]

    def parent_table(self) -> str | None:
        return self.foreign_keys[0].foreign_table if self.foreign_keys else None

    def create_table_sql(self) -> str:
        """Generate CREATE TABLE statement."""
        col_defs = [col.to_sql() for col in self.columns]

        for unique_cols in self.unique_constraints:
            col_defs.append(f"UNIQUE({', '.join(unique_cols)})")

        for fk in self.foreign_keys:
            col_defs.append(fk.to_sql())

        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    " + ",\n    ".join(col_defs) + "\n)"

    def create_indexes_sql(self) -> list[str]:
        """Generate CREATE INDEX statements."""
        stmts = []
        for idx_name, idx_cols in self.indexes:
            cols_str = ", ".join(idx_cols)
            stmts.append(f"CREATE INDEX IF NOT EXISTS {idx_name} ON {self.name} ({cols_str})")
        return stmts

    def create_triggers_sql(self) -> list[str]:
        """Cascade-delete triggers for every CASCADE foreign key."""
        stmts = [fk.cascade_trigger_sql(self.name) for fk in self.foreign_keys]
        return [sql for sql in stmts if sql]

    def validate_against_db(self, cursor: sqlite3.Cursor) -> tuple[bool, list[str]]:
        """Validate that actual database table matches this schema."""
        errors = []

        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (self.name,))
        if not cursor.fetchone():
            errors.append(f"Table {self.name} does not exist")
            return False, errors

        cursor.execute(f"PRAGMA table_info({self.name})")
        actual_cols = {row[1]: row[2] for row in cursor.fetchall()}

        for col in self.columns:
            if col.name not in actual_cols:
                errors.append(f"Column {self.name}.{col.name} missing in database")
            elif actual_cols[col.name].upper() != col.type.upper():
                errors.append(
                    f"Column {self.name}.{col.name} type mismatch: "
                    f"expected {col.type}, got {actual_cols[col.name]}"
                )

        return len(errors) == 0, errors


@dataclass
class FullTextMirror:
    """FTS5 shadow table over a base table, kept in sync by triggers.

    The mirror is an external-content table (``content=<base>``), so it stores
    only the inverted index; the three triggers are the sole writers.
    """

    name: str
    base_table: str
    columns: list[str]
    tokenize: str = "unicode61"

    def create_sql(self) -> str:
        cols = ",\n    ".join(self.columns)
        return (
            f"CREATE VIRTUAL TABLE IF NOT EXISTS {self.name} USING fts5(\n    {cols},\n"
            f"    content={self.base_table},\n    content_rowid=id,\n"
            f"    tokenize='{self.tokenize}'\n)"
        )

    def trigger_sql(self) -> list[str]:
        cols = ", ".join(self.columns)
        new_vals = ", ".join(f"new.{c}" for c in self.columns)
        old_vals = ", ".join(f"old.{c}" for c in self.columns)
        delete_row = (
            f"INSERT INTO {self.name}({self.name}, rowid, {cols}) "
            f"VALUES('delete', old.id, {old_vals});"
        )
        insert_row = f"INSERT INTO {self.name}(rowid, {cols}) VALUES (new.id, {new_vals});"
        return [
            f"CREATE TRIGGER IF NOT EXISTS {self.name}_ai AFTER INSERT ON {self.base_table} BEGIN\n"
            f"  {insert_row}\nEND",
            f"CREATE TRIGGER IF NOT EXISTS {self.name}_ad AFTER DELETE ON {self.base_table} BEGIN\n"
            f"  {delete_row}\nEND",
            f"CREATE TRIGGER IF NOT EXISTS {self.name}_au AFTER UPDATE ON {self.base_table} BEGIN\n"
            f"  {delete_row}\n  {insert_row}\nEND",
        ]

    def indexed_count_sql(self) -> str:
        """Rows the index actually holds (one docsize row per indexed document)."""
        return f"SELECT COUNT(*) FROM {self.name}_docsize"
