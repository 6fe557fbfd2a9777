"""Base database manager with core infrastructure."""

import sqlite3
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager

from designindex.utils.logging import logger

from ..config import DEFAULT_BATCH_SIZE, MAX_BATCH_SIZE
from ..exceptions import IntegrityViolationError
from ..schema import CHILD_TABLES, FLUSH_ORDER, FTS_MIRRORS, TABLES, get_table_schema


def validate_table_name(table: str) -> str:
    """Validate table name against schema to prevent SQL injection."""
    if table not in TABLES:
        raise ValueError(f"Invalid table name: {table}. Must be one of the schema-defined tables.")
    return table


def connect_store(db_path: str, timeout: float = 60) -> sqlite3.Connection:
    """Open a store connection with the multi-reader / single-writer settings."""
    conn = sqlite3.connect(str(db_path), timeout=timeout)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA synchronous=NORMAL")
    return conn


class BaseDatabaseManager:
    """Base database manager providing core infrastructure.

    Owns no global state: it wraps the connection it is given. Rows are
    staged in ``generic_batches`` and written by ``flush_batch`` in
    FLUSH_ORDER. Parent rows carry a negative temporary id in position 0;
    child rows carry their parent's temporary id, which is swapped for the
    real ``lastrowid`` at flush time.
    """

    def __init__(self, conn: sqlite3.Connection, batch_size: int = DEFAULT_BATCH_SIZE):
        self.conn = conn

        if batch_size <= 0:
            self.batch_size = DEFAULT_BATCH_SIZE
        elif batch_size > MAX_BATCH_SIZE:
            self.batch_size = MAX_BATCH_SIZE
        else:
            self.batch_size = batch_size

        self.generic_batches: dict[str, list[tuple]] = defaultdict(list)
        self.id_mapping: dict[str, dict[int, int]] = defaultdict(dict)
        self.receipt: dict[str, int] = defaultdict(int)
        self._temp_id = 0

    @classmethod
    def open(cls, db_path: str, batch_size: int = DEFAULT_BATCH_SIZE):
        """Open ``db_path`` with store pragmas and wrap it."""
        return cls(connect_store(db_path), batch_size)

    def begin_transaction(self) -> None:
        """Start a new transaction."""
        self.conn.execute("BEGIN IMMEDIATE")

    def commit(self) -> None:
        """Commit the current transaction."""
        try:
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise RuntimeError(f"Failed to commit database changes: {e}") from e

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.conn.rollback()

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()

    def next_temp_id(self) -> int:
        self._temp_id -= 1
        return self._temp_id

    def validate_schema(self) -> bool:
        """Validate database schema matches expected definitions."""
        from ..schema import validate_all_tables

        mismatches = validate_all_tables(self.conn.cursor())
        if not mismatches:
            logger.debug("All table schemas validated successfully")
            return True

        for table_name, errors in mismatches.items():
            for error in errors:
                logger.warning(f"Schema mismatch in {table_name}: {error}")
        return False

    def create_schema(self) -> None:
        """Create all tables, indexes, cascade triggers, full-text mirrors and their triggers."""
        cursor = self.conn.cursor()

        for table_name in FLUSH_ORDER:
            table_schema = TABLES[table_name]
            cursor.execute(table_schema.create_table_sql())

            for create_index_sql in table_schema.create_indexes_sql():
                cursor.execute(create_index_sql)

        for table_name in FLUSH_ORDER:
            for trigger_sql in TABLES[table_name].create_triggers_sql():
                cursor.execute(trigger_sql)

        for mirror in FTS_MIRRORS.values():
            cursor.execute(mirror.create_sql())
            for trigger_sql in mirror.trigger_sql():
                cursor.execute(trigger_sql)

        self.conn.commit()

    def clear_tables(self) -> None:
        """Delete every row, children first. Triggers empty the FTS mirrors."""
        cursor = self.conn.cursor()

        try:
            for table_name in reversed(FLUSH_ORDER):
                validated_table = validate_table_name(table_name)
                cursor.execute(f"DELETE FROM {validated_table}")
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise RuntimeError(f"Failed to clear existing data: {e}") from e

    def table_counts(self) -> dict[str, int]:
        """Row count of every base table."""
        cursor = self.conn.cursor()
        counts = {}
        for table_name in FLUSH_ORDER:
            cursor.execute(f"SELECT COUNT(*) FROM {validate_table_name(table_name)}")
            counts[table_name] = cursor.fetchone()[0]
        return counts

    def discard_batches(self) -> None:
        """Drop staged rows and id mappings (after a rollback)."""
        self.generic_batches.clear()
        self.id_mapping.clear()

    def maybe_flush(self) -> None:
        """Flush once any staged table reaches the batch size."""
        if any(len(rows) >= self.batch_size for rows in self.generic_batches.values()):
            self.flush_batch()

    def _insert_sql(self, table_name: str) -> str:
        columns = get_table_schema(table_name).insert_columns()
        placeholders = ", ".join("?" for _ in columns)
        return f"INSERT INTO {table_name} ({', '.join(columns)}) VALUES ({placeholders})"

    def flush_generic_batch(self, table_name: str) -> None:
        """Flush a single table's staged rows using the schema-driven INSERT."""
        batch = self.generic_batches.get(table_name, [])
        if not batch:
            return

        schema = get_table_schema(table_name)
        query = self._insert_sql(table_name)
        expected = len(schema.insert_columns())
        cursor = self.conn.cursor()

        if schema.keyed:
            mapping = self.id_mapping[table_name]
            for temp_id, *values in batch:
                if len(values) != expected:
                    raise RuntimeError(
                        f"Column mismatch for table '{table_name}': "
                        f"got {len(values)} values, schema has {expected} columns"
                    )
                cursor.execute(query, values)
                mapping[temp_id] = cursor.lastrowid
        else:
            rows = batch
            if table_name in CHILD_TABLES:
                parent_table, _ = CHILD_TABLES[table_name]
                rows = [self._resolve_parent(table_name, parent_table, row) for row in batch]
            cursor.executemany(query, rows)

        self.receipt[table_name] += len(batch)
        self.generic_batches[table_name] = []

    def _resolve_parent(self, table_name: str, parent_table: str, row: tuple) -> tuple:
        parent_ref = row[0]
        if parent_ref > 0:
            return row
        real_id = self.id_mapping[parent_table].get(parent_ref)
        if real_id is None:
            raise IntegrityViolationError(
                f"ORPHAN DATA ERROR: {table_name} row references unknown {parent_table} "
                f"temporary id {parent_ref}",
                details={"table": table_name, "parent": parent_table, "row": row},
            )
        return (real_id, *row[1:])

    def flush_batch(self) -> None:
        """Execute all pending batch inserts, parents before children."""
        try:
            for table_name in FLUSH_ORDER:
                if self.generic_batches.get(table_name):
                    self.flush_generic_batch(table_name)

        except sqlite3.IntegrityError as e:
            error_msg = str(e)
            pending = {tbl: len(rows) for tbl, rows in self.generic_batches.items() if rows}
            logger.error(f"IntegrityError in flush_batch: {error_msg} (pending: {pending})")

            if "UNIQUE constraint failed" in error_msg:
                raise IntegrityViolationError(
                    f"DATABASE INTEGRITY ERROR: Duplicate row insertion attempted.\n"
                    f"  Error: {error_msg}",
                    details={"pending": pending},
                ) from e
            raise IntegrityViolationError(
                f"DATABASE INTEGRITY ERROR: {error_msg}", details={"pending": pending}
            ) from e

    @contextmanager
    def category_transaction(self, category: str) -> Iterator[dict[str, int]]:
        """All-or-nothing write scope for one category's records.

        Yields the receipt dict (rows stored per table); it is complete once
        the block exits without error.
        """
        self.discard_batches()
        self.receipt = defaultdict(int)
        self.begin_transaction()
        try:
            yield self.receipt
            self.flush_batch()
            self.commit()
        except Exception:
            self.rollback()
            self.discard_batches()
            logger.error(f"Rolled back {category} insert")
            raise
        finally:
            self.id_mapping.clear()

        logger.debug(f"Committed {category}: {dict(self.receipt)}")
