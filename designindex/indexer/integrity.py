"""Standalone consistency check for a built store.

Children reference their parents by construction, so none of this runs
during a rebuild. It is the after-the-fact audit behind ``dsi check``.
"""

import sqlite3
from dataclasses import dataclass, field

from designindex.utils.logging import logger

from .exceptions import IntegrityViolationError
from .schema import CHILD_TABLES, FTS_MIRRORS


@dataclass
class IntegrityReport:
    """Outcome of check_integrity.

    Attributes:
        orphans: child table -> rows whose parent id no longer exists
        fts_mismatches: mirror name -> {"indexed": n, "rows": m} where n != m
        errors: problems reported by SQLite itself
    """

    orphans: dict[str, int] = field(default_factory=dict)
    fts_mismatches: dict[str, dict[str, int]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.orphans or self.fts_mismatches or self.errors)

    def problems(self) -> list[str]:
        lines = [f"{table}: {count} orphan rows" for table, count in self.orphans.items()]
        lines += [
            f"{name}: {counts['indexed']} indexed vs {counts['rows']} rows"
            for name, counts in self.fts_mismatches.items()
        ]
        lines += self.errors
        return lines

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "orphans": self.orphans,
            "fts_mismatches": self.fts_mismatches,
            "errors": self.errors,
        }


def count_orphans(conn: sqlite3.Connection) -> dict[str, int]:
    orphans = {}
    for child, (parent, column) in CHILD_TABLES.items():
        count = conn.execute(
            f"SELECT COUNT(*) FROM {child} c "
            f"LEFT JOIN {parent} p ON c.{column} = p.id WHERE p.id IS NULL"
        ).fetchone()[0]
        if count:
            orphans[child] = count
    return orphans


def compare_fts_counts(conn: sqlite3.Connection) -> dict[str, dict[str, int]]:
    mismatches = {}
    for name, mirror in FTS_MIRRORS.items():
        indexed = conn.execute(mirror.indexed_count_sql()).fetchone()[0]
        rows = conn.execute(f"SELECT COUNT(*) FROM {mirror.base_table}").fetchone()[0]
        if indexed != rows:
            mismatches[name] = {"indexed": indexed, "rows": rows}
    return mismatches


def run_engine_checks(conn: sqlite3.Connection) -> list[str]:
    """FTS5 ``integrity-check`` per mirror, then ``PRAGMA foreign_key_check``."""
    errors = []
    for name in FTS_MIRRORS:
        try:
            conn.execute(f"INSERT INTO {name}({name}) VALUES('integrity-check')")
        except sqlite3.DatabaseError as e:
            errors.append(f"{name}: integrity-check failed: {e}")
    conn.commit()

    for table, rowid, parent, _fkid in conn.execute("PRAGMA foreign_key_check").fetchall():
        errors.append(f"{table}: row {rowid} references missing {parent} row")
    return errors


def check_integrity(conn: sqlite3.Connection, strict: bool = False) -> IntegrityReport:
    """Audit orphan child rows, full-text mirror drift and engine-level consistency.

    Args:
        conn: Connection to a built store
        strict: Raise IntegrityViolationError instead of returning a failing report

    Returns:
        IntegrityReport; ``report.ok`` is True when nothing was found
    """
    report = IntegrityReport(
        orphans=count_orphans(conn),
        fts_mismatches=compare_fts_counts(conn),
        errors=run_engine_checks(conn),
    )

    if report.ok:
        logger.info("Store is consistent")
        return report

    for line in report.problems():
        logger.warning(f"Consistency problem: {line}")

    if strict:
        raise IntegrityViolationError(
            "DATABASE INTEGRITY ERROR: consistency check failed\n"
            + "\n".join(f"  - {line}" for line in report.problems()),
            details=report.to_dict(),
        )
    return report
