"""Store inspection commands: row counts and the consistency check."""

import json
import sys

import click
from rich.table import Table

from designindex.config_runtime import store_path
from designindex.context import DesignQueryEngine
from designindex.indexer.database import connect_store
from designindex.indexer.integrity import check_integrity
from designindex.pipeline.ui import console, print_error, print_header, print_status_panel
from designindex.utils.error_handler import handle_exceptions
from designindex.utils.exit_codes import ExitCodes


def require_store(root: str, db_path: str | None):
    """Resolve the store path, exiting with TASK_INCOMPLETE when it was never built."""
    db_file = store_path(root, db_path)
    if not db_file.exists():
        print_error(f"Database not found: {db_file}")
        console.print("Run 'dsi build' first to build the index.", markup=False)
        sys.exit(ExitCodes.TASK_INCOMPLETE)
    return db_file


@click.command()
@click.option("--root", default=".", help="Project root (holds .dsi/)")
@click.option("--db", "db_path", help="Store path (default: paths.db from config)")
@click.option("--json", "as_json", is_flag=True, help="Print counts as JSON")
@handle_exceptions
def stats(root, db_path, as_json):
    """Row counts per entity type in the built store."""
    engine = DesignQueryEngine.open(require_store(root, db_path))
    try:
        counts = engine.stats()
    finally:
        engine.close()

    if as_json:
        click.echo(json.dumps(counts, indent=2))
        return

    print_header("INDEX STATISTICS")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Entity", style="category")
    table.add_column("Rows", justify="right")
    for entity, count in counts.items():
        table.add_row(entity, str(count))
    console.print(table)


@click.command()
@click.option("--root", default=".", help="Project root (holds .dsi/)")
@click.option("--db", "db_path", help="Store path (default: paths.db from config)")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@handle_exceptions
def check(root, db_path, as_json):
    """Audit the store for orphan rows and full-text index drift.

    \b
    EXIT CODES:
      0  store is consistent
      1  problems found
      3  store not built yet
    """
    conn = connect_store(str(require_store(root, db_path)))
    try:
        report = check_integrity(conn)
    finally:
        conn.close()

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif report.ok:
        print_status_panel("CONSISTENT", "No orphan rows, full-text mirrors in sync",
                           "All engine checks passed", ok=True)
    else:
        problems = report.problems()
        print_status_panel("PROBLEMS", f"{len(problems)} consistency problems found",
                           "Rebuild with 'dsi build' to repair", ok=False)
        for line in problems:
            console.print(f"  - {line}", markup=False)

    if not report.ok:
        sys.exit(ExitCodes.INTEGRITY_PROBLEMS)
