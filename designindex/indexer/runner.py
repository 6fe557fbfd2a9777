"""Indexer workflow runner."""

import os
import time
from pathlib import Path
from typing import Any

from designindex.config_runtime import load_runtime_config, resolve_path
from designindex.utils.constants import BUILDING_SUFFIX, SQLITE_SIDE_SUFFIXES
from designindex.utils.logging import logger

from .core import FileSource
from .database import DatabaseManager, connect_store
from .orchestrator import IndexerOrchestrator

REPLACE_STRATEGIES = ("atomic", "eager")


def remove_store(db_path: Path) -> None:
    """Delete a store file together with its WAL side files."""
    for suffix in ("", *SQLITE_SIDE_SUFFIXES):
        candidate = db_path.with_name(db_path.name + suffix)
        if candidate.exists():
            candidate.unlink()


def _promote(building: Path, db_path: Path) -> None:
    """Move a finished scratch store over the live one."""
    for suffix in SQLITE_SIDE_SUFFIXES:
        stale = db_path.with_name(db_path.name + suffix)
        if stale.exists():
            stale.unlink()
    os.replace(building, db_path)
    for suffix in SQLITE_SIDE_SUFFIXES:
        leftover = building.with_name(building.name + suffix)
        if leftover.exists():
            leftover.unlink()


def run_rebuild(
    root_path: str = ".",
    db_path: str | None = None,
    mode: str | None = None,
    replace: str | None = None,
    path_overrides: dict[str, str] | None = None,
    source: FileSource | None = None,
    batch_size: int | None = None,
) -> dict[str, Any]:
    """Rebuild the design index from scratch.

    ``replace`` picks what happens to an existing store:

    - ``atomic``: build into ``<db>.building`` and move it over the old store
      only when every category succeeded. On failure the old store is kept
      and the scratch file removed.
    - ``eager``: delete the old store first and build in place. On failure the
      categories committed before the error stay in the new store.

    Unset arguments come from ``load_runtime_config(root_path)``.
    """
    start_time = time.time()
    root = Path(root_path).resolve()

    if not root.exists():
        raise FileNotFoundError(f"Root path does not exist: {root_path}")

    config = load_runtime_config(str(root))
    paths = {key: str(resolve_path(root, value)) for key, value in config["paths"].items()}
    for key, value in (path_overrides or {}).items():
        if value is not None:
            paths[key] = str(resolve_path(root, value))

    db_file = resolve_path(root, db_path) if db_path else Path(paths["db"])
    mode = mode or config["build"]["mode"]
    replace = replace or config["build"]["replace"]
    batch_size = batch_size or config["build"]["batch_size"]

    if replace not in REPLACE_STRATEGIES:
        raise ValueError(
            f"Unknown replace strategy '{replace}'. Expected one of: {', '.join(REPLACE_STRATEGIES)}"
        )

    db_file.parent.mkdir(parents=True, exist_ok=True)

    if replace == "eager":
        remove_store(db_file)
        target = db_file
    else:
        target = db_file.with_name(db_file.name + BUILDING_SUFFIX)
        remove_store(target)

    manager = DatabaseManager(connect_store(str(target)), batch_size)
    succeeded = False
    try:
        manager.create_schema()
        orchestrator = IndexerOrchestrator(manager, paths, mode=mode, source=source)
        categories = orchestrator.index()
        stats = manager.table_counts()
        manager.conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")
        succeeded = True
    finally:
        manager.close()
        if replace == "atomic":
            if succeeded:
                _promote(target, db_file)
            else:
                logger.warning(f"Rebuild failed, keeping previous store at {db_file}")
                remove_store(target)

    elapsed = time.time() - start_time
    logger.info(f"Design index written to {db_file} in {elapsed:.2f}s")

    return {
        "success": True,
        "db_path": str(db_file),
        "stats": stats,
        "categories": categories,
        "elapsed": elapsed,
    }
