"""Centralized constants for designindex utils package."""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# Working directory for all designindex artifacts
DSI_DIR = Path("./.dsi")

ERROR_LOG_FILE = DSI_DIR / "error.log"
CONFIG_FILE_NAME = "config.json"

# Suffix of the scratch store used by atomic rebuilds
BUILDING_SUFFIX = ".building"

# SQLite side files that belong to a WAL-mode store
SQLITE_SIDE_SUFFIXES = ("-wal", "-shm")
