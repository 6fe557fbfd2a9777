"""Centralized logging configuration using Loguru.

Usage:
    from designindex.utils.logging import logger
    logger.info(f"Indexed {count} tokens")
    logger.debug("Only shows if DESIGNINDEX_LOG_LEVEL=DEBUG")

Environment Variables:
    DESIGNINDEX_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    DESIGNINDEX_LOG_JSON: 0|1 (default: 0, human-readable)
    DESIGNINDEX_LOG_FILE: path to an extra NDJSON log file (optional)
"""

import json
import os
import sys
from pathlib import Path

from loguru import logger

logger.remove()

NUMERIC_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("DESIGNINDEX_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("DESIGNINDEX_LOG_JSON", "0") == "1"
_log_file = os.environ.get("DESIGNINDEX_LOG_FILE")


def _record_to_json(record) -> str:
    """Serialize a loguru record to one NDJSON line."""
    payload = {
        "level": NUMERIC_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "module": record["name"],
        "pid": record["process"].id,
    }
    for key, value in record["extra"].items():
        payload[key] = value

    if record["exception"]:
        exc = record["exception"]
        payload["err"] = {
            "type": exc.type.__name__ if exc.type else "Error",
            "message": str(exc.value) if exc.value else "",
        }
    return json.dumps(payload, default=str)


def json_sink(message) -> None:
    """Write records as NDJSON to stderr.

    Never call logger.* inside a sink - it recurses.
    """
    sys.stderr.write(_record_to_json(message.record) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

if _json_mode:
    logger.add(json_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,
    )

if _log_file:

    def _file_json_sink(message) -> None:
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_record_to_json(message.record) + "\n")

    logger.add(_file_json_sink, level="DEBUG")


def configure_file_logging(log_dir: Path, level: str = "DEBUG") -> int:
    """Add a rotating human-readable file handler.

    Args:
        log_dir: Directory for log files (e.g., Path(".dsi/logs"))
        level: Minimum log level for file output

    Returns:
        The loguru handler id, so callers can remove it again.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "designindex.log"

    return logger.add(
        log_file,
        rotation="10 MB",
        retention="7 days",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )


__all__ = [
    "logger",
    "configure_file_logging",
    "json_sink",
]
