"""Runtime configuration for designindex - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from designindex.utils.constants import CONFIG_FILE_NAME, DSI_DIR
from designindex.utils.logging import logger

DEFAULTS = {
    "paths": {
        "db": "./.dsi/design_index.db",
        "tokens_dir": "./design-system/packages/tokens",
        "styles_dir": "./design-system/packages/styles",
        "vue_components_dir": "./vue/src/components",
        "react_components_dir": "./react/src/components",
        "docs_dir": "./design-system/src/docs",
        "icons_file": "./design-system/packages/icons/js/icons.js",
        "log_dir": "./.dsi/logs",
    },
    "build": {
        "mode": "strict",
        "replace": "atomic",
        "batch_size": 200,
    },
    "search": {
        "token_limit": 20,
        "docs_limit": 5,
        "icon_limit": 20,
        "snippet_chars": 200,
    },
}

CHOICES = {
    ("build", "mode"): ("strict", "lenient"),
    ("build", "replace"): ("atomic", "eager"),
}


def _coerce(default_value: Any, value: str) -> Any:
    if isinstance(default_value, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, float):
        return float(value)
    return value


def _accept(section: str, key: str, value: Any) -> bool:
    allowed = CHOICES.get((section, key))
    if allowed is not None and value not in allowed:
        logger.warning(f"Ignoring {section}.{key}={value!r}: expected one of {', '.join(allowed)}")
        return False
    return True


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .dsi/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (DESIGNINDEX_<SECTION>_<KEY>)
    2. <root>/.dsi/config.json
    3. Built-in defaults

    Relative paths stay relative; callers resolve them against ``root``.

    Args:
        root: Root directory to look for the config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / DSI_DIR.name / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                if _accept(section, key, value):
                                    cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"DESIGNINDEX_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    coerced = _coerce(cfg[section][key], value)
                except (ValueError, AttributeError) as e:
                    logger.warning(f"Invalid value for environment variable {env_var}: {value!r} - {e}")
                    continue
                if _accept(section, key, coerced):
                    cfg[section][key] = coerced

    return cfg


def resolve_path(root: str | Path, value: str | Path) -> Path:
    """Resolve a configured path against the project root."""
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return (Path(root) / candidate).resolve()


def store_path(root: str | Path = ".", db_path: str | Path | None = None) -> Path:
    """The store a command should use: ``db_path`` when given, else ``paths.db``."""
    if db_path:
        return resolve_path(root, db_path)
    return resolve_path(root, load_runtime_config(str(root))["paths"]["db"])
