"""Helpers for loading the user configuration file (~/.apkstack/config.json)."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

CONFIG_DIR = Path.home() / ".apkstack"
CONFIG_FILE = CONFIG_DIR / "config.json"

CATALOG_ENV_VAR: Final[str] = "APKSTACK_CATALOG"
CATALOG_CONFIG_KEY: Final[str] = "catalog_path"
WORKERS_CONFIG_KEY: Final[str] = "scan_workers"


@lru_cache(maxsize=1)
def load_config() -> dict[str, Any]:
    """Load configuration data from disk (cached)."""

    if not CONFIG_FILE.exists():
        return {}

    try:
        raw = CONFIG_FILE.read_text()
    except OSError:
        return {}

    try:
        data = json.loads(raw)
    except ValueError:
        return {}

    if isinstance(data, dict):
        return data

    return {}


def get_config_value(key: str, default: Any | None = None) -> Any | None:
    """Fetch a configuration value by key."""

    return load_config().get(key, default)


def reload_config() -> None:
    """Force the cached configuration to be reloaded on next access."""

    load_config.cache_clear()


def get_catalog_path() -> Path | None:
    """Resolve the default catalog file via env/config."""

    raw_value = os.environ.get(CATALOG_ENV_VAR) or get_config_value(CATALOG_CONFIG_KEY)
    if not isinstance(raw_value, str) or not raw_value:
        return None
    return Path(raw_value).expanduser()


def get_scan_workers() -> int | None:
    """Get the configured thread count for library scanning."""

    value = get_config_value(WORKERS_CONFIG_KEY)
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return None
