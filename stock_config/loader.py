"""
Settings loader (``stock_config.loader``).

Responsibility
--------------
Reads an optional YAML settings file and layers environment overrides on
top, producing a ``StockSettings``.

Failure modes
-------------
* Missing YAML file given explicitly  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key or wrong value type  -> ``ValueError``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from stock_config.schema import StockSettings

ENV_CONFIG_PATH = "STOCK_LEDGER_CONFIG"
ENV_DATABASE_URL = "STOCK_LEDGER_DATABASE_URL"
ENV_LOG_LEVEL = "STOCK_LEDGER_LOG_LEVEL"

_INT_FIELDS = ("pool_size", "max_overflow", "pool_timeout", "low_stock_threshold")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its top-level mapping.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def parse_settings(data: Mapping[str, Any]) -> StockSettings:
    """Build settings from a mapping; keys not in StockSettings are rejected."""
    unknown = set(data) - StockSettings.field_names()
    if unknown:
        raise ValueError(f"Unknown settings keys: {', '.join(sorted(unknown))}")

    values = dict(data)
    for name in _INT_FIELDS:
        if name in values:
            value = values[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Setting '{name}' must be an integer, got {value!r}")
    if "echo" in values and not isinstance(values["echo"], bool):
        raise ValueError(f"Setting 'echo' must be a boolean, got {values['echo']!r}")
    if "log_level" in values:
        values["log_level"] = str(values["log_level"]).upper()

    return StockSettings(**values)


def apply_env_overrides(
    settings: StockSettings,
    environ: Mapping[str, str],
) -> StockSettings:
    """
    Environment wins over file values.

    ``STOCK_LEDGER_DATABASE_URL`` takes precedence over ``DATABASE_URL``.
    """
    overrides: dict[str, Any] = {}
    database_url = environ.get(ENV_DATABASE_URL) or environ.get("DATABASE_URL")
    if database_url:
        overrides["database_url"] = database_url
    log_level = environ.get(ENV_LOG_LEVEL)
    if log_level:
        overrides["log_level"] = log_level.upper()
    return replace(settings, **overrides) if overrides else settings


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> StockSettings:
    """
    Resolve settings: defaults, then YAML file, then environment.

    Args:
        path: YAML file.  Falls back to ``$STOCK_LEDGER_CONFIG``; with
            neither set only defaults and environment apply.
        environ: Environment mapping (``os.environ`` by default).
    """
    environ = os.environ if environ is None else environ
    if path is None:
        path = environ.get(ENV_CONFIG_PATH) or None

    settings = parse_settings(load_yaml_file(Path(path))) if path else StockSettings()
    return apply_env_overrides(settings, environ)
