# touchfish/config.py
"""
Configuration storage.

Responsibilities:
- Locate the per-user config file
- Load YAML configuration and validate it against JSON Schema
- Save a validated time window

This module does NOT:
- interact with git
- compute timestamps
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os
import sys

import yaml
from jsonschema import Draft202012Validator

from touchfish.validation import (
    DEFAULT_WINDOW,
    TimeWindow,
    format_time,
    parse_window,
    validate_window,
)


APP_NAME = "git-touchfish-commit"
CONFIG_FILENAME = "config.yaml"
CONFIG_DIR_ENV = "GIT_TC_CONFIG_DIR"


class ConfigError(RuntimeError):
    pass


def _schema_path() -> Path:
    """
    Resolve schema.json relative to this module so it works from any CWD.
    """
    return Path(__file__).resolve().parent / "schema.json"


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser() / CONFIG_FILENAME

    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        root = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        root = Path(xdg) if xdg else Path.home() / ".config"

    return root / APP_NAME / CONFIG_FILENAME


def _load_schema(schema_path: Path) -> Dict[str, Any]:
    try:
        raw = schema_path.read_text(encoding="utf-8")
    except Exception as e:
        raise ConfigError(f"Failed to read schema file: {schema_path}") from e

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Schema is not valid JSON: {schema_path}") from e

    if not isinstance(parsed, dict):
        raise ConfigError(f"Schema must be a JSON object: {schema_path}")

    return parsed


def _load_yaml(config_path: Path) -> Optional[Dict[str, Any]]:
    """
    Returns None when the file does not exist or is empty.
    """
    if not config_path.exists():
        return None

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except Exception as e:
        raise ConfigError(f"Failed to load config: {config_path}") from e

    if raw is None:
        return None

    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a mapping at top level: {config_path}")

    return raw


def _check_schema(raw_config: Dict[str, Any], config_path: Path) -> None:
    schema = _load_schema(_schema_path())

    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(raw_config), key=lambda e: list(e.path))

    if errors:
        messages = []
        for err in errors:
            path = ".".join(str(p) for p in err.path)
            prefix = path if path else "<root>"
            messages.append(f"{prefix}: {err.message}")
        raise ConfigError(f"Invalid configuration in {config_path}:\n" + "\n".join(messages))


def load_window(config_path: Path | None = None) -> TimeWindow:
    """
    Load the configured time window.

    Falls back to 00:00 - 02:00 when nothing has been stored yet.
    Raises ConfigError if the file exists but is unreadable or invalid.
    """
    path = config_path if config_path is not None else default_config_path()

    raw_config = _load_yaml(path)
    if raw_config is None:
        return DEFAULT_WINDOW

    _check_schema(raw_config, path)

    return parse_window(raw_config["start_time"], raw_config["end_time"])


def store_window(window: TimeWindow, config_path: Path | None = None) -> Path:
    """
    Persist a time window. Returns the path written.
    """
    window = validate_window(window.start, window.end)
    path = config_path if config_path is not None else default_config_path()

    record = {
        "start_time": format_time(window.start),
        "end_time": format_time(window.end),
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(record, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
            newline="\n",
        )
    except OSError as e:
        raise ConfigError(f"Failed to write config: {path}") from e

    return path
