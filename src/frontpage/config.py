"""YAML configuration loader for frontpage."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "default.yaml"
USER_CONFIG_PATH = Path("~/.frontpage/config.yaml").expanduser()


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load config, merging user overrides on top of defaults."""
    defaults = _load_yaml(DEFAULT_CONFIG_PATH) if DEFAULT_CONFIG_PATH.exists() else {}

    user_path = Path(config_path).expanduser() if config_path else USER_CONFIG_PATH
    if user_path.exists():
        user_cfg = _load_yaml(user_path)
        return _deep_merge(defaults, user_cfg)

    return defaults


def _load_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_server_config(config: dict) -> dict[str, Any]:
    server_cfg = dict(config.get("server", {}))
    port = os.environ.get("PORT")
    if port:
        server_cfg["port"] = int(port)
    return server_cfg


def get_logging_config(config: dict) -> dict[str, Any]:
    return config.get("logging", {})


def get_cache_config(config: dict) -> dict[str, Any]:
    return config.get("cache", {})


def get_source_config(config: dict, source_name: str) -> dict[str, Any]:
    return config.get("sources", {}).get(source_name, {})


def get_descriptions_config(config: dict) -> dict[str, Any]:
    return config.get("descriptions", {})


def get_suggestions_config(config: dict) -> dict[str, Any]:
    return config.get("suggestions", {})
