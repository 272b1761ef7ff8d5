"""
Configuration settings for the Character Browser
"""

import copy
import json
import os
from typing import Any, Dict, Optional

import dotenv

from simple_logger import LogLevel

from character_browser.errors import ConfigError
from character_browser.models.pagination import PAGE_SIZES
from character_browser.models.filters import SORT_KEYS


MODES = ("server", "full")

DEFAULT_CONFIG = {
    "api": {
        "base_url": "https://rickandmortyapi.com/api",
    },
    "http": {
        "timeout": 15,
        "impersonate": "chrome110",
    },
    "ui": {
        "mode": "server",
        "per_page": 20,
        "sort": "name-az",
        "episode_preview": 5,
        "resident_preview": 10,
    },
    "pagination": {
        "stitch_pages": True,
    },
    "logging": {
        "path": "logs/character_browser.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.character_browser_config.json")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge `override` into `base` section by section (in place)."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file or environment variables
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = config_file or CONFIG_FILE

    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _deep_merge(config, file_config)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Error loading config file {path}: {e}") from e

    # Environment (and .env) override the file
    dotenv.load_dotenv()

    if os.environ.get("CHARACTER_BROWSER_BASE_URL"):
        config["api"]["base_url"] = os.environ["CHARACTER_BROWSER_BASE_URL"]

    if os.environ.get("CHARACTER_BROWSER_MODE"):
        config["ui"]["mode"] = os.environ["CHARACTER_BROWSER_MODE"]

    return config


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of `config` with nested `overrides` merged in."""
    return _deep_merge(copy.deepcopy(config), overrides)


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Raise ConfigError for settings the app cannot run with."""
    ui = config.get("ui", {})

    if ui.get("mode") not in MODES:
        raise ConfigError(f"Unknown mode {ui.get('mode')!r}; expected one of {', '.join(MODES)}")

    if ui.get("per_page") not in PAGE_SIZES:
        raise ConfigError(
            f"Unsupported page size {ui.get('per_page')!r}; expected one of "
            + ", ".join(str(size) for size in PAGE_SIZES)
        )

    if ui.get("sort") not in SORT_KEYS:
        raise ConfigError(f"Unknown sort key {ui.get('sort')!r}")

    if not config.get("api", {}).get("base_url"):
        raise ConfigError("api.base_url must be set")

    level = str(config.get("logging", {}).get("level", "INFO")).upper()
    if level not in LogLevel.__members__:
        raise ConfigError(f"Unknown log level {level!r}")

    return config
