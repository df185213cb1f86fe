"""
Configuration management for event-folders.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from event_folders.exceptions import ConfigError
from event_folders.models.enums import BracketStyle
from event_folders.utils import DEFAULT_LOCALE, get_locale_profile

logger = logging.getLogger(__name__)

# Default locations to search for config.yaml
CONFIG_SEARCH_PATHS = [
    Path("config.yaml"),
    Path("src/python/config.yaml"),
    Path.home() / ".event_folders" / "config.yaml",
]

# EXIF DateTimeOriginal
DEFAULT_DATE_TAKEN_TAG = 36867

DEFAULT_CONFIG: Dict[str, Any] = {
    "locale": DEFAULT_LOCALE,
    "date_taken_tag": DEFAULT_DATE_TAKEN_TAG,
    "bracket_style": None,
    "log_parse_failures": None,
    "keyword": {
        "require_prefix": True,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file, layered over the defaults.

    Args:
        config_path: Specific path to config file. If None, searches default locations.

    Returns:
        Dictionary containing configuration. Defaults only when no file is found.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    path_to_load = None

    if config_path:
        if config_path.exists():
            path_to_load = config_path
        else:
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                path_to_load = path
                break

    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path_to_load:
        logger.debug("No config file found, using defaults")
        return config

    logger.info("Loading config from %s", path_to_load)

    try:
        with open(path_to_load, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse configuration file {path_to_load}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError("Configuration file must contain a mapping at the top level.")

    return _merge(config, raw)


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(base[key], value)
        else:
            base[key] = value
    return base


def get_locale(config: Dict[str, Any]) -> str:
    """
    Get the fixed locale used to parse date-taken text.

    Args:
        config: Configuration dictionary

    Returns:
        Canonical locale name

    Raises:
        ConfigError: If the locale is not supported
    """
    locale = config.get("locale") or DEFAULT_LOCALE
    try:
        return get_locale_profile(str(locale)).name
    except ValueError as e:
        raise ConfigError(str(e)) from e


def get_date_taken_tag(config: Dict[str, Any]) -> int:
    """Get the EXIF tag id read as the date taken."""
    tag = config.get("date_taken_tag", DEFAULT_DATE_TAKEN_TAG)
    try:
        return int(tag)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"date_taken_tag must be an integer EXIF tag id, got {tag!r}") from e


def get_bracket_style(config: Dict[str, Any], dry_run: bool) -> BracketStyle:
    """
    Get the bracket convention for category tags.

    Preview runs default to round brackets, live runs to square brackets.

    Args:
        config: Configuration dictionary
        dry_run: Whether this is a preview run

    Returns:
        The BracketStyle to compose tags with
    """
    value = config.get("bracket_style")
    if value is None:
        return BracketStyle.ROUND if dry_run else BracketStyle.SQUARE
    try:
        return BracketStyle(str(value).lower())
    except ValueError as e:
        raise ConfigError(
            f"bracket_style must be 'square' or 'round', got {value!r}"
        ) from e


def get_log_parse_failures(config: Dict[str, Any], dry_run: bool) -> bool:
    """
    Whether every per-file date parse failure should be logged.

    Defaults to True for preview runs and False for live runs.
    """
    value = config.get("log_parse_failures")
    if value is None:
        return dry_run
    if not isinstance(value, bool):
        raise ConfigError(f"log_parse_failures must be a boolean, got {value!r}")
    return value


def get_require_prefix(config: Dict[str, Any]) -> bool:
    """Whether the keyword pass only touches folders carrying a date prefix."""
    keyword = config.get("keyword") or {}
    value = keyword.get("require_prefix", True)
    if not isinstance(value, bool):
        raise ConfigError(f"keyword.require_prefix must be a boolean, got {value!r}")
    return value


def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get the logging configuration from config.

    Args:
        config: Configuration dictionary

    Returns:
        Dictionary with 'level' and 'file' keys

    Raises:
        ConfigError: If the level is not a logging level name or number
    """
    logging_config = config.get("logging") or {}
    level = logging_config.get("level") or "INFO"

    if isinstance(level, str):
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"logging.level must be a logging level name, got {level!r}")
    elif isinstance(level, bool) or not isinstance(level, int):
        raise ConfigError(f"logging.level must be a logging level name, got {level!r}")

    return {
        "level": level,
        "file": logging_config.get("file"),
    }
