"""
Configuration service for the pair finder.

This module provides functions to load and save configuration settings.
"""

import json
import os
from datetime import date
from typing import Any, Dict, List, Optional

from pairfinder.models import DuplicatePolicy
from pairfinder.utils.date_parsing import DATE_FORMATS
from pairfinder.utils.logger import get_logger

SETTINGS_FILE = os.getenv("PAIRFINDER_SETTINGS_FILE", "settings.json")

logger = get_logger(__name__)


def create_default_settings() -> Dict[str, Any]:
    """Create default settings dictionary."""
    return {
        "delimiter": ",",
        "has_header": False,
        "open_end_tokens": ["NULL"],
        "duplicate_policy": DuplicatePolicy.LAST_WRITE_WINS.value,
        "date_formats": list(DATE_FORMATS),
        "as_of_date": None,
        "display_preferences": {"chart_height": 500},
        "log_level": "INFO",
    }


def load_settings(settings_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from the settings file, filling in missing keys with defaults.

    A missing file yields the defaults. A corrupted file is copied to
    ``<settings_file>.backup`` and the defaults are used instead.
    """
    settings_file = settings_file or SETTINGS_FILE
    settings = create_default_settings()

    if not os.path.exists(settings_file):
        return settings

    try:
        with open(settings_file, "r") as file:
            stored = json.load(file)
    except json.JSONDecodeError as e:
        logger.warning(f"Settings file {settings_file} is corrupted: {e}")
        _backup_corrupted_file(settings_file)
        return settings
    except OSError as e:
        logger.warning(f"Cannot read settings file {settings_file}: {e}")
        return settings

    if isinstance(stored, dict):
        settings.update(stored)
    return settings


def _backup_corrupted_file(settings_file: str) -> None:
    backup_file = f"{settings_file}.backup"
    try:
        with open(settings_file, "r") as src, open(backup_file, "w") as dst:
            dst.write(src.read())
        logger.info(f"Backup of corrupted settings saved to {backup_file}")
    except OSError as e:
        logger.warning(f"Could not back up corrupted settings: {e}")


def save_settings(settings: Dict[str, Any], settings_file: Optional[str] = None) -> None:
    """Save settings to the settings file."""
    settings_file = settings_file or SETTINGS_FILE
    directory = os.path.dirname(settings_file)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    with open(settings_file, "w") as file:
        json.dump(settings, file, indent=4)


def load_duplicate_policy(settings: Optional[Dict[str, Any]] = None) -> DuplicatePolicy:
    """Load the duplicate record policy, falling back to last-write-wins."""
    settings = settings if settings is not None else load_settings()
    try:
        return DuplicatePolicy(settings.get("duplicate_policy"))
    except ValueError:
        logger.warning(
            f"Unknown duplicate policy {settings.get('duplicate_policy')!r}, "
            "using last_write_wins"
        )
        return DuplicatePolicy.LAST_WRITE_WINS


def save_duplicate_policy(policy: DuplicatePolicy) -> None:
    settings = load_settings()
    settings["duplicate_policy"] = DuplicatePolicy(policy).value
    save_settings(settings)


def load_date_formats(settings: Optional[Dict[str, Any]] = None) -> List[str]:
    settings = settings if settings is not None else load_settings()
    return settings.get("date_formats") or list(DATE_FORMATS)


def load_open_end_tokens(settings: Optional[Dict[str, Any]] = None) -> List[str]:
    settings = settings if settings is not None else load_settings()
    tokens = settings.get("open_end_tokens")
    if tokens is None:
        return ["NULL"]
    if isinstance(tokens, str):
        tokens = tokens.split(",")
    return [str(token).strip() for token in tokens if str(token).strip()]


def load_reader_settings(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Load the settings that control how assignment files are read."""
    settings = settings if settings is not None else load_settings()
    return {
        "delimiter": settings.get("delimiter", ","),
        "has_header": bool(settings.get("has_header", False)),
    }


def save_reader_settings(delimiter: str, has_header: bool, open_end_tokens: List[str]) -> None:
    settings = load_settings()
    settings["delimiter"] = delimiter
    settings["has_header"] = has_header
    settings["open_end_tokens"] = open_end_tokens
    save_settings(settings)


def load_as_of_date(settings: Optional[Dict[str, Any]] = None) -> date:
    """
    Date used in place of open-ended assignment ends.

    Returns the configured ``as_of_date`` when set, otherwise today's date.
    """
    settings = settings if settings is not None else load_settings()
    configured = settings.get("as_of_date")
    if configured:
        try:
            return date.fromisoformat(configured)
        except (TypeError, ValueError):
            logger.warning(f"Invalid as_of_date {configured!r}, using today")
    return date.today()


def save_as_of_date(as_of_date: Optional[date]) -> None:
    settings = load_settings()
    settings["as_of_date"] = as_of_date.isoformat() if as_of_date else None
    save_settings(settings)


def load_display_preferences(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Load display preferences from the settings file."""
    settings = settings if settings is not None else load_settings()
    return settings.get("display_preferences", {"chart_height": 500})


def save_display_preferences(preferences: Dict[str, Any]) -> None:
    """Save display preferences to the settings file."""
    settings = load_settings()
    settings["display_preferences"] = preferences
    save_settings(settings)
