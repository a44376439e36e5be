"""Application configuration management."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from countdown.models import AppConfig, WindowPosition

log = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".config" / "countdown"
_CONFIG_FILE = _CONFIG_DIR / "config.json"


def load_config() -> AppConfig:
    """Load config from disk, returning defaults if none exists."""
    if _CONFIG_FILE.exists():
        try:
            data = json.loads(_CONFIG_FILE.read_text())
            return AppConfig(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as exc:
            log.warning("Ignoring unreadable config %s: %s", _CONFIG_FILE, exc)
    return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Write config to disk. Returns the config file path."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(config.model_dump_json(indent=2))
    return _CONFIG_FILE


def set_tick_interval(seconds: float) -> AppConfig:
    """Change how often the countdown ticks and save config.

    Raises pydantic.ValidationError for non-positive or oversized values.
    """
    current = load_config()
    config = AppConfig(tick_interval=seconds, window_position=current.window_position)
    save_config(config)
    return config


def set_window_position(position: WindowPosition) -> AppConfig:
    """Set where the GUI window opens and save config."""
    config = load_config()
    config.window_position = position
    save_config(config)
    return config


def reset_config() -> AppConfig:
    """Restore default settings."""
    config = AppConfig()
    save_config(config)
    return config
