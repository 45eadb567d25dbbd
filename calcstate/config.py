"""Configuration loader and validator for calcstate.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/calcstate/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values.
"""

from __future__ import annotations

import json
import logging
import os
import re

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = '~/.config/calcstate/config.json'

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'empty_display': '0',
    'error_display': 'Error',
    'max_digits': 16,
    'precision': 15,
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    s = re.sub(r"^[ \t]*//.*$", "", s, flags=re.MULTILINE)
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


def _int_in_range(conf: dict, key: str, low: int, high: int) -> int:
    raw = conf.get(key, DEFAULT_CONFIG[key])
    if isinstance(raw, bool):
        raise ValueError(f"Invalid '{key}': {raw}")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid '{key}': {raw}")
    if not (low <= value <= high):
        raise ValueError(f"Invalid '{key}': {raw} (must be between {low} and {high})")
    return value


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    out = dict(DEFAULT_CONFIG)

    # empty_display may be '' (blank screen after clear)
    empty = conf.get('empty_display', out['empty_display'])
    if not isinstance(empty, str):
        raise ValueError("Invalid 'empty_display': must be a string")
    out['empty_display'] = empty

    err = conf.get('error_display', out['error_display'])
    if not isinstance(err, str) or not err:
        raise ValueError("Invalid 'error_display': must be a non-empty string")
    out['error_display'] = err

    out['max_digits'] = _int_in_range(conf, 'max_digits', 1, 64)
    out['precision'] = _int_in_range(conf, 'precision', 1, 17)

    return out


def _read_and_merge(path: str, target_config: dict) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        logger.warning("Cannot read config %s: %s", path, exc)
        return False

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    if not isinstance(cfg, dict):
        logger.warning("Invalid config %s: top level must be an object", path)
        return False

    try:
        validated = validate_config(cfg)
    except ValueError as verr:
        logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
        else:
            logger.debug("Unknown config key %r in %s ignored", k, path)
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist). Otherwise falls back to
    ``~/.config/calcstate/config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    config = dict(DEFAULT_CONFIG)
    path = config_path if config_path is not None else os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(path):
        _read_and_merge(path, config)
    elif config_path is not None:
        logger.debug("Config %s not found, using defaults", config_path)
    return config


# ------------------------------------------------------------------
# ConfigManager
# ------------------------------------------------------------------

class ConfigManager:
    """Holds the effective configuration and can reload it from disk."""

    def __init__(self, config_path: str | None = None):
        self._config_path = config_path or os.path.expanduser(USER_CONFIG_PATH)
        self._config: dict = load_config(self._config_path)

    def reload(self) -> bool:
        """Reload configuration from file. Returns True if the file was applied."""
        config = dict(DEFAULT_CONFIG)
        applied = os.path.exists(self._config_path) and _read_and_merge(self._config_path, config)
        self._config = config
        return bool(applied)

    def get(self, key: str, default=None):
        return self._config.get(key, default)

    def set(self, key: str, value) -> None:
        """Set a single value; raises ``ValueError`` if it does not validate."""
        candidate = dict(self._config)
        candidate[key] = value
        self._config = validate_config(candidate)

    def get_all(self) -> dict:
        return dict(self._config)

    def reset_to_defaults(self) -> None:
        self._config = dict(DEFAULT_CONFIG)

    @property
    def config_path(self) -> str:
        return self._config_path
