"""
Configuration for crate-availability.

Each setting is looked up in order:
1. Environment variable (CRATE_AVAILABILITY_*)
2. Config file (config.json in the user's config directory)
3. Built-in default

Settings are resolved on every call so a changed environment takes effect
without restarting the process.
"""

import json
import logging
import math
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_REGISTRY_URL = "https://crates.io"
DEFAULT_COLOR_MODE = "auto"

COLOR_MODES = ("auto", "always", "never")

ENV_TIMEOUT = "CRATE_AVAILABILITY_TIMEOUT"
ENV_REGISTRY = "CRATE_AVAILABILITY_REGISTRY"
ENV_COLOR = "CRATE_AVAILABILITY_COLOR"


def get_config_dir() -> Path:
    """Get the config directory for this app."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return base / 'crate-availability'


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / 'config.json'


def load_config() -> dict:
    """Load the config file, returning an empty dict if missing or invalid."""
    config_file = get_config_file()
    try:
        if config_file.exists():
            config = json.loads(config_file.read_text())
            if isinstance(config, dict):
                return config
            logger.warning("Ignoring config file %s: not a JSON object", config_file)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring config file %s: %s", config_file, e)
    return {}


def _lookup(env_var: str, key: str):
    """Return (value, source) for a setting, or (None, None) if unset."""
    if (value := os.environ.get(env_var)) not in (None, ""):
        return value, "environment variable"

    config = load_config()
    if config.get(key) is not None:
        return config[key], "config file"

    return None, None


def get_setting_source(env_var: str, key: str) -> str:
    """Describe where a setting comes from (for display purposes)."""
    _, source = _lookup(env_var, key)
    return source or "default"


def get_default_timeout() -> float:
    """
    Get the default request timeout in seconds.

    Non-numeric, negative, infinite or NaN values are ignored and
    DEFAULT_TIMEOUT is used.
    """
    value, source = _lookup(ENV_TIMEOUT, "timeout")
    if value is None:
        return DEFAULT_TIMEOUT

    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid timeout %r from %s, using %ss", value, source, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT

    if not math.isfinite(timeout) or timeout < 0:
        logger.warning("Out of range timeout %r from %s, using %ss", value, source, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT

    return timeout


def get_registry_url() -> str:
    """Get the registry base URL, without a trailing slash."""
    value, _ = _lookup(ENV_REGISTRY, "registry_url")
    if not value:
        return DEFAULT_REGISTRY_URL
    return str(value).rstrip("/")


def get_color_mode() -> str:
    """Get the color mode: auto, always or never."""
    value, source = _lookup(ENV_COLOR, "color")
    if value is None:
        return DEFAULT_COLOR_MODE

    mode = str(value).strip().lower()
    if mode not in COLOR_MODES:
        logger.warning("Invalid color mode %r from %s, using %s", value, source, DEFAULT_COLOR_MODE)
        return DEFAULT_COLOR_MODE
    return mode
