"""
Configuration management for Burn.

Loads config.yaml and provides type-safe access to settings.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from burn.core.errors import ConfigurationError

# Config file location, alongside the burn package
_PACKAGE_DIR = Path(__file__).parent.parent.resolve()
CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

# Cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        reload: Force reload even if cached

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If the file is missing or is not a YAML mapping
    """
    global _config_cache

    if _config_cache is not None and not reload:
        return _config_cache

    if not CONFIG_PATH.exists():
        raise ConfigurationError(f"Config file not found: {CONFIG_PATH}")

    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file is not valid YAML: {exc}") from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {CONFIG_PATH}")

    _config_cache = loaded
    return _config_cache


def get_config_value(*keys: str, default: Any = None) -> Any:
    """
    Get a nested config value safely.

    Args:
        *keys: Path of keys to traverse (e.g., 'timesheets', 'api_url')
        default: Value to return if key not found

    Example:
        url = get_config_value('timesheets', 'api_url', default='')
    """
    config = get_config()

    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default

    return config


_TIMESHEET_DEFAULTS = {
    "api_url": "",
    "api_token": "",
    "timeout": 30,
}


def get_timesheet_settings() -> Dict[str, Any]:
    """
    Return the validated ``timesheets`` section merged over defaults.

    Raises:
        ConfigurationError: If api_url/api_token are missing or api_url is
            not an absolute http(s) URL.
    """
    cfg = get_config().get("timesheets") or {}
    result = dict(_TIMESHEET_DEFAULTS)
    result.update({k: v for k, v in cfg.items() if v is not None})

    api_url = str(result["api_url"]).strip()
    api_token = str(result["api_token"]).strip()
    if not api_url or not api_token:
        raise ConfigurationError(
            "Timesheet API not configured. Add api_url and api_token to the "
            "'timesheets' section of config.yaml"
        )

    parsed = urlparse(api_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Invalid api_url in config.yaml: {result['api_url']}")

    try:
        timeout = float(result["timeout"])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid timesheets.timeout in config.yaml: {result['timeout']}"
        ) from exc

    result["api_url"] = api_url
    result["api_token"] = api_token
    result["timeout"] = timeout
    return result


def get_hours_per_day() -> float:
    """Hours credited per projected working day (projection.hours_per_day)."""
    raw = get_config_value("projection", "hours_per_day", default=8)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid projection.hours_per_day in config.yaml: {raw}"
        ) from exc


class BurnPaths:
    """
    Centralized path access for Burn.

    All paths are loaded from config.yaml with sensible fallbacks.

    Usage:
        from burn.core.config import BURN_PATHS
        ceiling_dir = BURN_PATHS.ceiling_dir
    """

    def __init__(self):
        self._config = None

    def _ensure_config(self):
        if self._config is None:
            self._config = get_config()

    def _resolve(self, raw: str) -> Path:
        """Resolve a path: if relative, resolve against _PACKAGE_DIR."""
        p = Path(raw).expanduser()
        if not p.is_absolute():
            p = _PACKAGE_DIR / p
        return p

    def reset(self) -> None:
        """Forget the cached config so the next access re-reads it."""
        self._config = None

    @property
    def ceiling_dir(self) -> Path:
        self._ensure_config()
        raw = (self._config.get("ceiling") or {}).get("directory", "data/ceiling")
        return self._resolve(raw)

    @property
    def root(self) -> Path:
        return _PACKAGE_DIR


# Singleton instance
BURN_PATHS = BurnPaths()
