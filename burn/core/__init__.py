"""
Burn Core - Shared services for all modules.

Usage:
    from burn.core import get_config, get_config_value, get_logger, BURN_PATHS
"""

from burn.core.config import get_config, get_config_value, BURN_PATHS
from burn.core.errors import (
    BurnError,
    ConfigurationError,
    PersistenceError,
    TransportError,
    ValidationError,
)
from burn.core.logging import get_logger

__all__ = [
    "get_config",
    "get_config_value",
    "BURN_PATHS",
    "get_logger",
    "BurnError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "PersistenceError",
]
