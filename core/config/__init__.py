"""
Runtime Configuration Module

Provides configuration loading and management for appendtree.
"""

from .runtime import (
    DisplayConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DisplayConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
