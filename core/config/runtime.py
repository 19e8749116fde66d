"""
Runtime Configuration

Central configuration for logging and digest display.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "APPENDTREE_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
OUTPUT_FORMATS = ("human", "json")


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level {self.level!r}, expected one of {', '.join(LOG_LEVELS)}",
                field_path="logging.level",
            )


@dataclass
class DisplayConfig:
    """Configuration for rendering digests."""
    hex_prefix: bool = False
    output_format: str = "human"

    def __post_init__(self):
        if isinstance(self.hex_prefix, str):
            self.hex_prefix = _env_flag(self.hex_prefix)
        elif not isinstance(self.hex_prefix, bool):
            raise ConfigurationException(
                f"hex_prefix must be a boolean, got {type(self.hex_prefix).__name__}",
                field_path="display.hex_prefix",
            )
        self.output_format = str(self.output_format).lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationException(
                f"Unknown output format {self.output_format!r}, expected one of {', '.join(OUTPUT_FORMATS)}",
                field_path="display.output_format",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - APPENDTREE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - APPENDTREE_LOG_FILE: Also write logs to this file
        - APPENDTREE_HEX_PREFIX: Prefix hex digests with 0x (true/false)
        - APPENDTREE_OUTPUT_FORMAT: human or json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}HEX_PREFIX"):
            overrides.setdefault("display", {})["hex_prefix"] = _env_flag(
                os.getenv(f"{ENV_PREFIX}HEX_PREFIX", "false")
            )
        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides.setdefault("display", {})["output_format"] = os.getenv(
                f"{ENV_PREFIX}OUTPUT_FORMAT", "human"
            ).lower()

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                details={"path": str(path)},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        logging_data = data.get("logging") or {}
        display_data = data.get("display") or {}

        try:
            logging_config = LoggingConfig(**logging_data)
            display = DisplayConfig(**display_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            logging=logging_config,
            display=display,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)
            new_config.logging.__post_init__()

        if "display" in overrides:
            for key, value in overrides["display"].items():
                setattr(new_config.display, key, value)
            new_config.display.__post_init__()

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "display": {
                "hex_prefix": self.display.hex_prefix,
                "output_format": self.display.output_format,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
