"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
Environment variables (APPENDTREE_* prefix) override file settings.
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in order."""
    return [
        Path.cwd() / "appendtree.yaml",
        Path.cwd() / ".appendtree.yaml",
        Path.home() / ".config" / "appendtree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ConfigurationException: If the file or env values are invalid
    """
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()

    for default_path in default_config_paths():
        if default_path.exists():
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()


def get_default_config_template() -> str:
    """Return a commented YAML configuration template."""
    return """\
# appendtree configuration
logging:
  level: WARNING        # DEBUG, INFO, WARNING, ERROR
  log_file: null        # also write logs to this file

display:
  hex_prefix: false     # render digests as 0x...
  output_format: human  # human or json
"""
