"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py and appendtree_cli/config.py
"""
import pytest

from appendtree_cli.config import get_default_config_template, load_config
from core.config.runtime import (
    DisplayConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from core.schemas.errors import ConfigurationException


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.logging.level == "WARNING"
        assert config.logging.log_file is None
        assert config.display.hex_prefix is False
        assert config.display.output_format == "human"

    def test_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ConfigurationException) as exc_info:
            LoggingConfig(level="LOUD")

        assert exc_info.value.details["field_path"] == "logging.level"

    def test_unknown_output_format_rejected(self):
        with pytest.raises(ConfigurationException, match="output format"):
            DisplayConfig(output_format="xml")


class TestFromDict:
    """Tests for RuntimeConfig.from_dict()."""

    def test_partial_data(self):
        config = RuntimeConfig.from_dict({"display": {"hex_prefix": True}})

        assert config.display.hex_prefix is True
        assert config.display.output_format == "human"
        assert config.logging.level == "WARNING"

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigurationException, match="Invalid configuration"):
            RuntimeConfig.from_dict({"display": {"colour": "red"}})

    def test_to_dict_round_trip(self):
        data = {
            "logging": {"level": "INFO", "log_file": "tree.log"},
            "display": {"hex_prefix": True, "output_format": "json"},
            "extra": {"team": "audit"},
        }

        assert RuntimeConfig.from_dict(data).to_dict() == data


class TestFromEnv:
    """Tests for environment variable loading."""

    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("APPENDTREE_LOG_LEVEL", "debug")
        monkeypatch.setenv("APPENDTREE_HEX_PREFIX", "true")
        monkeypatch.setenv("APPENDTREE_OUTPUT_FORMAT", "JSON")

        config = RuntimeConfig.from_env()

        assert config.logging.level == "DEBUG"
        assert config.display.hex_prefix is True
        assert config.display.output_format == "json"

    def test_env_overrides_file_values(self, monkeypatch):
        config = RuntimeConfig.from_dict({"display": {"hex_prefix": True}})
        monkeypatch.setenv("APPENDTREE_HEX_PREFIX", "false")
        monkeypatch.setenv("APPENDTREE_LOG_LEVEL", "ERROR")

        overridden = config.with_env_overrides()

        assert overridden.display.hex_prefix is False
        assert overridden.logging.level == "ERROR"
        # Original untouched
        assert config.display.hex_prefix is True

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config

    def test_invalid_env_value_rejected(self, monkeypatch):
        monkeypatch.setenv("APPENDTREE_OUTPUT_FORMAT", "xml")

        with pytest.raises(ConfigurationException):
            RuntimeConfig().with_env_overrides()


class TestFromYaml:
    """Tests for YAML loading."""

    def test_load(self, tmp_path):
        path = tmp_path / "appendtree.yaml"
        path.write_text("logging:\n  level: info\ndisplay:\n  output_format: json\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.logging.level == "INFO"
        assert config.display.output_format == "json"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path).to_dict() == RuntimeConfig().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationException, match="mapping"):
            RuntimeConfig.from_yaml(path)

    @pytest.mark.parametrize(
        "value,expected",
        [('"false"', False), ('"true"', True), ('"no"', False), ("yes", True), ("false", False)],
    )
    def test_hex_prefix_normalized(self, tmp_path, value, expected):
        """Quoted YAML strings are read as flags, the same way env values are."""
        path = tmp_path / "appendtree.yaml"
        path.write_text(f"display:\n  hex_prefix: {value}\n")

        assert RuntimeConfig.from_yaml(path).display.hex_prefix is expected

    def test_hex_prefix_wrong_type(self, tmp_path):
        path = tmp_path / "appendtree.yaml"
        path.write_text("display:\n  hex_prefix: [1]\n")

        with pytest.raises(ConfigurationException) as exc_info:
            RuntimeConfig.from_yaml(path)

        assert exc_info.value.details["field_path"] == "display.hex_prefix"

    def test_output_format_case_insensitive(self, tmp_path):
        """YAML and env both accept JSON in any case."""
        path = tmp_path / "appendtree.yaml"
        path.write_text("display:\n  output_format: JSON\n")

        assert RuntimeConfig.from_yaml(path).display.output_format == "json"

    def test_quoted_false_prefix_in_cli(self, tmp_path, monkeypatch, capsys):
        """A quoted "false" hex_prefix keeps roots unprefixed in CLI output."""
        from appendtree_cli.main import main
        from fixtures.common import ROOT_5_10

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / "custom.yaml"
        path.write_text('display:\n  hex_prefix: "false"\n')

        assert main(["--config", str(path), "root", "5", "10"]) == 0

        assert f"Root: {ROOT_5_10}\n" in capsys.readouterr().out

    def test_template_is_loadable(self, tmp_path):
        """The CLI template parses to the default configuration."""
        path = tmp_path / "template.yaml"
        path.write_text(get_default_config_template())

        assert RuntimeConfig.from_yaml(path).to_dict() == RuntimeConfig().to_dict()


class TestLoadConfig:
    """Tests for the CLI config search."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("display:\n  hex_prefix: true\n")

        assert load_config(path).display.hex_prefix is True

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_discovers_cwd_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "appendtree.yaml").write_text("logging:\n  level: ERROR\n")

        assert load_config().logging.level == "ERROR"

    def test_falls_back_to_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("APPENDTREE_LOG_LEVEL", "INFO")

        assert load_config().logging.level == "INFO"


class TestDefaultConfig:
    """Tests for the process-wide default."""

    def test_set_and_get(self):
        custom = RuntimeConfig.from_dict({"display": {"hex_prefix": True}})
        try:
            set_default_config(custom)
            assert get_default_config() is custom
        finally:
            set_default_config(None)

    def test_lazy_from_env(self, monkeypatch):
        set_default_config(None)
        monkeypatch.setenv("APPENDTREE_OUTPUT_FORMAT", "json")
        try:
            assert get_default_config().display.output_format == "json"
        finally:
            set_default_config(None)
