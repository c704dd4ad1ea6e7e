"""
Test Configuration Module
========================

Unit tests for configuration loading and validation.
"""

import os
import pytest
from pathlib import Path

# Add parent directory to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import (
    Config, ResponderConfig, UIConfig, load_config, save_config,
    create_default_config, get_default_config_dir
)
from core.exceptions import ConfigError, ElizaChatError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the user's configuration and environment."""
    for key in list(os.environ):
        if key.startswith("ELIZA_CHAT_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("ELIZA_CHAT_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("ELIZA_CHAT_LOG_DIR", str(tmp_path / "logs"))


class TestResponderConfig:
    """Tests for ResponderConfig."""

    def test_default_values(self):
        """Test default values."""
        config = ResponderConfig()
        assert config.rules_file == ""
        assert config.random_seed is None
        assert config.create_rules_file is False

    def test_validation_valid(self):
        """Test validation of a valid config."""
        ResponderConfig(rules_file="rules.yaml", random_seed=3).validate()

    def test_validation_invalid_seed(self):
        """Test that a non-integer seed is rejected."""
        with pytest.raises(ConfigError):
            ResponderConfig(random_seed="abc").validate()

    def test_validation_bool_seed(self):
        """Test that a boolean seed is rejected."""
        with pytest.raises(ConfigError):
            ResponderConfig(random_seed=True).validate()

    def test_create_requires_rules_file(self):
        """Test that create_rules_file needs a rules file."""
        with pytest.raises(ConfigError):
            ResponderConfig(create_rules_file=True).validate()


class TestUIConfig:
    """Tests for UIConfig."""

    def test_default_values(self):
        """Test default values."""
        config = UIConfig()
        assert config.web_port == 8080
        assert config.max_input_length == 1000

    def test_invalid_port(self):
        """Test invalid port."""
        with pytest.raises(ConfigError):
            UIConfig(web_port=70000).validate()

    def test_invalid_max_input_length(self):
        """Test invalid max input length."""
        with pytest.raises(ConfigError):
            UIConfig(max_input_length=0).validate()

    def test_non_integer_port(self):
        """Test that a quoted port is rejected."""
        with pytest.raises(ConfigError):
            UIConfig(web_port="8080").validate()

    def test_non_integer_max_input_length(self):
        """Test that a boolean input limit is rejected."""
        with pytest.raises(ConfigError):
            UIConfig(max_input_length=True).validate()


class TestConfig:
    """Tests for main Config class."""

    def test_default_values(self):
        """Test default values."""
        config = Config()
        assert config.app_name == "Eliza Chat"
        assert config.responder is not None
        assert config.ui is not None

    def test_to_dict(self):
        """Test dictionary conversion."""
        d = Config().to_dict()
        assert "app_name" in d
        assert "responder" in d
        assert d["ui"]["web_host"] == "127.0.0.1"

    def test_config_error_details_in_str(self):
        """Test that error details appear in str()."""
        error = ConfigError("Bad value", {"path": "x.yaml"})
        assert isinstance(error, ElizaChatError)
        assert str(error) == "Bad value | Details: {'path': 'x.yaml'}"


class TestLoadConfig:
    """Tests for load_config and save_config."""

    def test_defaults_without_file(self, tmp_path):
        """Test defaults when no config file exists."""
        config = load_config()
        assert config.config_dir == str(tmp_path / "config")
        assert config.log_dir == str(tmp_path / "logs")
        assert config.responder.rules_file == ""

    def test_yaml_values(self, tmp_path):
        """Test values loaded from YAML."""
        path = tmp_path / "custom.yaml"
        path.write_text(
            "app_name: Test Bot\n"
            "responder:\n"
            "  rules_file: my_rules.yaml\n"
            "  random_seed: 5\n"
            "ui:\n"
            "  web_port: 9000\n"
            "  unknown_key: ignored\n",
            encoding="utf-8"
        )

        config = load_config(str(path))

        assert config.app_name == "Test Bot"
        assert config.responder.random_seed == 5
        assert config.ui.web_port == 9000
        # Relative rule paths resolve next to the config file
        assert config.responder.rules_file == str(tmp_path / "my_rules.yaml")

    def test_missing_explicit_file(self, tmp_path):
        """Test missing explicit file."""
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path):
        """Test malformed yaml."""
        path = tmp_path / "bad.yaml"
        path.write_text("ui: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_quoted_port_in_yaml(self, tmp_path):
        """Test that a string port from YAML fails validation."""
        path = tmp_path / "bad.yaml"
        path.write_text("ui:\n  web_port: '8080'\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="web_port"):
            load_config(str(path))

    def test_invalid_section(self, tmp_path):
        """Test invalid section."""
        path = tmp_path / "bad.yaml"
        path.write_text("ui: 5\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_value_fails_validation(self, tmp_path):
        """Test invalid value fails validation."""
        path = tmp_path / "bad.yaml"
        path.write_text("ui:\n  web_port: 0\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_env_overrides(self, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.setenv("ELIZA_CHAT_UI_WEB_PORT", "9100")
        monkeypatch.setenv("ELIZA_CHAT_RESPONDER_RANDOM_SEED", "11")
        monkeypatch.setenv("ELIZA_CHAT_DEBUG", "yes")

        config = load_config()

        assert config.ui.web_port == 9100
        assert config.responder.random_seed == 11
        assert config.debug is True

    def test_env_override_bad_int(self, monkeypatch):
        """Test a non-integer environment override."""
        monkeypatch.setenv("ELIZA_CHAT_UI_WEB_PORT", "eighty")
        with pytest.raises(ConfigError):
            load_config()

    def test_env_ignored_when_disabled(self, monkeypatch):
        """Test that environment is ignored when disabled."""
        monkeypatch.setenv("ELIZA_CHAT_UI_WEB_PORT", "9100")
        assert load_config(load_env=False).ui.web_port == 8080

    def test_save_and_reload(self, tmp_path):
        """Test save and reload."""
        config = Config()
        config.config_dir = str(tmp_path / "config")
        config.ui.web_port = 8181

        save_config(config)
        reloaded = load_config()

        assert reloaded.ui.web_port == 8181

    def test_create_default_config(self, tmp_path):
        """Test create default config."""
        config = create_default_config(str(tmp_path / "fresh"))

        assert (tmp_path / "fresh" / "config.yaml").exists()

        reloaded = load_config(str(tmp_path / "fresh" / "config.yaml"))
        assert reloaded.responder.rules_file == str(tmp_path / "fresh" / "rules.yaml")
        assert reloaded.responder.create_rules_file is True

    def test_default_config_dir_env(self, tmp_path):
        """Test config dir from environment."""
        assert get_default_config_dir() == tmp_path / "config"
