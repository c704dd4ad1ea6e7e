"""
Configuration Management - YAML-based configuration with environment overrides
=============================================================================

This module handles all configuration aspects including:
- Loading from YAML files
- Environment variable overrides
- Default values
- Configuration validation
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .exceptions import ConfigError


@dataclass
class ResponderConfig:
    """
    Response engine configuration.

    Selects the rule table and controls the random source used to
    pick among candidate replies.
    """
    # Empty means the built-in rule table
    rules_file: str = ""

    # Fixed seed for reproducible replies (None = unseeded)
    random_seed: Optional[int] = None

    # Write the built-in table to rules_file when the file is missing
    create_rules_file: bool = False

    def validate(self) -> None:
        """Validate responder configuration."""
        if self.random_seed is not None and (
            isinstance(self.random_seed, bool) or not isinstance(self.random_seed, int)
        ):
            raise ConfigError(f"random_seed must be an integer, got {self.random_seed!r}")

        if self.create_rules_file and not self.rules_file:
            raise ConfigError("create_rules_file requires rules_file to be set")


@dataclass
class UIConfig:
    """
    User interface configuration.

    Controls settings for both the terminal UI (TUI) and web UI.
    """
    # Web UI settings
    web_host: str = "127.0.0.1"
    web_port: int = 8080
    web_debug: bool = False

    # Display settings
    show_timestamps: bool = True

    # Input validation
    max_input_length: int = 1000

    def validate(self) -> None:
        """Validate UI configuration."""
        if not isinstance(self.web_port, int) or isinstance(self.web_port, bool):
            raise ConfigError(f"web_port must be an integer: {self.web_port!r}")
        if self.web_port < 1 or self.web_port > 65535:
            raise ConfigError(f"Invalid web port: {self.web_port}")

        if not isinstance(self.max_input_length, int) or isinstance(self.max_input_length, bool):
            raise ConfigError(
                f"max_input_length must be an integer: {self.max_input_length!r}"
            )
        if self.max_input_length < 1:
            raise ConfigError("max_input_length must be at least 1")


@dataclass
class Config:
    """
    Main configuration container.

    Aggregates all configuration sections into a single object
    and provides methods for loading, saving, and validating.
    """
    # Application settings
    app_name: str = "Eliza Chat"
    version: str = "1.0.0"
    debug: bool = False
    json_logs: bool = False

    # Configuration sections
    responder: ResponderConfig = field(default_factory=ResponderConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # Paths (set at runtime)
    config_dir: str = ""
    log_dir: str = ""

    def validate(self) -> None:
        """
        Validate all configuration sections.

        Raises:
            ConfigError: If any configuration section is invalid
        """
        self.responder.validate()
        self.ui.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "app_name": self.app_name,
            "version": self.version,
            "debug": self.debug,
            "json_logs": self.json_logs,
            "responder": asdict(self.responder),
            "ui": asdict(self.ui),
        }


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory path.

    Returns:
        Path to the configuration directory
    """
    if "ELIZA_CHAT_CONFIG_DIR" in os.environ:
        return Path(os.environ["ELIZA_CHAT_CONFIG_DIR"])

    if "XDG_CONFIG_HOME" in os.environ:
        return Path(os.environ["XDG_CONFIG_HOME"]) / "eliza-chat"

    return Path.home() / ".config" / "eliza-chat"


def get_default_log_dir() -> Path:
    """
    Get the default log directory path.

    Returns:
        Path to the log directory
    """
    if "ELIZA_CHAT_LOG_DIR" in os.environ:
        return Path(os.environ["ELIZA_CHAT_LOG_DIR"])

    if "XDG_STATE_HOME" in os.environ:
        return Path(os.environ["XDG_STATE_HOME"]) / "eliza-chat" / "logs"

    return Path.home() / ".local" / "state" / "eliza-chat" / "logs"


def load_config(config_path: Optional[str] = None, load_env: bool = True) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    This function loads configuration in the following order:
    1. Default values from dataclass
    2. Values from YAML file
    3. Environment variable overrides

    Args:
        config_path: Path to configuration file (optional)
        load_env: Whether to load environment variable overrides

    Returns:
        Config object with loaded values

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    config = Config()

    config.config_dir = str(get_default_config_dir())
    config.log_dir = str(get_default_log_dir())

    if config_path:
        yaml_path = Path(config_path)
        if not yaml_path.exists():
            raise ConfigError("Config file not found", {"path": str(yaml_path)})
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}", {"path": str(yaml_path)})
        except IOError as e:
            raise ConfigError(f"Failed to read config file: {e}", {"path": str(yaml_path)})

        if not isinstance(yaml_config, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(yaml_path)})

        _apply_yaml_config(config, yaml_config)

        # Relative rule paths are resolved against the config file
        rules_file = config.responder.rules_file
        if rules_file and not Path(rules_file).expanduser().is_absolute():
            config.responder.rules_file = str(yaml_path.parent / rules_file)

    if load_env:
        _apply_env_overrides(config)

    config.validate()

    return config


def _apply_yaml_config(config: Config, yaml_config: Dict[str, Any]) -> None:
    """
    Apply YAML configuration values to Config object.

    Unknown keys are ignored.

    Args:
        config: Config object to update
        yaml_config: Dictionary of configuration values from YAML
    """
    for key in ("app_name", "version", "debug", "json_logs", "log_dir"):
        if key in yaml_config:
            setattr(config, key, yaml_config[key])

    for section in ("responder", "ui"):
        section_cfg = yaml_config.get(section)
        if section_cfg is None:
            continue
        if not isinstance(section_cfg, dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")

        section_obj = getattr(config, section)
        for key, value in section_cfg.items():
            if hasattr(section_obj, key):
                setattr(section_obj, key, value)


def _apply_env_overrides(config: Config) -> None:
    """
    Apply environment variable overrides to Config object.

    Environment variables follow the pattern: ELIZA_CHAT_SECTION_KEY
    For example: ELIZA_CHAT_RESPONDER_RULES_FILE, ELIZA_CHAT_UI_WEB_PORT

    Args:
        config: Config object to update

    Raises:
        ConfigError: If a value cannot be converted
    """
    env_mappings = {
        "ELIZA_CHAT_DEBUG": (None, "debug", bool),
        "ELIZA_CHAT_JSON_LOGS": (None, "json_logs", bool),

        # Responder settings
        "ELIZA_CHAT_RESPONDER_RULES_FILE": ("responder", "rules_file"),
        "ELIZA_CHAT_RESPONDER_RANDOM_SEED": ("responder", "random_seed", int),
        "ELIZA_CHAT_RESPONDER_CREATE_RULES_FILE": ("responder", "create_rules_file", bool),

        # UI settings
        "ELIZA_CHAT_UI_WEB_HOST": ("ui", "web_host"),
        "ELIZA_CHAT_UI_WEB_PORT": ("ui", "web_port", int),
        "ELIZA_CHAT_UI_WEB_DEBUG": ("ui", "web_debug", bool),
        "ELIZA_CHAT_UI_MAX_INPUT_LENGTH": ("ui", "max_input_length", int),
    }

    for env_var, mapping in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section = mapping[0]
        key = mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str

        target = getattr(config, section) if section else config

        if converter == bool:
            converted = value.lower() in ("true", "1", "yes", "on")
        else:
            try:
                converted = converter(value)
            except ValueError:
                raise ConfigError(
                    f"Invalid value for {env_var}: {value!r}",
                    {"expected": converter.__name__}
                )

        setattr(target, key, converted)


def save_config(config: Config, config_path: Optional[str] = None) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Config object to save
        config_path: Path to save configuration (optional)

    Raises:
        ConfigError: If configuration cannot be saved
    """
    if config_path:
        yaml_path = Path(config_path)
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    except IOError as e:
        raise ConfigError(f"Failed to save config file: {e}", {"path": str(yaml_path)})


def create_default_config(config_dir: Optional[str] = None) -> Config:
    """
    Create a default configuration file with sensible defaults.

    Writes ``config.yaml`` pointing at a ``rules.yaml`` next to it, so
    the rule table can be edited without touching code.

    Args:
        config_dir: Directory to create configuration in (optional)

    Returns:
        Config object with default values
    """
    config = Config()
    config.config_dir = config_dir or str(get_default_config_dir())
    config.log_dir = str(Path(config.config_dir) / "logs")
    config.responder.rules_file = "rules.yaml"
    config.responder.create_rules_file = True

    Path(config.config_dir).mkdir(parents=True, exist_ok=True)

    save_config(config)

    return config
