"""
Core Module - Foundation components for Eliza Chat
==================================================

This module provides the foundational components including:
- Configuration management
- Logging setup
- Exception handling
"""

from .config import Config, load_config, save_config, create_default_config
from .exceptions import (
    ElizaChatError,
    ConfigError,
    InvalidConfiguration,
    UIError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "create_default_config",
    "ElizaChatError",
    "ConfigError",
    "InvalidConfiguration",
    "UIError",
    "setup_logging",
    "get_logger",
]
