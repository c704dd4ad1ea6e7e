"""
Rule Files - Loading and saving response rule tables
====================================================

Rule tables are stored as YAML (``.yaml``/``.yml``) or JSON (``.json``)
documents with a ``rules`` list and a ``defaultReplies`` list.
"""

import copy
import json
import random
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from core.config import Config
from core.exceptions import InvalidConfiguration
from core.logging import get_logger
from .defaults import DEFAULT_RULES, DEFAULT_REPLIES
from .engine import MatcherConfig, ResponseMatcher
from .templates import placeholders

logger = get_logger("rules.loader")

JSON_SUFFIXES = {".json"}


def default_rule_data() -> Dict[str, Any]:
    """Return a fresh copy of the built-in rule table as plain data."""
    return {
        "rules": copy.deepcopy(DEFAULT_RULES),
        "defaultReplies": list(DEFAULT_REPLIES),
    }


def default_matcher_config() -> MatcherConfig:
    """Build the configuration for the built-in rule table."""
    return MatcherConfig.from_dict(default_rule_data())


def check_placeholders(config: MatcherConfig) -> int:
    """
    Warn about templates that reference groups their matcher lacks.

    Such placeholders are left untouched at reply time, so they are
    reported but not rejected.

    Args:
        config: Configuration to inspect

    Returns:
        Number of templates with dangling placeholders
    """
    dangling = 0
    for rule in config.rules:
        group_count = rule.matcher.groups
        for reply in rule.replies:
            missing = [k for k in placeholders(reply) if k > group_count]
            if missing:
                dangling += 1
                logger.warning(
                    f"Rule '{rule.name or rule.pattern}' reply {reply!r} uses "
                    f"placeholder(s) {missing} but the matcher has {group_count} group(s)"
                )
    return dangling


def load_matcher_config(path: Union[str, Path]) -> MatcherConfig:
    """
    Load a rule table from a YAML or JSON file.

    Args:
        path: Rule file path

    Returns:
        MatcherConfig with rules in file order

    Raises:
        InvalidConfiguration: If the file cannot be read or parsed, or
            describes an invalid rule
    """
    rules_path = Path(path).expanduser()

    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            if rules_path.suffix.lower() in JSON_SUFFIXES:
                data = json.load(f)
            else:
                data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidConfiguration(
            f"Failed to parse rule file: {e}",
            {"path": str(rules_path)}
        )
    except OSError as e:
        raise InvalidConfiguration(
            f"Failed to read rule file: {e}",
            {"path": str(rules_path)}
        )

    try:
        config = MatcherConfig.from_dict(data)
    except InvalidConfiguration as e:
        e.details.setdefault("path", str(rules_path))
        raise

    check_placeholders(config)
    logger.info(
        f"Loaded {len(config.rules)} rules and "
        f"{len(config.default_replies)} default replies from {rules_path}"
    )
    return config


def save_matcher_config(config: MatcherConfig, path: Union[str, Path]) -> None:
    """
    Save a rule table to a YAML or JSON file.

    Args:
        config: Configuration to save
        path: Destination; the suffix selects the format

    Raises:
        InvalidConfiguration: If the file cannot be written
    """
    rules_path = Path(path).expanduser()
    rules_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(rules_path, "w", encoding="utf-8") as f:
            if rules_path.suffix.lower() in JSON_SUFFIXES:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
            else:
                yaml.safe_dump(
                    config.to_dict(), f,
                    default_flow_style=False, sort_keys=False, allow_unicode=True
                )
    except OSError as e:
        raise InvalidConfiguration(
            f"Failed to write rule file: {e}",
            {"path": str(rules_path)}
        )

    logger.info(f"Saved {len(config.rules)} rules to {rules_path}")


def load_or_create(path: Union[str, Path]) -> MatcherConfig:
    """
    Load a rule file, writing the built-in table first if it is missing.

    Args:
        path: Rule file path

    Returns:
        Loaded configuration
    """
    rules_path = Path(path).expanduser()

    if not rules_path.exists():
        logger.info(f"Rule file {rules_path} not found, writing built-in rules")
        config = default_matcher_config()
        save_matcher_config(config, rules_path)
        return config

    return load_matcher_config(rules_path)


def build_matcher(config: Config) -> ResponseMatcher:
    """
    Create the response matcher described by the application config.

    Args:
        config: Application configuration

    Returns:
        ResponseMatcher using the configured rule table and seed

    Raises:
        InvalidConfiguration: If the rule table is invalid
    """
    responder = config.responder

    if not responder.rules_file:
        matcher_config = default_matcher_config()
        logger.debug("Using built-in rule table")
    elif responder.create_rules_file:
        matcher_config = load_or_create(responder.rules_file)
    else:
        matcher_config = load_matcher_config(responder.rules_file)

    rng = random.Random(responder.random_seed)
    return ResponseMatcher(matcher_config, rng=rng)
