"""
Rules Module - Pattern-based response engine
============================================

This module provides the rule-based responder:
- Ordered regex rule table (first match wins)
- Random choice among each rule's candidate replies
- Positional ($1, $2, ...) capture group interpolation
- Default replies when nothing matches
- YAML/JSON rule files
"""

from .engine import ResponseMatcher, MatcherConfig, Rule, RuleMatch
from .templates import interpolate, placeholders
from .loader import (
    default_matcher_config,
    load_matcher_config,
    save_matcher_config,
    load_or_create,
    build_matcher,
)

__all__ = [
    "ResponseMatcher",
    "MatcherConfig",
    "Rule",
    "RuleMatch",
    "interpolate",
    "placeholders",
    "default_matcher_config",
    "load_matcher_config",
    "save_matcher_config",
    "load_or_create",
    "build_matcher",
]
