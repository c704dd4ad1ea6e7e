"""
Rules Engine - Pattern matching and template-based responses
============================================================

This module implements the core rules engine that matches incoming
messages against an ordered table of regular expressions and picks
a canned reply for the first rule that matches.

The engine is stateless: a ``ResponseMatcher`` is built once from an
immutable ``MatcherConfig`` and every call to ``resolve`` is independent
of the previous ones.
"""

import re
import random
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple, Union, Sequence

from core.exceptions import InvalidConfiguration
from .templates import interpolate


@dataclass(frozen=True)
class Rule:
    """
    A single response rule.

    Pairs a compiled, case-insensitive matcher with the candidate
    replies used when it matches.

    Attributes:
        matcher (re.Pattern): Compiled regular expression
        replies (tuple): Candidate reply templates ($1, $2, ... placeholders)
        name (str): Optional rule name for diagnostics
    """
    matcher: re.Pattern
    replies: Tuple[str, ...]
    name: str = ""

    @classmethod
    def create(
        cls,
        matcher: Union[str, re.Pattern],
        replies: Sequence[str],
        name: str = ""
    ) -> 'Rule':
        """
        Build a rule, compiling the matcher case-insensitively.

        Args:
            matcher: Pattern source or pre-compiled pattern
            replies: Non-empty list of reply templates
            name: Optional rule name

        Returns:
            Rule instance

        Raises:
            InvalidConfiguration: If the pattern is invalid or replies are empty
        """
        label = name or str(getattr(matcher, "pattern", matcher))

        if isinstance(replies, str) or not replies:
            raise InvalidConfiguration(
                "Rule must have at least one reply",
                {"rule": label}
            )
        if not all(isinstance(reply, str) for reply in replies):
            raise InvalidConfiguration(
                "Rule replies must be strings",
                {"rule": label}
            )

        try:
            if isinstance(matcher, re.Pattern):
                compiled = re.compile(matcher.pattern, matcher.flags | re.IGNORECASE)
            elif isinstance(matcher, str):
                compiled = re.compile(matcher, re.IGNORECASE)
            else:
                raise InvalidConfiguration(
                    "Rule matcher must be a string or compiled pattern",
                    {"rule": label, "type": type(matcher).__name__}
                )
        except re.error as e:
            raise InvalidConfiguration(
                f"Invalid matcher pattern: {e}",
                {"rule": label, "pattern": str(getattr(matcher, "pattern", matcher))}
            )

        return cls(matcher=compiled, replies=tuple(replies), name=name)

    @property
    def pattern(self) -> str:
        """Source text of the matcher."""
        return self.matcher.pattern

    def matches(self, message: str) -> Optional['RuleMatch']:
        """
        Check if this rule matches a message.

        A single search: the pattern may match anywhere in the
        message unless it anchors itself.

        Args:
            message: Message to check

        Returns:
            RuleMatch if matched, None otherwise
        """
        match = self.matcher.search(message)
        if match is None:
            return None
        return RuleMatch(rule=self, message=message, groups=match.groups())

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to its configuration record."""
        data: Dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        data["matcher"] = self.pattern
        data["replies"] = list(self.replies)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Rule':
        """
        Create rule from a configuration record.

        Accepts ``matcher`` (or ``pattern``) and ``replies``
        (or ``responses``) keys, plus an optional ``name``.
        """
        if not isinstance(data, dict):
            raise InvalidConfiguration(
                "Rule record must be a mapping",
                {"record": repr(data)}
            )

        matcher = data.get("matcher", data.get("pattern"))
        if matcher is None:
            raise InvalidConfiguration(
                "Rule record has no matcher",
                {"rule": data.get("name", "")}
            )

        return cls.create(
            matcher=matcher,
            replies=data.get("replies", data.get("responses", [])),
            name=str(data.get("name", "")),
        )


@dataclass(frozen=True)
class RuleMatch:
    """
    Result of a rule matching a message.

    Attributes:
        rule (Rule): The matching rule
        message (str): The matched message
        groups (tuple): Captured groups, group 1 first (None when a
            group did not participate in the match)
    """
    rule: Rule
    message: str
    groups: Tuple[Optional[str], ...] = ()

    def render(self, rng) -> str:
        """Pick one of the rule's replies and fill in captured groups."""
        reply = rng.choice(self.rule.replies)
        if self.groups:
            reply = interpolate(reply, self.groups)
        return reply


@dataclass(frozen=True)
class MatcherConfig:
    """
    Immutable rule table plus fallback replies.

    Attributes:
        rules (tuple): Rules in priority order (first match wins)
        default_replies (tuple): Replies used when no rule matches
    """
    rules: Tuple[Rule, ...] = field(default_factory=tuple)
    default_replies: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatcherConfig':
        """
        Create configuration from a parsed rule file.

        Expected shape::

            rules:
              - name: greeting
                matcher: "hello|hi"
                replies: ["Hello!"]
            defaultReplies: ["Tell me more."]

        ``default_replies`` is accepted as an alias of ``defaultReplies``.
        """
        if not isinstance(data, dict):
            raise InvalidConfiguration("Rule configuration must be a mapping")

        records = data.get("rules") or []
        if not isinstance(records, list):
            raise InvalidConfiguration("'rules' must be a list")

        defaults = data.get("defaultReplies", data.get("default_replies")) or []
        if isinstance(defaults, str) or not isinstance(defaults, (list, tuple)):
            raise InvalidConfiguration("'defaultReplies' must be a list")
        if not all(isinstance(reply, str) for reply in defaults):
            raise InvalidConfiguration("Default replies must be strings")

        return cls(
            rules=tuple(Rule.from_dict(record) for record in records),
            default_replies=tuple(defaults),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the rule file representation."""
        return {
            "rules": [rule.to_dict() for rule in self.rules],
            "defaultReplies": list(self.default_replies),
        }


class ResponseMatcher:
    """
    Maps one line of user text to one reply.

    Rules are tried in declaration order; the first one whose matcher
    is found in the text supplies the reply, chosen uniformly at random
    from its candidates with captured groups interpolated. When nothing
    matches, a default reply is returned unmodified.

    Example:
        matcher = ResponseMatcher(MatcherConfig(
            rules=(Rule.create(r"I feel (.*)", ["Why do you feel $1?"]),),
            default_replies=("Tell me more.",),
        ))

        matcher.resolve("I feel fine")   # "Why do you feel fine?"
        matcher.resolve("purple")        # "Tell me more."
    """

    def __init__(self, config: MatcherConfig, rng: Optional[random.Random] = None):
        """
        Initialize the matcher.

        Args:
            config: Rule table and default replies
            rng: Random source exposing ``choice``; a fresh
                ``random.Random`` is used when omitted

        Raises:
            InvalidConfiguration: If the rule table or any reply list is empty
        """
        if not config.rules:
            raise InvalidConfiguration("Rule table is empty")

        if not config.default_replies:
            raise InvalidConfiguration("Default reply list is empty")

        for position, rule in enumerate(config.rules):
            if not rule.replies:
                raise InvalidConfiguration(
                    "Rule has no candidate replies",
                    {"rule": rule.name or rule.pattern, "position": position}
                )

        self.config = config
        self._rng = rng if rng is not None else random.Random()

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self.config.rules

    @property
    def default_replies(self) -> Tuple[str, ...]:
        return self.config.default_replies

    def match(self, message: str) -> Optional[RuleMatch]:
        """
        Find the first rule matching a message.

        Args:
            message: Message to match

        Returns:
            RuleMatch for the earliest matching rule, None otherwise
        """
        for rule in self.config.rules:
            match = rule.matches(message)
            if match:
                return match
        return None

    def reply_for(self, match: Optional[RuleMatch]) -> str:
        """
        Render the reply for a match result.

        Args:
            match: Result of ``match``; None selects a default reply

        Returns:
            Reply text
        """
        if match is None:
            return self._rng.choice(self.config.default_replies)
        return match.render(self._rng)

    def resolve(self, message: str) -> str:
        """
        Select a reply for a message.

        Args:
            message: User text, used as given (no trimming)

        Returns:
            Reply text; never raises for a valid configuration
        """
        return self.reply_for(self.match(message))

    def get_rule(self, name: str) -> Optional[Rule]:
        """Get a rule by name."""
        for rule in self.config.rules:
            if rule.name == name:
                return rule
        return None

    def get_all_rules(self) -> List[Rule]:
        """Get all rules in priority order."""
        return list(self.config.rules)
