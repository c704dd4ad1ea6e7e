"""
Chat Service - Turn handling between a front end and the responder
==================================================================

This module implements the caller side of the response engine:
- Trimming and validating raw user input
- Calling the matcher exactly once per user turn
- Packaging the user and bot messages for rendering

No conversation history is kept here; front ends own their transcript.
"""

from datetime import datetime
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

from core.exceptions import UIError
from core.logging import get_logger
from rules.engine import ResponseMatcher

logger = get_logger("services.chat")

EMPTY_MESSAGE_ERROR = "Please enter a valid message."


@dataclass
class ChatMessage:
    """
    A single rendered chat message.

    Attributes:
        sender (str): 'user' or 'bot'
        text (str): Message content, rendered as-is
        timestamp (datetime): When the message was produced
    """
    sender: str
    text: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.sender}] {self.text[:50]}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sender": self.sender,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ChatTurn:
    """
    One user message and the reply it produced.

    Attributes:
        user (ChatMessage): The trimmed user message
        bot (ChatMessage): The matcher's reply
        matched_rule (str): Name (or pattern) of the rule that fired,
            None when a default reply was used
    """
    user: ChatMessage
    bot: ChatMessage
    matched_rule: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user": self.user.text,
            "bot": self.bot.text,
            "matched_rule": self.matched_rule,
        }


class ChatService:
    """
    Runs one chat turn per submitted message.

    Example:
        service = ChatService(matcher)

        turn = service.submit("  I feel great ")
        print(turn.user.text)   # "I feel great"
        print(turn.bot.text)    # e.g. "Why do you feel great?"
    """

    def __init__(self, matcher: ResponseMatcher, max_input_length: Optional[int] = None):
        """
        Initialize chat service.

        Args:
            matcher: Response matcher used for every turn
            max_input_length: Reject longer messages (None = no limit)
        """
        self.matcher = matcher
        self.max_input_length = max_input_length

    def process_user_message(self, raw: str) -> Optional[str]:
        """
        Trim raw input.

        Args:
            raw: Text as typed by the user

        Returns:
            Trimmed text, or None if nothing is left
        """
        processed = (raw or "").strip()
        if processed == "":
            return None
        return processed

    def submit(self, raw: str) -> ChatTurn:
        """
        Handle one submitted message.

        Args:
            raw: Text as typed by the user

        Returns:
            ChatTurn with the user message and the bot reply

        Raises:
            UIError: If the message is empty or too long
        """
        text = self.process_user_message(raw)

        if text is None:
            logger.debug("Rejected empty message")
            raise UIError(EMPTY_MESSAGE_ERROR)

        if self.max_input_length is not None and len(text) > self.max_input_length:
            logger.debug(f"Rejected message of {len(text)} chars")
            raise UIError(
                f"Message is too long (max {self.max_input_length} characters).",
                {"length": len(text)}
            )

        match = self.matcher.match(text)
        reply = self.matcher.reply_for(match)

        matched_rule = None
        if match is not None:
            matched_rule = match.rule.name or match.rule.pattern

        logger.info(f"Replied via {matched_rule or 'default replies'}")

        return ChatTurn(
            user=ChatMessage(sender="user", text=text),
            bot=ChatMessage(sender="bot", text=reply),
            matched_rule=matched_rule,
        )
