"""
Services Module - Application services for Eliza Chat
=====================================================

This module provides the chat service that sits between the
front ends (terminal, web, CLI) and the response engine.
"""

from .chat import ChatService, ChatMessage, ChatTurn

__all__ = [
    "ChatService",
    "ChatMessage",
    "ChatTurn",
]
