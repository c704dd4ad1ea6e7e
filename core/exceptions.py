"""
Exception Definitions - Custom exceptions for Eliza Chat
========================================================

This module defines all custom exceptions used throughout the application,
providing clear error handling and meaningful error messages.
"""


class ElizaChatError(Exception):
    """
    Base exception for all Eliza Chat errors.

    All custom exceptions in this application inherit from this base class,
    allowing for easy catching of all application-specific errors.

    Attributes:
        message (str): Human-readable error description
        details (dict): Additional error details for debugging
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error message with details if present."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(ElizaChatError):
    """
    Configuration-related errors.

    Raised when there are issues with:
    - Missing configuration files
    - Invalid configuration values
    - Environment variable issues
    - Configuration parsing errors
    """
    pass


class InvalidConfiguration(ConfigError):
    """
    Invalid response rule configuration.

    Raised while building a response matcher when:
    - The rule table is empty
    - The default reply list is empty
    - A rule has no candidate replies
    - A matcher is not a valid regular expression
    - A rule file cannot be read or parsed

    Fatal to startup; never raised while resolving a message.
    """
    pass


class UIError(ElizaChatError):
    """
    User interface errors.

    Raised when there are issues with:
    - User input validation (empty or oversized messages)
    - Terminal UI rendering
    - Web UI template errors
    """
    pass
