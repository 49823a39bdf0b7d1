"""Specialized exceptions raised by simplemail.

Exception hierarchy::

    SimplemailError
        MailError (base for all message errors)
            InvalidArgumentError (absent argument, also ValueError)
            InvalidAddressError (unparseable address, also ValueError)
            MailValidationError (assembly-time completeness failure)
                MissingSenderError
                MissingRecipientError
                MissingBodyError
            MailConfigurationError (transport or rendering misuse)
            MailTransportError (delivery failure)
        ConfigError (base for configuration errors)
            ConfigFileNotFoundError
            ConfigFormatError
"""

from __future__ import annotations

from typing import Any


class SimplemailError(Exception):
    """Base exception for all simplemail errors."""


class MailError(SimplemailError):
    """Base exception for message building, assembly, and delivery errors."""


class InvalidArgumentError(MailError, ValueError):
    """A required argument was absent.

    Raised by builder setters when given ``None`` where an address is
    expected. Always a caller bug.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, argument: str) -> None:
        """Initialize InvalidArgumentError.

        Args:
            argument: Name of the offending argument.
        """
        super().__init__(f"{argument} argument can not be None")
        self.argument = argument


class InvalidAddressError(MailError, ValueError):
    """A raw address string could not be parsed.

    Attributes:
        value: The rejected input.
        reason: Why the input was rejected.

    Examples:
        >>> raise InvalidAddressError("not-an-email", "missing '@'")
        Traceback (most recent call last):
        ...
        simplemail.exceptions.InvalidAddressError: Invalid email address 'not-an-email': missing '@'
    """

    def __init__(self, value: Any, reason: str) -> None:
        """Initialize InvalidAddressError.

        Args:
            value: The rejected input.
            reason: Why the input was rejected.
        """
        super().__init__(f"Invalid email address {value!r}: {reason}")
        self.value = value
        self.reason = reason


class MailValidationError(MailError):
    """Accumulated message state is incomplete.

    Raised only by assembly, never by the builder setters.
    """


class MissingSenderError(MailValidationError):
    """The message has no sender."""

    def __init__(self) -> None:
        """Initialize MissingSenderError."""
        super().__init__("Sender is required")


class MissingRecipientError(MailValidationError):
    """The message has no ``to`` recipient."""

    def __init__(self) -> None:
        """Initialize MissingRecipientError."""
        super().__init__("At least one 'to' recipient is required")


class MissingBodyError(MailValidationError):
    """The message has neither a text nor an HTML body."""

    def __init__(self) -> None:
        """Initialize MissingBodyError."""
        super().__init__("A non-empty text or HTML body is required")


class MailConfigurationError(MailError):
    """A transport or rendering option is misconfigured."""


class MailTransportError(MailError):
    """The transport failed to deliver a message."""


class ConfigError(SimplemailError):
    """Base exception for configuration loading errors."""


class ConfigFileNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist."""


class ConfigFormatError(ConfigError):
    """A configuration file could not be parsed or has the wrong shape."""


__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "InvalidAddressError",
    "InvalidArgumentError",
    "MailConfigurationError",
    "MailError",
    "MailTransportError",
    "MailValidationError",
    "MissingBodyError",
    "MissingRecipientError",
    "MissingSenderError",
    "SimplemailError",
]
