"""
registry_exceptions.py

Errors raised by channel registry operations. Every operation validates before
it mutates, so any of these means the registry was left unchanged.
"""

from typing import Optional


class RegistryError(Exception):
    """
    Base class for registry errors. Carries the offending channel number.
    """
    def __init__(self, message: str, *, channel: Optional[int] = None) -> None:
        super().__init__(message)
        self.channel = channel

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (channel={self.channel})" if self.channel is not None else base


class DuplicateChannelError(RegistryError):
    """Raised when an add would reuse a channel number already registered."""

    def __init__(self, channel: int) -> None:
        super().__init__("Channel already exists", channel=channel)


class ChannelNotFoundError(RegistryError):
    """Raised when an operation references a channel that is not registered."""

    def __init__(self, channel: int) -> None:
        super().__init__("Channel not found", channel=channel)


class WrongChannelKindError(RegistryError):
    """Raised when a fixed-only operation targets a bus channel, or the reverse."""

    def __init__(self, channel: int, expected: str, actual: str) -> None:
        super().__init__(f"Operation requires a {expected} channel, got {actual}", channel=channel)
        self.expected = expected
        self.actual = actual


class InvalidChannelError(RegistryError, ValueError):
    """Raised when a channel number, pin, address or mode fails validation."""
