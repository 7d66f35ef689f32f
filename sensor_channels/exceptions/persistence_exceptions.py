"""
persistence_exceptions.py

Errors raised by the registry persistence layer.

StoreNotFoundError is the expected first-run condition; callers typically
respond by populating default channels. StoreCorruptError means a blob was
found but could not be decoded.
"""


class PersistenceError(Exception):
    """Base class for persistence errors."""


class PersistenceUnavailableError(PersistenceError, OSError):
    """Raised when the backing store cannot be read or written."""


class StoreNotFoundError(PersistenceError, FileNotFoundError):
    """Raised when nothing has been saved to the backing store yet."""


class StoreCorruptError(PersistenceError, ValueError):
    """Raised when a stored registry cannot be decoded."""
