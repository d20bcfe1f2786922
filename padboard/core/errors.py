"""Typed exception hierarchy for padboard."""

from __future__ import annotations


class PadboardError(Exception):
    """Base class for all padboard errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(PadboardError):
    """Raised for configuration issues (invalid JSON, validation failure)."""


class StorageError(PadboardError):
    """Raised when the clipboard store cannot be read or written."""

    def __init__(self, message: str, user_key: str | None = None) -> None:
        self.user_key = user_key
        super().__init__(message)


class ResourceNotFoundError(PadboardError):
    """Raised by a path resolver when a file or folder no longer exists.

    The pruner treats this exactly like ``PathResolution.NOT_FOUND``. Any other
    exception raised by a resolver is propagated to the caller.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Resource does not exist: {path}")
