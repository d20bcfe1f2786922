"""Collaborator interfaces (protocols) for padboard.

The clipboard core never talks to a database, a file system or a session
store directly. It is handed objects satisfying these Protocols, which keeps
the state machine deterministic under test.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol


class PathResolution(Enum):
    """Outcome of resolving a selected path."""

    FOUND = "found"
    NOT_FOUND = "not_found"


class ClipboardStore(Protocol):
    """Per-user storage for the raw clipboard blob.

    Example:
        class DictStore:
            def __init__(self) -> None:
                self.data: dict[str, dict[str, Any]] = {}

            def load(self, user_key: str) -> dict[str, Any] | None:
                return self.data.get(user_key)

            def save(self, user_key: str, blob: dict[str, Any]) -> None:
                self.data[user_key] = blob
    """

    def load(self, user_key: str) -> dict[str, Any] | None:
        """Return the stored blob for user_key, or None if nothing is stored."""
        ...

    def save(self, user_key: str, blob: dict[str, Any]) -> None:
        """Replace the stored blob for user_key (last write wins)."""
        ...


class SchemaRegistry(Protocol):
    """Knows which record schemas (tables) currently exist."""

    def is_known_schema(self, name: str) -> bool:
        ...


class RecordResolver(Protocol):
    """Checks whether a record still exists."""

    def exists(self, schema: str, record_id: str) -> bool:
        ...


class PathResolver(Protocol):
    """Resolves a selected file or folder path.

    Implementations return FOUND or NOT_FOUND (or raise ResourceNotFoundError).
    Any other failure, such as access being denied, must be raised.
    """

    def resolve(self, path: str) -> PathResolution:
        ...

    def is_directory(self, path: str) -> bool:
        """Whether a path that resolved as FOUND is a folder."""
        ...
