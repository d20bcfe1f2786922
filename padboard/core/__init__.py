"""Core types, errors and collaborator interfaces."""

from padboard.core.errors import (
    ConfigError,
    PadboardError,
    ResourceNotFoundError,
    StorageError,
)
from padboard.core.interfaces import (
    ClipboardStore,
    PathResolution,
    PathResolver,
    RecordResolver,
    SchemaRegistry,
)

__all__ = [
    "PadboardError",
    "ConfigError",
    "StorageError",
    "ResourceNotFoundError",
    # Collaborators
    "ClipboardStore",
    "SchemaRegistry",
    "RecordResolver",
    "PathResolver",
    "PathResolution",
]
