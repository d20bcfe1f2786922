"""Default collaborator implementations for tooling and tests."""
from __future__ import annotations

import os
from collections.abc import Iterable

from padboard.core.interfaces import PathResolution


class StaticSchemaRegistry:
    """Schema registry backed by a fixed set of names.

    An empty set accepts every schema.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = frozenset(names)

    def is_known_schema(self, name: str) -> bool:
        return not self._names or name in self._names


class AlwaysExistsRecordResolver:
    """Record resolver for setups without access to the record database."""

    def exists(self, schema: str, record_id: str) -> bool:
        return True


class LocalPathResolver:
    """Resolves paths on the local file system.

    Missing paths are NOT_FOUND. Other OS errors, such as PermissionError,
    are raised unchanged.
    """

    def resolve(self, path: str) -> PathResolution:
        try:
            os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return PathResolution.NOT_FOUND
        return PathResolution.FOUND

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)
