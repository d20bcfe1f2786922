"""Storage backends for the raw clipboard blob."""
from __future__ import annotations

import json
import logging
import sqlite3
import time
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from padboard.core.errors import StorageError
from padboard.core.secure_io import secure_mkdir, secure_touch

if TYPE_CHECKING:
    from padboard.config.schema import Config

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS clipboard (
    scope TEXT NOT NULL,
    user_key TEXT NOT NULL,
    data TEXT NOT NULL,
    modified_at REAL NOT NULL,
    PRIMARY KEY (scope, user_key)
);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


class StoreScope(Enum):
    """Lifetime of a stored clipboard."""

    SESSION = "session"  # Discarded with the session
    PERSISTENT = "persistent"  # Kept across sessions


class MemoryClipboardStore:
    """In-process store, for embedding and tests."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def load(self, user_key: str) -> dict[str, Any] | None:
        data = self._blobs.get(user_key)
        return None if data is None else json.loads(data)

    def save(self, user_key: str, blob: dict[str, Any]) -> None:
        # Stored as JSON so callers never share mutable state with the store
        self._blobs[user_key] = json.dumps(blob)

    def close(self) -> None:
        pass


class SqliteClipboardStore:
    """SQLite storage for clipboards of one scope.

    Session-scoped clipboards live in the same database as persistent ones,
    partitioned by session id, so a new session starts with an empty
    clipboard while a persistent clipboard survives.
    """

    def __init__(
        self,
        db_path: Path,
        scope: StoreScope = StoreScope.PERSISTENT,
        session_id: str | None = None,
    ) -> None:
        """Initialize storage.

        Args:
            db_path: Path to SQLite database file
            scope: Session or persistent clipboard
            session_id: Required for session scope

        Raises:
            ValueError: If scope is SESSION and no session_id is given.
            StorageError: If the database cannot be opened.
        """
        if scope is StoreScope.SESSION and not session_id:
            raise ValueError("Session-scoped storage requires a session_id")
        self._db_path = db_path
        self._scope = scope
        self._partition = (
            f"{scope.value}:{session_id}" if scope is StoreScope.SESSION else scope.value
        )
        self._conn: sqlite3.Connection | None = None
        self._ensure_db()

    @property
    def scope(self) -> StoreScope:
        return self._scope

    def _ensure_db(self) -> None:
        """Create database and tables if they don't exist."""
        try:
            secure_mkdir(self._db_path.parent)
            secure_touch(self._db_path)
            self._conn = sqlite3.connect(str(self._db_path))
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(SCHEMA_SQL)
            self._conn.execute(
                "INSERT OR IGNORE INTO metadata (key, value) VALUES (?, ?)",
                ("schema_version", str(SCHEMA_VERSION)),
            )
            self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open clipboard database {self._db_path}: {e}") from e

    def load(self, user_key: str) -> dict[str, Any] | None:
        """Stored blob for user_key, or None if absent or unreadable."""
        assert self._conn is not None
        try:
            cur = self._conn.execute(
                "SELECT data FROM clipboard WHERE scope = ? AND user_key = ?",
                (self._partition, user_key),
            )
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to load clipboard: {e}", user_key) from e
        if row is None:
            return None
        try:
            blob = json.loads(row["data"])
        except json.JSONDecodeError:
            logger.warning("Discarding corrupt clipboard for %s", user_key)
            return None
        return blob if isinstance(blob, dict) else None

    def save(self, user_key: str, blob: dict[str, Any]) -> None:
        assert self._conn is not None
        try:
            self._conn.execute(
                """INSERT INTO clipboard (scope, user_key, data, modified_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT (scope, user_key)
                   DO UPDATE SET data = excluded.data, modified_at = excluded.modified_at""",
                (self._partition, user_key, json.dumps(blob), time.time()),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save clipboard: {e}", user_key) from e
        logger.debug("Saved clipboard for %s (%s)", user_key, self._partition)

    def delete(self, user_key: str) -> bool:
        """Forget the stored clipboard. Returns True if one existed."""
        assert self._conn is not None
        cur = self._conn.execute(
            "DELETE FROM clipboard WHERE scope = ? AND user_key = ?",
            (self._partition, user_key),
        )
        self._conn.commit()
        return cur.rowcount > 0

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None


def open_store(config: Config, session_id: str | None = None) -> SqliteClipboardStore:
    """Open the store selected by the user's `persistent` preference."""
    db_path = config.storage.resolved_db_path()
    if config.clipboard.persistent:
        return SqliteClipboardStore(db_path, StoreScope.PERSISTENT)
    return SqliteClipboardStore(db_path, StoreScope.SESSION, session_id=session_id)
