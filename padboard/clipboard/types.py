"""Clipboard data model: selection keys, pad modes and pads."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# Virtual schema name marking file/folder selections
FILE_MARKER = "_FILE"

# Separates schema (or FILE_MARKER) from id (or path hash) in a key
KEY_SEPARATOR = "|"

DEFAULT_PAD = "normal"
NUMBERED_PAD_PREFIX = "tab_"

# Upper bound on numbered pads besides the default pad
MAX_NUMBERED_PADS = 20

# Returned by is_selected() for items on numbered pads
SELECTED_MARKER = "1"

# Stored payload for record selections; only its truthiness matters
RECORD_PAYLOAD = 1


class SelectionKind(Enum):
    """What a selection key refers to."""

    RECORD = "record"
    PATH = "path"


class PadMode(Enum):
    """Whether a paste from the pad consumes the selection.

    The values are the stored representation: "copy" or empty for move.
    """

    MOVE = ""
    COPY = "copy"

    @classmethod
    def from_stored(cls, value: Any) -> PadMode:
        """Anything other than "copy" means move."""
        return cls.COPY if value == cls.COPY.value else cls.MOVE

    @property
    def label(self) -> str:
        """Mode name as reported to callers ("copy" or "cut")."""
        return "copy" if self is PadMode.COPY else "cut"

    @property
    def command(self) -> str:
        """Directive name used in command batches ("copy" or "move")."""
        return "copy" if self is PadMode.COPY else "move"


@dataclass(frozen=True)
class RecordKey:
    """Selection of a structured record (schema name + id)."""

    schema: str
    id: str

    kind = SelectionKind.RECORD


@dataclass(frozen=True)
class PathKey:
    """Selection of a file system path, identified by a short path hash."""

    path_hash: str

    kind = SelectionKind.PATH


SelectionKey = Union[RecordKey, PathKey]


def is_pad_id(value: Any) -> bool:
    """True for "normal" and "tab_<n>" shaped ids (the pad need not exist)."""
    if not isinstance(value, str):
        return False
    if value == DEFAULT_PAD:
        return True
    number = value.removeprefix(NUMBERED_PAD_PREFIX)
    return number != value and number.isdigit()


def numbered_pad_id(number: int) -> str:
    """Pad id for numbered pad `number` (1-based)."""
    return f"{NUMBERED_PAD_PREFIX}{number}"


@dataclass
class Pad:
    """A named holding area for selected items.

    `items` maps encoded selection keys to payloads in insertion order.
    """

    id: str
    items: dict[str, Any] = field(default_factory=dict)
    mode: PadMode = PadMode.MOVE

    @property
    def is_default(self) -> bool:
        return self.id == DEFAULT_PAD

    def has_items(self) -> bool:
        return bool(self.items)

    def reset(self) -> None:
        """Drop all items and fall back to move mode."""
        self.items = {}
        self.mode = PadMode.MOVE

    def put(self, key: str, payload: Any) -> None:
        """Insert at the tail, or overwrite in place if the key exists."""
        self.items[key] = payload

    def discard(self, key: str) -> bool:
        """Remove key if present. Returns True if something was removed."""
        if key not in self.items:
            return False
        del self.items[key]
        return True

    @classmethod
    def from_stored(cls, pad_id: str, data: Any) -> Pad:
        """Rebuild a pad from its stored shape, or an empty pad if malformed."""
        if not isinstance(data, dict):
            return cls(id=pad_id)
        raw_items = data.get("el")
        items = dict(raw_items) if isinstance(raw_items, dict) else {}
        return cls(id=pad_id, items=items, mode=PadMode.from_stored(data.get("mode")))

    def to_stored(self) -> dict[str, Any]:
        return {"el": dict(self.items), "mode": self.mode.value}
