"""Selection key codec.

Every selected item is stored under one opaque string key:

    record:  "<schema>|<id>"      e.g. "tt_content|123"
    path:    "_FILE|<short hash>"  e.g. "_FILE|9ebc7e5c74"

Encoding and decoding happen here and nowhere else.
"""
from __future__ import annotations

import hashlib
import math
import re
from collections.abc import Iterable
from typing import Any

from padboard.clipboard.types import (
    FILE_MARKER,
    KEY_SEPARATOR,
    PathKey,
    RecordKey,
    SelectionKey,
)

PATH_HASH_LENGTH = 10

# Leading decimal number, optionally with fraction and exponent ("12abc", "1e3", "-2.5")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def short_hash(value: str) -> str:
    """Short, stable digest of a string (first 10 hex chars of its MD5)."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()[:PATH_HASH_LENGTH]


def encode_record(schema: str, record_id: str | int) -> str:
    return f"{schema}{KEY_SEPARATOR}{record_id}"


def encode_path(path: str) -> str:
    return f"{FILE_MARKER}{KEY_SEPARATOR}{short_hash(path)}"


def encode(key: SelectionKey) -> str:
    if isinstance(key, PathKey):
        return f"{FILE_MARKER}{KEY_SEPARATOR}{key.path_hash}"
    return encode_record(key.schema, key.id)


def is_well_formed(key: Any) -> bool:
    """True for "<schema>|<id>" strings with both parts non-empty."""
    if not isinstance(key, str):
        return False
    prefix, sep, rest = key.partition(KEY_SEPARATOR)
    return bool(prefix and sep and rest)


def decode(key: str) -> SelectionKey:
    """Decode a stored key.

    Raises:
        ValueError: If the key is not well formed.
    """
    if not is_well_formed(key):
        raise ValueError(f"Malformed selection key: {key!r}")
    prefix, _, rest = key.partition(KEY_SEPARATOR)
    if prefix == FILE_MARKER:
        return PathKey(path_hash=rest)
    return RecordKey(schema=prefix, id=rest)


def try_decode(key: str) -> SelectionKey | None:
    """Like decode(), but None for malformed keys."""
    return decode(key) if is_well_formed(key) else None


def schema_of(key: str) -> str:
    """Schema part of a key (FILE_MARKER for path keys), without full decoding."""
    return key.partition(KEY_SEPARATOR)[0]


def to_int(value: Any) -> int:
    """Integer value of a loosely typed id.

    The leading number of a string counts, including a fraction or exponent,
    truncated toward zero: "12abc" is 12, "1e3" is 1000, "-2.9" is -2.
    Anything without a leading number, or out of float range, is 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_NUMBER.match(str(value or ""))
    if not match:
        return 0
    number = match.group(1)
    if number.lstrip("+-").isdigit():
        return int(number)
    parsed = float(number)
    return int(parsed) if math.isfinite(parsed) else 0


def parse_target_ref(ref: str) -> tuple[str, str]:
    """Split a paste target reference "schema|id" into its raw parts.

    A missing id part comes back as an empty string.
    """
    schema, _, target = ref.partition(KEY_SEPARATOR)
    return schema, target


def filter_toggle_input(
    entries: Iterable[tuple[str, Any]] | dict[str, Any],
    schema: str,
    remove_deselected: bool = False,
) -> list[tuple[str, Any]]:
    """Sanitize untrusted toggle input before it reaches the pad store.

    Keeps only well-formed keys that belong to `schema` (use FILE_MARKER
    for paths). With remove_deselected, entries asking for deselection are
    dropped as well.

    Args:
        entries: Ordered (key, payload) pairs, or a mapping of the same.
        schema: The only schema accepted.
        remove_deselected: Also drop entries with a falsy payload.

    Returns:
        The accepted entries in their original order.
    """
    pairs = entries.items() if isinstance(entries, dict) else entries
    accepted: list[tuple[str, Any]] = []
    for key, payload in pairs:
        if not is_well_formed(key) or schema_of(key) != str(schema):
            continue
        if remove_deselected and not payload:
            continue
        accepted.append((key, payload))
    return accepted
