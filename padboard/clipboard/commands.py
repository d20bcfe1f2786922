"""Clipboard command requests.

A ClipboardCommand is the aggregated request a UI sends with a click: some
items to (de)select, maybe a pad switch, a removal, a pad clear or a copy
mode toggle. The builders below produce the request parameters for the
common actions so callers never assemble keys by hand.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from padboard.clipboard.keys import (
    encode_path,
    encode_record,
    filter_toggle_input,
    is_well_formed,
)
from padboard.clipboard.types import FILE_MARKER, KEY_SEPARATOR, RECORD_PAYLOAD, is_pad_id

logger = logging.getLogger(__name__)

# Downstream engines a paste or delete request is routed to
RECORD_ENGINE = "records"
FILE_ENGINE = "files"


@dataclass
class ClipboardCommand:
    """One clipboard request.

    Attributes:
        elements: Ordered (key, payload) toggles; a falsy payload deselects.
        set_pad: Pad to switch to.
        remove: Key to remove from the active pad.
        remove_all: Pad to empty.
        set_copy_mode: True/False to set copy/move mode, None to leave it.
    """

    elements: list[tuple[str, Any]] = field(default_factory=list)
    set_pad: str | None = None
    remove: str | None = None
    remove_all: str | None = None
    set_copy_mode: bool | None = None

    @classmethod
    def from_mapping(cls, raw: Any, schema: str | None = None) -> ClipboardCommand:
        """Parse an untrusted request mapping.

        Recognized keys: "el" (mapping of key -> payload), "setP",
        "remove", "removeAll" and "setCopyMode". Anything else, or values of
        the wrong shape, is ignored. Element and "remove" keys must be
        well-formed selection keys and "removeAll" a pad id.

        Args:
            raw: Request parameters.
            schema: When given, only elements of this schema (or FILE_MARKER
                for paths) are accepted.
        """
        if not isinstance(raw, dict):
            return cls()
        elements = raw.get("el")
        pairs = [(str(k), v) for k, v in elements.items()] if isinstance(elements, dict) else []
        if schema is not None:
            pairs = filter_toggle_input(pairs, schema)
        accepted = [(key, payload) for key, payload in pairs if is_well_formed(key)]
        if len(accepted) < len(pairs):
            logger.debug("Dropped %d malformed clipboard keys", len(pairs) - len(accepted))

        remove = _text_or_none(raw.get("remove"))
        remove_all = _text_or_none(raw.get("removeAll"))
        copy_mode = raw.get("setCopyMode")
        return cls(
            elements=accepted,
            set_pad=_text_or_none(raw.get("setP")),
            remove=remove if is_well_formed(remove) else None,
            remove_all=remove_all if is_pad_id(remove_all) else None,
            set_copy_mode=None if copy_mode is None else bool(_truthy(copy_mode)),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Request parameters in the shape from_mapping() accepts."""
        raw: dict[str, Any] = {}
        if self.elements:
            raw["el"] = dict(self.elements)
        if self.set_pad:
            raw["setP"] = self.set_pad
        if self.remove:
            raw["remove"] = self.remove
        if self.remove_all:
            raw["removeAll"] = self.remove_all
        if self.set_copy_mode is not None:
            raw["setCopyMode"] = 1 if self.set_copy_mode else 0
        return raw


def _text_or_none(value: Any) -> str | None:
    if value is None or value == "" or isinstance(value, (dict, list)):
        return None
    return str(value)


def _truthy(value: Any) -> bool:
    # Request values arrive as strings; "0" means off
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


# --- Builders ---


def select_record(
    schema: str, record_id: str | int, copy: bool = False, deselect: bool = False
) -> ClipboardCommand:
    """Select (or deselect) one record, optionally switching to copy mode."""
    payload = 0 if deselect else RECORD_PAYLOAD
    return ClipboardCommand(
        elements=[(encode_record(schema, record_id), payload)],
        set_copy_mode=True if copy else None,
    )


def select_path(path: str, copy: bool = False, deselect: bool = False) -> ClipboardCommand:
    """Select (or deselect) a file or folder path."""
    return ClipboardCommand(
        elements=[(encode_path(path), "" if deselect else path)],
        set_copy_mode=True if copy else None,
    )


def remove_item(schema: str, identifier: str | int) -> ClipboardCommand:
    """Remove one item; for paths, identifier is the path hash."""
    return ClipboardCommand(remove=f"{schema}{KEY_SEPARATOR}{identifier}")


def paste_request(
    schema: str,
    target_id: str | int,
    pad: str,
    update: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Request parameters for pasting `pad` onto a target.

    schema FILE_MARKER routes the request to the file engine.
    """
    request: dict[str, Any] = {
        "engine": FILE_ENGINE if schema == FILE_MARKER else RECORD_ENGINE,
        "paste": f"{schema}{KEY_SEPARATOR}{target_id}",
        "pad": pad,
    }
    if update is not None:
        request["update"] = update
    return request


def delete_request(pad: str, files: bool = False) -> dict[str, Any]:
    """Request parameters for deleting everything on `pad`."""
    return {
        "engine": FILE_ENGINE if files else RECORD_ENGINE,
        "delete": 1,
        "pad": pad,
    }
