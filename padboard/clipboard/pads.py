"""PadStore - the set of pads, the current-pad pointer and selection mutations."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from padboard.clipboard.keys import is_well_formed
from padboard.clipboard.types import (
    DEFAULT_PAD,
    MAX_NUMBERED_PADS,
    Pad,
    PadMode,
    numbered_pad_id,
)

logger = logging.getLogger(__name__)

# Blob key holding the id of the pad that was active when last saved
CURRENT_KEY = "current"


class PadStore:
    """Holds one default pad plus a number of numbered pads.

    The store is rebuilt from the stored blob on every session turn, mutated
    in process, and serialized back with to_blob() when `dirty` is set.
    """

    def __init__(self, number_of_pads: int = 3) -> None:
        self.number_of_pads = max(0, min(int(number_of_pads), MAX_NUMBERED_PADS))
        self.pads: dict[str, Pad] = {DEFAULT_PAD: Pad(id=DEFAULT_PAD)}
        for number in range(1, self.number_of_pads + 1):
            pad_id = numbered_pad_id(number)
            self.pads[pad_id] = Pad(id=pad_id)
        self.current = DEFAULT_PAD
        self.locked = False
        self.dirty = False

    @classmethod
    def from_blob(
        cls,
        blob: dict[str, Any] | None,
        number_of_pads: int = 3,
        last_current: str | None = None,
    ) -> PadStore:
        """Build a store from a stored blob.

        Stored pads are reused when their shape is right; anything else starts
        empty. Pads in the blob beyond number_of_pads are dropped.

        Args:
            blob: Raw stored clipboard, or None for a fresh clipboard.
            number_of_pads: Numbered pads to provide (clamped to [0, 20]).
            last_current: Pad to activate. Defaults to the blob's saved pointer.
        """
        store = cls(number_of_pads)
        blob = blob if isinstance(blob, dict) else {}
        for pad_id in store.pads:
            store.pads[pad_id] = Pad.from_stored(pad_id, blob.get(pad_id))
        wanted = last_current if last_current is not None else blob.get(CURRENT_KEY)
        if isinstance(wanted, str) and wanted in store.pads:
            store.current = wanted
        return store

    def to_blob(self) -> dict[str, Any]:
        blob: dict[str, Any] = {pad_id: pad.to_stored() for pad_id, pad in self.pads.items()}
        blob[CURRENT_KEY] = self.current
        return blob

    @property
    def active(self) -> Pad:
        return self.pads[self.current]

    def get(self, pad_id: str | None = None) -> Pad | None:
        """Pad by id (active pad when pad_id is empty), or None if unknown."""
        return self.pads.get(pad_id or self.current)

    def lock(self) -> None:
        """Pin the store to the default pad for the rest of the session."""
        self.locked = True
        self.current = DEFAULT_PAD

    # --- Mutations ---

    def apply_toggle_batch(self, entries: Iterable[tuple[str, Any]]) -> None:
        """Select or deselect items on the active pad.

        A truthy payload selects (key -> payload), a falsy one deselects.
        While the default pad is active it is emptied before each entry, so
        it only ever holds the most recent selection. Malformed keys are
        skipped.
        """
        for key, payload in entries:
            if not is_well_formed(key):
                logger.debug("Ignoring malformed selection key: %r", key)
                continue
            if self.current == DEFAULT_PAD:
                self.active.reset()
            if payload:
                self.active.put(key, payload)
            else:
                self.active.discard(key)
            self.dirty = True

    def set_mode(self, copy: bool) -> None:
        """Copy mode requires at least one item; everything else is move."""
        pad = self.active
        pad.mode = PadMode.COPY if copy and pad.has_items() else PadMode.MOVE
        self.dirty = True

    def remove_key(self, key: str) -> None:
        self.active.discard(key)
        self.dirty = True

    def clear_pad(self, pad_id: str) -> None:
        """Empty the named pad (which need not be the active one)."""
        pad = self.pads.get(pad_id)
        if pad is None:
            logger.debug("Ignoring clear of unknown pad: %s", pad_id)
        else:
            pad.reset()
        self.dirty = True

    def switch_pad(self, pad_id: str) -> None:
        """Make pad_id the active pad.

        Ignored while locked or when pad_id is already active. Unknown ids
        leave the pointer alone. Afterwards the active pad is forced to move
        mode unless it is the default pad and still holds items.
        """
        if self.locked or pad_id == self.current:
            return
        if pad_id in self.pads:
            self.current = pad_id
        else:
            logger.debug("Ignoring switch to unknown pad: %s", pad_id)
        pad = self.active
        if not pad.is_default or not pad.has_items():
            pad.mode = PadMode.MOVE
        self.dirty = True

    # --- Queries ---

    def has_items_anywhere(self) -> bool:
        return any(pad.has_items() for pad in self.pads.values())

    def has_items_in_active_pad(self) -> bool:
        return self.active.has_items()

    def current_mode(self) -> PadMode:
        return self.active.mode
