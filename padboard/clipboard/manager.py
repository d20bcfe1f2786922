"""ClipboardController - coordinates storage, pads, pruning and compilation."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from padboard.clipboard.commands import ClipboardCommand
from padboard.clipboard.compiler import CommandCompiler, PathCommandBatch, RecordCommandBatch
from padboard.clipboard.keys import encode_record
from padboard.clipboard.pads import PadStore
from padboard.clipboard.pruner import prune_active_pad
from padboard.clipboard.resolvers import (
    AlwaysExistsRecordResolver,
    LocalPathResolver,
    StaticSchemaRegistry,
)
from padboard.clipboard.storage import open_store
from padboard.clipboard.types import (
    DEFAULT_PAD,
    FILE_MARKER,
    KEY_SEPARATOR,
    SELECTED_MARKER,
)
from padboard.core.interfaces import (
    ClipboardStore,
    PathResolver,
    RecordResolver,
    SchemaRegistry,
)

if TYPE_CHECKING:
    from padboard.config.schema import Config

logger = logging.getLogger(__name__)


class ClipboardController:
    """Session façade over one user's clipboard.

    Typical request turn::

        controller = ClipboardController(store, "alice", schema_registry=registry)
        controller.initialize()
        controller.apply_command(ClipboardCommand.from_mapping(request["CB"]))
        batch = controller.paste_records("pages|30")
        controller.end_session()

    Nothing is written back unless the state changed, and changes are lost
    if end_session() is never called.
    """

    def __init__(
        self,
        store: ClipboardStore,
        user_key: str,
        *,
        number_of_pads: int = 3,
        lock_to_normal: bool = False,
        schema_registry: SchemaRegistry | None = None,
        record_resolver: RecordResolver | None = None,
        path_resolver: PathResolver | None = None,
    ) -> None:
        """Initialize clipboard controller.

        Args:
            store: Where the clipboard blob is loaded from and saved to
            user_key: Identifies the user's clipboard in the store
            number_of_pads: Numbered pads besides the default pad
            lock_to_normal: Lock to the default pad right after initialize()
            schema_registry: Known record schemas (defaults to accepting all)
            record_resolver: Record existence checks for pruning
            path_resolver: Path resolution for pruning (defaults to local fs)
        """
        self._store = store
        self._user_key = user_key
        self._number_of_pads = number_of_pads
        self._lock_to_normal = lock_to_normal
        self._schemas = schema_registry or StaticSchemaRegistry()
        self._records = record_resolver or AlwaysExistsRecordResolver()
        self._paths = path_resolver or LocalPathResolver()
        self._owns_store = False

        self._pads: PadStore | None = None
        self._compiler: CommandCompiler | None = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        user_key: str,
        session_id: str | None = None,
        **collaborators: Any,
    ) -> ClipboardController:
        """Build a controller whose store is chosen by the user's preferences.

        The store is opened here and closed by close().
        """
        store = open_store(config, session_id=session_id)
        collaborators.setdefault(
            "schema_registry", StaticSchemaRegistry(config.clipboard.known_schemas)
        )
        controller = cls(
            store,
            user_key,
            number_of_pads=config.clipboard.number_of_pads,
            lock_to_normal=config.clipboard.lock_to_normal,
            **collaborators,
        )
        controller._owns_store = True
        return controller

    def __enter__(self) -> ClipboardController:
        if self._pads is None:
            self.initialize()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        try:
            if exc_type is None:
                self.end_session()
        finally:
            self.close()

    def close(self) -> None:
        """Close the store if this controller opened it."""
        if self._owns_store:
            close = getattr(self._store, "close", None)
            if close is not None:
                close()

    # --- Lifecycle ---

    def initialize(self, last_current: str | None = None) -> ClipboardController:
        """Load the user's pads from the store.

        Args:
            last_current: Pad to activate; defaults to the stored pointer.
        """
        blob = self._store.load(self._user_key)
        self._pads = PadStore.from_blob(blob, self._number_of_pads, last_current)
        self._compiler = CommandCompiler(self._pads, self._schemas)
        if self._lock_to_normal:
            self._pads.lock()
        logger.debug(
            "Clipboard initialized for %s: %d pads, current=%s",
            self._user_key,
            len(self._pads.pads),
            self._pads.current,
        )
        return self

    @property
    def pads(self) -> PadStore:
        if self._pads is None:
            raise RuntimeError("Clipboard not initialized; call initialize() first")
        return self._pads

    @property
    def compiler(self) -> CommandCompiler:
        if self._compiler is None:
            raise RuntimeError("Clipboard not initialized; call initialize() first")
        return self._compiler

    @property
    def current(self) -> str:
        return self.pads.current

    @property
    def dirty(self) -> bool:
        return self.pads.dirty

    def lock_to_normal(self) -> None:
        """Operate on the default pad only; later pad switches are ignored."""
        self.pads.lock()

    def save(self) -> None:
        """Write the pads to the store unconditionally."""
        self._store.save(self._user_key, self.pads.to_blob())
        logger.info("Clipboard saved for %s", self._user_key)

    def end_session(self) -> None:
        """Save if anything changed since the last save."""
        if self.pads.dirty:
            self.save()
        self.pads.dirty = False

    # --- Mutations ---

    def apply_command(self, command: ClipboardCommand | dict[str, Any]) -> None:
        """Apply an aggregated request.

        Order: toggles, pad switch, removal, pad clear, copy mode.
        """
        if not isinstance(command, ClipboardCommand):
            command = ClipboardCommand.from_mapping(command)
        if command.elements:
            self.apply_toggle_batch(command.elements)
        if command.set_pad:
            self.switch_pad(command.set_pad)
        if command.remove:
            self.remove_key(command.remove)
        if command.remove_all:
            self.clear_pad(command.remove_all)
        if command.set_copy_mode is not None:
            self.set_mode(command.set_copy_mode)

    def apply_toggle_batch(self, entries: Iterable[tuple[str, Any]]) -> None:
        self.pads.apply_toggle_batch(entries)

    def set_mode(self, copy: bool) -> None:
        self.pads.set_mode(copy)

    def remove_key(self, key: str) -> None:
        self.pads.remove_key(key)

    def clear_pad(self, pad_id: str) -> None:
        self.pads.clear_pad(pad_id)

    def switch_pad(self, pad_id: str) -> None:
        self.pads.switch_pad(pad_id)

    def prune_active_pad(self) -> list[str]:
        """Drop selections whose record or path has disappeared.

        Raises:
            Whatever the path resolver raises for failures other than
            "not found" (e.g. PermissionError).
        """
        return prune_active_pad(self.pads, self._records, self._paths)

    # --- Compilation (saves afterwards) ---

    def paste_records(
        self,
        target_ref: str,
        batch: RecordCommandBatch | None = None,
        update: dict[str, Any] | None = None,
    ) -> RecordCommandBatch:
        """Compile a record paste and persist the consumed selection."""
        batch = self.compiler.compile_paste_batch(target_ref, batch, update)
        self.end_session()
        return batch

    def delete_records(self, batch: RecordCommandBatch | None = None) -> RecordCommandBatch:
        batch = self.compiler.compile_delete_batch(batch)
        self.end_session()
        return batch

    def paste_paths(
        self, target_ref: str, batch: PathCommandBatch | None = None
    ) -> PathCommandBatch:
        """Compile a file paste for target_ref ("_FILE|<target folder>")."""
        _, sep, target = target_ref.partition(KEY_SEPARATOR)
        batch = self.compiler.compile_path_paste_batch(target if sep else None, batch)
        self.end_session()
        return batch

    def delete_paths(self, batch: PathCommandBatch | None = None) -> PathCommandBatch:
        batch = self.compiler.compile_path_delete_batch(batch)
        self.end_session()
        return batch

    def edit_batch(self) -> dict[str, dict[str, str]]:
        return self.compiler.compile_edit_batch()

    def export_parameters(self) -> dict[str, Any]:
        return self.compiler.export_parameters(self._records, self._paths)

    # --- Queries ---

    def selection_view(self, match_kind: str = "", pad: str | None = None) -> dict[str, Any]:
        return self.compiler.selection_view(match_kind, pad)

    def has_items_anywhere(self) -> bool:
        return self.pads.has_items_anywhere()

    def has_items_in_active_pad(self) -> bool:
        return self.pads.has_items_in_active_pad()

    def current_mode(self) -> str:
        """Mode of the active pad: "copy" or "cut"."""
        return self.pads.current_mode().label

    def is_selected(self, schema: str, record_id: str | int) -> str:
        """Whether schema/id is on the active pad.

        Returns "" when absent. On the default pad a present item reports the
        pad mode ("copy" or "cut"); on numbered pads SELECTED_MARKER.
        For paths pass FILE_MARKER and the path hash.
        """
        key = encode_record(schema, record_id)
        if not self.pads.active.items.get(key):
            return ""
        if self.pads.current == DEFAULT_PAD:
            return self.current_mode()
        return SELECTED_MARKER

    def first_selected_record_ref(
        self, schema: str = "", record_id: str | int = ""
    ) -> tuple[str, str] | None:
        """The selected record schema/id pair, or None.

        Without arguments the first record on the active pad is used.
        """
        if not schema and not record_id:
            view = self.selection_view("")
            if not view:
                return None
            schema, _, record_id = next(iter(view)).partition(KEY_SEPARATOR)
        if schema == FILE_MARKER or not self.is_selected(schema, record_id):
            return None
        return schema, str(record_id)
