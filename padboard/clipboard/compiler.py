"""CommandCompiler - turns pad contents into command batches.

Two downstream engines consume the output:

Record engine, a nested mapping schema -> id -> directive::

    {"tt_content": {"7": {"move": 30}, "5": {"move": 30}}}
    {"tt_content": {"7": {"copy": {"action": "paste", "target": 30, "update": {...}}}}}
    {"pages": {"12": {"delete": 1}}}

File engine, lists of directives keyed by operation::

    {"move": [{"data": "/srv/a.txt", "target": "1:/upload/"}]}
    {"delete": [{"data": "/srv/a.txt"}]}
"""
from __future__ import annotations

import logging
from typing import Any

from padboard.clipboard.keys import decode, encode, parse_target_ref, to_int, try_decode
from padboard.clipboard.pads import PadStore
from padboard.clipboard.types import FILE_MARKER, PadMode, PathKey, RecordKey
from padboard.core.errors import ResourceNotFoundError
from padboard.core.interfaces import (
    PathResolution,
    PathResolver,
    RecordResolver,
    SchemaRegistry,
)

logger = logging.getLogger(__name__)

RecordCommandBatch = dict[str, dict[str, dict[str, Any]]]
PathCommandBatch = dict[str, list[dict[str, Any]]]


class CommandCompiler:
    """Reads pads from a PadStore and emits command batches.

    Compiling a paste in move mode, or any delete, consumes the emitted
    selections: each key is removed right after its directive is emitted.
    """

    def __init__(self, store: PadStore, schema_registry: SchemaRegistry) -> None:
        self._store = store
        self._schemas = schema_registry

    def selection_view(self, match_kind: str = "", pad: str | None = None) -> dict[str, Any]:
        """Selected items of a pad, filtered by kind.

        Args:
            match_kind: "" for records of every known schema, a schema name
                for records of that schema, or FILE_MARKER for paths. Paths
                are only ever returned for FILE_MARKER.
            pad: Pad id, defaults to the active pad.

        Returns:
            Ordered mapping key -> payload. Path payloads are the paths.
            Records whose schema the registry no longer knows, and malformed
            keys, are left out but stay stored.
        """
        selected = self._store.get(pad)
        view: dict[str, Any] = {}
        if selected is None:
            return view

        for key, payload in selected.items.items():
            if not payload:
                continue
            selection = try_decode(key)
            if selection is None:
                continue
            if isinstance(selection, PathKey):
                if match_kind == FILE_MARKER:
                    view[key] = payload
            elif (
                (not match_kind or selection.schema == match_kind)
                and self._schemas.is_known_schema(selection.schema)
            ):
                view[key] = payload if selected.is_default else selection.id
        return view

    def record_selections(self, match_kind: str = "", pad: str | None = None) -> list[RecordKey]:
        """Decoded record keys from selection_view(), in pad order."""
        return [
            selection
            for selection in map(decode, self.selection_view(match_kind, pad))
            if isinstance(selection, RecordKey)
        ]

    # --- Record engine ---

    def compile_paste_batch(
        self,
        target_ref: str,
        batch: RecordCommandBatch | None = None,
        update: dict[str, Any] | None = None,
    ) -> RecordCommandBatch:
        """Add paste directives for the active pad's records.

        target_ref is "<schema>|<target id>". A non-negative target id pastes
        into that page, a negative one pastes after record abs(id) of the
        given schema. An empty schema pastes records of all schemas and is
        only accepted with a non-negative target id.

        Directives are emitted in reverse selection order: the record engine
        places each "after" target in turn, which restores the original
        order on screen.

        Args:
            target_ref: Paste destination.
            batch: Batch to extend (a new one is created when None).
            update: Field values the engine should set on each pasted record.

        Returns:
            The extended batch (unchanged when target_ref is rejected).
        """
        batch = {} if batch is None else batch
        schema, raw_target = parse_target_ref(target_ref)
        target_id = to_int(raw_target)
        if not schema and target_id < 0:
            logger.debug("Rejecting paste target without schema: %s", target_ref)
            return batch

        mode = self._store.current_mode()
        selections = self.record_selections(schema)
        for selection in reversed(selections):
            if update is not None:
                directive: Any = {"action": "paste", "target": target_id, "update": update}
            else:
                directive = target_id
            batch.setdefault(selection.schema, {}).setdefault(selection.id, {})[
                mode.command
            ] = directive
            if mode is PadMode.MOVE:
                self._store.remove_key(encode(selection))

        logger.debug(
            "Compiled %s of %d records to %s", mode.command, len(selections), target_ref
        )
        return batch

    def compile_delete_batch(self, batch: RecordCommandBatch | None = None) -> RecordCommandBatch:
        """Add delete directives for every record on the active pad.

        Deleting always consumes the selection, whatever the pad mode.
        """
        batch = {} if batch is None else batch
        for selection in self.record_selections(""):
            batch.setdefault(selection.schema, {}).setdefault(selection.id, {})["delete"] = 1
            self._store.remove_key(encode(selection))
        return batch

    def compile_edit_batch(self) -> dict[str, dict[str, str]]:
        """Edit request for every record on the active pad."""
        batch: dict[str, dict[str, str]] = {}
        for selection in self.record_selections(""):
            batch.setdefault(selection.schema, {})[selection.id] = "edit"
        return batch

    # --- File engine ---

    def compile_path_paste_batch(
        self,
        target: str | None,
        batch: PathCommandBatch | None = None,
    ) -> PathCommandBatch:
        """Add copy/move directives for the active pad's paths.

        Paths keep their selection order. target is passed through untouched;
        with None the directives carry no target.
        """
        batch = {} if batch is None else batch
        mode = self._store.current_mode()
        for key, path in self.selection_view(FILE_MARKER).items():
            directive: dict[str, Any] = {"data": path}
            if target is not None:
                directive["target"] = target
            batch.setdefault(mode.command, []).append(directive)
            if mode is PadMode.MOVE:
                self._store.remove_key(key)
        return batch

    def compile_path_delete_batch(self, batch: PathCommandBatch | None = None) -> PathCommandBatch:
        """Add delete directives for every path on the active pad."""
        batch = {} if batch is None else batch
        for key, path in self.selection_view(FILE_MARKER).items():
            batch.setdefault("delete", []).append({"data": path})
            self._store.remove_key(key)
        return batch

    # --- Export ---

    def export_parameters(
        self,
        record_resolver: RecordResolver,
        path_resolver: PathResolver,
    ) -> dict[str, Any]:
        """Parameters for exporting the active pad's contents.

        Records are listed as "schema:id". Paths are listed verbatim under
        "dir" or "file" as the path resolver reports them. Items that no
        longer resolve, and malformed keys, are skipped; other resolver
        failures propagate.
        """
        params: dict[str, Any] = {"action": "export", "record": [], "file": [], "dir": []}
        for key, payload in self._store.active.items.items():
            selection = try_decode(key)
            if not payload or selection is None:
                continue
            if isinstance(selection, PathKey):
                path = str(payload)
                if _path_exists(path_resolver, path):
                    kind = "dir" if path_resolver.is_directory(path) else "file"
                    params[kind].append(payload)
            elif record_resolver.exists(selection.schema, selection.id):
                params["record"].append(f"{selection.schema}:{selection.id}")
        return params


def _path_exists(path_resolver: PathResolver, path: str) -> bool:
    try:
        return path_resolver.resolve(path) is PathResolution.FOUND
    except ResourceNotFoundError:
        return False
