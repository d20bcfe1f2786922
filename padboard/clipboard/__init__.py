"""Multi-pad clipboard: selections, pads and transfer-command compilation."""
from padboard.clipboard.commands import (
    ClipboardCommand,
    delete_request,
    paste_request,
    remove_item,
    select_path,
    select_record,
)
from padboard.clipboard.compiler import CommandCompiler, PathCommandBatch, RecordCommandBatch
from padboard.clipboard.keys import (
    decode,
    encode_path,
    encode_record,
    filter_toggle_input,
    is_well_formed,
    parse_target_ref,
    try_decode,
)
from padboard.clipboard.manager import ClipboardController
from padboard.clipboard.pads import PadStore
from padboard.clipboard.pruner import prune_active_pad
from padboard.clipboard.resolvers import (
    AlwaysExistsRecordResolver,
    LocalPathResolver,
    StaticSchemaRegistry,
)
from padboard.clipboard.storage import (
    MemoryClipboardStore,
    SqliteClipboardStore,
    StoreScope,
    open_store,
)
from padboard.clipboard.types import (
    DEFAULT_PAD,
    FILE_MARKER,
    MAX_NUMBERED_PADS,
    SELECTED_MARKER,
    Pad,
    PadMode,
    PathKey,
    RecordKey,
    SelectionKind,
)

__all__ = [
    "ClipboardController",
    "ClipboardCommand",
    "CommandCompiler",
    "PadStore",
    "Pad",
    "PadMode",
    "RecordKey",
    "PathKey",
    "SelectionKind",
    "RecordCommandBatch",
    "PathCommandBatch",
    "DEFAULT_PAD",
    "FILE_MARKER",
    "MAX_NUMBERED_PADS",
    "SELECTED_MARKER",
    "prune_active_pad",
    # Keys
    "encode_record",
    "encode_path",
    "decode",
    "try_decode",
    "is_well_formed",
    "parse_target_ref",
    "filter_toggle_input",
    # Requests
    "select_record",
    "select_path",
    "remove_item",
    "paste_request",
    "delete_request",
    # Storage
    "MemoryClipboardStore",
    "SqliteClipboardStore",
    "StoreScope",
    "open_store",
    # Collaborators
    "StaticSchemaRegistry",
    "AlwaysExistsRecordResolver",
    "LocalPathResolver",
]
