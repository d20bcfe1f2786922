"""Lazy removal of selections whose record or path no longer exists."""
from __future__ import annotations

import logging

from padboard.clipboard.keys import try_decode
from padboard.clipboard.pads import PadStore
from padboard.clipboard.types import PathKey
from padboard.core.errors import ResourceNotFoundError
from padboard.core.interfaces import PathResolution, PathResolver, RecordResolver

logger = logging.getLogger(__name__)


def prune_active_pad(
    store: PadStore,
    record_resolver: RecordResolver,
    path_resolver: PathResolver,
) -> list[str]:
    """Drop stale entries from the active pad.

    Malformed keys are dropped. Records are dropped when their payload is
    empty or the record is gone. Paths are dropped when their payload is empty or the resolver reports
    them missing. Any other resolver failure (e.g. PermissionError) is not
    caught and reaches the caller.

    Returns:
        Keys that were removed, in pad order.
    """
    pad = store.active
    removed: list[str] = []

    for key, payload in list(pad.items.items()):
        selection = try_decode(key)
        if not payload or selection is None:
            removed.append(key)
            continue
        if isinstance(selection, PathKey):
            if _path_missing(path_resolver, str(payload)):
                removed.append(key)
        elif not record_resolver.exists(selection.schema, selection.id):
            removed.append(key)

    for key in removed:
        pad.discard(key)
    if removed:
        store.dirty = True
        logger.debug("Pruned %d stale entries from pad %s: %s", len(removed), pad.id, removed)
    return removed


def _path_missing(path_resolver: PathResolver, path: str) -> bool:
    try:
        return path_resolver.resolve(path) is PathResolution.NOT_FOUND
    except ResourceNotFoundError:
        return True
