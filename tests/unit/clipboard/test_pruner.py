"""Tests for pruning stale selections."""

import pytest

from padboard.clipboard.keys import encode_path
from padboard.clipboard.pads import PadStore
from padboard.clipboard.pruner import prune_active_pad
from padboard.core.errors import ResourceNotFoundError
from padboard.core.interfaces import PathResolution


@pytest.fixture
def store() -> PadStore:
    """Store whose active numbered pad holds records and paths."""
    store = PadStore(2)
    store.switch_pad("tab_1")
    store.dirty = False
    return store


class TestPruneRecords:
    """Pruning of record selections."""

    def test_keeps_existing_records(self, store, records, make_paths) -> None:
        store.active.items = {"pages|1": 1, "tt_content|5": 1}

        removed = prune_active_pad(store, records, make_paths())

        assert removed == []
        assert list(store.active.items) == ["pages|1", "tt_content|5"]
        assert store.dirty is False

    def test_removes_missing_and_empty_records(self, store, records, make_paths) -> None:
        store.active.items = {"pages|1": 1, "pages|99": 1, "tt_content|5": 0}

        removed = prune_active_pad(store, records, make_paths())

        assert removed == ["pages|99", "tt_content|5"]
        assert list(store.active.items) == ["pages|1"]
        assert store.dirty is True

    def test_empty_payload_skips_lookup(self, store, records, make_paths) -> None:
        store.active.items = {"tt_content|5": ""}
        prune_active_pad(store, records, make_paths())
        assert records.calls == []

    def test_malformed_keys_removed(self, store, records, make_paths) -> None:
        store.active.items = {"junk": 1, "pages|1": 1, "|3": 1}

        removed = prune_active_pad(store, records, make_paths())

        assert removed == ["junk", "|3"]
        assert list(store.active.items) == ["pages|1"]
        assert records.calls == [("pages", "1")]

    def test_only_active_pad_is_pruned(self, store, records, make_paths) -> None:
        store.pads["tab_2"].items = {"pages|99": 1}
        prune_active_pad(store, records, make_paths())
        assert store.pads["tab_2"].items == {"pages|99": 1}


class TestPrunePaths:
    """Pruning of path selections."""

    def test_not_found_is_removed(self, store, records, make_paths) -> None:
        gone, kept = "/srv/gone.txt", "/srv/kept.txt"
        store.active.items = {encode_path(gone): gone, encode_path(kept): kept}
        paths = make_paths({gone: PathResolution.NOT_FOUND})

        removed = prune_active_pad(store, records, paths)

        assert removed == [encode_path(gone)]
        assert list(store.active.items.values()) == [kept]
        assert store.dirty is True

    def test_not_found_exception_is_removed(self, store, records, make_paths) -> None:
        gone = "/srv/gone.txt"
        store.active.items = {encode_path(gone): gone}
        paths = make_paths({gone: ResourceNotFoundError(gone)})

        assert prune_active_pad(store, records, paths) == [encode_path(gone)]

    def test_empty_payload_is_removed(self, store, records, make_paths) -> None:
        store.active.items = {"_FILE|abcdef0123": ""}
        assert prune_active_pad(store, records, make_paths()) == ["_FILE|abcdef0123"]

    def test_other_failures_propagate(self, store, records, make_paths) -> None:
        locked = "/srv/locked.txt"
        store.active.items = {"pages|99": 1, encode_path(locked): locked}
        paths = make_paths({locked: PermissionError("access denied")})

        with pytest.raises(PermissionError, match="access denied"):
            prune_active_pad(store, records, paths)

        # Nothing was removed before the failure surfaced
        assert "pages|99" in store.active.items
