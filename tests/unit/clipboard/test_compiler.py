"""Tests for compiling pads into command batches."""

import pytest

from padboard.clipboard.compiler import CommandCompiler
from padboard.clipboard.keys import encode_path
from padboard.clipboard.pads import PadStore
from padboard.clipboard.types import PadMode
from padboard.core.interfaces import PathResolution


@pytest.fixture
def store() -> PadStore:
    """Store with tab_1 active."""
    store = PadStore(3)
    store.switch_pad("tab_1")
    store.dirty = False
    return store


@pytest.fixture
def compiler(store, schemas) -> CommandCompiler:
    return CommandCompiler(store, schemas)


class TestSelectionView:
    """Tests for filtering a pad's items."""

    def test_blank_kind_returns_records_only(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "_FILE|abc": "/a", "tt_content|5": 1}
        assert list(compiler.selection_view("")) == ["pages|1", "tt_content|5"]

    def test_schema_filter(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "tt_content|5": 1}
        assert list(compiler.selection_view("tt_content")) == ["tt_content|5"]

    def test_file_marker_returns_paths_only(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "_FILE|abc": "/a"}
        assert compiler.selection_view("_FILE") == {"_FILE|abc": "/a"}

    def test_unknown_schema_hidden_but_kept(self, store, compiler) -> None:
        store.active.items = {"dropped_table|1": 1, "pages|1": 1}

        assert list(compiler.selection_view("")) == ["pages|1"]
        assert "dropped_table|1" in store.active.items

    def test_numbered_pad_payload_is_record_id(self, store, compiler) -> None:
        store.active.items = {"pages|12": 1}
        assert compiler.selection_view("") == {"pages|12": "12"}

    def test_named_pad(self, store, compiler) -> None:
        store.pads["tab_3"].items = {"pages|2": 1}
        assert list(compiler.selection_view("", pad="tab_3")) == ["pages|2"]
        assert compiler.selection_view("", pad="tab_99") == {}

    def test_malformed_keys_hidden(self, store, compiler) -> None:
        store.active.items = {"junk": 1, "pages|1": 1}
        assert list(compiler.selection_view("")) == ["pages|1"]
        assert compiler.selection_view("_FILE") == {}

    def test_falsy_payloads_skipped(self, store, compiler) -> None:
        store.active.items = {"pages|1": 0, "_FILE|abc": ""}
        assert compiler.selection_view("") == {}
        assert compiler.selection_view("_FILE") == {}


class TestCompilePasteBatch:
    """Tests for record paste batches."""

    def test_move_reverses_order_and_consumes(self, store, compiler) -> None:
        store.active.items = {"tt_content|5": 1, "tt_content|7": 1}

        batch = compiler.compile_paste_batch("pages|30")

        assert list(batch["tt_content"]) == ["7", "5"]
        assert batch == {"tt_content": {"7": {"move": 30}, "5": {"move": 30}}}
        assert store.active.items == {}
        assert store.dirty is True

    def test_copy_keeps_selection(self, store, compiler) -> None:
        store.active.items = {"tt_content|5": 1, "tt_content|7": 1}
        store.active.mode = PadMode.COPY

        batch = compiler.compile_paste_batch("tt_content|-7")

        assert batch == {"tt_content": {"7": {"copy": -7}, "5": {"copy": -7}}}
        assert list(store.active.items) == ["tt_content|5", "tt_content|7"]
        assert store.dirty is False

    def test_schema_target_only_pastes_that_schema(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "tt_content|5": 1}

        batch = compiler.compile_paste_batch("tt_content|30")

        assert batch == {"tt_content": {"5": {"move": 30}}}
        assert list(store.active.items) == ["pages|1"]

    def test_blank_schema_pastes_all_records(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "_FILE|abc": "/a", "tt_content|5": 1}

        batch = compiler.compile_paste_batch("|30")

        assert list(batch) == ["tt_content", "pages"]
        assert store.active.items == {"_FILE|abc": "/a"}

    def test_blank_schema_negative_target_is_rejected(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1}
        existing = {"pages": {"9": {"delete": 1}}}

        batch = compiler.compile_paste_batch("|-5", existing)

        assert batch is existing
        assert batch == {"pages": {"9": {"delete": 1}}}
        assert store.active.items == {"pages|1": 1}
        assert store.dirty is False

    def test_update_overlay(self, store, compiler) -> None:
        store.active.items = {"tt_content|5": 1}
        store.active.mode = PadMode.COPY

        batch = compiler.compile_paste_batch("pages|30", update={"colPos": 2})

        assert batch == {
            "tt_content": {
                "5": {"copy": {"action": "paste", "target": 30, "update": {"colPos": 2}}}
            }
        }

    def test_malformed_keys_left_in_place(self, store, compiler) -> None:
        store.active.items = {"tt_content|5": 1, "junk": 1}

        batch = compiler.compile_paste_batch("pages|30")

        assert batch == {"tt_content": {"5": {"move": 30}}}
        assert store.active.items == {"junk": 1}

    def test_extends_existing_batch(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1}
        batch = {"pages": {"1": {"delete": 1}}}

        compiler.compile_paste_batch("pages|30", batch)

        assert batch == {"pages": {"1": {"delete": 1, "move": 30}}}

    def test_default_pad_move(self, schemas) -> None:
        store = PadStore(0)
        store.apply_toggle_batch([("pages|2", 1)])
        compiler = CommandCompiler(store, schemas)

        assert compiler.compile_paste_batch("pages|0") == {"pages": {"2": {"move": 0}}}
        assert not store.has_items_anywhere()


class TestCompileDeleteBatch:
    """Tests for record delete batches."""

    def test_delete_consumes_regardless_of_mode(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "tt_content|5": 1, "_FILE|abc": "/a"}
        store.active.mode = PadMode.COPY

        batch = compiler.compile_delete_batch()

        assert batch == {"pages": {"1": {"delete": 1}}, "tt_content": {"5": {"delete": 1}}}
        assert compiler.selection_view("") == {}
        assert store.active.items == {"_FILE|abc": "/a"}
        assert store.dirty is True

    def test_nothing_to_delete(self, store, compiler) -> None:
        assert compiler.compile_delete_batch() == {}
        assert store.dirty is False


class TestEditBatch:
    def test_edit_batch_lists_records(self, store, compiler) -> None:
        store.active.items = {"pages|1": 1, "tt_content|5": 1, "_FILE|abc": "/a"}

        assert compiler.compile_edit_batch() == {
            "pages": {"1": "edit"},
            "tt_content": {"5": "edit"},
        }
        assert len(store.active.items) == 3


class TestPathBatches:
    """Tests for file engine batches."""

    def test_path_move_keeps_order_and_consumes(self, store, compiler) -> None:
        a, b = "/srv/a.txt", "/srv/b.txt"
        store.active.items = {encode_path(a): a, "pages|1": 1, encode_path(b): b}

        batch = compiler.compile_path_paste_batch("1:/upload/")

        assert batch == {
            "move": [
                {"data": a, "target": "1:/upload/"},
                {"data": b, "target": "1:/upload/"},
            ]
        }
        assert store.active.items == {"pages|1": 1}

    def test_path_copy_without_target(self, store, compiler) -> None:
        a = "/srv/a.txt"
        store.active.items = {encode_path(a): a}
        store.active.mode = PadMode.COPY

        batch = compiler.compile_path_paste_batch(None)

        assert batch == {"copy": [{"data": a}]}
        assert encode_path(a) in store.active.items

    def test_path_delete(self, store, compiler) -> None:
        a = "/srv/a.txt"
        store.active.items = {encode_path(a): a, "pages|1": 1}
        store.active.mode = PadMode.COPY

        batch = compiler.compile_path_delete_batch()

        assert batch == {"delete": [{"data": a}]}
        assert store.active.items == {"pages|1": 1}


class TestExportParameters:
    """Tests for export parameters."""

    def test_skips_unresolvable_items(self, store, compiler, records, make_paths) -> None:
        kept, gone = "/srv/kept.txt", "/srv/gone.txt"
        store.active.items = {
            "pages|1": 1,
            "pages|99": 1,
            encode_path(kept): kept,
            encode_path(gone): gone,
        }
        paths = make_paths({gone: PathResolution.NOT_FOUND})

        params = compiler.export_parameters(records, paths)

        assert params == {"action": "export", "record": ["pages:1"], "file": [kept], "dir": []}

    def test_folders_listed_separately(self, store, compiler, records, make_paths) -> None:
        folder, document = "/srv/upload/", "/srv/upload/a.pdf"
        store.active.items = {encode_path(folder): folder, encode_path(document): document}
        paths = make_paths(directories={folder})

        params = compiler.export_parameters(records, paths)

        assert params["dir"] == [folder]
        assert params["file"] == [document]

    def test_malformed_keys_skipped(self, store, compiler, records, make_paths) -> None:
        store.active.items = {"junk": 1, "pages|1": 1}

        params = compiler.export_parameters(records, make_paths())

        assert params["record"] == ["pages:1"]
