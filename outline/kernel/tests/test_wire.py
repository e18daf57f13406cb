"""
Outline Kernel — Wire Format Tests

Log records carry a `kind` discriminator; decoding checks shape only.
"""

import json

import pytest

from outline.kernel.events import log_add, log_add_above, log_add_below, log_add_right, log_cut, make_row
from outline.kernel.reducer import replay
from outline.kernel.types import EMPTY_LOG, AddRight, Cut, LogDecodeError, MalformedLog
from outline.kernel.wire import (
    dump_entry,
    dump_log,
    load_entry,
    load_log,
    log_from_json,
    log_to_json,
    snapshot_to_dicts,
)


@pytest.fixture
def log():
    log = log_add(EMPTY_LOG, make_row("a", "Alpha"))
    log = log_add_right(log, "a", make_row("a1", "Child"))
    log = log_add_below(log, "a", make_row(2, "Numbered"))
    log = log_add_above(log, 2, make_row("z"))
    return log_cut(log, "a1")


class TestRecords:
    def test_dump_entry_shape(self):
        entry = AddRight(anchor="a", row=make_row("b", "B"))
        assert dump_entry(entry) == {
            "kind": "add_right",
            "anchor": "a",
            "row": {"id": "b", "label": "B"},
        }

    def test_cut_shape(self):
        assert dump_entry(Cut(target=3)) == {"kind": "cut", "target": 3}

    def test_load_entry_picks_kind(self):
        entry = load_entry({"kind": "cut", "target": "a"})
        assert entry == Cut(target="a")

    def test_dump_then_load_log(self, log):
        assert load_log(dump_log(log)) == log

    def test_records_are_json_compatible(self, log):
        assert json.loads(json.dumps(dump_log(log))) == dump_log(log)


class TestJson:
    def test_json_document(self, log):
        text = log_to_json(log)
        assert json.loads(text)[0] == {"kind": "add", "row": {"id": "a", "label": "Alpha"}}
        assert log_from_json(text) == log

    def test_decoded_log_replays(self, log):
        assert replay(log_from_json(log_to_json(log))) == replay(log)

    def test_rejects_bad_json(self):
        with pytest.raises(LogDecodeError):
            log_from_json("[{")

    def test_rejects_non_list(self):
        with pytest.raises(LogDecodeError):
            log_from_json('{"kind": "cut", "target": "a"}')


class TestDecodeErrors:
    def test_unknown_kind(self):
        with pytest.raises(LogDecodeError) as exc:
            load_entry({"kind": "move", "target": "a"})
        assert str(exc.value).startswith("DECODE_FAILED")

    def test_missing_anchor(self):
        with pytest.raises(LogDecodeError):
            load_entry({"kind": "add_below", "row": {"id": "a"}})

    def test_order_field_not_allowed(self):
        with pytest.raises(LogDecodeError):
            load_entry({"kind": "add", "row": {"id": "a", "label": "A", "order": 1}})

    def test_position_of_bad_record(self):
        records = [
            {"kind": "add", "row": {"id": "a"}},
            {"kind": "cut", "target": "a"},
            {"kind": "cut"},
        ]
        with pytest.raises(LogDecodeError) as exc:
            load_log(records)
        assert exc.value.position == 2

    def test_decode_error_is_malformed_log(self):
        with pytest.raises(MalformedLog):
            load_entry({})


class TestSnapshotRecords:
    def test_snapshot_to_dicts(self):
        log = log_add(EMPTY_LOG, make_row("a", "A"))
        log = log_add_right(log, "a", make_row("b", "B"))
        assert snapshot_to_dicts(replay(log)) == [
            {"id": "a", "label": "A", "order": 1, "parent": None},
            {"id": "b", "label": "B", "order": 1, "parent": "a"},
        ]


class TestPackageExports:
    def test_error_family_and_codec_from_package(self):
        import outline.kernel as kernel

        for name in ("MalformedLog", "AnchorNotFound", "DuplicateIdentifier", "UnknownLogEntry", "LogDecodeError"):
            assert issubclass(getattr(kernel, name), kernel.MalformedLog)
        for name in ("materialize", "dump_log", "load_log", "log_to_json", "log_from_json", "snapshot_to_dicts"):
            assert name in kernel.__all__
            assert callable(getattr(kernel, name))
