"""
Outline Kernel — the pure engine.

Components:
  types       — Row, log entries, Node, exceptions
  events      — builders that append one entry to a log
  reducer     — log → snapshot  (pure, deterministic, fails fast)
  navigation  — sibling / child / cursor queries over a snapshot
  wire        — log and snapshot to JSON-compatible records
  assembly    — OutlineDocument, the single-owner current-log handle
"""

from outline.kernel.assembly import NothingToUndo, OutlineDocument
from outline.kernel.events import (
    log_add,
    log_add_above,
    log_add_below,
    log_add_right,
    log_cut,
    make_row,
)
from outline.kernel.navigation import (
    bottom,
    get_above,
    get_below,
    get_first_right_of,
    get_node,
    get_parent,
    get_right_of,
    get_sibling_above,
    get_sibling_below,
    iter_document_order,
    top,
)
from outline.kernel.reducer import empty_state, iter_replay, materialize, reduce, replay, replay_cached
from outline.kernel.types import (
    EMPTY_LOG,
    ROOT,
    AnchorNotFound,
    DuplicateIdentifier,
    LogDecodeError,
    MalformedLog,
    Node,
    Row,
    UnknownLogEntry,
)
from outline.kernel.wire import (
    dump_entry,
    dump_log,
    load_entry,
    load_log,
    log_from_json,
    log_to_json,
    snapshot_to_dicts,
)

__all__ = [
    "EMPTY_LOG",
    "ROOT",
    "Row",
    "Node",
    "MalformedLog",
    "AnchorNotFound",
    "DuplicateIdentifier",
    "UnknownLogEntry",
    "LogDecodeError",
    "make_row",
    "log_add",
    "log_add_right",
    "log_add_below",
    "log_add_above",
    "log_cut",
    "empty_state",
    "reduce",
    "replay",
    "materialize",
    "replay_cached",
    "iter_replay",
    "get_node",
    "get_parent",
    "get_right_of",
    "get_first_right_of",
    "get_sibling_above",
    "get_sibling_below",
    "top",
    "bottom",
    "get_above",
    "get_below",
    "iter_document_order",
    "OutlineDocument",
    "NothingToUndo",
    "dump_entry",
    "load_entry",
    "dump_log",
    "load_log",
    "log_to_json",
    "log_from_json",
    "snapshot_to_dicts",
]
