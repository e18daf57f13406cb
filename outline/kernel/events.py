"""
Outline Kernel — Log Construction

Builder functions that grow a log by exactly one entry.
Used by the document handle to record edits, and by tests to build logs concisely.

Builders never look at existing entries and never compute order. The reducer
is the single source of truth for derived positions; a bad anchor only
surfaces when the log is replayed.
"""

from __future__ import annotations

from typing import Any

from outline.kernel.types import (
    Add,
    AddAbove,
    AddBelow,
    AddRight,
    Cut,
    Identifier,
    Log,
    LogEntry,
    Row,
    as_row,
)


def make_row(id: Identifier, label: str = "") -> Row:
    """Build a Row from an externally generated id."""
    return Row(id=id, label=label)


def append(log: Log, entry: LogEntry) -> Log:
    """
    Return a new log with `entry` at the end. The input log is untouched.

    Copies the tuple of entry references (linear in log length); no tree work.
    """
    return (*log, entry)


def log_add(log: Log, row: Row | dict[str, Any]) -> Log:
    return append(log, Add(row=as_row(row)))


def log_add_right(log: Log, anchor: Identifier, row: Row | dict[str, Any]) -> Log:
    return append(log, AddRight(anchor=anchor, row=as_row(row)))


def log_add_below(log: Log, anchor: Identifier, row: Row | dict[str, Any]) -> Log:
    return append(log, AddBelow(anchor=anchor, row=as_row(row)))


def log_add_above(log: Log, anchor: Identifier, row: Row | dict[str, Any]) -> Log:
    return append(log, AddAbove(anchor=anchor, row=as_row(row)))


def log_cut(log: Log, target: Identifier) -> Log:
    return append(log, Cut(target=target))
