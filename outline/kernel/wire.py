"""
Outline Kernel — Wire Format

Converts logs and snapshots to JSON-compatible records and back, for whatever
transport or storage the caller uses. Every log record carries its `kind`:

  {"kind": "add",       "row": {"id": ..., "label": ...}}
  {"kind": "add_right", "anchor": ..., "row": {...}}
  {"kind": "add_below", "anchor": ..., "row": {...}}
  {"kind": "add_above", "anchor": ..., "row": {...}}
  {"kind": "cut",       "target": ...}

Decoding checks record shape only. Whether anchors exist is the reducer's job.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from outline.kernel.types import Log, LogDecodeError, LogEntry, Snapshot

_ENTRY_ADAPTER: TypeAdapter = TypeAdapter(LogEntry)
_LOG_ADAPTER: TypeAdapter = TypeAdapter(list[LogEntry])


def dump_entry(entry: LogEntry) -> dict[str, Any]:
    return entry.model_dump(mode="json")


def load_entry(record: dict[str, Any]) -> LogEntry:
    try:
        return _ENTRY_ADAPTER.validate_python(record)
    except ValidationError as e:
        raise LogDecodeError(f"invalid log record: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e


def dump_log(log: Log) -> list[dict[str, Any]]:
    return [dump_entry(entry) for entry in log]


def load_log(records: list[dict[str, Any]]) -> Log:
    """Decode a list of records. The error position is the first bad record."""
    entries = []
    for position, record in enumerate(records):
        try:
            entries.append(load_entry(record))
        except LogDecodeError as e:
            raise e.at(position) from e
    return tuple(entries)


def log_to_json(log: Log) -> str:
    return _LOG_ADAPTER.dump_json(list(log)).decode()


def log_from_json(data: str | bytes) -> Log:
    try:
        return tuple(_LOG_ADAPTER.validate_json(data))
    except ValidationError as e:
        raise LogDecodeError(f"invalid log document: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e


def snapshot_to_dicts(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Snapshot rows as plain dicts, in snapshot order, for a rendering layer."""
    return [node.to_dict() for node in snapshot]
