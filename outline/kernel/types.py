"""
Outline Kernel — Shared Types

Value types used across events, reducer, navigation, wire and assembly.
These are the contracts that bind the kernel together.

- Row       — caller input: a pre-generated id plus a label
- LogEntry  — closed union of the five structural edits (add, add_right,
              add_below, add_above, cut), discriminated by `kind`
- Log       — immutable tuple of LogEntry, append-only
- Node      — one materialized row of a snapshot (id, label, order, parent)
- Snapshot  — tuple of Node in breadth-first layout

Log entries never carry `order`. Order is derived by the reducer on every fold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

# Opaque, hashable tokens supplied by the caller. The kernel never mints ids.
Identifier = Union[str, int]

# Parent value of root-level nodes.
ROOT = None


# ---------------------------------------------------------------------------
# Log model
# ---------------------------------------------------------------------------


class Row(BaseModel):
    """What the caller hands to every add builder."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Identifier
    label: str = ""


class Add(BaseModel):
    """Append `row` at the end of the root level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["add"] = "add"
    row: Row


class AddRight(BaseModel):
    """Insert `row` as the first child of `anchor`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["add_right"] = "add_right"
    anchor: Identifier
    row: Row


class AddBelow(BaseModel):
    """Insert `row` as the sibling directly after `anchor`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["add_below"] = "add_below"
    anchor: Identifier
    row: Row


class AddAbove(BaseModel):
    """Insert `row` as the sibling directly before `anchor`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["add_above"] = "add_above"
    anchor: Identifier
    row: Row


class Cut(BaseModel):
    """Remove `target` from its sibling group."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["cut"] = "cut"
    target: Identifier


LogEntry = Annotated[
    Union[Add, AddRight, AddBelow, AddAbove, Cut],
    Field(discriminator="kind"),
]

LOG_ENTRY_TYPES: tuple[type[BaseModel], ...] = (Add, AddRight, AddBelow, AddAbove, Cut)

ENTRY_KINDS: set[str] = {"add", "add_right", "add_below", "add_above", "cut"}

Log = tuple[LogEntry, ...]

EMPTY_LOG: Log = ()


# ---------------------------------------------------------------------------
# Snapshot model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Node:
    """
    One materialized row. `order` is the 1-based position within the
    sibling group that shares `parent`.
    """

    id: Identifier
    label: str
    order: int
    parent: Identifier | None = ROOT

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "order": self.order,
            "parent": self.parent,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Node:
        return cls(
            id=d["id"],
            label=d.get("label", ""),
            order=d["order"],
            parent=d.get("parent"),
        )


Snapshot = tuple[Node, ...]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MalformedLog(Exception):
    """A log that cannot be folded into a snapshot."""

    code = "MALFORMED_LOG"

    def __init__(self, detail: str, position: int | None = None) -> None:
        self.detail = detail
        self.position = position
        where = f" (entry {position})" if position is not None else ""
        super().__init__(f"{self.code}: {detail}{where}")

    def at(self, position: int) -> MalformedLog:
        """Same error, tagged with the log position of the failing entry."""
        return type(self)(self.detail, position)


class AnchorNotFound(MalformedLog):
    """An anchor or cut target is absent from the snapshot so far."""

    code = "ANCHOR_NOT_FOUND"


class DuplicateIdentifier(MalformedLog):
    """A row id is already present in the snapshot so far."""

    code = "DUPLICATE_ID"


class UnknownLogEntry(MalformedLog):
    """Object is not one of the five log entry kinds."""

    code = "UNKNOWN_ENTRY"


class LogDecodeError(MalformedLog):
    """Wire record could not be decoded into a log entry."""

    code = "DECODE_FAILED"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def as_row(row: Row | dict[str, Any]) -> Row:
    """Coerce a mapping into a Row. Type shape only, no structural checks."""
    if isinstance(row, Row):
        return row
    return Row.model_validate(row)
