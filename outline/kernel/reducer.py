"""
Outline Kernel — Reducer

Pure function: (state, entry) → state
No side effects. No IO. Deterministic.

Given the same log, produces the same snapshot every time.

The working state keeps one ordered id list per parent. A node's order is its
index in that list plus one, so every insert and cut renumbers the affected
sibling group by construction:

  add        — append to the root list            (order = root count + 1)
  add_right  — insert at the head of anchor's list (existing children +1)
  add_below  — insert after anchor                 (later siblings +1)
  add_above  — insert before anchor                (anchor and later siblings +1)
  cut        — remove target                       (later siblings -1)

A cut drops the target's subtree with it: once the target is gone its
descendants are unreachable from ROOT, so they can neither be materialized
nor used as anchors, and their ids are free again.

The fold fails fast: a malformed entry raises a MalformedLog subclass and the
whole replay fails. Entries are never skipped.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import lru_cache

from outline.kernel.config import settings
from outline.kernel.types import (
    LOG_ENTRY_TYPES,
    ROOT,
    Add,
    AddAbove,
    AddBelow,
    AddRight,
    AnchorNotFound,
    Cut,
    DuplicateIdentifier,
    Identifier,
    Log,
    LogEntry,
    MalformedLog,
    Node,
    Row,
    Snapshot,
    UnknownLogEntry,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Working state
# ---------------------------------------------------------------------------


@dataclass
class ReplayState:
    """
    The fold accumulator.

    labels:   {id: label}
    parents:  {id: parent id or ROOT}
    children: {parent id or ROOT: [id, ...]}  list position is order - 1
    """

    labels: dict[Identifier, str] = field(default_factory=dict)
    parents: dict[Identifier, Identifier | None] = field(default_factory=dict)
    children: dict[Identifier | None, list[Identifier]] = field(default_factory=lambda: {ROOT: []})

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.parents

    def __len__(self) -> int:
        return len(self.parents)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_state() -> ReplayState:
    """The working state for a log with zero entries. Only ROOT exists."""
    return ReplayState()


def reduce(state: ReplayState, entry: LogEntry) -> ReplayState:
    """
    Apply one entry to the working state and return the new state.

    Pure function. The input state is never modified (deep copy before mutation).
    Raises MalformedLog if the entry cannot be applied.
    """
    snap = copy.deepcopy(state)
    _apply(snap, entry)
    return snap


def materialize(state: ReplayState) -> Snapshot:
    """
    Project a working state into a snapshot.

    Breadth-first: root level by order, then each depth grouped by parent,
    parents taken in the order they were emitted, each group by order.
    """
    snapshot: list[Node] = []
    level: list[Identifier | None] = [ROOT]
    while level:
        next_level: list[Identifier | None] = []
        for parent in level:
            for order, node_id in enumerate(state.children.get(parent, ()), start=1):
                snapshot.append(Node(id=node_id, label=state.labels[node_id], order=order, parent=parent))
                next_level.append(node_id)
        level = next_level
    return tuple(snapshot)


def replay(log: Log) -> Snapshot:
    """
    Rebuild the snapshot from scratch by folding over all entries.
    replay(log) == materialize(reduce(reduce(empty_state(), e1), e2)...)

    Raises MalformedLog tagged with the position of the first bad entry.
    """
    state = empty_state()
    for position, entry in enumerate(log):
        _apply_at(state, entry, position)
    return materialize(state)


def iter_replay(log: Log) -> Iterator[Snapshot]:
    """Yield the snapshot after each entry, for history scrubbing."""
    state = empty_state()
    for position, entry in enumerate(log):
        _apply_at(state, entry, position)
        yield materialize(state)


def replay_cached(log: Log) -> Snapshot:
    """
    Memoized replay. Safe because the fold is pure and snapshots are immutable.

    Entries are checked before the cache lookup so a non-entry fails the same
    way it does in replay, not as an unhashable key.
    """
    log = tuple(log)
    for position, entry in enumerate(log):
        if not isinstance(entry, LOG_ENTRY_TYPES):
            raise UnknownLogEntry(f"{type(entry).__name__} is not a log entry", position)
    return _replay_cached(log)


def clear_replay_cache() -> None:
    _replay_cached.cache_clear()


@lru_cache(maxsize=settings.REPLAY_CACHE_SIZE)
def _replay_cached(log: Log) -> Snapshot:
    return replay(log)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _apply_at(state: ReplayState, entry: LogEntry, position: int) -> None:
    try:
        _apply(state, entry)
    except MalformedLog as exc:
        raise exc.at(position) from exc


def _apply(state: ReplayState, entry: LogEntry) -> None:
    """Dispatch one entry to its handler, mutating `state` in place."""
    if not isinstance(entry, LOG_ENTRY_TYPES):
        raise UnknownLogEntry(f"{type(entry).__name__} is not a log entry")
    handler = _HANDLERS.get(entry.kind)
    if handler is None:
        raise UnknownLogEntry(entry.kind)
    logger.debug("reducer: %s %r", entry.kind, entry)
    handler(state, entry)


def _require(state: ReplayState, node_id: Identifier, role: str) -> None:
    if node_id not in state:
        raise AnchorNotFound(f"{role} {node_id!r} does not exist")


def _sibling_group(state: ReplayState, node_id: Identifier) -> list[Identifier]:
    return state.children[state.parents[node_id]]


def _insert(state: ReplayState, row: Row, parent: Identifier | None, index: int) -> None:
    """Place `row` at `index` in parent's list. Later siblings shift down by one."""
    if row.id in state:
        raise DuplicateIdentifier(f"row {row.id!r} already exists")
    state.labels[row.id] = row.label
    state.parents[row.id] = parent
    state.children.setdefault(parent, []).insert(index, row.id)


def _drop_subtree(state: ReplayState, node_id: Identifier) -> None:
    """Forget `node_id` and everything below it. Sibling lists are not touched."""
    stack = [node_id]
    while stack:
        current = stack.pop()
        stack.extend(state.children.pop(current, ()))
        del state.labels[current]
        del state.parents[current]


# ---------------------------------------------------------------------------
# Entry handlers
# ---------------------------------------------------------------------------


def _handle_add(state: ReplayState, entry: Add) -> None:
    _insert(state, entry.row, ROOT, len(state.children[ROOT]))


def _handle_add_right(state: ReplayState, entry: AddRight) -> None:
    _require(state, entry.anchor, "anchor")
    _insert(state, entry.row, entry.anchor, 0)


def _handle_add_below(state: ReplayState, entry: AddBelow) -> None:
    _require(state, entry.anchor, "anchor")
    index = _sibling_group(state, entry.anchor).index(entry.anchor)
    _insert(state, entry.row, state.parents[entry.anchor], index + 1)


def _handle_add_above(state: ReplayState, entry: AddAbove) -> None:
    _require(state, entry.anchor, "anchor")
    index = _sibling_group(state, entry.anchor).index(entry.anchor)
    _insert(state, entry.row, state.parents[entry.anchor], index)


def _handle_cut(state: ReplayState, entry: Cut) -> None:
    _require(state, entry.target, "target")
    _sibling_group(state, entry.target).remove(entry.target)
    _drop_subtree(state, entry.target)


_HANDLERS = {
    "add": _handle_add,
    "add_right": _handle_add_right,
    "add_below": _handle_add_below,
    "add_above": _handle_add_above,
    "cut": _handle_cut,
}
