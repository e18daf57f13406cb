"""
Outline Kernel — Assembly Layer

Sits between the pure functions (builders, reducer, navigation) and the
editor. Owns the current log for one document and threads it forward.

Operations: add, add_right, add_below, add_above, cut, undo

Every edit is checked by replaying the grown log before it is accepted, so a
document never holds a log that fails to fold. Snapshots come from the
memoized replay; nothing is patched incrementally.

Single writer. No locking: callers serialize edits to a document.
"""

from __future__ import annotations

import logging
from typing import Any

from outline.kernel import events
from outline.kernel.config import settings
from outline.kernel.reducer import replay_cached
from outline.kernel.types import EMPTY_LOG, Identifier, Log, MalformedLog, Row, Snapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class NothingToUndo(Exception):
    """The document has no earlier log to return to."""

    pass


# ---------------------------------------------------------------------------
# Document handle
# ---------------------------------------------------------------------------


class OutlineDocument:
    """
    Single-owner handle on the latest log of one outline.
    Keeps previous logs as an undo stack.
    """

    def __init__(self, log: Log = EMPTY_LOG, history_limit: int | None = None):
        log = tuple(log)
        replay_cached(log)  # raises MalformedLog for a bad starting log
        self._log: Log = log
        self._history: list[Log] = []
        self._history_limit = settings.HISTORY_LIMIT if history_limit is None else history_limit

    # -- read --

    @property
    def log(self) -> Log:
        return self._log

    @property
    def snapshot(self) -> Snapshot:
        return replay_cached(self._log)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def __len__(self) -> int:
        return len(self._log)

    # -- edits --

    def add(self, row: Row | dict[str, Any]) -> Snapshot:
        return self._commit(events.log_add(self._log, row))

    def add_right(self, anchor: Identifier, row: Row | dict[str, Any]) -> Snapshot:
        return self._commit(events.log_add_right(self._log, anchor, row))

    def add_below(self, anchor: Identifier, row: Row | dict[str, Any]) -> Snapshot:
        return self._commit(events.log_add_below(self._log, anchor, row))

    def add_above(self, anchor: Identifier, row: Row | dict[str, Any]) -> Snapshot:
        return self._commit(events.log_add_above(self._log, anchor, row))

    def cut(self, target: Identifier) -> Snapshot:
        return self._commit(events.log_cut(self._log, target))

    def undo(self) -> Snapshot:
        """Drop back to the log before the last accepted edit."""
        if not self._history:
            raise NothingToUndo("no edits to undo")
        self._log = self._history.pop()
        logger.info("document: undo, %d entries remain", len(self._log))
        return self.snapshot

    # -- internals --

    def _commit(self, log: Log) -> Snapshot:
        entry = log[-1]
        try:
            snapshot = replay_cached(log)
        except MalformedLog as e:
            logger.warning("document: rejected %s: %s", entry.kind, e)
            raise

        self._history.append(self._log)
        if self._history_limit and len(self._history) > self._history_limit:
            del self._history[0]
        self._log = log
        logger.info("document: applied %s, %d entries, %d rows", entry.kind, len(log), len(snapshot))
        return snapshot
