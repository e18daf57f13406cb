"""
Outline Kernel — Navigation Queries

Read-only questions about a materialized snapshot: what is structurally
adjacent to a given row. These drive cursor movement in the editor
(up/down, indent targets, jump to first/last sibling).

All queries take a Snapshot, never a Log. They are pure and total: a row
that has no such neighbour, or an id that is not in the snapshot, yields
None (or an empty tuple), never an exception.

Lookups are linear scans over the snapshot.
"""

from __future__ import annotations

from collections.abc import Iterator

from outline.kernel.types import ROOT, Identifier, Node, Snapshot

# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def get_node(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    for node in snapshot:
        if node.id == node_id:
            return node
    return None


def get_parent(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    """Parent row of `node_id`, or None at root level."""
    node = get_node(snapshot, node_id)
    if node is None or node.parent is ROOT:
        return None
    return get_node(snapshot, node.parent)


def depth(snapshot: Snapshot, node_id: Identifier) -> int | None:
    """0 for root-level rows, None for ids not in the snapshot or a broken parent chain."""
    node = get_node(snapshot, node_id)
    if node is None:
        return None
    level = 0
    while node.parent is not ROOT:
        node = get_node(snapshot, node.parent)
        if node is None:
            return None
        level += 1
    return level


# ---------------------------------------------------------------------------
# Children
# ---------------------------------------------------------------------------


def get_right_of(snapshot: Snapshot, node_id: Identifier | None) -> tuple[Node, ...]:
    """Children of `node_id` sorted by order. Pass ROOT for the root level."""
    return tuple(sorted((n for n in snapshot if n.parent == node_id), key=lambda n: n.order))


def get_first_right_of(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    for node in snapshot:
        if node.parent == node_id and node.order == 1:
            return node
    return None


# ---------------------------------------------------------------------------
# Siblings
# ---------------------------------------------------------------------------


def _sibling_at(snapshot: Snapshot, node_id: Identifier, offset: int) -> Node | None:
    node = get_node(snapshot, node_id)
    if node is None:
        return None
    wanted = node.order + offset
    for other in snapshot:
        if other.parent == node.parent and other.order == wanted:
            return other
    return None


def get_sibling_above(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    return _sibling_at(snapshot, node_id, -1)


def get_sibling_below(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    return _sibling_at(snapshot, node_id, 1)


def top(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    """First row of `node_id`'s sibling group (may be the row itself)."""
    node = get_node(snapshot, node_id)
    if node is None:
        return None
    group = get_right_of(snapshot, node.parent)
    return group[0]


def bottom(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    """Last row of `node_id`'s sibling group (may be the row itself)."""
    node = get_node(snapshot, node_id)
    if node is None:
        return None
    group = get_right_of(snapshot, node.parent)
    return group[-1]


# ---------------------------------------------------------------------------
# Cursor movement
# ---------------------------------------------------------------------------


def _last_descendant(snapshot: Snapshot, node: Node) -> Node:
    children = get_right_of(snapshot, node.id)
    while children:
        node = children[-1]
        children = get_right_of(snapshot, node.id)
    return node


def get_above(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    """
    The row drawn directly above `node_id` (cursor up).

    If a sibling above exists, descend into its last child, that child's last
    child, and so on until a childless row is reached. Otherwise the parent.
    None only for the very first root-level row.
    """
    above = get_sibling_above(snapshot, node_id)
    if above is not None:
        return _last_descendant(snapshot, above)
    return get_parent(snapshot, node_id)


def get_below(snapshot: Snapshot, node_id: Identifier) -> Node | None:
    """
    The row drawn directly below `node_id` (cursor down).

    First child if any; else the sibling below; else the sibling below of the
    nearest ancestor that has one. None for the last row of the document.
    """
    node = get_node(snapshot, node_id)
    if node is None:
        return None
    first_child = get_first_right_of(snapshot, node_id)
    if first_child is not None:
        return first_child
    while node is not None:
        below = get_sibling_below(snapshot, node.id)
        if below is not None:
            return below
        node = get_parent(snapshot, node.id)
    return None


def iter_document_order(snapshot: Snapshot) -> Iterator[Node]:
    """Depth-first pre-order walk: the order rows are drawn top to bottom."""
    stack = list(reversed(get_right_of(snapshot, ROOT)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(get_right_of(snapshot, node.id)))
