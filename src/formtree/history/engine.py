"""
Undo/redo interpreter for history entries.

`apply_entry` re-executes an entry's forward direction and `invert_entry`
its backward direction, both against the tree the entry is adjacent to in
history. `History` holds the `past` and `future` stacks and bounds `past`.
"""

import logging

from formtree.core.location import ComponentInsert
from formtree.core.tree_node import Tree
from formtree.history.entries import (
    DeleteEntry,
    HistoryEntry,
    InsertEntry,
    MoveEntry,
    ReplaceAllEntry,
    UpdatePropsEntry,
)
from formtree.structure.operations import (
    insert_node,
    move_node,
    remove_by_ids,
    replace_properties,
)
from formtree.structure.registry import KindRegistry, default_registry

logger = logging.getLogger(__name__)

MAX_HISTORY_LENGTH = 50


class History:
    """
    Bounded undo/redo stacks.

    `past` is ordered oldest first; `future` holds undone entries with the
    most recently undone one first. Once `past` exceeds `max_length` the
    oldest entries are dropped and can no longer be undone.
    """

    def __init__(self, max_length: int = MAX_HISTORY_LENGTH):
        self.max_length = max_length
        self.past: list[HistoryEntry] = []
        self.future: list[HistoryEntry] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def record(self, entry: HistoryEntry) -> None:
        """Append a new edit and discard the undone branch."""
        self.push_past(entry)
        self.future.clear()

    def push_past(self, entry: HistoryEntry) -> None:
        self.past.append(entry)
        overflow = len(self.past) - self.max_length
        if overflow > 0:
            del self.past[:overflow]
            logger.debug("Evicted %d history entries beyond cap %d", overflow, self.max_length)

    def pop_undo(self) -> HistoryEntry | None:
        return self.past.pop() if self.past else None

    def push_future(self, entry: HistoryEntry) -> None:
        self.future.insert(0, entry)

    def pop_redo(self) -> HistoryEntry | None:
        return self.future.pop(0) if self.future else None

    def clear(self) -> None:
        self.past.clear()
        self.future.clear()


def _slot_order(record: ComponentInsert) -> tuple[bool, str, int]:
    location = record.location
    return (location.parent_id is not None, location.parent_id or "", location.index)


def _insert_records(
    tree: Tree, records: tuple[ComponentInsert, ...], registry: KindRegistry
) -> Tree:
    # Ascending index per parent: each record lands before any later sibling
    # of the same batch is inserted, so earlier indices never shift.
    for record in sorted(records, key=_slot_order):
        result = insert_node(tree, record.node, record.location, registry)
        if not result.inserted:
            logger.warning(
                "Skipping history record: cannot insert %s at %s",
                record.node.id,
                record.location,
            )
            continue
        tree = result.tree
    return tree


def _remove_records(tree: Tree, records: tuple[ComponentInsert, ...]) -> Tree:
    result = remove_by_ids(tree, [record.node.id for record in records])
    if len(result.removed) != len(records):
        logger.warning(
            "History removal resolved %d of %d records",
            len(result.removed),
            len(records),
        )
    return result.tree


def _rebuild(records: tuple[ComponentInsert, ...]) -> Tree:
    ordered = sorted(records, key=lambda record: record.location.index)
    return [record.node for record in ordered]


def _write_properties(tree: Tree, entry: UpdatePropsEntry, properties: dict) -> Tree:
    result = replace_properties(tree, entry.target_id, properties)
    if not result.replaced:
        logger.warning("Skipping history record: node %s not found", entry.target_id)
    return result.tree


def _move(tree: Tree, entry: MoveEntry, forward: bool, registry: KindRegistry) -> Tree:
    location = entry.to_location if forward else entry.from_location
    result = move_node(tree, entry.target_id, location, registry)
    if result.moved is None:
        logger.warning(
            "Skipping history record: cannot move %s to %s", entry.target_id, location
        )
    return result.tree


def apply_entry(
    entry: HistoryEntry, tree: Tree, registry: KindRegistry = default_registry
) -> Tree:
    """
    Re-execute the forward direction of an entry.

    Params:
        entry: Entry to apply
        tree: Tree as it was immediately before the entry was recorded
        registry: Registry deciding which kinds may hold children

    Returns:
        The tree after the edit
    """
    if isinstance(entry, InsertEntry):
        return _insert_records(tree, entry.inserts, registry)
    if isinstance(entry, DeleteEntry):
        return _remove_records(tree, entry.removes)
    if isinstance(entry, UpdatePropsEntry):
        return _write_properties(tree, entry, entry.next_properties)
    if isinstance(entry, MoveEntry):
        return _move(tree, entry, True, registry)
    if isinstance(entry, ReplaceAllEntry):
        return _rebuild(entry.inserts)
    raise TypeError(f"Unsupported history entry: {entry!r}")


def invert_entry(
    entry: HistoryEntry, tree: Tree, registry: KindRegistry = default_registry
) -> Tree:
    """
    Execute the backward direction of an entry.

    Params:
        entry: Entry to invert
        tree: Tree as it was immediately after the entry was recorded
        registry: Registry deciding which kinds may hold children

    Returns:
        The tree before the edit
    """
    if isinstance(entry, InsertEntry):
        return _remove_records(tree, entry.inserts)
    if isinstance(entry, DeleteEntry):
        return _insert_records(tree, entry.removes, registry)
    if isinstance(entry, UpdatePropsEntry):
        return _write_properties(tree, entry, entry.prev_properties)
    if isinstance(entry, MoveEntry):
        return _move(tree, entry, False, registry)
    if isinstance(entry, ReplaceAllEntry):
        return _rebuild(entry.removes)
    raise TypeError(f"Unsupported history entry: {entry!r}")


def undo_step(
    history: History, tree: Tree, registry: KindRegistry = default_registry
) -> Tree | None:
    """
    Pop the latest entry, invert it and move it onto `future`.

    Returns:
        The restored tree, or None if there is nothing to undo
    """
    entry = history.pop_undo()
    if entry is None:
        return None
    restored = invert_entry(entry, tree, registry)
    history.push_future(entry)
    logger.debug("Undo: %s", entry.describe())
    return restored


def redo_step(
    history: History, tree: Tree, registry: KindRegistry = default_registry
) -> Tree | None:
    """
    Pop the next undone entry, apply it and move it back onto `past`.

    Returns:
        The re-applied tree, or None if there is nothing to redo
    """
    entry = history.pop_redo()
    if entry is None:
        return None
    reapplied = apply_entry(entry, tree, registry)
    history.push_past(entry)
    logger.debug("Redo: %s", entry.describe())
    return reapplied
