"""
Intent surface of the editor.

Each intent takes the session's `DocumentState`, runs one structural
operation and commits exactly one history entry, or leaves the state
untouched. Mutating intents return the recorded entry, or None when the
request was a no-op (unknown target, illegal structure, nothing changed).
Selection is adjusted here as a side effect; it is never part of history.
"""

import logging
from collections.abc import Iterable
from copy import deepcopy
from enum import Enum
from typing import Any

from formtree.core.location import ComponentInsert, Location
from formtree.core.tree_node import Node, NodeKind, Tree
from formtree.core.types import Properties
from formtree.editor.state import DocumentState
from formtree.exceptions import SnapshotNotFoundError
from formtree.history.engine import redo_step, undo_step
from formtree.history.entries import (
    DeleteEntry,
    HistoryEntry,
    InsertEntry,
    MoveEntry,
    ReplaceAllEntry,
    UpdatePropsEntry,
)
from formtree.serialization import from_plain
from formtree.structure import operations
from formtree.structure.factory import clone_tree, clone_with_new_identity, create_node
from formtree.structure.locator import (
    child_count,
    find_by_id,
    find_parent_info,
    get_all_ids,
    iter_nodes,
    top_level_selection,
)

logger = logging.getLogger(__name__)


class MoveDirection(Enum):
    """Single-step moves within the current parent."""

    UP = "up"
    DOWN = "down"
    TOP = "top"
    BOTTOM = "bottom"


def _commit(state: DocumentState, tree: Tree, entry: HistoryEntry) -> HistoryEntry:
    state.tree = tree
    state.history.record(entry)
    logger.debug("Committed %s: %s", entry.kind.value, entry.describe())
    return entry


def _resolve_inserts(tree: Tree, nodes: list[Node]) -> list[ComponentInsert]:
    # Final positions, so re-applying in ascending order rebuilds this tree.
    return [
        ComponentInsert(node=find_by_id(tree, node.id), location=find_parent_info(tree, node.id))
        for node in nodes
    ]


def _root_records(tree: Tree) -> list[ComponentInsert]:
    return [
        ComponentInsert(node=node, location=Location.root(index))
        for index, node in enumerate(tree)
    ]


def _insert_sequence(
    state: DocumentState, nodes: list[Node], parent_id: str | None, index: int | None
) -> Tree | None:
    if index is None:
        index = child_count(state.tree, parent_id) or 0
    tree = state.tree
    for offset, node in enumerate(nodes):
        location = Location(parent_id, index + offset)
        result = operations.insert_node(tree, node, location, state.registry)
        if not result.inserted:
            return None
        # Clamping may move the first slot; keep the batch contiguous from there.
        index = result.inserted_index - offset
        tree = result.tree
    return tree


def _place(
    state: DocumentState, nodes: list[Node], parent_id: str | None, index: int | None
) -> InsertEntry | None:
    tree = _insert_sequence(state, nodes, parent_id, index)
    if tree is None and parent_id is not None and state.settings.fallback_to_root:
        logger.debug("Parent %s cannot accept children; appending at root", parent_id)
        tree = _insert_sequence(state, nodes, None, None)
    if tree is None:
        return None
    state.selection = [node.id for node in nodes]
    return _commit(state, tree, InsertEntry(_resolve_inserts(tree, nodes)))


def add_node(
    state: DocumentState,
    kind: NodeKind | str,
    parent_id: str | None = None,
    index: int | None = None,
) -> InsertEntry | None:
    """
    Create a node of `kind` and insert it.

    Params:
        state: Session state
        kind: Kind of the new node
        parent_id: Container to insert into, or None for the root list
        index: Slot among the parent's children; None appends

    Returns:
        The recorded InsertEntry, or None if the node could not be placed

    Raises:
        UnknownKindError: If the kind is not registered
    """
    node = create_node(kind, state.settings.id_factory, state.registry)
    return _place(state, [node], parent_id, index)


def add_nodes(
    state: DocumentState,
    nodes: Iterable[Node],
    parent_id: str | None = None,
    index: int | None = None,
) -> InsertEntry | None:
    """
    Insert fresh-identity clones of `nodes` as one undoable step.

    Used for templates, snapshots and paste. The clones occupy consecutive
    slots starting at `index` and become the selection. They pass the same
    checks as an imported document before anything is inserted.

    Raises:
        DocumentValidationError: If a node has an unknown kind, invalid
            properties or children its kind cannot hold
    """
    clones = clone_tree(list(nodes), state.settings.id_factory)
    clones = from_plain(clones, state.registry)
    if not clones:
        return None
    return _place(state, clones, parent_id, index)


def move_node(
    state: DocumentState,
    node_id: str,
    target_parent_id: str | None,
    index: int | None = None,
) -> MoveEntry | None:
    """
    Move a subtree to another slot.

    Params:
        state: Session state
        node_id: Root of the subtree to move
        target_parent_id: Destination container, or None for the root list
        index: Final position among the destination's children; None appends

    Returns:
        The recorded MoveEntry, or None for missing nodes, cycles, invalid
        destinations and moves that end where they started
    """
    if index is None:
        index = child_count(state.tree, target_parent_id)
        if index is None:
            return None
    result = operations.move_node(
        state.tree, node_id, Location(target_parent_id, index), state.registry
    )
    moved = result.moved
    if moved is None or moved.from_location == moved.to_location:
        return None
    return _commit(
        state,
        result.tree,
        MoveEntry(node_id, moved.from_location, moved.to_location),
    )


def reorder_siblings(
    state: DocumentState, active_id: str, over_id: str
) -> MoveEntry | None:
    """Move `active_id` into the slot of its sibling `over_id`."""
    if active_id == over_id:
        return None
    active = find_parent_info(state.tree, active_id)
    over = find_parent_info(state.tree, over_id)
    if not (active.found and over.found) or active.parent_id != over.parent_id:
        return None
    return move_node(state, active_id, active.parent_id, over.index)


def move_in_list(
    state: DocumentState, node_id: str, direction: MoveDirection | str
) -> MoveEntry | None:
    """Move a node one step, or to either end, among its current siblings."""
    direction = MoveDirection(direction)
    slot = find_parent_info(state.tree, node_id)
    if not slot.found:
        return None
    last = child_count(state.tree, slot.parent_id) - 1
    targets = {
        MoveDirection.UP: max(0, slot.index - 1),
        MoveDirection.DOWN: min(last, slot.index + 1),
        MoveDirection.TOP: 0,
        MoveDirection.BOTTOM: last,
    }
    return move_node(state, node_id, slot.parent_id, targets[direction])


def _has_locked(nodes: list[Node]) -> bool:
    return any(node.properties.get("locked", False) for node in iter_nodes(nodes))


def remove_nodes(state: DocumentState, node_ids: str | Iterable[str]) -> DeleteEntry | None:
    """
    Remove one or more subtrees as one undoable step.

    The whole request is refused when any target, or any node inside a
    target's subtree, is locked. Selection entries that no longer resolve
    are dropped.
    """
    if isinstance(node_ids, str):
        node_ids = [node_ids]
    targets = top_level_selection(state.tree, node_ids)
    if not targets:
        return None
    if _has_locked(targets):
        logger.info(
            "Refusing to remove %d components: a locked node is included", len(targets)
        )
        return None

    result = operations.remove_by_ids(state.tree, [node.id for node in targets])
    if not result.removed:
        return None
    remaining = set(get_all_ids(result.tree))
    state.selection = [node_id for node_id in state.selection if node_id in remaining]
    return _commit(state, result.tree, DeleteEntry(result.removed))


def update_properties(
    state: DocumentState, node_id: str, patch: Properties
) -> UpdatePropsEntry | None:
    """
    Merge `patch` into a node's properties.

    The merged map is validated against the node's kind before anything is
    recorded. A patch that changes no value is not recorded.

    Raises:
        PropertyValidationError: If the merged map violates the kind's schema
    """
    node = find_by_id(state.tree, node_id)
    if node is None:
        return None
    merged = {**node.properties, **deepcopy(patch)}
    if merged == node.properties:
        return None
    state.registry.validate_properties(node.kind, merged, node_id=node_id)
    result = operations.replace_properties(state.tree, node_id, merged)
    return _commit(
        state,
        result.tree,
        UpdatePropsEntry(node_id, result.prev_properties, merged),
    )


def toggle_lock(state: DocumentState, node_id: str) -> UpdatePropsEntry | None:
    node = find_by_id(state.tree, node_id)
    if node is None:
        return None
    return update_properties(
        state, node_id, {"locked": not node.properties.get("locked", False)}
    )


def select(state: DocumentState, node_id: str, multi: bool = False) -> None:
    """Select a node; with `multi`, toggle it within the current selection."""
    if find_by_id(state.tree, node_id) is None:
        return
    if not multi:
        state.selection = [node_id]
    elif node_id in state.selection:
        state.selection = [sid for sid in state.selection if sid != node_id]
    else:
        state.selection = [*state.selection, node_id]


def select_all(state: DocumentState) -> None:
    state.selection = get_all_ids(state.tree)


def clear_selection(state: DocumentState) -> None:
    state.selection = []


def copy(state: DocumentState) -> int:
    """
    Put the selected subtrees on the clipboard.

    Nodes nested under another selected node are not copied twice. Nodes are
    held by reference; cloning happens on paste.

    Returns:
        Number of subtrees now on the clipboard
    """
    state.clipboard = top_level_selection(state.tree, state.selection)
    return len(state.clipboard)


def paste(
    state: DocumentState, parent_id: str | None = None, index: int | None = None
) -> InsertEntry | None:
    """Insert fresh-identity clones of the clipboard; the clipboard stays intact."""
    if not state.clipboard:
        return None
    return add_nodes(state, state.clipboard, parent_id, index)


def duplicate(state: DocumentState) -> InsertEntry | None:
    """Insert a clone of each selected subtree directly after its original."""
    originals = top_level_selection(state.tree, state.selection)
    tree = state.tree
    clones: list[Node] = []
    for original in originals:
        clone = clone_with_new_identity(original, state.settings.id_factory)
        slot = find_parent_info(tree, original.id)
        result = operations.insert_node(
            tree, clone, Location(slot.parent_id, slot.index + 1), state.registry
        )
        if result.inserted:
            tree = result.tree
            clones.append(clone)
    if not clones:
        return None
    state.selection = [clone.id for clone in clones]
    return _commit(state, tree, InsertEntry(_resolve_inserts(tree, clones)))


def cut(state: DocumentState) -> DeleteEntry | None:
    """
    Copy the selection, then remove it as one undoable step.

    Nothing happens, and the clipboard keeps its contents, when the
    selection holds a locked node.
    """
    targets = top_level_selection(state.tree, state.selection)
    if not targets or _has_locked(targets):
        return None
    state.clipboard = targets
    return remove_nodes(state, [node.id for node in targets])


def undo(state: DocumentState) -> bool:
    """
    Revert the most recent entry.

    Returns:
        False when there was nothing to undo
    """
    tree = undo_step(state.history, state.tree, state.registry)
    if tree is None:
        return False
    state.tree = tree
    state.selection = []
    return True


def redo(state: DocumentState) -> bool:
    """
    Re-apply the most recently undone entry.

    Returns:
        False when there was nothing to redo
    """
    tree = redo_step(state.history, state.tree, state.registry)
    if tree is None:
        return False
    state.tree = tree
    state.selection = []
    return True


def replace_document(
    state: DocumentState, nodes: Iterable[Node | dict[str, Any]]
) -> ReplaceAllEntry | None:
    """
    Replace the whole document, e.g. on import.

    Params:
        state: Session state
        nodes: New root list as Node instances or plain mappings

    Returns:
        The recorded ReplaceAllEntry, or None if the document is unchanged

    Raises:
        DocumentValidationError: If the new document is invalid
    """
    new_tree = from_plain(nodes, state.registry)
    if new_tree == state.tree:
        return None
    entry = ReplaceAllEntry(removes=_root_records(state.tree), inserts=_root_records(new_tree))
    state.selection = []
    return _commit(state, new_tree, entry)


def reset_document(state: DocumentState) -> ReplaceAllEntry | None:
    return replace_document(state, [])


def save_snapshot(state: DocumentState, name: str) -> Tree:
    """Store a fresh-identity clone of the current tree under `name`."""
    snapshot = clone_tree(state.tree, state.settings.id_factory)
    state.snapshots[name] = snapshot
    logger.debug("Saved snapshot %r with %d root nodes", name, len(snapshot))
    return snapshot


def apply_snapshot(
    state: DocumentState,
    name: str,
    parent_id: str | None = None,
    index: int | None = None,
) -> InsertEntry | None:
    """
    Insert a fresh clone of a named snapshot.

    Raises:
        SnapshotNotFoundError: If no snapshot has that name
    """
    if name not in state.snapshots:
        raise SnapshotNotFoundError(name, list(state.snapshots))
    return add_nodes(state, state.snapshots[name], parent_id, index)


def delete_snapshot(state: DocumentState, name: str) -> None:
    """
    Forget a named snapshot.

    Raises:
        SnapshotNotFoundError: If no snapshot has that name
    """
    if name not in state.snapshots:
        raise SnapshotNotFoundError(name, list(state.snapshots))
    del state.snapshots[name]
