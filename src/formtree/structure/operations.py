"""
Pure structural operations over a document tree.

Every operation takes a tree and returns a result holding a new tree plus
the delta the history engine needs. Inputs are never mutated: the path from
the root to the touched node is rebuilt and untouched subtrees are shared.
Failures (missing target, non-container parent, cycle) return the input
tree unchanged together with a sentinel in the result.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from formtree.core.location import ComponentInsert, Location
from formtree.core.tree_node import Node, Tree
from formtree.core.types import Properties
from formtree.structure.locator import is_descendant
from formtree.structure.registry import KindRegistry, default_registry


@dataclass
class InsertResult:
    """Outcome of `insert_node`; `inserted_index` is -1 on failure."""

    tree: Tree
    inserted_index: int

    @property
    def inserted(self) -> bool:
        return self.inserted_index >= 0


@dataclass
class MoveRecord:
    node: Node
    from_location: Location
    to_location: Location


@dataclass
class MoveResult:
    """Outcome of `move_node`; `moved` is None when nothing moved."""

    tree: Tree
    moved: MoveRecord | None = None


@dataclass
class RemoveResult:
    """Outcome of `remove_by_ids`; locations refer to the input tree."""

    tree: Tree
    removed: list[ComponentInsert] = field(default_factory=list)


@dataclass
class ReplacePropertiesResult:
    tree: Tree
    prev_properties: Properties | None = None
    replaced: bool = False


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index to `[0, length]`."""
    if index < 0:
        return 0
    if index > length:
        return length
    return index


def _insert_into_list(items: Tree, node: Node, index: int) -> tuple[Tree, int]:
    safe_index = clamp_index(index, len(items))
    return [*items[:safe_index], node, *items[safe_index:]], safe_index


def _insert_into_tree(
    items: Tree,
    parent_id: str,
    node: Node,
    index: int,
    registry: KindRegistry,
) -> tuple[Tree, int] | None:
    for position, item in enumerate(items):
        if item.id == parent_id:
            if not registry.allows_children(item.kind):
                return None
            children, inserted_index = _insert_into_list(item.children or [], node, index)
            rebuilt = item.with_children(children)
            return [*items[:position], rebuilt, *items[position + 1 :]], inserted_index
        if item.children:
            found = _insert_into_tree(item.children, parent_id, node, index, registry)
            if found is not None:
                children, inserted_index = found
                rebuilt = item.with_children(children)
                return [*items[:position], rebuilt, *items[position + 1 :]], inserted_index
    return None


def insert_node(
    tree: Tree,
    node: Node,
    location: Location,
    registry: KindRegistry = default_registry,
) -> InsertResult:
    """
    Insert a subtree at a location.

    Root-level inserts always succeed at the clamped index. Nested inserts
    fail when the parent is missing or its kind does not allow children; the
    caller decides on any fallback.

    Params:
        tree: Current tree
        node: Subtree to insert
        location: Target slot; the index is clamped to the valid range
        registry: Registry deciding which kinds may hold children

    Returns:
        InsertResult with the realized index, or -1 and the unchanged tree
    """
    if location.parent_id is None:
        new_tree, inserted_index = _insert_into_list(tree, node, location.index)
        return InsertResult(tree=new_tree, inserted_index=inserted_index)

    found = _insert_into_tree(tree, location.parent_id, node, location.index, registry)
    if found is None:
        return InsertResult(tree=tree, inserted_index=-1)
    new_tree, inserted_index = found
    return InsertResult(tree=new_tree, inserted_index=inserted_index)


def _remove_from_tree(
    items: Tree,
    ids: frozenset[str],
    parent_id: str | None,
    removed: list[ComponentInsert],
) -> Tree | None:
    changed = False
    kept: Tree = []
    for index, item in enumerate(items):
        if item.id in ids:
            removed.append(
                ComponentInsert(node=item, location=Location(parent_id, index))
            )
            changed = True
            continue
        if item.children:
            children = _remove_from_tree(item.children, ids, item.id, removed)
            if children is not None:
                changed = True
                kept.append(item.with_children(children))
                continue
        kept.append(item)
    return kept if changed else None


def remove_by_ids(tree: Tree, node_ids: Iterable[str]) -> RemoveResult:
    """
    Remove every node whose id is listed, in a single pass.

    A removed node carries its whole subtree, so listed descendants of a
    removed node are not recorded separately. Each record keeps the location
    the node had in the input tree; re-inserting the records in ascending
    (parent, index) order rebuilds the input exactly.

    Params:
        tree: Current tree
        node_ids: Ids to remove; unknown ids are ignored

    Returns:
        RemoveResult with the new tree and one record per removed subtree
    """
    removed: list[ComponentInsert] = []
    new_tree = _remove_from_tree(tree, frozenset(node_ids), None, removed)
    if new_tree is None:
        return RemoveResult(tree=tree)
    return RemoveResult(tree=new_tree, removed=removed)


def move_node(
    tree: Tree,
    node_id: str,
    location: Location,
    registry: KindRegistry = default_registry,
) -> MoveResult:
    """
    Detach a subtree and re-attach it at `location`.

    Moving a node into itself or into its own subtree is rejected. If the
    target parent cannot accept the node, the input tree is returned.

    Params:
        tree: Current tree
        node_id: Root of the subtree to move
        location: Target slot, relative to the tree after detaching the node
        registry: Registry deciding which kinds may hold children

    Returns:
        MoveResult with the realized from/to locations, or `moved=None`
    """
    if location.parent_id is not None and (
        location.parent_id == node_id or is_descendant(tree, node_id, location.parent_id)
    ):
        return MoveResult(tree=tree)

    detached = remove_by_ids(tree, [node_id])
    if not detached.removed:
        return MoveResult(tree=tree)
    record = detached.removed[0]

    inserted = insert_node(detached.tree, record.node, location, registry)
    if not inserted.inserted:
        return MoveResult(tree=tree)

    return MoveResult(
        tree=inserted.tree,
        moved=MoveRecord(
            node=record.node,
            from_location=record.location,
            to_location=Location(location.parent_id, inserted.inserted_index),
        ),
    )


def _replace_in_tree(
    items: Tree, node_id: str, properties: Properties
) -> tuple[Tree, Properties] | None:
    for position, item in enumerate(items):
        if item.id == node_id:
            rebuilt = item.with_properties(properties)
            return [*items[:position], rebuilt, *items[position + 1 :]], item.properties
        if item.children:
            found = _replace_in_tree(item.children, node_id, properties)
            if found is not None:
                children, prev_properties = found
                rebuilt = item.with_children(children)
                return [*items[:position], rebuilt, *items[position + 1 :]], prev_properties
    return None


def replace_properties(
    tree: Tree, node_id: str, properties: Properties
) -> ReplacePropertiesResult:
    """
    Substitute a node's whole property map.

    The map is replaced, not merged: callers merge old and patch first so
    history always stores complete before/after maps.

    Params:
        tree: Current tree
        node_id: Node to edit
        properties: Complete new property map

    Returns:
        ReplacePropertiesResult with the previous map, or `replaced=False`
    """
    found = _replace_in_tree(tree, node_id, properties)
    if found is None:
        return ReplacePropertiesResult(tree=tree)
    new_tree, prev_properties = found
    return ReplacePropertiesResult(
        tree=new_tree, prev_properties=prev_properties, replaced=True
    )
