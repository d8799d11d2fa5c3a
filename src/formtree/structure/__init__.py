"""
Tree structure layer for formtree.

This package provides the kind registry, node factory, read-only locator
utilities and the pure structural operations the history engine builds on.
"""

from formtree.structure.factory import (
    clone_tree,
    clone_with_new_identity,
    create_node,
    generate_id,
)
from formtree.structure.locator import (
    child_count,
    count_nodes,
    find_by_id,
    find_parent_info,
    flatten,
    get_all_ids,
    is_descendant,
    iter_nodes,
    top_level_selection,
)
from formtree.structure.operations import (
    InsertResult,
    MoveRecord,
    MoveResult,
    RemoveResult,
    ReplacePropertiesResult,
    clamp_index,
    insert_node,
    move_node,
    remove_by_ids,
    replace_properties,
)
from formtree.structure.registry import KindRegistry, KindSpec, default_registry

__all__ = [
    "KindRegistry",
    "KindSpec",
    "default_registry",
    "create_node",
    "clone_with_new_identity",
    "clone_tree",
    "generate_id",
    "find_by_id",
    "find_parent_info",
    "is_descendant",
    "flatten",
    "get_all_ids",
    "count_nodes",
    "child_count",
    "iter_nodes",
    "top_level_selection",
    "insert_node",
    "move_node",
    "remove_by_ids",
    "replace_properties",
    "clamp_index",
    "InsertResult",
    "MoveRecord",
    "MoveResult",
    "RemoveResult",
    "ReplacePropertiesResult",
]
