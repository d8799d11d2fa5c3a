"""
Node creation and identity regeneration.

New nodes take their default properties from the kind registry. Clones are
deep copies in which the node and every descendant receive a fresh id, so a
pasted or duplicated subtree never aliases ids already in the document.
"""

from copy import deepcopy
from uuid import uuid4

from formtree.core.tree_node import Node, NodeKind, Tree
from formtree.core.types import IdFactory
from formtree.structure.registry import KindRegistry, default_registry


def generate_id() -> str:
    """Return a fresh globally unique node id."""
    return uuid4().hex


def create_node(
    kind: NodeKind | str,
    id_factory: IdFactory = generate_id,
    registry: KindRegistry = default_registry,
) -> Node:
    """
    Create a node of `kind` with its default properties.

    Params:
        kind: Kind of the new node
        id_factory: Source of the new id
        registry: Registry providing defaults and the children contract

    Returns:
        The new node; containers start with an empty children list

    Raises:
        UnknownKindError: If the kind is not registered
    """
    spec = registry.get(kind)
    return Node(
        id=id_factory(),
        kind=spec.kind,
        properties=spec.defaults(),
        children=[] if spec.allows_children else None,
    )


def clone_with_new_identity(node: Node, id_factory: IdFactory = generate_id) -> Node:
    """
    Deep-copy a subtree, assigning a fresh id to every node in it.

    Kind, properties and child order are preserved. Property maps are deep
    copied so edits to the clone never reach the original.

    Params:
        node: Root of the subtree to clone
        id_factory: Source of the new ids

    Returns:
        The cloned subtree
    """
    children = None
    if node.children is not None:
        children = [clone_with_new_identity(child, id_factory) for child in node.children]
    return node.model_copy(
        update={
            "id": id_factory(),
            "properties": deepcopy(node.properties),
            "children": children,
        }
    )


def clone_tree(tree: Tree, id_factory: IdFactory = generate_id) -> Tree:
    """Clone every root of `tree` with fresh identities."""
    return [clone_with_new_identity(node, id_factory) for node in tree]
