"""
Read-only lookups over a document tree.

All functions here are side-effect free and rely on node ids being unique
across the whole document, so the first match found is the only match.
"""

from collections.abc import Iterable, Iterator

from formtree.core.location import NOT_FOUND, Location
from formtree.core.tree_node import Node, Tree


def iter_nodes(tree: Tree) -> Iterator[Node]:
    """Yield every node in document (pre-order) order."""
    for node in tree:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def find_by_id(tree: Tree, node_id: str) -> Node | None:
    """
    Depth-first search for a node.

    Params:
        tree: Root list to search
        node_id: Id to look for

    Returns:
        The node, or None if it is not in the tree
    """
    for node in tree:
        if node.id == node_id:
            return node
        if node.children:
            found = find_by_id(node.children, node_id)
            if found is not None:
                return found
    return None


def find_parent_info(tree: Tree, node_id: str) -> Location:
    """
    Locate the slot a node occupies.

    The root list is checked first, then each container's children one level
    at a time.

    Params:
        tree: Root list to search
        node_id: Id to look for

    Returns:
        Location of the node, or the `NOT_FOUND` sentinel (index -1)
    """
    for index, node in enumerate(tree):
        if node.id == node_id:
            return Location.root(index)

    def _search(items: Tree) -> Location | None:
        for item in items:
            if not item.children:
                continue
            for index, child in enumerate(item.children):
                if child.id == node_id:
                    return Location(parent_id=item.id, index=index)
            found = _search(item.children)
            if found is not None:
                return found
        return None

    return _search(tree) or NOT_FOUND


def is_descendant(tree: Tree, ancestor_id: str, candidate_id: str) -> bool:
    """
    Check whether `candidate_id` lies strictly inside the subtree of `ancestor_id`.

    Params:
        tree: Root list to search
        ancestor_id: Root of the subtree
        candidate_id: Node to test

    Returns:
        True if the candidate is a descendant of the ancestor
    """
    ancestor = find_by_id(tree, ancestor_id)
    if ancestor is None or not ancestor.children:
        return False
    return any(node.id == candidate_id for node in iter_nodes(ancestor.children))


def flatten(tree: Tree) -> list[Node]:
    """All nodes, nested ones included, in document order."""
    return list(iter_nodes(tree))


def get_all_ids(tree: Tree) -> list[str]:
    return [node.id for node in iter_nodes(tree)]


def count_nodes(tree: Tree) -> int:
    return sum(1 for _ in iter_nodes(tree))


def child_count(tree: Tree, parent_id: str | None) -> int | None:
    """
    Number of slots under a parent.

    Params:
        tree: Root list to search
        parent_id: Parent id, or None for the root list

    Returns:
        Child count, or None if the parent is missing or holds no children list
    """
    if parent_id is None:
        return len(tree)
    parent = find_by_id(tree, parent_id)
    if parent is None or parent.children is None:
        return None
    return len(parent.children)


def top_level_selection(tree: Tree, node_ids: Iterable[str]) -> list[Node]:
    """
    Resolve ids to nodes, dropping any id nested under another listed id.

    Missing ids are ignored. The result follows document order.

    Params:
        tree: Root list to search
        node_ids: Candidate ids

    Returns:
        Nodes whose ancestors are not part of the selection
    """
    wanted = set(node_ids)
    result: list[Node] = []

    def _collect(items: Tree) -> None:
        for node in items:
            if node.id in wanted:
                result.append(node)
            elif node.children:
                _collect(node.children)

    _collect(tree)
    return result
