"""
Plain-structure exchange format for document trees.

Collaborators (import/export, persistence, code generation) see the tree as
a list of `{id, kind, properties, children?}` mappings. Nothing
engine-internal (history entries, locations, selection) is ever written.
Incoming data is validated before it can become a tree.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from formtree.core.tree_node import Node, Tree
from formtree.exceptions import (
    DocumentValidationError,
    DuplicateNodeIdError,
    PropertyValidationError,
    UnknownKindError,
)
from formtree.structure.registry import KindRegistry, default_registry

logger = logging.getLogger(__name__)


def node_to_plain(node: Node) -> dict[str, Any]:
    data = node.model_dump(mode="json", exclude={"children"})
    if node.children is not None:
        data["children"] = [node_to_plain(child) for child in node.children]
    return data


def to_plain(tree: Tree) -> list[dict[str, Any]]:
    """Convert a tree to plain nested dicts and lists."""
    return [node_to_plain(node) for node in tree]


def _normalize(
    nodes: Iterable[Node], registry: KindRegistry, seen: set[str]
) -> Tree:
    normalized: Tree = []
    for node in nodes:
        if node.id in seen:
            raise DuplicateNodeIdError(node.id)
        seen.add(node.id)
        try:
            spec = registry.get(node.kind)
            registry.validate_properties(node.kind, node.properties, node_id=node.id)
        except (UnknownKindError, PropertyValidationError) as exc:
            raise DocumentValidationError(str(exc)) from exc

        if spec.allows_children:
            children = _normalize(node.children or [], registry, seen)
            normalized.append(node.with_children(children))
        elif node.children:
            raise DocumentValidationError(
                f"{node.kind.value} node '{node.id}' cannot hold children"
            )
        else:
            normalized.append(node.with_children(None) if node.children is not None else node)
    return normalized


def from_plain(
    data: Iterable[Node | dict[str, Any]], registry: KindRegistry = default_registry
) -> Tree:
    """
    Build a validated tree from plain data or existing nodes.

    Containers without a children list receive an empty one; other kinds
    must not carry children.

    Params:
        data: Sequence of node mappings (or Node instances)
        registry: Registry providing kinds and property schemas

    Returns:
        The validated tree

    Raises:
        DocumentValidationError: If the data is malformed, an id repeats,
            a kind is unknown or a property map is rejected
    """
    if isinstance(data, (str, bytes, dict)):
        raise DocumentValidationError("expected a list of components")
    try:
        nodes = [
            item if isinstance(item, Node) else Node.model_validate(item)
            for item in data
        ]
    except ValidationError as exc:
        logger.warning("Rejected document with %d validation errors", exc.error_count())
        raise DocumentValidationError(str(exc)) from exc
    return _normalize(nodes, registry, set())


def dumps(tree: Tree, indent: int | None = 2) -> str:
    return json.dumps(to_plain(tree), ensure_ascii=False, indent=indent)


def loads(text: str, registry: KindRegistry = default_registry) -> Tree:
    """
    Parse a JSON document produced by `dumps`.

    Raises:
        DocumentValidationError: If the text is not valid JSON or not a valid tree
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentValidationError(f"malformed JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DocumentValidationError("expected a list of components")
    return from_plain(data, registry)
