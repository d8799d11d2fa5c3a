"""
Core formtree components.

This package provides the node model, its kind enumeration, addressing
records and shared type aliases.
"""

from formtree.core.location import NOT_FOUND, ComponentInsert, Location
from formtree.core.tree_node import Node, NodeKind, Tree
from formtree.core.types import IdFactory, Properties

__all__ = [
    "Node",
    "NodeKind",
    "Tree",
    "Location",
    "ComponentInsert",
    "NOT_FOUND",
    "Properties",
    "IdFactory",
]
