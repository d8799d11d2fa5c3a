"""
formtree - structural editing engine for nested form component trees

formtree keeps an ordered tree of typed form components consistent under
insert, move, delete and property edits, with entry-based undo/redo and
clipboard duplication that never reuses node ids.
"""

from importlib.metadata import version

from formtree.config import EditorSettings
from formtree.core import ComponentInsert, Location, Node, NodeKind
from formtree.editor import DocumentState
from formtree.structure import (
    count_nodes,
    find_by_id,
    find_parent_info,
    flatten,
    is_descendant,
)

__version__ = version("formtree")

__all__ = [
    "__version__",
    "Node",
    "NodeKind",
    "Location",
    "ComponentInsert",
    "DocumentState",
    "EditorSettings",
    "find_by_id",
    "find_parent_info",
    "is_descendant",
    "flatten",
    "count_nodes",
]
