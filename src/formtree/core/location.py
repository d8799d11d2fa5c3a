"""
Addressing records for slots in a document tree.

`Location` names a slot by parent id and index; `ComponentInsert` pairs a
subtree with the slot it occupied, which is all that is needed to redo an
insertion or undo a deletion.
"""

from attrs import frozen

from formtree.core.tree_node import Node


@frozen
class Location:
    """A slot in the tree: `parent_id=None` addresses the root list."""

    parent_id: str | None
    index: int

    @classmethod
    def root(cls, index: int) -> "Location":
        return cls(parent_id=None, index=index)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def found(self) -> bool:
        """False for the not-found sentinel returned by the locator."""
        return self.index >= 0


NOT_FOUND = Location(parent_id=None, index=-1)


@frozen
class ComponentInsert:
    """A subtree together with the location it occupies."""

    node: Node
    location: Location
