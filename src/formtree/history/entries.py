"""
History entry types.

A history entry is a recorded, invertible description of one committed edit.
Entries store only what the edit touched (subtrees with their locations,
property maps, or a move's endpoints), never a snapshot of the whole tree,
except for `ReplaceAllEntry` which describes whole-document replacement.
"""

from enum import Enum
from typing import ClassVar

from attrs import field, frozen

from formtree.core.location import ComponentInsert, Location
from formtree.core.types import Properties


class HistoryEntryKind(Enum):
    """Tag of each history entry variant."""

    INSERT = "insert"
    DELETE = "delete"
    UPDATE_PROPS = "updateProps"
    MOVE = "move"
    REPLACE_ALL = "replaceAll"


def _describe_batch(verb: str, records: tuple[ComponentInsert, ...]) -> str:
    if len(records) == 1:
        return f"{verb} {records[0].node.kind.value}"
    return f"{verb} {len(records)} components"


@frozen
class InsertEntry:
    """One or more subtrees were added at the recorded locations."""

    inserts: tuple[ComponentInsert, ...] = field(converter=tuple)

    kind: ClassVar[HistoryEntryKind] = HistoryEntryKind.INSERT

    def describe(self) -> str:
        return _describe_batch("Add", self.inserts)


@frozen
class DeleteEntry:
    """One or more subtrees were removed from the recorded locations."""

    removes: tuple[ComponentInsert, ...] = field(converter=tuple)

    kind: ClassVar[HistoryEntryKind] = HistoryEntryKind.DELETE

    def describe(self) -> str:
        return _describe_batch("Delete", self.removes)


@frozen
class UpdatePropsEntry:
    """A node's complete property map changed from `prev` to `next`."""

    target_id: str
    prev_properties: Properties
    next_properties: Properties

    kind: ClassVar[HistoryEntryKind] = HistoryEntryKind.UPDATE_PROPS

    def changed_keys(self) -> list[str]:
        keys = self.prev_properties.keys() | self.next_properties.keys()
        return sorted(
            key
            for key in keys
            if self.prev_properties.get(key) != self.next_properties.get(key)
        )

    def describe(self) -> str:
        return f"Edit {', '.join(self.changed_keys()) or 'properties'}"


@frozen
class MoveEntry:
    target_id: str
    from_location: Location
    to_location: Location

    kind: ClassVar[HistoryEntryKind] = HistoryEntryKind.MOVE

    def describe(self) -> str:
        if self.from_location.parent_id == self.to_location.parent_id:
            return "Reorder component"
        return "Move component"


@frozen
class ReplaceAllEntry:
    """The whole root list was replaced (import, reset)."""

    removes: tuple[ComponentInsert, ...] = field(converter=tuple)
    inserts: tuple[ComponentInsert, ...] = field(converter=tuple)

    kind: ClassVar[HistoryEntryKind] = HistoryEntryKind.REPLACE_ALL

    def describe(self) -> str:
        if not self.inserts:
            return "Clear document"
        return f"Replace document ({len(self.inserts)} components)"


HistoryEntry = InsertEntry | DeleteEntry | UpdatePropsEntry | MoveEntry | ReplaceAllEntry
