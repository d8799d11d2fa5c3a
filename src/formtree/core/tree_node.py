"""
Node model for formtree documents.

A document is an ordered list of root nodes. Each node carries a globally
unique id, a kind from the closed `NodeKind` enumeration, a property map and,
for containers only, an ordered list of children.
"""

from enum import Enum
from typing import Any

from inflection import underscore
from pydantic import BaseModel, ConfigDict, Field, field_validator

from formtree.exceptions import UnknownKindError


class NodeKind(Enum):
    """Closed set of component kinds a document may contain."""

    INPUT = "Input"
    TEXT_AREA = "TextArea"
    INPUT_NUMBER = "InputNumber"
    SELECT = "Select"
    RADIO = "Radio"
    CHECKBOX = "Checkbox"
    SWITCH = "Switch"
    DATE_PICKER = "DatePicker"
    TIME_PICKER = "TimePicker"
    BUTTON = "Button"
    CONTAINER = "Container"

    @classmethod
    def parse(cls, name: "NodeKind | str") -> "NodeKind":
        """
        Resolve a kind from its canonical value or its snake_case spelling.

        Params:
            name: A NodeKind, "DatePicker" or "date_picker"

        Returns:
            The matching NodeKind

        Raises:
            UnknownKindError: If no kind matches
        """
        if isinstance(name, cls):
            return name
        key = underscore(str(name))
        for kind in cls:
            if underscore(kind.value) == key:
                return kind
        raise UnknownKindError(str(name))


class Node(BaseModel):
    """
    One element of the document tree.

    Nodes are immutable by convention: structural operations never assign to
    an existing node, they build replacements with `model_copy`. Only
    containers hold a `children` list; every other kind keeps it `None`.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    kind: NodeKind
    properties: dict[str, Any] = Field(default_factory=dict)
    children: list["Node"] | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, value: Any) -> NodeKind:
        try:
            return NodeKind.parse(value)
        except UnknownKindError as exc:
            raise ValueError(str(exc)) from exc

    def with_children(self, children: list["Node"]) -> "Node":
        """Return a copy of this node holding `children`."""
        return self.model_copy(update={"children": children})

    def with_properties(self, properties: dict[str, Any]) -> "Node":
        """Return a copy of this node whose property map is `properties`."""
        return self.model_copy(update={"properties": properties})


Tree = list[Node]
