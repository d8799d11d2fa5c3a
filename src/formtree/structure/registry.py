"""
Kind registry for formtree nodes.

Each node kind is described by one `KindSpec`: the pydantic model its
property map must satisfy, the factory for its default properties and
whether it may own children. The engine asks the registry instead of
branching on kinds, so adding a field kind is a single `register` call.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from formtree.core.tree_node import NodeKind
from formtree.core.types import Properties
from formtree.exceptions import PropertyValidationError, UnknownKindError


class PropertyModel(BaseModel):
    """Base for property schemas: camelCase keys, unknown keys allowed."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class PropertyOption(PropertyModel):
    label: str
    value: str


class ValidationRule(PropertyModel):
    """A form-level validation rule attached to a field."""

    type: Literal[
        "required",
        "minLength",
        "maxLength",
        "pattern",
        "min",
        "max",
        "email",
        "phone",
        "custom",
    ]
    value: str | int | float | bool | None = None
    message: str


class ResponsiveConfig(PropertyModel):
    """Grid span per breakpoint (1-24)."""

    xs: int | None = Field(default=None, ge=1, le=24)
    sm: int | None = Field(default=None, ge=1, le=24)
    md: int | None = Field(default=None, ge=1, le=24)
    lg: int | None = Field(default=None, ge=1, le=24)
    xl: int | None = Field(default=None, ge=1, le=24)
    xxl: int | None = Field(default=None, ge=1, le=24)


class BaseProperties(PropertyModel):
    """Properties every kind accepts."""

    visible_on: str | None = None
    rules: list[ValidationRule] | None = None
    responsive: ResponsiveConfig | None = None
    col_span: int | None = Field(default=None, ge=1, le=24)
    locked: bool = False


class FieldProperties(BaseProperties):
    label: str
    required: bool = False


class InputProperties(FieldProperties):
    placeholder: str


class TextAreaProperties(FieldProperties):
    placeholder: str
    rows: int | None = Field(default=None, ge=1)


class InputNumberProperties(FieldProperties):
    placeholder: str


class OptionFieldProperties(FieldProperties):
    options: list[PropertyOption]


class SelectProperties(OptionFieldProperties):
    placeholder: str


class RadioProperties(OptionFieldProperties):
    pass


class CheckboxProperties(OptionFieldProperties):
    pass


class SwitchProperties(FieldProperties):
    checked_children: str | None = None
    un_checked_children: str | None = None


class PickerProperties(FieldProperties):
    placeholder: str
    format: str | None = None


class ButtonProperties(BaseProperties):
    content: str
    type: Literal["primary", "default", "dashed", "text", "link"] = "default"
    html_type: Literal["button", "submit", "reset"] | None = None
    submit_config: dict | None = None


class ContainerProperties(BaseProperties):
    label: str | None = None
    direction: Literal["vertical", "horizontal"] = "vertical"
    columns: int | None = Field(default=None, ge=1, le=24)
    gutter: int | None = Field(default=None, ge=0)


@dataclass(frozen=True)
class KindSpec:
    """Registry entry describing one node kind."""

    kind: NodeKind
    properties_model: type[BaseProperties]
    defaults: Callable[[], Properties]
    allows_children: bool = False


class KindRegistry:
    """Mapping of node kind to its `KindSpec`."""

    def __init__(self):
        self._specs: dict[NodeKind, KindSpec] = {}

    def register(self, spec: KindSpec) -> None:
        """
        Register or replace the spec for a kind.

        Params:
            spec: Description of the kind
        """
        self._specs[spec.kind] = spec

    def get(self, kind: NodeKind | str) -> KindSpec:
        """
        Look up the spec for a kind.

        Params:
            kind: NodeKind or its name

        Returns:
            The registered KindSpec

        Raises:
            UnknownKindError: If the kind is not registered
        """
        resolved = NodeKind.parse(kind)
        if resolved not in self._specs:
            raise UnknownKindError(resolved.value)
        return self._specs[resolved]

    def allows_children(self, kind: NodeKind | str) -> bool:
        return self.get(kind).allows_children

    def default_properties(self, kind: NodeKind | str) -> Properties:
        """Fresh default property map for a kind."""
        return self.get(kind).defaults()

    def validate_properties(
        self,
        kind: NodeKind | str,
        properties: Properties,
        node_id: str | None = None,
    ) -> None:
        """
        Check a complete property map against the kind's schema.

        The map itself is stored verbatim; validation only rejects it.

        Params:
            kind: Kind whose schema applies
            properties: Complete property map
            node_id: Node being edited, used in the error message

        Raises:
            PropertyValidationError: If the schema rejects the map
            UnknownKindError: If the kind is not registered
        """
        spec = self.get(kind)
        try:
            spec.properties_model.model_validate(properties)
        except ValidationError as exc:
            raise PropertyValidationError(
                spec.kind.value, str(exc), node_id=node_id
            ) from exc

    def kinds(self) -> list[NodeKind]:
        return list(self._specs)


def _register_builtin_kinds(registry: KindRegistry) -> None:
    def _options() -> list[dict[str, str]]:
        return [{"label": "A", "value": "A"}]

    builtin = [
        KindSpec(
            NodeKind.INPUT,
            InputProperties,
            lambda: {"label": "Input", "placeholder": "Please enter..."},
        ),
        KindSpec(
            NodeKind.TEXT_AREA,
            TextAreaProperties,
            lambda: {"label": "Text Area", "placeholder": "Please enter...", "rows": 4},
        ),
        KindSpec(
            NodeKind.INPUT_NUMBER,
            InputNumberProperties,
            lambda: {"label": "Number", "placeholder": "Please enter a number"},
        ),
        KindSpec(
            NodeKind.SELECT,
            SelectProperties,
            lambda: {
                "label": "Select",
                "placeholder": "Please select",
                "options": _options(),
            },
        ),
        KindSpec(
            NodeKind.RADIO,
            RadioProperties,
            lambda: {"label": "Radio", "options": _options()},
        ),
        KindSpec(
            NodeKind.CHECKBOX,
            CheckboxProperties,
            lambda: {"label": "Checkbox", "options": _options()},
        ),
        KindSpec(NodeKind.SWITCH, SwitchProperties, lambda: {"label": "Switch"}),
        KindSpec(
            NodeKind.DATE_PICKER,
            PickerProperties,
            lambda: {"label": "Date", "placeholder": "Please select"},
        ),
        KindSpec(
            NodeKind.TIME_PICKER,
            PickerProperties,
            lambda: {"label": "Time", "placeholder": "Please select"},
        ),
        KindSpec(
            NodeKind.BUTTON,
            ButtonProperties,
            lambda: {"content": "Submit", "type": "primary", "htmlType": "submit"},
        ),
        KindSpec(
            NodeKind.CONTAINER,
            ContainerProperties,
            lambda: {"label": "Container", "direction": "vertical"},
            allows_children=True,
        ),
    ]
    for spec in builtin:
        registry.register(spec)


default_registry = KindRegistry()
_register_builtin_kinds(default_registry)
