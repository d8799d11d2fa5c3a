"""
Tests for the kind registry.

This module tests kind lookup, default property factories, the children
contract and property schema validation.
"""

import pytest

from formtree.core import NodeKind
from formtree.exceptions import PropertyValidationError, UnknownKindError
from formtree.structure.registry import (
    KindRegistry,
    KindSpec,
    SwitchProperties,
    default_registry,
)


class TestDefaultRegistry:
    """Test the built-in kinds."""

    def test_every_kind_registered(self):
        """All NodeKind members have a spec."""
        assert set(default_registry.kinds()) == set(NodeKind)

    def test_only_container_allows_children(self):
        """Container is the only kind holding children."""
        allowing = [kind for kind in NodeKind if default_registry.allows_children(kind)]
        assert allowing == [NodeKind.CONTAINER]

    def test_defaults_are_fresh_per_call(self):
        """Each call returns an independent map."""
        first = default_registry.default_properties(NodeKind.SELECT)
        second = default_registry.default_properties(NodeKind.SELECT)
        first["options"].append({"label": "B", "value": "B"})
        assert len(second["options"]) == 1

    def test_defaults_pass_their_own_schema(self):
        """Default properties validate for every kind."""
        for kind in NodeKind:
            default_registry.validate_properties(
                kind, default_registry.default_properties(kind)
            )

    def test_lookup_by_name(self):
        """Specs can be looked up by snake_case name."""
        assert default_registry.get("time_picker").kind is NodeKind.TIME_PICKER


class TestPropertyValidation:
    """Test schema validation of complete property maps."""

    def test_missing_required_key_rejected(self):
        """Inputs need a label."""
        with pytest.raises(PropertyValidationError) as exc_info:
            default_registry.validate_properties(
                NodeKind.INPUT, {"placeholder": "x"}, node_id="n1"
            )
        assert exc_info.value.kind == "Input"
        assert exc_info.value.node_id == "n1"

    def test_camel_case_keys_accepted(self):
        """Shared keys use camelCase."""
        default_registry.validate_properties(
            NodeKind.INPUT,
            {"label": "Name", "placeholder": "", "colSpan": 12, "visibleOn": "x > 1"},
        )

    def test_col_span_range_enforced(self):
        """colSpan is limited to 1-24."""
        with pytest.raises(PropertyValidationError):
            default_registry.validate_properties(
                NodeKind.INPUT, {"label": "Name", "placeholder": "", "colSpan": 30}
            )

    def test_unknown_keys_allowed(self):
        """Extra keys are stored verbatim."""
        default_registry.validate_properties(
            NodeKind.SWITCH, {"label": "On", "customFlag": True}
        )

    def test_button_type_is_closed(self):
        """Button type must be one of the known styles."""
        with pytest.raises(PropertyValidationError):
            default_registry.validate_properties(
                NodeKind.BUTTON, {"content": "Go", "type": "huge"}
            )

    def test_validation_rules_checked(self):
        """Rule entries need a known type and a message."""
        with pytest.raises(PropertyValidationError):
            default_registry.validate_properties(
                NodeKind.INPUT,
                {"label": "Name", "placeholder": "", "rules": [{"type": "required"}]},
            )


class TestCustomRegistry:
    """Test registering kinds in a separate registry."""

    def test_unregistered_kind_raises(self):
        """An empty registry knows no kinds."""
        registry = KindRegistry()
        with pytest.raises(UnknownKindError):
            registry.get(NodeKind.INPUT)

    def test_register_replaces_spec(self):
        """Registering again replaces the spec for that kind."""
        registry = KindRegistry()
        registry.register(KindSpec(NodeKind.SWITCH, SwitchProperties, lambda: {"label": "A"}))
        registry.register(KindSpec(NodeKind.SWITCH, SwitchProperties, lambda: {"label": "B"}))
        assert registry.default_properties(NodeKind.SWITCH) == {"label": "B"}
        assert not registry.allows_children(NodeKind.SWITCH)
