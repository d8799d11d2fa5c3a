"""
Tests for the editing intents.

This module drives DocumentState through the intent functions and checks
the resulting tree, selection and history, including the worked scenarios
for insert/undo, cross-container moves, property edits and batch deletes.
"""

import pytest

from formtree.config import EditorSettings
from formtree.core import Location, Node, NodeKind
from formtree.editor import (
    DocumentState,
    MoveDirection,
    add_node,
    add_nodes,
    clear_selection,
    move_in_list,
    move_node,
    redo,
    remove_nodes,
    reorder_siblings,
    replace_document,
    reset_document,
    select,
    select_all,
    toggle_lock,
    undo,
    update_properties,
)
from formtree.exceptions import DocumentValidationError, PropertyValidationError, UnknownKindError
from formtree.history import DeleteEntry, InsertEntry, MoveEntry, ReplaceAllEntry
from formtree.structure import find_by_id, find_parent_info, get_all_ids, is_descendant


def _add(state, kind, parent_id=None, index=None):
    entry = add_node(state, kind, parent_id, index)
    return entry.inserts[0].node.id


class TestAddNode:
    """Test adding factory nodes."""

    def test_add_to_root(self, state):
        entry = add_node(state, NodeKind.INPUT)
        assert isinstance(entry, InsertEntry)
        assert state.tree[0].properties["label"] == "Input"
        assert state.selection == [state.tree[0].id]

    def test_insert_at_index(self, state):
        """Explicit indices place the node among existing siblings."""
        _add(state, "Input")
        _add(state, "Button")
        _add(state, "Select", None, 1)
        assert [node.kind for node in state.tree] == [
            NodeKind.INPUT,
            NodeKind.SELECT,
            NodeKind.BUTTON,
        ]

    def test_add_into_container(self, state, ids):
        box = _add(state, "Container")
        child = _add(state, "Input", box)
        assert ids(state.tree[0].children) == [child]
        assert state.history.past[-1].inserts[0].location == Location(box, 0)

    def test_non_container_parent_falls_back_to_root(self, state):
        """Adds under a leaf land at the end of the root list."""
        leaf = _add(state, "Input")
        entry = add_node(state, "Button", leaf, 0)
        assert entry.inserts[0].location == Location(None, 1)
        assert state.tree[1].kind is NodeKind.BUTTON

    def test_fallback_can_be_disabled(self, id_factory):
        state = DocumentState(
            settings=EditorSettings(id_factory=id_factory, fallback_to_root=False)
        )
        leaf = _add(state, "Input")
        assert add_node(state, "Button", leaf) is None
        assert len(state.tree) == 1
        assert len(state.history.past) == 1

    def test_unknown_kind(self, state):
        with pytest.raises(UnknownKindError):
            add_node(state, "Slider")
        assert state.tree == []

    def test_insert_then_undo_scenario(self, state, ids):
        """Insert A then B at index 0 gives [B, A]; undo twice empties the tree."""
        a = _add(state, "Input", None, 0)
        b = _add(state, "Input", None, 0)
        assert ids(state.tree) == [b, a]
        assert undo(state)
        assert ids(state.tree) == [a]
        assert undo(state)
        assert state.tree == []
        assert not undo(state)


class TestAddNodes:
    """Test batch insertion of caller-supplied nodes."""

    def test_inserts_fresh_clones(self, state, make_node, container):
        box = container("box", make_node("x", label="X", placeholder=""), label="Box")
        entry = add_nodes(state, [box])
        assert isinstance(entry, InsertEntry)
        all_ids = get_all_ids(state.tree)
        assert len(all_ids) == 2
        assert {"box", "x"}.isdisjoint(all_ids)

    def test_leaf_with_children_rejected(self, state, make_node):
        """A leaf kind carrying children never reaches the document."""
        leaf = make_node(
            "x",
            children=[make_node("y", NodeKind.SWITCH, label="Y")],
            label="X",
            placeholder="",
        )
        with pytest.raises(DocumentValidationError):
            add_nodes(state, [leaf])
        assert state.tree == []
        assert not state.can_undo

    def test_invalid_properties_rejected(self, state, make_node):
        with pytest.raises(DocumentValidationError):
            add_nodes(state, [make_node("b", NodeKind.BUTTON)])
        assert state.tree == []

    def test_container_children_normalized(self, state):
        """A container supplied without a children list receives an empty one."""
        bare = Node(id="box", kind=NodeKind.CONTAINER, properties={"label": "Box"})
        add_nodes(state, [bare])
        assert state.tree[0].children == []


class TestMoveNode:
    """Test moves, the cycle guard and no-op detection."""

    def test_move_container_into_container_scenario(self, state, ids):
        """C (holding D) moves to the end of E; moving E into C is then rejected."""
        c = _add(state, "Container")
        d = _add(state, "Input", c)
        e = _add(state, "Container")
        x = _add(state, "Input", e)

        entry = move_node(state, c, e)
        assert isinstance(entry, MoveEntry)
        box_e = find_by_id(state.tree, e)
        assert ids(box_e.children) == [x, c]
        assert ids(box_e.children[1].children) == [d]

        before = state.tree
        assert move_node(state, e, c) is None
        assert state.tree is before
        assert not is_descendant(state.tree, e, e)

    def test_move_to_same_slot_not_recorded(self, state):
        a = _add(state, "Input")
        _add(state, "Input")
        depth = len(state.history.past)
        assert move_node(state, a, None, 0) is None
        assert len(state.history.past) == depth

    def test_append_when_already_last(self, state):
        _add(state, "Input")
        b = _add(state, "Input")
        assert move_node(state, b, None) is None

    def test_move_missing_node(self, state):
        assert move_node(state, "zzz", None, 0) is None

    def test_move_to_missing_parent(self, state):
        a = _add(state, "Input")
        assert move_node(state, a, "zzz") is None

    def test_move_undo_redo(self, state, ids):
        a = _add(state, "Input")
        b = _add(state, "Input")
        box = _add(state, "Container")
        move_node(state, a, box)
        assert ids(state.tree) == [b, box]
        undo(state)
        assert ids(state.tree) == [a, b, box]
        redo(state)
        assert ids(state.tree) == [b, box]
        assert ids(state.tree[1].children) == [a]


class TestReorder:
    """Test sibling reordering helpers."""

    def test_reorder_siblings(self, state, ids):
        """The active node takes the over node's slot."""
        i = _add(state, "Input")
        b = _add(state, "Button")
        s = _add(state, "Select")
        reorder_siblings(state, s, i)
        assert ids(state.tree) == [s, i, b]

    def test_reorder_forward(self, state, ids):
        i = _add(state, "Input")
        b = _add(state, "Button")
        s = _add(state, "Select")
        reorder_siblings(state, i, s)
        assert ids(state.tree) == [b, s, i]

    def test_reorder_requires_same_parent(self, state):
        box = _add(state, "Container")
        inner = _add(state, "Input", box)
        outer = _add(state, "Input")
        assert reorder_siblings(state, outer, inner) is None

    def test_reorder_same_node(self, state):
        a = _add(state, "Input")
        assert reorder_siblings(state, a, a) is None

    def test_move_in_list_directions(self, state, ids):
        a = _add(state, "Input")
        b = _add(state, "Input")
        c = _add(state, "Input")
        move_in_list(state, c, MoveDirection.UP)
        assert ids(state.tree) == [a, c, b]
        move_in_list(state, c, "top")
        assert ids(state.tree) == [c, a, b]
        move_in_list(state, c, "bottom")
        assert ids(state.tree) == [a, b, c]
        move_in_list(state, a, "down")
        assert ids(state.tree) == [b, a, c]

    def test_move_in_list_at_edge_is_noop(self, state):
        a = _add(state, "Input")
        _add(state, "Input")
        assert move_in_list(state, a, "up") is None
        assert move_in_list(state, a, "top") is None

    def test_move_in_list_inside_container(self, state, ids):
        box = _add(state, "Container")
        x = _add(state, "Input", box)
        y = _add(state, "Input", box)
        move_in_list(state, y, "up")
        assert ids(state.tree[0].children) == [y, x]


class TestRemoveNodes:
    """Test deletion and its undo."""

    def test_remove_single_id(self, state, ids):
        a = _add(state, "Input")
        b = _add(state, "Button")
        entry = remove_nodes(state, a)
        assert isinstance(entry, DeleteEntry)
        assert ids(state.tree) == [b]

    def test_remove_ancestor_and_descendant_scenario(self, state, ids):
        """Removing A and its descendant B is one entry; undo restores both in place."""
        first = _add(state, "Input")
        a = _add(state, "Container")
        b = _add(state, "Input", a)
        last = _add(state, "Input")
        before = state.tree

        entry = remove_nodes(state, [a, b])
        assert len(entry.removes) == 1
        assert ids(state.tree) == [first, last]

        undo(state)
        assert state.tree == before
        assert find_parent_info(state.tree, b).parent_id == a

    def test_selection_pruned(self, state):
        box = _add(state, "Container")
        child = _add(state, "Input", box)
        keep = _add(state, "Input")
        state.selection = [child, keep]
        remove_nodes(state, box)
        assert state.selection == [keep]

    def test_missing_ids_noop(self, state):
        _add(state, "Input")
        assert remove_nodes(state, ["zzz"]) is None
        assert remove_nodes(state, []) is None

    def test_locked_node_refuses_whole_request(self, state, ids):
        a = _add(state, "Input")
        b = _add(state, "Input")
        toggle_lock(state, a)
        depth = len(state.history.past)
        assert remove_nodes(state, [a, b]) is None
        assert ids(state.tree) == [a, b]
        assert len(state.history.past) == depth

    def test_locked_descendant_protects_container(self, state):
        box = _add(state, "Container")
        child = _add(state, "Input", box)
        toggle_lock(state, child)
        assert remove_nodes(state, box) is None
        assert find_by_id(state.tree, child) is not None

        toggle_lock(state, child)
        assert isinstance(remove_nodes(state, box), DeleteEntry)
        assert state.tree == []


class TestUpdateProperties:
    """Test property patches and their history."""

    def test_successive_patches_scenario(self, state):
        """Two label edits undo one at a time back to the original."""
        node_id = _add(state, "Input")
        original = state.tree[0].properties["label"]
        update_properties(state, node_id, {"label": "x"})
        update_properties(state, node_id, {"label": "y"})
        undo(state)
        assert find_by_id(state.tree, node_id).properties["label"] == "x"
        undo(state)
        assert find_by_id(state.tree, node_id).properties["label"] == original

    def test_entry_stores_complete_maps(self, state):
        node_id = _add(state, "Input")
        update_properties(state, node_id, {"label": "x"})
        entry = update_properties(state, node_id, {"placeholder": "p"})
        assert entry.prev_properties == {"label": "x", "placeholder": "Please enter..."}
        assert entry.next_properties == {"label": "x", "placeholder": "p"}

    def test_nested_node(self, state):
        box = _add(state, "Container")
        child = _add(state, "Input", box)
        update_properties(state, child, {"label": "Nested"})
        assert state.tree[0].children[0].properties["label"] == "Nested"

    def test_unchanged_patch_not_recorded(self, state):
        node_id = _add(state, "Input")
        depth = len(state.history.past)
        assert update_properties(state, node_id, {"label": "Input"}) is None
        assert len(state.history.past) == depth

    def test_missing_node(self, state):
        assert update_properties(state, "zzz", {"label": "x"}) is None

    def test_invalid_patch_rejected(self, state):
        """Schema violations raise before anything is recorded."""
        node_id = _add(state, "Input")
        before = state.tree
        with pytest.raises(PropertyValidationError):
            update_properties(state, node_id, {"colSpan": 99})
        assert state.tree is before

    def test_patch_is_copied(self, state):
        node_id = _add(state, "Select")
        options = [{"label": "X", "value": "x"}]
        update_properties(state, node_id, {"options": options})
        options.append({"label": "Y", "value": "y"})
        assert len(find_by_id(state.tree, node_id).properties["options"]) == 1

    def test_toggle_lock(self, state):
        node_id = _add(state, "Input")
        toggle_lock(state, node_id)
        assert state.tree[0].properties["locked"] is True
        toggle_lock(state, node_id)
        assert state.tree[0].properties["locked"] is False
        assert toggle_lock(state, "zzz") is None


class TestSelection:
    """Selection is side state, not history."""

    def test_select_single_and_multi(self, state):
        a = _add(state, "Input")
        b = _add(state, "Input")
        select(state, a)
        assert state.selection == [a]
        select(state, b, multi=True)
        assert state.selection == [a, b]
        select(state, a, multi=True)
        assert state.selection == [b]

    def test_select_missing_ignored(self, state):
        a = _add(state, "Input")
        select(state, "zzz")
        assert state.selection == [a]

    def test_select_all_and_clear(self, state):
        box = _add(state, "Container")
        child = _add(state, "Input", box)
        select_all(state)
        assert state.selection == [box, child]
        depth = len(state.history.past)
        clear_selection(state)
        assert state.selection == []
        assert len(state.history.past) == depth

    def test_primary_selection(self, state):
        a = _add(state, "Input")
        b = _add(state, "Input")
        state.selection = [a, b, "gone"]
        assert state.primary_selection.id == b
        assert [node.id for node in state.selected_nodes()] == [a, b]

    def test_undo_clears_selection(self, state):
        _add(state, "Input")
        _add(state, "Input")
        undo(state)
        assert state.selection == []


class TestUndoRedo:
    """Test stack behaviour through the intents."""

    def test_redo_after_undo(self, state):
        _add(state, "Input")
        _add(state, "Button")
        undo(state)
        assert len(state.tree) == 1
        assert redo(state)
        assert len(state.tree) == 2
        assert not redo(state)

    def test_new_edit_clears_redo(self, state):
        _add(state, "Input")
        _add(state, "Button")
        undo(state)
        _add(state, "Select")
        assert not state.can_redo
        assert not redo(state)

    def test_history_cap(self, id_factory):
        """past never exceeds the cap; undoing to the oldest entry leaves a valid tree."""
        state = DocumentState(settings=EditorSettings(id_factory=id_factory, max_history_length=50))
        for _ in range(60):
            add_node(state, "Input")
        assert len(state.history.past) == 50
        while undo(state):
            pass
        assert len(state.tree) == 10
        all_ids = get_all_ids(state.tree)
        assert len(set(all_ids)) == len(all_ids)

    def test_full_round_trip(self, state):
        """Undoing everything and redoing everything reproduces the final tree."""
        box = _add(state, "Container")
        a = _add(state, "Input", box)
        b = _add(state, "Button")
        move_node(state, b, box, 0)
        update_properties(state, a, {"label": "Name"})
        remove_nodes(state, a)
        final = state.tree

        while undo(state):
            pass
        assert state.tree == []
        while redo(state):
            pass
        assert state.tree == final


class TestReplaceDocument:
    """Test whole-document replacement."""

    def test_import_and_undo(self, state, ids):
        original = _add(state, "Input")
        before = state.tree
        entry = replace_document(
            state,
            [{"id": "imported", "kind": "Switch", "properties": {"label": "On"}}],
        )
        assert isinstance(entry, ReplaceAllEntry)
        assert ids(state.tree) == ["imported"]
        assert state.selection == []
        undo(state)
        assert state.tree == before
        assert ids(state.tree) == [original]
        redo(state)
        assert ids(state.tree) == ["imported"]

    def test_duplicate_ids_rejected(self, state):
        with pytest.raises(DocumentValidationError):
            replace_document(
                state,
                [
                    {"id": "x", "kind": "Switch", "properties": {"label": "A"}},
                    {"id": "x", "kind": "Switch", "properties": {"label": "B"}},
                ],
            )
        assert state.tree == []

    def test_identical_document_noop(self, state):
        _add(state, "Input")
        assert replace_document(state, state.tree) is None

    def test_reset(self, state):
        _add(state, "Container")
        reset_document(state)
        assert state.tree == []
        assert state.history.past[-1].describe() == "Clear document"
        assert reset_document(state) is None
        undo(state)
        assert len(state.tree) == 1
