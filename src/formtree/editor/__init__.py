"""
Editing session layer for formtree.

This package provides the owned `DocumentState` and the intent functions the
UI calls to edit it.
"""

from formtree.editor.intents import (
    MoveDirection,
    add_node,
    add_nodes,
    apply_snapshot,
    clear_selection,
    copy,
    cut,
    delete_snapshot,
    duplicate,
    move_in_list,
    move_node,
    paste,
    redo,
    remove_nodes,
    reorder_siblings,
    replace_document,
    reset_document,
    save_snapshot,
    select,
    select_all,
    toggle_lock,
    undo,
    update_properties,
)
from formtree.editor.state import DocumentState

__all__ = [
    "DocumentState",
    "MoveDirection",
    "add_node",
    "add_nodes",
    "move_node",
    "reorder_siblings",
    "move_in_list",
    "remove_nodes",
    "update_properties",
    "toggle_lock",
    "select",
    "select_all",
    "clear_selection",
    "copy",
    "paste",
    "duplicate",
    "cut",
    "undo",
    "redo",
    "replace_document",
    "reset_document",
    "save_snapshot",
    "apply_snapshot",
    "delete_snapshot",
]
