"""
History engine for formtree.

This package provides the tagged history entries and the interpreter that
applies or inverts them against the current tree.
"""

from formtree.history.engine import (
    MAX_HISTORY_LENGTH,
    History,
    apply_entry,
    invert_entry,
    redo_step,
    undo_step,
)
from formtree.history.entries import (
    DeleteEntry,
    HistoryEntry,
    HistoryEntryKind,
    InsertEntry,
    MoveEntry,
    ReplaceAllEntry,
    UpdatePropsEntry,
)

__all__ = [
    "History",
    "MAX_HISTORY_LENGTH",
    "apply_entry",
    "invert_entry",
    "undo_step",
    "redo_step",
    "HistoryEntry",
    "HistoryEntryKind",
    "InsertEntry",
    "DeleteEntry",
    "UpdatePropsEntry",
    "MoveEntry",
    "ReplaceAllEntry",
]
