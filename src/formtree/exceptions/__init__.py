"""
formtree exception classes.

This package provides the exception types raised at the boundary of the
editing engine for consistent error handling and reporting.
"""

from formtree.exceptions.core import (
    DocumentValidationError,
    DuplicateNodeIdError,
    FormTreeError,
    PropertyValidationError,
    SnapshotNotFoundError,
    UnknownKindError,
)

__all__ = [
    "FormTreeError",
    "UnknownKindError",
    "PropertyValidationError",
    "DocumentValidationError",
    "DuplicateNodeIdError",
    "SnapshotNotFoundError",
]
