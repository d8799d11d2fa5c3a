"""
Exception classes for the formtree editing engine.

Structural no-ops (missing targets, cycle attempts, empty history) are never
raised; they surface as unchanged state. The classes below cover invalid
input crossing the package boundary: unknown kinds, property maps a kind's
schema rejects, malformed import data and unknown snapshot names.
"""


class FormTreeError(Exception):
    """Base exception for all formtree errors."""

    pass


class UnknownKindError(FormTreeError):
    """Raised when a node kind is not registered."""

    def __init__(self, kind: str):
        """
        Initialize the exception.

        Params:
            kind: The kind name that could not be resolved
        """
        self.kind = kind
        super().__init__(f"Unknown node kind '{kind}'")


class PropertyValidationError(FormTreeError):
    """Raised when a property map does not satisfy its kind's schema."""

    def __init__(self, kind: str, reason: str, node_id: str | None = None):
        """
        Initialize the exception.

        Params:
            kind: Kind whose schema rejected the properties
            reason: Validation failure details
            node_id: Id of the node being edited, if known
        """
        self.kind = kind
        self.reason = reason
        self.node_id = node_id
        target = f" on node '{node_id}'" if node_id else ""
        super().__init__(f"Invalid properties for {kind}{target}: {reason}")


class DocumentValidationError(FormTreeError):
    """Raised when imported document data cannot form a valid tree."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: Why the document was rejected
        """
        self.reason = reason
        super().__init__(f"Invalid document: {reason}")


class DuplicateNodeIdError(DocumentValidationError):
    """Raised when a document contains the same node id more than once."""

    def __init__(self, node_id: str):
        """
        Initialize the exception.

        Params:
            node_id: The id that appears more than once
        """
        self.node_id = node_id
        super().__init__(f"node id '{node_id}' appears more than once")


class SnapshotNotFoundError(FormTreeError):
    """Raised when a named snapshot does not exist."""

    def __init__(self, name: str, available: list[str] | None = None):
        """
        Initialize the exception.

        Params:
            name: Requested snapshot name
            available: Names of the snapshots that do exist
        """
        self.name = name
        self.available = available or []
        super().__init__(
            f"Snapshot '{name}' does not exist. Available snapshots: {self.available}"
        )
