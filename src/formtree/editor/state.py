"""
Document state owned by one editing session.

`DocumentState` bundles the current tree with its history stacks, the
selection, the clipboard and named snapshots. Intent functions receive it
explicitly; nothing here is global.
"""

from dataclasses import dataclass, field
from typing import Any

from formtree.config import EditorSettings
from formtree.core.tree_node import Node, Tree
from formtree.history.engine import History
from formtree.serialization import from_plain, to_plain
from formtree.structure.locator import count_nodes, find_by_id
from formtree.structure.registry import KindRegistry, default_registry


@dataclass
class DocumentState:
    """
    Mutable session state around an immutable-by-convention tree.

    Only `tree` and `snapshots` are persisted; history, selection and the
    clipboard are session-local.
    """

    tree: Tree = field(default_factory=list)
    settings: EditorSettings = field(default_factory=EditorSettings)
    registry: KindRegistry = default_registry
    selection: list[str] = field(default_factory=list)
    clipboard: list[Node] = field(default_factory=list)
    snapshots: dict[str, Tree] = field(default_factory=dict)
    history: History = field(init=False)

    def __post_init__(self):
        self.history = History(self.settings.max_history_length)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def node_count(self) -> int:
        return count_nodes(self.tree)

    @property
    def primary_selection(self) -> Node | None:
        """The most recently selected node that still exists."""
        for node_id in reversed(self.selection):
            node = find_by_id(self.tree, node_id)
            if node is not None:
                return node
        return None

    def selected_nodes(self) -> list[Node]:
        nodes = (find_by_id(self.tree, node_id) for node_id in self.selection)
        return [node for node in nodes if node is not None]

    def to_persisted(self) -> dict[str, Any]:
        """Plain data for persistence: components plus named snapshots."""
        return {
            "components": to_plain(self.tree),
            "snapshots": {name: to_plain(tree) for name, tree in self.snapshots.items()},
        }

    @classmethod
    def from_persisted(
        cls,
        data: dict[str, Any],
        settings: EditorSettings | None = None,
        registry: KindRegistry = default_registry,
    ) -> "DocumentState":
        """
        Restore a session from `to_persisted` output with empty history.

        Raises:
            DocumentValidationError: If the components or a snapshot are invalid
        """
        return cls(
            tree=from_plain(data.get("components", []), registry),
            settings=settings or EditorSettings(),
            registry=registry,
            snapshots={
                name: from_plain(tree, registry)
                for name, tree in data.get("snapshots", {}).items()
            },
        )
