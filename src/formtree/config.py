"""
Editor configuration.

`EditorSettings` is owned by each `DocumentState`; there is no process-wide
configuration object.
"""

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from formtree.history.engine import MAX_HISTORY_LENGTH
from formtree.structure.factory import generate_id


class EditorSettings(BaseModel):
    """
    Tunables for one editing session.

    Params:
        max_history_length: Number of undoable entries kept; older ones are evicted
        fallback_to_root: When adding a node under a parent that is missing or
            cannot hold children, append it to the root list instead of dropping it
        id_factory: Source of fresh node ids
    """

    model_config = ConfigDict(frozen=True)

    max_history_length: int = Field(default=MAX_HISTORY_LENGTH, ge=1)
    fallback_to_root: bool = True
    id_factory: Callable[[], str] = generate_id
