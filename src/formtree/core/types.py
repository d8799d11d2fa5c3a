"""
Core type definitions for formtree.

This module contains the type aliases shared by the node model, the
structural operations and the history engine.
"""

from collections.abc import Callable
from typing import Any

Properties = dict[str, Any]

IdFactory = Callable[[], str]
