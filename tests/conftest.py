"""
Shared test fixtures for the formtree test suite.
"""

from itertools import count

import pytest

from formtree.config import EditorSettings
from formtree.core import Node, NodeKind
from formtree.editor import DocumentState


def _make_node(node_id, kind=NodeKind.INPUT, children=None, **properties):
    """Build a node directly, bypassing the factory."""
    if kind is NodeKind.CONTAINER and children is None:
        children = []
    return Node(id=node_id, kind=kind, properties=properties, children=children)


def _container(node_id, *children, **properties):
    return _make_node(node_id, NodeKind.CONTAINER, list(children), **properties)


def _ids(tree):
    return [node.id for node in tree]


@pytest.fixture
def make_node():
    """Node builder: make_node(id, kind=Input, children=None, **properties)."""
    return _make_node


@pytest.fixture
def container():
    return _container


@pytest.fixture
def ids():
    """Top-level ids of a node list."""
    return _ids


@pytest.fixture
def id_factory():
    """Deterministic id source: n1, n2, ..."""
    counter = count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def state(id_factory):
    return DocumentState(settings=EditorSettings(id_factory=id_factory))


@pytest.fixture
def nested_tree():
    """
    Tree used across structure tests:

        a
        box1
          b
          box2
            c
        d
    """
    return [
        _make_node("a", label="A"),
        _container(
            "box1",
            _make_node("b", label="B"),
            _container("box2", _make_node("c", label="C")),
        ),
        _make_node("d", label="D"),
    ]
