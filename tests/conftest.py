"""Pytest configuration and shared fixtures for minigraphviz tests."""

import textwrap

import pytest

from minigraphviz import Graph, create_graph
from minigraphviz.debug import visual_diff


@pytest.fixture
def graph():
    """Empty, unnamed Graph instance."""
    return Graph()


@pytest.fixture
def named_graph():
    """Empty graph with a root graph name."""
    return Graph(name="testGraph")


@pytest.fixture
def cycle_graph():
    """Four nodes n1..n4 connected in a cycle n1 -> n2 -> n4 -> n3 -> n1."""
    graph = Graph()
    for label in ("n1", "n2", "n3", "n4"):
        graph.create_node(label)
    graph.add_connection("n1", "n2")
    graph.add_connection("n2", "n4")
    graph.add_connection("n4", "n3")
    graph.add_connection("n3", "n1")
    return graph


@pytest.fixture
def chain_graph():
    """Pre-built A -> B -> C graph."""
    return create_graph([("A", "B"), ("B", "C")])


@pytest.fixture
def assert_dot():
    """
    Compare rendered DOT text against an expected (indented) document.

    On mismatch the test fails with a visual diff of the two texts.
    """

    def check(actual: str, expected: str) -> None:
        expected = textwrap.dedent(expected).strip()
        if actual != expected:
            pytest.fail(
                "\n" + visual_diff(expected, actual) + "\n\nActual:\n" + actual,
                pytrace=False,
            )

    return check
