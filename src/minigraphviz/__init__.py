"""
MiniGraphviz - Graphviz DOT generation from nested groups

A Python library for building directed graphs of nodes, connections and
nested groups, and rendering them as Graphviz DOT text.

Example:
    >>> from minigraphviz import Graph
    >>> graph = Graph()
    >>> graph.create_node("A", groups=["Services"])
    >>> graph.add_connection("A", "B", label="calls")
    >>> print(graph.generate_file())

Debug Mode Example:
    >>> text = graph.generate_file(debug=True)
    >>> trace = graph.get_trace()
    >>> print(trace.summary())
"""

from .attributes import (
    AttributeValue,
    ValueKind,
    render_bracketed,
    render_statement_list,
)
from .debug import visual_diff
from .graph import Graph, create_graph
from .group import Group
from .models import Connection, GroupKind, Node, Rank, RankDir
from .renderer import GroupRenderer, RenderOptions, StringOutput
from .tracer import PipelineStage, RenderTrace

__version__ = "0.3.0"

__all__ = [
    # Main API
    "Graph",
    "create_graph",
    "RenderOptions",
    "Rank",
    "RankDir",
    # Attributes
    "AttributeValue",
    "ValueKind",
    "render_bracketed",
    "render_statement_list",
    # Model
    "Node",
    "Connection",
    "Group",
    "GroupKind",
    # Renderer
    "GroupRenderer",
    "StringOutput",
    # Debug/Tracing
    "RenderTrace",
    "PipelineStage",
    "visual_diff",
]
