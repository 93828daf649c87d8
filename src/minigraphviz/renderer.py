"""
DOT text renderer.

Handles emitting indented lines, blank-line spacing between sections, and
walking a group tree to produce the body of a DOT document.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .attributes import render_bracketed, render_statement_list
from .group import Group
from .models import Connection, GroupKind, Node, dot_node_id

INDENT = "    "


@dataclass
class RenderOptions:
    """
    Options for graph generation.

    Attributes:
        simplify_groups: Collapse groups that only wrap a single subgroup
            before emitting the document.
        debug: Record a RenderTrace of the generation stages.
    """

    simplify_groups: bool = True
    debug: bool = False


class StringOutput:
    """
    A line buffer that tracks indentation.

    Each nesting level indents lines by four spaces. Blank lines are never
    indented.
    """

    def __init__(self):
        self.indent_depth = 0
        self.lines: List[str] = []

    def line(self, text: str = "") -> None:
        """Append a line at the current indentation."""
        if text:
            self.lines.append(INDENT * self.indent_depth + text)
        else:
            self.lines.append("")

    @contextmanager
    def indented(self) -> Iterator[None]:
        self.indent_depth += 1
        try:
            yield
        finally:
            self.indent_depth -= 1

    @contextmanager
    def block(self, header: str) -> Iterator[None]:
        """Emit ``header {``, an indented body, and a closing ``}``."""
        self.line(f"{header} {{" if header else "{")
        with self.indented():
            yield
        self.line("}")

    def spacer(self, disabled: bool = False) -> "SpacerToken":
        """
        Create a spacer token for separating sections with blank lines.

        A disabled token starts out as already applied, so the first section
        after it gets no leading blank line.
        """
        return SpacerToken(self, applied=disabled)

    def render(self) -> str:
        return "\n".join(self.lines)


class SpacerToken:
    """Emits a single blank line between sections of a block."""

    def __init__(self, out: StringOutput, applied: bool = False):
        self.out = out
        self.applied = applied

    def apply(self) -> None:
        """Emit a blank line, unless one was already applied since the last reset."""
        if self.applied:
            return
        self.applied = True
        self.out.line()

    def reset(self) -> None:
        """Allow the next apply() to emit a blank line again."""
        self.applied = False


class GroupRenderer:
    """
    Renders a group tree into a StringOutput.

    Cluster groups are numbered ``cluster_1``, ``cluster_2``, ... in the
    order they are emitted; the counter is shared across the whole render.
    """

    def __init__(self, out: StringOutput, options: Optional[RenderOptions] = None):
        self.out = out
        self.options = options or RenderOptions()
        self.cluster_count = 0

    def render(self, group: Group, spacer: Optional[SpacerToken] = None) -> None:
        """
        Render a group's body: attributes, nodes, subgroup blocks, then
        connections, separated by blank lines.
        """
        # Forward through groups that only wrap another group
        if self.options.simplify_groups and self.is_transparent(group):
            self.render(group.subgroups[0], spacer)
            return

        out = self.out
        if spacer is None:
            spacer = out.spacer()

        if group.attributes:
            spacer.apply()
            out.line(render_statement_list(group.attributes))
            spacer.reset()

        if group.nodes:
            spacer.apply()
            for node in group.nodes:
                out.line(self.node_statement(node))
            spacer.reset()

        for subgroup in group.subgroups:
            spacer.apply()
            with out.block(self.block_header(subgroup)):
                self.render(subgroup, out.spacer(disabled=True))
            spacer.reset()

        if group.connections:
            spacer.apply()
            for connection in sorted(group.connections, key=Connection.sort_key):
                out.line(self.connection_statement(connection))
            spacer.reset()

    @staticmethod
    def is_transparent(group: Group) -> bool:
        """
        Whether a group can be skipped in favor of its only subgroup.

        The group must have no title and no attributes other than those of
        the subgroup, so that nothing of its own is lost by skipping it.
        """
        if not group.is_single_group or group.title is not None:
            return False
        return group.attributes == group.subgroups[0].attributes_except_title()

    def block_header(self, group: Group) -> str:
        """Return the keyword opening a subgroup's block."""
        if group.kind is GroupKind.SUBGRAPH:
            return "subgraph"
        if group.kind is GroupKind.CLUSTER:
            self.cluster_count += 1
            return f"subgraph cluster_{self.cluster_count}"
        return ""

    @staticmethod
    def node_statement(node: Node) -> str:
        properties = render_bracketed(node.attributes)
        name = dot_node_id(node.id)
        if properties:
            return f"{name} {properties}"
        return name

    @staticmethod
    def connection_statement(connection: Connection) -> str:
        properties = render_bracketed(connection.attributes)
        edge = f"{dot_node_id(connection.from_id)} -> {dot_node_id(connection.to_id)}"
        if properties:
            return f"{edge} {properties}"
        return edge
