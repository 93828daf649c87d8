"""
Graph module for DOT generation.

Provides the Graph facade, which owns the group tree and the node id counter,
and turns declarative calls (create nodes, connect them, group them by rank)
into a rendered DOT document.
"""

from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import networkx as nx

from .attributes import (
    AttributeValue,
    Attributes,
    normalize_attributes,
    render_bracketed,
)
from .group import Group
from .models import Connection, GroupKind, Node, NodeId, Rank, RankDir
from .renderer import GroupRenderer, RenderOptions, StringOutput
from .tracer import RenderTrace

RANKDIR = "rankdir"

NodeRef = Union[NodeId, str]


def _default_graph_attributes() -> Attributes:
    return {RANKDIR: AttributeValue.raw(RankDir.TOP_TO_BOTTOM.value)}


class Graph:
    """
    Directed graph with nested groups, rendered to Graphviz DOT.

    Example:
        >>> graph = Graph()
        >>> a = graph.create_node("A", groups=["Backend"])
        >>> b = graph.create_node("B", groups=["Backend", "Storage"])
        >>> graph.add_connection(a, b, label="writes")
        >>> print(graph.generate_file())
    """

    def __init__(
        self,
        name: Optional[str] = None,
        rank_dir: Union[RankDir, str, None] = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize an empty graph.

        Args:
            name: Optional name emitted after the ``digraph`` keyword
            rank_dir: Layout direction; top-to-bottom when not given
            attributes: Additional graph-level attributes
        """
        self.name = name
        self.attributes: Attributes = normalize_attributes(attributes)
        self._next_id = 1
        self._root = Group(kind=GroupKind.ROOT)
        self._trace: Optional[RenderTrace] = None

        if rank_dir is not None:
            self.rank_dir = rank_dir

    @property
    def root(self) -> Group:
        """The root group of this graph."""
        return self._root

    @property
    def rank_dir(self) -> RankDir:
        """Rank direction for this graph. Defaults to top-to-bottom."""
        value = self.attributes.get(RANKDIR)
        if value is None:
            return RankDir.TOP_TO_BOTTOM
        try:
            return RankDir(value.raw_value)
        except ValueError:
            return RankDir.TOP_TO_BOTTOM

    @rank_dir.setter
    def rank_dir(self, value: Union[RankDir, str]) -> None:
        direction = value if isinstance(value, RankDir) else RankDir.parse(value)
        self.attributes[RANKDIR] = AttributeValue.raw(direction.value)

    def _graph_attributes(self) -> Attributes:
        result = dict(self.attributes)
        result[RANKDIR] = AttributeValue.raw(self.rank_dir.value)
        return result

    # Nodes

    def create_node(
        self,
        label: str,
        groups: Sequence[str] = (),
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> NodeId:
        """
        Create a new node nested within a path of group titles.

        Groups along the path are created as clusters when missing. A
        ``label`` entry in ``attributes`` is overwritten by ``label``.

        Returns:
            The id of the new node. Ids start at 1 and are never reused.
        """
        node_id = self._next_id
        self._next_id += 1

        node = Node(node_id, normalize_attributes(attributes))
        node.label = label

        self._root.get_or_create_group(groups).add_node(node)

        return node_id

    def node_id_for_label(self, label: str) -> Optional[NodeId]:
        """Return the id of the first node whose label matches, or None."""
        return self._root.find_node_id(label)

    def get_or_create(self, label: str) -> NodeId:
        """Return the id of the node with a label, creating it at the root."""
        node_id = self.node_id_for_label(label)
        if node_id is not None:
            return node_id
        return self.create_node(label)

    def set_attributes(self, node_id: NodeId, attributes: Mapping[str, Any]) -> bool:
        """
        Replace the attributes of a node, keeping its label.

        Returns:
            True if the node was found; unknown ids are ignored.
        """
        new_attributes = normalize_attributes(attributes)

        def update(node: Node) -> None:
            label = node.label
            node.attributes = dict(new_attributes)
            node.label = label

        return self._root.with_node_id(node_id, update)

    def node_count(self) -> int:
        return self._root.node_count()

    # Connections

    def _resolve(self, node: NodeRef) -> NodeId:
        if isinstance(node, str):
            return self.get_or_create(node)
        return node

    def add_connection(
        self,
        source: NodeRef,
        target: NodeRef,
        label: Optional[str] = None,
        color: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Add a connection between two nodes.

        Nodes may be given as ids or as labels. Labels are looked up with
        get_or_create(), so unknown labels create new nodes at the root.

        The connection is placed in the first common ancestor group of its
        two nodes, or in the root group if either node is unknown.

        Args:
            source: Id or label of the source node
            target: Id or label of the target node
            label: Optional connection label (overrides ``attributes``)
            color: Optional connection color (overrides ``attributes``)
            attributes: Additional connection attributes
        """
        from_id = self._resolve(source)
        to_id = self._resolve(target)

        connection = Connection(from_id, to_id, normalize_attributes(attributes))
        if label is not None:
            connection.label = label
        if color is not None:
            connection.color = color

        self._root.add_connection(connection)

    def connection_count(self) -> int:
        return self._root.connection_count()

    # Ranks

    def group_as_rank(self, node_ids: Iterable[NodeId], rank: Union[Rank, str]) -> None:
        """
        Group nodes under a rank constraint.

        The nodes are first moved, with their connections, to the first
        common ancestor of their groups. They are then placed in a new
        anonymous group with ``rank = "<rank>"`` inside that ancestor, while
        their connections stay at the ancestor level.
        """
        rank = Rank(rank)
        node_ids = list(node_ids)
        if not node_ids:
            return

        self._root.move_nodes_to_common_ancestor(node_ids)
        group = self._root.find_group_for_node(node_ids[0])
        if group is None:
            return

        rank_group = Group(kind=GroupKind.ANONYMOUS)
        rank_group.attributes["rank"] = AttributeValue.string(rank.value)

        nodes = group.remove_nodes(node_ids, remove_connections=False)
        rank_group.add_nodes(nodes)

        group.add_subgroup(rank_group)

    # Generation

    def generate_file(
        self,
        options: Optional[RenderOptions] = None,
        **overrides: Any,
    ) -> str:
        """
        Generate the DOT document for this graph.

        The live graph is never modified; simplification works on a copy.

        Args:
            options: Render options; defaults to RenderOptions()
            **overrides: Individual RenderOptions fields to override,
                e.g. ``simplify_groups=False`` or ``debug=True``

        Returns:
            The DOT text, with no leading or trailing whitespace.
        """
        options = options or RenderOptions()
        if overrides:
            options = replace(options, **overrides)

        trace: Optional[RenderTrace] = None
        if options.debug:
            trace = RenderTrace(graph_name=self.name, rank_dir=self.rank_dir.value)
            trace.add_stage("input", self._tree_stats(self._root))

        if options.simplify_groups:
            root = self._root.simplify()
            if trace is not None:
                trace.add_stage("simplified", self._tree_stats(root))
        else:
            root = self._root
            if trace is not None:
                trace.add_stage("simplified", {"skipped": True})

        out = StringOutput()

        header = "digraph"
        if self.name is not None:
            header += f" {self.name}"

        renderer = GroupRenderer(out, options)

        with out.block(header):
            spacer = out.spacer(disabled=True)

            attr = render_bracketed(
                self._graph_attributes(), _default_graph_attributes()
            )
            if attr:
                out.line(f"graph {attr}")
                spacer.reset()

            renderer.render(root, spacer)

        result = out.render().strip()

        if trace is not None:
            trace.add_stage(
                "rendered",
                {
                    "lines": len(result.split("\n")),
                    "clusters": renderer.cluster_count,
                },
                output=result,
            )
        self._trace = trace

        return result

    def get_trace(self) -> Optional[RenderTrace]:
        """Return the trace of the last generate_file() call made with debug on."""
        return self._trace

    @staticmethod
    def _tree_stats(root: Group) -> dict:
        return {
            "groups": root.group_count(),
            "nodes": root.node_count(),
            "connections": root.connection_count(),
        }

    # Analysis

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export nodes and connections as a networkx MultiDiGraph.

        Nodes are keyed by id; node and edge attributes hold the raw
        attribute text. Group structure is not exported.
        """
        result = nx.MultiDiGraph(name=self.name or "")

        def add_node(node: Node) -> bool:
            result.add_node(node.id, **_raw_attributes(node.attributes))
            return True

        def add_edge(connection: Connection, group: Group) -> bool:
            result.add_edge(
                connection.from_id,
                connection.to_id,
                **_raw_attributes(connection.attributes),
            )
            return True

        self._root.visit_nodes(add_node)
        self._root.visit_connections(add_edge)
        return result


def _raw_attributes(attributes: Attributes) -> dict:
    return {key: value.raw_value for key, value in attributes.items()}


def create_graph(
    connections: List[Tuple[str, str]],
    name: Optional[str] = None,
) -> Graph:
    """
    Create a Graph from a list of connections between labels.

    Args:
        connections: List of (source, target) label tuples
        name: Optional graph name

    Returns:
        Graph object
    """
    graph = Graph(name=name)
    for source, target in connections:
        graph.add_connection(source, target)
    return graph
