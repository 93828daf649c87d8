"""
Group tree for graph generation.

A graph is organized as a tree of groups. Each group owns its subgroups, the
nodes placed directly in it, and the connections whose closest common
ancestor it is. Groups keep a weak reference to their parent, which is only
used to walk upwards when computing common ancestors.

All traversals are breadth-first: a group's own nodes and connections are
visited before its subgroups, and subgroups are visited in insertion order.
"""

import weakref
from collections import deque
from typing import Callable, Iterable, List, Optional, Sequence, Set, Union

from .attributes import AttributeValue, Attributes
from .models import LABEL, Connection, GroupKind, Node, NodeId


class Group:
    """
    A group of node definitions, rendered as a block in DOT output.

    Attributes:
        kind: How the group is emitted (see GroupKind).
        subgroups: Child groups, in render order.
        nodes: Nodes placed directly in this group.
        connections: Connections placed directly in this group.
        attributes: Group attributes; ``"label"`` doubles as the group title.
    """

    def __init__(
        self,
        title: Optional[str] = None,
        kind: GroupKind = GroupKind.CLUSTER,
    ):
        self.kind = kind
        self.subgroups: List["Group"] = []
        self.nodes: List[Node] = []
        self.connections: List[Connection] = []
        self.attributes: Attributes = {}
        self._parent: Optional[weakref.ReferenceType] = None

        self.title = title

    def __repr__(self) -> str:
        return (
            f"Group(title={self.title!r}, kind={self.kind.value}, "
            f"nodes={len(self.nodes)}, connections={len(self.connections)}, "
            f"subgroups={len(self.subgroups)})"
        )

    @property
    def parent(self) -> Optional["Group"]:
        """The containing group, or None for a root or detached group."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def title(self) -> Optional[str]:
        value = self.attributes.get(LABEL)
        return value.raw_value if value is not None else None

    @title.setter
    def title(self, value: Optional[str]) -> None:
        if value is None:
            self.attributes.pop(LABEL, None)
        else:
            self.attributes[LABEL] = AttributeValue.string(value)

    @property
    def is_single_group(self) -> bool:
        """Whether this group only wraps exactly one subgroup."""
        return len(self.subgroups) == 1 and not self.nodes and not self.connections

    @property
    def is_single_node(self) -> bool:
        """Whether this group only holds exactly one node."""
        return not self.subgroups and len(self.nodes) == 1 and not self.connections

    def attributes_except_title(self) -> Attributes:
        """Copy of the attributes with the title removed, used for merging."""
        result = dict(self.attributes)
        result.pop(LABEL, None)
        return result

    # Construction

    def add_subgroup(self, group: "Group") -> None:
        group._parent = weakref.ref(self)
        self.subgroups.append(group)

    def add_node(self, node: Node) -> None:
        self.nodes.append(node)

    def add_nodes(self, nodes: Iterable[Node]) -> None:
        self.nodes.extend(nodes)

    def get_or_create_group(self, path: Sequence[str]) -> "Group":
        """
        Return the group at a path of titles below this group.

        Missing groups along the path are created as clusters.
        """
        group = self
        for title in path:
            for subgroup in group.subgroups:
                if subgroup.title == title:
                    group = subgroup
                    break
            else:
                created = Group(title=title, kind=GroupKind.CLUSTER)
                group.add_subgroup(created)
                group = created
        return group

    def add_connection(self, connection: Connection) -> None:
        """
        Add a connection to the first common ancestor of its two nodes.

        If either node is not in this hierarchy the connection is added to
        this group instead.
        """
        target = self

        source_group = self.find_group_for_node(connection.from_id)
        target_group = self.find_group_for_node(connection.to_id)

        if source_group is not None and target_group is not None:
            ancestor = Group.first_common_ancestor(source_group, target_group)
            if ancestor is not None:
                target = ancestor

        target.connections.append(connection)

    # Removal and relocation

    def remove_node(
        self, node_id: NodeId, remove_connections: bool = True
    ) -> Optional[Node]:
        """
        Remove a node from this group or one of its subgroups.

        Args:
            node_id: Id of the node to remove.
            remove_connections: Also remove every connection in this hierarchy
                that references the node.

        Returns:
            The removed node, or None if it was not found.
        """
        group = self.find_group_for_node(node_id)
        if group is None:
            return None

        for index, node in enumerate(group.nodes):
            if node.id == node_id:
                del group.nodes[index]
                if remove_connections:
                    self.remove_connections_for(node_id)
                return node

        return None

    def remove_nodes(
        self, node_ids: Iterable[NodeId], remove_connections: bool = True
    ) -> List[Node]:
        """Remove several nodes, returning the ones that were found."""
        removed = []
        for node_id in node_ids:
            node = self.remove_node(node_id, remove_connections=remove_connections)
            if node is not None:
                removed.append(node)
        return removed

    def remove_connections_for(self, node_id: NodeId) -> List[Connection]:
        """Remove and return every connection in this hierarchy touching a node."""
        removed: List[Connection] = []

        def strip(group: "Group") -> bool:
            kept = []
            for connection in group.connections:
                if connection.touches(node_id):
                    removed.append(connection)
                else:
                    kept.append(connection)
            group.connections = kept
            return True

        self.visit(strip)
        return removed

    def move_nodes_to_common_ancestor(self, node_ids: Iterable[NodeId]) -> None:
        """
        Move the given nodes into the first common ancestor of their groups.

        Connections touching any of the nodes are moved along with them and
        re-placed at their new common ancestors. If any node is not found in
        this hierarchy nothing is changed.
        """
        node_ids = list(node_ids)

        owners = []
        for node_id in node_ids:
            owner = self.find_group_for_node(node_id)
            if owner is None:
                return
            owners.append(owner)

        ancestor = Group.first_common_ancestor_of(owners) or self
        connections = self.all_connections_of(node_ids)

        for node_id in node_ids:
            node = self.remove_node(node_id)
            if node is None:
                continue
            ancestor.add_node(node)

        for connection in connections:
            self.add_connection(connection)

    def with_node_id(self, node_id: NodeId, mutate: Callable[[Node], None]) -> bool:
        """
        Call ``mutate`` with the node of the given id, if present.

        Returns:
            True if the node was found and the callable invoked.
        """
        node = self.find_node(node_id)
        if node is None:
            return False
        mutate(node)
        return True

    # Lookup

    def find_node(self, node_id: NodeId) -> Optional[Node]:
        return self._find_node(lambda node: node.id == node_id)

    def find_node_id(self, label: str) -> Optional[NodeId]:
        """Return the id of the first node, breadth-first, with a given label."""
        node = self._find_node(lambda node: node.label == label)
        return node.id if node is not None else None

    def _find_node(self, predicate: Callable[[Node], bool]) -> Optional[Node]:
        found: List[Node] = []

        def check(node: Node) -> bool:
            if predicate(node):
                found.append(node)
                return False
            return True

        self.visit_nodes(check)
        return found[0] if found else None

    def find_connection(self, from_id: NodeId, to_id: NodeId) -> Optional[Connection]:
        found: List[Connection] = []

        def check(connection: Connection, group: "Group") -> bool:
            if connection.from_id == from_id and connection.to_id == to_id:
                found.append(connection)
                return False
            return True

        self.visit_connections(check)
        return found[0] if found else None

    def find_group_for_node(self, node_id: NodeId) -> Optional["Group"]:
        """Return the group that directly holds a given node id."""
        found: List[Group] = []

        def check(group: "Group") -> bool:
            if any(node.id == node_id for node in group.nodes):
                found.append(group)
                return False
            return True

        self.visit(check)
        return found[0] if found else None

    def all_connections_of(
        self, node_ids: Union[NodeId, Iterable[NodeId]]
    ) -> List[Connection]:
        """Return every connection in this hierarchy touching one of the node ids."""
        if isinstance(node_ids, int):
            wanted: Set[NodeId] = {node_ids}
        else:
            wanted = set(node_ids)
        result: List[Connection] = []

        def collect(connection: Connection, group: "Group") -> bool:
            if connection.from_id in wanted or connection.to_id in wanted:
                result.append(connection)
            return True

        self.visit_connections(collect)
        return result

    def node_count(self) -> int:
        count = 0

        def tally(node: Node) -> bool:
            nonlocal count
            count += 1
            return True

        self.visit_nodes(tally)
        return count

    def connection_count(self) -> int:
        count = 0

        def tally(connection: Connection, group: "Group") -> bool:
            nonlocal count
            count += 1
            return True

        self.visit_connections(tally)
        return count

    def group_count(self) -> int:
        """Number of groups in this hierarchy, this group included."""
        count = 0

        def tally(group: "Group") -> bool:
            nonlocal count
            count += 1
            return True

        self.visit(tally)
        return count

    # Traversal

    def visit(self, visitor: Callable[["Group"], bool]) -> None:
        """
        Visit every group in this hierarchy breadth-first.

        The visit stops the first time ``visitor`` returns False.
        """
        queue = deque([self])

        while queue:
            group = queue.popleft()
            if visitor(group) is False:
                return
            queue.extend(group.subgroups)

    def visit_nodes(self, visitor: Callable[[Node], bool]) -> None:
        """Visit every node breadth-first, stopping when ``visitor`` returns False."""
        queue = deque([self])

        while queue:
            group = queue.popleft()
            for node in group.nodes:
                if visitor(node) is False:
                    return
            queue.extend(group.subgroups)

    def visit_connections(self, visitor: Callable[[Connection, "Group"], bool]) -> None:
        """
        Visit every connection breadth-first along with the group holding it,
        stopping when ``visitor`` returns False.
        """
        queue = deque([self])

        while queue:
            group = queue.popleft()
            for connection in group.connections:
                if visitor(connection, group) is False:
                    return
            queue.extend(group.subgroups)

    # Ancestry

    def is_descendant_of(self, other: "Group") -> bool:
        """Whether ``other`` is this group or one of its ancestors."""
        group: Optional[Group] = self
        while group is not None:
            if group is other:
                return True
            group = group.parent
        return False

    @staticmethod
    def first_common_ancestor(first: "Group", second: "Group") -> Optional["Group"]:
        """
        Return the deepest group containing both groups, inclusive.

        Returns None if the groups are not part of the same tree.
        """
        if first is second:
            return first

        candidate: Optional[Group] = first
        while candidate is not None:
            if second.is_descendant_of(candidate):
                return candidate
            candidate = candidate.parent

        return None

    @staticmethod
    def first_common_ancestor_of(groups: Sequence["Group"]) -> Optional["Group"]:
        if not groups:
            return None

        common = groups[0]
        for group in groups[1:]:
            ancestor = Group.first_common_ancestor(group, common)
            if ancestor is None:
                return None
            common = ancestor

        return common

    # Copying and simplification

    def _copy_shallow(self) -> "Group":
        """New detached group with copies of this group's own content."""
        group = Group(kind=self.kind)
        group.attributes = dict(self.attributes)
        group.nodes = [node.copy() for node in self.nodes]
        group.connections = [connection.copy() for connection in self.connections]
        return group

    def copy(self) -> "Group":
        """Return a deep, independent copy of this hierarchy."""
        group = self._copy_shallow()
        for subgroup in self.subgroups:
            group.add_subgroup(subgroup.copy())
        return group

    def simplify(self) -> "Group":
        """
        Return a new, simplified copy of this hierarchy.

        A group wrapping only a single subgroup is merged with it when their
        attributes, ignoring titles, are equal; titles are joined as
        ``"outer/inner"``. Untitled subgroups that simplify down to a single
        node with attributes matching this group's are unwrapped into this
        group.
        This group is left unchanged.
        """
        own_attributes = self.attributes_except_title()

        if self.is_single_group:
            child = self.subgroups[0].simplify()

            if child.attributes_except_title() != own_attributes:
                group = self._copy_shallow()
                group.add_subgroup(child)
                return group

            if self.title is not None and child.title is not None:
                child.title = f"{self.title}/{child.title}"
            elif self.title is not None:
                child.title = self.title

            return child

        group = self._copy_shallow()

        for subgroup in self.subgroups:
            simplified = subgroup.simplify()

            if subgroup.attributes_except_title() != own_attributes:
                group.add_subgroup(simplified)
            elif simplified.is_single_node and simplified.title is None:
                group.nodes.append(simplified.nodes[0])
            else:
                group.add_subgroup(simplified)

        return group
