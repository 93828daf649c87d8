"""
Data models for graph generation.

This module contains the dataclasses and enums that describe the entities of a
graph: nodes, the connections between them, and the kinds of groups and rank
hints used when rendering DOT output.

Classes:
    Node: A graph node identified by an integer id.
    Connection: A directed connection between two node ids.
    GroupKind: The rendered form of a group block.
    Rank: Rank constraint applied to a group of nodes.
    RankDir: Direction in which ranks are laid out.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .attributes import AttributeValue, Attributes

NodeId = int

LABEL = "label"
COLOR = "color"


def dot_node_id(node_id: NodeId) -> str:
    """Return the textual identifier used for a node id in DOT output."""
    return f"n{node_id}"


class GroupKind(Enum):
    """
    The semantic kind of a group.

    ROOT and ANONYMOUS groups are emitted without a leading keyword, SUBGRAPH
    groups as ``subgraph { }`` and CLUSTER groups as ``subgraph cluster_N { }``.
    """

    ROOT = "root"
    SUBGRAPH = "subgraph"
    CLUSTER = "cluster"
    ANONYMOUS = "anonymous"


class Rank(Enum):
    """Rank constraint for a set of nodes, emitted as the group's ``rank``."""

    SAME = "same"
    MIN = "min"
    SOURCE = "source"
    SINK = "sink"
    MAX = "max"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class RankDir(Enum):
    """Direction of graph layout, emitted as the graph's ``rankdir``."""

    TOP_TO_BOTTOM = "TB"
    LEFT_TO_RIGHT = "LR"
    BOTTOM_TO_TOP = "BT"
    RIGHT_TO_LEFT = "RL"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return None

    @classmethod
    def parse(cls, text: str) -> "RankDir":
        """
        Parse a rank direction code such as ``"LR"`` (case-insensitive).

        Raises:
            ValueError: If the text is not one of TB, LR, BT or RL.
        """
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"rank direction must be one of TB, LR, BT, RL; got {text!r}"
            ) from None


@dataclass
class Node:
    """
    A node in the graph.

    The label is stored in the attribute map under ``"label"``; the
    ``label`` property reads and writes that entry.

    Attributes:
        id: Unique, positive node identifier.
        attributes: Attributes emitted with the node statement.
    """

    id: NodeId
    attributes: Attributes = field(default_factory=dict)

    @property
    def label(self) -> str:
        value = self.attributes.get(LABEL)
        return value.raw_value if value is not None else ""

    @label.setter
    def label(self, value: str) -> None:
        self.attributes[LABEL] = AttributeValue.string(value)

    def copy(self) -> "Node":
        return Node(self.id, dict(self.attributes))

    def __lt__(self, other: "Node") -> bool:
        return self.label < other.label


@dataclass
class Connection:
    """
    A directed connection between two nodes.

    Duplicate connections between the same pair of nodes are allowed.

    Attributes:
        from_id: Id of the source node.
        to_id: Id of the target node.
        attributes: Attributes emitted with the edge statement.
    """

    from_id: NodeId
    to_id: NodeId
    attributes: Attributes = field(default_factory=dict)

    @property
    def label(self) -> Optional[str]:
        return self._get(LABEL)

    @label.setter
    def label(self, value: Optional[str]) -> None:
        self._set(LABEL, value)

    @property
    def color(self) -> Optional[str]:
        return self._get(COLOR)

    @color.setter
    def color(self, value: Optional[str]) -> None:
        self._set(COLOR, value)

    def _get(self, key: str) -> Optional[str]:
        value = self.attributes.get(key)
        return value.raw_value if value is not None else None

    def _set(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self.attributes.pop(key, None)
        else:
            self.attributes[key] = AttributeValue.string(value)

    def touches(self, node_id: NodeId) -> bool:
        """Whether this connection starts or ends at the given node."""
        return self.from_id == node_id or self.to_id == node_id

    def sort_key(self) -> Tuple[int, int, bool, str]:
        """
        Key used to order connections in output.

        Ordered by target id, then source id, then label. Labeled connections
        come before unlabeled ones between the same pair of nodes.
        """
        label = self.label
        return (self.to_id, self.from_id, label is None, label or "")

    def copy(self) -> "Connection":
        return Connection(self.from_id, self.to_id, dict(self.attributes))

    def __lt__(self, other: "Connection") -> bool:
        return self.sort_key() < other.sort_key()
