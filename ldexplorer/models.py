"""Data models for graph structures."""

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple


class EdgeKey(NamedTuple):
    source: str
    predicate: str
    target: str


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(eq=False)
class Node:
    id: str
    label: str = ""
    visible: bool = False
    fetched: bool = False
    position: Position = field(default_factory=Position)

    @property
    def key(self) -> str:
        return self.id


@dataclass(eq=False)
class Edge:
    source: str
    predicate: str
    target: str
    label: str = ""

    @property
    def key(self) -> EdgeKey:
        return EdgeKey(self.source, self.predicate, self.target)


@dataclass(frozen=True)
class Term:
    value: str
    label: str = ""


@dataclass(frozen=True)
class Triple:
    subject: Term
    predicate: Term
    object: Term


@dataclass(frozen=True)
class PropertyRef:
    """One incident edge of a node, reduced to its relationship type."""

    label: str
    predicate_uri: str


Properties = Dict[str, List[PropertyRef]]


@dataclass
class SinkSnapshot:
    nodes: List[Node]
    edges: List[Edge]
