"""Incremental linked-data graph exploration."""

from ldexplorer.graph import Graph
from ldexplorer.models import Edge, Node, Position, PropertyRef, SinkSnapshot, Term, Triple

__all__ = [
    "Graph",
    "Node",
    "Edge",
    "Position",
    "PropertyRef",
    "SinkSnapshot",
    "Term",
    "Triple",
]
