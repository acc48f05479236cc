"""Incrementally expanded linked-data graph and its render synchronization."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from ldexplorer.data_processing import DataSource
from ldexplorer.models import Edge, EdgeKey, Node, Position, PropertyRef, Properties, SinkSnapshot
from ldexplorer.sink import DataSet, DuplicateIdentityError


class Graph:
    """
    Authoritative store of every node and edge seen so far.

    Nodes and edges are only ever added; expansion toggles `visible`. The
    `nodes_view` / `edges_view` data sets are derived from the store by
    `synchronize` and can be handed to a renderer.
    """

    def __init__(
        self,
        source: DataSource,
        *,
        nodes_view: Optional[DataSet] = None,
        edges_view: Optional[DataSet] = None,
        coalesce_fetches: bool = False,
    ) -> None:
        self.source = source
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[EdgeKey, Edge] = {}
        self.nodes_view = nodes_view if nodes_view is not None else DataSet()
        self.edges_view = edges_view if edges_view is not None else DataSet()
        self.coalesce_fetches = coalesce_fetches
        self._pending: Dict[str, asyncio.Task] = {}
        self.synchronize()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def get_or_create_node(
        self,
        uri: str,
        label: str = "",
        visible: bool = False,
        position: Optional[Position] = None,
    ) -> Node:
        node = self.nodes.get(uri)
        if node is None:
            node = Node(
                id=uri,
                label=label,
                visible=visible,
                position=Position(position.x, position.y) if position else Position(),
            )
            self.nodes[uri] = node
        return node

    def create_edge(self, source: str, predicate: str, target: str, label: str) -> bool:
        key = EdgeKey(source, predicate, target)
        if key in self.edges:
            return False
        self.edges[key] = Edge(source=source, predicate=predicate, target=target, label=label)
        return True

    # ------------------------------------------------------------------
    # Visibility & reconciliation
    # ------------------------------------------------------------------

    def is_edge_visible(self, edge: Edge) -> bool:
        source = self.nodes.get(edge.source)
        target = self.nodes.get(edge.target)
        if source is None or target is None or source is target:
            return False
        return source.visible and target.visible

    def visible_nodes(self) -> List[Node]:
        return [node for node in self.nodes.values() if node.visible]

    def visible_edges(self) -> List[Edge]:
        return [edge for edge in self.edges.values() if self.is_edge_visible(edge)]

    def synchronize(self) -> SinkSnapshot:
        """
        Make the view data sets mirror the visible subgraph.

        Items already in a view are left as they are, so label or position
        changes on a node that stays visible are not pushed to the renderer.
        """
        _reconcile(self.nodes_view, self.visible_nodes())
        _reconcile(self.edges_view, self.visible_edges())
        return SinkSnapshot(nodes=list(self.nodes_view), edges=list(self.edges_view))

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    async def load_properties(self, uri: str) -> None:
        triples = await self.source.fetch_properties(uri)
        if triples:
            node = self.get_or_create_node(uri, triples[0].subject.label, True)
            node.visible = True
            node.label = triples[0].subject.label
            node.fetched = True
        for triple in triples:
            self.get_or_create_node(triple.object.value, triple.object.label)
            self.create_edge(uri, triple.predicate.value, triple.object.value, triple.predicate.label)
        logging.debug("Loaded %s propert(ies) for %s", len(triples), uri)

    async def get_properties(self, uri: str) -> Properties:
        node = self.get_or_create_node(uri, "", True)
        if not node.fetched:
            if self.coalesce_fetches:
                await self._load_properties_once(uri)
            else:
                await self.load_properties(node.id)

        properties: Properties = {}
        for edge in self.edges.values():
            if edge.source != uri and edge.target != uri:
                continue
            properties.setdefault(edge.predicate, []).append(
                PropertyRef(label=edge.label, predicate_uri=edge.predicate)
            )
        return properties

    async def load_data(self, uri: str, predicate: str, position: Optional[Position] = None) -> SinkSnapshot:
        position = position or Position()
        triples = await self.source.fetch_data(uri, predicate)

        for triple in triples:
            node = self.get_or_create_node(triple.object.value, triple.object.label, True, position)
            node.position = Position(position.x, position.y)
            node.visible = True
            self.create_edge(uri, predicate, triple.object.value, triple.predicate.label)

        logging.debug("Expanded %s along %s: %s object(s)", uri, predicate, len(triples))
        return self.synchronize()

    async def _load_properties_once(self, uri: str) -> None:
        task = self._pending.get(uri)
        if task is None:
            task = asyncio.ensure_future(self.load_properties(uri))
            self._pending[uri] = task
            task.add_done_callback(lambda t: self._forget_pending(uri, t))
        await asyncio.shield(task)

    def _forget_pending(self, uri: str, task: asyncio.Task) -> None:
        if self._pending.get(uri) is task:
            del self._pending[uri]
        if not task.cancelled():
            # mark the error retrieved; awaiting callers still see it
            task.exception()


def _reconcile(view: DataSet, items: list) -> None:
    for item in items:
        try:
            view.add(item)
        except DuplicateIdentityError:
            pass

    wanted = {view.identity(item) for item in items}
    stale = [ident for ident in view.get_ids() if ident not in wanted]
    for ident in stale:
        view.remove(ident)
