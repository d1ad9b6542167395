# src/logicgraph/nodes/core/graph.py
"""Graph aggregate: owns nodes and edges, keeps both spatial indexes in step."""
from __future__ import annotations

import functools
import logging
from collections.abc import Mapping as MappingABC
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ...config.types import GraphConfig
from ...core.events import EventEmitter
from ...core.exceptions import (
    DuplicateIdError,
    IndexBoundsError,
    LogicGraphError,
    PortNotFoundError,
)
from ...core.schema import EdgeDocument, GraphDocument, NodeDocument, parse
from ...core.types import Bounds, Point, PortKind
from ...spatial.quadtree import QuadTree
from ..base.node import Node
from ..base.port import Port
from .edge import Edge

logger = logging.getLogger(__name__)

Region = Union[Bounds, Mapping[str, float]]


def _region(region: Region) -> Bounds:
    return region if isinstance(region, Bounds) else Bounds.from_dict(region)


class _GraphPorts(MappingABC):
    """Read-only port_id -> Port view over every node of a graph."""

    def __init__(self, graph: "Graph") -> None:
        self._graph = graph

    def __getitem__(self, port_id: str) -> Port:
        port = self._graph.get_port(port_id)
        if port is None:
            raise KeyError(port_id)
        return port

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._graph._port_owner))

    def __len__(self) -> int:
        return len(self._graph._port_owner)


class Graph(EventEmitter):
    """
    Sole owner of every Node and Edge of one diagram.

    - Nodes and edges live in id-keyed maps, in insertion order.
    - `node_index` / `edge_index` hold exactly one entry per entity, refreshed
      whenever a node moves or resizes (incident edges are refreshed with it).
    - Entity events are re-broadcast as graph events: node:added, node:removed,
      node:moving, node:moved, node:resized, edge:added, edge:removed,
      port:added, port:removed, port:connected, port:disconnected.

    Supports len(), iteration over nodes and membership by node id or Node.
    """

    def __init__(self, graph_id: str, name: str = "", config: Optional[GraphConfig] = None) -> None:
        super().__init__()
        self._id = str(graph_id)
        self._name = str(name or "")
        self._config = config or GraphConfig()
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._port_owner: Dict[str, str] = {}           # port id -> node id
        self._incident: Dict[str, Dict[str, None]] = {}  # node id -> ordered edge ids
        self._node_listeners: Dict[str, Dict[str, Any]] = {}
        self.node_index = self._make_index()
        self.edge_index = self._make_index()

    def _make_index(self) -> QuadTree:
        cfg = self._config
        return QuadTree(cfg.world, max_items=cfg.quadtree_max_items, max_depth=cfg.quadtree_max_depth)

    @classmethod
    def from_document(cls, data: Union[GraphDocument, Mapping[str, Any]], config: Optional[GraphConfig] = None) -> "Graph":
        doc = parse(GraphDocument, data)
        graph = cls(doc.id, doc.name, config)
        graph.from_json(doc)
        return graph

    # -------- identity --------
    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> GraphConfig:
        return self._config

    # -------- accessors --------
    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def get_port(self, port_id: str) -> Optional[Port]:
        owner = self._port_owner.get(port_id)
        if owner is None:
            return None
        node = self._nodes.get(owner)
        return node.get_port(port_id) if node is not None else None

    def get_nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def get_edges(self) -> List[Edge]:
        return list(self._edges.values())

    def get_edges_for_node(self, node_id: str) -> List[Edge]:
        return [self._edges[eid] for eid in self._incident.get(node_id, ())]

    def ports(self) -> Mapping[str, Port]:
        return _GraphPorts(self)

    def _owns_port(self, port: Port) -> bool:
        return self.get_port(port.id) is port

    # -------- nodes --------
    def create_node(self, data: Union[NodeDocument, Mapping[str, Any]]) -> Node:
        doc = parse(NodeDocument, data)
        if doc.id in self._nodes:
            raise DuplicateIdError(f"node {doc.id!r} already exists in graph {self._id!r}")
        node = Node(doc, default_size=(self._config.node_width, self._config.node_height))
        for port in node.iter_ports():
            if port.id in self._port_owner:
                raise DuplicateIdError(
                    f"port {port.id!r} of node {node.id!r} already belongs to node {self._port_owner[port.id]!r}"
                )

        self._nodes[node.id] = node
        if not self.node_index.insert(node.id, node.get_bounds()):
            del self._nodes[node.id]
            raise IndexBoundsError(f"node {node.id!r} bounds {node.get_bounds()} lie outside {self._config.world}")

        for port in node.iter_ports():
            self._port_owner[port.id] = node.id
        self._incident[node.id] = {}
        self._wire_node(node)
        logger.debug("graph %s: added node %s", self._id, node.id)
        self.emit("node:added", node)
        return node

    def _wire_node(self, node: Node) -> None:
        listeners = {
            "moving": functools.partial(self._on_node_moving, node),
            "moved": functools.partial(self._on_node_moved, node),
            "resizing": functools.partial(self._on_node_resizing, node),
            "resized": functools.partial(self._on_node_resized, node),
            "port:adding": functools.partial(self._on_port_adding, node),
            "port:added": functools.partial(self._on_port_added, node),
            "port:removed": functools.partial(self._on_port_removed, node),
        }
        for event, callback in listeners.items():
            node.on(event, callback)
        self._node_listeners[node.id] = listeners

    def _unwire_node(self, node: Node) -> None:
        for event, callback in self._node_listeners.pop(node.id, {}).items():
            node.off(event, callback)

    def remove_node(self, node_id: str) -> bool:
        node = self._nodes.get(node_id)
        if node is None:
            return False
        self.node_index.remove(node_id)
        # edges first, so nothing can observe an edge pointing at a removed node
        for edge_id in list(self._incident.get(node_id, ())):
            self.remove_edge(edge_id)
        self._unwire_node(node)
        for port in node.iter_ports():
            if self._port_owner.get(port.id) == node_id:
                del self._port_owner[port.id]
        self._incident.pop(node_id, None)
        del self._nodes[node_id]
        logger.debug("graph %s: removed node %s", self._id, node_id)
        self.emit("node:removed", node_id)
        return True

    def move_node(self, node_id: str, x: float, y: float) -> Optional[Node]:
        node = self._nodes.get(node_id)
        if node is None:
            return None
        node.set_position(x, y)
        return node

    # -------- node listeners --------
    def _on_node_moving(self, node: Node, x: float, y: float) -> None:
        width, height = node.size
        self._check_fits(node, x, y, width, height)
        self.emit("node:moving", node, x, y)

    def _on_node_resizing(self, node: Node, width: float, height: float) -> None:
        pos = node.get_position()
        self._check_fits(node, pos.x, pos.y, width, height)

    def _check_fits(self, node: Node, x: float, y: float, width: float, height: float) -> None:
        """Raise IndexBoundsError if `node` or an incident edge would leave the world."""
        world = self._config.world

        def end(port: Port, owner: Node) -> Point:
            if owner is node:
                return node.port_position_at(port, x, y, width)
            return owner.port_position(port)

        target = node.bounds_at(x, y, width, height)
        if not world.contains(target):
            raise IndexBoundsError(
                f"node {node.id!r} at ({x}, {y}) sized {width}x{height}: {target} leaves {world}"
            )
        for edge in self.get_edges_for_node(node.id):
            bounds = Bounds.from_points(end(edge.source_port, edge.source_node), end(edge.target_port, edge.target_node))
            if not world.contains(bounds):
                raise IndexBoundsError(
                    f"node {node.id!r} at ({x}, {y}) would stretch edge {edge.id!r} to {bounds}, outside {world}"
                )

    def _on_node_moved(self, node: Node, x: float, y: float) -> None:
        self._reindex_node(node)
        self.emit("node:moved", node, x, y)

    def _on_node_resized(self, node: Node, width: float, height: float) -> None:
        self._reindex_node(node)
        self.emit("node:resized", node, width, height)

    def _on_port_adding(self, node: Node, port: Port) -> None:
        owner = self._port_owner.get(port.id)
        if owner is not None and owner != node.id:
            raise DuplicateIdError(f"port {port.id!r} added to node {node.id!r} already belongs to node {owner!r}")

    def _on_port_added(self, node: Node, port: Port) -> None:
        self._port_owner[port.id] = node.id
        self.emit("port:added", port)

    def _on_port_removed(self, node: Node, port_id: str) -> None:
        for edge_id in list(self._incident.get(node.id, ())):
            edge = self._edges.get(edge_id)
            if edge is not None and edge.touches_port(port_id):
                self.remove_edge(edge_id)
        if self._port_owner.get(port_id) == node.id:
            del self._port_owner[port_id]
        self.emit("port:removed", port_id)

    def _reindex_node(self, node: Node) -> None:
        self.node_index.remove(node.id)
        if not self.node_index.insert(node.id, node.get_bounds()):
            logger.error("graph %s: node %s no longer fits the index", self._id, node.id)
            raise IndexBoundsError(f"node {node.id!r} bounds {node.get_bounds()} lie outside {self._config.world}")
        for edge in self.get_edges_for_node(node.id):
            edge.invalidate()
            self._reindex_edge(edge)

    def _reindex_edge(self, edge: Edge) -> None:
        self.edge_index.remove(edge.id)
        if not self.edge_index.insert(edge.id, edge.get_bounds()):
            logger.error("graph %s: edge %s no longer fits the index", self._id, edge.id)
            raise IndexBoundsError(f"edge {edge.id!r} bounds {edge.get_bounds()} lie outside {self._config.world}")

    # -------- edges --------
    def create_edge(
        self,
        data: Union[EdgeDocument, Mapping[str, Any]],
        port_lookup: Optional[Mapping[str, Port]] = None,
    ) -> Edge:
        """
        Build an edge from {id, sourcePortId, targetPortId}.
        `port_lookup` defaults to every port in the graph; ports it yields must
        belong to nodes of this graph.
        """
        doc = parse(EdgeDocument, data)
        if doc.id in self._edges:
            raise DuplicateIdError(f"edge {doc.id!r} already exists in graph {self._id!r}")
        lookup = self.ports() if port_lookup is None else port_lookup
        for port_id in (doc.source_port_id, doc.target_port_id):
            port = lookup.get(port_id)
            if port is not None and not self._owns_port(port):
                raise PortNotFoundError(f"edge {doc.id!r}: port {port_id!r} is not part of graph {self._id!r}")
        self._check_edge_fits(doc.id, lookup.get(doc.source_port_id), lookup.get(doc.target_port_id))

        edge = Edge(
            doc.id,
            doc.source_port_id,
            doc.target_port_id,
            lookup,
            self._nodes,
            listeners={
                "connected": self._on_edge_connected,
                "disconnected": self._on_edge_disconnected,
            },
        )

        if not self.edge_index.insert(edge.id, edge.get_bounds()):
            edge.disconnect()
            raise IndexBoundsError(f"edge {edge.id!r} bounds {edge.get_bounds()} lie outside {self._config.world}")
        self._edges[edge.id] = edge
        self._incident[edge.source_node.id][edge.id] = None
        self._incident[edge.target_node.id][edge.id] = None
        logger.debug("graph %s: added edge %s", self._id, edge.id)
        self.emit("edge:added", edge)
        return edge

    def _check_edge_fits(self, edge_id: str, source: Optional[Port], target: Optional[Port]) -> None:
        """
        Reject an edge whose bounds would leave the world before it is built,
        so observers never see `port:connected` for it. Unresolved or
        incompatible endpoints are left for Edge to report.
        """
        if source is None or target is None:
            return
        if source.kind is not PortKind.output or target.kind is not PortKind.input:
            return
        bounds = Bounds.from_points(
            self._nodes[source.owner_node_id].port_position(source),
            self._nodes[target.owner_node_id].port_position(target),
        )
        if not self._config.world.contains(bounds):
            raise IndexBoundsError(f"edge {edge_id!r} bounds {bounds} lie outside {self._config.world}")

    def add_edge(self, source_port: Port, target_port: Port) -> Optional[Edge]:
        """Connect two ports. Returns None instead of raising when no edge can be made."""
        if not source_port.can_connect(target_port):
            return None
        data = {
            "id": f"edge-{source_port.id}-{target_port.id}",
            "sourcePortId": source_port.id,
            "targetPortId": target_port.id,
        }
        try:
            return self.create_edge(data, {source_port.id: source_port, target_port.id: target_port})
        except IndexBoundsError:
            raise
        except LogicGraphError as e:
            logger.debug("graph %s: no edge %s -> %s: %s", self._id, source_port.id, target_port.id, e)
            return None

    def connect_ports(self, source_port_id: str, target_port_id: str) -> Optional[Edge]:
        source = self.get_port(source_port_id)
        target = self.get_port(target_port_id)
        if source is None or target is None:
            return None
        return self.add_edge(source, target)

    def remove_edge(self, edge_id: str) -> bool:
        edge = self._edges.get(edge_id)
        if edge is None:
            return False
        self.edge_index.remove(edge_id)
        edge.disconnect()
        del self._edges[edge_id]
        for node_id in (edge.source_node.id, edge.target_node.id):
            self._incident.get(node_id, {}).pop(edge_id, None)
        edge.remove_all_listeners()
        logger.debug("graph %s: removed edge %s", self._id, edge_id)
        self.emit("edge:removed", edge_id)
        return True

    # -------- edge listeners --------
    def _on_edge_connected(self, edge: Edge, source: Port, target: Port) -> None:
        self.emit("port:connected", edge)

    def _on_edge_disconnected(self, edge: Edge, edge_id: str) -> None:
        self.emit("port:disconnected", edge_id)

    # -------- batch --------
    def add_nodes(self, items: Iterable[Union[NodeDocument, Mapping[str, Any]]]) -> List[Node]:
        created: List[Node] = []
        for data in items:
            try:
                created.append(self.create_node(data))
            except LogicGraphError as e:
                logger.warning("graph %s: skipped node: %s", self._id, e)
        return created

    def remove_nodes(self, node_ids: Iterable[str]) -> List[str]:
        return [nid for nid in list(node_ids) if self.remove_node(nid)]

    def add_edges(self, pairs: Iterable[Tuple[Port, Port]]) -> List[Edge]:
        created: List[Edge] = []
        for source, target in pairs:
            try:
                edge = self.add_edge(source, target)
            except LogicGraphError as e:
                logger.warning("graph %s: skipped edge %s -> %s: %s", self._id, source.id, target.id, e)
                continue
            if edge is not None:
                created.append(edge)
        return created

    def remove_edges(self, edge_ids: Iterable[str]) -> List[str]:
        return [eid for eid in list(edge_ids) if self.remove_edge(eid)]

    def clear(self) -> None:
        self.node_index.clear()
        self.edge_index.clear()
        for edge_id in list(self._edges):
            self.remove_edge(edge_id)
        for node_id in list(self._nodes):
            self.remove_node(node_id)

    # -------- spatial queries --------
    def get_nodes_in_bounds(self, region: Region) -> List[Node]:
        hits = self.node_index.query(_region(region))
        return [self._nodes[item.id] for item in hits if item.id in self._nodes]

    def get_edges_in_bounds(self, region: Region) -> List[Edge]:
        hits = self.edge_index.query(_region(region))
        return [self._edges[item.id] for item in hits if item.id in self._edges]

    # -------- integrity --------
    def validate(self) -> List[str]:
        """Describe every broken invariant; an empty list means the graph is consistent."""
        problems: List[str] = []
        for node in self._nodes.values():
            item = self.node_index.find(node.id)
            if item is None:
                problems.append(f"node {node.id} missing from node index")
            elif item.bounds != node.get_bounds():
                problems.append(f"node {node.id} indexed at stale bounds {item.bounds}")
        for edge in self._edges.values():
            for role, n in (("source", edge.source_node), ("target", edge.target_node)):
                if self._nodes.get(n.id) is not n:
                    problems.append(f"edge {edge.id} {role} node {n.id} not in graph")
            for role, p in (("source", edge.source_port), ("target", edge.target_port)):
                if not self._owns_port(p):
                    problems.append(f"edge {edge.id} {role} port {p.id} not in graph")
            item = self.edge_index.find(edge.id)
            if item is None:
                problems.append(f"edge {edge.id} missing from edge index")
            elif item.bounds != edge.get_bounds():
                problems.append(f"edge {edge.id} indexed at stale bounds {item.bounds}")
        if len(self.node_index) != len(self._nodes):
            problems.append(f"node index holds {len(self.node_index)} entries for {len(self._nodes)} nodes")
        if len(self.edge_index) != len(self._edges):
            problems.append(f"edge index holds {len(self.edge_index)} entries for {len(self._edges)} edges")
        return problems

    # -------- serialization --------
    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "name": self._name,
            "nodes": [n.to_json() for n in self._nodes.values()],
            "edges": [e.to_json() for e in self._edges.values()],
        }

    def from_json(self, data: Union[GraphDocument, Mapping[str, Any]]) -> None:
        """Replace the whole graph with `data`. Edges whose ports are missing are skipped."""
        doc = parse(GraphDocument, data)
        self.clear()
        self._id = doc.id
        self._name = doc.name
        port_lookup: Dict[str, Port] = {}
        for ndoc in doc.nodes:
            node = self.create_node(ndoc)
            for port in node.iter_ports():
                port_lookup[port.id] = port
        for edoc in doc.edges:
            try:
                self.create_edge(edoc, port_lookup)
            except IndexBoundsError:
                raise
            except LogicGraphError as e:
                logger.warning("graph %s: edge %s not restored: %s", self._id, edoc.id, e)

    # -------- Python container protocol --------
    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Node):
            return self._nodes.get(key.id) is key
        return isinstance(key, str) and key in self._nodes

    def __repr__(self) -> str:
        return f"<Graph id={self._id!r} nodes={len(self._nodes)} edges={len(self._edges)}>"
