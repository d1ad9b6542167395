# src/logicgraph/nodes/core/edge.py
"""Directed link between an output port and an input port."""
from __future__ import annotations

import functools
from typing import Any, Callable, Dict, Mapping, Optional

from ...core.cache import Cache
from ...core.events import EventEmitter
from ...core.exceptions import IncompatiblePortsError, NodeNotFoundError, PortNotFoundError
from ...core.types import Bounds, Point, PortKind
from ..base.node import Node
from ..base.port import Port


class Edge(EventEmitter):
    """
    Edge between two existing ports, resolved by id at construction time.

    The edge never owns its endpoints: ports and nodes stay owned by the graph
    and their nodes. `listeners` are attached before `connected` fires from the
    constructor; each is called with the edge as its first argument.

    Cached geometry (`bounds`, `source_position`, `target_position`) is not
    refreshed when an endpoint node moves. Whoever moves the node must call
    `invalidate()`.
    """

    def __init__(
        self,
        edge_id: str,
        source_port_id: str,
        target_port_id: str,
        port_lookup: Mapping[str, Port],
        node_lookup: Mapping[str, Node],
        listeners: Optional[Mapping[str, Callable[..., None]]] = None,
    ) -> None:
        super().__init__()
        source = port_lookup.get(source_port_id)
        if source is None:
            raise PortNotFoundError(f"edge {edge_id!r}: source port {source_port_id!r} not found")
        target = port_lookup.get(target_port_id)
        if target is None:
            raise PortNotFoundError(f"edge {edge_id!r}: target port {target_port_id!r} not found")

        source_node = node_lookup.get(source.owner_node_id)
        if source_node is None:
            raise NodeNotFoundError(f"edge {edge_id!r}: node {source.owner_node_id!r} not found")
        target_node = node_lookup.get(target.owner_node_id)
        if target_node is None:
            raise NodeNotFoundError(f"edge {edge_id!r}: node {target.owner_node_id!r} not found")

        if not source.can_connect(target) or source.kind is PortKind.input:
            raise IncompatiblePortsError(
                f"edge {edge_id!r}: cannot connect {source.kind.value} {source.id!r} "
                f"to {target.kind.value} {target.id!r}"
            )

        self._id = str(edge_id)
        self._source_port = source
        self._target_port = target
        self._source_node = source_node
        self._target_node = target_node
        self._cache = Cache()

        for event, callback in (listeners or {}).items():
            self.on(event, functools.partial(callback, self))

        self.emit("connected", source, target)

    # ---------- Identity / endpoints ----------

    @property
    def id(self) -> str:
        return self._id

    def get_id(self) -> str:
        return self._id

    @property
    def source_port(self) -> Port:
        return self._source_port

    @property
    def target_port(self) -> Port:
        return self._target_port

    @property
    def source_node(self) -> Node:
        return self._source_node

    @property
    def target_node(self) -> Node:
        return self._target_node

    def touches_node(self, node_id: str) -> bool:
        return self._source_node.id == node_id or self._target_node.id == node_id

    def touches_port(self, port_id: str) -> bool:
        return self._source_port.id == port_id or self._target_port.id == port_id

    # ---------- Geometry ----------

    def get_source_position(self) -> Point:
        return self._cache.use_cache(
            "source_position", lambda: self._source_node.port_position(self._source_port)
        )

    def get_target_position(self) -> Point:
        return self._cache.use_cache(
            "target_position", lambda: self._target_node.port_position(self._target_port)
        )

    def get_bounds(self) -> Bounds:
        return self._cache.use_cache(
            "bounds",
            lambda: Bounds.from_points(self.get_source_position(), self.get_target_position()),
        )

    def invalidate(self) -> None:
        """Drop cached geometry after an endpoint node moved or resized."""
        self._cache.clear("source_position")
        self._cache.clear("target_position")
        self._cache.clear("bounds")

    # ---------- Behaviour ----------

    def validate(self) -> bool:
        """Endpoints are still an output feeding an input."""
        return (
            self._source_port.kind is PortKind.output
            and self._source_port.can_connect(self._target_port)
        )

    def transfer(self) -> bool:
        """Copy the source port's value onto the target port. Returns False if invalid."""
        if not self.validate():
            return False
        self._target_port.set_value(self._source_port.value)
        return True

    def disconnect(self) -> None:
        """Announce disconnection; the owning graph drops the edge itself."""
        self.emit("disconnected", self._id)

    # ---------- Serialization ----------

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "sourcePortId": self._source_port.id,
            "targetPortId": self._target_port.id,
        }

    def __repr__(self) -> str:
        return f"<Edge id={self._id!r} {self._source_port.id!r} -> {self._target_port.id!r}>"
