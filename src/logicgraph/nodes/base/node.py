# src/logicgraph/nodes/base/node.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ...core.cache import Cache
from ...core.events import EventEmitter
from ...core.exceptions import DocumentError
from ...core.schema import NodeDocument, PortDocument, parse
from ...core.types import Bounds, Point, PortKind
from .port import Port

logger = logging.getLogger(__name__)

DEFAULT_SIZE: Tuple[float, float] = (100.0, 60.0)

PortLike = Union[Port, PortDocument, Mapping[str, Any]]


class Node(EventEmitter):
    """
    Positioned, sized entity owning its input/output ports.

    Events:
    - `moving(x, y)`   before the position changes (old position still readable)
    - `moved(x, y)`    after the change
    - `resizing(w, h)` before a size change
    - `resized(w, h)`  after a size change
    - `port:adding(port)` before a port is attached
    - `port:added(port)` / `port:removed(port_id)`

    Listeners of the pre-change events (`moving`, `resizing`, `port:adding`)
    may veto by raising; the node is left untouched.

    Derived geometry is memoized under the cache keys `position`, `bounds` and
    `ports`. Every mutator below clears the keys it affects; anything else that
    touches node state must do the same.
    """

    def __init__(
        self,
        data: Union[NodeDocument, Mapping[str, Any]],
        default_size: Tuple[float, float] = DEFAULT_SIZE,
    ) -> None:
        super().__init__()
        doc = parse(NodeDocument, data)
        self._id: str = doc.id
        self._name: str = doc.name
        self._type: str = doc.type
        self._x: float = doc.x
        self._y: float = doc.y
        self._width: float = doc.width if doc.width is not None else float(default_size[0])
        self._height: float = doc.height if doc.height is not None else float(default_size[1])
        self._inputs: Dict[str, Port] = {}
        self._outputs: Dict[str, Port] = {}
        self._cache = Cache()

        # nobody can be listening yet, so ports are attached silently
        for pdoc in doc.inputs:
            self._seed(Port.from_document(pdoc, self._id, PortKind.input), self._inputs)
        for pdoc in doc.outputs:
            self._seed(Port.from_document(pdoc, self._id, PortKind.output), self._outputs)

    # ---------- Identity ----------

    @property
    def id(self) -> str:
        return self._id

    def get_id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    @property
    def size(self) -> Tuple[float, float]:
        return self._width, self._height

    # ---------- Geometry ----------

    def get_position(self) -> Point:
        return self._cache.use_cache("position", lambda: Point(self._x, self._y))

    def set_position(self, x: float, y: float) -> None:
        x, y = float(x), float(y)
        self.emit("moving", x, y)
        self._x = x
        self._y = y
        self._cache.clear("position")
        self._cache.clear("bounds")
        self.emit("moved", x, y)

    def get_bounds(self) -> Bounds:
        return self._cache.use_cache(
            "bounds",
            lambda: Bounds.centered(Point(self._x, self._y), self._width, self._height),
        )

    def bounds_at(
        self, x: float, y: float, width: Optional[float] = None, height: Optional[float] = None
    ) -> Bounds:
        """Bounds the node would have at (x, y), optionally resized; not cached."""
        return Bounds.centered(
            Point(float(x), float(y)),
            self._width if width is None else float(width),
            self._height if height is None else float(height),
        )

    def set_size(self, width: float, height: float) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"node {self._id!r}: size must be non-negative, got {width}x{height}")
        width, height = float(width), float(height)
        self.emit("resizing", width, height)
        self._width = width
        self._height = height
        self._cache.clear("bounds")
        self.emit("resized", self._width, self._height)

    def port_offset(self, port: Port, width: Optional[float] = None) -> Point:
        """Explicit offset if the port has one, else the left/right edge midpoint."""
        if port.offset is not None:
            return port.offset
        half = (self._width if width is None else float(width)) / 2
        return Point(-half, 0.0) if port.kind is PortKind.input else Point(half, 0.0)

    def port_position(self, port: Port) -> Point:
        off = self.port_offset(port)
        return self.get_position().offset(off.x, off.y)

    def port_position_at(self, port: Port, x: float, y: float, width: Optional[float] = None) -> Point:
        off = self.port_offset(port, width)
        return Point(float(x) + off.x, float(y) + off.y)

    # ---------- Ports ----------

    def _ports(self) -> Dict[str, List[Port]]:
        return self._cache.use_cache(
            "ports",
            lambda: {
                "inputs": list(self._inputs.values()),
                "outputs": list(self._outputs.values()),
            },
        )

    def get_inputs(self) -> List[Port]:
        return self._ports()["inputs"]

    def get_outputs(self) -> List[Port]:
        return self._ports()["outputs"]

    def get_input(self, port_id: str) -> Optional[Port]:
        return self._inputs.get(port_id)

    def get_output(self, port_id: str) -> Optional[Port]:
        return self._outputs.get(port_id)

    def get_port(self, port_id: str) -> Optional[Port]:
        return self._inputs.get(port_id) or self._outputs.get(port_id)

    def iter_ports(self):
        yield from self._inputs.values()
        yield from self._outputs.values()

    def _coerce_port(self, port: PortLike, kind: PortKind) -> Port:
        if isinstance(port, Port):
            if port.kind is not kind:
                raise DocumentError(f"port {port.id!r} is an {port.kind.value}, expected {kind.value}")
            if port.owner_node_id != self._id:
                raise DocumentError(f"port {port.id!r} belongs to node {port.owner_node_id!r}")
            return port
        return Port.from_document(parse(PortDocument, port), self._id, kind)

    def _check_free(self, port: Port) -> None:
        if port.id in self._inputs or port.id in self._outputs:
            raise DocumentError(f"node {self._id!r} already has a port {port.id!r}")

    def _seed(self, port: Port, table: Dict[str, Port]) -> None:
        self._check_free(port)
        table[port.id] = port

    def _attach(self, port: Port, table: Dict[str, Port]) -> Port:
        self._check_free(port)
        self.emit("port:adding", port)
        table[port.id] = port
        logger.debug("node %s: attached %s port %s", self._id, port.kind.value, port.id)
        self._cache.clear("ports")
        self.emit("port:added", port)
        return port

    def _detach(self, port_id: str, table: Dict[str, Port]) -> Optional[Port]:
        port = table.pop(port_id, None)
        if port is None:
            return None
        self._cache.clear("ports")
        self.emit("port:removed", port_id)
        return port

    def add_input(self, port: PortLike) -> Port:
        return self._attach(self._coerce_port(port, PortKind.input), self._inputs)

    def add_output(self, port: PortLike) -> Port:
        return self._attach(self._coerce_port(port, PortKind.output), self._outputs)

    def remove_input(self, port_id: str) -> Optional[Port]:
        return self._detach(port_id, self._inputs)

    def remove_output(self, port_id: str) -> Optional[Port]:
        return self._detach(port_id, self._outputs)

    # ---------- Serialization ----------

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "name": self._name,
            "type": self._type,
            "x": self._x,
            "y": self._y,
            "width": self._width,
            "height": self._height,
            "inputs": [p.to_json() for p in self.get_inputs()],
            "outputs": [p.to_json() for p in self.get_outputs()],
        }

    def __repr__(self) -> str:
        return f"<Node id={self._id!r} type={self._type!r} pos=({self._x}, {self._y})>"
