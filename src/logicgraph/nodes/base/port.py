# src/logicgraph/nodes/base/port.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from ...core.events import EventEmitter
from ...core.exceptions import DocumentError
from ...core.schema import PortDocument
from ...core.types import Point, PortKind


class Port(EventEmitter):
    """
    Typed connection point owned by exactly one Node.

    - `kind`:   PortKind.input or PortKind.output; connections need opposite kinds.
    - `offset`: explicit (dx, dy) from the owner's position, or None to let the
                owner place it on its left (input) or right (output) edge.
    - `value`:  opaque payload; changing it emits `value:changed`.
    """

    def __init__(
        self,
        port_id: str,
        name: str,
        kind: Union[PortKind, str],
        owner_node_id: str,
        value: Any = None,
        offset: Optional[Tuple[float, float]] = None,
    ) -> None:
        super().__init__()
        self._id = str(port_id)
        self._name = str(name or "")
        self._kind = PortKind(kind)
        self._owner_node_id = str(owner_node_id)
        self._value = value
        self._offset: Optional[Point] = Point(*offset) if offset is not None else None

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
    def kind(self) -> PortKind:
        return self._kind

    @property
    def owner_node_id(self) -> str:
        return self._owner_node_id

    # ---------- Geometry ----------

    @property
    def offset(self) -> Optional[Point]:
        """Explicit offset, or None when the owner decides by kind."""
        return self._offset

    # ---------- Value ----------

    @property
    def value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        self._value = value
        self.emit("value:changed", value)

    # ---------- Connectivity ----------

    def can_connect(self, other: "Port") -> bool:
        return self._kind != other.kind

    # ---------- Serialization ----------

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self._id, "name": self._name, "kind": self._kind.value}
        if self._value is not None:
            data["value"] = self._value
        if self._offset is not None:
            data["offset"] = {"dx": self._offset.x, "dy": self._offset.y}
        return data

    @classmethod
    def from_document(cls, doc: PortDocument, owner_node_id: str, kind: PortKind) -> "Port":
        """Build a port from a validated document; the owner's list decides the kind."""
        if doc.kind is not None and doc.kind != kind:
            raise DocumentError(
                f"port {doc.id!r} declared as {doc.kind.value} but listed under {kind.value}s"
            )
        offset = (doc.offset.dx, doc.offset.dy) if doc.offset is not None else None
        return cls(doc.id, doc.name, kind, owner_node_id, value=doc.value, offset=offset)

    def __repr__(self) -> str:
        return f"<Port id={self._id!r} kind={self._kind.value} node={self._owner_node_id!r}>"
