"""In-memory data core for node/port/edge logic graphs."""
from ._version import __version__
from .config.types import GraphConfig
from .core.exceptions import (
    LogicGraphError,
    LookupFailure,
    PortNotFoundError,
    NodeNotFoundError,
    IncompatiblePortsError,
    DuplicateIdError,
    IndexBoundsError,
    DocumentError,
)
from .core.types import Bounds, Point, PortKind
from .nodes.base.node import Node
from .nodes.base.port import Port
from .nodes.core.edge import Edge
from .nodes.core.graph import Graph
from .spatial.quadtree import QuadTree, QuadTreeItem

__all__ = [
    "GraphConfig",
    "LogicGraphError",
    "LookupFailure",
    "PortNotFoundError",
    "NodeNotFoundError",
    "IncompatiblePortsError",
    "DuplicateIdError",
    "IndexBoundsError",
    "DocumentError",
    "Bounds",
    "Point",
    "PortKind",
    "Node",
    "Port",
    "Edge",
    "Graph",
    "QuadTree",
    "QuadTreeItem",
]
