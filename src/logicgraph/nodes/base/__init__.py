"""Node and port entities."""
from .port import Port
from .node import Node

__all__ = ["Port", "Node"]
