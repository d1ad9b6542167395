"""Edge entity and graph aggregate."""
from .edge import Edge
from .graph import Graph

__all__ = ["Edge", "Graph"]
