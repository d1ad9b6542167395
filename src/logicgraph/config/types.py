# src/logicgraph/config/types.py
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping

from ..core.exceptions import DocumentError
from ..core.types import Bounds


DEFAULT_WORLD = Bounds(-10000.0, -10000.0, 20000.0, 20000.0)


@dataclass
class GraphConfig:
    """
    Resolved settings for one Graph.
    - world: outer rectangle both spatial indexes are built over; entities must fit inside it
    - node_width / node_height: size given to nodes whose snapshot carries none
    - quadtree_max_items: flat-bucket capacity of each index root
    - quadtree_max_depth: deepest subdivision level
    """
    world: Bounds = field(default_factory=lambda: DEFAULT_WORLD)
    node_width: float = 100.0
    node_height: float = 60.0
    quadtree_max_items: int = 4
    quadtree_max_depth: int = 8

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GraphConfig":
        """Build from a merged config mapping; unknown keys are ignored."""
        cfg = cls()
        try:
            if data.get("world") is not None:
                cfg.world = Bounds.from_dict(data["world"])
            if data.get("node_width") is not None:
                cfg.node_width = float(data["node_width"])
            if data.get("node_height") is not None:
                cfg.node_height = float(data["node_height"])
            if data.get("quadtree_max_items") is not None:
                cfg.quadtree_max_items = int(data["quadtree_max_items"])
            if data.get("quadtree_max_depth") is not None:
                cfg.quadtree_max_depth = int(data["quadtree_max_depth"])
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentError(f"invalid graph config: {e}") from e
        if cfg.world.width <= 0 or cfg.world.height <= 0:
            raise DocumentError(f"invalid graph config: world {cfg.world} has no area")
        if cfg.quadtree_max_items < 0 or cfg.quadtree_max_depth < 0:
            raise DocumentError("invalid graph config: quadtree limits must be non-negative")
        return cfg
