# src/logicgraph/spatial/quadtree.py
"""Spatial index over axis-aligned rectangles, keyed by entity id."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..core.types import Bounds


@dataclass(frozen=True)
class QuadTreeItem:
    id: str
    bounds: Bounds


class QuadTree:
    """
    Containment-first quadtree. A tree instance is both the root and any subtree.

    Placement:
    - The root keeps up to `max_items` items in a flat bucket before it starts
      pushing items down.
    - Past that, an item goes to the first quadrant (TL, TR, BL, BR) that fully
      contains it; items straddling quadrant borders, or reaching `max_depth`,
      stay on the current node.

    Nothing here raises: `insert` returns False when the item is outside
    this tree's bounds and callers decide what that means.
    """

    MAX_ITEMS_PER_ROOT_LEAF = 4
    MAX_DEPTH = 8

    def __init__(
        self,
        bounds: Bounds,
        depth: int = 0,
        max_items: Optional[int] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        self.bounds = bounds
        self.depth = depth
        self.max_items = self.MAX_ITEMS_PER_ROOT_LEAF if max_items is None else int(max_items)
        self.max_depth = self.MAX_DEPTH if max_depth is None else int(max_depth)
        self.items: List[QuadTreeItem] = []
        self.children: List[QuadTree] = []

    # -------- mutation --------
    def insert(self, item_id: str, bounds: Bounds) -> bool:
        return self._insert(QuadTreeItem(str(item_id), bounds))

    def _insert(self, item: QuadTreeItem) -> bool:
        if not self.bounds.contains(item.bounds):
            return False

        if self.depth == 0 and len(self.items) < self.max_items:
            self.items.append(item)
            return True

        if self.depth < self.max_depth:
            if not self.children:
                self._subdivide()
            for child in self.children:
                if child._insert(item):
                    return True

        self.items.append(item)
        return True

    def remove(self, item_id: str) -> bool:
        for i, item in enumerate(self.items):
            if item.id == item_id:
                del self.items[i]
                return True
        for child in self.children:
            if child.remove(item_id):
                return True
        return False

    def clear(self) -> None:
        self.items = []
        self.children = []

    def _subdivide(self) -> None:
        self.children = [
            QuadTree(q, self.depth + 1, self.max_items, self.max_depth)
            for q in self.bounds.quadrants()
        ]

    # -------- queries --------
    def query(self, region: Bounds) -> List[QuadTreeItem]:
        """All items whose bounds intersect `region` (touching counts)."""
        result: List[QuadTreeItem] = []
        self._collect(region, result)
        return result

    def _collect(self, region: Bounds, out: List[QuadTreeItem]) -> None:
        if not self.bounds.intersects(region):
            return
        for item in self.items:
            if item.bounds.intersects(region):
                out.append(item)
        for child in self.children:
            child._collect(region, out)

    def find(self, item_id: str) -> Optional[QuadTreeItem]:
        """Locate an item by id regardless of where it was placed."""
        for item in self.items:
            if item.id == item_id:
                return item
        for child in self.children:
            hit = child.find(item_id)
            if hit is not None:
                return hit
        return None

    def iter_items(self):
        yield from self.items
        for child in self.children:
            yield from child.iter_items()

    # -------- Python container protocol --------
    def __len__(self) -> int:
        return len(self.items) + sum(len(c) for c in self.children)

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, str) and self.find(item_id) is not None

    def __repr__(self) -> str:
        return f"<QuadTree depth={self.depth} items={len(self.items)} children={len(self.children)}>"
