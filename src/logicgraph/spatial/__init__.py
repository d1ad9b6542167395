"""Spatial indexing."""
from .quadtree import QuadTree, QuadTreeItem

__all__ = ["QuadTree", "QuadTreeItem"]
