"""Enums and geometry value types."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping


class PortKind(str, Enum):
    input = "input"
    output = "output"


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Bounds:
    """
    Axis-aligned rectangle in world coordinates.
    - `x`, `y`: top-left corner
    - `width`, `height`: extent, zero allowed (degenerate rectangles are valid)
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: "Bounds") -> bool:
        """True if `other` lies fully inside this rectangle (shared edges allowed)."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: "Bounds") -> bool:
        """True if the rectangles overlap or touch."""
        return not (
            self.right < other.x
            or self.x > other.right
            or self.bottom < other.y
            or self.y > other.bottom
        )

    def quadrants(self) -> tuple:
        """Split into (top-left, top-right, bottom-left, bottom-right)."""
        hw = self.width / 2
        hh = self.height / 2
        return (
            Bounds(self.x, self.y, hw, hh),
            Bounds(self.x + hw, self.y, hw, hh),
            Bounds(self.x, self.y + hh, hw, hh),
            Bounds(self.x + hw, self.y + hh, hw, hh),
        )

    @classmethod
    def centered(cls, center: Point, width: float, height: float) -> "Bounds":
        return cls(center.x - width / 2, center.y - height / 2, width, height)

    @classmethod
    def from_points(cls, a: Point, b: Point) -> "Bounds":
        x = min(a.x, b.x)
        y = min(a.y, b.y)
        return cls(x, y, abs(a.x - b.x), abs(a.y - b.y))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bounds":
        return cls(
            float(data["x"]),
            float(data["y"]),
            float(data["width"]),
            float(data["height"]),
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
