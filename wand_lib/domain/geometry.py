"""Geometric value objects for line tracing."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Iterator
import math


@dataclass(frozen=True)
class Point:
    """Immutable 2D point in image pixel space (x right, y down)."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Point:
        return Point(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def length(self) -> float:
        """Length when treated as a vector from origin."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Point:
        """Unit vector in same direction, or the zero vector if degenerate."""
        length = self.length()
        if length < 1e-9:
            return Point(0.0, 0.0)
        return self / length

    def perpendicular(self) -> Point:
        """Vector rotated by +90 degrees."""
        return Point(-self.y, self.x)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {'x': float(self.x), 'y': float(self.y)}

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Point:
        """Create from tuple."""
        return cls(float(t[0]), float(t[1]))

    @classmethod
    def from_angle(cls, angle: float, radius: float = 1.0) -> Point:
        """Create a vector of the given length pointing at angle (radians)."""
        return cls(math.cos(angle) * radius, math.sin(angle) * radius)


@dataclass
class TracePath:
    """An open polyline as an ordered sequence of points.

    A path with fewer than two points means no stroke was traced.
    """
    points: List[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def is_empty(self) -> bool:
        """True when the path does not describe a usable trace."""
        return len(self.points) < 2

    def to_tuples(self) -> List[Tuple[float, float]]:
        return [p.to_tuple() for p in self.points]

    def to_list(self) -> List[dict]:
        """Convert to a list of {'x', 'y'} dicts for JSON serialization."""
        return [p.to_dict() for p in self.points]

    @classmethod
    def from_tuples(cls, tuples: List[Tuple[float, float]]) -> TracePath:
        """Create from list of (x, y) tuples."""
        return cls([Point.from_tuple(t) for t in tuples])
