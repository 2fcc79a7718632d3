"""
Drawing Primitives
Layer-tagged geometric items handed over by the drawing environment:
- TextLabel: MTEXT/TEXT annotation with its bounding box
- Line: straight segment between two endpoints
- Polygon: closed polyline outline
- DimensionMark: dimension object with measurement and text anchor
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union, Iterable


Point = Tuple[float, float]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def center(self) -> Point:
        return ((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Optional["Bounds"]:
        """Bounds of a point cloud, or None when there are no points."""
        pts = list(points)
        if not pts:
            return None
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class TextLabel:
    """A text annotation."""
    layer: str
    text: str
    bounds: Optional[Bounds] = None

    @property
    def center(self) -> Point:
        """Visual center; labels without extents sit at the origin."""
        if self.bounds is None:
            return (0.0, 0.0)
        return self.bounds.center


@dataclass(frozen=True)
class Line:
    """A straight line segment."""
    layer: str
    start: Point
    end: Point

    @property
    def bounds(self) -> Bounds:
        return Bounds(
            min(self.start[0], self.end[0]), min(self.start[1], self.end[1]),
            max(self.start[0], self.end[0]), max(self.start[1], self.end[1])
        )

    def is_vertical(self, x_tol: float, y_tol: float) -> bool:
        return (abs(self.start[0] - self.end[0]) < x_tol and
                abs(self.start[1] - self.end[1]) > y_tol)

    def is_horizontal(self, x_tol: float, y_tol: float) -> bool:
        return (abs(self.start[1] - self.end[1]) < y_tol and
                abs(self.start[0] - self.end[0]) > x_tol)


@dataclass(frozen=True)
class Polygon:
    """A closed outline (polyline)."""
    layer: str
    vertices: Tuple[Point, ...]

    @property
    def bounds(self) -> Optional[Bounds]:
        return Bounds.from_points(self.vertices)


@dataclass(frozen=True)
class DimensionMark:
    """A dimension annotation; measurement is in drawing units (mm)."""
    layer: str
    measurement: float
    text_position: Point
    bounds: Optional[Bounds] = None


Primitive = Union[TextLabel, Line, Polygon, DimensionMark]


def rectangle(layer: str, min_x: float, min_y: float, max_x: float, max_y: float) -> Polygon:
    """Convenience constructor for an axis-aligned rectangular outline."""
    return Polygon(layer, (
        (min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y)
    ))


def label_at(layer: str, text: str, x: float, y: float,
             width: float = 0.0, height: float = 0.0) -> TextLabel:
    """A label whose visual center is exactly (x, y)."""
    return TextLabel(layer, text, Bounds(
        x - width / 2.0, y - height / 2.0, x + width / 2.0, y + height / 2.0
    ))
