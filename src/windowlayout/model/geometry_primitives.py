"""
Geometric Primitives for the panel plane.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional
import math


class Axis(StrEnum):
    """
    Orientation of a partition line.

    A HORIZONTAL line runs parallel to the panel width and is located by a
    Y-position; a VERTICAL line is located by an X-position.
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def opposite(self) -> Axis:
        return Axis.VERTICAL if self is Axis.HORIZONTAL else Axis.HORIZONTAL


@dataclass(frozen=True)
class Vector:
    """A 2D displacement."""
    x: float
    y: float

    def component(self, axis: Axis) -> float:
        """Displacement that moves a line of the given axis (Y for horizontal lines)."""
        return self.y if axis is Axis.HORIZONTAL else self.x


@dataclass(frozen=True)
class Point:
    """A point in the panel plane (normalized, real or host units depending on context)."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def coordinate(self, axis: Axis) -> float:
        """The coordinate that locates a line of `axis` passing through this point."""
        return self.y if axis is Axis.HORIZONTAL else self.x


@dataclass(frozen=True)
class BoundedLine:
    """
    An axis-aligned line in normalized panel space, bounded along the orthogonal axis.

    Frame edges and full-length lines span [0, 1]; partial lines span their segment.
    `source_id` is the id of the layout line it was built from (None for frame edges).
    """
    axis: Axis
    position: float
    start: float = 0.0
    end: float = 1.0
    source_id: Optional[str] = None

    @property
    def start_point(self) -> Point:
        return self.point_at(self.start)

    @property
    def end_point(self) -> Point:
        return self.point_at(self.end)

    def point_at(self, t: float) -> Point:
        """Point on the line at orthogonal coordinate `t`."""
        if self.axis is Axis.HORIZONTAL:
            return Point(t, self.position)
        return Point(self.position, t)

    def contains(self, t: float, eps: float = 1e-9) -> bool:
        """Check whether orthogonal coordinate `t` lies within the bounded span."""
        return self.start - eps <= t <= self.end + eps

    def offset_to(self, point: Point) -> float:
        """Perpendicular distance from `point` to the (unbounded) line."""
        return abs(point.coordinate(self.axis) - self.position)

    def overshoot(self, point: Point) -> float:
        """How far `point` lies beyond the span, measured along the line (0 inside)."""
        t = point.coordinate(self.axis.opposite)
        return max(0.0, self.start - t, t - self.end)

    def project(self, point: Point) -> Point:
        """Closest point on the bounded line."""
        t = point.coordinate(self.axis.opposite)
        return self.point_at(min(max(t, self.start), self.end))
