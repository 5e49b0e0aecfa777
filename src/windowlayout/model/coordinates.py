"""
Coordinate Transform
====================
Conversions between real-world units (millimeters), normalized [0, 1] panel
space and the host's rendering space.

Why is this file needed?
------------------------
1. Single convention: every algorithm in the model works in normalized panel
   space with the origin at the panel's bottom-left corner. This module is the
   only place that knows how that maps to millimeters or to scene units.
2. Host independence: the renderer supplies a `HostMapping` (ray/plane
   intersection is its own business); the engine only needs a 2D mapping
   between the panel plane in millimeters and host coordinates.

Classes:
    HostMapping: Protocol implemented by host adapters.
    PlaneMapping: Direct 2D mapping (uniform scale plus origin offset).
    CoordinateTransform: Panel-aware conversions used at every boundary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from windowlayout.config import HOST_UNITS_PER_MM
from windowlayout.model.geometry_primitives import Axis, Point, Vector
from windowlayout.model.geometry_utils import clamp


def to_normalized(real: float, axis_extent: float) -> float:
    """
    Convert a real-world coordinate to normalized panel space.

    Out-of-range inputs are clamped to [0, 1] rather than rejected.

    Raises:
        ValueError: If `axis_extent` is not positive.
    """
    if axis_extent <= 0.0:
        raise ValueError(f"Axis extent must be positive, got {axis_extent}")
    return clamp(real / axis_extent)


def to_real(normalized: float, axis_extent: float) -> float:
    """Convert a normalized coordinate back to real-world units."""
    if axis_extent <= 0.0:
        raise ValueError(f"Axis extent must be positive, got {axis_extent}")
    return normalized * axis_extent


class HostMapping(Protocol):
    """Maps points of the panel plane (millimeters, corner origin) to the host and back."""

    def to_host(self, point_mm: Point) -> Point: ...

    def from_host(self, point: Point) -> Point: ...


@dataclass(frozen=True)
class PlaneMapping:
    """
    Direct 2D mapping: host = origin + scale * millimeters.

    The default scale converts millimeters to meters and keeps the panel's
    bottom-left corner at the host origin. A host that centers the panel
    horizontally passes `origin=Point(-width_m / 2, 0.0)`.
    """
    scale: float = HOST_UNITS_PER_MM
    origin: Point = field(default_factory=lambda: Point(0.0, 0.0))

    def __post_init__(self) -> None:
        if self.scale <= 0.0:
            raise ValueError(f"Scale must be positive, got {self.scale}")

    def to_host(self, point_mm: Point) -> Point:
        return Point(self.origin.x + point_mm.x * self.scale, self.origin.y + point_mm.y * self.scale)

    def from_host(self, point: Point) -> Point:
        return Point((point.x - self.origin.x) / self.scale, (point.y - self.origin.y) / self.scale)


class CoordinateTransform:
    """Stateless conversions for one panel size and one host mapping."""

    def __init__(self, width: float, height: float, mapping: HostMapping | None = None) -> None:
        if width <= 0.0 or height <= 0.0:
            raise ValueError(f"Panel extent must be positive, got {width} x {height}")
        self.width = width
        self.height = height
        self.mapping: HostMapping = mapping if mapping is not None else PlaneMapping()

    def extent(self, axis: Axis) -> float:
        """Real-world extent along which a line of `axis` is positioned."""
        return self.height if axis is Axis.HORIZONTAL else self.width

    # ---- real <-> normalized ----

    def real_to_panel(self, point_mm: Point) -> Point:
        return Point(to_normalized(point_mm.x, self.width), to_normalized(point_mm.y, self.height))

    def panel_to_real(self, point: Point) -> Point:
        return Point(to_real(point.x, self.width), to_real(point.y, self.height))

    # ---- host <-> normalized ----

    def host_to_panel(self, point: Point) -> Point:
        """Host point (already on the panel plane) to clamped normalized panel space."""
        return self.real_to_panel(self.mapping.from_host(point))

    def panel_to_host(self, point: Point) -> Point:
        return self.mapping.to_host(self.panel_to_real(point))

    # ---- displacements (unclamped) ----

    def host_delta_to_panel(self, start: Point, end: Point) -> Vector:
        """Normalized displacement between two host points; not clamped."""
        a = self.mapping.from_host(start)
        b = self.mapping.from_host(end)
        return Vector((b.x - a.x) / self.width, (b.y - a.y) / self.height)

    def normalized_threshold(self, real_distance: float) -> tuple[float, float]:
        """A real-world distance expressed as normalized (x, y) distances."""
        return real_distance / self.width, real_distance / self.height
