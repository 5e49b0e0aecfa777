"""
Snap Engine
===========
Aligns a free pointer position to nearby geometry of the current layout.

Priority (highest first):
    1. INTERSECTION   - the nearest vertical and horizontal candidates cross
                        within both of their spans.
    2. ENDPOINT       - an end of either nearest candidate lies within the
                        combined threshold.
    3. VERTICAL_LINE / HORIZONTAL_LINE - projection onto the closer candidate.
    4. NONE           - nothing within threshold; the point is returned as is.

Candidates are the four frame edges, every full-length line and every partial
line's actual span. Distances to a candidate are measured perpendicular to it;
among equally distant candidates the one whose span covers the point wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Optional, Sequence

import numpy as np

from windowlayout.config import LayoutSettings
from windowlayout.model.coordinates import CoordinateTransform, HostMapping
from windowlayout.model.geometry_primitives import Axis, Point, BoundedLine
from windowlayout.model.geometry_utils import orthogonal_intersection
from windowlayout.model.layout import LayoutModel

logger = logging.getLogger(__name__)


class SnapKind(StrEnum):
    NONE = "none"
    HORIZONTAL_LINE = "horizontal line"
    VERTICAL_LINE = "vertical line"
    ENDPOINT = "endpoint"
    INTERSECTION = "intersection"


@dataclass(frozen=True)
class SnapResult:
    """Outcome of snapping one pointer sample (normalized panel space)."""
    original_point: Point
    snapped_point: Point
    kind: SnapKind = SnapKind.NONE

    @property
    def is_snapped(self) -> bool:
        return self.kind is not SnapKind.NONE


FRAME_EDGES: tuple[BoundedLine, ...] = (
    BoundedLine(Axis.VERTICAL, 0.0),    # left
    BoundedLine(Axis.VERTICAL, 1.0),    # right
    BoundedLine(Axis.HORIZONTAL, 0.0),  # bottom
    BoundedLine(Axis.HORIZONTAL, 1.0),  # top
)


@dataclass(frozen=True)
class _Hit:
    line: BoundedLine
    distance: float  # normalized, perpendicular


class SnapEngine:
    """Snaps pointer samples against one layout snapshot."""

    def __init__(
        self,
        model: LayoutModel,
        settings: LayoutSettings | None = None,
        mapping: HostMapping | None = None,
    ) -> None:
        self.settings = settings or LayoutSettings()
        self._mapping = mapping
        self.model = model
        self.transform = CoordinateTransform(model.panel.width, model.panel.height, mapping)

    def update_model(self, model: LayoutModel) -> None:
        """Adopt a new snapshot; the transform follows panel size changes."""
        if model.panel != self.model.panel:
            self.transform = CoordinateTransform(model.panel.width, model.panel.height, self._mapping)
        self.model = model

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def candidate_lines(self) -> list[BoundedLine]:
        return list(FRAME_EDGES) + [line.to_bounded() for line in self.model.all_lines()]

    def snap(self, point: Point) -> SnapResult:
        """Snap a host-space point lying on the panel plane."""
        return self.snap_normalized(self.transform.host_to_panel(point))

    def snap_normalized(self, local: Point) -> SnapResult:
        """Snap a point already expressed in normalized panel space."""
        candidates = self.candidate_lines()
        tx, ty = self.transform.normalized_threshold(self.settings.snap_threshold)

        vertical = self._nearest([c for c in candidates if c.axis is Axis.VERTICAL], local, tx)
        horizontal = self._nearest([c for c in candidates if c.axis is Axis.HORIZONTAL], local, ty)

        # 1. Intersection
        if vertical is not None and horizontal is not None:
            crossing = orthogonal_intersection(vertical.line, horizontal.line)
            if crossing is not None:
                return self._result(local, crossing, SnapKind.INTERSECTION)

        # 2. Endpoints of the nearest candidates
        radius = max(tx, ty)
        endpoints = [
            p
            for hit in (vertical, horizontal) if hit is not None
            for p in (hit.line.start_point, hit.line.end_point)
        ]
        if endpoints:
            nearest = min(endpoints, key=local.distance_to)
            if local.distance_to(nearest) < radius:
                return self._result(local, nearest, SnapKind.ENDPOINT)

        # 3. Plain line, the closer one in real units
        options: list[tuple[float, Point, SnapKind]] = []
        if vertical is not None:
            options.append((vertical.distance * self.model.panel.width,
                            vertical.line.project(local), SnapKind.VERTICAL_LINE))
        if horizontal is not None:
            options.append((horizontal.distance * self.model.panel.height,
                            horizontal.line.project(local), SnapKind.HORIZONTAL_LINE))
        if options:
            _, point, kind = min(options, key=lambda o: o[0])
            return self._result(local, point, kind)

        return SnapResult(original_point=local, snapped_point=local, kind=SnapKind.NONE)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    @staticmethod
    def _nearest(lines: Sequence[BoundedLine], point: Point, threshold: float) -> Optional[_Hit]:
        """Closest candidate by perpendicular distance, if strictly within `threshold`."""
        if not lines:
            return None
        offsets = np.array([line.offset_to(point) for line in lines])
        overshoots = np.array([line.overshoot(point) for line in lines])
        # lexsort: last key is primary
        best = int(np.lexsort((overshoots, offsets))[0])
        if offsets[best] >= threshold:
            return None
        return _Hit(line=lines[best], distance=float(offsets[best]))

    @staticmethod
    def _result(local: Point, snapped: Point, kind: SnapKind) -> SnapResult:
        logger.debug(f"Snapped ({local.x:.4f}, {local.y:.4f}) -> ({snapped.x:.4f}, {snapped.y:.4f}) [{kind}]")
        return SnapResult(original_point=local, snapped_point=snapped, kind=kind)
