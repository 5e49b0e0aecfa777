from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from windowlayout.model.geometry_primitives import Axis, Point, BoundedLine


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


def nearly_equal(a: float, b: float, eps: float = 1e-9) -> bool:
    return abs(a - b) <= eps


def sorted_span(a: float, b: float) -> tuple[float, float]:
    return (a, b) if a <= b else (b, a)


def orthogonal_intersection(
    first: BoundedLine,
    second: BoundedLine,
    *,
    eps: float = 1e-9
) -> Optional[Point]:
    """
    Intersection of a horizontal and a vertical bounded line.

    Args:
        first: One of the lines (either axis).
        second: The other line, which must have the opposite axis.
        eps: Inclusive tolerance when testing the spans.

    Returns:
        The crossing point if it lies within both bounded spans, otherwise None
        (including when both lines share the same axis).
    """
    if first.axis is second.axis:
        return None

    horizontal, vertical = (first, second) if first.axis is Axis.HORIZONTAL else (second, first)
    x, y = vertical.position, horizontal.position

    if horizontal.contains(x, eps) and vertical.contains(y, eps):
        return Point(x, y)
    return None


def grid_positions(positions: Iterable[float], eps: float = 1e-9) -> list[float]:
    """
    Sorted, de-duplicated union of {0, 1} and the given normalized positions.

    Values closer than `eps` to their predecessor are merged.
    """
    arr = np.unique(np.concatenate(([0.0, 1.0], np.fromiter(positions, dtype=np.float64))))
    arr = np.clip(arr, 0.0, 1.0)
    keep = np.concatenate(([True], np.diff(arr) > eps))
    return [float(v) for v in arr[keep]]


def largest_gap_midpoint(positions: Iterable[float]) -> float:
    """
    Midpoint of the widest gap between consecutive grid positions.

    Used to suggest where a newly added line should go. Ties resolve to the
    lowest gap.
    """
    grid = np.asarray(grid_positions(positions))
    gaps = np.diff(grid)
    i = int(np.argmax(gaps))
    return float(grid[i] + gaps[i] / 2.0)
