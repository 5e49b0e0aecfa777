"""
Configuration & Global Constants
================================
This module serves as the central registry for tolerances, thresholds and
default dimensions used by the layout engine.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (snap radius, throttle interval,
   matching tolerance) from being scattered throughout the geometry code.
2. Sessions: `LayoutSettings` bundles the per-session values so the host UI
   can tune them (e.g. a larger snap radius on touch screens) without touching
   module globals.

Exports:
    EPSILON (float): Tolerance for matching normalized positions.
    SNAP_THRESHOLD_MM (float): Snap radius in real-world units.
    LayoutSettings: Dataclass with the tunable values.
"""
from __future__ import annotations

from dataclasses import dataclass


# Normalized tolerance used when matching positions (e.g. "does this segment
# end exactly on the line being dragged?").
EPSILON: float = 1e-3

# Snap radius in real-world units (millimeters). Converted per axis into a
# normalized distance by the snap engine.
SNAP_THRESHOLD_MM: float = 50.0

# Minimum drawn length, as a fraction of the shorter panel dimension.
MIN_DRAW_FRACTION: float = 0.05

# If |dx - dy| is at most this (millimeters) the drawing direction is ambiguous.
DIRECTION_TOLERANCE_MM: float = 1.0

# Minimum interval between two applied drag updates (~60 fps).
THROTTLE_INTERVAL_S: float = 0.016

# Interactive drags keep lines away from the frame.
DRAG_LIMITS: tuple[float, float] = (0.05, 0.95)

# A pointer travel of 1/DRAG_SENSITIVITY of the viewport spans the whole panel.
DRAG_SENSITIVITY: float = 10.0

# Default panel: width, height, depth in millimeters.
DEFAULT_PANEL: tuple[float, float, float] = (2000.0, 1800.0, 70.0)
DEFAULT_MULLION_WIDTH_MM: float = 50.0
DEFAULT_FRAME_WIDTH_MM: float = 50.0

# Host scene units per millimeter (the renderer works in meters).
HOST_UNITS_PER_MM: float = 0.001


@dataclass
class LayoutSettings:
    """Tunable values for one editing session."""
    snap_threshold: float = SNAP_THRESHOLD_MM
    min_draw_fraction: float = MIN_DRAW_FRACTION
    direction_tolerance: float = DIRECTION_TOLERANCE_MM
    throttle_interval: float = THROTTLE_INTERVAL_S
    drag_limits: tuple[float, float] = DRAG_LIMITS
    drag_sensitivity: float = DRAG_SENSITIVITY
    epsilon: float = EPSILON

    def __post_init__(self) -> None:
        if self.snap_threshold < 0.0:
            raise ValueError(f"snap_threshold must be non-negative, got {self.snap_threshold}")
        if self.throttle_interval < 0.0:
            raise ValueError(f"throttle_interval must be non-negative, got {self.throttle_interval}")
        low, high = self.drag_limits
        if not 0.0 <= low < high <= 1.0:
            raise ValueError(f"drag_limits must satisfy 0 <= low < high <= 1, got {self.drag_limits}")
