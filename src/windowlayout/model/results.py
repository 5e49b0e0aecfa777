"""
Status values reported by layout operations.

Every rejection in the engine is local and recoverable: it is returned to the
caller as a `LayoutCondition`, never raised. The only exception type is
`LayoutInvariantError`, which signals a programming defect.
"""
from __future__ import annotations

from enum import StrEnum


class LayoutCondition(StrEnum):
    OK = "ok"
    OUT_OF_RANGE = "out of range"
    INDEX_OUT_OF_RANGE = "index out of range"
    UNKNOWN_LINE = "unknown line"
    UNKNOWN_PANE = "unknown pane"
    DEGENERATE_SPAN = "degenerate span"
    AMBIGUOUS_DIRECTION = "ambiguous direction"
    INSUFFICIENT_DISTANCE = "insufficient distance"
    NO_SNAP = "no snap"
    NO_INTERSECTION = "no intersection"
    DRAG_IN_PROGRESS = "drag in progress"
    DRAW_TOOL_ACTIVE = "draw tool active"
    NO_ACTIVE_DRAG = "no active drag"
    TOOL_INACTIVE = "tool inactive"


class LayoutInvariantError(ValueError):
    """A layout snapshot violates one of its structural invariants."""
