"""
Drag Sessions
=============
Turns pointer motion into target positions for the line being dragged.

`DragSession` is an immutable value owned by whoever runs the interaction loop
(the `Store` in the app). Each pointer sample produces a new session; nothing
is captured in closures or module globals. The session refers to its line by
id, so re-sorting the axis during the drag is harmless.

Every target position is resolved against `base`, the snapshot the drag started
from, as a single move. Intermediate samples therefore never change how partial
lines are re-attached: a stepped drag ends exactly where the direct move would.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Optional

from windowlayout.config import LayoutSettings
from windowlayout.model.coordinates import CoordinateTransform
from windowlayout.model.geometry_primitives import Axis, Point
from windowlayout.model.geometry_utils import clamp
from windowlayout.model.layout import LayoutModel, LayoutResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragSession:
    line_id: str
    axis: Axis
    origin_position: float
    raw_position: float
    pointer: Optional[Point] = None
    low: float = 0.0
    high: float = 1.0
    base: Optional[LayoutModel] = field(default=None, repr=False, compare=False)

    @property
    def position(self) -> float:
        """Target position, kept within the drag limits."""
        return clamp(self.raw_position, self.low, self.high)

    @property
    def displacement(self) -> float:
        return self.position - self.origin_position


class DragController:
    """Pure functions from (session, pointer sample) to a new session."""

    def __init__(self, settings: LayoutSettings | None = None) -> None:
        self.settings = settings or LayoutSettings()

    def begin(self, model: LayoutModel, line_id: str, pointer: Optional[Point] = None) -> Optional[DragSession]:
        """Start dragging `line_id`; None if the snapshot has no such line."""
        line = model.find(line_id)
        if line is None:
            logger.warning(f"Cannot start drag: no line with id {line_id}")
            return None
        low, high = self.settings.drag_limits
        logger.info(f"Drag started on {line.axis} line {line_id} at {line.position:.4f}")
        return DragSession(
            line_id=line_id,
            axis=line.axis,
            origin_position=line.position,
            raw_position=line.position,
            pointer=pointer,
            low=low,
            high=high,
            base=model,
        )

    def follow_host(self, session: DragSession, pointer: Point, transform: CoordinateTransform) -> DragSession:
        """Advance by the pointer's displacement on the panel plane (host units)."""
        if session.pointer is None:
            return replace(session, pointer=pointer)
        delta = transform.host_delta_to_panel(session.pointer, pointer).component(session.axis)
        return replace(session, raw_position=session.raw_position + delta, pointer=pointer)

    def follow_pixels(
        self,
        session: DragSession,
        dx_px: float,
        dy_px: float,
        viewport_width: float,
        viewport_height: float,
    ) -> DragSession:
        """
        Advance by a screen-space pointer delta.

        Screen Y grows downwards, so moving the pointer up raises a horizontal line.
        A travel of 1/sensitivity of the viewport spans the whole panel.
        """
        if viewport_width <= 0 or viewport_height <= 0:
            raise ValueError(f"Viewport must be positive, got {viewport_width} x {viewport_height}")
        sensitivity = self.settings.drag_sensitivity
        if session.axis is Axis.HORIZONTAL:
            delta = -(dy_px / viewport_height) * sensitivity
        else:
            delta = (dx_px / viewport_width) * sensitivity
        return replace(session, raw_position=session.raw_position + delta)

    def resolve(self, session: DragSession, position: float | None = None) -> LayoutResult:
        """Snapshot with the dragged line moved from `session.base` straight to `position`."""
        if session.base is None:
            raise ValueError(f"Drag session for line {session.line_id} has no base snapshot")
        target = session.position if position is None else clamp(position, session.low, session.high)
        return session.base.move_line_by_id(session.line_id, target)

    def rebase(self, session: DragSession, model: LayoutModel) -> DragSession:
        """Continue the drag from `model` after an unrelated edit replaced the snapshot."""
        return replace(session, base=model)
