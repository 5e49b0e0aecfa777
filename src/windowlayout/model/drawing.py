"""
Two-Click Draw Tool
===================
State machine that turns two snapped clicks into a new partial line.

    Idle    + snapped click            -> Started(anchor)
    Started + snapped, valid click     -> commit add_partial_line, Idle
    Started + rejected click           -> Started (anchor kept, reason reported)
    any     + cancel / deactivate      -> Idle

A second click is rejected when it did not snap, when the drawn distance is
shorter than the minimum, or when the dominant axis cannot be decided.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Union

from windowlayout.model.geometry_primitives import Axis, Point
from windowlayout.model.geometry_utils import sorted_span
from windowlayout.model.layout import LayoutResult
from windowlayout.model.results import LayoutCondition
from windowlayout.model.snapping import SnapEngine, SnapResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Started:
    anchor: Point


DrawState = Union[Idle, Started]


@dataclass(frozen=True)
class DrawPlan:
    """What a second click at `end` would commit."""
    axis: Axis
    position: float
    start: float
    end: float


@dataclass(frozen=True)
class DrawOutcome:
    state: DrawState
    condition: LayoutCondition = LayoutCondition.OK
    snap: Optional[SnapResult] = None
    result: Optional[LayoutResult] = None
    message: str = ""

    @property
    def committed(self) -> bool:
        return self.result is not None and self.result.ok


class DrawTool:
    """Drawing session bound to a snap engine; the engine's model is updated on commit."""

    def __init__(self, engine: SnapEngine) -> None:
        self.engine = engine
        self.state: DrawState = Idle()
        self.active = False

    # ---- activation ----

    def activate(self) -> None:
        self.active = True
        self.state = Idle()
        logger.info("Draw tool activated.")

    def deactivate(self) -> None:
        self.active = False
        self.cancel()
        logger.info("Draw tool deactivated.")

    def cancel(self) -> None:
        """Drop any anchor unconditionally."""
        if isinstance(self.state, Started):
            logger.debug("Draw cancelled; anchor dropped.")
        self.state = Idle()

    # ---- pointer input ----

    def hover(self, point: Optional[Point]) -> Optional[SnapResult]:
        """Snap a host point for the live preview; None if the pointer missed the panel."""
        if point is None or not self.active:
            return None
        return self.engine.snap(point)

    def click(self, point: Optional[Point]) -> DrawOutcome:
        """Handle a click at a host point (None when the pointer ray missed the panel)."""
        if point is None:
            return self._reject(LayoutCondition.NO_INTERSECTION, None, "Pointer did not hit the panel.")
        return self.click_snapped(self.engine.snap(point))

    def click_normalized(self, local: Point) -> DrawOutcome:
        return self.click_snapped(self.engine.snap_normalized(local))

    def click_snapped(self, snap: SnapResult) -> DrawOutcome:
        if not self.active:
            return self._reject(LayoutCondition.TOOL_INACTIVE, snap, "Draw tool is not active.")
        if not snap.is_snapped:
            return self._reject(LayoutCondition.NO_SNAP, snap, "Click did not snap to any geometry.")

        match self.state:
            case Idle():
                self.state = Started(snap.snapped_point)
                logger.info(
                    f"Draw anchor set at ({snap.snapped_point.x:.4f}, {snap.snapped_point.y:.4f}) [{snap.kind}]"
                )
                return DrawOutcome(state=self.state, snap=snap)
            case Started(anchor=anchor):
                return self._complete(anchor, snap)

    # ---- validation ----

    def plan(self, anchor: Point, end: Point) -> tuple[LayoutCondition, Optional[DrawPlan]]:
        """Decide whether a line from `anchor` to `end` can be drawn, and how."""
        panel = self.engine.model.panel
        settings = self.engine.settings
        dx = abs(end.x - anchor.x) * panel.width
        dy = abs(end.y - anchor.y) * panel.height

        if max(dx, dy) < settings.min_draw_fraction * panel.shorter_side:
            return LayoutCondition.INSUFFICIENT_DISTANCE, None
        if abs(dx - dy) <= settings.direction_tolerance:
            return LayoutCondition.AMBIGUOUS_DIRECTION, None

        axis = Axis.VERTICAL if dx < dy else Axis.HORIZONTAL
        start, stop = sorted_span(anchor.coordinate(axis.opposite), end.coordinate(axis.opposite))
        return LayoutCondition.OK, DrawPlan(axis=axis, position=anchor.coordinate(axis), start=start, end=stop)

    # ---- internal ----

    def _complete(self, anchor: Point, snap: SnapResult) -> DrawOutcome:
        condition, plan = self.plan(anchor, snap.snapped_point)
        if plan is None:
            return self._reject(condition, snap, f"Cannot complete line: {condition}.")

        result = self.engine.model.add_partial_line(plan.axis, plan.position, plan.start, plan.end)
        if not result.ok:
            return self._reject(result.condition, snap, result.message)

        self.engine.update_model(result.model)
        self.state = Idle()
        return DrawOutcome(state=self.state, snap=snap, result=result)

    def _reject(self, condition: LayoutCondition, snap: Optional[SnapResult], message: str) -> DrawOutcome:
        logger.warning(f"Draw click rejected ({condition}): {message}")
        return DrawOutcome(state=self.state, condition=condition, snap=snap, message=message)
