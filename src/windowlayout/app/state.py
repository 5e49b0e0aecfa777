"""
Application Store
=================
Owns the live layout snapshot and runs the drawing and dragging interactions.

Why is this file needed?
------------------------
1. State Management: The host UI reads the current `LayoutModel`, the pane
   cells and the selection from one place.
2. Notifications: Structural changes are announced through Qt signals so the
   renderer and the pane-property panels can resynchronize.
3. Interaction loop: The store is the owner of the `DragSession` and of the
   draw tool. It throttles drag updates (trailing edge, flushed by a
   single-shot `QTimer`) and guarantees that at most one line is active.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal

from windowlayout.config import LayoutSettings
from windowlayout.controller.drag import DragController, DragSession
from windowlayout.controller.throttle import RateLimiter
from windowlayout.model.coordinates import CoordinateTransform, HostMapping
from windowlayout.model.drawing import DrawOutcome, DrawState, DrawTool
from windowlayout.model.geometry_primitives import Axis, Point
from windowlayout.model.layout import LayoutModel, LayoutResult, Panel
from windowlayout.model.panes import Cell, HandleType, OpenDirection, PaneContent, PaneGridBuilder, SashType
from windowlayout.model.results import LayoutCondition
from windowlayout.model.snapping import SnapEngine, SnapResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    line_id: Optional[str] = None
    pane_id: Optional[str] = None


class Store(QObject):
    """Central layout store with signals for renderer/panel sync."""
    layout_changed = Signal(object)
    cells_changed = Signal(object)
    line_added = Signal(str)
    line_removed = Signal(str)
    line_moved = Signal(str)
    selection_changed = Signal(object)
    snap_changed = Signal(object)
    draw_state_changed = Signal(object)
    drag_state_changed = Signal(bool)
    rejected = Signal(str, str)

    def __init__(
        self,
        model: LayoutModel | None = None,
        settings: LayoutSettings | None = None,
        mapping: HostMapping | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.settings = settings or LayoutSettings()
        self._model = model or LayoutModel()
        self._clock = clock

        self._grid = PaneGridBuilder()
        self._cells: list[Cell] = self._grid.rebuild([], self._model.positions(Axis.HORIZONTAL),
                                                     self._model.positions(Axis.VERTICAL))
        self._selection = Selection()

        self._snap_engine = SnapEngine(self._model, self.settings, mapping)
        self._draw_tool = DrawTool(self._snap_engine)

        self._drag_controller = DragController(self.settings)
        self._drag: Optional[DragSession] = None
        self._limiter: RateLimiter[float] = RateLimiter(self.settings.throttle_interval)

        # trailing-edge flush for coalesced drag samples
        self._flush_timer = QTimer(self)
        self._flush_timer.setSingleShot(True)
        self._flush_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._flush_timer.timeout.connect(self._on_flush_timer)

    # ------------------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------------------

    @property
    def model(self) -> LayoutModel:
        return self._model

    @property
    def cells(self) -> list[Cell]:
        return list(self._cells)

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def draw_state(self) -> DrawState:
        return self._draw_tool.state

    @property
    def pen_tool_active(self) -> bool:
        return self._draw_tool.active

    @property
    def drag_session(self) -> Optional[DragSession]:
        return self._drag

    @property
    def transform(self) -> CoordinateTransform:
        return self._snap_engine.transform

    # ------------------------------------------------------------------------------
    # Structural edits (menu / property panel)
    # ------------------------------------------------------------------------------

    def add_line(self, axis: Axis, position: float | None = None) -> LayoutResult:
        """Add a full-length line; without a position it goes into the widest gap."""
        if position is None:
            position = self._model.suggest_position(axis)
        return self._commit(self._model.add_line(axis, position), self.line_added)

    def add_partial_line(self, axis: Axis, position: float, start: float, end: float) -> LayoutResult:
        return self._commit(self._model.add_partial_line(axis, position, start, end), self.line_added)

    def remove_line(self, line_id: str) -> LayoutResult:
        return self._commit(self._model.remove_line_by_id(line_id), self.line_removed)

    def remove_line_at(self, axis: Axis, index: int) -> LayoutResult:
        return self._commit(self._model.remove_line(axis, index), self.line_removed)

    def move_line(self, line_id: str, position: float) -> LayoutResult:
        return self._commit(self._model.move_line_by_id(line_id, position), self.line_moved)

    def set_mullion_width(self, width: float) -> LayoutResult:
        return self._commit(self._model.set_mullion_width(width))

    def set_panel(self, panel: Panel) -> None:
        logger.info(f"Panel set to {panel.width} x {panel.height} mm")
        self._set_model(self._model.with_panel(panel))

    # ------------------------------------------------------------------------------
    # Selection & pane properties
    # ------------------------------------------------------------------------------

    def select_line(self, line_id: Optional[str]) -> None:
        if line_id is not None and self._model.find(line_id) is None:
            self._reject(LayoutCondition.UNKNOWN_LINE, f"No line with id {line_id}")
            return
        self._set_selection(replace(self._selection, line_id=line_id))

    def select_pane(self, pane_id: Optional[str]) -> None:
        if pane_id is not None and PaneGridBuilder.find_pane(self._cells, pane_id) is None:
            self._reject(LayoutCondition.UNKNOWN_PANE, f"No pane with id {pane_id}")
            return
        self._set_selection(replace(self._selection, pane_id=pane_id))

    def update_pane(self, pane_id: str, **changes) -> bool:
        """Replace fields of a pane's content (e.g. glass_color="#FFFFFF")."""
        return self._update_content(pane_id, lambda content: replace(content, **changes))

    def set_sash_type(self, pane_id: str, sash_type: SashType) -> bool:
        return self._update_content(pane_id, lambda content: content.with_sash_type(sash_type))

    def set_open_direction(self, pane_id: str, direction: OpenDirection) -> bool:
        return self._update_content(pane_id, lambda content: content.with_open_direction(direction))

    def set_handle_type(self, pane_id: str, handle_type: HandleType) -> bool:
        return self._update_content(pane_id, lambda content: content.with_handle_type(handle_type))

    # ------------------------------------------------------------------------------
    # Drawing tool
    # ------------------------------------------------------------------------------

    def activate_pen_tool(self) -> None:
        if self._drag is not None:
            self.end_drag()
        self._draw_tool.activate()
        self.draw_state_changed.emit(self._draw_tool.state)

    def deactivate_pen_tool(self) -> None:
        self._draw_tool.deactivate()
        self.snap_changed.emit(None)
        self.draw_state_changed.emit(self._draw_tool.state)

    def cancel_draw(self) -> None:
        self._draw_tool.cancel()
        self.draw_state_changed.emit(self._draw_tool.state)

    def pointer_moved(self, point: Optional[Point]) -> Optional[SnapResult]:
        """Live snap preview for a host point (None when the pointer missed the panel)."""
        snap = self._draw_tool.hover(point)
        self.snap_changed.emit(snap)
        return snap

    def click(self, point: Optional[Point]) -> DrawOutcome:
        before = self._draw_tool.state
        outcome = self._draw_tool.click(point)

        if outcome.committed:
            self._commit(outcome.result, self.line_added)
        elif outcome.condition is not LayoutCondition.OK:
            self._reject(outcome.condition, outcome.message)

        if outcome.state != before:
            self.draw_state_changed.emit(outcome.state)
        return outcome

    # ------------------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------------------

    def begin_drag(self, line_id: str, pointer: Optional[Point] = None) -> LayoutCondition:
        """Start dragging a line; only one line may be active at a time."""
        if self._drag is not None:
            return self._reject(LayoutCondition.DRAG_IN_PROGRESS, f"Line {self._drag.line_id} is being dragged.")
        if self._draw_tool.active:
            return self._reject(LayoutCondition.DRAW_TOOL_ACTIVE, "Lines cannot be dragged while drawing.")

        session = self._drag_controller.begin(self._model, line_id, pointer)
        if session is None:
            return self._reject(LayoutCondition.UNKNOWN_LINE, f"No line with id {line_id}")

        self._drag = session
        self._limiter.reset()
        self._set_selection(replace(self._selection, line_id=line_id))
        self.drag_state_changed.emit(True)
        return LayoutCondition.OK

    def drag_to(self, pointer: Point, now: float | None = None) -> Optional[LayoutResult]:
        """Follow the pointer on the panel plane (host units)."""
        if self._drag is None:
            self._reject(LayoutCondition.NO_ACTIVE_DRAG, "No drag in progress.")
            return None
        self._drag = self._drag_controller.follow_host(self._drag, pointer, self.transform)
        return self._sample(now)

    def drag_by_pixels(
        self,
        dx_px: float,
        dy_px: float,
        viewport_width: float,
        viewport_height: float,
        now: float | None = None,
    ) -> Optional[LayoutResult]:
        """Follow a screen-space pointer delta."""
        if self._drag is None:
            self._reject(LayoutCondition.NO_ACTIVE_DRAG, "No drag in progress.")
            return None
        self._drag = self._drag_controller.follow_pixels(self._drag, dx_px, dy_px, viewport_width, viewport_height)
        return self._sample(now)

    def flush_drag(self, now: float | None = None) -> Optional[LayoutResult]:
        """Apply a coalesced drag sample if the throttle interval has elapsed."""
        position = self._limiter.flush(self._now(now))
        if position is None or self._drag is None:
            return None
        return self._apply_drag(position)

    def end_drag(self) -> Optional[LayoutResult]:
        """Pointer released: apply the last pending sample and clear the drag state."""
        self._flush_timer.stop()
        pending = self._limiter.drain()
        self._limiter.reset()
        if self._drag is None:
            return None

        result = None
        if pending is not None:
            result = self._apply_drag(pending)

        session, self._drag = self._drag, None
        logger.info(f"Drag ended on line {session.line_id} (moved {session.displacement:+.4f})")
        self.drag_state_changed.emit(False)
        return result

    def pointer_released(self) -> None:
        """Releasing the pointer always ends a drag, committed or not."""
        if self._drag is not None:
            self.end_drag()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def _sample(self, now: float | None) -> Optional[LayoutResult]:
        now = self._now(now)
        position = self._limiter.sample(self._drag.position, now)
        if position is not None:
            return self._apply_drag(position)
        if not self._flush_timer.isActive():
            self._arm_flush_timer(now)
        return None

    def _arm_flush_timer(self, now: float) -> None:
        delay = self._limiter.time_until_flush(now)
        if delay is not None:
            self._flush_timer.start(math.ceil(delay * 1000))

    def _apply_drag(self, position: float) -> LayoutResult:
        result = self._drag_controller.resolve(self._drag, position)
        return self._commit(result, self.line_moved, rebase=False)

    def _on_flush_timer(self) -> None:
        now = self._clock()
        if self.flush_drag(now) is None and self._drag is not None and self._limiter.has_pending:
            self._arm_flush_timer(now)

    def _commit(self, result: LayoutResult, signal=None, rebase: bool = True) -> LayoutResult:
        if not result.ok:
            self._reject(result.condition, result.message)
            return result
        if result.model is not self._model:
            self._set_model(result.model, rebase=rebase)
            if signal is not None:
                signal.emit(result.line_id)
        return result

    def _set_model(self, model: LayoutModel, rebase: bool = True) -> None:
        self._model = model
        if rebase and self._drag is not None:
            # an edit outside the drag becomes the new starting point
            self._drag = self._drag_controller.rebase(self._drag, model)
        self._snap_engine.update_model(model)
        self._cells = self._grid.rebuild(self._cells, model.positions(Axis.HORIZONTAL),
                                         model.positions(Axis.VERTICAL))
        self.layout_changed.emit(self._model)
        self.cells_changed.emit(self.cells)
        self._resolve_selection()

    def _resolve_selection(self) -> None:
        line_id, pane_id = self._selection.line_id, self._selection.pane_id
        if line_id is not None and self._model.find(line_id) is None:
            line_id = None
        if pane_id is not None and PaneGridBuilder.find_pane(self._cells, pane_id) is None:
            pane_id = None
        self._set_selection(Selection(line_id=line_id, pane_id=pane_id))

    def _set_selection(self, selection: Selection) -> None:
        if selection != self._selection:
            self._selection = selection
            self.selection_changed.emit(selection)

    def _update_content(self, pane_id: str, change: Callable[[PaneContent], PaneContent]) -> bool:
        cell = PaneGridBuilder.find_pane(self._cells, pane_id)
        if cell is None:
            self._reject(LayoutCondition.UNKNOWN_PANE, f"No pane with id {pane_id}")
            return False
        updated = replace(cell, content=change(cell.content))
        self._cells = [updated if c is cell else c for c in self._cells]
        logger.info(f"Updated pane {pane_id} at row {cell.row}, col {cell.col}")
        self.cells_changed.emit(self.cells)
        return True

    def _reject(self, condition: LayoutCondition, message: str) -> LayoutCondition:
        self.rejected.emit(str(condition), message)
        return condition
