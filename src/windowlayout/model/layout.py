"""
Layout Model (Data Model)
=========================
This module defines the immutable snapshot of a subdivided panel.

Why is this file needed?
------------------------
1. State Management: It holds the panel size, every partition line and the
   mullion width in one value. Each mutation returns a *new* snapshot, so a
   renderer holding an older snapshot never observes a half-applied change.
2. Invariants: Lines are kept sorted by position within their axis and carry
   stable ids; violations are programming defects and raise
   `LayoutInvariantError` on construction.
3. Consistency: Moving a line hands the opposite axis to the
   `DragPropagationEngine` inside the same transaction.

Classes:
    Panel: Real-world dimensions of the subdivided surface.
    LayoutResult: Snapshot plus status returned by every mutation.
    LayoutModel: The snapshot itself.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Optional

from windowlayout.config import DEFAULT_PANEL, DEFAULT_MULLION_WIDTH_MM, DEFAULT_FRAME_WIDTH_MM
from windowlayout.model.geometry_primitives import Axis
from windowlayout.model.geometry_utils import clamp, largest_gap_midpoint
from windowlayout.model.lines import Line, LineSpan, FULL, make_span
from windowlayout.model.propagation import DragPropagationEngine
from windowlayout.model.results import LayoutCondition, LayoutInvariantError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Panel:
    """Window/door panel in millimeters; origin at the bottom-left corner."""
    width: float = DEFAULT_PANEL[0]
    height: float = DEFAULT_PANEL[1]
    depth: float = DEFAULT_PANEL[2]
    frame_width: float = DEFAULT_FRAME_WIDTH_MM

    def __post_init__(self) -> None:
        if self.width <= 0.0 or self.height <= 0.0:
            raise ValueError(f"Panel dimensions must be positive, got {self.width} x {self.height}")
        if self.depth < 0.0 or self.frame_width < 0.0:
            raise ValueError("Panel depth and frame width must be non-negative.")

    def extent(self, axis: Axis) -> float:
        """Real extent along which a line of `axis` is positioned."""
        return self.height if axis is Axis.HORIZONTAL else self.width

    def inner_extent(self, axis: Axis) -> float:
        """Extent inside the frame, used by renderers to place mullion bars."""
        return max(0.0, self.extent(axis) - 2.0 * self.frame_width)

    @property
    def shorter_side(self) -> float:
        return min(self.width, self.height)


@dataclass(frozen=True)
class LayoutResult:
    """
    Outcome of a layout mutation.

    On rejection `model` is the unchanged input snapshot.
    """
    model: LayoutModel
    condition: LayoutCondition = LayoutCondition.OK
    message: str = ""
    line_id: Optional[str] = None
    adjusted: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.condition is LayoutCondition.OK


def _sorted(lines) -> tuple[Line, ...]:
    return tuple(sorted(lines, key=Line.sort_key))


@dataclass(frozen=True)
class LayoutModel:
    """Immutable snapshot of the partition lines of one panel."""
    panel: Panel = field(default_factory=Panel)
    horizontal: tuple[Line, ...] = ()
    vertical: tuple[Line, ...] = ()
    mullion_width: float = DEFAULT_MULLION_WIDTH_MM

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for axis in Axis:
            lines = self.lines(axis)
            for line in lines:
                if line.axis is not axis:
                    raise LayoutInvariantError(f"Line {line.id} with axis '{line.axis}' stored under '{axis}'")
                if not 0.0 <= line.position <= 1.0:
                    raise LayoutInvariantError(f"Line {line.id} position {line.position} outside [0, 1]")
                if line.span.start > line.span.end:
                    raise LayoutInvariantError(f"Line {line.id} span is reversed")
                if line.id in seen:
                    raise LayoutInvariantError(f"Duplicate line id {line.id}")
                seen.add(line.id)
            keys = [line.sort_key() for line in lines]
            if keys != sorted(keys):
                raise LayoutInvariantError(f"{axis} lines are not sorted by position")

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    @classmethod
    def from_positions(
        cls,
        horizontal: list[float] | None = None,
        vertical: list[float] | None = None,
        panel: Panel | None = None,
        mullion_width: float = DEFAULT_MULLION_WIDTH_MM,
    ) -> LayoutModel:
        """Build a snapshot of full-length lines at the given positions."""
        return cls(
            panel=panel or Panel(),
            horizontal=_sorted(Line(Axis.HORIZONTAL, clamp(p)) for p in horizontal or []),
            vertical=_sorted(Line(Axis.VERTICAL, clamp(p)) for p in vertical or []),
            mullion_width=mullion_width,
        )

    def lines(self, axis: Axis) -> tuple[Line, ...]:
        return self.horizontal if axis is Axis.HORIZONTAL else self.vertical

    def all_lines(self) -> tuple[Line, ...]:
        return self.horizontal + self.vertical

    def positions(self, axis: Axis) -> list[float]:
        return [line.position for line in self.lines(axis)]

    def find(self, line_id: str) -> Optional[Line]:
        for line in self.all_lines():
            if line.id == line_id:
                return line
        return None

    def index_of(self, line_id: str) -> Optional[int]:
        """Current index of a line within its axis; re-resolve after every move."""
        line = self.find(line_id)
        if line is None:
            return None
        return self.lines(line.axis).index(line)

    def suggest_position(self, axis: Axis) -> float:
        """Midpoint of the widest free gap on `axis`; where a menu-added line goes."""
        return largest_gap_midpoint(self.positions(axis))

    # ------------------------------------------------------------------------------
    # Mutations (each returns a new snapshot)
    # ------------------------------------------------------------------------------

    def add_line(self, axis: Axis, position: float) -> LayoutResult:
        """Insert a full-length line; the position is clamped to [0, 1]."""
        clamped = clamp(position)
        if clamped != position:
            logger.debug(f"Clamped {axis} line position {position} to {clamped}")
        line = Line(axis, clamped)
        model = self._with_lines(axis, self.lines(axis) + (line,))
        logger.info(f"Added {axis} line {line.id} at {clamped:.4f}")
        return LayoutResult(model, line_id=line.id)

    def add_partial_line(self, axis: Axis, position: float, start: float, end: float) -> LayoutResult:
        """
        Insert a line spanning [start, end] along the orthogonal axis.

        Rejects (returns the unchanged snapshot) when the span is degenerate or
        the position lies outside [0, 1].
        """
        if not 0.0 <= position <= 1.0:
            msg = f"Partial {axis} line position {position} outside [0, 1]"
            logger.warning(msg)
            return LayoutResult(self, LayoutCondition.OUT_OF_RANGE, msg)

        if start >= end or clamp(start) >= clamp(end):
            msg = f"Degenerate span [{start}, {end}] for {axis} line at {position}"
            logger.warning(msg)
            return LayoutResult(self, LayoutCondition.DEGENERATE_SPAN, msg)

        line = Line(axis, position, make_span(start, end))
        model = self._with_lines(axis, self.lines(axis) + (line,))
        logger.info(
            f"Added partial {axis} line {line.id} at {position:.4f} "
            f"spanning [{line.start:.4f}, {line.end:.4f}]"
        )
        return LayoutResult(model, line_id=line.id)

    def remove_line(self, axis: Axis, index: int) -> LayoutResult:
        """Remove the line at `index` on `axis`; invalid indices are a reported no-op."""
        lines = self.lines(axis)
        if not 0 <= index < len(lines):
            msg = f"No {axis} line at index {index} (have {len(lines)})"
            logger.warning(msg)
            return LayoutResult(self, LayoutCondition.INDEX_OUT_OF_RANGE, msg)

        removed = lines[index]
        model = self._with_lines(axis, lines[:index] + lines[index + 1:])
        logger.info(f"Removed {axis} line {removed.id} at {removed.position:.4f}")
        return LayoutResult(model, line_id=removed.id)

    def remove_line_by_id(self, line_id: str) -> LayoutResult:
        line = self.find(line_id)
        if line is None:
            return self._unknown(line_id)
        return self.remove_line(line.axis, self.lines(line.axis).index(line))

    def move_line(self, axis: Axis, index: int, new_position: float) -> LayoutResult:
        """
        Move the line at `index` and drag dependent partial lines along.

        The axis is re-sorted afterwards, so `index` may refer to another line
        in the returned snapshot; use `result.line_id` to re-resolve.
        """
        lines = self.lines(axis)
        if not 0 <= index < len(lines):
            msg = f"No {axis} line at index {index} (have {len(lines)})"
            logger.warning(msg)
            return LayoutResult(self, LayoutCondition.INDEX_OUT_OF_RANGE, msg)

        line = lines[index]
        moved = line.moved_to(new_position)
        if moved.position == line.position:
            return LayoutResult(self, line_id=line.id)

        propagation = DragPropagationEngine().propagate(
            axis=axis,
            old_position=line.position,
            new_position=moved.position,
            opposite_lines=self.lines(axis.opposite),
            moving_span=line.span,
        )

        own = lines[:index] + (moved,) + lines[index + 1:]
        model = self._with_lines(axis, own)._with_lines(axis.opposite, propagation.lines)
        logger.debug(
            f"Moved {axis} line {line.id} {line.position:.4f} -> {moved.position:.4f}; "
            f"adjusted {len(propagation.adjusted)} partial line(s)"
        )
        return LayoutResult(model, line_id=line.id, adjusted=propagation.adjusted)

    def move_line_by_id(self, line_id: str, new_position: float) -> LayoutResult:
        line = self.find(line_id)
        if line is None:
            return self._unknown(line_id)
        return self.move_line(line.axis, self.lines(line.axis).index(line), new_position)

    def set_span(self, line_id: str, span: LineSpan) -> LayoutResult:
        """Replace a line's span (a reversed span has already been re-ordered by PartialSpan)."""
        line = self.find(line_id)
        if line is None:
            return self._unknown(line_id)
        if not span.is_full and span.end - span.start <= 0.0:
            msg = f"Degenerate span [{span.start}, {span.end}] for line {line_id}"
            logger.warning(msg)
            return LayoutResult(self, LayoutCondition.DEGENERATE_SPAN, msg)

        span = FULL if span.is_full else make_span(span.start, span.end)
        lines = tuple(
            other.with_span(span) if other.id == line_id else other
            for other in self.lines(line.axis)
        )
        return LayoutResult(self._with_lines(line.axis, lines), line_id=line_id)

    def set_mullion_width(self, width: float) -> LayoutResult:
        """Rendering-only bar width in millimeters; not used by the geometry."""
        if width < 0.0:
            msg = f"Mullion width must be non-negative, got {width}"
            logger.warning(msg)
            return LayoutResult(self, LayoutCondition.OUT_OF_RANGE, msg)
        return LayoutResult(replace(self, mullion_width=width))

    def with_panel(self, panel: Panel) -> LayoutModel:
        return replace(self, panel=panel)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _with_lines(self, axis: Axis, lines) -> LayoutModel:
        if axis is Axis.HORIZONTAL:
            return replace(self, horizontal=_sorted(lines))
        return replace(self, vertical=_sorted(lines))

    def _unknown(self, line_id: str) -> LayoutResult:
        msg = f"No line with id {line_id}"
        logger.warning(msg)
        return LayoutResult(self, LayoutCondition.UNKNOWN_LINE, msg)
