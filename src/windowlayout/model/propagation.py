"""
Drag Propagation
================
Keeps partial lines attached to the lines they terminate against.

Why is this file needed?
------------------------
A partial line is defined by where it ends against *other* lines. When one of
those anchor lines moves, every partial line on the opposite axis that crossed
it must follow, or the subdivision visually detaches.

Rules (for each opposite-axis line S that crossed the moving line before the move):
1. Full-length lines are never modified.
2. An endpoint of S equal to the old position (within epsilon) follows the move.
3. If the old position was strictly inside S's span, the endpoint closer to it
   follows. Equidistant endpoints resolve towards the direction of travel.
4. The span is re-ordered if the adjustment reversed it. An adjustment that
   would collapse the span to zero length is not applied.

The nearest-endpoint rule is a heuristic: for very short segments dragged far,
it can pick the wrong endpoint.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable

from windowlayout.config import EPSILON
from windowlayout.model.geometry_primitives import Axis
from windowlayout.model.geometry_utils import clamp, nearly_equal
from windowlayout.model.lines import Line, LineSpan, FULL, PartialSpan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropagationResult:
    """Opposite-axis lines after the move, and the ids that were adjusted."""
    lines: tuple[Line, ...]
    adjusted: tuple[str, ...] = field(default_factory=tuple)


class DragPropagationEngine:
    """Stateless; one instance can serve every move."""

    def __init__(self, eps: float = EPSILON) -> None:
        self.eps = eps

    def crosses(self, moving_position: float, moving_span: LineSpan, other: Line) -> bool:
        """Did `other` geometrically cross the moving line at `moving_position`?"""
        eps = self.eps
        return (
            moving_span.start - eps <= other.position <= moving_span.end + eps
            and other.span.start - eps <= moving_position <= other.span.end + eps
        )

    def propagate(
        self,
        axis: Axis,
        old_position: float,
        new_position: float,
        opposite_lines: Iterable[Line],
        moving_span: LineSpan = FULL,
    ) -> PropagationResult:
        """
        Update the opposite-axis lines after a line of `axis` moved.

        Args:
            axis: Axis of the moving line.
            old_position: Position before the move.
            new_position: Position after the move (clamped to [0, 1]).
            opposite_lines: Current lines on the other axis.
            moving_span: Span of the moving line before the move.

        Returns:
            PropagationResult with every opposite line (adjusted or not, in the
            original order) and the ids of those that changed.
        """
        new_position = clamp(new_position)
        updated: list[Line] = []
        adjusted: list[str] = []

        for other in opposite_lines:
            if other.axis is axis:
                raise ValueError(f"Line {other.id} is on the moving axis '{axis}', expected '{axis.opposite}'")

            if other.is_full or not self.crosses(old_position, moving_span, other):
                updated.append(other)
                continue

            span = self._adjust(other.span, old_position, new_position)
            if span is None or span == other.span:
                updated.append(other)
                continue

            logger.debug(
                f"Propagating {axis} move {old_position:.4f} -> {new_position:.4f} "
                f"to line {other.id}: [{other.span.start:.4f}, {other.span.end:.4f}] -> "
                f"[{span.start:.4f}, {span.end:.4f}]"
            )
            updated.append(other.with_span(span))
            adjusted.append(other.id)

        return PropagationResult(lines=tuple(updated), adjusted=tuple(adjusted))

    def _adjust(self, span: LineSpan, old: float, new: float) -> LineSpan | None:
        start, end = span.start, span.end

        if nearly_equal(start, old, self.eps):
            start = new
        elif nearly_equal(end, old, self.eps):
            end = new
        else:
            to_start = abs(old - start)
            to_end = abs(end - old)
            if nearly_equal(to_start, to_end, self.eps):
                moving_up = new > old
                if moving_up:
                    end = new
                else:
                    start = new
            elif to_start < to_end:
                start = new
            else:
                end = new

        if abs(end - start) <= self.eps:
            logger.warning(f"Skipping propagation that would collapse span [{span.start:.4f}, {span.end:.4f}]")
            return None

        # PartialSpan restores start <= end if the move crossed the other endpoint
        result = PartialSpan(start, end)
        return FULL if result.is_full else result
