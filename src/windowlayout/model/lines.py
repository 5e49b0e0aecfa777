"""
Partition Lines (Mullions)
==========================
Value types for the lines that subdivide the panel.

A line's extent along the orthogonal axis is a tagged variant:
`FullSpan` (spans the whole panel) or `PartialSpan(start, end)`.
A partial span that covers [0, 1] is canonicalized to `FULL`.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Union
import uuid

from windowlayout.config import EPSILON
from windowlayout.model.geometry_primitives import Axis, BoundedLine
from windowlayout.model.geometry_utils import clamp


@dataclass(frozen=True)
class FullSpan:
    start: float = field(default=0.0, init=False)
    end: float = field(default=1.0, init=False)

    @property
    def is_full(self) -> bool:
        return True


FULL = FullSpan()


@dataclass(frozen=True)
class PartialSpan:
    """
    Extent [start, end] along the orthogonal axis.

    A reversed pair is swapped on construction, so `start <= end` always holds.
    """
    start: float
    end: float

    def __post_init__(self) -> None:
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @property
    def is_full(self) -> bool:
        return self.start <= EPSILON and self.end >= 1.0 - EPSILON


LineSpan = Union[FullSpan, PartialSpan]


def make_span(start: float, end: float) -> LineSpan:
    """Build a span from two orthogonal coordinates (any order), clamped to [0, 1]."""
    span = PartialSpan(clamp(start), clamp(end))
    return FULL if span.is_full else span


def new_line_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Line:
    """
    A partition line with a stable identifier.

    The identifier survives moves and re-sorting; indices do not.
    """
    axis: Axis
    position: float
    span: LineSpan = FULL
    id: str = field(default_factory=new_line_id)

    @property
    def is_full(self) -> bool:
        return self.span.is_full

    @property
    def start(self) -> float:
        return self.span.start

    @property
    def end(self) -> float:
        return self.span.end

    def sort_key(self) -> tuple[float, float, str]:
        return self.position, self.span.start, self.id

    def moved_to(self, position: float) -> Line:
        return replace(self, position=clamp(position))

    def with_span(self, span: LineSpan) -> Line:
        return replace(self, span=span)

    def to_bounded(self) -> BoundedLine:
        return BoundedLine(
            axis=self.axis,
            position=self.position,
            start=self.span.start,
            end=self.span.end,
            source_id=self.id,
        )
