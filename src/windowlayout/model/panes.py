"""
Pane Grid
=========
Cells (panes) induced by the partition lines and the content bound to them.

Why is this file needed?
------------------------
1. Geometry: Every horizontal and vertical position splits the panel; the
   cartesian product of the sorted positions gives the rectangular cells.
2. Content: Each cell carries user-edited properties (sash type, glass color,
   handle, ...). When lines change, the grid is recomputed from scratch and
   content is re-bound by `(row, col)` address, not by identity. A cell whose
   address shifts does NOT take its old content along.

Classes:
    PaneContent: Sash/glass properties of one pane.
    Cell: A grid address, its normalized rectangle and its content.
    PaneGridBuilder: Rebuild + reconcile.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
import logging
from typing import Callable, Iterable, Optional
import uuid

from windowlayout.model.geometry_utils import grid_positions

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class SashType(StrEnum):
    FIXED = "fixed"
    SLIDING = "sliding"
    CASEMENT = "casement"
    AWNING = "awning"
    HOPPER = "hopper"
    PIVOT = "pivot"


class OpenDirection(StrEnum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class HandleType(StrEnum):
    NONE = "none"
    LEVER = "lever"
    CRANK = "crank"
    PUSH = "push"
    PULL = "pull"


# Default glass tint per sash type, so pane kinds are distinguishable at a glance
SASH_GLASS_COLORS: dict[SashType, str] = {
    SashType.FIXED: "#8EB1C7",
    SashType.SLIDING: "#8EC78E",
    SashType.CASEMENT: "#B78EC7",
    SashType.AWNING: "#C7C78E",
    SashType.HOPPER: "#C7A88E",
    SashType.PIVOT: "#C78E9E",
}

DEFAULT_GLASS_COLOR = SASH_GLASS_COLORS[SashType.FIXED]
DEFAULT_FRAME_COLOR = "#FFFFFF"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Handle:
    type: HandleType
    position: OpenDirection


# Opening direction and handle each sash type starts with
SASH_PRESETS: dict[SashType, tuple[Optional[OpenDirection], Optional[Handle]]] = {
    SashType.FIXED: (None, None),
    SashType.SLIDING: (OpenDirection.RIGHT, Handle(HandleType.PULL, OpenDirection.RIGHT)),
    SashType.CASEMENT: (OpenDirection.LEFT, Handle(HandleType.LEVER, OpenDirection.RIGHT)),
    SashType.AWNING: (OpenDirection.TOP, Handle(HandleType.LEVER, OpenDirection.BOTTOM)),
    SashType.HOPPER: (OpenDirection.BOTTOM, Handle(HandleType.LEVER, OpenDirection.TOP)),
    SashType.PIVOT: (OpenDirection.RIGHT, Handle(HandleType.PUSH, OpenDirection.RIGHT)),
}


def default_handle_position(sash_type: SashType, direction: Optional[OpenDirection]) -> OpenDirection:
    """Where the handle goes for a sash that opens towards `direction`."""
    match sash_type:
        case SashType.CASEMENT | SashType.SLIDING:
            return OpenDirection.RIGHT if direction == OpenDirection.LEFT else OpenDirection.LEFT
        case SashType.AWNING:
            return OpenDirection.BOTTOM
        case SashType.HOPPER:
            return OpenDirection.TOP
        case _:
            return OpenDirection.RIGHT


def new_pane_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class PaneContent:
    """User-editable properties of one pane."""
    id: str = field(default_factory=new_pane_id)
    sash_type: SashType = SashType.FIXED
    open_direction: Optional[OpenDirection] = None
    handle: Optional[Handle] = None
    glass_color: str = DEFAULT_GLASS_COLOR
    frame_color: str = DEFAULT_FRAME_COLOR
    glass_thickness: float = 6.0  # mm
    glass_layers: int = 1
    is_active: bool = False

    def __post_init__(self) -> None:
        if self.glass_layers not in (1, 2, 3):
            raise ValueError(f"glass_layers must be 1, 2 or 3, got {self.glass_layers}")
        if self.glass_thickness <= 0.0:
            raise ValueError(f"glass_thickness must be positive, got {self.glass_thickness}")

    def with_sash_type(self, sash_type: SashType) -> PaneContent:
        """Switch sash type, resetting direction, handle and glass tint to the type's preset."""
        direction, handle = SASH_PRESETS[sash_type]
        return replace(
            self,
            sash_type=sash_type,
            open_direction=direction,
            handle=handle,
            glass_color=SASH_GLASS_COLORS[sash_type],
        )

    def with_open_direction(self, direction: OpenDirection) -> PaneContent:
        """Change the opening direction; an existing handle is re-positioned to match."""
        handle = self.handle
        if handle is not None:
            match self.sash_type:
                case SashType.CASEMENT:
                    side = OpenDirection.RIGHT if direction == OpenDirection.LEFT else OpenDirection.LEFT
                    handle = replace(handle, position=side)
                case SashType.AWNING:
                    handle = replace(handle, position=OpenDirection.BOTTOM)
                case SashType.HOPPER:
                    handle = replace(handle, position=OpenDirection.TOP)
        return replace(self, open_direction=direction, handle=handle)

    def with_handle_type(self, handle_type: HandleType) -> PaneContent:
        """Change the handle type, keeping its position; NONE removes the handle."""
        if handle_type == HandleType.NONE:
            return replace(self, handle=None)
        if self.handle is not None:
            position = self.handle.position
        else:
            position = default_handle_position(self.sash_type, self.open_direction)
        return replace(self, handle=Handle(handle_type, position))


@dataclass(frozen=True)
class Cell:
    """
    One pane of the grid.

    Rows count upwards from the bottom edge, columns rightwards from the left
    edge. The rectangle is in normalized panel space.
    """
    row: int
    col: int
    x0: float
    x1: float
    y0: float
    y1: float
    content: PaneContent = field(default_factory=PaneContent)

    @property
    def address(self) -> tuple[int, int]:
        return self.row, self.col

    @property
    def center(self) -> tuple[float, float]:
        return (self.x0 + self.x1) / 2.0, (self.y0 + self.y1) / 2.0

    def contains(self, x: float, y: float) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


class PaneGridBuilder:
    """Derives cells from line positions and reconciles them with previous content."""

    def __init__(self, default_content: Callable[[], PaneContent] = PaneContent) -> None:
        self.default_content = default_content

    def rebuild(
        self,
        previous_cells: Iterable[Cell],
        horizontal_positions: Iterable[float],
        vertical_positions: Iterable[float],
    ) -> list[Cell]:
        """
        Recompute the grid, carrying content forward by (row, col) address.

        Stable and idempotent: with unchanged positions every cell keeps its content.
        """
        rows = grid_positions(horizontal_positions)
        cols = grid_positions(vertical_positions)

        previous: dict[tuple[int, int], PaneContent] = {}
        for cell in previous_cells:
            previous.setdefault(cell.address, cell.content)

        cells: list[Cell] = []
        created = 0
        for row, (y0, y1) in enumerate(zip(rows[:-1], rows[1:])):
            for col, (x0, x1) in enumerate(zip(cols[:-1], cols[1:])):
                content = previous.get((row, col))
                if content is None:
                    content = self.default_content()
                    created += 1
                cells.append(Cell(row=row, col=col, x0=x0, x1=x1, y0=y0, y1=y1, content=content))

        logger.debug(f"Rebuilt pane grid {len(rows) - 1}x{len(cols) - 1}; {created} new pane(s)")
        return cells

    @staticmethod
    def find_pane(cells: Iterable[Cell], pane_id: str) -> Optional[Cell]:
        for cell in cells:
            if cell.content.id == pane_id:
                return cell
        return None

    @staticmethod
    def cell_at(cells: Iterable[Cell], x: float, y: float) -> Optional[Cell]:
        """Cell containing the normalized point (x, y); the first match wins on shared edges."""
        for cell in cells:
            if cell.contains(x, y):
                return cell
        return None
