"""Unit tests for the pane grid and pane content."""

from dataclasses import replace

import pytest

from windowlayout.model.panes import (
    Cell,
    Handle,
    HandleType,
    OpenDirection,
    PaneContent,
    PaneGridBuilder,
    SashType,
    SASH_GLASS_COLORS,
    default_handle_position,
)


def by_address(cells):
    return {cell.address: cell for cell in cells}


@pytest.fixture
def builder() -> PaneGridBuilder:
    return PaneGridBuilder()


class TestRebuild:
    """Tests for PaneGridBuilder.rebuild."""

    def test_empty_layout_has_one_cell(self, builder):
        (cell,) = builder.rebuild([], [], [])
        assert cell.address == (0, 0)
        assert (cell.x0, cell.x1, cell.y0, cell.y1) == (0.0, 1.0, 0.0, 1.0)

    def test_grid_shape_and_rectangles(self, builder):
        cells = builder.rebuild([], [0.5], [0.25, 0.75])
        assert len(cells) == 6
        cell = by_address(cells)[(1, 2)]
        assert (cell.x0, cell.x1, cell.y0, cell.y1) == (0.75, 1.0, 0.5, 1.0)

    def test_duplicate_positions_do_not_create_empty_cells(self, builder):
        cells = builder.rebuild([], [0.5, 0.5, 0.0, 1.0], [])
        assert len(cells) == 2

    def test_idempotent(self, builder):
        """rebuild(rebuild(c, H, V), H, V) == rebuild(c, H, V)."""
        first = builder.rebuild([], [0.3, 0.6], [0.5])
        second = builder.rebuild(first, [0.3, 0.6], [0.5])
        assert second == first

    def test_content_preserved_when_address_is_stable(self, builder):
        """Inserting V at 0.75 leaves the old (0, 1) pane addressed as (0, 1)."""
        cells = builder.rebuild([], [0.5], [0.5])
        custom = by_address(cells)[(0, 1)].content.with_sash_type(SashType.CASEMENT)
        cells = [replace(c, content=custom) if c.address == (0, 1) else c for c in cells]

        rebuilt = by_address(builder.rebuild(cells, [0.5], [0.5, 0.75]))
        assert rebuilt[(0, 1)].content == custom
        assert rebuilt[(0, 1)].x1 == 0.75

    def test_content_not_migrated_when_address_shifts(self, builder):
        """Inserting V at 0.25 shifts the old (0, 1) region to (0, 2); content stays at (0, 1)."""
        cells = builder.rebuild([], [0.5], [0.5])
        custom = by_address(cells)[(0, 1)].content.with_sash_type(SashType.CASEMENT)
        cells = [replace(c, content=custom) if c.address == (0, 1) else c for c in cells]

        rebuilt = by_address(builder.rebuild(cells, [0.5], [0.25, 0.5]))
        assert rebuilt[(0, 1)].content == custom
        assert rebuilt[(0, 1)].x0 == 0.25
        assert rebuilt[(0, 2)].content != custom
        assert rebuilt[(0, 2)].content.sash_type == SashType.FIXED

    def test_removed_cells_drop_content(self, builder):
        cells = builder.rebuild([], [], [0.5])
        rebuilt = builder.rebuild(cells, [], [])
        assert len(rebuilt) == 1
        assert rebuilt[0].content == cells[0].content


class TestLookup:
    """Tests for find_pane / cell_at."""

    def test_find_pane(self, builder):
        cells = builder.rebuild([], [0.5], [])
        target = cells[1]
        assert PaneGridBuilder.find_pane(cells, target.content.id) == target
        assert PaneGridBuilder.find_pane(cells, "missing") is None

    def test_cell_at(self, builder):
        cells = builder.rebuild([], [0.5], [0.5])
        assert PaneGridBuilder.cell_at(cells, 0.75, 0.25).address == (0, 1)
        assert PaneGridBuilder.cell_at(cells, 0.1, 0.9).address == (1, 0)
        assert PaneGridBuilder.cell_at(cells, 1.5, 0.5) is None


class TestPaneContent:
    """Tests for sash presets and handle rules."""

    def test_defaults(self):
        content = PaneContent()
        assert content.sash_type == SashType.FIXED
        assert content.glass_color == "#8EB1C7"
        assert content.frame_color == "#FFFFFF"
        assert content.handle is None

    @pytest.mark.parametrize("layers", [0, 4])
    def test_invalid_glass_layers(self, layers):
        with pytest.raises(ValueError):
            PaneContent(glass_layers=layers)

    def test_sash_preset(self):
        content = PaneContent().with_sash_type(SashType.AWNING)
        assert content.open_direction == OpenDirection.TOP
        assert content.handle == Handle(HandleType.LEVER, OpenDirection.BOTTOM)
        assert content.glass_color == SASH_GLASS_COLORS[SashType.AWNING]

    def test_fixed_preset_clears_handle(self):
        content = PaneContent().with_sash_type(SashType.CASEMENT).with_sash_type(SashType.FIXED)
        assert content.open_direction is None
        assert content.handle is None

    def test_preset_keeps_id(self):
        content = PaneContent()
        assert content.with_sash_type(SashType.SLIDING).id == content.id

    def test_casement_direction_moves_handle_to_opposite_side(self):
        content = PaneContent().with_sash_type(SashType.CASEMENT)
        flipped = content.with_open_direction(OpenDirection.RIGHT)
        assert flipped.handle.position == OpenDirection.LEFT
        assert flipped.with_open_direction(OpenDirection.LEFT).handle.position == OpenDirection.RIGHT

    def test_handle_type_keeps_position(self):
        content = PaneContent().with_sash_type(SashType.CASEMENT).with_handle_type(HandleType.PULL)
        assert content.handle == Handle(HandleType.PULL, OpenDirection.RIGHT)

    def test_handle_none_removes(self):
        content = PaneContent().with_sash_type(SashType.CASEMENT).with_handle_type(HandleType.NONE)
        assert content.handle is None

    def test_new_handle_uses_default_position(self):
        content = PaneContent().with_sash_type(SashType.HOPPER).with_handle_type(HandleType.NONE)
        assert content.with_handle_type(HandleType.CRANK).handle.position == OpenDirection.TOP

    @pytest.mark.parametrize("sash,direction,expected", [
        (SashType.CASEMENT, OpenDirection.LEFT, OpenDirection.RIGHT),
        (SashType.SLIDING, OpenDirection.RIGHT, OpenDirection.LEFT),
        (SashType.AWNING, OpenDirection.TOP, OpenDirection.BOTTOM),
        (SashType.HOPPER, OpenDirection.BOTTOM, OpenDirection.TOP),
        (SashType.PIVOT, None, OpenDirection.RIGHT),
    ])
    def test_default_handle_position(self, sash, direction, expected):
        assert default_handle_position(sash, direction) == expected


class TestCell:
    """Tests for Cell helpers."""

    def test_center_and_contains(self):
        cell = Cell(row=0, col=0, x0=0.0, x1=0.5, y0=0.0, y1=1.0)
        assert cell.center == (0.25, 0.5)
        assert cell.contains(0.5, 1.0)
        assert not cell.contains(0.6, 0.5)
