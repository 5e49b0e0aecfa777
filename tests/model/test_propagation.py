"""Unit tests for drag propagation onto partial lines."""

import pytest

from windowlayout.model.geometry_primitives import Axis
from windowlayout.model.lines import FULL, Line, PartialSpan
from windowlayout.model.propagation import DragPropagationEngine


@pytest.fixture
def engine() -> DragPropagationEngine:
    return DragPropagationEngine()


def vertical(position, start, end, line_id):
    return Line(Axis.VERTICAL, position, PartialSpan(start, end), id=line_id)


class TestPropagate:
    """Tests for DragPropagationEngine.propagate."""

    def test_interior_crossing_moves_endpoint_towards_travel(self, engine):
        """Full H at 0.5 moved to 0.7 drags a V segment [0.4, 0.6] to [0.4, 0.7]."""
        segment = vertical(0.3, 0.4, 0.6, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.7, [segment])

        (updated,) = result.lines
        assert updated.start == pytest.approx(0.4)
        assert updated.end == pytest.approx(0.7)
        assert result.adjusted == ("v",)

    def test_matching_endpoint_follows(self, engine):
        """A segment ending on the moved line keeps terminating on it."""
        segment = vertical(0.3, 0.2, 0.5, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.35, [segment])
        assert (result.lines[0].start, result.lines[0].end) == (pytest.approx(0.2), pytest.approx(0.35))

    def test_closer_endpoint_follows(self, engine):
        segment = vertical(0.3, 0.1, 0.6, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.55, [segment])
        assert result.lines[0].start == pytest.approx(0.1)
        assert result.lines[0].end == pytest.approx(0.55)

    def test_crossing_other_endpoint_reorders_span(self, engine):
        segment = vertical(0.3, 0.5, 0.8, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.9, [segment])
        assert result.lines[0].start == pytest.approx(0.8)
        assert result.lines[0].end == pytest.approx(0.9)

    def test_full_lines_never_change(self, engine):
        full = Line(Axis.VERTICAL, 0.3, FULL, id="full")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.7, [full])
        assert result.lines == (full,)
        assert result.adjusted == ()

    def test_non_crossing_segment_untouched(self, engine):
        segment = vertical(0.3, 0.6, 0.9, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.7, [segment])
        assert result.lines == (segment,)
        assert result.adjusted == ()

    def test_partial_mover_only_affects_lines_it_crosses(self, engine):
        """A partial H spanning [0.0, 0.4] does not reach a V segment at x=0.6."""
        near = vertical(0.2, 0.4, 0.6, "near")
        far = vertical(0.6, 0.4, 0.6, "far")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.7, [near, far], moving_span=PartialSpan(0.0, 0.4))
        assert result.adjusted == ("near",)
        assert result.lines[1] is far

    def test_move_past_other_endpoint_reattaches(self, engine):
        """H 0.5 -> 0.35 over V [0.4, 0.5]: the end on H follows and the span reorders."""
        segment = vertical(0.3, 0.4, 0.5, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 0.35, [segment])
        assert result.lines[0].start == pytest.approx(0.35)
        assert result.lines[0].end == pytest.approx(0.4)
        assert result.adjusted == ("v",)

    def test_same_axis_line_raises(self, engine):
        with pytest.raises(ValueError):
            engine.propagate(Axis.HORIZONTAL, 0.5, 0.7, [Line(Axis.HORIZONTAL, 0.3)])

    def test_new_position_is_clamped(self, engine):
        segment = vertical(0.3, 0.4, 0.5, "v")
        result = engine.propagate(Axis.HORIZONTAL, 0.5, 1.5, [segment])
        assert result.lines[0].end == pytest.approx(1.0)


class TestCrosses:
    """Tests for the crossing test."""

    def test_endpoint_touch_counts(self, engine):
        segment = vertical(0.3, 0.5, 0.8, "v")
        assert engine.crosses(0.5, FULL, segment)

    def test_outside_span(self, engine):
        segment = vertical(0.3, 0.6, 0.8, "v")
        assert not engine.crosses(0.5, FULL, segment)
