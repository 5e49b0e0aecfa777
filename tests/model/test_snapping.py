"""Unit tests for the snap engine (default 2000 x 1800 mm panel, 50 mm radius)."""

import pytest

from windowlayout.config import LayoutSettings
from windowlayout.model.geometry_primitives import Axis, Point
from windowlayout.model.layout import LayoutModel, Panel
from windowlayout.model.lines import Line, PartialSpan
from windowlayout.model.snapping import SnapEngine, SnapKind


def engine_for(*lines: Line, settings: LayoutSettings | None = None) -> SnapEngine:
    horizontal = tuple(sorted((line for line in lines if line.axis is Axis.HORIZONTAL), key=Line.sort_key))
    vertical = tuple(sorted((line for line in lines if line.axis is Axis.VERTICAL), key=Line.sort_key))
    return SnapEngine(LayoutModel(horizontal=horizontal, vertical=vertical), settings)


def assert_point(point: Point, x: float, y: float) -> None:
    assert point.x == pytest.approx(x)
    assert point.y == pytest.approx(y)


class TestCandidates:
    """Tests for candidate_lines."""

    def test_frame_edges_always_present(self):
        assert len(engine_for().candidate_lines()) == 4

    def test_partial_lines_keep_their_span(self):
        engine = engine_for(Line(Axis.HORIZONTAL, 0.5, PartialSpan(0.2, 0.4), id="p"))
        (bounded,) = [c for c in engine.candidate_lines() if c.source_id == "p"]
        assert (bounded.start, bounded.end) == (0.2, 0.4)


class TestSnapPriority:
    """Tests for SnapEngine.snap_normalized."""

    def test_nothing_in_range(self):
        result = engine_for().snap_normalized(Point(0.5, 0.5))
        assert result.kind == SnapKind.NONE
        assert result.snapped_point == result.original_point
        assert not result.is_snapped

    def test_frame_edge(self):
        result = engine_for().snap_normalized(Point(0.5, 0.01))
        assert result.kind == SnapKind.HORIZONTAL_LINE
        assert_point(result.snapped_point, 0.5, 0.0)

    def test_frame_corner_is_intersection(self):
        result = engine_for().snap_normalized(Point(0.01, 0.01))
        assert result.kind == SnapKind.INTERSECTION
        assert_point(result.snapped_point, 0.0, 0.0)

    def test_full_lines_intersection(self):
        engine = engine_for(Line(Axis.HORIZONTAL, 0.5), Line(Axis.VERTICAL, 0.5))
        result = engine.snap_normalized(Point(0.51, 0.49))
        assert result.kind == SnapKind.INTERSECTION
        assert_point(result.snapped_point, 0.5, 0.5)

    def test_endpoint_of_partial_line(self):
        engine = engine_for(Line(Axis.HORIZONTAL, 0.5, PartialSpan(0.2, 0.4)))
        result = engine.snap_normalized(Point(0.41, 0.51))
        assert result.kind == SnapKind.ENDPOINT
        assert_point(result.snapped_point, 0.4, 0.5)

    def test_intersection_outside_span_falls_back_to_closer_line(self):
        """V segment [0, 0.3] does not reach H at 0.6; the H line is closer in millimeters."""
        engine = engine_for(
            Line(Axis.VERTICAL, 0.5, PartialSpan(0.0, 0.3)),
            Line(Axis.HORIZONTAL, 0.6),
        )
        result = engine.snap_normalized(Point(0.51, 0.61))
        assert result.kind == SnapKind.HORIZONTAL_LINE
        assert_point(result.snapped_point, 0.51, 0.6)

    def test_vertical_line_projection(self):
        engine = engine_for(Line(Axis.VERTICAL, 0.5))
        result = engine.snap_normalized(Point(0.51, 0.5))
        assert result.kind == SnapKind.VERTICAL_LINE
        assert_point(result.snapped_point, 0.5, 0.5)

    def test_intersection_beats_coincident_endpoint(self):
        engine = engine_for(
            Line(Axis.VERTICAL, 0.5, PartialSpan(0.5, 1.0)),
            Line(Axis.HORIZONTAL, 0.5),
        )
        result = engine.snap_normalized(Point(0.505, 0.505))
        assert result.kind == SnapKind.INTERSECTION

    def test_covering_run_wins_among_equally_distant_lines(self):
        """Two runs share x=0.5; the one whose span covers the point is used."""
        engine = engine_for(
            Line(Axis.VERTICAL, 0.5, PartialSpan(0.0, 0.2)),
            Line(Axis.VERTICAL, 0.5, PartialSpan(0.4, 0.8)),
            Line(Axis.HORIZONTAL, 0.6),
        )
        result = engine.snap_normalized(Point(0.51, 0.6))
        assert result.kind == SnapKind.INTERSECTION
        assert_point(result.snapped_point, 0.5, 0.6)

    def test_zero_threshold_disables_snapping(self):
        engine = engine_for(settings=LayoutSettings(snap_threshold=0.0))
        assert engine.snap_normalized(Point(0.5, 0.0)).kind == SnapKind.NONE


class TestHostSnapping:
    """Tests for snapping host-space points."""

    def test_host_point_in_meters(self):
        engine = engine_for(Line(Axis.VERTICAL, 0.5))
        result = engine.snap(Point(1.02, 0.9))
        assert result.kind == SnapKind.VERTICAL_LINE
        assert_point(result.original_point, 0.51, 0.5)
        assert_point(result.snapped_point, 0.5, 0.5)

    def test_update_model_follows_panel_size(self):
        engine = engine_for()
        engine.update_model(LayoutModel(panel=Panel(width=1000.0, height=1000.0)))
        assert engine.transform.width == 1000.0
        assert_point(engine.snap(Point(0.5, 0.5)).original_point, 0.5, 0.5)
