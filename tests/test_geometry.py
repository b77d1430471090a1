import math
import pytest
from inkpad.pad.ingestion.models import Sample
from inkpad.pad.stroke_engine.geometry import Point2D, Segment, control_points


def pt(x, y):
    return Point2D(x=x, y=y)


def test_control_points_on_a_straight_line_sit_on_the_midpoints():
    c_in, c_out = control_points(pt(0, 0), pt(10, 0), pt(20, 0))
    assert (c_in.x, c_in.y) == (5.0, 0.0)
    assert (c_out.x, c_out.y) == (15.0, 0.0)


def test_control_points_are_length_weighted():
    c_in, c_out = control_points(pt(0, 0), pt(10, 0), pt(10, 30))
    assert c_in.x == pytest.approx(8.75)
    assert c_in.y == pytest.approx(-3.75)
    assert c_out.x == pytest.approx(13.75)
    assert c_out.y == pytest.approx(11.25)


def test_coincident_points_give_nan_controls():
    c_in, c_out = control_points(pt(1, 1), pt(1, 1), pt(1, 1))
    assert math.isnan(c_in.x) and math.isnan(c_out.y)


def test_segment_from_window_spans_the_middle_points():
    window = [Sample(x=x, y=0, time=i * 50) for i, x in enumerate((0, 10, 20, 30))]
    seg = Segment.from_window(window, 1.5, 2.0)
    assert (seg.p0.x, seg.p3.x) == (10.0, 20.0)
    assert (seg.c1.x, seg.c2.x) == (15.0, 15.0)
    assert (seg.width_start, seg.width_end) == (1.5, 2.0)
    assert not seg.is_degenerate


def test_point_at_endpoints_and_midpoint():
    seg = Segment(p0=pt(0, 0), c1=pt(5, 0), c2=pt(5, 0), p3=pt(10, 0), width_start=1, width_end=1)
    assert seg.point_at(0.0) == pt(0, 0)
    assert seg.point_at(1.0) == pt(10, 0)
    assert seg.point_at(0.5).x == pytest.approx(5.0)


def test_arc_length_of_straight_segment():
    seg = Segment(p0=pt(0, 0), c1=pt(5, 0), c2=pt(5, 0), p3=pt(10, 0), width_start=1, width_end=1)
    assert seg.arc_length() == pytest.approx(10.0)


def test_arc_length_is_a_coarse_polyline_estimate():
    # Quarter-circle-like curve: the 11-sample polyline is slightly shorter than the true curve
    seg = Segment(p0=pt(0, 0), c1=pt(0, 55.23), c2=pt(44.77, 100), p3=pt(100, 100), width_start=1, width_end=1)
    coarse = seg.arc_length()
    fine = 0.0
    prev = seg.point_at(0.0)
    for i in range(1, 1001):
        cur = seg.point_at(i / 1000)
        fine += math.hypot(cur.x - prev.x, cur.y - prev.y)
        prev = cur
    assert 0.99 * fine < coarse < fine


def test_nan_control_marks_segment_degenerate():
    seg = Segment(p0=pt(0, 0), c1=pt(math.nan, 0), c2=pt(1, 1), p3=pt(2, 2), width_start=1, width_end=1)
    assert seg.is_degenerate


def test_svg_path_uses_three_decimals():
    seg = Segment(p0=pt(0, 0), c1=pt(1 / 3, 0), c2=pt(5, 2.5), p3=pt(10, 0), width_start=1, width_end=1)
    assert seg.svg_path() == "M 0.000,0.000 C 0.333,0.000 5.000,2.500 10.000,0.000"
