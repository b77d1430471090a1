import math
import pytest
from inkpad.config import PadOptions
from inkpad.pad.ingestion.models import Sample
from inkpad.pad.stroke_engine.geometry import Point2D, Segment
from inkpad.pad.stroke_engine.renderer import StrokeRenderer, draw_steps
from conftest import RecordingSurface


def curve(width_start=0.5, width_end=2.5):
    return Segment(
        p0=Point2D(x=0, y=0), c1=Point2D(x=10, y=20),
        c2=Point2D(x=30, y=20), p3=Point2D(x=40, y=0),
        width_start=width_start, width_end=width_end,
    )


def test_draw_steps_double_the_arc_length():
    seg = curve()
    assert draw_steps(seg) == math.floor(seg.arc_length()) * 2


def test_render_paints_one_disc_per_step(options):
    surface = RecordingSurface()
    seg = curve()
    assert StrokeRenderer(surface, options).render(seg, "red") is True

    color, discs = surface.paths[0]
    assert color == "red"
    assert len(discs) == draw_steps(seg)
    assert discs[0][:2] == (0.0, 0.0)


def test_disc_widths_use_cubic_interpolation(options):
    surface = RecordingSurface()
    seg = curve(0.5, 2.5)
    StrokeRenderer(surface, options).render(seg, "black")

    _, discs = surface.paths[0]
    steps = len(discs)
    for i, (_, _, radius) in enumerate(discs):
        t = i / steps
        assert radius == pytest.approx(min(0.5 + t ** 3 * 2.0, options.max_width))
    # Cubic ramp: halfway along the curve the width has moved only 1/8 of the way
    mid = discs[steps // 2][2]
    assert mid == pytest.approx(0.5 + 2.0 / 8, abs=0.1)


def test_disc_width_is_capped_at_max_width():
    options = PadOptions(min_width=0.5, max_width=1.0, throttle_ms=0)
    surface = RecordingSurface()
    StrokeRenderer(surface, options).render(curve(0.9, 3.0), "black")
    assert max(r for _, _, r in surface.paths[0][1]) <= 1.0


def test_degenerate_segment_is_skipped(options):
    surface = RecordingSurface()
    seg = Segment(
        p0=Point2D(x=1, y=1), c1=Point2D(x=math.nan, y=math.nan),
        c2=Point2D(x=math.nan, y=math.nan), p3=Point2D(x=1, y=1),
        width_start=1, width_end=1,
    )
    assert StrokeRenderer(surface, options).render(seg, "black") is False
    assert surface.calls == []


def test_dot_uses_mid_width_by_default(options):
    surface = RecordingSurface()
    StrokeRenderer(surface, options).render_dot(Sample(x=3, y=4, time=0), "blue")
    assert surface.paths == [("blue", [(3.0, 4.0, 1.5)])]


def test_dot_size_override():
    options = PadOptions(dot_size=4, throttle_ms=0)
    surface = RecordingSurface()
    StrokeRenderer(surface, options).render_dot(Sample(x=3, y=4, time=0), "blue")
    assert surface.paths[0][1][0][2] == 4.0


def test_clear_fills_with_background(options):
    surface = RecordingSurface(20, 10)
    StrokeRenderer(surface, options).clear()
    assert surface.calls == [
        ("clear_rect", 0, 0, 20, 10),
        ("fill_rect", 0, 0, 20, 10, "rgba(0,0,0,0)"),
    ]
