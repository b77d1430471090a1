"""
Disc-union stroke rendering.

A variable-width stroke is painted as many overlapping filled discs along
the fitted curve. The drawing surface is an abstract immediate-mode 2D
canvas; the raster implementation lives in export/raster.py.
"""
import math
import logging
from typing import Protocol
from ...config import PadOptions
from ..ingestion.models import Sample
from .geometry import Segment

logger = logging.getLogger("inkpad.renderer")


class DrawingSurface(Protocol):
    width: int
    height: int

    def begin_path(self) -> None: ...

    def disc(self, x: float, y: float, radius: float) -> None: ...

    def fill(self, color: str) -> None: ...

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None: ...


class StrokeSink(Protocol):
    """Receives the output of a fit/replay pass: segments and isolated dots."""

    def on_segment(self, segment: Segment, color: str) -> None: ...

    def on_dot(self, sample: Sample, color: str) -> None: ...


def draw_steps(segment: Segment) -> int:
    # x2 because arc-length-only steps leave gaps between discs on tight curves
    return math.floor(segment.arc_length()) * 2


class StrokeRenderer:
    def __init__(self, surface: DrawingSurface, options: PadOptions):
        self.surface = surface
        self.options = options

    def render(self, segment: Segment, color: str) -> bool:
        """
        Paint one segment. Returns False when the segment was skipped.
        """
        if segment.is_degenerate:
            logger.debug("Skipping degenerate segment %s", segment.svg_path())
            return False

        surface = self.surface
        width_delta = segment.width_end - segment.width_start
        steps = draw_steps(segment)

        surface.begin_path()
        for i in range(steps):
            t = i / steps
            ttt = t * t * t
            pt = segment.point_at(t)
            # Width follows the Bezier end weight t^3, not a linear ramp
            width = min(segment.width_start + ttt * width_delta, self.options.max_width)
            surface.disc(pt.x, pt.y, width)
        surface.fill(color)
        return True

    def render_dot(self, sample: Sample, color: str):
        surface = self.surface
        surface.begin_path()
        surface.disc(sample.x, sample.y, self.options.resolved_dot_size)
        surface.fill(color)

    def clear(self):
        surface = self.surface
        surface.clear_rect(0, 0, surface.width, surface.height)
        surface.fill_rect(0, 0, surface.width, surface.height, self.options.background_color)


class SurfaceSink:
    """Live drawing target: forwards segments and dots to the renderer."""

    def __init__(self, renderer: StrokeRenderer):
        self.renderer = renderer

    def on_segment(self, segment: Segment, color: str):
        self.renderer.render(segment, color)

    def on_dot(self, sample: Sample, color: str):
        self.renderer.render_dot(sample, color)
