from typing import List
from xml.sax.saxutils import quoteattr
from ...config import PadOptions
from ..ingestion.models import PointGroup, Sample
from ..stroke_engine.geometry import Segment
from ..stroke_engine.replay import replay

# Visual match between disc-union rendering and an outlined SVG stroke
STROKE_WIDTH_FACTOR = 2.25


class SvgSink:
    """Vector export target: one <path> per segment, one <circle> per dot."""

    def __init__(self, options: PadOptions):
        self.options = options
        self.elements: List[str] = []

    def on_segment(self, segment: Segment, color: str):
        if segment.is_degenerate:
            return
        stroke_width = f"{segment.width_end * STROKE_WIDTH_FACTOR:.3f}"
        self.elements.append(
            f"<path d={quoteattr(segment.svg_path())} stroke-width={quoteattr(stroke_width)}"
            f" stroke={quoteattr(color)} fill=\"none\" stroke-linecap=\"round\"></path>"
        )

    def on_dot(self, sample: Sample, color: str):
        r = self.options.resolved_dot_size
        self.elements.append(
            f"<circle r={quoteattr(repr(float(r)))} cx={quoteattr(repr(float(sample.x)))}"
            f" cy={quoteattr(repr(float(sample.y)))} fill={quoteattr(color)}></circle>"
        )


def svg_document(elements: List[str], width: int, height: int) -> str:
    header = (
        '<svg xmlns="http://www.w3.org/2000/svg"'
        ' xmlns:xlink="http://www.w3.org/1999/xlink"'
        f' viewBox="0 0 {width} {height}" width="{width}" height="{height}">'
    )
    return header + "".join(elements) + "</svg>"


def to_svg(point_groups: List[PointGroup], width: int, height: int, options: PadOptions) -> str:
    sink = SvgSink(options)
    replay(point_groups, options, sink)
    return svg_document(sink.elements, width, height)
