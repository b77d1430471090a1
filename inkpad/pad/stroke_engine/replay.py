"""
Shared fit/replay traversal.

Live capture and every export target push samples through the same
StrokeSession, so a stored drawing replays to exactly what was drawn.
"""
import logging
from typing import List, Optional, Tuple, Union
from ...config import PadOptions
from ..ingestion.models import PointGroup, Sample
from .fitter import CurveFitter
from .geometry import Segment
from .renderer import StrokeSink

logger = logging.getLogger("inkpad.replay")


class StrokeSession:
    """
    Fits one gesture. The first sample is emitted as a dot, every later
    sample may complete a segment. Degenerate segments never reach the sink.
    """

    def __init__(self, fitter: CurveFitter, sink: StrokeSink, color: str):
        self.fitter = fitter
        self.sink = sink
        self.color = color
        self.count = 0
        fitter.reset()

    def feed(self, sample: Sample) -> Optional[Segment]:
        first = self.count == 0
        segment = self.fitter.add_point(sample)
        self.count += 1

        if first:
            self.sink.on_dot(sample, self.color)
            return None

        if segment is None:
            return None

        if segment.is_degenerate:
            logger.debug("Degenerate window ending at (%s, %s); segment skipped", sample.x, sample.y)
            return None

        self.sink.on_segment(segment, self.color)
        return segment


def replay(point_groups: List[PointGroup], options: PadOptions, sink: StrokeSink,
           fitter: Optional[CurveFitter] = None):
    """
    Push every group through a fresh fitter state and into `sink`.
    """
    fitter = fitter or CurveFitter(options)
    for group in point_groups:
        if not group.points:
            continue
        session = StrokeSession(fitter, sink, group.color)
        for sample in group.points:
            session.feed(sample)


Emitted = Tuple[str, Union[Segment, Sample], str]


class CollectingSink:
    """Keeps the ordered output of a pass, e.g. to compare two replays."""

    def __init__(self):
        self.events: List[Emitted] = []

    def on_segment(self, segment: Segment, color: str):
        self.events.append(("segment", segment, color))

    def on_dot(self, sample: Sample, color: str):
        self.events.append(("dot", sample, color))

    @property
    def segments(self) -> List[Segment]:
        return [item for kind, item, _ in self.events if kind == "segment"]

    @property
    def dots(self) -> List[Sample]:
        return [item for kind, item, _ in self.events if kind == "dot"]
