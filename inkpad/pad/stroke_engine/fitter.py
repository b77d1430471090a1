from typing import List, Optional
from ...config import PadOptions
from ..ingestion.models import Sample
from .geometry import Segment
from .velocity import WidthModel

WINDOW_SIZE = 4


class CurveFitter:
    """
    Turns a stream of admitted samples into cubic segments.

    Keeps a rolling window of the last 4 samples. The third sample of a
    stroke duplicates the first one to the front so the first segment is
    emitted without waiting for a fourth point. Each emitted segment spans
    window[1] -> window[2]; the oldest sample is then dropped.
    """

    def __init__(self, options: PadOptions, width_model: Optional[WidthModel] = None):
        self.options = options
        self.width_model = width_model or WidthModel(options)
        self.window: List[Sample] = []

    def reset(self):
        self.window = []
        self.width_model.reset()

    def add_point(self, sample: Sample) -> Optional[Segment]:
        window = self.window
        window.append(sample)

        if len(window) <= 2:
            return None

        if len(window) == 3:
            window.insert(0, window[0])

        widths = self.width_model.widths_for(window[1], window[2])
        segment = Segment.from_window(window, widths.start, widths.end)

        # No more than WINDOW_SIZE samples at any time
        window.pop(0)
        return segment
