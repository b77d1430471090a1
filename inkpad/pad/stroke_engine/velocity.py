from pydantic import BaseModel
from ...config import PadOptions
from ..ingestion.models import Sample


class StrokeWidths(BaseModel):
    start: float
    end: float


class VelocityState(BaseModel):
    last_velocity: float = 0.0
    last_width: float


class WidthModel:
    """
    Maps pointer speed to stroke width.

    Speed is smoothed with an exponential moving average; the width is
    inversely proportional to the smoothed speed and floored at min_width.
    Every timestamp comes from the samples, so the same input always gives
    the same widths.
    """

    def __init__(self, options: PadOptions):
        self.options = options
        self.state = self._initial_state()

    def _initial_state(self) -> VelocityState:
        return VelocityState(
            last_velocity=0.0,
            last_width=(self.options.min_width + self.options.max_width) / 2,
        )

    def reset(self):
        self.state = self._initial_state()

    def stroke_width(self, velocity: float) -> float:
        return max(self.options.max_width / (velocity + 1), self.options.min_width)

    def widths_for(self, start: Sample, end: Sample) -> StrokeWidths:
        weight = self.options.velocity_filter_weight
        velocity = weight * end.velocity_from(start) + (1 - weight) * self.state.last_velocity
        new_width = self.stroke_width(velocity)

        widths = StrokeWidths(start=self.state.last_width, end=new_width)

        self.state.last_velocity = velocity
        self.state.last_width = new_width
        return widths
