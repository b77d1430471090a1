import math
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import List, Optional
from ...config import PadOptions

# Device channels the input source could not provide
UNKNOWN = -1.0


class Sample(BaseModel):
    """One captured input observation. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    time: float = Field(validation_alias=AliasChoices("time", "t"))  # ms
    pressure: float = UNKNOWN
    tilt_x: float = UNKNOWN
    tilt_y: float = UNKNOWN
    rotation: float = UNKNOWN
    altitude: float = UNKNOWN
    azimuth: float = UNKNOWN

    def distance_to(self, other: "Sample") -> float:
        return math.sqrt((self.x - other.x)**2 + (self.y - other.y)**2)

    def velocity_from(self, start: "Sample") -> float:
        if self.time == start.time:
            return 0.0
        return self.distance_to(start) / (self.time - start.time)


class PointGroup(BaseModel):
    """Samples of one continuous gesture, sharing one color."""
    color: str = "black"
    points: List[Sample] = []


class DrawingRequest(BaseModel):
    point_groups: List[PointGroup]
    width: int = Field(300, gt=0)
    height: int = Field(150, gt=0)
    options: Optional[PadOptions] = None
