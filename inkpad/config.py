"""
Pad configuration.

One explicit options model with named fields and documented defaults.
Values are validated once, when the model is built.
"""
import os
import logging
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("inkpad.config")

# 96 CSS pixels per inch, 25.4 mm per inch
DEFAULT_PIXELS_PER_MM = 96.0 / 25.4


class PadOptions(BaseModel):
    min_width: float = Field(0.5, gt=0, description="Lower stroke width bound")
    max_width: float = Field(2.5, gt=0, description="Upper stroke width bound")
    min_distance: float = Field(5.0, ge=0, description="Admission filter threshold")
    velocity_filter_weight: float = Field(0.7, ge=0, le=1, description="Velocity EMA weight")
    throttle_ms: float = Field(16, ge=0, description="Move-update rate limit, 0 disables")
    dot_size: Optional[float] = Field(None, gt=0, description="Dot radius; defaults to mid width")
    pen_color: str = "black"
    background_color: str = "rgba(0,0,0,0)"

    # Biometric export
    pixels_per_mm: float = Field(DEFAULT_PIXELS_PER_MM, gt=0)
    time_scale: int = Field(1000, gt=0)
    pressure_scale: int = Field(1000, gt=0)
    angle_scale: int = Field(1000, gt=0)

    @model_validator(mode="after")
    def _warn_inverted_bounds(self):
        # Left to the caller; widths are still clamped with max(.., min_width)
        if self.min_width > self.max_width:
            logger.warning(
                "min_width (%s) is greater than max_width (%s); stroke widths are undefined",
                self.min_width, self.max_width,
            )
        return self

    @property
    def resolved_dot_size(self) -> float:
        if self.dot_size is not None:
            return self.dot_size
        return (self.min_width + self.max_width) / 2

    @classmethod
    def from_env(cls, prefix: str = "INKPAD_") -> "PadOptions":
        """
        Build options from environment variables, e.g. INKPAD_MIN_WIDTH=1.0.
        Unset variables keep their defaults.
        """
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{prefix}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)
