"""
Input adapter: platform pointer / mouse / touch events -> Sample.

Coordinates are made relative to the drawing surface's origin. Device
channels are only filled in for event kinds that carry them; everything
else keeps the UNKNOWN sentinel.
"""
import time
from enum import Enum
from typing import Callable, Optional
from pydantic import BaseModel
from .models import Sample, UNKNOWN


class EventKind(str, Enum):
    POINTER = "pointer"
    MOUSE = "mouse"
    TOUCH = "touch"


# Pointer types whose pointer events carry device channels
PRESSURE_POINTER_TYPES = ("pen", "touch")


class InputEvent(BaseModel):
    """The subset of a DOM-style input event the pad needs."""
    kind: EventKind = EventKind.POINTER
    clientX: float
    clientY: float
    timeStamp: Optional[float] = None
    pointerType: Optional[str] = None
    pointerId: int = 0
    # PointerEvent
    pressure: Optional[float] = None
    tiltX: Optional[float] = None
    tiltY: Optional[float] = None
    twist: Optional[float] = None
    # Touch
    force: Optional[float] = None
    rotationAngle: Optional[float] = None
    altitudeAngle: Optional[float] = None
    azimuthAngle: Optional[float] = None


class SurfaceRect(BaseModel):
    left: float = 0.0
    top: float = 0.0


def wall_clock_ms() -> float:
    return time.time() * 1000.0


def _channel(value: Optional[float]) -> float:
    return UNKNOWN if value is None else value


def sample_from_event(
    event: InputEvent,
    rect: Optional[SurfaceRect] = None,
    clock: Callable[[], float] = wall_clock_ms,
) -> Sample:
    rect = rect or SurfaceRect()
    values = {
        "x": event.clientX - rect.left,
        "y": event.clientY - rect.top,
        # Stamped once at capture; the sample carries its own time afterwards
        "time": event.timeStamp if event.timeStamp is not None else clock(),
    }

    if event.kind == EventKind.POINTER:
        if event.pointerType in PRESSURE_POINTER_TYPES:
            values["tilt_x"] = _channel(event.tiltX)
            values["tilt_y"] = _channel(event.tiltY)
            values["pressure"] = _channel(event.pressure)
            values["rotation"] = _channel(event.twist)
    elif event.kind == EventKind.TOUCH:
        values["pressure"] = _channel(event.force)
        values["rotation"] = _channel(event.rotationAngle)
        values["altitude"] = _channel(event.altitudeAngle)
        values["azimuth"] = _channel(event.azimuthAngle)

    return Sample(**values)


def pointer_type_of(event: InputEvent) -> str:
    if event.pointerType:
        return event.pointerType
    if event.kind == EventKind.TOUCH:
        return "touch"
    return "mouse"
