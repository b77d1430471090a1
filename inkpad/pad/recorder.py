"""
Stroke Recorder / Replayer.

SignaturePad owns the ordered collection of point groups and the drawing
surface. Live samples go through the admission filter, the fitter and the
renderer; undo, from_data and every export replay the stored samples through
the same StrokeSession so the output matches what was drawn live.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union
from ..config import PadOptions
from ..utils import read_image_from_data_url, to_data_url
from .errors import ImageRestoreError, UnsupportedImageFormat
from .ingestion.models import PointGroup, Sample
from .stroke_engine.admission import admit
from .stroke_engine.fitter import CurveFitter
from .stroke_engine.renderer import DrawingSurface, StrokeRenderer, SurfaceSink
from .stroke_engine.replay import StrokeSession, replay
from .stroke_engine.throttle import Throttle, monotonic_ms, schedule
from .export import biometric, svg
from .export.raster import PillowSurface, RASTER_FORMATS, image_data_url

logger = logging.getLogger("inkpad.recorder")

SVG_MIME = "image/svg+xml"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SignaturePad:
    def __init__(
        self,
        surface: Optional[DrawingSurface] = None,
        options: Optional[PadOptions] = None,
        width: int = 300,
        height: int = 150,
        on_begin: Optional[Callable[[Optional[Sample]], None]] = None,
        on_end: Optional[Callable[[Optional[Sample]], None]] = None,
        now: Callable[[], datetime] = utc_now,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.options = options or PadOptions()
        self.surface = surface if surface is not None else PillowSurface(width, height)
        self.pen_color = self.options.pen_color
        self.on_begin = on_begin
        self.on_end = on_end
        self.device = biometric.DeviceInfo()

        self.renderer = StrokeRenderer(self.surface, self.options)
        self.fitter = CurveFitter(self.options)
        self._sink = SurfaceSink(self.renderer)
        self._now = now

        # Direct or rate-limited, decided once
        self._stroke_move_update = schedule(self.add_sample, self.options.throttle_ms, clock)

        self._data: List[PointGroup] = []
        self._session: Optional[StrokeSession] = None
        self.clear()

    # State

    def is_empty(self) -> bool:
        return self._is_empty

    @property
    def is_drawing(self) -> bool:
        return self._session is not None

    @property
    def started_at(self) -> datetime:
        return self._started_at

    def clear(self):
        self.renderer.clear()
        self._cancel_pending()
        self._data = []
        self._session = None
        self.fitter.reset()
        self._started_at = self._now()
        self._is_empty = True

    # Capture

    def begin_stroke(
        self,
        color: Optional[str] = None,
        sample: Optional[Sample] = None,
        pointer_type: Optional[str] = None,
        pointer_id: Optional[int] = None,
    ) -> bool:
        if self._session is not None:
            logger.debug("Ignoring stroke start while another stroke is active")
            return False

        if pointer_type is not None:
            self.device.pointer_type = pointer_type
        if pointer_id is not None:
            self.device.pointer_id = pointer_id

        group = PointGroup(color=color or self.pen_color, points=[])
        self._data.append(group)
        self._session = StrokeSession(self.fitter, self._sink, group.color)

        if self.on_begin:
            self.on_begin(sample)

        if sample is not None:
            self.add_sample(sample)
        return True

    def add_sample(self, sample: Sample) -> bool:
        """
        Admit, fit and draw one sample of the active stroke.
        Returns False when the sample was dropped.
        """
        if self._session is None:
            logger.debug("Sample outside of a stroke ignored")
            return False

        points = self._data[-1].points
        last = points[-1] if points else None
        if not admit(sample, last, self.options.min_distance):
            return False

        self._session.feed(sample)
        points.append(sample)
        self._is_empty = False
        return True

    def stroke_move(self, sample: Sample):
        """Move update through the scheduling policy (throttled or direct)."""
        if self._session is None:
            return
        self._stroke_move_update(sample)

    def flush(self):
        if isinstance(self._stroke_move_update, Throttle):
            self._stroke_move_update.flush()

    def end_stroke(self, sample: Optional[Sample] = None):
        if self._session is None:
            return
        self.flush()
        if sample is not None:
            self.add_sample(sample)
        self._session = None

        if self.on_end:
            self.on_end(sample)

    def _cancel_pending(self):
        if isinstance(self._stroke_move_update, Throttle):
            self._stroke_move_update.cancel()

    # Replay

    def undo(self):
        if not self._data:
            return
        if self._session is not None:
            self._cancel_pending()
            self._session = None
        self._data.pop()
        self._redraw()

    def _redraw(self):
        self.renderer.clear()
        replay(self._data, self.options, self._sink, self.fitter)
        self._is_empty = not any(group.points for group in self._data)

    def from_data(self, point_groups: List[Union[PointGroup, dict]]):
        groups = [PointGroup.model_validate(g) if isinstance(g, dict) else g for g in point_groups]
        self.clear()
        replay(groups, self.options, self._sink, self.fitter)
        self._data = groups
        self._is_empty = not any(group.points for group in groups)

    def to_data(self) -> List[PointGroup]:
        return self._data

    # Export

    def to_svg(self) -> str:
        return svg.to_svg(self._data, self.surface.width, self.surface.height, self.options)

    def rasterize(self) -> PillowSurface:
        surface = PillowSurface(self.surface.width, self.surface.height)
        renderer = StrokeRenderer(surface, self.options)
        renderer.clear()
        replay(self._data, self.options, SurfaceSink(renderer))
        return surface

    def to_data_url(self, mime_type: str = "image/png", quality: Optional[float] = None, trim: bool = False) -> str:
        if mime_type == SVG_MIME:
            return to_data_url(self.to_svg().encode("utf-8"), SVG_MIME)
        if mime_type not in RASTER_FORMATS:
            raise UnsupportedImageFormat(mime_type)

        surface = self.surface if isinstance(self.surface, PillowSurface) else self.rasterize()
        image = surface.trimmed() if trim else surface.image
        return image_data_url(image, mime_type, quality)

    def from_data_url(
        self,
        data_url: str,
        ratio: float = 1.0,
        width: Optional[float] = None,
        height: Optional[float] = None,
        callback: Optional[Callable[[Optional[ImageRestoreError]], None]] = None,
    ):
        """
        Draw an encoded image onto the surface. Failures are handed to
        `callback` and leave the surface untouched.
        """
        self._session = None
        self.fitter.reset()

        width = width or self.surface.width / ratio
        height = height or self.surface.height / ratio

        draw_image = getattr(self.surface, "draw_image", None)
        try:
            if draw_image is None:
                raise ImageRestoreError("Surface cannot draw images")
            image = read_image_from_data_url(data_url)
        except (ValueError, OSError, ImageRestoreError) as e:
            error = e if isinstance(e, ImageRestoreError) else ImageRestoreError(str(e))
            logger.warning("Image restore failed: %s", error)
            if callback:
                callback(error)
            return

        draw_image(image, 0, 0, width, height)
        self._is_empty = False
        if callback:
            callback(None)

    def to_biometric_data(self) -> biometric.BiometricDocument:
        return biometric.to_biometric_data(self._data, self.options, self._started_at, self.device)

    def to_biometric_xml(self, document: Optional[biometric.BiometricDocument] = None) -> str:
        return biometric.to_biometric_xml(document or self.to_biometric_data())
