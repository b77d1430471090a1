"""
Pillow-backed drawing surface and image encoding.
"""
import io
import math
import numpy as np
from PIL import Image, ImageDraw
from typing import List, Optional, Tuple
from ...utils import parse_color, ink_bbox, to_data_url
from ..errors import UnsupportedImageFormat

RASTER_FORMATS = {
    "image/png": "PNG",
    "image/jpeg": "JPEG",
}

# Browsers default to 0.92 for image/jpeg
DEFAULT_JPEG_QUALITY = 0.92


class PillowSurface:
    """
    Immediate-mode RGBA canvas. Discs added to the current path are filled
    together, so overlapping discs of one path are painted once.
    """

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        self._path: List[Tuple[float, float, float]] = []

    def begin_path(self):
        self._path = []

    def disc(self, x: float, y: float, radius: float):
        self._path.append((x, y, radius))

    def fill(self, color: str):
        if not self._path:
            return
        r, g, b, a = parse_color(color)

        x0 = max(0, math.floor(min(x - rad for x, _, rad in self._path)))
        y0 = max(0, math.floor(min(y - rad for _, y, rad in self._path)))
        x1 = min(self.width, math.ceil(max(x + rad for x, _, rad in self._path)) + 1)
        y1 = min(self.height, math.ceil(max(y + rad for _, y, rad in self._path)) + 1)
        if x1 <= x0 or y1 <= y0:
            return

        mask = Image.new("L", (x1 - x0, y1 - y0), 0)
        draw = ImageDraw.Draw(mask)
        for x, y, rad in self._path:
            draw.ellipse((x - rad - x0, y - rad - y0, x + rad - x0, y + rad - y0), fill=255)
        if a < 255:
            mask = mask.point(lambda v: v * a // 255)

        layer = Image.new("RGBA", mask.size, (r, g, b, 0))
        layer.putalpha(mask)
        self.image.alpha_composite(layer, dest=(x0, y0))

    def _box(self, x, y, width, height) -> Optional[Tuple[int, int, int, int]]:
        left, top = max(0, int(x)), max(0, int(y))
        right, bottom = min(self.width, int(x + width)), min(self.height, int(y + height))
        if right <= left or bottom <= top:
            return None
        return left, top, right, bottom

    def clear_rect(self, x, y, width, height):
        box = self._box(x, y, width, height)
        if box:
            self.image.paste((0, 0, 0, 0), box)

    def fill_rect(self, x, y, width, height, color: str):
        box = self._box(x, y, width, height)
        if not box:
            return
        left, top, right, bottom = box
        layer = Image.new("RGBA", (right - left, bottom - top), parse_color(color))
        self.image.alpha_composite(layer, dest=(left, top))

    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float):
        size = (max(1, int(round(width))), max(1, int(round(height))))
        if image.size != size:
            image = image.resize(size, Image.Resampling.LANCZOS)
        self.image.alpha_composite(image.convert("RGBA"), dest=(int(x), int(y)))

    def to_array(self) -> np.ndarray:
        return np.array(self.image)

    def ink_bbox(self):
        return ink_bbox(self.to_array())

    def trimmed(self) -> Image.Image:
        """Copy of the image cropped to its inked pixels; blank surfaces stay full size."""
        bbox = self.ink_bbox()
        if bbox is None:
            return self.image.copy()
        x0, y0, x1, y1 = bbox
        return self.image.crop((x0, y0, x1 + 1, y1 + 1))


def encode_image(image: Image.Image, mime_type: str = "image/png", quality: Optional[float] = None) -> bytes:
    fmt = RASTER_FORMATS.get(mime_type)
    if fmt is None:
        raise UnsupportedImageFormat(mime_type)

    buffer = io.BytesIO()
    if fmt == "JPEG":
        # JPEG has no alpha channel
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[3])
        q = quality if quality is not None and 0 <= quality <= 1 else DEFAULT_JPEG_QUALITY
        background.save(buffer, format=fmt, quality=int(round(q * 100)))
    else:
        image.save(buffer, format=fmt)
    return buffer.getvalue()


def image_data_url(image: Image.Image, mime_type: str = "image/png", quality: Optional[float] = None) -> str:
    return to_data_url(encode_image(image, mime_type, quality), mime_type)
