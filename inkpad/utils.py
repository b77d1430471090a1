from PIL import Image, ImageColor
import base64
import io
import re
import numpy as np
from typing import Optional, Tuple

_CSS_RGBA = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([0-9]*\.?[0-9]+)\s*\)$"
)


def parse_color(color: str) -> Tuple[int, int, int, int]:
    """
    RGBA tuple for any color Pillow understands, plus CSS rgba() with a
    fractional alpha (e.g. "rgba(0,0,0,0.5)").
    """
    try:
        return ImageColor.getcolor(color, "RGBA")
    except ValueError:
        m = _CSS_RGBA.match(color.strip())
        if not m:
            raise ValueError(f"Unknown color: {color}")
        r, g, b = (int(v) for v in m.groups()[:3])
        alpha = float(m.group(4))
        a = int(round(alpha * 255)) if alpha <= 1 else int(alpha)
        return r, g, b, min(a, 255)


def to_data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_url(data_url: str) -> bytes:
    # Accepts both data URLs and raw base64
    if "base64," in data_url:
        image_data = data_url.split("base64,")[1]
    else:
        image_data = data_url
    return base64.b64decode(image_data, validate=True)


def read_image_from_data_url(data_url: str) -> Image.Image:
    image = Image.open(io.BytesIO(decode_data_url(data_url)))
    image.load()
    return image.convert("RGBA")


def ink_bbox(arr: np.ndarray) -> Optional[Tuple[int, int, int, int]]:
    """
    (min_x, min_y, max_x, max_y) of pixels with non-zero alpha in an HxWx4
    array, or None for a blank image.
    """
    mask = arr[..., 3] > 0
    if not mask.any():
        return None
    ys, xs = np.nonzero(mask)
    return int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max())
