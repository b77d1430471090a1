from typing import Tuple
from pydantic import BaseModel, ConfigDict
import math

# Parameter samples used for the polyline length estimate (t = 0, 0.1, ..., 1.0)
LENGTH_STEPS = 10


class Point2D(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


def bezier_component(t: float, start: float, c1: float, c2: float, end: float) -> float:
    return (start * (1.0 - t) * (1.0 - t) * (1.0 - t)) \
        + (3.0 * c1 * (1.0 - t) * (1.0 - t) * t) \
        + (3.0 * c2 * (1.0 - t) * t * t) \
        + (end * t * t * t)


def control_points(a, b, c) -> Tuple[Point2D, Point2D]:
    """
    Length-weighted smoothing controls around `b` for the window (a, b, c).

    The blended point `cm` lies between the midpoints of a-b and b-c, weighted
    by the opposite side length. Both midpoints are shifted by `b - cm`, which
    gives the incoming control (towards a) and the outgoing control (towards c).
    Coincident points yield NaN coordinates instead of raising.
    """
    m1 = (a.x + b.x) / 2.0, (a.y + b.y) / 2.0
    m2 = (b.x + c.x) / 2.0, (b.y + c.y) / 2.0

    l1 = math.sqrt((a.x - b.x)**2 + (a.y - b.y)**2)
    l2 = math.sqrt((b.x - c.x)**2 + (b.y - c.y)**2)

    total = l1 + l2
    k = l2 / total if total else math.nan

    cm_x = m2[0] + (m1[0] - m2[0]) * k
    cm_y = m2[1] + (m1[1] - m2[1]) * k
    tx = b.x - cm_x
    ty = b.y - cm_y

    return (
        Point2D(x=m1[0] + tx, y=m1[1] + ty),
        Point2D(x=m2[0] + tx, y=m2[1] + ty),
    )


class Segment(BaseModel):
    """Cubic Bezier from p0 to p3 with interpolated start/end stroke widths."""
    model_config = ConfigDict(frozen=True)

    p0: Point2D
    c1: Point2D
    c2: Point2D
    p3: Point2D
    width_start: float
    width_end: float

    @classmethod
    def from_window(cls, window, width_start: float, width_end: float) -> "Segment":
        # Spans window[1] -> window[2]
        s0, s1, s2, s3 = window
        _, c1 = control_points(s0, s1, s2)
        c2, _ = control_points(s1, s2, s3)
        return cls(
            p0=Point2D(x=s1.x, y=s1.y),
            c1=c1,
            c2=c2,
            p3=Point2D(x=s2.x, y=s2.y),
            width_start=width_start,
            width_end=width_end,
        )

    def point_at(self, t: float) -> Point2D:
        return Point2D(
            x=bezier_component(t, self.p0.x, self.c1.x, self.c2.x, self.p3.x),
            y=bezier_component(t, self.p0.y, self.c1.y, self.c2.y, self.p3.y),
        )

    def arc_length(self) -> float:
        length = 0.0
        prev = None
        for i in range(LENGTH_STEPS + 1):
            pt = self.point_at(i / LENGTH_STEPS)
            if prev is not None:
                length += math.sqrt((pt.x - prev.x)**2 + (pt.y - prev.y)**2)
            prev = pt
        return length

    @property
    def is_degenerate(self) -> bool:
        # NaN controls come from repeated input points
        return not all(p.is_finite() for p in (self.p0, self.c1, self.c2, self.p3))

    def svg_path(self) -> str:
        return (
            f"M {self.p0.x:.3f},{self.p0.y:.3f} "
            f"C {self.c1.x:.3f},{self.c1.y:.3f} "
            f"{self.c2.x:.3f},{self.c2.y:.3f} "
            f"{self.p3.x:.3f},{self.p3.y:.3f}"
        )
