import pytest
from inkpad.config import PadOptions
from inkpad.pad.ingestion.models import Sample
from inkpad.pad.recorder import SignaturePad


class RecordingSurface:
    """Drawing surface that records every call instead of painting."""

    def __init__(self, width=300, height=150):
        self.width = width
        self.height = height
        self.calls = []
        self.paths = []
        self._current = None

    def begin_path(self):
        self._current = []
        self.calls.append(("begin_path",))

    def disc(self, x, y, radius):
        self._current.append((x, y, radius))
        self.calls.append(("disc", x, y, radius))

    def fill(self, color):
        self.paths.append((color, self._current))
        self.calls.append(("fill", color))

    def clear_rect(self, x, y, width, height):
        self.paths = []
        self.calls.append(("clear_rect", x, y, width, height))

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("fill_rect", x, y, width, height, color))

    def drawing_calls(self):
        return [c for c in self.calls if c[0] in ("begin_path", "disc", "fill")]


def make_samples(coords, dt=50.0, start=0.0):
    return [Sample(x=x, y=y, time=start + i * dt) for i, (x, y) in enumerate(coords)]


@pytest.fixture
def options():
    return PadOptions(throttle_ms=0)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def pad(surface, options):
    return SignaturePad(surface=surface, options=options)


@pytest.fixture
def zigzag():
    return make_samples([(0, 0), (12, 30), (40, 8), (70, 45), (95, 10), (130, 60), (150, 20)], dt=16.0)
