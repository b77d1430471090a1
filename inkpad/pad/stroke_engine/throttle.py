import time
from typing import Any, Callable, Optional, Tuple


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Throttle:
    """
    Rate-limits calls to `fn` to one per `wait_ms`.

    Calls arriving too early replace the pending arguments; the most recent
    pending call is delivered by the next due call, by poll() once the
    interval has passed, or by flush(). Nothing runs in the background.
    """

    def __init__(self, fn: Callable[..., Any], wait_ms: float, clock: Callable[[], float] = monotonic_ms):
        self.fn = fn
        self.wait_ms = wait_ms
        self.clock = clock
        self._previous: Optional[float] = None
        self._pending: Optional[Tuple[Any, ...]] = None

    def __call__(self, *args):
        now = self.clock()
        if self._previous is None or now - self._previous >= self.wait_ms:
            return self._invoke(now, args)
        self._pending = args
        return None

    def _invoke(self, now: float, args):
        self._previous = now
        self._pending = None
        return self.fn(*args)

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def poll(self):
        if self._pending is None:
            return None
        now = self.clock()
        if now - self._previous >= self.wait_ms:
            return self._invoke(now, self._pending)
        return None

    def flush(self):
        if self._pending is None:
            return None
        return self._invoke(self.clock(), self._pending)

    def cancel(self):
        self._pending = None


def schedule(fn: Callable[..., Any], wait_ms: float, clock: Callable[[], float] = monotonic_ms):
    """Direct call when wait_ms is 0, rate-limited otherwise."""
    if wait_ms:
        return Throttle(fn, wait_ms, clock)
    return fn
