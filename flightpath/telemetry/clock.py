"""Time sources and periodic tickers for telemetry playback.

Playback never reads the system clock or starts threads directly; it goes
through a ``Clock`` and a ``Ticker`` so that tests can drive it
deterministically with ``ManualClock`` and ``ManualTicker``.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Clock(Protocol):
    """Monotonic time source in seconds."""

    def now(self) -> float:
        ...


@runtime_checkable
class Ticker(Protocol):
    """Calls a callback periodically until cancelled."""

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        """Begin calling ``callback`` every ``interval`` seconds."""
        ...

    def cancel(self) -> None:
        """Stop calling the callback. Safe to call when not started."""
        ...


class MonotonicClock:
    """System monotonic clock."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


class ThreadingTicker:
    """Ticker running the callback on a background daemon thread.

    One thread per started ticker; ``cancel`` signals it and returns
    without waiting for an in-flight callback to finish.
    """

    def __init__(self) -> None:
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        self.cancel()
        stop = threading.Event()

        def run() -> None:
            while not stop.wait(interval):
                callback()

        self._stop = stop
        self._thread = threading.Thread(target=run, name="telemetry-ticker", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        if self._stop is not None:
            self._stop.set()
        self._stop = None
        self._thread = None

    @property
    def active(self) -> bool:
        return self._stop is not None


class ManualTicker:
    """Ticker that fires only when ``fire`` is called."""

    def __init__(self) -> None:
        self.interval: float | None = None
        self._callback: Callable[[], None] | None = None
        self.starts = 0

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self._callback = callback
        self.starts += 1

    def cancel(self) -> None:
        self.interval = None
        self._callback = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def fire(self) -> None:
        if self._callback is None:
            logger.debug("ManualTicker fired while not started")
            return
        self._callback()
