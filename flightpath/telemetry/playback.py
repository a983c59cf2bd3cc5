"""Time-scaled replay of a predicted trajectory as a live telemetry feed.

``TelemetryPlayback`` is a small state machine::

    idle --start--> running <--pause/resume--> paused
                       |
                       +--(end of flight)--> completed

``stop`` returns any state to idle. While running, every tick converts
elapsed wall time into simulated flight time (scaled by the playback
speed), interpolates the trajectory at that time and publishes a
``TelemetryData`` sample to all subscribers.

Misuse (starting without a trajectory, resuming when not paused, a
non-positive speed) is logged and ignored; the machine always stays in a
well-defined state.

Example:
    >>> from flightpath.telemetry import TelemetryPlayback
    >>>
    >>> playback = TelemetryPlayback()
    >>> unsubscribe = playback.on_sample(lambda s: print(s.altitude))
    >>> playback.start(result, launch_site, mode="gps")
    >>> playback.set_speed(4.0)
    >>> ...
    >>> playback.stop()
    >>> unsubscribe()
"""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from beartype import beartype

from flightpath.environment.atmosphere import KELVIN_OFFSET, PA_PER_HPA, get_atmosphere
from flightpath.geo import LaunchSite, local_to_geographic
from flightpath.simulation.sampling import TrajectoryPoint, Vector3
from flightpath.simulation.trajectory import TrajectoryResult
from flightpath.telemetry.clock import Clock, MonotonicClock, ThreadingTicker, Ticker
from flightpath.telemetry.data import TelemetryData, TelemetryMode

logger = logging.getLogger(__name__)

SampleCallback = Callable[[TelemetryData], None]


class PlaybackStatus(Enum):
    """Playback states."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@beartype
@dataclass
class PlaybackConfig:
    """Playback settings.

    Attributes:
        update_interval: Wall time between samples at 1x speed [s]
        playback_speed: Simulated seconds per wall second
        mode: Which fields the samples carry
    """
    update_interval: float = 0.1
    playback_speed: float = 1.0
    mode: TelemetryMode = "gps"


def _lerp(a: Vector3, b: Vector3, frac: float) -> Vector3:
    return Vector3(
        a.x + (b.x - a.x) * frac,
        a.y + (b.y - a.y) * frac,
        a.z + (b.z - a.z) * frac,
    )


@beartype
def interpolate_point(
    points: Sequence[TrajectoryPoint],
    time: float,
    cursor: int = 0,
) -> tuple[TrajectoryPoint, int]:
    """Linearly interpolate the trajectory at a time.

    The search starts at ``cursor`` and only moves forward, so replaying
    with non-decreasing times costs O(1) amortised per call.

    Args:
        points: Time-ordered trajectory points, at least one
        time: Query time [s]
        cursor: Index to start the bracket search from

    Returns:
        (interpolated point, updated cursor)
    """
    last = len(points) - 1
    i = min(max(cursor, 0), last)
    while i < last and points[i + 1].time <= time:
        i += 1

    if i >= last:
        return points[last], i

    p1, p2 = points[i], points[i + 1]
    span = p2.time - p1.time
    frac = (time - p1.time) / span if span > 0 else 0.0
    frac = min(max(frac, 0.0), 1.0)

    point = TrajectoryPoint(
        time=time,
        position=_lerp(p1.position, p2.position, frac),
        velocity=_lerp(p1.velocity, p2.velocity, frac),
        phase=p2.phase,
    )
    return point, i


@beartype
class TelemetryPlayback:
    """Replays a TrajectoryResult as a stream of telemetry samples.

    Each instance is independent: it owns its state, its subscriber list and
    its ticker. Control methods and the tick callback serialise on an
    internal lock; subscribers are called outside it.

    Args:
        config: Interval, speed and mode defaults
        clock: Time source, defaults to the monotonic system clock
        ticker: Periodic driver, defaults to a background thread
        wall_clock: Source of sample timestamps
    """

    def __init__(
        self,
        config: PlaybackConfig | None = None,
        clock: Clock | None = None,
        ticker: Ticker | None = None,
        wall_clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or PlaybackConfig()
        self._clock = clock or MonotonicClock()
        self._ticker = ticker or ThreadingTicker()
        self._wall_clock = wall_clock

        self._lock = threading.RLock()
        self._status = PlaybackStatus.IDLE
        self._result: TrajectoryResult | None = None
        self._launch_site: LaunchSite | None = None
        self._cursor = 0
        self._current_time = 0.0
        self._anchor = 0.0
        self._paused_at = 0.0
        self._subscribers: list[SampleCallback] = []

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def start(
        self,
        result: TrajectoryResult | None,
        launch_site: LaunchSite,
        mode: TelemetryMode = "gps",
    ) -> None:
        """Begin playback from t = 0. Ignored while already running."""
        with self._lock:
            if self._status is PlaybackStatus.RUNNING:
                logger.debug("start() ignored: playback already running")
                return
            if result is None or not result.trajectory_points:
                logger.warning("start() ignored: no computed trajectory to play back")
                return

            self._ticker.cancel()
            self._result = result
            self._launch_site = launch_site
            self.config.mode = mode
            self._cursor = 0
            self._current_time = 0.0
            self._anchor = self._clock.now()
            self._status = PlaybackStatus.RUNNING
            self._start_ticking()

    def stop(self) -> None:
        """Stop playback and reset to idle."""
        with self._lock:
            self._ticker.cancel()
            self._status = PlaybackStatus.IDLE
            self._cursor = 0
            self._current_time = 0.0

    def pause(self) -> None:
        """Freeze simulated time. Ignored unless running."""
        with self._lock:
            if self._status is not PlaybackStatus.RUNNING:
                logger.warning("pause() ignored: playback is %s", self._status.value)
                return
            self._ticker.cancel()
            self._paused_at = self._clock.now()
            self._status = PlaybackStatus.PAUSED

    def resume(self) -> None:
        """Continue from the paused simulated time. Ignored unless paused."""
        with self._lock:
            if self._status is not PlaybackStatus.PAUSED:
                logger.warning("resume() ignored: playback is %s", self._status.value)
                return
            self._anchor += self._clock.now() - self._paused_at
            self._status = PlaybackStatus.RUNNING
            self._start_ticking()

    def set_speed(self, speed: float) -> None:
        """Change the playback speed factor.

        The current simulated time is kept; only its rate of advance changes.
        A running ticker is restarted with the new cadence.
        """
        with self._lock:
            if not speed > 0:
                logger.warning("set_speed() ignored: speed must be positive, got %r", speed)
                return

            old_speed = self.config.playback_speed
            if self._status is PlaybackStatus.RUNNING:
                now = self._clock.now()
                simulated = (now - self._anchor) * old_speed
                self._anchor = now - simulated / speed
            elif self._status is PlaybackStatus.PAUSED:
                simulated = (self._paused_at - self._anchor) * old_speed
                self._anchor = self._paused_at - simulated / speed

            self.config.playback_speed = speed

            if self._status is PlaybackStatus.RUNNING:
                self._ticker.cancel()
                self._start_ticking()

    def set_mode(self, mode: TelemetryMode) -> None:
        """Change which fields subsequent samples carry."""
        with self._lock:
            self.config.mode = mode

    def on_sample(self, callback: SampleCallback) -> Callable[[], None]:
        """Subscribe to samples.

        Returns:
            Unsubscribe function; calling it more than once is harmless,
            including from inside the callback itself.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return unsubscribe

    # -------------------------------------------------------------------------
    # Ticking
    # -------------------------------------------------------------------------

    def _start_ticking(self) -> None:
        interval = self.config.update_interval / self.config.playback_speed
        self._ticker.start(interval, self.tick)

    def tick(self) -> TelemetryData | None:
        """Advance playback to the current clock time and publish a sample.

        Called by the ticker; public so playback can be driven by hand.

        Returns:
            The published sample, or None if nothing was emitted
        """
        with self._lock:
            if self._status is not PlaybackStatus.RUNNING or self._result is None:
                return None

            points = self._result.trajectory_points
            total = self._result.stats.total_flight_time
            elapsed = (self._clock.now() - self._anchor) * self.config.playback_speed

            if elapsed >= total:
                self._current_time = total
                self._cursor = len(points) - 1
                self._status = PlaybackStatus.COMPLETED
                self._ticker.cancel()
                point = points[-1]
                logger.debug("Playback completed at t=%.2f s", total)
            else:
                self._current_time = max(elapsed, 0.0)
                point, self._cursor = interpolate_point(points, self._current_time, self._cursor)

            sample = self._build_sample(point)

        if sample is not None:
            self._publish(sample)
        return sample

    def _build_sample(self, point: TrajectoryPoint) -> TelemetryData | None:
        mode = self.config.mode
        if mode == "none" or self._launch_site is None:
            return None

        altitude = point.position.z
        atm = get_atmosphere()
        coordinates = None
        if mode == "gps":
            coordinates = local_to_geographic(self._launch_site, point.position.x, point.position.y)

        return TelemetryData(
            timestamp=self._wall_clock(),
            mode=mode,
            flight_time=point.time,
            coordinates=coordinates,
            altitude=altitude,
            velocity=point.velocity.magnitude,
            temperature=atm.temperature(altitude) - KELVIN_OFFSET,
            pressure=atm.pressure(altitude) / PA_PER_HPA,
        )

    def _publish(self, sample: TelemetryData) -> None:
        for callback in list(self._subscribers):
            callback(sample)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def current_time(self) -> float:
        """Simulated flight time of the last tick [s]."""
        return self._current_time

    @property
    def total_time(self) -> float:
        """Flight duration of the loaded trajectory [s], 0 if none."""
        if self._result is None:
            return 0.0
        return self._result.stats.total_flight_time

    @property
    def progress(self) -> float:
        """Fraction of the flight played back, clamped to [0, 1]."""
        total = self.total_time
        if total <= 0:
            return 0.0
        return min(max(self._current_time / total, 0.0), 1.0)

    @property
    def speed(self) -> float:
        return self.config.playback_speed

    @property
    def mode(self) -> TelemetryMode:
        return self.config.mode
