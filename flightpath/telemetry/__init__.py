"""Telemetry playback: replay a predicted trajectory as a live data feed.

Example:
    >>> from flightpath.telemetry import ManualClock, ManualTicker, TelemetryPlayback
    >>>
    >>> clock = ManualClock()
    >>> playback = TelemetryPlayback(clock=clock, ticker=ManualTicker())
    >>> playback.start(result, launch_site)
    >>> clock.advance(1.5)
    >>> sample = playback.tick()
"""

from flightpath.telemetry.clock import (
    Clock,
    ManualClock,
    ManualTicker,
    MonotonicClock,
    ThreadingTicker,
    Ticker,
)
from flightpath.telemetry.data import (
    FlightStatus,
    TelemetryData,
    TelemetryMode,
    estimate_flight_status,
)
from flightpath.telemetry.playback import (
    PlaybackConfig,
    PlaybackStatus,
    TelemetryPlayback,
    interpolate_point,
)

__all__ = [
    # Time
    "Clock",
    "ManualClock",
    "ManualTicker",
    "MonotonicClock",
    "ThreadingTicker",
    "Ticker",
    # Samples
    "FlightStatus",
    "TelemetryData",
    "TelemetryMode",
    "estimate_flight_status",
    # Playback
    "PlaybackConfig",
    "PlaybackStatus",
    "TelemetryPlayback",
    "interpolate_point",
]
