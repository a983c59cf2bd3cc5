"""Telemetry sample types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

from beartype import beartype

from flightpath.geo import Coordinates

TelemetryMode = Literal["gps", "altitude_only", "none"]

LANDED_HEIGHT = 5.0  # Below this height above ground a rocket may be landed [m]
CLIMB_THRESHOLD = 0.5  # Altitude change treated as movement [m]


@beartype
@dataclass(frozen=True)
class TelemetryData:
    """One emitted telemetry sample.

    Attributes:
        timestamp: Wall-clock emission time
        mode: Telemetry mode the sample was produced in
        flight_time: Simulated time since ignition [s]
        coordinates: Position, gps mode only
        altitude: Altitude ASL [m]
        velocity: Ground speed [m/s]
        temperature: Ambient temperature [deg C]
        pressure: Ambient pressure [hPa]
    """
    timestamp: datetime
    mode: TelemetryMode
    flight_time: float
    coordinates: Coordinates | None = None
    altitude: float | None = None
    velocity: float | None = None
    temperature: float | None = None
    pressure: float | None = None


class FlightStatus(Enum):
    """Coarse flight state inferred from successive altitudes."""

    PRE_LAUNCH = "pre_launch"
    ASCENDING = "ascending"
    DESCENDING = "descending"
    LANDED = "landed"
    UNKNOWN = "unknown"


@beartype
def estimate_flight_status(
    current_altitude: float,
    previous_altitude: float | None,
    ground_level: float,
) -> FlightStatus:
    """Classify the flight from two consecutive altitude readings.

    Args:
        current_altitude: Latest altitude [m]
        previous_altitude: Altitude of the previous sample, None if first
        ground_level: Ground altitude [m]
    """
    if previous_altitude is None:
        return FlightStatus.UNKNOWN

    change = current_altitude - previous_altitude
    if current_altitude - ground_level < LANDED_HEIGHT:
        return FlightStatus.ASCENDING if change > CLIMB_THRESHOLD else FlightStatus.LANDED
    if change > CLIMB_THRESHOLD:
        return FlightStatus.ASCENDING
    if change < -CLIMB_THRESHOLD:
        return FlightStatus.DESCENDING
    return FlightStatus.UNKNOWN
