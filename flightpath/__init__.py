"""Flightpath - small-rocket trajectory prediction and telemetry playback.

Predicts the full flight of a model rocket (powered ascent, coast,
recovery descent) from vehicle, recovery, launch-site and weather inputs,
estimates the landing footprint, and replays the predicted flight as a
synthetic telemetry stream.

Example:
    >>> from flightpath import (
    ...     LaunchSite,
    ...     Parachute,
    ...     RocketParameters,
    ...     WeatherData,
    ...     predict_trajectory,
    ... )
    >>>
    >>> rocket = RocketParameters(
    ...     dry_mass=0.08,
    ...     propellant_mass=0.01,
    ...     body_diameter=0.025,
    ...     body_length=0.3,
    ...     drag_coefficient=0.5,
    ...     motor_total_impulse=5.0,
    ...     motor_burn_time=0.5,
    ... )
    >>> result = predict_trajectory(
    ...     rocket,
    ...     Parachute(diameter=0.3),
    ...     LaunchSite(latitude=35.68, longitude=139.65, elevation=40.0),
    ...     WeatherData(surface_wind_speed=3.0, surface_wind_direction=270.0),
    ... )
    >>> print(f"Apogee {result.stats.max_altitude:.0f} m, "
    ...       f"lands {result.stats.horizontal_distance:.0f} m away")
"""

import logging

__version__ = "0.1.0"

from flightpath.environment import (
    DEFAULT_WEATHER,
    DEFAULT_WIND_UNCERTAINTY,
    Atmosphere,
    LayeredWindProfile,
    LogLawWindProfile,
    WeatherData,
    WeatherSource,
    WindLayer,
    WindUncertainty,
)
from flightpath.errors import (
    ConfigurationError,
    FlightpathError,
    WeatherFetchError,
)
from flightpath.export import (
    export_trajectory_to_json,
    trajectory_to_dict,
)
from flightpath.geo import (
    DEFAULT_LAUNCH_SITE,
    Coordinates,
    LaunchSite,
    geographic_to_local,
    local_to_geographic,
)
from flightpath.simulation import (
    FlightPhase,
    FlightStats,
    SimConfig,
    TrajectoryPoint,
    TrajectoryResult,
    UncertaintyEllipse,
    Vector3,
    predict_trajectory,
)
from flightpath.telemetry import (
    PlaybackConfig,
    PlaybackStatus,
    TelemetryData,
    TelemetryPlayback,
)
from flightpath.vehicle import (
    DEFAULT_RECOVERY,
    DEFAULT_ROCKET,
    Freefall,
    Parachute,
    RecoveryParameters,
    RocketParameters,
    Streamer,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Errors
    "ConfigurationError",
    "FlightpathError",
    "WeatherFetchError",
    # Inputs
    "DEFAULT_LAUNCH_SITE",
    "DEFAULT_RECOVERY",
    "DEFAULT_ROCKET",
    "DEFAULT_WEATHER",
    "DEFAULT_WIND_UNCERTAINTY",
    "Coordinates",
    "Freefall",
    "LaunchSite",
    "Parachute",
    "RecoveryParameters",
    "RocketParameters",
    "Streamer",
    "WeatherData",
    "WeatherSource",
    "WindLayer",
    "WindUncertainty",
    # Models
    "Atmosphere",
    "LayeredWindProfile",
    "LogLawWindProfile",
    # Simulation
    "FlightPhase",
    "FlightStats",
    "SimConfig",
    "TrajectoryPoint",
    "TrajectoryResult",
    "UncertaintyEllipse",
    "Vector3",
    "predict_trajectory",
    # Geography
    "geographic_to_local",
    "local_to_geographic",
    # Telemetry
    "PlaybackConfig",
    "PlaybackStatus",
    "TelemetryData",
    "TelemetryPlayback",
    # Export
    "export_trajectory_to_json",
    "trajectory_to_dict",
]
