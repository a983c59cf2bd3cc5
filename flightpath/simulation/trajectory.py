"""Complete flight prediction: ascent, descent and landing footprint.

``predict_trajectory`` is the single entry point. It is a pure function of
its inputs: it keeps no state between calls, performs no I/O, and can be
called repeatedly or from several threads at once.

Example:
    >>> from flightpath import predict_trajectory
    >>> from flightpath.environment import WeatherData
    >>> from flightpath.geo import LaunchSite
    >>> from flightpath.vehicle import DEFAULT_ROCKET, Parachute
    >>>
    >>> result = predict_trajectory(
    ...     DEFAULT_ROCKET,
    ...     Parachute(diameter=0.3),
    ...     LaunchSite(latitude=35.0, longitude=139.0),
    ...     WeatherData(surface_wind_speed=4.0, surface_wind_direction=270.0),
    ... )
    >>> print(f"Max altitude: {result.stats.max_altitude:.1f} m")
    >>> print(f"Landing: {result.predicted_landing}")
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from flightpath.environment.weather import WeatherData
from flightpath.environment.wind import (
    DEFAULT_WIND_UNCERTAINTY,
    WindUncertainty,
    uncertainty_ellipse,
    wind_profile_from_weather,
)
from flightpath.errors import ConfigurationError
from flightpath.geo import Coordinates, LaunchSite, local_to_geographic
from flightpath.simulation.ascent import simulate_ascent
from flightpath.simulation.config import ASCENT_CONFIG, DESCENT_CONFIG, SimConfig
from flightpath.simulation.descent import APOGEE_SEED_VELOCITY, simulate_descent
from flightpath.simulation.sampling import FlightPhase, TrajectoryPoint
from flightpath.vehicle.recovery import RecoveryParameters
from flightpath.vehicle.rocket import RocketParameters

logger = logging.getLogger(__name__)

ELLIPSE_CONFIDENCE = 0.95


# =============================================================================
# Result Classes
# =============================================================================


@beartype
@dataclass(frozen=True)
class FlightStats:
    """Headline numbers of a predicted flight.

    Attributes:
        max_altitude: Apogee height above the launch site [m]
        apogee_time: Time of apogee [s]
        total_flight_time: Time of touchdown [s]
        max_velocity: Peak ascent speed [m/s]
        landing_velocity: Touchdown speed [m/s]
        horizontal_distance: Landing distance from the launch site [m]
        landing_bearing: Bearing from launch site to landing [deg]
    """
    max_altitude: float
    apogee_time: float
    total_flight_time: float
    max_velocity: float
    landing_velocity: float
    horizontal_distance: float
    landing_bearing: float


@beartype
@dataclass(frozen=True)
class UncertaintyEllipse:
    """Landing-zone confidence ellipse.

    Attributes:
        center: Predicted landing point
        semi_major_axis: Along-wind semi-axis [m]
        semi_minor_axis: Cross-wind semi-axis [m]
        rotation: Bearing of the major axis [deg]
        confidence: Confidence level of the region
    """
    center: Coordinates
    semi_major_axis: float
    semi_minor_axis: float
    rotation: float
    confidence: float = ELLIPSE_CONFIDENCE


@beartype
@dataclass(frozen=True)
class TrajectoryResult:
    """Output of one prediction run.

    Superseded, never mutated, when any input changes.

    Attributes:
        trajectory_points: Ascent points followed by descent points
        predicted_landing: Landing coordinates
        uncertainty_ellipse: Landing footprint
        stats: Flight statistics
        launch_site: Launch coordinates
        converged: False if either integrator hit its iteration cap
    """
    trajectory_points: tuple[TrajectoryPoint, ...]
    predicted_landing: Coordinates
    uncertainty_ellipse: UncertaintyEllipse
    stats: FlightStats
    launch_site: Coordinates
    converged: bool = True

    @property
    def times(self) -> NDArray[np.float64]:
        """Point times [s], shape (N,)."""
        return np.array([p.time for p in self.trajectory_points], dtype=np.float64)

    @property
    def positions(self) -> NDArray[np.float64]:
        """Point positions [m], shape (N, 3)."""
        return np.array([p.position for p in self.trajectory_points], dtype=np.float64)

    @property
    def velocities(self) -> NDArray[np.float64]:
        """Point velocities [m/s], shape (N, 3)."""
        return np.array([p.velocity for p in self.trajectory_points], dtype=np.float64)

    def phase_points(self, phase: FlightPhase) -> tuple[TrajectoryPoint, ...]:
        """Points belonging to one flight phase."""
        return tuple(p for p in self.trajectory_points if p.phase is phase)

    def to_dataframe(self):
        """Convert the trajectory points to a Polars DataFrame."""
        import polars as pl

        positions = self.positions
        velocities = self.velocities
        return pl.DataFrame({
            "time": self.times,
            "x": positions[:, 0],
            "y": positions[:, 1],
            "z": positions[:, 2],
            "vx": velocities[:, 0],
            "vy": velocities[:, 1],
            "vz": velocities[:, 2],
            "speed": np.linalg.norm(velocities, axis=1),
            "phase": [p.phase.value for p in self.trajectory_points],
        })

    def to_dict(self) -> dict:
        """Convert to plain JSON-ready data, see ``trajectory_to_dict``."""
        from flightpath.export import trajectory_to_dict

        return trajectory_to_dict(self)


# =============================================================================
# Prediction
# =============================================================================


def _validate_inputs(
    rocket: RocketParameters,
    recovery: RecoveryParameters,
    launch_site: LaunchSite,
    weather: WeatherData,
    wind_uncertainty: WindUncertainty,
) -> None:
    rocket.validate()
    recovery.validate()
    launch_site.validate()
    if weather.surface_wind_speed < 0:
        raise ConfigurationError(
            f"surface_wind_speed must be non-negative, got {weather.surface_wind_speed}"
        )
    if not weather.surface_pressure > 0:
        raise ConfigurationError(
            f"surface_pressure must be positive, got {weather.surface_pressure}"
        )
    if weather.surface_temperature <= -273.15:
        raise ConfigurationError(
            f"surface_temperature below absolute zero: {weather.surface_temperature}"
        )
    if wind_uncertainty.speed_uncertainty < 0 or wind_uncertainty.direction_uncertainty < 0:
        raise ConfigurationError("wind uncertainty must be non-negative")


@beartype
def predict_trajectory(
    rocket: RocketParameters,
    recovery: RecoveryParameters,
    launch_site: LaunchSite,
    weather: WeatherData,
    wind_uncertainty: WindUncertainty | None = None,
    ascent_config: SimConfig = ASCENT_CONFIG,
    descent_config: SimConfig = DESCENT_CONFIG,
) -> TrajectoryResult:
    """Predict the full flight and landing footprint.

    Runs the ascent with the surface wind, then the descent from apogee
    with the layered wind profile built from ``weather``, and converts the
    landing displacement to coordinates.

    Args:
        rocket: Vehicle parameters
        recovery: Recovery device
        launch_site: Launch location and rail orientation
        weather: Surface conditions and wind layers
        wind_uncertainty: Wind estimate error, defaults to 25% / 15 deg
        ascent_config: Ascent integrator settings
        descent_config: Descent integrator settings

    Returns:
        TrajectoryResult

    Raises:
        ConfigurationError: If any input is physically invalid
    """
    uncertainty = wind_uncertainty or DEFAULT_WIND_UNCERTAINTY
    _validate_inputs(rocket, recovery, launch_site, weather, uncertainty)
    ascent_config.validate()
    descent_config.validate()

    wind_profile = wind_profile_from_weather(weather)

    ascent = simulate_ascent(
        rocket,
        launch_angle=launch_site.launch_angle,
        launch_azimuth=launch_site.launch_azimuth,
        launch_elevation=launch_site.elevation,
        wind_speed=weather.surface_wind_speed,
        wind_direction=weather.surface_wind_direction,
        surface_temperature=weather.surface_temperature,
        surface_pressure=weather.surface_pressure,
        config=ascent_config,
    )

    descent = simulate_descent(
        recovery,
        rocket,
        start_position=ascent.apogee.position,
        start_velocity=APOGEE_SEED_VELOCITY,
        start_time=ascent.apogee.time,
        ground_level=launch_site.elevation,
        wind_at=wind_profile.wind_at,
        surface_temperature=weather.surface_temperature,
        surface_pressure=weather.surface_pressure,
        config=descent_config,
    )

    points = ascent.points + descent.points

    east, north, _ = descent.landing.position
    predicted_landing = local_to_geographic(launch_site, east, north)
    horizontal_distance = math.hypot(east, north)
    landing_bearing = (math.degrees(math.atan2(east, north)) + 360.0) % 360.0

    axes = uncertainty_ellipse(horizontal_distance, weather.surface_wind_direction, uncertainty)
    ellipse = UncertaintyEllipse(
        center=predicted_landing,
        semi_major_axis=axes.semi_major,
        semi_minor_axis=axes.semi_minor,
        rotation=axes.rotation,
    )

    stats = FlightStats(
        max_altitude=ascent.apogee.altitude,
        apogee_time=ascent.apogee.time,
        total_flight_time=descent.landing.time,
        max_velocity=ascent.max_velocity,
        landing_velocity=descent.landing.velocity,
        horizontal_distance=horizontal_distance,
        landing_bearing=landing_bearing,
    )

    converged = ascent.converged and descent.converged
    if not converged:
        logger.warning("Trajectory is truncated; treat the landing estimate with suspicion")

    return TrajectoryResult(
        trajectory_points=points,
        predicted_landing=predicted_landing,
        uncertainty_ellipse=ellipse,
        stats=stats,
        launch_site=launch_site.coordinates,
        converged=converged,
    )
