"""Altitude-dependent wind profiles and wind-uncertainty footprints.

Two interchangeable profiles implement the ``WindProfile`` protocol:

- LogLawWindProfile: surface boundary-layer log law,
  v(h) = v_ref * ln(h / z0) / ln(h_ref / z0), constant direction.
- LayeredWindProfile: surface reading plus sampled altitude layers,
  linearly interpolated with shortest-path direction interpolation.

Directions follow the meteorological convention: the bearing the wind
blows FROM, degrees clockwise from north.

Example:
    >>> from flightpath.environment import LayeredWindProfile, WindLayer
    >>>
    >>> profile = LayeredWindProfile(
    ...     surface_speed=3.0,
    ...     surface_direction=350.0,
    ...     layers=[WindLayer(altitude=100.0, wind_speed=6.0, wind_direction=10.0)],
    ... )
    >>> profile.wind_at(50.0).direction  # ~0, not ~180
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from beartype import beartype

from flightpath.environment.weather import WeatherData, WindLayer

# =============================================================================
# Constants
# =============================================================================

MIN_QUERY_HEIGHT = 0.5  # Log-law evaluation floor [m]
STANDARD_REFERENCE_HEIGHT = 10.0  # Meteorological anemometer height [m]
DEFAULT_ROUGHNESS_LENGTH = 0.03  # Open terrain [m]

MIN_SEMI_MAJOR = 10.0  # [m]
MIN_SEMI_MINOR = 5.0  # [m]

# Aerodynamic roughness length z0 by surface type [m]
ROUGHNESS_LENGTHS: dict[str, float] = {
    "water": 0.0002,
    "sand": 0.0003,
    "snow": 0.001,
    "grass_short": 0.008,
    "grass_tall": 0.03,
    "farmland": 0.05,
    "suburbs": 0.5,
    "urban": 1.0,
    "forest": 1.5,
}

_COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


# =============================================================================
# Wind Vector
# =============================================================================


@beartype
def wind_components(speed: float, direction: float) -> tuple[float, float]:
    """Convert a meteorological wind reading to east/north velocity components.

    The reading names where the wind comes from, so the air moves toward
    ``direction + 180``.

    Args:
        speed: Wind speed [m/s]
        direction: Direction the wind blows from [deg]

    Returns:
        (east, north) air velocity [m/s]
    """
    heading = math.radians((direction + 180.0) % 360.0)
    return speed * math.sin(heading), speed * math.cos(heading)


@beartype
@dataclass(frozen=True)
class WindVector:
    """Wind at a single altitude.

    Attributes:
        speed: Wind speed [m/s]
        direction: Direction the wind blows from [deg]
    """
    speed: float
    direction: float

    def components(self) -> tuple[float, float]:
        """(east, north) air velocity [m/s]."""
        return wind_components(self.speed, self.direction)


class WindProfile(Protocol):
    """Protocol for altitude-dependent wind models."""

    def wind_at(self, altitude: float) -> WindVector:
        """Get the wind at a height above ground [m]."""
        ...


# =============================================================================
# Log-Law Profile
# =============================================================================


@beartype
@dataclass(frozen=True)
class LogLawWindProfile:
    """Logarithmic boundary-layer wind profile.

    Attributes:
        reference_speed: Wind speed measured at reference_height [m/s]
        reference_direction: Wind direction [deg], constant with altitude
        reference_height: Measurement height [m]
        roughness_length: Surface roughness length z0 [m]
    """
    reference_speed: float
    reference_direction: float
    reference_height: float = STANDARD_REFERENCE_HEIGHT
    roughness_length: float = DEFAULT_ROUGHNESS_LENGTH

    @classmethod
    def for_surface(
        cls,
        reference_speed: float,
        reference_direction: float,
        surface: str,
        reference_height: float = STANDARD_REFERENCE_HEIGHT,
    ) -> "LogLawWindProfile":
        """Build a profile using the roughness length of a named surface type.

        Args:
            surface: One of the ROUGHNESS_LENGTHS keys
        """
        if surface not in ROUGHNESS_LENGTHS:
            raise ValueError(
                f"Unknown surface '{surface}'. Available: {sorted(ROUGHNESS_LENGTHS)}"
            )
        return cls(
            reference_speed=reference_speed,
            reference_direction=reference_direction,
            reference_height=reference_height,
            roughness_length=ROUGHNESS_LENGTHS[surface],
        )

    def wind_at(self, altitude: float) -> WindVector:
        h = max(altitude, MIN_QUERY_HEIGHT)
        z0 = self.roughness_length
        speed = (
            self.reference_speed
            * math.log(h / z0)
            / math.log(self.reference_height / z0)
        )
        return WindVector(speed=max(0.0, speed), direction=self.reference_direction)


# =============================================================================
# Layered Profile
# =============================================================================


@beartype
def interpolate_direction(lower: float, upper: float, ratio: float) -> float:
    """Interpolate between two bearings along the shorter arc.

    Args:
        lower: Bearing at ratio 0 [deg]
        upper: Bearing at ratio 1 [deg]
        ratio: Interpolation fraction in [0, 1]

    Returns:
        Interpolated bearing normalised to [0, 360) [deg]
    """
    diff = upper - lower
    if diff > 180.0:
        diff -= 360.0
    elif diff < -180.0:
        diff += 360.0
    return (lower + ratio * diff + 360.0) % 360.0


@beartype
class LayeredWindProfile:
    """Wind profile interpolated between altitude samples.

    A synthetic layer at 0 m is built from the surface reading and merged
    with the given layers in ascending altitude order. Queries below the
    lowest layer or above the highest return that layer's values.

    Args:
        surface_speed: Surface wind speed [m/s]
        surface_direction: Surface wind direction [deg]
        layers: Altitude samples, any order
    """

    def __init__(
        self,
        surface_speed: float,
        surface_direction: float,
        layers: Sequence[WindLayer] = (),
    ) -> None:
        self.surface_speed = surface_speed
        self.surface_direction = surface_direction
        surface = WindLayer(
            altitude=0.0,
            wind_speed=surface_speed,
            wind_direction=surface_direction,
        )
        self.layers: tuple[WindLayer, ...] = tuple(
            sorted([surface, *layers], key=lambda layer: layer.altitude)
        )

    def __repr__(self) -> str:
        return f"LayeredWindProfile(layers={len(self.layers)})"

    def wind_at(self, altitude: float) -> WindVector:
        layers = self.layers
        if len(layers) == 1:
            return WindVector(speed=self.surface_speed, direction=self.surface_direction)

        bottom, top = layers[0], layers[-1]
        if altitude <= bottom.altitude:
            return WindVector(speed=bottom.wind_speed, direction=bottom.wind_direction)
        if altitude >= top.altitude:
            return WindVector(speed=top.wind_speed, direction=top.wind_direction)

        for lower, upper in zip(layers, layers[1:]):
            if lower.altitude <= altitude <= upper.altitude:
                span = upper.altitude - lower.altitude
                ratio = (altitude - lower.altitude) / span if span > 0 else 0.0
                speed = lower.wind_speed + ratio * (upper.wind_speed - lower.wind_speed)
                direction = interpolate_direction(
                    lower.wind_direction, upper.wind_direction, ratio
                )
                return WindVector(speed=speed, direction=direction)

        # Unreachable for sorted layers; NaN altitudes end up here.
        return WindVector(speed=self.surface_speed, direction=self.surface_direction)


@beartype
def wind_profile_from_weather(weather: WeatherData) -> LayeredWindProfile:
    """Build the layered wind profile described by a weather reading."""
    return LayeredWindProfile(
        surface_speed=weather.surface_wind_speed,
        surface_direction=weather.surface_wind_direction,
        layers=weather.wind_layers,
    )


# =============================================================================
# Uncertainty Footprint
# =============================================================================


@beartype
@dataclass(frozen=True)
class WindUncertainty:
    """Uncertainty of a wind estimate.

    Attributes:
        speed_uncertainty: Relative speed error (0.25 = 25%)
        direction_uncertainty: Direction error [deg]
    """
    speed_uncertainty: float = 0.25
    direction_uncertainty: float = 15.0


DEFAULT_WIND_UNCERTAINTY = WindUncertainty()


@beartype
@dataclass(frozen=True)
class EllipseAxes:
    """Landing-footprint ellipse shape.

    Attributes:
        semi_major: Along-wind semi-axis [m]
        semi_minor: Cross-wind semi-axis [m]
        rotation: Bearing of the major axis, pointing downwind [deg]
    """
    semi_major: float
    semi_minor: float
    rotation: float


@beartype
def uncertainty_ellipse(
    nominal_drift: float,
    wind_direction: float,
    uncertainty: WindUncertainty = DEFAULT_WIND_UNCERTAINTY,
) -> EllipseAxes:
    """Convert a nominal drift distance into a landing error ellipse.

    Speed error stretches the footprint along the wind; direction error
    spreads it across the wind.

    Args:
        nominal_drift: Horizontal landing distance from the launch site [m]
        wind_direction: Surface wind direction [deg]
        uncertainty: Wind estimate uncertainty

    Returns:
        EllipseAxes with semi-axes floored at 10 m and 5 m
    """
    semi_major = nominal_drift * uncertainty.speed_uncertainty
    semi_minor = nominal_drift * math.sin(math.radians(uncertainty.direction_uncertainty))
    return EllipseAxes(
        semi_major=max(semi_major, MIN_SEMI_MAJOR),
        semi_minor=max(semi_minor, MIN_SEMI_MINOR),
        rotation=(wind_direction + 180.0) % 360.0,
    )


@beartype
def wind_direction_label(direction: float) -> str:
    """16-point compass label for a bearing, e.g. 200 -> "SSW"."""
    index = round((direction % 360.0) / 22.5) % 16
    return _COMPASS_POINTS[index]
