"""Geographic coordinates and launch-site geometry.

Local positions are (east, north) metres from the launch site. Conversions
use an equirectangular approximation (111 320 m per degree of latitude,
longitude scaled by cos(latitude)), which is accurate to well under a
metre over the few kilometres a model rocket drifts.
"""

import math
from dataclasses import dataclass

from beartype import beartype

from flightpath.errors import ConfigurationError

METERS_PER_DEGREE_LAT = 111320.0
R_EARTH = 6371000.0  # Mean Earth radius [m]


@beartype
@dataclass(frozen=True)
class Coordinates:
    """Geographic position.

    Attributes:
        latitude: Latitude [deg]
        longitude: Longitude [deg]
    """
    latitude: float
    longitude: float


@beartype
@dataclass(frozen=True)
class LaunchSite:
    """Launch site location and rail orientation.

    Attributes:
        latitude: Latitude [deg]
        longitude: Longitude [deg]
        elevation: Ground elevation [m]
        launch_angle: Rail angle above horizontal [deg], 90 = vertical
        launch_azimuth: Rail bearing [deg], 0 = north, clockwise
    """
    latitude: float
    longitude: float
    elevation: float = 0.0
    launch_angle: float = 90.0
    launch_azimuth: float = 0.0

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def validate(self) -> None:
        """Raise ConfigurationError for out-of-range site values."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ConfigurationError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ConfigurationError(f"longitude out of range: {self.longitude}")
        if not 0.0 < self.launch_angle <= 90.0:
            raise ConfigurationError(
                f"launch_angle must be in (0, 90] degrees, got {self.launch_angle}"
            )
        if not math.isfinite(self.elevation) or not math.isfinite(self.launch_azimuth):
            raise ConfigurationError("elevation and launch_azimuth must be finite")


# Tokyo, slightly tilted rail pointing north
DEFAULT_LAUNCH_SITE = LaunchSite(
    latitude=35.6762,
    longitude=139.6503,
    elevation=40.0,
    launch_angle=85.0,
    launch_azimuth=0.0,
)


def _meters_per_degree_lon(latitude: float) -> float:
    return METERS_PER_DEGREE_LAT * math.cos(math.radians(latitude))


@beartype
def local_to_geographic(origin: Coordinates | LaunchSite, east: float, north: float) -> Coordinates:
    """Convert a local (east, north) displacement [m] to coordinates."""
    return Coordinates(
        latitude=origin.latitude + north / METERS_PER_DEGREE_LAT,
        longitude=origin.longitude + east / _meters_per_degree_lon(origin.latitude),
    )


@beartype
def geographic_to_local(
    origin: Coordinates | LaunchSite,
    coords: Coordinates,
) -> tuple[float, float]:
    """Convert coordinates to a local (east, north) displacement [m]."""
    return (
        (coords.longitude - origin.longitude) * _meters_per_degree_lon(origin.latitude),
        (coords.latitude - origin.latitude) * METERS_PER_DEGREE_LAT,
    )


@beartype
def haversine_distance(start: Coordinates, end: Coordinates) -> float:
    """Great-circle distance on a spherical Earth [m]."""
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(end.longitude - start.longitude)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return R_EARTH * 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


@beartype
def initial_bearing(start: Coordinates, end: Coordinates) -> float:
    """Initial great-circle bearing from start to end [deg], 0 = north."""
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    dlon = math.radians(end.longitude - start.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


@beartype
def destination_point(start: Coordinates, distance: float, bearing: float) -> Coordinates:
    """Point reached by travelling distance [m] along bearing [deg]."""
    lat1 = math.radians(start.latitude)
    lon1 = math.radians(start.longitude)
    theta = math.radians(bearing)
    delta = distance / R_EARTH

    lat2 = math.asin(
        math.sin(lat1) * math.cos(delta)
        + math.cos(lat1) * math.sin(delta) * math.cos(theta)
    )
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    return Coordinates(latitude=math.degrees(lat2), longitude=math.degrees(lon2))
