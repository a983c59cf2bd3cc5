"""Weather inputs for trajectory prediction.

``WeatherData`` is the contract any weather source must satisfy: surface
wind (m/s, meteorological "from" direction in degrees), surface temperature
(deg C), surface pressure (hPa) and optional altitude wind layers.

No network access happens here. A live source implements ``WeatherSource``
and raises ``WeatherFetchError`` on failure; ``weather_from_open_meteo``
converts an already-downloaded Open-Meteo forecast payload.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Protocol

from beartype import beartype

from flightpath.errors import WeatherFetchError

WeatherSourceTag = Literal["manual", "api"]

# Open-Meteo hourly fields carrying the altitude layers, by height [m]
_OPEN_METEO_LAYERS = (
    (80.0, "wind_speed_80m", "wind_direction_80m"),
    (120.0, "wind_speed_120m", "wind_direction_120m"),
)


@beartype
@dataclass(frozen=True)
class WindLayer:
    """Wind sample at one altitude.

    Attributes:
        altitude: Height above ground [m]
        wind_speed: Wind speed [m/s]
        wind_direction: Direction the wind blows from [deg]
    """
    altitude: float
    wind_speed: float
    wind_direction: float


@beartype
@dataclass(frozen=True)
class WeatherData:
    """Weather reading used as simulation input.

    Attributes:
        surface_wind_speed: Surface wind speed [m/s]
        surface_wind_direction: Surface wind direction [deg]
        surface_temperature: Surface temperature [deg C]
        surface_pressure: Surface pressure [hPa]
        wind_layers: Altitude wind samples, any order
        source: Provenance, "manual" or "api"
        timestamp: Capture time for api readings
    """
    surface_wind_speed: float = 0.0
    surface_wind_direction: float = 0.0
    surface_temperature: float = 15.0
    surface_pressure: float = 1013.25
    wind_layers: tuple[WindLayer, ...] = ()
    source: WeatherSourceTag = "manual"
    timestamp: datetime | None = None


DEFAULT_WEATHER = WeatherData()


class WeatherSource(Protocol):
    """Protocol for live weather providers.

    Implementations return ``WeatherData(source="api")`` stamped with the
    capture time, and raise ``WeatherFetchError`` with a readable message
    on any failure. Retries are the caller's decision.
    """

    def fetch(self, latitude: float, longitude: float) -> WeatherData:
        """Get current conditions at a location."""
        ...


# Conversion factors from Open-Meteo wind speed units to m/s
_SPEED_UNITS: dict[str, float] = {
    "m/s": 1.0,
    "km/h": 1.0 / 3.6,
    "kn": 1852.0 / 3600.0,
    "mph": 0.44704,
}


def _hour_index(times: list[Any], now: datetime) -> int:
    return min(now.hour, max(len(times), 1) - 1)


def _speed_factor(units: Any, key: str) -> float:
    """m/s per reported unit of one field; m/s when the payload names no unit."""
    if not isinstance(units, Mapping) or key not in units:
        return 1.0
    unit = units[key]
    if unit not in _SPEED_UNITS:
        raise WeatherFetchError(f"unsupported wind speed unit for {key}: {unit!r}")
    return _SPEED_UNITS[unit]


def _layer_value(values: list[Any] | None, index: int) -> float | None:
    if not values or index >= len(values) or values[index] is None:
        return None
    return float(values[index])


@beartype
def weather_from_open_meteo(
    payload: Mapping[str, Any],
    now: datetime | None = None,
) -> WeatherData:
    """Convert an Open-Meteo ``/v1/forecast`` payload into WeatherData.

    Expects ``current`` with temperature_2m, surface_pressure,
    wind_speed_10m and wind_direction_10m, and optionally ``hourly``
    80 m / 120 m winds. The hourly row matching the current hour of ``now``
    is used for the altitude layers; a layer with a missing value is left
    out. Wind speeds are converted to m/s from the units named in
    ``current_units`` / ``hourly_units`` (km/h, kn, mph or m/s); fields
    without a unit entry are taken as m/s.

    Args:
        payload: Decoded JSON response body
        now: Capture time, defaults to the current local time

    Returns:
        WeatherData with source="api"

    Raises:
        WeatherFetchError: If the payload lacks the current conditions or
            reports a wind speed unit that cannot be converted
    """
    now = now or datetime.now()

    current = payload.get("current")
    if not isinstance(current, Mapping):
        raise WeatherFetchError("weather response has no current conditions")

    try:
        wind_speed = float(current["wind_speed_10m"])
        wind_direction = float(current["wind_direction_10m"])
        temperature = float(current["temperature_2m"])
        pressure = float(current["surface_pressure"])
    except (KeyError, TypeError, ValueError) as e:
        raise WeatherFetchError(f"weather response is missing a field: {e}") from e
    wind_speed *= _speed_factor(payload.get("current_units"), "wind_speed_10m")

    layers: list[WindLayer] = []
    hourly = payload.get("hourly")
    hourly_units = payload.get("hourly_units")
    if isinstance(hourly, Mapping):
        index = _hour_index(list(hourly.get("time") or []), now)
        for altitude, speed_key, direction_key in _OPEN_METEO_LAYERS:
            speed = _layer_value(hourly.get(speed_key), index)
            direction = _layer_value(hourly.get(direction_key), index)
            if speed is None or direction is None:
                continue
            layers.append(WindLayer(
                altitude=altitude,
                wind_speed=speed * _speed_factor(hourly_units, speed_key),
                wind_direction=direction,
            ))

    return WeatherData(
        surface_wind_speed=wind_speed,
        surface_wind_direction=wind_direction,
        surface_temperature=temperature,
        surface_pressure=pressure,
        wind_layers=tuple(layers),
        source="api",
        timestamp=now,
    )
