"""Environment models for small-rocket flight prediction.

Provides the standard atmosphere, wind profiles and the weather data
contract.

Example:
    >>> from flightpath.environment import Atmosphere, LogLawWindProfile
    >>>
    >>> atm = Atmosphere()
    >>> rho = atm.density(500.0)  # kg/m^3
    >>>
    >>> wind = LogLawWindProfile(reference_speed=4.0, reference_direction=270.0)
    >>> wind.wind_at(100.0).speed  # m/s
"""

from flightpath.environment.atmosphere import (
    Atmosphere,
    AtmosphereResult,
    density_at_altitude,
    get_atmosphere,
    gravity_at_altitude,
    pressure_at_altitude,
    speed_of_sound_at_altitude,
    temperature_at_altitude,
)
from flightpath.environment.weather import (
    DEFAULT_WEATHER,
    WeatherData,
    WeatherSource,
    WindLayer,
    weather_from_open_meteo,
)
from flightpath.environment.wind import (
    DEFAULT_WIND_UNCERTAINTY,
    ROUGHNESS_LENGTHS,
    EllipseAxes,
    LayeredWindProfile,
    LogLawWindProfile,
    WindProfile,
    WindUncertainty,
    WindVector,
    interpolate_direction,
    uncertainty_ellipse,
    wind_components,
    wind_direction_label,
    wind_profile_from_weather,
)

__all__ = [
    # Atmosphere
    "Atmosphere",
    "AtmosphereResult",
    "density_at_altitude",
    "get_atmosphere",
    "gravity_at_altitude",
    "pressure_at_altitude",
    "speed_of_sound_at_altitude",
    "temperature_at_altitude",
    # Weather
    "DEFAULT_WEATHER",
    "WeatherData",
    "WeatherSource",
    "WindLayer",
    "weather_from_open_meteo",
    # Wind
    "DEFAULT_WIND_UNCERTAINTY",
    "ROUGHNESS_LENGTHS",
    "EllipseAxes",
    "LayeredWindProfile",
    "LogLawWindProfile",
    "WindProfile",
    "WindUncertainty",
    "WindVector",
    "interpolate_direction",
    "uncertainty_ellipse",
    "wind_components",
    "wind_direction_label",
    "wind_profile_from_weather",
]
