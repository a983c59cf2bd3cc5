"""Unit tests for the weather data contract."""

from datetime import datetime

import pytest
from numpy.testing import assert_allclose

from flightpath.environment.weather import (
    DEFAULT_WEATHER,
    WeatherData,
    weather_from_open_meteo,
)
from flightpath.errors import WeatherFetchError


def _payload():
    return {
        "current": {
            "temperature_2m": 18.5,
            "surface_pressure": 1008.2,
            "wind_speed_10m": 4.2,
            "wind_direction_10m": 250.0,
        },
        "hourly": {
            "time": ["2026-10-18T00:00", "2026-10-18T01:00", "2026-10-18T02:00"],
            "wind_speed_80m": [5.0, 6.0, 7.0],
            "wind_direction_80m": [240.0, 245.0, 250.0],
            "wind_speed_120m": [6.5, 7.5, 8.5],
            "wind_direction_120m": [245.0, 250.0, 255.0],
        },
    }


class TestWeatherData:
    """Test WeatherData defaults."""

    def test_default_is_calm_standard_day(self):
        assert DEFAULT_WEATHER.surface_wind_speed == 0.0
        assert DEFAULT_WEATHER.surface_temperature == 15.0
        assert DEFAULT_WEATHER.surface_pressure == 1013.25
        assert DEFAULT_WEATHER.source == "manual"
        assert DEFAULT_WEATHER.wind_layers == ()


class TestOpenMeteo:
    """Test conversion of Open-Meteo payloads."""

    def test_surface_fields(self):
        now = datetime(2026, 10, 18, 1, 30)
        weather = weather_from_open_meteo(_payload(), now)

        assert isinstance(weather, WeatherData)
        assert weather.surface_wind_speed == 4.2
        assert weather.surface_wind_direction == 250.0
        assert weather.surface_temperature == 18.5
        assert weather.surface_pressure == 1008.2
        assert weather.source == "api"
        assert weather.timestamp == now

    def test_layers_use_current_hour(self):
        weather = weather_from_open_meteo(_payload(), datetime(2026, 10, 18, 1, 30))

        assert [layer.altitude for layer in weather.wind_layers] == [80.0, 120.0]
        assert weather.wind_layers[0].wind_speed == 6.0
        assert weather.wind_layers[1].wind_direction == 250.0

    def test_hour_clamped_to_available_rows(self):
        weather = weather_from_open_meteo(_payload(), datetime(2026, 10, 18, 23, 0))

        assert weather.wind_layers[0].wind_speed == 7.0

    def test_without_hourly(self):
        payload = _payload()
        del payload["hourly"]

        assert weather_from_open_meteo(payload).wind_layers == ()

    def test_missing_current(self):
        with pytest.raises(WeatherFetchError, match="no current conditions"):
            weather_from_open_meteo({"hourly": {}})

    def test_missing_field(self):
        payload = _payload()
        del payload["current"]["wind_speed_10m"]

        with pytest.raises(WeatherFetchError, match="missing a field"):
            weather_from_open_meteo(payload)


class TestOpenMeteoUnits:
    """Test conversion of reported wind speed units to m/s."""

    def test_kmh_surface_wind(self):
        payload = _payload()
        payload["current"]["wind_speed_10m"] = 36.0
        payload["current_units"] = {"wind_speed_10m": "km/h", "temperature_2m": "°C"}

        weather = weather_from_open_meteo(payload, datetime(2026, 10, 18, 1, 0))

        assert_allclose(weather.surface_wind_speed, 10.0)

    def test_hourly_units(self):
        payload = _payload()
        payload["hourly_units"] = {"wind_speed_80m": "kn", "wind_speed_120m": "mph"}

        weather = weather_from_open_meteo(payload, datetime(2026, 10, 18, 1, 0))

        assert_allclose(weather.wind_layers[0].wind_speed, 6.0 * 0.514444, rtol=1e-5)
        assert_allclose(weather.wind_layers[1].wind_speed, 7.5 * 0.44704)
        assert weather.wind_layers[1].wind_direction == 250.0

    def test_metres_per_second_unchanged(self):
        payload = _payload()
        payload["current_units"] = {"wind_speed_10m": "m/s"}

        assert weather_from_open_meteo(payload).surface_wind_speed == 4.2

    def test_unknown_unit(self):
        payload = _payload()
        payload["current_units"] = {"wind_speed_10m": "furlong/fortnight"}

        with pytest.raises(WeatherFetchError, match="unsupported wind speed unit"):
            weather_from_open_meteo(payload)


class TestOpenMeteoMissingLayers:
    """Test hourly rows with gaps."""

    def test_null_value_skips_layer(self):
        payload = _payload()
        payload["hourly"]["wind_speed_80m"][1] = None

        weather = weather_from_open_meteo(payload, datetime(2026, 10, 18, 1, 0))

        assert [layer.altitude for layer in weather.wind_layers] == [120.0]

    def test_missing_series_skips_layer(self):
        payload = _payload()
        del payload["hourly"]["wind_direction_120m"]

        weather = weather_from_open_meteo(payload, datetime(2026, 10, 18, 1, 0))

        assert [layer.altitude for layer in weather.wind_layers] == [80.0]
