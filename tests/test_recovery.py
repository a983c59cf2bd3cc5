"""Unit tests for vehicle and recovery parameters."""

import math
from dataclasses import replace

import pytest
from numpy.testing import assert_allclose

from flightpath.errors import ConfigurationError
from flightpath.vehicle import (
    DEFAULT_RECOVERY,
    DEFAULT_ROCKET,
    Freefall,
    Parachute,
    Streamer,
    drag_parameters,
    reference_area,
)

# =============================================================================
# Rocket
# =============================================================================


class TestRocketParameters:
    """Test derived rocket values and validation."""

    def test_reference_area(self):
        assert_allclose(reference_area(0.1), math.pi * 0.0025)
        assert_allclose(DEFAULT_ROCKET.reference_area, math.pi * 0.0125**2)

    def test_average_thrust(self):
        assert_allclose(DEFAULT_ROCKET.average_thrust, 5.0)

    def test_liftoff_mass(self):
        assert_allclose(DEFAULT_ROCKET.liftoff_mass, 0.0562)

    def test_default_valid(self):
        DEFAULT_ROCKET.validate()

    @pytest.mark.parametrize("name,value", [
        ("dry_mass", 0.0),
        ("body_diameter", -0.01),
        ("drag_coefficient", 0.0),
        ("motor_total_impulse", 0.0),
        ("motor_burn_time", 0.0),
    ])
    def test_must_be_positive(self, name, value):
        with pytest.raises(ConfigurationError, match=f"{name} must be positive"):
            replace(DEFAULT_ROCKET, **{name: value}).validate()

    @pytest.mark.parametrize("name", [
        "propellant_mass",
        "body_length",
        "motor_delay_time",
    ])
    def test_must_be_non_negative(self, name):
        with pytest.raises(ConfigurationError, match=f"{name} must be non-negative"):
            replace(DEFAULT_ROCKET, **{name: -1.0}).validate()

    def test_thrust_must_exceed_weight(self):
        """0.6 N of average thrust cannot lift a 0.09 kg rocket."""
        weak = replace(
            DEFAULT_ROCKET,
            dry_mass=0.08,
            propellant_mass=0.01,
            motor_total_impulse=0.3,
            motor_burn_time=0.5,
        )

        with pytest.raises(ConfigurationError, match="does not exceed liftoff weight"):
            weak.validate()

    def test_zero_propellant_allowed(self):
        replace(DEFAULT_ROCKET, propellant_mass=0.0).validate()

    def test_non_finite(self):
        with pytest.raises(ConfigurationError, match="finite"):
            replace(DEFAULT_ROCKET, dry_mass=float("inf")).validate()


# =============================================================================
# Recovery
# =============================================================================


class TestRecoveryDevices:
    """Test recovery variants and their drag models."""

    def test_method_tags(self):
        assert Parachute().method == "parachute"
        assert Streamer().method == "streamer"
        assert Freefall().method == "freefall"

    def test_method_not_settable(self):
        with pytest.raises(TypeError):
            Parachute(method="streamer")

    def test_default_recovery(self):
        assert DEFAULT_RECOVERY == Parachute(diameter=0.3, drag_coefficient=1.75)

    def test_parachute_drag(self):
        params = drag_parameters(Parachute(diameter=0.6, drag_coefficient=1.5), DEFAULT_ROCKET)

        assert params.drag_coefficient == 1.5
        assert_allclose(params.area, math.pi * 0.09)

    def test_streamer_drag(self):
        params = drag_parameters(Streamer(area=0.02, drag_coefficient=1.0), DEFAULT_ROCKET)

        assert params.drag_coefficient == 1.0
        assert params.area == 0.02

    def test_freefall_uses_body(self):
        params = drag_parameters(Freefall(), DEFAULT_ROCKET)

        assert params.drag_coefficient == DEFAULT_ROCKET.drag_coefficient
        assert params.area == DEFAULT_ROCKET.reference_area

    @pytest.mark.parametrize("recovery", [
        Parachute(diameter=0.0),
        Parachute(drag_coefficient=-1.0),
        Streamer(area=0.0),
        Streamer(drag_coefficient=float("nan")),
    ])
    def test_invalid(self, recovery):
        with pytest.raises(ConfigurationError):
            recovery.validate()

    def test_freefall_always_valid(self):
        Freefall().validate()
