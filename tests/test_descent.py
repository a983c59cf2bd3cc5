"""Unit tests for the recovery descent integrator."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from flightpath.environment import WindVector
from flightpath.simulation import (
    APOGEE_SEED_VELOCITY,
    FlightPhase,
    SimConfig,
    Vector3,
    simulate_descent,
)
from flightpath.vehicle import (
    Freefall,
    Parachute,
    RocketParameters,
    Streamer,
    parachute_terminal_velocity,
)

START = Vector3(0.0, 0.0, 100.0)


@pytest.fixture
def rocket():
    return RocketParameters(
        dry_mass=0.08,
        propellant_mass=0.01,
        body_diameter=0.025,
        body_length=0.3,
        drag_coefficient=0.5,
        motor_total_impulse=5.0,
        motor_burn_time=0.5,
        motor_delay_time=3.0,
    )


def _west_wind(_altitude):
    return WindVector(speed=3.0, direction=270.0)


# =============================================================================
# Parachute Descent
# =============================================================================


class TestParachuteDescent:
    """Test a calm parachute descent from 100 m."""

    def test_lands_on_ground(self, rocket):
        result = simulate_descent(Parachute(diameter=0.3), rocket, START)

        assert result.converged
        assert result.points[-1].position.z == 0.0
        assert result.landing.position.z == 0.0

    def test_reaches_terminal_velocity(self, rocket):
        result = simulate_descent(Parachute(diameter=0.3), rocket, START)

        expected = parachute_terminal_velocity(0.08, 0.3)
        assert_allclose(result.landing.velocity, expected, rtol=0.05)

    def test_descent_time(self, rocket):
        result = simulate_descent(Parachute(diameter=0.3), rocket, START)

        assert 10.0 < result.descent_time < 40.0
        assert result.landing.velocity < 8.0
        assert 0.0 < result.average_descent_rate < 5.0

    def test_calm_descent_is_vertical(self, rocket):
        result = simulate_descent(Parachute(diameter=0.3), rocket, START)

        assert result.landing.position.x == 0.0
        assert result.landing.position.y == 0.0

    def test_larger_canopy_descends_slower(self, rocket):
        small = simulate_descent(Parachute(diameter=0.3), rocket, START)
        large = simulate_descent(Parachute(diameter=0.6), rocket, START)

        assert large.descent_time > small.descent_time
        assert large.landing.velocity < small.landing.velocity


# =============================================================================
# Recovery Methods
# =============================================================================


class TestRecoveryMethods:
    """Test the drag model chosen per recovery device."""

    def test_landing_speed_ordering(self, rocket):
        chute = simulate_descent(Parachute(diameter=0.3), rocket, START)
        streamer = simulate_descent(Streamer(area=0.01), rocket, START)
        freefall = simulate_descent(Freefall(), rocket, START)

        assert chute.landing.velocity < streamer.landing.velocity < freefall.landing.velocity
        assert chute.descent_time > streamer.descent_time > freefall.descent_time

    def test_freefall_below_body_terminal_velocity(self, rocket):
        result = simulate_descent(Freefall(), rocket, START)

        assert 20.0 < result.landing.velocity < 75.0


# =============================================================================
# Wind Drift
# =============================================================================


class TestWindDrift:
    """Test horizontal drift with an altitude wind."""

    def test_drifts_downwind(self, rocket):
        result = simulate_descent(Parachute(diameter=0.3), rocket, START, wind_at=_west_wind)

        assert result.landing.position.x > 0.0
        assert abs(result.landing.position.y) < 1e-6

    def test_drift_matches_wind_speed(self, rocket):
        """Under a canopy the rocket drifts at roughly the wind speed."""
        result = simulate_descent(Parachute(diameter=0.3), rocket, START, wind_at=_west_wind)

        assert_allclose(result.landing.position.x, 3.0 * result.descent_time, rtol=0.05)

    def test_wind_queried_above_ground(self, rocket):
        heights = []

        def wind_at(height):
            heights.append(height)
            return WindVector(speed=0.0, direction=0.0)

        simulate_descent(
            Parachute(diameter=0.3),
            rocket,
            Vector3(0.0, 0.0, 600.0),
            ground_level=500.0,
            wind_at=wind_at,
        )

        assert_allclose(heights[0], 100.0)
        assert min(heights) > 0.0


# =============================================================================
# Sampling Contract
# =============================================================================


class TestDescentSampling:
    """Test recorded descent points."""

    def test_first_point_at_start(self, rocket):
        result = simulate_descent(Parachute(), rocket, START, start_time=4.0)

        first = result.points[0]
        assert first.time == 4.0
        assert first.position == START
        assert first.velocity == APOGEE_SEED_VELOCITY

    def test_all_descent_phase(self, rocket):
        result = simulate_descent(Parachute(), rocket, START)

        assert all(p.phase is FlightPhase.DESCENT for p in result.points)

    def test_sample_spacing(self, rocket):
        result = simulate_descent(Parachute(), rocket, START, start_time=3.7)
        times = np.array([p.time for p in result.points])

        assert_allclose(np.diff(times[:-1]), 0.2, atol=1e-9)
        assert 0.0 < times[-1] - times[-2] <= 0.2 + 1e-9

    def test_time_measured_from_start(self, rocket):
        result = simulate_descent(Parachute(), rocket, START, start_time=4.0)

        assert_allclose(result.landing.time - 4.0, result.descent_time)

    def test_starting_on_ground(self, rocket):
        result = simulate_descent(Parachute(), rocket, Vector3(5.0, 5.0, 0.0))

        assert result.converged
        assert result.descent_time == 0.0
        assert len(result.points) == 1
        assert result.points[0].position == Vector3(5.0, 5.0, 0.0)

    def test_landing_point_after_every_sample(self, rocket):
        config = SimConfig(time_step=0.05, max_iterations=100000, sample_interval=0.05)
        result = simulate_descent(Parachute(), rocket, START, config=config)
        times = np.array([p.time for p in result.points])

        assert np.all(np.diff(times) > 0.0)
        assert result.points[-1].position.z == 0.0
        assert result.points[-2].position.z > 0.0


class TestDescentIterationCap:
    """Test truncated descents."""

    def test_not_converged(self, rocket, caplog):
        config = SimConfig(time_step=0.05, max_iterations=20, sample_interval=0.2)

        with caplog.at_level("WARNING", logger="flightpath.simulation.descent"):
            result = simulate_descent(Parachute(), rocket, START, config=config)

        assert not result.converged
        assert result.iterations == 20
        assert result.points[-1].position.z == 0.0
        assert "iteration cap" in caplog.text
