"""Recovery descent from apogee to the ground.

Same fixed-step explicit Euler scheme as the ascent, with the drag model
chosen by the recovery device and an altitude-dependent wind. The
descending mass is the rocket's dry mass (propellant is spent).

Example:
    >>> from flightpath.environment import LogLawWindProfile
    >>> from flightpath.simulation import Vector3, simulate_descent
    >>> from flightpath.vehicle import DEFAULT_ROCKET, Parachute
    >>>
    >>> wind = LogLawWindProfile(reference_speed=3.0, reference_direction=270.0)
    >>> result = simulate_descent(
    ...     Parachute(diameter=0.3),
    ...     DEFAULT_ROCKET,
    ...     start_position=Vector3(0.0, 0.0, 100.0),
    ...     wind_at=wind.wind_at,
    ... )
    >>> print(f"Landed after {result.descent_time:.1f} s")
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from beartype import beartype

from flightpath.environment.atmosphere import Atmosphere
from flightpath.environment.wind import WindVector
from flightpath.simulation.config import DESCENT_CONFIG, SimConfig
from flightpath.simulation.kernels import euler_step, opposing_force
from flightpath.simulation.sampling import (
    FlightPhase,
    SampleSchedule,
    TrajectoryPoint,
    Vector3,
)
from flightpath.vehicle.recovery import RecoveryParameters, drag_parameters
from flightpath.vehicle.rocket import RocketParameters

logger = logging.getLogger(__name__)

# Small downward velocity at apogee; keeps the drag direction defined
APOGEE_SEED_VELOCITY = Vector3(0.0, 0.0, -0.1)
MIN_SPEED = 0.01  # [m/s]

WindLookup = Callable[[float], WindVector]


def _calm(_altitude: float) -> WindVector:
    return WindVector(speed=0.0, direction=0.0)


@beartype
@dataclass(frozen=True)
class Landing:
    """Touchdown state.

    Attributes:
        time: Time since ignition [s]
        position: Local position, z equals the ground level [m]
        velocity: Ground speed at touchdown [m/s]
    """
    time: float
    position: Vector3
    velocity: float


@beartype
@dataclass(frozen=True)
class DescentResult:
    """Descent phase output.

    Attributes:
        points: Sampled trajectory, all in the descent phase
        landing: Touchdown state
        descent_time: Time from apogee to touchdown [s]
        average_descent_rate: Mean downward speed over steps moving down [m/s]
        iterations: Integration steps taken
        converged: False if the iteration cap stopped the run above ground
    """
    points: tuple[TrajectoryPoint, ...]
    landing: Landing
    descent_time: float
    average_descent_rate: float
    iterations: int
    converged: bool


@beartype
def simulate_descent(
    recovery: RecoveryParameters,
    rocket: RocketParameters,
    start_position: Vector3,
    start_velocity: Vector3 = APOGEE_SEED_VELOCITY,
    start_time: float = 0.0,
    ground_level: float = 0.0,
    wind_at: WindLookup = _calm,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
    config: SimConfig = DESCENT_CONFIG,
) -> DescentResult:
    """Integrate the descent until the rocket reaches ground level.

    Args:
        recovery: Recovery device variant
        rocket: Vehicle; dry mass, and cross-section for freefall
        start_position: Local position at deployment, z is altitude ASL [m]
        start_velocity: Ground velocity at deployment [m/s]
        start_time: Time since ignition at deployment [s]
        ground_level: Altitude of the ground [m]
        wind_at: Wind lookup by height above ground [m]
        surface_temperature: Surface temperature [deg C]
        surface_pressure: Surface pressure [hPa]
        config: Step size, iteration cap and sample spacing

    Returns:
        DescentResult whose last point sits exactly on ground level
    """
    atm = Atmosphere(surface_temperature, surface_pressure)
    dt = config.time_step
    drag_params = drag_parameters(recovery, rocket)
    cd, area = drag_params.drag_coefficient, drag_params.area
    mass = rocket.dry_mass

    px, py, pz = start_position
    vx, vy, vz = start_velocity
    t = start_time

    points: list[TrajectoryPoint] = []
    schedule = SampleSchedule(start_time, config.sample_interval, dt)
    descent_rate_total = 0.0
    descent_samples = 0

    iteration = 0
    while pz > ground_level and iteration < config.max_iterations:
        wind = wind_at(pz - ground_level)
        wx, wy = wind.components()

        if -vz > 0:
            descent_rate_total += -vz
            descent_samples += 1

        if schedule.due(t):
            points.append(TrajectoryPoint(
                time=t,
                position=Vector3(px, py, pz),
                velocity=Vector3(vx, vy, vz),
                phase=FlightPhase.DESCENT,
            ))

        vrx, vry, vrz = vx - wx, vy - wy, vz
        airspeed = math.sqrt(vrx * vrx + vry * vry + vrz * vrz)
        drag = 0.5 * atm.density(pz) * airspeed * airspeed * cd * area
        fx, fy, fz = opposing_force(vrx, vry, vrz, drag, MIN_SPEED)

        px, py, pz, vx, vy, vz = euler_step(
            px, py, pz, vx, vy, vz, fx, fy, fz, mass, atm.gravity(pz), dt,
        )
        t += dt
        iteration += 1

    converged = pz <= ground_level
    if not converged:
        logger.warning(
            "Descent stopped at the iteration cap (%d steps) %.1f m above ground",
            config.max_iterations, pz - ground_level,
        )

    landing_speed = math.sqrt(vx * vx + vy * vy + vz * vz)
    landing_position = Vector3(px, py, ground_level)
    points.append(TrajectoryPoint(
        time=t,
        position=landing_position,
        velocity=Vector3(vx, vy, vz),
        phase=FlightPhase.DESCENT,
    ))

    average_rate = descent_rate_total / descent_samples if descent_samples else 0.0
    logger.debug(
        "Descent (%s): %.1f s, landing %.2f m/s, %d steps",
        recovery.method, t - start_time, landing_speed, iteration,
    )

    return DescentResult(
        points=tuple(points),
        landing=Landing(time=t, position=landing_position, velocity=landing_speed),
        descent_time=t - start_time,
        average_descent_rate=average_rate,
        iterations=iteration,
        converged=converged,
    )
