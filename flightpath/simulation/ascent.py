"""Powered and coasting ascent to apogee.

Point-mass model integrated with fixed-step explicit Euler:

- Thrust: average thrust (total impulse / burn time) along the velocity
  vector once moving, along the launch rail before that
- Mass: propellant depleted linearly over the burn
- Drag: opposes the airspeed vector (ground velocity minus surface wind)
- Gravity: inverse-square with altitude

Integration stops at apogee, declared when vertical velocity turns
negative more than 1 m above the launch elevation, or early (not
converged) if the vehicle sinks below the launch elevation after liftoff.

Example:
    >>> from flightpath.simulation import simulate_ascent
    >>> from flightpath.vehicle import DEFAULT_ROCKET
    >>>
    >>> result = simulate_ascent(DEFAULT_ROCKET, launch_angle=90.0)
    >>> print(f"Apogee: {result.apogee.altitude:.1f} m at {result.apogee.time:.2f} s")
"""

import logging
import math
from dataclasses import dataclass

from beartype import beartype

from flightpath.environment.atmosphere import Atmosphere
from flightpath.environment.wind import wind_components
from flightpath.simulation.config import ASCENT_CONFIG, SimConfig
from flightpath.simulation.kernels import euler_step, opposing_force
from flightpath.simulation.sampling import (
    FlightPhase,
    SampleSchedule,
    TrajectoryPoint,
    Vector3,
)
from flightpath.vehicle.rocket import RocketParameters

logger = logging.getLogger(__name__)

APOGEE_MIN_HEIGHT = 1.0  # Height above launch before apogee can trigger [m]
MIN_SPEED = 0.1  # Below this the velocity direction is not trusted [m/s]


@beartype
@dataclass(frozen=True)
class Apogee:
    """Highest point of the ascent.

    Attributes:
        time: Time since ignition [s]
        altitude: Height above the launch site [m]
        position: Local position, z is altitude ASL [m]
    """
    time: float
    altitude: float
    position: Vector3


@beartype
@dataclass(frozen=True)
class AscentResult:
    """Ascent phase output.

    Attributes:
        points: Sampled trajectory, thrust then coast
        apogee: Apogee state
        apogee_velocity: Ground velocity at apogee [m/s]
        max_velocity: Peak ground speed [m/s]
        burnout_altitude: Height above launch at burnout [m]
        burnout_velocity: Ground speed at burnout [m/s]
        iterations: Integration steps taken
        converged: False if the iteration cap stopped the run before apogee
    """
    points: tuple[TrajectoryPoint, ...]
    apogee: Apogee
    apogee_velocity: Vector3
    max_velocity: float
    burnout_altitude: float
    burnout_velocity: float
    iterations: int
    converged: bool


@beartype
def launch_direction(launch_angle: float, launch_azimuth: float) -> Vector3:
    """Unit vector along the launch rail.

    Args:
        launch_angle: Elevation above horizontal [deg], 90 = vertical
        launch_azimuth: Bearing [deg], 0 = north, clockwise
    """
    elev = math.radians(launch_angle)
    az = math.radians(launch_azimuth)
    return Vector3(
        math.sin(az) * math.cos(elev),
        math.cos(az) * math.cos(elev),
        math.sin(elev),
    )


@beartype
def simulate_ascent(
    rocket: RocketParameters,
    launch_angle: float = 90.0,
    launch_azimuth: float = 0.0,
    launch_elevation: float = 0.0,
    wind_speed: float = 0.0,
    wind_direction: float = 0.0,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
    config: SimConfig = ASCENT_CONFIG,
) -> AscentResult:
    """Integrate the ascent from ignition to apogee.

    Args:
        rocket: Vehicle parameters
        launch_angle: Rail elevation [deg], 90 = vertical
        launch_azimuth: Rail bearing [deg], 0 = north
        launch_elevation: Ground elevation [m]
        wind_speed: Surface wind speed [m/s]
        wind_direction: Surface wind direction, blowing from [deg]
        surface_temperature: Surface temperature [deg C]
        surface_pressure: Surface pressure [hPa]
        config: Step size, iteration cap and sample spacing

    Returns:
        AscentResult. When the iteration cap is hit, or the vehicle drops
        below the launch elevation before apogee, the result holds the
        partial trajectory with ``converged=False``.
    """
    atm = Atmosphere(surface_temperature, surface_pressure)
    dt = config.time_step

    area = rocket.reference_area
    cd = rocket.drag_coefficient
    burn_time = rocket.motor_burn_time
    thrust = rocket.average_thrust
    rail = launch_direction(launch_angle, launch_azimuth)
    wx, wy = wind_components(wind_speed, wind_direction)

    # State
    px, py, pz = 0.0, 0.0, launch_elevation
    vx, vy, vz = 0.0, 0.0, 0.0
    t = 0.0

    points: list[TrajectoryPoint] = []
    schedule = SampleSchedule(0.0, config.sample_interval, dt)
    max_velocity = 0.0
    burnout_altitude = 0.0
    burnout_velocity = 0.0
    burnout_captured = False
    converged = False
    grounded = False
    phase = FlightPhase.THRUST

    iteration = 0
    while iteration < config.max_iterations:
        speed = math.sqrt(vx * vx + vy * vy + vz * vz)
        max_velocity = max(max_velocity, speed)

        burning = t < burn_time
        phase = FlightPhase.THRUST if burning else FlightPhase.COAST

        if schedule.due(t):
            points.append(TrajectoryPoint(
                time=t,
                position=Vector3(px, py, pz),
                velocity=Vector3(vx, vy, vz),
                phase=phase,
            ))

        if vz < 0 and pz > launch_elevation + APOGEE_MIN_HEIGHT:
            converged = True
            break

        if iteration > 0 and pz < launch_elevation:
            grounded = True
            break

        if not burning and not burnout_captured:
            burnout_altitude = pz - launch_elevation
            burnout_velocity = speed
            burnout_captured = True

        # Drag against the airspeed vector
        vrx, vry, vrz = vx - wx, vy - wy, vz
        airspeed = math.sqrt(vrx * vrx + vry * vry + vrz * vrz)
        drag = 0.5 * atm.density(pz) * airspeed * airspeed * cd * area
        fx, fy, fz = opposing_force(vrx, vry, vrz, drag, MIN_SPEED)

        if burning:
            if speed > MIN_SPEED:
                fx += thrust * vx / speed
                fy += thrust * vy / speed
                fz += thrust * vz / speed
            else:
                fx += thrust * rail.x
                fy += thrust * rail.y
                fz += thrust * rail.z

        mass = rocket.dry_mass + rocket.propellant_mass * max(0.0, 1.0 - t / burn_time)

        px, py, pz, vx, vy, vz = euler_step(
            px, py, pz, vx, vy, vz, fx, fy, fz, mass, atm.gravity(pz), dt,
        )
        t += dt
        iteration += 1

    if grounded:
        logger.warning(
            "Ascent fell below the launch elevation at t=%.2f s before apogee", t,
        )
    elif not converged:
        logger.warning(
            "Ascent stopped at the iteration cap (%d steps, t=%.2f s) before apogee",
            config.max_iterations, t,
        )

    if not points or points[-1].time != t:
        points.append(TrajectoryPoint(
            time=t,
            position=Vector3(px, py, pz),
            velocity=Vector3(vx, vy, vz),
            phase=phase,
        ))

    apogee = Apogee(time=t, altitude=pz - launch_elevation, position=Vector3(px, py, pz))
    logger.debug(
        "Ascent: apogee %.1f m at %.2f s, max velocity %.1f m/s, %d steps",
        apogee.altitude, apogee.time, max_velocity, iteration,
    )

    return AscentResult(
        points=tuple(points),
        apogee=apogee,
        apogee_velocity=Vector3(vx, vy, vz),
        max_velocity=max_velocity,
        burnout_altitude=burnout_altitude,
        burnout_velocity=burnout_velocity,
        iterations=iteration,
        converged=converged,
    )
