"""Aerodynamic force models for small rockets and recovery devices.

All functions are pure and total over their physical domain: zero
velocity gives zero drag rather than an error.

- drag_force: D = 0.5 * rho * v^2 * Cd * A
- effective_drag_coefficient: transonic drag rise between Mach 0.8 and 1.2
- terminal_velocity: speed at which drag balances weight

Example:
    >>> from flightpath.vehicle import drag_force, terminal_velocity
    >>>
    >>> drag_force(100.0, 0.5, 0.01, 0.0)  # ~30.6 N at sea level
    >>> terminal_velocity(0.08, 1.75, 0.0707, 0.0)  # ~3.2 m/s
"""

import math

from beartype import beartype

from flightpath.environment.atmosphere import G0, get_atmosphere
from flightpath.vehicle.rocket import reference_area

# =============================================================================
# Constants
# =============================================================================

TRANSONIC_START = 0.8  # Mach
TRANSONIC_END = 1.2  # Mach
SUPERSONIC_CD_FACTOR = 1.2

# Sutherland's law for air
SUTHERLAND_C1 = 1.458e-6  # [kg/(m·s·K^0.5)]
SUTHERLAND_S = 110.4  # [K]


# =============================================================================
# Forces
# =============================================================================


@beartype
def dynamic_pressure(
    velocity: float,
    altitude: float,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
) -> float:
    """Calculate dynamic pressure q = 0.5 * rho * v^2.

    Args:
        velocity: Airspeed [m/s]
        altitude: Altitude [m]
        surface_temperature: Surface temperature override [deg C]
        surface_pressure: Surface pressure override [hPa]

    Returns:
        Dynamic pressure [Pa]
    """
    rho = get_atmosphere().density(altitude, surface_temperature, surface_pressure)
    return 0.5 * rho * velocity * velocity


@beartype
def drag_force(
    velocity: float,
    drag_coefficient: float,
    area: float,
    altitude: float,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
) -> float:
    """Calculate drag force magnitude.

    Args:
        velocity: Airspeed [m/s]
        drag_coefficient: Drag coefficient Cd
        area: Reference area [m^2]
        altitude: Altitude [m]
        surface_temperature: Surface temperature override [deg C]
        surface_pressure: Surface pressure override [hPa]

    Returns:
        Drag force [N]
    """
    q = dynamic_pressure(velocity, altitude, surface_temperature, surface_pressure)
    return q * drag_coefficient * area


@beartype
def effective_drag_coefficient(
    base_cd: float,
    velocity: float,
    altitude: float,
    surface_temperature: float | None = None,
) -> float:
    """Get the drag coefficient including transonic drag rise.

    - M < 0.8: base Cd
    - 0.8 <= M < 1.2: quadratic rise, Cd * (1 + 0.5 * ((M - 0.8) / 0.4)^2)
    - M >= 1.2: Cd * 1.2

    Model rockets rarely leave the first regime.

    Args:
        base_cd: Subsonic drag coefficient
        velocity: Airspeed [m/s]
        altitude: Altitude [m]
        surface_temperature: Surface temperature override [deg C]

    Returns:
        Effective drag coefficient
    """
    mach = velocity / get_atmosphere().speed_of_sound(altitude, surface_temperature)

    if mach < TRANSONIC_START:
        return base_cd
    if mach < TRANSONIC_END:
        frac = (mach - TRANSONIC_START) / (TRANSONIC_END - TRANSONIC_START)
        return base_cd * (1.0 + 0.5 * frac**2)
    return base_cd * SUPERSONIC_CD_FACTOR


@beartype
def terminal_velocity(
    mass: float,
    drag_coefficient: float,
    area: float,
    altitude: float,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
) -> float:
    """Calculate terminal velocity v_t = sqrt(2 * m * g / (rho * Cd * A)).

    Args:
        mass: Falling mass [kg]
        drag_coefficient: Drag coefficient Cd
        area: Reference area [m^2]
        altitude: Altitude [m]
        surface_temperature: Surface temperature override [deg C]
        surface_pressure: Surface pressure override [hPa]

    Returns:
        Terminal velocity [m/s]
    """
    rho = get_atmosphere().density(altitude, surface_temperature, surface_pressure)
    return math.sqrt(2.0 * mass * G0 / (rho * drag_coefficient * area))


@beartype
def parachute_terminal_velocity(
    mass: float,
    diameter: float,
    drag_coefficient: float = 1.75,
    altitude: float = 0.0,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
) -> float:
    """Terminal velocity under a round canopy of the given diameter [m/s]."""
    return terminal_velocity(
        mass,
        drag_coefficient,
        reference_area(diameter),
        altitude,
        surface_temperature,
        surface_pressure,
    )


@beartype
def reynolds_number(
    velocity: float,
    characteristic_length: float,
    altitude: float,
    surface_temperature: float | None = None,
) -> float:
    """Calculate Reynolds number Re = rho * v * L / mu.

    Viscosity comes from Sutherland's law at the local temperature.

    Args:
        velocity: Airspeed [m/s]
        characteristic_length: Body length or diameter [m]
        altitude: Altitude [m]
        surface_temperature: Surface temperature override [deg C]

    Returns:
        Reynolds number
    """
    atm = get_atmosphere()
    T = atm.temperature(altitude, surface_temperature)
    rho = atm.density(altitude, surface_temperature)
    mu = SUTHERLAND_C1 * T**1.5 / (T + SUTHERLAND_S)
    return rho * velocity * characteristic_length / mu
