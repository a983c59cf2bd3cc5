"""Numba-compiled inner loops shared by the ascent and descent integrators."""

import math

from numba import njit


@njit(cache=True, fastmath=True)
def euler_step(
    px: float, py: float, pz: float,
    vx: float, vy: float, vz: float,
    fx: float, fy: float, fz: float,
    mass: float,
    gravity: float,
    dt: float,
) -> tuple[float, float, float, float, float, float]:
    """Advance one explicit Euler step under force f and gravity.

    Velocity is updated first and the new velocity moves the position.
    """
    ax = fx / mass
    ay = fy / mass
    az = fz / mass - gravity

    vx = vx + ax * dt
    vy = vy + ay * dt
    vz = vz + az * dt

    return (px + vx * dt, py + vy * dt, pz + vz * dt, vx, vy, vz)


@njit(cache=True, fastmath=True)
def opposing_force(
    vx: float, vy: float, vz: float,
    magnitude: float,
    min_speed: float,
) -> tuple[float, float, float]:
    """Force of the given magnitude directed against velocity v.

    Returns zero below min_speed where the direction is ill-defined.
    """
    speed = math.sqrt(vx * vx + vy * vy + vz * vz)
    if speed <= min_speed:
        return (0.0, 0.0, 0.0)
    scale = -magnitude / speed
    return (vx * scale, vy * scale, vz * scale)
