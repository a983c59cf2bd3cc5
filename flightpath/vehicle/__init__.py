"""Vehicle modeling for small-rocket flight prediction.

Provides rocket parameters, recovery devices and aerodynamic force models.

Example:
    >>> from flightpath.vehicle import RocketParameters, Streamer, drag_parameters
    >>>
    >>> rocket = RocketParameters(
    ...     dry_mass=0.08,
    ...     propellant_mass=0.01,
    ...     body_diameter=0.025,
    ...     body_length=0.3,
    ...     drag_coefficient=0.5,
    ...     motor_total_impulse=5.0,
    ...     motor_burn_time=0.5,
    ... )
    >>> drag_parameters(Streamer(), rocket)
"""

from flightpath.vehicle.aerodynamics import (
    drag_force,
    dynamic_pressure,
    effective_drag_coefficient,
    parachute_terminal_velocity,
    reynolds_number,
    terminal_velocity,
)
from flightpath.vehicle.recovery import (
    DEFAULT_RECOVERY,
    DragParameters,
    Freefall,
    Parachute,
    RecoveryMethod,
    RecoveryParameters,
    Streamer,
    drag_parameters,
)
from flightpath.vehicle.rocket import (
    DEFAULT_ROCKET,
    RocketParameters,
    reference_area,
)

__all__ = [
    # Rocket
    "DEFAULT_ROCKET",
    "RocketParameters",
    "reference_area",
    # Recovery
    "DEFAULT_RECOVERY",
    "DragParameters",
    "Freefall",
    "Parachute",
    "RecoveryMethod",
    "RecoveryParameters",
    "Streamer",
    "drag_parameters",
    # Aerodynamics
    "drag_force",
    "dynamic_pressure",
    "effective_drag_coefficient",
    "parachute_terminal_velocity",
    "reynolds_number",
    "terminal_velocity",
]
