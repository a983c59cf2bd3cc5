"""Rocket vehicle parameters."""

import math
from dataclasses import dataclass, fields

from beartype import beartype

from flightpath.environment.atmosphere import G0
from flightpath.errors import ConfigurationError


@beartype
def reference_area(diameter: float) -> float:
    """Circular cross-section area for a diameter [m] -> [m^2]."""
    return math.pi * (diameter / 2.0) ** 2


@beartype
@dataclass(frozen=True)
class RocketParameters:
    """Immutable description of a single-stage model rocket.

    Attributes:
        dry_mass: Mass without propellant [kg]; also the descending mass
        propellant_mass: Motor propellant mass [kg]
        body_diameter: Body tube diameter [m]
        body_length: Overall length [m]
        drag_coefficient: Body drag coefficient Cd (typically 0.4-0.6)
        motor_total_impulse: Motor total impulse [N·s]
        motor_burn_time: Motor burn time [s]
        motor_delay_time: Ejection delay after burnout [s]
    """
    dry_mass: float
    propellant_mass: float
    body_diameter: float
    body_length: float
    drag_coefficient: float
    motor_total_impulse: float
    motor_burn_time: float
    motor_delay_time: float = 0.0

    @property
    def reference_area(self) -> float:
        """Body cross-section [m^2]."""
        return reference_area(self.body_diameter)

    @property
    def average_thrust(self) -> float:
        """Total impulse spread evenly over the burn [N]."""
        return self.motor_total_impulse / self.motor_burn_time

    @property
    def liftoff_mass(self) -> float:
        """Dry plus propellant mass [kg]."""
        return self.dry_mass + self.propellant_mass

    def validate(self) -> None:
        """Reject physically meaningless parameters.

        Raises:
            ConfigurationError: On non-finite values, non-positive dry mass,
                diameter, drag coefficient, impulse or burn time, negative
                propellant mass, length or delay, or a motor whose average
                thrust cannot lift the liftoff weight.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite, got {value}")

        for name in (
            "dry_mass", "body_diameter", "drag_coefficient",
            "motor_total_impulse", "motor_burn_time",
        ):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")

        for name in ("propellant_mass", "body_length", "motor_delay_time"):
            if getattr(self, name) < 0:
                raise ConfigurationError(
                    f"{name} must be non-negative, got {getattr(self, name)}"
                )

        weight = self.liftoff_mass * G0
        if self.average_thrust <= weight:
            raise ConfigurationError(
                f"average thrust {self.average_thrust:.3f} N does not exceed "
                f"liftoff weight {weight:.3f} N"
            )


# Typical A-class model rocket
DEFAULT_ROCKET = RocketParameters(
    dry_mass=0.05,
    propellant_mass=0.0062,
    body_diameter=0.025,
    body_length=0.30,
    drag_coefficient=0.5,
    motor_total_impulse=2.5,
    motor_burn_time=0.5,
    motor_delay_time=4.0,
)
