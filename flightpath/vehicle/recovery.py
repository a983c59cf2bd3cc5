"""Recovery devices and their descent drag parameters.

The recovery method is a closed set of variants; ``drag_parameters`` is
the single place that turns a variant into (Cd, area) for the descent
integrator.

Example:
    >>> from flightpath.vehicle import Parachute, drag_parameters, DEFAULT_ROCKET
    >>>
    >>> drag = drag_parameters(Parachute(diameter=0.45), DEFAULT_ROCKET)
    >>> drag.area  # m^2
"""

import math
from dataclasses import dataclass, field
from typing import Literal, assert_never

from beartype import beartype

from flightpath.errors import ConfigurationError
from flightpath.vehicle.rocket import RocketParameters, reference_area

RecoveryMethod = Literal["parachute", "streamer", "freefall"]


@beartype
@dataclass(frozen=True)
class Parachute:
    """Round parachute.

    Attributes:
        diameter: Canopy diameter [m]
        drag_coefficient: Canopy Cd (usually 1.5-2.0)
    """
    diameter: float = 0.3
    drag_coefficient: float = 1.75

    method: RecoveryMethod = field(default="parachute", init=False)

    @property
    def area(self) -> float:
        """Projected canopy area [m^2]."""
        return reference_area(self.diameter)

    def validate(self) -> None:
        _require_positive("parachute diameter", self.diameter)
        _require_positive("parachute drag_coefficient", self.drag_coefficient)


@beartype
@dataclass(frozen=True)
class Streamer:
    """Streamer recovery.

    Attributes:
        area: Streamer area [m^2]
        drag_coefficient: Streamer Cd
    """
    area: float = 0.01
    drag_coefficient: float = 1.2

    method: RecoveryMethod = field(default="streamer", init=False)

    def validate(self) -> None:
        _require_positive("streamer area", self.area)
        _require_positive("streamer drag_coefficient", self.drag_coefficient)


@beartype
@dataclass(frozen=True)
class Freefall:
    """No recovery device; the body falls on its own drag."""

    method: RecoveryMethod = field(default="freefall", init=False)

    def validate(self) -> None:
        pass


RecoveryParameters = Parachute | Streamer | Freefall

DEFAULT_RECOVERY = Parachute()


@beartype
@dataclass(frozen=True)
class DragParameters:
    """Drag coefficient and reference area used during descent."""
    drag_coefficient: float
    area: float


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")


@beartype
def drag_parameters(
    recovery: RecoveryParameters,
    rocket: RocketParameters,
) -> DragParameters:
    """Select the descent drag model for a recovery method.

    Args:
        recovery: Recovery device variant
        rocket: Vehicle, used for freefall cross-section and Cd

    Returns:
        DragParameters for the descent integrator
    """
    match recovery:
        case Parachute():
            return DragParameters(drag_coefficient=recovery.drag_coefficient, area=recovery.area)
        case Streamer():
            return DragParameters(drag_coefficient=recovery.drag_coefficient, area=recovery.area)
        case Freefall():
            return DragParameters(
                drag_coefficient=rocket.drag_coefficient,
                area=rocket.reference_area,
            )
        case _:
            assert_never(recovery)
