"""Trajectory point types and fixed-cadence sampling."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray


class FlightPhase(Enum):
    """Flight phases, in the order they occur."""

    THRUST = "thrust"
    COAST = "coast"
    DESCENT = "descent"

    @property
    def order(self) -> int:
        return _PHASE_ORDER[self]


_PHASE_ORDER = {FlightPhase.THRUST: 0, FlightPhase.COAST: 1, FlightPhase.DESCENT: 2}


class Vector3(NamedTuple):
    """Local ENU vector: x = east, y = north, z = up."""
    x: float
    y: float
    z: float

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    @property
    def horizontal(self) -> float:
        return math.hypot(self.x, self.y)

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


@beartype
@dataclass(frozen=True)
class TrajectoryPoint:
    """One recorded state of the flight.

    Attributes:
        time: Time since ignition [s]
        position: Position from the launch site, z is altitude ASL [m]
        velocity: Ground velocity [m/s]
        phase: Flight phase
    """
    time: float
    position: Vector3
    velocity: Vector3
    phase: FlightPhase


class SampleSchedule:
    """Decides which integration steps become recorded trajectory points.

    Samples are due at start, start + interval, start + 2 * interval, ...
    A step is taken as the sample when its time is within half a step of
    the due time, so the recorded spacing does not depend on the step size
    and no due time is recorded twice.
    """

    def __init__(self, start: float, interval: float, time_step: float) -> None:
        self.interval = interval
        self.tolerance = time_step / 2.0
        self._next_due = start

    def due(self, t: float) -> bool:
        """Check (and consume) whether a sample is due at time t."""
        if t < self._next_due - self.tolerance:
            return False
        while self._next_due - self.tolerance <= t:
            self._next_due += self.interval
        return True
