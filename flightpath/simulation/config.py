"""Integrator configuration."""

from dataclasses import dataclass

from beartype import beartype

from flightpath.errors import ConfigurationError

MAX_ITERATIONS = 10000


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Fixed-step integration settings.

    Attributes:
        time_step: Euler step [s]
        max_iterations: Iteration cap; reaching it returns a truncated,
            non-converged trajectory
        sample_interval: Spacing of recorded trajectory points [s]
    """
    time_step: float = 0.02
    max_iterations: int = MAX_ITERATIONS
    sample_interval: float = 0.1

    def validate(self) -> None:
        if not self.time_step > 0:
            raise ConfigurationError(f"time_step must be positive, got {self.time_step}")
        if self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )
        if not self.sample_interval > 0:
            raise ConfigurationError(
                f"sample_interval must be positive, got {self.sample_interval}"
            )


ASCENT_CONFIG = SimConfig(time_step=0.02, sample_interval=0.1)
DESCENT_CONFIG = SimConfig(time_step=0.05, sample_interval=0.2)
