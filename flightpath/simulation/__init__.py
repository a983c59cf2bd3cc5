"""Flight simulation: ascent and descent integrators and trajectory assembly.

Example:
    >>> from flightpath.simulation import predict_trajectory, SimConfig
    >>>
    >>> fine = SimConfig(time_step=0.005, sample_interval=0.05)
    >>> result = predict_trajectory(rocket, recovery, site, weather, ascent_config=fine)
    >>> result.to_dataframe()
"""

from flightpath.simulation.ascent import (
    Apogee,
    AscentResult,
    launch_direction,
    simulate_ascent,
)
from flightpath.simulation.config import (
    ASCENT_CONFIG,
    DESCENT_CONFIG,
    SimConfig,
)
from flightpath.simulation.descent import (
    APOGEE_SEED_VELOCITY,
    DescentResult,
    Landing,
    simulate_descent,
)
from flightpath.simulation.sampling import (
    FlightPhase,
    SampleSchedule,
    TrajectoryPoint,
    Vector3,
)
from flightpath.simulation.trajectory import (
    FlightStats,
    TrajectoryResult,
    UncertaintyEllipse,
    predict_trajectory,
)

__all__ = [
    # Configuration
    "ASCENT_CONFIG",
    "DESCENT_CONFIG",
    "SimConfig",
    # Points
    "FlightPhase",
    "SampleSchedule",
    "TrajectoryPoint",
    "Vector3",
    # Ascent
    "Apogee",
    "AscentResult",
    "launch_direction",
    "simulate_ascent",
    # Descent
    "APOGEE_SEED_VELOCITY",
    "DescentResult",
    "Landing",
    "simulate_descent",
    # Assembly
    "FlightStats",
    "TrajectoryResult",
    "UncertaintyEllipse",
    "predict_trajectory",
]
