"""Data export utilities for predicted trajectories."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import numpy as np
from beartype import beartype

from flightpath.simulation.trajectory import TrajectoryResult

logger = logging.getLogger(__name__)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder for NumPy scalars and arrays."""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@beartype
def trajectory_to_dict(result: TrajectoryResult) -> dict[str, Any]:
    """Convert a TrajectoryResult to plain JSON-ready data.

    Points are stored column-wise (times, positions, velocities, phases)
    to keep long trajectories compact.
    """
    points = result.trajectory_points
    return {
        "metadata": {
            "launch_site": asdict(result.launch_site),
            "predicted_landing": asdict(result.predicted_landing),
            "converged": result.converged,
        },
        "stats": asdict(result.stats),
        "uncertainty_ellipse": asdict(result.uncertainty_ellipse),
        "trajectory": {
            "times": result.times,
            "positions": result.positions,
            "velocities": result.velocities,
            "phases": [p.phase.value for p in points],
        },
    }


@beartype
def export_trajectory_to_json(result: TrajectoryResult, filepath: str | Path) -> Path:
    """Export a trajectory to a JSON file for visualization.

    Args:
        result: Prediction to export
        filepath: Path to save the JSON file

    Returns:
        The written path
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(trajectory_to_dict(result), f, cls=NumpyEncoder)

    logger.info("Exported %d trajectory points to %s", len(result.trajectory_points), path)
    return path
