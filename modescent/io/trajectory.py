"""Plain-text trajectory files.

One row per point: the inputs followed by the objective values, separated
by single spaces and written with two decimals, e.g. ::

    1.30 0.70 -495.81 -141.04

Gnuplot and ``numpy.loadtxt`` read the files directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np

from ..logging import get_logger
from ..optimize.core import Array, Point

logger = get_logger(__name__)

PathLike = Union[str, Path]

FLOAT_FORMAT = "%.2f"
DELIMITER = " "


def trajectory_path(run_index: int, directory: PathLike = ".") -> Path:
    """File name for the run at zero-based ``run_index``: ``trajectory{index+1}.csv``."""
    if run_index < 0:
        raise ValueError(f"run_index must be non-negative, got {run_index}")
    return Path(directory) / f"trajectory{run_index + 1}.csv"


def trajectory_rows(trajectory: Sequence[Point]) -> Array:
    """Stack each point's inputs and objective values into one row."""
    if len(trajectory) == 0:
        raise ValueError("trajectory is empty")
    return np.vstack(
        [np.concatenate([p.inputs, p.objective_values]) for p in trajectory]
    )


def write_trajectory(trajectory: Sequence[Point], path: PathLike) -> Path:
    """Write ``trajectory`` to ``path`` and return the path."""
    path = Path(path)
    rows = trajectory_rows(trajectory)
    np.savetxt(path, rows, fmt=FLOAT_FORMAT, delimiter=DELIMITER)
    logger.info("wrote %d points to %s", rows.shape[0], path)
    return path


def read_trajectory(path: PathLike, n_vars: int) -> Tuple[Array, Array]:
    """Read a trajectory file back as ``(inputs, objective_values)`` arrays.

    Both arrays have one row per point. ``n_vars`` splits the columns.
    """
    rows = np.loadtxt(Path(path), delimiter=DELIMITER, ndmin=2)
    if not 0 < n_vars < rows.shape[1]:
        raise ValueError(
            f"n_vars={n_vars} incompatible with {rows.shape[1]} columns in {path}"
        )
    return rows[:, :n_vars], rows[:, n_vars:]


__all__ = [
    "read_trajectory",
    "trajectory_path",
    "trajectory_rows",
    "write_trajectory",
]
