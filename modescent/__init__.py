"""modescent - descent methods for multi-objective optimization on small problems."""

__version__ = "0.1.0"

# Core model and optimizers
from .optimize import (
    DescentConfig,
    DimensionMismatch,
    DirectionSearch,
    InnerSolverFailure,
    InvalidProblem,
    Optimizer,
    Point,
    Problem,
    QuasiNewtonMinimizer,
    RunResult,
    ScipyMinimizer,
    SingleObjectiveDescent,
    Status,
    SteepestMultiObjectiveDescent,
    run,
)

# Problem catalog
from .problems import beale, extended_rosenbrock, quadratic_targets, two_polynomials

# Trajectory files
from .io import read_trajectory, trajectory_path, write_trajectory

__all__ = [
    "__version__",
    # Core
    "DescentConfig",
    "DimensionMismatch",
    "DirectionSearch",
    "InnerSolverFailure",
    "InvalidProblem",
    "Optimizer",
    "Point",
    "Problem",
    "QuasiNewtonMinimizer",
    "RunResult",
    "ScipyMinimizer",
    "SingleObjectiveDescent",
    "Status",
    "SteepestMultiObjectiveDescent",
    "run",
    # Problems
    "beale",
    "extended_rosenbrock",
    "quadratic_targets",
    "two_polynomials",
    # I/O
    "read_trajectory",
    "trajectory_path",
    "write_trajectory",
]
