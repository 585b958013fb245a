"""Descent optimization over vector-valued functions.

Example
-------
>>> import numpy as np
>>> from modescent.optimize import DescentConfig, SingleObjectiveDescent, run
>>> from modescent.problems import two_polynomials
>>> problem = two_polynomials()
>>> start = problem.evaluate(np.array([1.3, 0.7]))
>>> res = run(SingleObjectiveDescent(start, objective=0, config=DescentConfig()))
>>> res.status
<Status.TOLERANCE: 'tolerance'>
"""

from .core import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_STEP_LENGTH,
    DEFAULT_TOLERANCE,
    INNER_MAX_ITERATIONS,
    DescentConfig,
    DimensionMismatch,
    InnerSolverFailure,
    InvalidProblem,
    Point,
    Problem,
    RunResult,
    Status,
    gradient_converged,
)
from .descent import Optimizer, SingleObjectiveDescent, SteepestMultiObjectiveDescent
from .direction import DirectionResult, DirectionSearch, inner_gradient, inner_value
from .line_search import backtracking_armijo
from .minimizers import MinimizeResult, Minimizer, QuasiNewtonMinimizer, ScipyMinimizer
from .run import run
from .utils import approx_jacobian, check_derivatives

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_STEP_LENGTH",
    "DEFAULT_TOLERANCE",
    "INNER_MAX_ITERATIONS",
    "DescentConfig",
    "DimensionMismatch",
    "DirectionResult",
    "DirectionSearch",
    "InnerSolverFailure",
    "InvalidProblem",
    "MinimizeResult",
    "Minimizer",
    "Optimizer",
    "Point",
    "Problem",
    "QuasiNewtonMinimizer",
    "RunResult",
    "ScipyMinimizer",
    "SingleObjectiveDescent",
    "Status",
    "SteepestMultiObjectiveDescent",
    "approx_jacobian",
    "backtracking_armijo",
    "check_derivatives",
    "gradient_converged",
    "inner_gradient",
    "inner_value",
    "run",
]
