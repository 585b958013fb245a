"""Common descent direction for several objectives.

Given the Jacobian ``J`` at a point, the steepest common descent direction
solves

    min_d  max_i (J[i] . d) + 0.5 * ||d||^2

(Fliege & Svaiter, 2000). The minimum value ``theta`` is never positive,
since ``d = 0`` gives zero. It is strictly negative exactly when some
direction decreases every objective, so a minimizer that cannot get
below zero marks a Pareto-critical point. The quadratic term makes the
minimizer unique and bounded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import INNER_MAX_ITERATIONS, Array, InnerSolverFailure, Point
from .minimizers import MinimizeResult, Minimizer, ScipyMinimizer

logger = get_logger(__name__)


def inner_value(jacobian: Array, d: Array) -> float:
    """Worst-case directional derivative along ``d`` plus ``0.5 ||d||^2``."""
    return float(np.max(jacobian @ d) + 0.5 * np.dot(d, d))


def inner_gradient(jacobian: Array, d: Array) -> Array:
    """Subgradient of :func:`inner_value`: ``d`` plus the active Jacobian row.

    The active row is the first objective attaining the maximum.
    """
    active = int(np.argmax(jacobian @ d))
    return d + jacobian[active]


@dataclass(frozen=True)
class DirectionResult:
    """Outcome of one direction search.

    Attributes:
        direction: Minimizing direction ``d``.
        value: Inner objective at ``direction`` (``theta``).
        nit: Iterations spent by the minimizer.
    """

    direction: Array
    value: float
    nit: int

    def is_critical(self) -> bool:
        """True if the search found nothing better than standing still."""
        return self.value >= 0.0


class DirectionSearch:
    """Solve the min-max direction problem with an injected minimizer.

    Parameters
    ----------
    minimizer:
        Object following the :class:`~modescent.optimize.minimizers.Minimizer`
        protocol. Defaults to Nelder-Mead through SciPy.
    max_iterations:
        Iteration budget handed to the minimizer.
    """

    def __init__(
        self,
        minimizer: Optional[Minimizer] = None,
        max_iterations: int = INNER_MAX_ITERATIONS,
    ):
        self.minimizer = minimizer if minimizer is not None else ScipyMinimizer()
        self.max_iterations = max_iterations

    def initial_guess(self, n_vars: int) -> Array:
        return -np.ones(n_vars)

    def search(self, point: Point, tol: float) -> DirectionResult:
        """Find the common descent direction at ``point``.

        Raises:
            InnerSolverFailure: If the minimizer reports non-convergence or
                fails numerically.
        """
        jacobian = np.asarray(point.jacobian)
        x0 = self.initial_guess(jacobian.shape[1])
        if not np.all(np.isfinite(jacobian)):
            raise InnerSolverFailure(
                f"direction search at {point.inputs}: non-finite Jacobian",
                point=point,
                direction=x0,
            )

        try:
            result: MinimizeResult = self.minimizer.minimize(
                lambda d: inner_value(jacobian, d),
                lambda d: inner_gradient(jacobian, d),
                x0,
                tol,
                self.max_iterations,
            )
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as exc:
            raise InnerSolverFailure(
                f"direction search at {point.inputs} raised: {exc}",
                point=point,
                direction=x0,
            ) from exc

        if not result.success:
            raise InnerSolverFailure(
                f"direction search at {point.inputs} did not converge: "
                f"{result.message}",
                point=point,
                direction=result.x,
                result=result,
            )

        logger.debug(
            "direction %s with theta %.3e after %d inner iterations",
            result.x,
            result.fun,
            result.nit,
        )
        return DirectionResult(
            direction=np.asarray(result.x, dtype=float),
            value=float(result.fun),
            nit=result.nit,
        )

    def __repr__(self) -> str:
        return f"DirectionSearch(minimizer={self.minimizer!r})"


__all__ = ["DirectionResult", "DirectionSearch", "inner_gradient", "inner_value"]
