"""Descent strategies driven by :func:`modescent.optimize.run`.

Each optimizer owns its current :class:`~modescent.optimize.core.Point`,
replaces it on every :meth:`Optimizer.advance`, and records why it stopped
in :attr:`Optimizer.status` once :meth:`Optimizer.has_converged` is true.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import Array, DescentConfig, Point, Status, gradient_converged
from .direction import DirectionSearch
from .line_search import backtracking_armijo

logger = get_logger(__name__)


class Optimizer(ABC):
    """Base class for the descent strategies."""

    def __init__(self, start: Point, config: Optional[DescentConfig] = None):
        self.config = config if config is not None else DescentConfig()
        self._current = start
        self.status: Optional[Status] = None

    @property
    def current(self) -> Point:
        return self._current

    @abstractmethod
    def advance(self, current: Point) -> Point:
        """Move from ``current`` to the next point and make it current."""

    @abstractmethod
    def has_converged(self, iteration: int) -> bool:
        """True once the run should stop after ``iteration`` advances."""

    def _exceeded(self, iteration: int) -> bool:
        if iteration > self.config.max_iterations:
            self.status = Status.NON_CONVERGENCE
            logger.warning(
                "stopping without convergence after %d iterations",
                self.config.max_iterations,
            )
            return True
        return False

    def _gradient_small(self) -> bool:
        if gradient_converged(self._current, self.config.tolerance):
            self.status = Status.TOLERANCE
            logger.info(
                "gradient norms %s reached tolerance %g",
                self._current.gradient_norms,
                self.config.tolerance,
            )
            return True
        return False

    def _armijo_step(self, current: Point, direction: Array, rows: Array) -> float:
        """Backtracked step along ``direction`` for the objectives in ``rows``."""
        problem = current.problem
        slopes = current.jacobian[rows] @ direction
        alpha, _ = backtracking_armijo(
            lambda z: problem.evaluate_objectives(z)[rows],
            current.inputs,
            direction,
            slopes,
            alpha0=self.config.step_length,
            rho=self.config.armijo_rho,
            c=self.config.armijo_c,
        )
        return alpha

    def _replace(self, x: Array, current: Point) -> Point:
        point = current.problem.evaluate(x)
        self._current = point
        return point


class SingleObjectiveDescent(Optimizer):
    """Gradient descent on one objective of a (possibly) multi-objective problem.

    Parameters
    ----------
    start:
        Starting point.
    objective:
        Index of the objective whose gradient drives the moves.
    config:
        Tolerance, iteration cap and step length.

    The stopping test inspects the gradient norm of every objective, not
    only the one being followed.
    """

    def __init__(
        self,
        start: Point,
        objective: int = 0,
        config: Optional[DescentConfig] = None,
    ):
        super().__init__(start, config)
        n_objectives = start.problem.n_objectives
        if not 0 <= objective < n_objectives:
            raise ValueError(
                f"objective index {objective} out of range for "
                f"{n_objectives} objective(s)"
            )
        self.objective = objective

    def advance(self, current: Point) -> Point:
        direction = -current.jacobian[self.objective]
        if self.config.armijo:
            step = self._armijo_step(current, direction, np.array([self.objective]))
        else:
            step = self.config.step_length
        x = current.inputs + step * direction
        logger.debug("moving from %s to %s", current.inputs, x)
        return self._replace(x, current)

    def has_converged(self, iteration: int) -> bool:
        return self._exceeded(iteration) or self._gradient_small()

    def __repr__(self) -> str:
        return f"SingleObjectiveDescent(objective={self.objective}, config={self.config})"


class SteepestMultiObjectiveDescent(Optimizer):
    """Steepest descent along the common descent direction of all objectives.

    Parameters
    ----------
    start:
        Starting point.
    config:
        Tolerance, iteration cap and step length. The tolerance is also
        the direction-search tolerance and the criticality threshold.
    direction_search:
        Solver for the min-max direction problem.
    additive:
        Step as ``x + step * d``. When False the inputs are replaced by
        ``step * d``.

    Example:
        >>> import numpy as np
        >>> from modescent.problems import quadratic_targets
        >>> problem = quadratic_targets([[0.0, 0.0], [1.0, 0.0]])
        >>> opt = SteepestMultiObjectiveDescent(
        ...     problem.evaluate(np.array([0.5, 2.0])),
        ...     DescentConfig(step_length=0.1, max_iterations=200),
        ... )
        >>> nxt = opt.advance(opt.current)
        >>> bool(nxt.inputs[1] < 2.0)
        True
    """

    def __init__(
        self,
        start: Point,
        config: Optional[DescentConfig] = None,
        direction_search: Optional[DirectionSearch] = None,
        additive: bool = True,
    ):
        super().__init__(start, config)
        if self.config.armijo and not additive:
            raise ValueError("armijo step lengths require additive steps")
        self.direction_search = (
            direction_search if direction_search is not None else DirectionSearch()
        )
        self.additive = additive
        self.critical_detected = False
        self.last_direction: Optional[Array] = None
        self.last_inner_value: Optional[float] = None

    def advance(self, current: Point) -> Point:
        found = self.direction_search.search(current, self.config.tolerance)
        self.last_direction = found.direction
        self.last_inner_value = found.value
        if found.is_critical():
            self.critical_detected = True
            logger.info(
                "Pareto-critical point at %s (theta %.3e)", current.inputs, found.value
            )

        if not self.additive:
            x = self.config.step_length * found.direction
        elif self.config.armijo:
            rows = np.arange(current.problem.n_objectives)
            step = self._armijo_step(current, found.direction, rows)
            x = current.inputs + step * found.direction
        else:
            x = current.inputs + self.config.step_length * found.direction
        logger.debug("moving from %s to %s", current.inputs, x)
        return self._replace(x, current)

    def has_converged(self, iteration: int) -> bool:
        if self.critical_detected:
            self.status = Status.PARETO_CRITICAL
            return True
        return self._exceeded(iteration) or self._gradient_small()

    def __repr__(self) -> str:
        return (
            f"SteepestMultiObjectiveDescent(config={self.config}, "
            f"direction_search={self.direction_search!r}, additive={self.additive})"
        )


__all__ = ["Optimizer", "SingleObjectiveDescent", "SteepestMultiObjectiveDescent"]
