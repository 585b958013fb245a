"""Core data model shared by every descent strategy.

A :class:`Problem` bundles a vector-valued map ``R^m -> R^n`` with its
Jacobian (and optionally its Hessian). Evaluating it at an input vector
produces an immutable :class:`Point` holding everything an optimizer needs:
objective values, the Jacobian, and the Euclidean norm of each Jacobian row.

Conventions:
    - ``n_vars`` (``m``) is the input dimension.
    - ``n_objectives`` (``n``) is the number of objectives.
    - Row ``i`` of the Jacobian is the gradient of objective ``i``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np

Array = np.ndarray
ObjectiveMap = Callable[[Array], Array]
JacobianMap = Callable[[Array], Array]
HessianMap = Callable[[Array], Array]

DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 10_000
DEFAULT_STEP_LENGTH = 0.01

# Budget handed to the inner direction-search minimizer.
INNER_MAX_ITERATIONS = 1_000_000


class DimensionMismatch(ValueError):
    """Input vector length differs from the problem's variable count."""


class InvalidProblem(ValueError):
    """Problem metadata or map output disagrees with its declared shape."""


class InnerSolverFailure(RuntimeError):
    """The direction-search minimizer failed to converge or errored.

    Attributes:
        point: Point at which the direction search was attempted.
        direction: Last direction iterate produced by the minimizer, or
            the seed when the minimizer raised or never ran.
        result: Minimizer result, or None if the minimizer raised or
            never ran.
    """

    def __init__(self, message: str, point, direction: Array, result=None):
        super().__init__(message)
        self.point = point
        self.direction = direction
        self.result = result


class Status(Enum):
    """Terminal state of a descent run."""

    TOLERANCE = "tolerance"
    PARETO_CRITICAL = "pareto_critical"
    NON_CONVERGENCE = "non_convergence"


def _readonly(arr: Array) -> Array:
    arr = np.array(arr, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Point:
    """Evaluated state of a problem at one input vector.

    Build points with :meth:`Problem.evaluate`; every array is a read-only
    float copy so a point never changes after construction.
    """

    inputs: Array
    objective_values: Array
    jacobian: Array
    gradient_norms: Array
    problem: "Problem" = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("inputs", "objective_values", "jacobian", "gradient_norms"):
            object.__setattr__(self, name, _readonly(getattr(self, name)))


@dataclass(frozen=True)
class Problem:
    """Vector-valued problem definition.

    Example:
        >>> import numpy as np
        >>> problem = Problem(
        ...     fun=lambda x: np.array([x[0] ** 2, (x[0] - 1) ** 2]),
        ...     jac=lambda x: np.array([[2 * x[0]], [2 * (x[0] - 1)]]),
        ...     n_vars=1,
        ...     n_objectives=2,
        ... )
        >>> problem.evaluate(np.array([0.5])).gradient_norms
        array([1., 1.])
    """

    fun: ObjectiveMap
    jac: JacobianMap
    n_vars: int
    n_objectives: int
    hess: Optional[HessianMap] = None
    name: str = "problem"
    equations: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for attr in ("n_vars", "n_objectives"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidProblem(f"{attr} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidProblem(f"{attr} must be positive, got {value}")
        if not callable(self.fun) or not callable(self.jac):
            raise InvalidProblem("fun and jac must be callable")
        if self.hess is not None and not callable(self.hess):
            raise InvalidProblem("hess must be callable when provided")
        equations = tuple(self.equations)
        if equations and len(equations) != self.n_objectives:
            raise InvalidProblem(
                f"expected {self.n_objectives} equations, got {len(equations)}"
            )
        object.__setattr__(self, "equations", equations)

    @property
    def shape(self) -> Tuple[int, int]:
        """``(n_objectives, n_vars)``, the shape of the Jacobian."""
        return self.n_objectives, self.n_vars

    def _check_inputs(self, x: Array) -> Array:
        x = np.array(x, dtype=float)
        if x.ndim != 1 or x.shape[0] != self.n_vars:
            raise DimensionMismatch(
                f"{self.name} expects {self.n_vars} inputs, got shape {x.shape}"
            )
        return x

    def _check_output(self, value: Array, shape: Tuple[int, ...], what: str) -> Array:
        if value.shape != shape:
            raise InvalidProblem(
                f"{self.name}: {what} returned shape {value.shape}, expected {shape}"
            )
        return value

    def evaluate_objectives(self, x: Array) -> Array:
        """Objective vector at ``x``, shape ``(n_objectives,)``."""
        x = self._check_inputs(x)
        values = np.atleast_1d(np.asarray(self.fun(x), dtype=float)).reshape(-1)
        return self._check_output(values, (self.n_objectives,), "fun")

    def evaluate_jacobian(self, x: Array) -> Array:
        """Jacobian at ``x``, shape ``(n_objectives, n_vars)``."""
        x = self._check_inputs(x)
        jac = np.atleast_2d(np.asarray(self.jac(x), dtype=float))
        return self._check_output(jac, self.shape, "jac")

    def evaluate_hessian(self, x: Array) -> Array:
        """Per-objective Hessians at ``x``, shape ``(n_objectives, n_vars, n_vars)``."""
        if self.hess is None:
            raise InvalidProblem(f"{self.name} defines no Hessian")
        x = self._check_inputs(x)
        hess = np.asarray(self.hess(x), dtype=float)
        if hess.ndim == 2:
            hess = hess[np.newaxis, :, :]
        return self._check_output(
            hess, (self.n_objectives, self.n_vars, self.n_vars), "hess"
        )

    def evaluate(self, x: Array) -> Point:
        """Evaluate objectives, Jacobian and gradient norms at ``x``."""
        x = self._check_inputs(x)
        jacobian = self.evaluate_jacobian(x)
        return Point(
            inputs=x,
            objective_values=self.evaluate_objectives(x),
            jacobian=jacobian,
            gradient_norms=np.linalg.norm(jacobian, axis=1),
            problem=self,
        )


@dataclass(frozen=True)
class DescentConfig:
    """Stopping and step-length settings shared by the descent strategies.

    Attributes:
        tolerance: Gradient-norm threshold below which an objective is
            considered converged; also the direction-search tolerance.
        max_iterations: Number of advances after which a run stops
            without convergence.
        step_length: Fixed step, or the initial trial step when ``armijo``
            is enabled.
        armijo: Backtrack the step until every objective decreases enough.
        armijo_rho: Backtracking contraction factor.
        armijo_c: Sufficient-decrease constant.
    """

    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    step_length: float = DEFAULT_STEP_LENGTH
    armijo: bool = False
    armijo_rho: float = 0.5
    armijo_c: float = 1e-4

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )
        if not self.step_length > 0:
            raise ValueError(f"step_length must be positive, got {self.step_length}")
        if not (0 < self.armijo_rho < 1):
            raise ValueError("armijo_rho must lie in (0, 1)")
        if not (0 < self.armijo_c < 1):
            raise ValueError("armijo_c must lie in (0, 1)")


@dataclass
class RunResult:
    """Outcome of :func:`modescent.optimize.run`.

    ``trajectory[0]`` is the starting point and ``trajectory[k]`` the state
    after ``k`` advances.
    """

    trajectory: Tuple[Point, ...]
    status: Status
    nit: int
    message: str

    @property
    def success(self) -> bool:
        return self.status is not Status.NON_CONVERGENCE

    @property
    def final(self) -> Point:
        return self.trajectory[-1]

    @property
    def x(self) -> Array:
        return self.final.inputs

    @property
    def fun(self) -> Array:
        return self.final.objective_values

    @property
    def grad_norms(self) -> Array:
        return self.final.gradient_norms


def gradient_converged(point: Point, tol: float) -> bool:
    """True if any objective's gradient norm is at most ``tol``.

    NaN norms compare false, so a diverged point never passes.
    """
    return bool(np.any(point.gradient_norms <= tol))


__all__ = [
    "Array",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_STEP_LENGTH",
    "DEFAULT_TOLERANCE",
    "DescentConfig",
    "DimensionMismatch",
    "HessianMap",
    "INNER_MAX_ITERATIONS",
    "InnerSolverFailure",
    "InvalidProblem",
    "JacobianMap",
    "ObjectiveMap",
    "Point",
    "Problem",
    "RunResult",
    "Status",
    "gradient_converged",
]
