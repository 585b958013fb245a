"""Unconstrained minimizers used by the multi-objective direction search.

Anything with a ``minimize(fun, grad, x0, tol, maxiter)`` method returning a
:class:`MinimizeResult` can be injected into
:class:`~modescent.optimize.direction.DirectionSearch`. Two are provided:

- :class:`ScipyMinimizer` delegates to :func:`scipy.optimize.minimize`.
  Its default, Nelder-Mead, copes with the kink that the ``max`` term puts
  in the inner objective whenever objectives conflict.
- :class:`QuasiNewtonMinimizer` is a NumPy BFGS stepping with SciPy's
  strong Wolfe line search, for smooth inner problems.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol

import numpy as np
from scipy.optimize import line_search as _wolfe_step
from scipy.optimize import minimize as _scipy_minimize

from .core import Array
from .line_search import backtracking_armijo

ScalarFn = Callable[[Array], float]
GradientFn = Callable[[Array], Array]

_GRADIENT_FREE_METHODS = {"nelder-mead", "powell", "cobyla"}


@dataclass(frozen=True)
class MinimizeResult:
    """Result of one unconstrained minimization."""

    x: Array
    fun: float
    success: bool
    nit: int
    message: str


class Minimizer(Protocol):
    """Protocol for unconstrained scalar minimizers."""

    def minimize(
        self,
        fun: ScalarFn,
        grad: GradientFn,
        x0: Array,
        tol: float,
        maxiter: int,
    ) -> MinimizeResult:
        """Minimize ``fun`` from ``x0``; ``tol`` is the termination tolerance."""
        ...


class ScipyMinimizer:
    """Adapter over :func:`scipy.optimize.minimize`.

    Parameters
    ----------
    method:
        Any unconstrained SciPy method. Gradient-free methods never receive
        ``grad``; the others get it as ``jac``.
    options:
        Extra solver options merged over ``{"maxiter": maxiter}``.

    ``tol`` is passed through SciPy's generic ``tol`` argument, which
    becomes ``xatol``/``fatol`` for Nelder-Mead and ``gtol`` for BFGS.
    """

    def __init__(self, method: str = "Nelder-Mead", options: Optional[Dict[str, Any]] = None):
        self.method = method
        self.options = dict(options or {})

    @property
    def uses_gradient(self) -> bool:
        return self.method.lower() not in _GRADIENT_FREE_METHODS

    def minimize(
        self,
        fun: ScalarFn,
        grad: GradientFn,
        x0: Array,
        tol: float,
        maxiter: int,
    ) -> MinimizeResult:
        options = {"maxiter": maxiter}
        options.update(self.options)
        res = _scipy_minimize(
            fun,
            np.asarray(x0, dtype=float),
            method=self.method,
            jac=grad if self.uses_gradient else None,
            tol=tol,
            options=options,
        )
        return MinimizeResult(
            x=np.asarray(res.x, dtype=float),
            fun=float(res.fun),
            success=bool(res.success),
            nit=int(res.get("nit", 0)),
            message=str(res.message),
        )

    def __repr__(self) -> str:
        return f"ScipyMinimizer(method={self.method!r})"


class QuasiNewtonMinimizer:
    """Full-memory BFGS for smooth inner problems.

    Steps come from SciPy's strong Wolfe search
    (:func:`scipy.optimize.line_search`). When it fails to bracket a step,
    Armijo backtracking along the same direction takes over. Converges when
    the gradient norm drops to ``tol``.

    Parameters
    ----------
    c1, c2:
        Wolfe constants, ``0 < c1 < c2 < 1``.
    """

    def __init__(self, c1: float = 1e-4, c2: float = 0.9):
        if not (0 < c1 < c2 < 1):
            raise ValueError("Require 0 < c1 < c2 < 1 for Wolfe conditions.")
        self.c1 = c1
        self.c2 = c2

    def _step(self, fun, grad, x, direction, g, fx) -> float:
        slope = float(np.dot(g, direction))
        alpha = _wolfe_step(
            fun, grad, x, direction, gfk=g, old_fval=fx, c1=self.c1, c2=self.c2
        )[0]
        if alpha is None:
            alpha, _ = backtracking_armijo(fun, x, direction, slope, c=self.c1)
        return float(alpha)

    def minimize(
        self,
        fun: ScalarFn,
        grad: GradientFn,
        x0: Array,
        tol: float,
        maxiter: int,
    ) -> MinimizeResult:
        x = np.asarray(x0, dtype=float).copy()
        identity = np.eye(x.size)
        inv_hessian = identity.copy()
        fx = float(fun(x))
        g = np.asarray(grad(x), dtype=float)
        nit = 0
        while nit < maxiter and np.linalg.norm(g) > tol:
            direction = -inv_hessian @ g
            if np.dot(g, direction) >= 0:
                # curvature information went bad; restart from steepest descent
                inv_hessian = identity.copy()
                direction = -g
            s = self._step(fun, grad, x, direction, g, fx) * direction
            x = x + s
            fx = float(fun(x))
            g_new = np.asarray(grad(x), dtype=float)
            y = g_new - g
            ys = float(np.dot(y, s))
            if ys > 1e-10 * np.linalg.norm(y) * np.linalg.norm(s):
                rho = 1.0 / ys
                left = identity - rho * np.outer(s, y)
                inv_hessian = left @ inv_hessian @ left.T + rho * np.outer(s, s)
            g = g_new
            nit += 1
        grad_norm = float(np.linalg.norm(g))
        success = grad_norm <= tol
        message = (
            "Gradient tolerance satisfied."
            if success
            else f"Maximum iterations reached (gradient norm {grad_norm:.3e})."
        )
        return MinimizeResult(x=x, fun=fx, success=success, nit=nit, message=message)

    def __repr__(self) -> str:
        return f"QuasiNewtonMinimizer(c1={self.c1}, c2={self.c2})"


__all__ = ["MinimizeResult", "Minimizer", "QuasiNewtonMinimizer", "ScipyMinimizer"]
