"""Finite-difference checks of analytic derivatives.

Catalog problems ship closed-form Jacobians and Hessians;
:func:`check_derivatives` compares them against central differences.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

import numpy as np

from .core import Array, Problem

VectorFn = Callable[[Array], Array]


def approx_jacobian(fun: VectorFn, x: Array, eps: float = 1e-6) -> Array:
    """Central-difference Jacobian of ``fun`` at ``x``.

    ``fun`` may return a scalar or a vector of length ``n``; the result has
    shape ``(n, len(x))``.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)

    def values(z: Array) -> Array:
        return np.atleast_1d(np.asarray(fun(z), dtype=float)).reshape(-1)

    steps = eps * np.eye(x.size)
    return np.column_stack(
        [(values(x + h) - values(x - h)) / (2.0 * eps) for h in steps]
    )


def check_derivatives(
    problem: Problem, x: Array, eps: float = 1e-6
) -> Dict[str, Optional[float]]:
    """Largest absolute gap between analytic and finite-difference derivatives.

    Returns a mapping with keys ``"jacobian"`` and ``"hessian"``; the latter
    is None when the problem defines no Hessian. Each objective's Hessian is
    compared with differences of its analytic Jacobian row.
    """
    x = np.asarray(x, dtype=float)
    numeric = approx_jacobian(problem.evaluate_objectives, x, eps=eps)
    report: Dict[str, Optional[float]] = {
        "jacobian": float(np.max(np.abs(problem.evaluate_jacobian(x) - numeric))),
        "hessian": None,
    }
    if problem.hess is not None:
        rows = [
            lambda z, k=k: problem.evaluate_jacobian(z)[k]
            for k in range(problem.n_objectives)
        ]
        numeric_hess = np.stack([approx_jacobian(row, x, eps=eps) for row in rows])
        gap = np.abs(problem.evaluate_hessian(x) - numeric_hess)
        report["hessian"] = float(np.max(gap))
    return report


__all__ = ["approx_jacobian", "check_derivatives"]
