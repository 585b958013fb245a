"""Armijo backtracking for one or several objectives.

:func:`backtracking_armijo` accepts vector-valued objectives: a step is
accepted only when every component decreases sufficiently, which is the
multi-objective Armijo rule of Fliege & Svaiter (2000). With a scalar
objective it reduces to the classic rule.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .core import Array


def backtracking_armijo(
    f: Callable[[Array], Array],
    x: Array,
    p: Array,
    slopes: Array,
    alpha0: float = 1.0,
    rho: float = 0.5,
    c: float = 1e-4,
    max_iter: int = 50,
) -> tuple[float, int]:
    """Armijo backtracking over one or several objectives.

    Parameters
    ----------
    f:
        Objective(s) at a point, scalar or vector.
    x, p:
        Current point and search direction.
    slopes:
        Directional derivative of each objective along ``p``
        (``jacobian @ p``, or ``grad @ p`` for a scalar objective).

    Returns
    -------
    (alpha, nfev)
        Accepted step, or the last trial step if ``max_iter`` is exhausted.
    """
    if not (0 < c < 1):
        raise ValueError("Armijo constant c must lie in (0, 1)")
    if not (0 < rho < 1):
        raise ValueError("rho must lie in (0, 1)")
    alpha = float(alpha0)
    fx = np.atleast_1d(np.asarray(f(x), dtype=float))
    slopes = np.atleast_1d(np.asarray(slopes, dtype=float))
    nfev = 0
    for _ in range(max_iter):
        f_new = np.atleast_1d(np.asarray(f(x + alpha * p), dtype=float))
        nfev += 1
        if np.all(f_new <= fx + c * alpha * slopes):
            return alpha, nfev
        alpha *= rho
    return alpha, nfev


__all__ = ["backtracking_armijo"]
