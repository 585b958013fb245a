"""Analytic test problems with closed-form Jacobians and Hessians.

References:
    - Beale, E.: On an Iterative Method for Finding a Local Minimum of a
      Function of More than One Variable. Technical Report 25, Princeton
      University (1958).
    - More, J., Garbow, B.S., Hillstrom, K.E.: Testing unconstrained
      optimization software. ACM Trans Math Softw 7 (1981), 17-41.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..optimize.core import Array, InvalidProblem, Problem


def _poly_fun(v: Array) -> Array:
    x, y = v[0], v[1]
    f1 = (x - y) ** 3 + 2 * x**2 + y**2 - x + 2 * y - 500
    f2 = x**4 - x**3 - 20 * x**2 + x + y**4 - y**3 - 20 * y**2 + y - 100
    return np.array([f1, f2])


def _poly_jac(v: Array) -> Array:
    x, y = v[0], v[1]
    u = x - y
    return np.array(
        [
            [3 * u**2 + 4 * x - 1, -3 * u**2 + 2 * y + 2],
            [4 * x**3 - 3 * x**2 - 40 * x + 1, 4 * y**3 - 3 * y**2 - 40 * y + 1],
        ]
    )


def _poly_hess(v: Array) -> Array:
    x, y = v[0], v[1]
    u = x - y
    return np.array(
        [
            [[6 * u + 4, -6 * u], [-6 * u, 6 * u + 2]],
            [[12 * x**2 - 6 * x - 40, 0.0], [0.0, 12 * y**2 - 6 * y - 40]],
        ]
    )


def two_polynomials() -> Problem:
    """Cubic/quartic pair of objectives in two variables.

    ``f1`` has a local minimum near ``(0.0185, -0.537)``; ``f2`` is a
    separable quartic with four local minima.
    """
    return Problem(
        fun=_poly_fun,
        jac=_poly_jac,
        hess=_poly_hess,
        n_vars=2,
        n_objectives=2,
        name="two_polynomials",
        equations=(
            "(x-y)**3+2*x**2+y**2-x+2*y-500",
            "x**4-x**3-20*x**2+x+y**4-y**3-20*y**2+y-100",
        ),
    )


def _beale_terms(v: Array):
    x, y = v[0], v[1]
    t = np.array([1 - y, 1 - y**2, 1 - y**3])
    f = np.array([1.5, 2.25, 2.625]) - x * t
    return x, y, t, f


def _beale_fun(v: Array) -> Array:
    _, _, _, f = _beale_terms(v)
    return np.array([np.sum(f**2)])


def _beale_jac(v: Array) -> Array:
    x, y, t, f = _beale_terms(v)
    dx = -2 * np.dot(f, t)
    dy = 2 * x * (f[0] + 2 * f[1] * y + 3 * f[2] * y**2)
    return np.array([[dx, dy]])


def _beale_hess(v: Array) -> Array:
    x, y, t, f = _beale_terms(v)
    h00 = 2 * np.dot(t, t)
    h01 = 2 * (
        f[0] + y * (2 * f[1] + 3 * y * f[2]) - x * (t[0] + y * (2 * t[1] + 3 * y * t[2]))
    )
    h11 = 2 * x * (x + 2 * f[1] + y * (6 * f[2] + x * y * (4 + 9 * y**2)))
    return np.array([[[h00, h01], [h01, h11]]])


def beale() -> Problem:
    """Beale's function, global minimum 0 at ``(3, 0.5)``.

    Standard starting points are ``(1, 1)`` (easy) and ``(1, 4)`` (hard).
    """
    return Problem(
        fun=_beale_fun,
        jac=_beale_jac,
        hess=_beale_hess,
        n_vars=2,
        n_objectives=1,
        name="beale",
        equations=("(1.5-x+x*y)**2+(2.25-x+x*y*y)**2+(2.625-x+x*y*y*y)**2",),
    )


def extended_rosenbrock(n_vars: int = 2) -> Problem:
    """Chained Rosenbrock function, global minimum 0 at the ones vector."""
    if n_vars < 2:
        raise InvalidProblem("extended Rosenbrock needs at least 2 variables")

    def fun(x: Array) -> Array:
        head, tail = x[:-1], x[1:]
        return np.array([np.sum(100 * (tail - head**2) ** 2 + (1 - head) ** 2)])

    def jac(x: Array) -> Array:
        head, tail = x[:-1], x[1:]
        grad = np.zeros_like(x)
        grad[:-1] += -400 * head * (tail - head**2) - 2 * (1 - head)
        grad[1:] += 200 * (tail - head**2)
        return grad[np.newaxis, :]

    def hess(x: Array) -> Array:
        n = x.size
        h = np.zeros((n, n))
        for i in range(n - 1):
            h[i, i] += 1200 * x[i] ** 2 - 400 * x[i + 1] + 2
            h[i, i + 1] += -400 * x[i]
            h[i + 1, i] += -400 * x[i]
            h[i + 1, i + 1] += 200
        return h[np.newaxis, :, :]

    equations = ("100*(y-x**2)**2+(1-x)**2",) if n_vars == 2 else ()
    return Problem(
        fun=fun,
        jac=jac,
        hess=hess,
        n_vars=n_vars,
        n_objectives=1,
        name=f"extended_rosenbrock_{n_vars}",
        equations=equations,
    )


def quadratic_targets(targets: Sequence[Sequence[float]]) -> Problem:
    """Squared distances to several targets, ``f_i(x) = ||x - t_i||^2``.

    The Pareto set is the convex hull of the targets, which makes this the
    reference problem for checking multi-objective descent.
    """
    targets = np.atleast_2d(np.asarray(targets, dtype=float))
    n_objectives, n_vars = targets.shape

    def fun(x: Array) -> Array:
        return np.sum((x - targets) ** 2, axis=1)

    def jac(x: Array) -> Array:
        return 2 * (x - targets)

    def hess(x: Array) -> Array:
        return np.broadcast_to(2 * np.eye(n_vars), (n_objectives, n_vars, n_vars)).copy()

    equations = ()
    if n_vars == 2:
        equations = tuple(f"(x-({a:g}))**2+(y-({b:g}))**2" for a, b in targets)
    return Problem(
        fun=fun,
        jac=jac,
        hess=hess,
        n_vars=n_vars,
        n_objectives=n_objectives,
        name="quadratic_targets",
        equations=equations,
    )


__all__ = ["beale", "extended_rosenbrock", "quadratic_targets", "two_polynomials"]
