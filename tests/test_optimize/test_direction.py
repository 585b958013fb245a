import numpy as np
import pytest

from modescent.optimize import (
    DirectionSearch,
    ScipyMinimizer,
    approx_jacobian,
    inner_gradient,
    inner_value,
)


def test_inner_value_is_worst_directional_derivative_plus_penalty():
    jac = np.array([[1.0, 0.0], [0.0, 3.0]])
    d = np.array([2.0, -1.0])
    # directional derivatives are 2 and -3
    assert inner_value(jac, d) == pytest.approx(2.0 + 0.5 * 5.0)


def test_inner_gradient_uses_active_row():
    jac = np.array([[1.0, 0.0], [0.0, 3.0]])
    d = np.array([-1.0, 2.0])
    assert np.allclose(inner_gradient(jac, d), d + jac[1])


def test_inner_gradient_matches_finite_differences_away_from_kinks(rng):
    jac = rng.normal(size=(3, 4))
    d = rng.normal(size=4)
    numeric = approx_jacobian(lambda z: inner_value(jac, z), d)[0]
    assert np.allclose(inner_gradient(jac, d), numeric, atol=1e-5)


def test_inner_gradient_handles_more_objectives_than_variables():
    jac = np.array([[1.0], [-1.0], [0.5]])
    grad = inner_gradient(jac, np.array([-2.0]))
    assert grad.shape == (1,)
    assert grad[0] == pytest.approx(-3.0)


def test_single_objective_direction_is_negative_gradient(make_linear):
    problem = make_linear([[3.0, -4.0]])
    point = problem.evaluate(np.zeros(2))
    found = DirectionSearch().search(point, tol=1e-8)
    assert np.allclose(found.direction, [-3.0, 4.0], atol=1e-4)
    assert found.value == pytest.approx(-12.5, abs=1e-6)
    assert not found.is_critical()


def test_conflicting_objectives_give_min_norm_direction(make_linear):
    # gradients (1, 1) and (-1, 1): their min-norm convex combination is (0, 1)
    problem = make_linear([[1.0, 1.0], [-1.0, 1.0]])
    point = problem.evaluate(np.zeros(2))
    found = DirectionSearch().search(point, tol=1e-8)
    assert np.allclose(found.direction, [0.0, -1.0], atol=1e-3)
    assert found.value == pytest.approx(-0.5, abs=1e-4)


def test_gradient_based_scipy_minimizer_on_smooth_problem(identical_rows):
    point = identical_rows.evaluate(np.zeros(2))
    search = DirectionSearch(ScipyMinimizer("BFGS"))
    found = search.search(point, tol=1e-6)
    assert np.allclose(found.direction, [-1.0, -2.0], atol=1e-5)


def test_default_seed_is_minus_ones():
    assert np.array_equal(DirectionSearch().initial_guess(3), [-1.0, -1.0, -1.0])
