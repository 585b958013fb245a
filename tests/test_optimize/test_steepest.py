import numpy as np
import pytest

from modescent.optimize import (
    DescentConfig,
    DirectionSearch,
    InnerSolverFailure,
    MinimizeResult,
    QuasiNewtonMinimizer,
    Status,
    SteepestMultiObjectiveDescent,
    run,
)
from modescent.problems import extended_rosenbrock, quadratic_targets, two_polynomials


class FixedMinimizer:
    """Minimizer stub returning a canned answer and recording its calls."""

    def __init__(self, x, fun, success=True):
        self.x = np.asarray(x, dtype=float)
        self.fun = fun
        self.success = success
        self.calls = []

    def minimize(self, fun, grad, x0, tol, maxiter):
        self.calls.append({"x0": np.array(x0), "tol": tol, "maxiter": maxiter})
        return MinimizeResult(
            x=self.x, fun=self.fun, success=self.success, nit=1, message="stub"
        )


class RaisingMinimizer:
    def minimize(self, fun, grad, x0, tol, maxiter):
        raise np.linalg.LinAlgError("singular")


def test_identical_rows_are_not_critical(identical_rows):
    start = identical_rows.evaluate(np.array([1.0, 1.0]))
    opt = SteepestMultiObjectiveDescent(start, DescentConfig(step_length=0.1))
    nxt = opt.advance(start)
    assert not opt.critical_detected
    assert opt.last_inner_value < -1.0
    assert np.allclose(opt.last_direction, [-1.0, -2.0], atol=1e-3)
    assert np.all(nxt.objective_values < start.objective_values)


def test_opposing_rows_in_1d_are_critical(opposing_1d):
    start = opposing_1d.evaluate(np.array([0.3]))
    opt = SteepestMultiObjectiveDescent(start)
    opt.advance(start)
    assert opt.critical_detected
    assert opt.has_converged(1)
    assert opt.status is Status.PARETO_CRITICAL


def test_critical_move_still_happens(opposing_1d):
    start = opposing_1d.evaluate(np.array([0.3]))
    stub = FixedMinimizer([0.5], 0.2)
    opt = SteepestMultiObjectiveDescent(
        start, DescentConfig(step_length=0.1), DirectionSearch(stub)
    )
    nxt = opt.advance(start)
    assert opt.critical_detected
    assert np.allclose(nxt.inputs, [0.35])


def test_direction_search_receives_seed_tolerance_and_budget(identical_rows):
    start = identical_rows.evaluate(np.zeros(2))
    stub = FixedMinimizer([-1.0, -2.0], -2.5)
    config = DescentConfig(tolerance=1e-4, step_length=1.0)
    opt = SteepestMultiObjectiveDescent(start, config, DirectionSearch(stub, max_iterations=77))
    nxt = opt.advance(start)
    (call,) = stub.calls
    assert np.array_equal(call["x0"], [-1.0, -1.0])
    assert call["tol"] == 1e-4
    assert call["maxiter"] == 77
    assert np.allclose(nxt.inputs, [-1.0, -2.0])


def test_replacing_update_is_literal(identical_rows):
    start = identical_rows.evaluate(np.array([10.0, 10.0]))
    stub = FixedMinimizer([-1.0, -2.0], -2.5)
    opt = SteepestMultiObjectiveDescent(
        start, DescentConfig(step_length=0.5), DirectionSearch(stub), additive=False
    )
    nxt = opt.advance(start)
    assert np.allclose(nxt.inputs, [-0.5, -1.0])


def test_replacing_update_rejects_armijo(identical_rows):
    start = identical_rows.evaluate(np.zeros(2))
    with pytest.raises(ValueError):
        SteepestMultiObjectiveDescent(start, DescentConfig(armijo=True), additive=False)


def test_inner_non_convergence_is_fatal(identical_rows):
    start = identical_rows.evaluate(np.zeros(2))
    stub = FixedMinimizer([-0.7, -0.7], -0.3, success=False)
    opt = SteepestMultiObjectiveDescent(start, direction_search=DirectionSearch(stub))
    with pytest.raises(InnerSolverFailure) as excinfo:
        run(opt)
    assert excinfo.value.point is start
    assert np.allclose(excinfo.value.direction, [-0.7, -0.7])
    assert excinfo.value.result.message == "stub"


def test_inner_numerical_error_is_wrapped(identical_rows):
    start = identical_rows.evaluate(np.zeros(2))
    opt = SteepestMultiObjectiveDescent(
        start, direction_search=DirectionSearch(RaisingMinimizer())
    )
    with pytest.raises(InnerSolverFailure) as excinfo:
        opt.advance(start)
    assert isinstance(excinfo.value.__cause__, np.linalg.LinAlgError)
    assert excinfo.value.result is None
    assert np.array_equal(excinfo.value.direction, [-1.0, -1.0])


def test_non_finite_jacobian_fails_before_minimizing():
    problem = extended_rosenbrock()
    start = problem.evaluate(np.array([np.nan, 0.0]))
    stub = FixedMinimizer([-1.0, -1.0], -1.0)
    opt = SteepestMultiObjectiveDescent(start, direction_search=DirectionSearch(stub))
    with pytest.raises(InnerSolverFailure) as excinfo:
        opt.advance(start)
    assert stub.calls == []
    assert excinfo.value.result is None
    assert np.array_equal(excinfo.value.direction, [-1.0, -1.0])


def test_small_identical_rows_are_not_critical(make_linear):
    problem = make_linear([[1e-3, 0.0], [1e-3, 0.0]])
    start = problem.evaluate(np.zeros(2))
    opt = SteepestMultiObjectiveDescent(start, DescentConfig(tolerance=1e-6))
    nxt = opt.advance(start)
    assert not opt.critical_detected
    assert opt.last_inner_value < 0
    assert np.all(nxt.objective_values < start.objective_values)
    assert not opt.has_converged(1)


def test_zero_inner_value_is_critical(identical_rows):
    start = identical_rows.evaluate(np.zeros(2))
    stub = FixedMinimizer([0.0, 0.0], 0.0)
    opt = SteepestMultiObjectiveDescent(start, direction_search=DirectionSearch(stub))
    opt.advance(start)
    assert opt.critical_detected


def test_quadratic_targets_reach_pareto_set():
    problem = quadratic_targets([[0.0, 0.0], [1.0, 0.0]])
    start = problem.evaluate(np.array([0.5, 2.0]))
    config = DescentConfig(tolerance=1e-6, max_iterations=500, step_length=0.1)
    res = run(SteepestMultiObjectiveDescent(start, config))
    assert res.status is Status.PARETO_CRITICAL
    assert abs(res.x[1]) < 1e-2
    assert -1e-2 <= res.x[0] <= 1.0 + 1e-2
    values = np.array([p.objective_values for p in res.trajectory])
    assert np.all(np.diff(values, axis=0) <= 1e-5)


def test_armijo_common_descent_decreases_all_objectives():
    problem = quadratic_targets([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    start = problem.evaluate(np.array([3.0, 3.0]))
    config = DescentConfig(step_length=1.0, max_iterations=100, armijo=True)
    res = run(SteepestMultiObjectiveDescent(start, config))
    values = np.array([p.objective_values for p in res.trajectory])
    assert np.all(np.diff(values, axis=0) <= 1e-6)
    assert res.status is Status.PARETO_CRITICAL


def test_terminates_within_cap_on_polynomials():
    problem = two_polynomials()
    start = problem.evaluate(np.array([1.3, 0.7]))
    config = DescentConfig(tolerance=1e-6, max_iterations=25, step_length=0.01)
    res = run(SteepestMultiObjectiveDescent(start, config))
    assert res.nit <= config.max_iterations + 1
    assert res.status in set(Status)


def test_quasi_newton_direction_search_for_smooth_inner_problem(identical_rows):
    start = identical_rows.evaluate(np.zeros(2))
    search = DirectionSearch(QuasiNewtonMinimizer())
    opt = SteepestMultiObjectiveDescent(start, DescentConfig(step_length=0.1), search)
    opt.advance(start)
    assert np.allclose(opt.last_direction, [-1.0, -2.0], atol=1e-6)
    assert opt.last_inner_value == pytest.approx(-2.5)
