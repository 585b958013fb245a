"""Pytest configuration and shared fixtures for modescent tests.

This module provides:
- A deterministic numpy RNG fixture
- Small hand-built problems used across the optimizer tests
"""

import logging
import os

import matplotlib
import numpy as np
import pytest

from modescent.logging import set_log_level
from modescent.optimize import Problem

matplotlib.use("Agg")


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def quiet_logging() -> None:
    """Keep optimizer logging at WARNING between tests."""
    yield
    set_log_level(logging.WARNING)


def linear_problem(jacobian) -> Problem:
    """Problem whose objectives are ``J @ x``, so the Jacobian is constant."""
    jacobian = np.atleast_2d(np.asarray(jacobian, dtype=float))
    n_objectives, n_vars = jacobian.shape
    return Problem(
        fun=lambda x: jacobian @ x,
        jac=lambda x: jacobian,
        n_vars=n_vars,
        n_objectives=n_objectives,
        name="linear",
    )


@pytest.fixture
def make_linear():
    """Factory for constant-Jacobian problems."""
    return linear_problem


@pytest.fixture
def opposing_1d() -> Problem:
    """Two objectives in one variable whose gradients point in opposite directions."""
    return linear_problem([[1.0], [-1.0]])


@pytest.fixture
def identical_rows() -> Problem:
    """Two objectives sharing the same non-zero gradient."""
    return linear_problem([[1.0, 2.0], [1.0, 2.0]])
