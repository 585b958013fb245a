"""Contour and surface plots of two-variable problems with trajectories.

Matplotlib is an optional dependency; without it the plotting functions
raise RuntimeError.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from ..optimize.core import Array, Point, Problem

try:
    from matplotlib import pyplot as plt
    from matplotlib.axes import Axes
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    if False:
        from matplotlib.axes import Axes

Trajectory = Sequence[Point]

_MISSING = "matplotlib required for plotting; install with pip install matplotlib"


def _require_matplotlib() -> None:
    if not HAS_MATPLOTLIB:
        raise RuntimeError(_MISSING)


def _require_two_vars(problem: Problem) -> None:
    if problem.n_vars != 2:
        raise ValueError(
            f"plots need a 2-variable problem, {problem.name} has {problem.n_vars}"
        )


def objective_grid(
    problem: Problem,
    bounds: Tuple[float, float] = (-5.0, 5.0),
    resolution: int = 100,
) -> Tuple[Array, Array, Array]:
    """Evaluate every objective on a square grid.

    Returns
    -------
    (xx, yy, zz)
        Mesh coordinates of shape ``(resolution, resolution)`` and values
        of shape ``(n_objectives, resolution, resolution)``.
    """
    _require_two_vars(problem)
    axis = np.linspace(bounds[0], bounds[1], resolution)
    xx, yy = np.meshgrid(axis, axis)
    zz = np.empty((problem.n_objectives,) + xx.shape)
    for i in range(resolution):
        for j in range(resolution):
            zz[:, i, j] = problem.evaluate_objectives(np.array([xx[i, j], yy[i, j]]))
    return xx, yy, zz


def _labels(problem: Problem) -> Sequence[str]:
    if problem.equations:
        return problem.equations
    return [f"f{k + 1}" for k in range(problem.n_objectives)]


def _names(trajectories: Sequence[Trajectory], names: Optional[Sequence[str]]):
    if names is None:
        return [f"trajectory {k + 1}" for k in range(len(trajectories))]
    if len(names) != len(trajectories):
        raise ValueError("names and trajectories must have the same length")
    return names


def plot_contours(
    problem: Problem,
    trajectories: Sequence[Trajectory],
    names: Optional[Sequence[str]] = None,
    bounds: Tuple[float, float] = (-5.0, 5.0),
    resolution: int = 100,
    levels: int = 50,
    ax: Optional["Axes"] = None,
) -> "Axes":
    """Contour lines of each objective with trajectories in input space.

    Parameters
    ----------
    problem:
        Two-variable problem.
    trajectories:
        Sequences of points, e.g. ``RunResult.trajectory``.
    names:
        Legend entry per trajectory.
    ax:
        Axes to draw on. If None, creates a new figure.
    """
    _require_matplotlib()
    xx, yy, zz = objective_grid(problem, bounds, resolution)
    if ax is None:
        _, ax = plt.subplots(figsize=(7, 6))

    for k, label in enumerate(_labels(problem)):
        ax.contour(xx, yy, zz[k], levels=levels, colors=f"C{k}", linewidths=0.5)
        # contour sets carry no legend handle
        ax.plot([], [], color=f"C{k}", linewidth=0.5, label=label)

    offset = problem.n_objectives
    for k, (trajectory, name) in enumerate(zip(trajectories, _names(trajectories, names))):
        inputs = np.array([p.inputs for p in trajectory])
        ax.plot(inputs[:, 0], inputs[:, 1], "+-", color=f"C{k + offset}", label=name)

    ax.set_xlim(*bounds)
    ax.set_ylim(*bounds)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.1), fontsize="small")
    return ax


def plot_surfaces(
    problem: Problem,
    trajectories: Sequence[Trajectory],
    names: Optional[Sequence[str]] = None,
    bounds: Tuple[float, float] = (-5.0, 5.0),
    resolution: int = 20,
    ax: Optional["Axes"] = None,
) -> "Axes":
    """Objective surfaces with trajectories on the base plane and projected
    onto each surface.
    """
    _require_matplotlib()
    xx, yy, zz = objective_grid(problem, bounds, resolution)
    if ax is None:
        fig = plt.figure(figsize=(8, 6))
        ax = fig.add_subplot(projection="3d")

    for k, label in enumerate(_labels(problem)):
        ax.plot_wireframe(xx, yy, zz[k], color=f"C{k}", linewidth=0.4, label=label)

    offset = problem.n_objectives
    for k, (trajectory, name) in enumerate(zip(trajectories, _names(trajectories, names))):
        inputs = np.array([p.inputs for p in trajectory])
        values = np.array([p.objective_values for p in trajectory])
        ax.plot(inputs[:, 0], inputs[:, 1], np.zeros(len(inputs)), "+-",
                color=f"C{k + offset}", label=name)
        for j in range(problem.n_objectives):
            ax.plot(inputs[:, 0], inputs[:, 1], values[:, j], "+", color=f"C{j}")

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(fontsize="small")
    return ax


__all__ = ["HAS_MATPLOTLIB", "objective_grid", "plot_contours", "plot_surfaces"]
