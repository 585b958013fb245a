"""
Example: single- and multi-objective descent on a pair of polynomials

Runs gradient descent on each objective of ``two_polynomials`` and then the
steepest multi-objective descent from the same starting point. Every
trajectory is written to ``trajectories/trajectoryN.csv`` in the current
directory, and a contour plot is saved next to them when matplotlib is
installed.
"""

from pathlib import Path

import numpy as np

from modescent import (
    DescentConfig,
    SingleObjectiveDescent,
    SteepestMultiObjectiveDescent,
    run,
    trajectory_path,
    two_polynomials,
    write_trajectory,
)
from modescent.viz import HAS_MATPLOTLIB, plot_contours


def main():
    problem = two_polynomials()
    print(
        f"{problem.name}: {problem.n_objectives} objectives of "
        f"{problem.n_vars} variables"
    )
    start = problem.evaluate(np.array([1.3, 0.7]))
    config = DescentConfig(tolerance=1e-6, max_iterations=2000, step_length=0.01)

    optimizers = {
        "Gradient descent on f1": SingleObjectiveDescent(start, 0, config),
        "Gradient descent on f2": SingleObjectiveDescent(start, 1, config),
        "Steepest multi-objective descent": SteepestMultiObjectiveDescent(
            start, DescentConfig(tolerance=1e-6, max_iterations=300, step_length=0.01)
        ),
    }

    out_dir = Path.cwd() / "trajectories"
    out_dir.mkdir(exist_ok=True)
    trajectories = []
    for index, (name, optimizer) in enumerate(optimizers.items()):
        result = run(optimizer)
        trajectories.append(result.trajectory)
        path = write_trajectory(result.trajectory, trajectory_path(index, out_dir))
        print("=" * 60)
        print(name)
        print("=" * 60)
        print(f"Status: {result.status.value} after {result.nit} iterations")
        print(f"Final point: {np.round(result.x, 4)}")
        print(f"Objectives: {np.round(result.fun, 4)}")
        print(f"Trajectory written to {path}")
        print()

    if HAS_MATPLOTLIB:
        from matplotlib import pyplot as plt

        ax = plot_contours(problem, trajectories, names=list(optimizers))
        ax.figure.savefig(out_dir / "contours.png", bbox_inches="tight")
        plt.close(ax.figure)
        print(f"Contour plot written to {out_dir / 'contours.png'}")


if __name__ == "__main__":
    main()
