"""Plotting helpers for two-variable problems and their trajectories."""

from .contours import HAS_MATPLOTLIB, objective_grid, plot_contours, plot_surfaces

__all__ = ["HAS_MATPLOTLIB", "objective_grid", "plot_contours", "plot_surfaces"]
