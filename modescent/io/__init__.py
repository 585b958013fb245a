"""Trajectory persistence."""

from .trajectory import read_trajectory, trajectory_path, trajectory_rows, write_trajectory

__all__ = ["read_trajectory", "trajectory_path", "trajectory_rows", "write_trajectory"]
