"""Catalog of analytic test problems."""

from .catalog import beale, extended_rosenbrock, quadratic_targets, two_polynomials

__all__ = ["beale", "extended_rosenbrock", "quadratic_targets", "two_polynomials"]
