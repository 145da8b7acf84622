"""Cumulative B-spline helpers for JPL quaternions, poses, manifold updates, integration and time values."""

__version__ = "0.1.0"

__all__ = [
    "integrator",
    "parameterization",
    "pose",
    "rotation",
    "spline_utility",
    "timing",
    "vector_errors",
]