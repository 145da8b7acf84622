"""Residuals tying a vector space spline to sampled measurements."""

from __future__ import annotations

import numpy as np

from posespline.spline_utility import dot_beta1, dot_beta2, dot_beta3

_N_CONTROL_POINTS = 4


def _vec3(values) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (3,):
        raise ValueError(f"expected a vector of length 3, got shape {array.shape}")
    return array


class VectorSplineSampleVelocityError:
    """Residual between the spline velocity at ``t_meas`` and a measured velocity.

    ``t_meas`` is the local spline parameter and ``time_interval`` the knot
    spacing.  The residual is ``estimate - measurement``.
    """

    def __init__(self, t_meas: float, time_interval: float, v_meas) -> None:
        self.t_meas = float(t_meas)
        self.time_interval = float(time_interval)
        self.v_meas = _vec3(v_meas).copy()
        self.square_root_information = np.eye(3)

    def _control_points(self, parameters) -> list[np.ndarray]:
        points = [_vec3(p) for p in parameters]
        if len(points) != _N_CONTROL_POINTS:
            raise ValueError(f"expected {_N_CONTROL_POINTS} control points, got {len(points)}")
        return points

    def evaluate(self, parameters) -> tuple[np.ndarray, list[np.ndarray]]:
        """Return the residual and the 3x3 Jacobians for the four control points."""
        residual, jacobians, _ = self.evaluate_with_minimal_jacobians(parameters)
        return residual, jacobians

    def evaluate_with_minimal_jacobians(
        self, parameters
    ) -> tuple[np.ndarray, list[np.ndarray], list[np.ndarray]]:
        """Return the residual, the Jacobians and the minimal Jacobians."""
        v0, v1, v2, v3 = self._control_points(parameters)
        db1 = dot_beta1(self.time_interval, self.t_meas)
        db2 = dot_beta2(self.time_interval, self.t_meas)
        db3 = dot_beta3(self.time_interval, self.t_meas)

        v_hat = db1 * (v1 - v0) + db2 * (v2 - v1) + db3 * (v3 - v2)
        residual = self.square_root_information @ (v_hat - self.v_meas)

        identity = np.eye(3)
        jacobians = [
            -db1 * identity,
            (db1 - db2) * identity,
            (db2 - db3) * identity,
            db3 * identity,
        ]
        minimal = [j.copy() for j in jacobians]
        return residual, jacobians, minimal