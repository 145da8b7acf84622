"""Manifold updates for pose and quaternion parameter blocks."""

from __future__ import annotations

import math

import numpy as np

from posespline.rotation import positive_quaternion_product_jpl

# 0.262 rad is about 15 degrees, which keeps the small angle error near 1%.
_SMALL_ANGLE_THRESHOLD_SQUARED = (0.262 * 2) * (0.262 * 2)


def _as_vector(values, size: int) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (size,):
        raise ValueError(f"expected a vector of length {size}, got shape {array.shape}")
    return array


def _hamilton_product(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    pv, pw = p[:3], p[3]
    qv, qw = q[:3], q[3]
    vec = pw * qv + qw * pv + np.cross(pv, qv)
    return np.append(vec, pw * qw - pv @ qv)


def _small_angle_delta_q(theta: np.ndarray) -> np.ndarray:
    return np.append(0.5 * theta, 1.0)


class HamiltonPoseParameterization:
    """Pose ``[p, q]`` with a Hamilton quaternion updated by right multiplication."""

    global_size = 7
    local_size = 6

    def plus(self, x, delta) -> np.ndarray:
        """Return ``x`` moved by the 6-vector ``delta``."""
        x = _as_vector(x, 7)
        delta = _as_vector(delta, 6)
        p = x[:3] + delta[:3]
        q = _hamilton_product(x[3:], _small_angle_delta_q(delta[3:]))
        norm = np.linalg.norm(q)
        if norm == 0.0:
            raise ValueError("cannot normalise a zero quaternion")
        return np.concatenate([p, q / norm])

    def compute_jacobian(self, x) -> np.ndarray:
        """7x6 Jacobian: identity on the first six rows, zero on the last."""
        _as_vector(x, 7)
        jacobian = np.zeros((7, 6))
        jacobian[:6, :6] = np.eye(6)
        return jacobian


class JplQuaternionParameterization:
    """JPL quaternion with non-negative scalar part, updated by left multiplication."""

    global_size = 4
    local_size = 3

    def plus(self, x, delta) -> np.ndarray:
        """Return ``delta_q(delta) * x`` with a non-negative scalar part."""
        q = _as_vector(x, 4)
        rot_delta = _as_vector(delta, 3)
        if q[3] < 0.0:
            raise ValueError("quaternion scalar part must be non-negative")
        square_norm = float(rot_delta @ rot_delta)
        if square_norm < _SMALL_ANGLE_THRESHOLD_SQUARED:
            q_delta = np.append(0.5 * rot_delta, 1.0)
            q_delta = q_delta / np.linalg.norm(q_delta)
        else:
            half_norm = 0.5 * math.sqrt(square_norm)
            q_delta = np.append(
                0.5 * rot_delta / half_norm * math.sin(half_norm), math.cos(half_norm)
            )
        product = positive_quaternion_product_jpl(q_delta, q)
        if product[3] < 0.0:
            raise ValueError("quaternion product has a negative scalar part")
        return product

    def compute_jacobian(self, x) -> np.ndarray:
        """4x3 Jacobian of ``plus`` with respect to ``delta`` at zero."""
        q = _as_vector(x, 4)
        temp = -q if q[3] < 0.0 else q
        x_, y_, z_, w_ = temp
        jacobian = np.array(
            [
                [w_, -z_, y_],
                [z_, w_, -x_],
                [-y_, x_, w_],
                [-x_, -y_, -z_],
            ]
        )
        return 0.5 * jacobian