"""JPL quaternion algebra and small rotation helpers.

Quaternions are stored as ``[x, y, z, w]`` with the scalar part last and
follow the JPL multiplication convention, so that
``quat_to_rot_mat(quat_mult(q, p)) == quat_to_rot_mat(q) @ quat_to_rot_mat(p)``.
"""

from __future__ import annotations

import math

import numpy as np

_SMALL_ANGLE = 1e-10


def _vec(values, size: int) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (size,):
        raise ValueError(f"expected a vector of length {size}, got shape {array.shape}")
    return array


def skew(vector) -> np.ndarray:
    """Return the cross-product matrix ``[v]x`` such that ``[v]x @ w == v x w``."""
    x, y, z = _vec(vector, 3)
    return np.array(
        [
            [0.0, -z, y],
            [z, 0.0, -x],
            [-y, x, 0.0],
        ]
    )


def unit_quat() -> np.ndarray:
    """Return the identity quaternion."""
    return np.array([0.0, 0.0, 0.0, 1.0])


def quat_left_comp(q) -> np.ndarray:
    """Matrix ``L(q)`` with ``quat_mult(q, p) == L(q) @ p``."""
    q = _vec(q, 4)
    vec, w = q[:3], q[3]
    result = np.empty((4, 4))
    result[:3, :3] = w * np.eye(3) - skew(vec)
    result[:3, 3] = vec
    result[3, :3] = -vec
    result[3, 3] = w
    return result


def quat_right_comp(q) -> np.ndarray:
    """Matrix ``R(q)`` with ``quat_mult(p, q) == R(q) @ p``."""
    q = _vec(q, 4)
    vec, w = q[:3], q[3]
    result = np.empty((4, 4))
    result[:3, :3] = w * np.eye(3) + skew(vec)
    result[:3, 3] = vec
    result[3, :3] = -vec
    result[3, 3] = w
    return result


def quat_mult(p, q) -> np.ndarray:
    """JPL quaternion product ``p * q``."""
    return quat_left_comp(p) @ _vec(q, 4)


def quat_inv(q) -> np.ndarray:
    """Inverse of a unit quaternion (its conjugate)."""
    q = _vec(q, 4)
    return np.array([-q[0], -q[1], -q[2], q[3]])


def quat_norm(q) -> np.ndarray:
    """Return ``q`` scaled to unit length."""
    q = _vec(q, 4)
    norm = np.linalg.norm(q)
    if norm == 0.0:
        raise ValueError("cannot normalise a zero quaternion")
    return q / norm


def quat_exp(phi) -> np.ndarray:
    """Map a rotation vector to a unit quaternion."""
    phi = _vec(phi, 3)
    theta = np.linalg.norm(phi)
    if theta < _SMALL_ANGLE:
        return quat_norm(np.append(0.5 * phi, 1.0))
    half = 0.5 * theta
    return np.append(math.sin(half) * phi / theta, math.cos(half))


def quat_log(q) -> np.ndarray:
    """Map a unit quaternion to its rotation vector."""
    q = _vec(q, 4)
    vec, w = q[:3], q[3]
    norm = np.linalg.norm(vec)
    if norm < _SMALL_ANGLE:
        return 2.0 * vec / w
    return 2.0 * math.atan2(norm, w) * vec / norm


def quat_to_rot_mat(q) -> np.ndarray:
    """Rotation matrix of a unit quaternion."""
    q = _vec(q, 4)
    vec, w = q[:3], q[3]
    return (2.0 * w * w - 1.0) * np.eye(3) - 2.0 * w * skew(vec) + 2.0 * np.outer(vec, vec)


def rot_mat_to_quat(c) -> np.ndarray:
    """Unit quaternion (with non-negative scalar part) of a rotation matrix."""
    c = np.asarray(c, dtype=float)
    if c.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {c.shape}")
    diag_sum = float(c[0, 0] + c[1, 1] + c[2, 2])
    candidates = [diag_sum, c[0, 0], c[1, 1], c[2, 2]]
    choice = int(np.argmax(candidates))
    if choice == 0:
        w = 0.5 * math.sqrt(max(1.0 + diag_sum, 0.0))
        s = 4.0 * w
        x = (c[1, 2] - c[2, 1]) / s
        y = (c[2, 0] - c[0, 2]) / s
        z = (c[0, 1] - c[1, 0]) / s
    elif choice == 1:
        x = 0.5 * math.sqrt(max(1.0 + c[0, 0] - c[1, 1] - c[2, 2], 0.0))
        s = 4.0 * x
        y = (c[0, 1] + c[1, 0]) / s
        z = (c[0, 2] + c[2, 0]) / s
        w = (c[1, 2] - c[2, 1]) / s
    elif choice == 2:
        y = 0.5 * math.sqrt(max(1.0 - c[0, 0] + c[1, 1] - c[2, 2], 0.0))
        s = 4.0 * y
        x = (c[0, 1] + c[1, 0]) / s
        z = (c[1, 2] + c[2, 1]) / s
        w = (c[2, 0] - c[0, 2]) / s
    else:
        z = 0.5 * math.sqrt(max(1.0 - c[0, 0] - c[1, 1] + c[2, 2], 0.0))
        s = 4.0 * z
        x = (c[0, 2] + c[2, 0]) / s
        y = (c[1, 2] + c[2, 1]) / s
        w = (c[0, 1] - c[1, 0]) / s
    q = np.array([x, y, z, w])
    if q[3] < 0.0:
        q = -q
    return quat_norm(q)


def positive_quaternion_product_jpl(p, q) -> np.ndarray:
    """JPL product ``p * q`` with its sign chosen so the scalar part is non-negative."""
    product = quat_mult(p, q)
    if product[3] < 0.0:
        product = -product
    return product