"""Rigid body poses built from a translation and a JPL unit quaternion."""

from __future__ import annotations

import math

import numpy as np

from posespline.rotation import (
    quat_inv,
    quat_left_comp,
    quat_norm,
    quat_right_comp,
    quat_to_rot_mat,
    rot_mat_to_quat,
    skew,
    unit_quat,
)

_SINC_SERIES_THRESHOLD = 1e-6
_RIGHT_JACOBIAN_SMALL_ANGLE = 1.0e-4


def _as_vector(values, size: int) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (size,):
        raise ValueError(f"expected a vector of length {size}, got shape {array.shape}")
    return array.copy()


def sinc(x: float) -> float:
    """``sin(x) / x``, using its Taylor series near zero."""
    if abs(x) > _SINC_SERIES_THRESHOLD:
        return math.sin(x) / x
    x2 = x * x
    x4 = x2 * x2
    x6 = x4 * x2
    return 1.0 - x2 / 6.0 + x4 / 120.0 - x6 / 5040.0


def delta_q(d_alpha) -> np.ndarray:
    """Unit quaternion of a small rotation vector."""
    d_alpha = _as_vector(d_alpha, 3)
    half_norm = 0.5 * float(np.linalg.norm(d_alpha))
    return np.append(sinc(half_norm) * 0.5 * d_alpha, math.cos(half_norm))


def right_jacobian(phi_vec) -> np.ndarray:
    """Right Jacobian of SO(3) at the rotation vector ``phi_vec``."""
    phi_vec = _as_vector(phi_vec, 3)
    angle = float(np.linalg.norm(phi_vec))
    phi_x = skew(phi_vec)
    phi_x2 = phi_x @ phi_x
    result = np.eye(3)
    if angle < _RIGHT_JACOBIAN_SMALL_ANGLE:
        result += -0.5 * phi_x + (1.0 / 6.0) * phi_x2
    else:
        angle2 = angle * angle
        angle3 = angle2 * angle
        result += (
            -(1.0 - math.cos(angle)) / angle2 * phi_x
            + (angle - math.sin(angle)) / angle3 * phi_x2
        )
    return result


def _angle_axis_matrix(angle: float, axis: np.ndarray) -> np.ndarray:
    cos_a = math.cos(angle)
    return cos_a * np.eye(3) + (1.0 - cos_a) * np.outer(axis, axis) + math.sin(angle) * skew(axis)


class Pose:
    """Transformation ``T_AB`` with translation ``r`` and rotation quaternion ``q``."""

    __slots__ = ("_r", "_q", "_c")

    def __init__(self, r=None, q=None) -> None:
        self._r = np.zeros(3) if r is None else _as_vector(r, 3)
        self._q = unit_quat() if q is None else quat_norm(q)
        self._c = quat_to_rot_mat(self._q)

    @classmethod
    def _from_parts(cls, r: np.ndarray, q: np.ndarray, c: np.ndarray) -> "Pose":
        pose = cls.__new__(cls)
        pose._r = r
        pose._q = q
        pose._c = c
        return pose

    @classmethod
    def from_matrix(cls, t_ab) -> "Pose":
        """Build from a 4x4 homogeneous transformation matrix."""
        t_ab = np.asarray(t_ab, dtype=float)
        if t_ab.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {t_ab.shape}")
        c = t_ab[:3, :3].copy()
        return cls._from_parts(t_ab[:3, 3].copy(), rot_mat_to_quat(c), c)

    @classmethod
    def from_vector(cls, vec) -> "Pose":
        """Build from ``[r, q]`` with seven coefficients; ``q`` is normalised."""
        vec = _as_vector(vec, 7)
        return cls(vec[:3], vec[3:])

    @classmethod
    def identity(cls) -> "Pose":
        return cls()

    @classmethod
    def random(cls, translation_max: float = 1.0, rotation_max: float = math.pi, rng=None) -> "Pose":
        """A random pose with bounded translation components and rotation."""
        rng = np.random.default_rng() if rng is None else rng
        axis = rotation_max * rng.uniform(-1.0, 1.0, 3)
        r = translation_max * rng.uniform(-1.0, 1.0, 3)
        angle = float(np.linalg.norm(axis))
        if angle == 0.0:
            c = np.eye(3)
        else:
            c = _angle_axis_matrix(angle, axis / angle)
        return cls._from_parts(r, rot_mat_to_quat(c), c)

    @property
    def r(self) -> np.ndarray:
        """Translation vector."""
        return self._r.copy()

    @property
    def q(self) -> np.ndarray:
        """Rotation quaternion ``[x, y, z, w]``."""
        return self._q.copy()

    @property
    def c(self) -> np.ndarray:
        """Rotation matrix."""
        return self._c.copy()

    def transformation(self) -> np.ndarray:
        """The 4x4 homogeneous matrix."""
        result = np.eye(4)
        result[:3, :3] = self._c
        result[:3, 3] = self._r
        return result

    def t3x4(self) -> np.ndarray:
        """The upper 3x4 block of the homogeneous matrix."""
        return self.transformation()[:3, :]

    def inverse(self) -> "Pose":
        return Pose(-(self._c.T @ self._r), quat_inv(self._q))

    def __mul__(self, other):
        if isinstance(other, Pose):
            return Pose(self._c @ other._r + self._r, quat_left_comp(self._q) @ other._q)
        try:
            vector = np.asarray(other, dtype=float).reshape(-1)
        except (TypeError, ValueError):
            return NotImplemented
        if vector.shape == (3,):
            return self._c @ vector + self._r
        if vector.shape == (4,):
            scale = vector[3]
            return np.append(self._c @ vector[:3] + self._r * scale, scale)
        raise ValueError(f"cannot transform a value of shape {vector.shape}")

    def oplus(self, delta) -> "Pose":
        """Apply a 6-vector update ``[dr, dalpha]`` and return the new pose."""
        delta = _as_vector(delta, 6)
        r = self._r + delta[:3]
        q = quat_norm(quat_left_comp(delta_q(delta[3:])) @ self._q)
        return Pose(r, q)

    def oplus_jacobian(self) -> np.ndarray:
        """7x6 Jacobian of the coefficients with respect to the minimal update."""
        s = np.zeros((4, 3))
        s[:3, :3] = 0.5 * np.eye(3)
        jacobian = np.zeros((7, 6))
        jacobian[:3, :3] = np.eye(3)
        jacobian[3:, 3:] = quat_right_comp(self._q) @ s
        return jacobian

    def lift_jacobian(self) -> np.ndarray:
        """6x7 Jacobian of the minimal update with respect to the coefficients."""
        jacobian = np.zeros((6, 7))
        jacobian[:3, :3] = np.eye(3)
        jacobian[3:, 3:] = 2.0 * quat_right_comp(quat_inv(self._q))[:3, :]
        return jacobian

    def coeffs(self) -> np.ndarray:
        """The seven coefficients ``[r, q]``."""
        return np.concatenate([self._r, self._q])

    def __repr__(self) -> str:
        return f"Pose(r={self._r.tolist()}, q={self._q.tolist()})"