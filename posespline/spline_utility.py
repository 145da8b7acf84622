"""Cumulative cubic B-spline helpers for JPL unit quaternions.

A quaternion spline segment is defined by four control quaternions
``q0..q3`` and the local parameter ``u`` in ``[0, 1)``.  Derivatives with
respect to time take the knot spacing ``dt`` into account.
"""

from __future__ import annotations

import numpy as np

from posespline.rotation import (
    quat_exp,
    quat_inv,
    quat_left_comp,
    quat_log,
    quat_mult,
    quat_right_comp,
    unit_quat,
)


def _quat(values) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (4,):
        raise ValueError(f"expected a quaternion of length 4, got shape {array.shape}")
    return array


def _vec3(values) -> np.ndarray:
    array = np.asarray(values, dtype=float).reshape(-1)
    if array.shape != (3,):
        raise ValueError(f"expected a vector of length 3, got shape {array.shape}")
    return array


def _pure(vector: np.ndarray) -> np.ndarray:
    return np.append(vector, 0.0)


def phi(q_k_1, q_k) -> np.ndarray:
    """Rotation vector taking ``q_k_1`` to ``q_k``: ``log(q_k_1^-1 * q_k)``."""
    return quat_log(quat_mult(quat_inv(_quat(q_k_1)), _quat(q_k)))


def r(beta_t: float, phi_vec) -> np.ndarray:
    """Quaternion ``exp(beta_t * phi_vec)``."""
    return quat_exp(beta_t * _vec3(phi_vec))


def cubic_basis_fun0(u: float) -> float:
    return (1.0 - u) * (1.0 - u) * (1.0 - u) / 6.0


def cubic_basis_fun1(u: float) -> float:
    return (3.0 * u * u * u - 6.0 * u * u + 4.0) / 6.0


def cubic_basis_fun2(u: float) -> float:
    return (-3.0 * u * u * u + 3.0 * u * u + 3.0 * u + 1.0) / 6.0


def cubic_basis_fun3(u: float) -> float:
    return u * u * u / 6.0


def basis_matrix() -> np.ndarray:
    """Matrix ``M`` with ``M.T @ [1, u, u^2, u^3]`` giving the four basis values."""
    return (1.0 / 6.0) * np.array(
        [
            [1.0, 4.0, 1.0, 0.0],
            [-3.0, 0.0, 3.0, 0.0],
            [3.0, -6.0, 3.0, 0.0],
            [-1.0, 3.0, -3.0, 1.0],
        ]
    )


def beta0(u: float) -> float:
    return 1.0


def beta1(u: float) -> float:
    """Sum of basis functions 1 to 3."""
    return (u * u * u - 3.0 * u * u + 3.0 * u + 5.0) / 6.0


def beta2(u: float) -> float:
    """Sum of basis functions 2 and 3."""
    return (-2.0 * u * u * u + 3.0 * u * u + 3.0 * u + 1.0) / 6.0


def beta3(u: float) -> float:
    return cubic_basis_fun3(u)


def cumulative_matrix() -> np.ndarray:
    """Matrix ``C`` with ``C.T @ [1, u, u^2, u^3]`` giving ``beta0..beta3``."""
    return (1.0 / 6.0) * np.array(
        [
            [6.0, 5.0, 1.0, 0.0],
            [0.0, 3.0, 3.0, 0.0],
            [0.0, -3.0, 3.0, 0.0],
            [0.0, 1.0, -2.0, 1.0],
        ]
    )


def _first_derivative_powers(u: float) -> np.ndarray:
    return np.array([0.0, 1.0, 2.0 * u, 3.0 * u * u])


def _second_derivative_powers(u: float) -> np.ndarray:
    return np.array([0.0, 0.0, 2.0, 6.0 * u])


def _dot_beta(column: int, dt: float, u: float) -> float:
    return float((1.0 / dt) * _first_derivative_powers(u) @ cumulative_matrix()[:, column])


def _dot_dot_beta(column: int, dt: float, u: float) -> float:
    return float((1.0 / (dt * dt)) * _second_derivative_powers(u) @ cumulative_matrix()[:, column])


def dot_beta1(dt: float, u: float) -> float:
    return _dot_beta(1, dt, u)


def dot_beta2(dt: float, u: float) -> float:
    return _dot_beta(2, dt, u)


def dot_beta3(dt: float, u: float) -> float:
    return _dot_beta(3, dt, u)


def dot_dot_beta1(dt: float, u: float) -> float:
    return _dot_dot_beta(1, dt, u)


def dot_dot_beta2(dt: float, u: float) -> float:
    return _dot_dot_beta(2, dt, u)


def dot_dot_beta3(dt: float, u: float) -> float:
    return _dot_dot_beta(3, dt, u)


def dr_dt(dot_beta: float, beta: float, phi_vec) -> np.ndarray:
    """Time derivative of ``r(beta, phi_vec)``."""
    phi_vec = _vec3(phi_vec)
    return 0.5 * dot_beta * quat_left_comp(_pure(phi_vec)) @ r(beta, phi_vec)


def d2r_dt2(dot_dot_beta: float, dot_beta: float, beta: float, phi_vec) -> np.ndarray:
    """Second time derivative of ``r(beta, phi_vec)``."""
    phi_vec = _vec3(phi_vec)
    phi_ext = _pure(phi_vec)
    outer = 0.5 * dot_beta * dot_beta * phi_ext + dot_dot_beta * unit_quat()
    return 0.5 * quat_left_comp(outer) @ quat_left_comp(phi_ext) @ r(beta, phi_vec)


def _segment(q0, q1, q2, q3):
    q0, q1, q2, q3 = (_quat(q) for q in (q0, q1, q2, q3))
    return q0, (phi(q0, q1), phi(q1, q2), phi(q2, q3))


def evaluate_qs(u: float, q0, q1, q2, q3) -> np.ndarray:
    """Quaternion on the spline segment at ``u``."""
    q0, phis = _segment(q0, q1, q2, q3)
    r1, r2, r3 = (r(beta(u), p) for beta, p in zip((beta1, beta2, beta3), phis))
    return quat_left_comp(q0) @ quat_left_comp(r1) @ quat_left_comp(r2) @ r3


def evaluate_dot_qs(dt: float, u: float, q0, q1, q2, q3) -> np.ndarray:
    """First time derivative of the spline quaternion at ``u``."""
    q0, phis = _segment(q0, q1, q2, q3)
    betas = (beta1(u), beta2(u), beta3(u))
    dot_betas = (dot_beta1(dt, u), dot_beta2(dt, u), dot_beta3(dt, u))
    r1, r2, r3 = (r(b, p) for b, p in zip(betas, phis))
    dr1, dr2, dr3 = (dr_dt(db, b, p) for db, b, p in zip(dot_betas, betas, phis))
    L = quat_left_comp
    part1 = L(dr1) @ L(r2) @ r3
    part2 = L(r1) @ L(dr2) @ r3
    part3 = L(r1) @ L(r2) @ dr3
    return L(q0) @ (part1 + part2 + part3)


def evaluate_dot_dot_qs(dt: float, u: float, q0, q1, q2, q3) -> np.ndarray:
    """Second time derivative of the spline quaternion at ``u``."""
    q0, phis = _segment(q0, q1, q2, q3)
    betas = (beta1(u), beta2(u), beta3(u))
    dot_betas = (dot_beta1(dt, u), dot_beta2(dt, u), dot_beta3(dt, u))
    dot_dot_betas = (dot_dot_beta1(dt, u), dot_dot_beta2(dt, u), dot_dot_beta3(dt, u))
    r1, r2, r3 = (r(b, p) for b, p in zip(betas, phis))
    dr1, dr2, dr3 = (dr_dt(db, b, p) for db, b, p in zip(dot_betas, betas, phis))
    ddr1, ddr2, ddr3 = (
        d2r_dt2(ddb, db, b, p) for ddb, db, b, p in zip(dot_dot_betas, dot_betas, betas, phis)
    )
    L = quat_left_comp
    total = (
        L(ddr1) @ L(r2) @ r3
        + L(dr1) @ L(dr2) @ r3
        + L(dr1) @ L(r2) @ dr3
        + L(dr1) @ L(dr2) @ r3
        + L(r1) @ L(ddr2) @ r3
        + L(r1) @ L(dr2) @ dr3
        + L(dr1) @ L(r2) @ dr3
        + L(r1) @ L(dr2) @ dr3
        + L(r1) @ L(r2) @ ddr3
    )
    return L(q0) @ total


def v_matrix() -> np.ndarray:
    """4x3 matrix embedding a small rotation vector as half a quaternion."""
    result = np.zeros((4, 3))
    result[:3, :3] = 0.5 * np.eye(3)
    return result


def w_matrix() -> np.ndarray:
    """3x4 matrix taking twice the vector part of a quaternion."""
    result = np.zeros((3, 4))
    result[:3, :3] = 2.0 * np.eye(3)
    return result


def w_in_body_frame(q_wi, dot_q_wi) -> np.ndarray:
    """Angular velocity in the body frame from a quaternion and its derivative."""
    return -2.0 * (quat_left_comp(quat_inv(_quat(q_wi))) @ _quat(dot_q_wi))[:3]


def alpha(q_ba, dot_dot_q_ba) -> np.ndarray:
    """Angular acceleration term ``2 * vec(ddq * q^-1)``."""
    return 2.0 * (quat_left_comp(_quat(dot_dot_q_ba)) @ quat_inv(_quat(q_ba)))[:3]


def _dot_q_inv_q_derivative(q, dq, ddq) -> np.ndarray:
    inv_q = quat_inv(_quat(q))
    a = quat_left_comp(_quat(dq)) @ inv_q
    b0 = _pure((quat_left_comp(_quat(ddq)) @ inv_q)[:3])
    b1 = _pure(a[:3])
    return quat_right_comp(a) @ b0 - quat_left_comp(a) @ b1


def jacobian_dot_q_inv_q_t(q, dq, ddq) -> np.ndarray:
    """Time Jacobian of ``dq * q^-1``."""
    return _dot_q_inv_q_derivative(q, dq, ddq)


def jacobian_omega_t(q, dq, ddq, extrinsic_q) -> np.ndarray:
    """Time Jacobian of the angular velocity seen through an extrinsic rotation."""
    extrinsic_q = _quat(extrinsic_q)
    b = _dot_q_inv_q_derivative(q, dq, ddq)
    j = quat_left_comp(quat_inv(extrinsic_q)) @ quat_right_comp(extrinsic_q) @ b
    return j[:3]


def jacobian_omega_extrinsic_q(q, dq, extrinsic_q) -> np.ndarray:
    """Jacobian of the angular velocity with respect to the extrinsic rotation."""
    extrinsic_q = _quat(extrinsic_q)
    inv_q = quat_inv(_quat(q))
    a = quat_left_comp(_quat(dq)) @ inv_q
    left_inv_ext = quat_left_comp(quat_inv(extrinsic_q))
    j = left_inv_ext @ quat_left_comp(a) @ quat_right_comp(extrinsic_q) - left_inv_ext @ quat_right_comp(
        quat_left_comp(a) @ extrinsic_q
    )
    return j[:3, :3]