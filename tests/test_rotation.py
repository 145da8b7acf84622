import math

import numpy as np
import pytest

from posespline.rotation import (
    positive_quaternion_product_jpl,
    quat_exp,
    quat_inv,
    quat_left_comp,
    quat_log,
    quat_mult,
    quat_norm,
    quat_right_comp,
    quat_to_rot_mat,
    rot_mat_to_quat,
    skew,
    unit_quat,
)

# Control points used by the source's angular velocity sample test.
CONTROL_POINTS = [
    [-0.0233343, 0.538966, 0.805091, 0.246575],
    [0.142278, 0.44318, -0.513372, 0.72097],
    [-0.112329, 0.379688, 0.34445, 0.851219],
    [-0.164781, -0.303314, 0.876392, -0.335836],
]


@pytest.fixture
def quats():
    return [quat_norm(q) for q in CONTROL_POINTS]


def _same_rotation(a, b):
    return np.allclose(a, b, atol=1e-9) or np.allclose(a, -b, atol=1e-9)


def test_skew_matches_cross_product():
    v = np.array([0.3, -1.2, 2.5])
    w = np.array([-0.7, 0.4, 1.1])
    assert np.allclose(skew(v) @ w, np.cross(v, w))
    assert np.allclose(skew(v), -skew(v).T)


def test_skew_rejects_wrong_size():
    with pytest.raises(ValueError):
        skew([1.0, 2.0])


def test_unit_quat_is_scalar_last():
    assert np.array_equal(unit_quat(), np.array([0.0, 0.0, 0.0, 1.0]))


def test_unit_quat_is_neutral(quats):
    for q in quats:
        assert np.allclose(quat_mult(unit_quat(), q), q)
        assert np.allclose(quat_mult(q, unit_quat()), q)


def test_jpl_basis_product():
    i = np.array([1.0, 0.0, 0.0, 0.0])
    j = np.array([0.0, 1.0, 0.0, 0.0])
    assert np.allclose(quat_mult(i, j), [0.0, 0.0, -1.0, 0.0])


def test_left_and_right_comp_agree_with_product(quats):
    p, q = quats[0], quats[1]
    product = quat_mult(p, q)
    assert np.allclose(quat_left_comp(p) @ q, product)
    assert np.allclose(quat_right_comp(q) @ p, product)


def test_product_is_associative(quats):
    a, b, c = quats[0], quats[1], quats[2]
    assert np.allclose(quat_mult(quat_mult(a, b), c), quat_mult(a, quat_mult(b, c)))


def test_inverse(quats):
    for q in quats:
        assert np.allclose(quat_mult(q, quat_inv(q)), unit_quat())
        assert np.allclose(quat_mult(quat_inv(q), q), unit_quat())


def test_norm_gives_unit_length():
    q = quat_norm([0.1, 1.3, -0.7, 1.9])
    assert math.isclose(np.linalg.norm(q), 1.0)


def test_norm_rejects_zero():
    with pytest.raises(ValueError):
        quat_norm([0.0, 0.0, 0.0, 0.0])


def test_rotation_matrix_is_orthonormal(quats):
    for q in quats:
        c = quat_to_rot_mat(q)
        assert np.allclose(c @ c.T, np.eye(3))
        assert math.isclose(np.linalg.det(c), 1.0)


def test_rotation_matrix_is_homomorphic(quats):
    p, q = quats[1], quats[3]
    assert np.allclose(quat_to_rot_mat(quat_mult(p, q)), quat_to_rot_mat(p) @ quat_to_rot_mat(q))


def test_rotation_matrix_of_inverse_is_transpose(quats):
    for q in quats:
        assert np.allclose(quat_to_rot_mat(quat_inv(q)), quat_to_rot_mat(q).T)


@pytest.mark.parametrize(
    "raw",
    CONTROL_POINTS
    + [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 1e-3],
        [0.0, 0.0, 1.0, 0.0],
        [0.1, 1.3, -0.732, 1.9],
    ],
)
def test_rot_mat_to_quat_round_trip(raw):
    q = quat_norm(raw)
    back = rot_mat_to_quat(quat_to_rot_mat(q))
    assert back[3] >= 0.0
    assert _same_rotation(back, q)


def test_rot_mat_to_quat_rejects_bad_shape():
    with pytest.raises(ValueError):
        rot_mat_to_quat(np.eye(4))


def test_exp_of_zero_is_identity():
    assert np.allclose(quat_exp([0.0, 0.0, 0.0]), unit_quat())


def test_exp_half_turn_about_z():
    assert np.allclose(quat_exp([0.0, 0.0, math.pi]), [0.0, 0.0, 1.0, 0.0], atol=1e-12)


@pytest.mark.parametrize("phi", [[0.3, -0.2, 0.9], [1e-12, 0.0, 0.0], [2.0, 1.0, -1.5]])
def test_log_exp_round_trip(phi):
    phi = np.array(phi)
    assert np.allclose(quat_log(quat_exp(phi)), phi)


def test_exp_log_round_trip(quats):
    for q in quats:
        assert np.allclose(quat_exp(quat_log(q)), q)


def test_exp_is_unit_length():
    assert math.isclose(np.linalg.norm(quat_exp([3.0, -4.0, 1.0])), 1.0)


def test_positive_product(quats):
    for p in quats:
        for q in quats:
            product = positive_quaternion_product_jpl(p, q)
            assert product[3] >= 0.0
            assert _same_rotation(product, quat_mult(p, q))