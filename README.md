# posespline

Building blocks for continuous-time trajectories written as cumulative
cubic B-splines on rotations (JPL unit quaternions) and on vector spaces,
together with pose algebra, manifold updates, fixed-step integration and
second/nanosecond time values. Everything works on NumPy arrays.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `posespline.rotation`

JPL quaternion algebra. Quaternions are `[x, y, z, w]` with the scalar
last, and `quat_to_rot_mat(quat_mult(q, p))` equals
`quat_to_rot_mat(q) @ quat_to_rot_mat(p)`.

- `skew(vector)`: cross-product matrix.
- `unit_quat()`: the identity quaternion.
- `quat_mult(p, q)`, `quat_left_comp(q)`, `quat_right_comp(q)`: product and
  its left/right matrix forms.
- `quat_inv(q)`, `quat_norm(q)`: conjugate and normalisation (a zero
  quaternion raises `ValueError`).
- `quat_exp(phi)`, `quat_log(q)`: rotation vector to quaternion and back.
- `quat_to_rot_mat(q)`, `rot_mat_to_quat(c)`: conversion to and from 3x3
  rotation matrices; the returned quaternion has a non-negative scalar part.
- `positive_quaternion_product_jpl(p, q)`: product with its sign chosen so
  the scalar part is non-negative.

### `posespline.pose`

- `Pose(r=None, q=None)`: translation `r` and unit quaternion `q` (normalised
  on construction). Alternative constructors: `Pose.from_matrix(t_ab)`,
  `Pose.from_vector(vec)` (seven coefficients `[r, q]`), `Pose.identity()`
  and `Pose.random(translation_max, rotation_max, rng)`.
- Read-only properties `r`, `q` and `c` (rotation matrix); `coeffs()`,
  `transformation()` (4x4) and `t3x4()`.
- `inverse()`, and `*` with another `Pose`, a 3-vector (point) or a
  4-vector (homogeneous point).
- `oplus(delta)` returns the pose moved by a 6-vector `[dr, dalpha]`;
  `oplus_jacobian()` (7x6) and `lift_jacobian()` (6x7) relate the seven
  coefficients to the minimal update.
- Helpers `sinc(x)`, `delta_q(d_alpha)` and `right_jacobian(phi_vec)`.

### `posespline.parameterization`

Local parameterizations with `plus(x, delta)` and `compute_jacobian(x)`:

- `HamiltonPoseParameterization`: 7-vector pose with a Hamilton quaternion,
  updated by right multiplication with a small-angle delta.
- `JplQuaternionParameterization`: 4-vector JPL quaternion with a
  non-negative scalar part, updated by left multiplication. A negative
  scalar part in the input raises `ValueError`.

### `posespline.spline_utility`

- Basis functions `cubic_basis_fun0`…`cubic_basis_fun3`, the matrix
  `basis_matrix()`, cumulative basis functions `beta0`…`beta3` and
  `cumulative_matrix()`.
- Time derivatives `dot_beta1`…`dot_beta3` and
  `dot_dot_beta1`…`dot_dot_beta3`, each taking the knot spacing `dt` and
  the local parameter `u`.
- `phi(q_k_1, q_k)`, `r(beta_t, phi_vec)`, `dr_dt(...)` and `d2r_dt2(...)`.
- `evaluate_qs(u, q0, q1, q2, q3)`, `evaluate_dot_qs(dt, u, ...)` and
  `evaluate_dot_dot_qs(dt, u, ...)`: a spline segment's quaternion and its
  first and second time derivatives.
- `w_in_body_frame(q_wi, dot_q_wi)` (body angular velocity) and
  `alpha(q_ba, dot_dot_q_ba)`.
- `v_matrix()`, `w_matrix()`, `jacobian_dot_q_inv_q_t`, `jacobian_omega_t`
  and `jacobian_omega_extrinsic_q`.

### `posespline.vector_errors`

`VectorSplineSampleVelocityError(t_meas, time_interval, v_meas)`: the
residual between the velocity of a vector-space spline segment at local
parameter `t_meas` and a measured velocity (estimate minus measurement).
`evaluate(parameters)` takes the four 3-vector control points and returns
the residual and four 3x3 Jacobians; `evaluate_with_minimal_jacobians`
returns the minimal Jacobians as well.

### `posespline.integrator`

`integrate(a, b, f, number_of_points, rule, zero)` with
`IntegrationRule.SIMPSON` (the default) or `IntegrationRule.TRAPEZOIDAL`.
It returns `zero` when `a == b` and raises `ValueError` for fewer than three
points. Simpson's rule raises an even point count to the next odd one. The
integrator classes `SimpsonRuleIntegrator` and `TrapezoidalRuleIntegrator`
are available directly.

### `posespline.timing`

`Duration` and `WallDuration` (signed 32-bit seconds), `Time` and `WallTime`
(unsigned 32-bit seconds), each with a nanosecond part in `[0, 1e9)`. They
support `from_sec`, `from_nsec`, `to_sec`, `to_nsec`, `is_zero`, arithmetic
and ordering. `Time.now()` reads the system clock, and `Duration.sleep()`
and `Time.sleep_until(end)` block with `time.sleep`. Values out of range
raise `TimeRangeError`. The module also has `normalize_sec_nsec`,
`normalize_sec_nsec_unsigned`, `normalize_sec_nsec_signed` and the bounds
`DURATION_MAX`, `DURATION_MIN`, `TIME_MAX` and `TIME_MIN`.

## Examples

```python
import numpy as np
from posespline.rotation import quat_norm
from posespline.spline_utility import evaluate_qs, evaluate_dot_qs, w_in_body_frame

cps = [quat_norm(np.array(q)) for q in (
    [-0.0233343, 0.538966, 0.805091, 0.246575],
    [0.142278, 0.44318, -0.513372, 0.72097],
    [-0.112329, 0.379688, 0.34445, 0.851219],
    [-0.164781, -0.303314, 0.876392, -0.335836],
)]

q = evaluate_qs(0.5, *cps)
dq = evaluate_dot_qs(1.0, 0.5, *cps)
omega = w_in_body_frame(q, dq)
```

```python
from posespline.integrator import integrate, IntegrationRule

area = integrate(0.0, 1.0, lambda t: t * t, 101, IntegrationRule.SIMPSON, 0.0)
```

## What this package does not do

It works on one spline segment at a time, given its four control points.
It has no spline object that fits control points to a series of timestamped
samples or picks the segment for a query time. It has no optimizer or
solver: the residuals, Jacobians and parameterizations are meant to be
handed to one. It has no command-line tool and reads or writes no files.