import math

import numpy as np

from amr_tracking.config import TrackerParams
from amr_tracking.control.pure_pursuit import (
    compute_control_outputs,
    compute_lookahead_distance,
    compute_steering,
    compute_throttle,
    fold_alpha,
)
from amr_tracking.geometry import make_pose
from amr_tracking.types import Odometry, Twist, Vector3


def _odom(x: float, y: float, yaw: float, v: float = 0.0) -> Odometry:
    return Odometry(pose=make_pose(x, y, yaw), twist=Twist(linear=Vector3(v, 0.0, 0.0)))


def test_throttle_zero_at_goal_and_capped() -> None:
    params = TrackerParams(max_throttle=0.8, throttle_gain=0.3)
    assert compute_throttle(0.0, params) == 0.0
    d = np.linspace(0.0, 20.0, 201)
    thr = np.array([compute_throttle(float(x), params) for x in d])
    assert np.all(thr <= 0.8)
    assert np.all(np.diff(thr) >= 0.0)
    assert abs(compute_throttle(1.0, params) - 0.3) < 1e-12


def test_lookahead_floor() -> None:
    on = TrackerParams(lookahead_distance=True)
    off = TrackerParams(lookahead_distance=False)
    for v in (-5.0, -0.1, 0.0, 0.5, 0.99):
        assert compute_lookahead_distance(_odom(0, 0, 0, v), on) == 1.0
    for v in (0.0, 3.0, 10.0):
        assert compute_lookahead_distance(_odom(0, 0, 0, v), off) == 1.0
    assert compute_lookahead_distance(_odom(0, 0, 0, 2.5), on) == 2.5


def test_fold_alpha_single_overshoot() -> None:
    assert fold_alpha(math.pi / 2) == math.pi / 2
    assert fold_alpha(-math.pi / 2) == -math.pi / 2
    assert abs(fold_alpha(2.0) - (2.0 - math.pi)) < 1e-12
    assert abs(fold_alpha(-2.0) - (math.pi - 2.0)) < 1e-12
    # only one correction is applied
    assert abs(fold_alpha(5.0) - (5.0 - math.pi)) < 1e-12


def test_steering_is_always_bounded() -> None:
    rng = np.random.default_rng(7)
    for _ in range(500):
        params = TrackerParams(
            robot_length=float(rng.uniform(0.01, 10.0)),
            lookahead_distance=bool(rng.integers(0, 2)),
        )
        odom = _odom(*rng.uniform(-100, 100, size=2), yaw=float(rng.uniform(-4, 4)), v=float(rng.uniform(-5, 5)))
        goal = make_pose(*rng.uniform(-100, 100, size=2), yaw=float(rng.uniform(-4, 4)))
        s = compute_steering(odom, goal, params)
        assert -0.5 <= s <= 0.5


def test_goal_straight_ahead() -> None:
    params = TrackerParams(max_throttle=10.0, throttle_gain=0.4, robot_length=0.01)
    odom = _odom(0.0, 0.0, 0.0)
    goal = make_pose(5.0, 0.0)
    cmd = compute_control_outputs(odom, goal, params)
    assert abs(cmd.throttle - 2.0) < 1e-12
    # alpha = 0, lookahead floored at 1.0
    assert abs(cmd.steering - math.atan(2.0 * 0.01 * 5.0 / 1.0)) < 1e-12

    capped = compute_control_outputs(odom, goal, TrackerParams(max_throttle=0.5, throttle_gain=0.4))
    assert capped.throttle == 0.5


def test_goal_directly_left_keeps_alpha_at_boundary() -> None:
    odom = _odom(0.0, 0.0, 0.0)
    goal = make_pose(0.0, 5.0)
    assert fold_alpha(math.atan2(5.0, 0.0)) == math.pi / 2
    # pi/2 plus a positive pursuit term saturates the steering limit
    assert compute_steering(odom, goal, TrackerParams()) == 0.5


def test_goal_behind_folds_to_small_alpha() -> None:
    params = TrackerParams(robot_length=0.001)
    odom = _odom(0.0, 0.0, 0.0)
    goal = make_pose(-5.0, 0.1)
    # atan2 ~ pi -> folded to ~0.02, plus a tiny pursuit term
    s = compute_steering(odom, goal, params)
    expected = (math.atan2(0.1, -5.0) - math.pi) + math.atan(2.0 * 0.001 * math.hypot(5.0, 0.1))
    assert abs(s - expected) < 1e-12


def test_speed_scaled_lookahead_softens_steering() -> None:
    params = TrackerParams(robot_length=0.05, lookahead_distance=True)
    goal = make_pose(4.0, 0.0)
    slow = compute_steering(_odom(0.0, 0.0, 0.0, v=0.5), goal, params)
    fast = compute_steering(_odom(0.0, 0.0, 0.0, v=4.0), goal, params)
    assert 0.0 < fast < slow
