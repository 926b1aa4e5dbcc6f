import math

from amr_tracking.geometry import get_yaw_from_orientation
from amr_tracking.sim.dynamics import UnicycleModel, UnicycleState
from amr_tracking.types import ControlCommand


def test_unicycle_straight_motion():
    model = UnicycleModel(v_max=1.5, w_max=2.0)
    model.reset(UnicycleState(0.0, 0.0, 0.0, 0.0, 0.0))
    dt = 0.1
    for _ in range(10):
        model.step(ControlCommand(1.0, 0.0), dt)
    x, y, th = model.as_pose()
    assert abs(x - 1.0) < 1e-6
    assert abs(y - 0.0) < 1e-6
    assert abs(th - 0.0) < 1e-12


def test_unicycle_turn_angle_wrap():
    model = UnicycleModel(v_max=1.5, w_max=2.0)
    # Start near +pi and turn slightly positive to test wrap
    model.reset(UnicycleState(0.0, 0.0, 3.2, 0.0, 0.0))
    model.step(ControlCommand(0.0, 2.0), 0.1)
    _, _, th = model.as_pose()
    assert -math.pi <= th <= math.pi


def test_commands_are_clipped_to_limits():
    model = UnicycleModel(v_max=0.5, w_max=0.3)
    model.reset()
    s = model.step(ControlCommand(3.0, -4.0), 0.1)
    assert s.v == 0.5
    assert s.omega == -0.3


def test_odometry_reports_pose_twist_and_frames():
    model = UnicycleModel(v_max=1.0, w_max=1.0, world_frame="odom", robot_frame="base")
    model.reset(UnicycleState(1.0, 2.0, 0.7, 0.4, 0.1))
    odom = model.odometry()
    assert odom.frame_id == "odom" and odom.child_frame_id == "base"
    assert (odom.pose.position.x, odom.pose.position.y) == (1.0, 2.0)
    assert abs(get_yaw_from_orientation(odom.pose.orientation) - 0.7) < 1e-12
    assert odom.twist.linear.x == 0.4
    assert odom.twist.angular.z == 0.1
