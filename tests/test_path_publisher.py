import math

import pytest

from amr_tracking.config import CurveConfig, LocalPathConfig, PublisherConfig
from amr_tracking.errors import InsufficientPathError
from amr_tracking.geometry import get_yaw_from_orientation, make_pose
from amr_tracking.planning.path_publisher import PathPublisher
from amr_tracking.types import Odometry, Path


def _publisher() -> PathPublisher:
    # 200 poses per lap
    return PathPublisher(PublisherConfig(curve=CurveConfig(12.0, 10.0, 100), local=LocalPathConfig(10, 50)))


def _odom_at(pose, frame_id: str = "world", child: str = "base_link") -> Odometry:
    return Odometry(pose=pose, frame_id=frame_id, child_frame_id=child)


def _just_behind(wp, d: float = 0.05):
    yaw = get_yaw_from_orientation(wp.orientation)
    return make_pose(wp.position.x - d * math.cos(yaw), wp.position.y - d * math.sin(yaw), yaw)


def test_global_path_built_on_construction_and_replaced_in_full() -> None:
    pub = _publisher()
    assert len(pub.global_path) == 200
    assert pub.global_path.closed
    first = pub.global_path
    pub.current_id = 42
    rebuilt = pub.publish_global_path(4.0, 2.0, 10)
    assert len(rebuilt) == 20
    assert pub.global_path is rebuilt
    assert pub.current_id == 0
    again = pub.publish_global_path(12.0, 10.0, 100)
    assert again.poses == first.poses


def test_tick_waits_for_odometry() -> None:
    assert _publisher().tick() is None


def test_local_path_window_around_next_waypoint() -> None:
    pub = _publisher()
    pub.current_id = 55
    local = pub.publish_local_path(_just_behind(pub.global_path[60]), 10, 50)
    # robot is a few cm short of waypoint 60, so 60 is both closest and ahead
    assert pub.current_id == 60
    assert local.poses == pub.global_path.poses[50:111]
    assert pub.pose_world_goal == pub.global_path[60]


def test_robot_just_past_lap_start_stays_at_lap_start() -> None:
    pub = _publisher()
    pub.publish_local_path(make_pose(0.02, 0.016, 0.69), 10, 50)
    assert pub.current_id == 0
    assert pub.pose_world_goal == pub.global_path[1]


def test_local_window_wraps_across_the_lap_seam() -> None:
    pub = _publisher()
    n = len(pub.global_path)

    start = pub.publish_local_path(_just_behind(pub.global_path[2]), 10, 50)
    assert len(start) == 61
    assert start.poses[0] == pub.global_path[n - 8]
    assert start.poses[10] == pub.global_path[2]

    pub.current_id = n - 5
    pub.on_odometry(_odom_at(_just_behind(pub.global_path[n - 3])))
    out = pub.tick()
    assert out is not None
    assert pub.current_id == n - 3
    assert len(out.local_path) >= 12
    assert out.local_path.poses[10] == pub.global_path[n - 3]
    assert out.local_path.poses[11] == pub.global_path[n - 2]
    assert out.local_path.poses[-1] == pub.global_path[(n - 3 + 50) % n]


def test_lap_end_continues_into_the_next_lap() -> None:
    pub = _publisher()
    pub.current_id = 195
    pub.publish_local_path(pub.global_path[1], 10, 50)
    assert pub.current_id == 1


def test_crossing_keeps_the_current_branch() -> None:
    pub = _publisher()
    # coming down the upper lobe into the origin, where waypoints 0 and 100 meet
    pub.current_id = 97
    pub.publish_local_path(_just_behind(pub.global_path[100]), 10, 50)
    assert pub.current_id == 100


def test_open_path_window_is_clamped_to_bounds() -> None:
    pub = _publisher()
    pub.set_global_path(Path(tuple(make_pose(float(i), 0.0) for i in range(30))))
    local = pub.publish_local_path(make_pose(2.5, 0.0), 10, 50)
    assert local.poses[0] == pub.global_path[0]
    assert local.poses[-1] == pub.global_path[29]
    assert len(local) == 30


def test_empty_global_path_yields_no_local_path() -> None:
    pub = _publisher()
    pub.set_global_path(Path())
    with pytest.raises(InsufficientPathError):
        pub.publish_local_path(make_pose(0.0, 0.0), 10, 50)
    pub.on_odometry(_odom_at(make_pose(0.0, 0.0)))
    with pytest.raises(InsufficientPathError):
        pub.tick()


def test_tick_reports_errors_and_transform_in_odometry_frames() -> None:
    pub = _publisher()
    wp = pub.global_path[30]
    yaw = get_yaw_from_orientation(wp.orientation)
    # half a metre to the left of waypoint 30, same heading
    robot = make_pose(wp.position.x - 0.5 * math.sin(yaw), wp.position.y + 0.5 * math.cos(yaw), yaw)
    pub.current_id = 25
    pub.on_odometry(_odom_at(robot, frame_id="odom", child="base"))
    out = pub.tick()
    assert out is not None
    assert out.robot_transform.parent_frame == "odom"
    assert out.robot_transform.child_frame == "base"
    assert out.robot_transform.transform.translation.x == robot.position.x
    assert out.local_path.poses[10] == out.goal
    assert out.relative_error.position <= out.absolute_error.position + 1e-12
    assert -math.pi <= out.absolute_error.heading <= math.pi
    assert out.global_path is pub.global_path
    assert pub.local_path is out.local_path
