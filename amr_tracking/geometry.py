"""Pose/quaternion helpers shared by the publisher and the tracker."""

from __future__ import annotations

from math import atan2, cos, hypot, pi, sin

from .types import Point, Pose, PoseError, Quaternion, Transform, Vector3


def wrap_to_pi(theta: float) -> float:
    """Normalize angle to [-pi, pi)."""
    wrapped = (theta + pi) % (2.0 * pi) - pi
    if wrapped >= pi:
        wrapped -= 2.0 * pi
    return wrapped


def get_yaw_from_orientation(orientation: Quaternion) -> float:
    """Yaw (rotation about z) of a quaternion, ZYX Euler convention."""
    q = orientation
    siny_cosp = 2.0 * (q.w * q.z + q.x * q.y)
    cosy_cosp = 1.0 - 2.0 * (q.y * q.y + q.z * q.z)
    return atan2(siny_cosp, cosy_cosp)


def quaternion_from_yaw(yaw: float) -> Quaternion:
    """Planar rotation about z as a unit quaternion (roll = pitch = 0)."""
    half = 0.5 * yaw
    return Quaternion(0.0, 0.0, sin(half), cos(half))


def make_pose(x: float, y: float, yaw: float = 0.0, z: float = 0.0) -> Pose:
    return Pose(Point(float(x), float(y), float(z)), quaternion_from_yaw(yaw))


def planar_distance(p1: Point, p2: Point) -> float:
    return hypot(p2.x - p1.x, p2.y - p1.y)


def convert_pose_to_transform(pose: Pose) -> Transform:
    p = pose.position
    return Transform(Vector3(p.x, p.y, p.z), pose.orientation)


def calculate_pose_error(pose_robot: Pose, pose_goal: Pose) -> PoseError:
    """Position error (euclidean, 3D) and signed heading error in [-pi, pi]."""
    a = pose_robot.position
    b = pose_goal.position
    position = float(((b.x - a.x) ** 2 + (b.y - a.y) ** 2 + (b.z - a.z) ** 2) ** 0.5)
    yaw_robot = get_yaw_from_orientation(pose_robot.orientation)
    yaw_goal = get_yaw_from_orientation(pose_goal.orientation)
    heading = wrap_to_pi(yaw_goal - yaw_robot)
    return PoseError(position=position, heading=heading)
