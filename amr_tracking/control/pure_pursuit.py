"""Pure Pursuit control law.

API: compute_control_outputs(odom_robot, pose_goal, params) -> ControlCommand
Throttle is proportional to the distance to the goal with a hard ceiling;
steering follows the pure-pursuit geometry and is clamped to MAX_STEERING_RAD.
"""

from __future__ import annotations

import logging
from math import atan, atan2, pi

from ..config import TrackerParams
from ..constants import LOOKAHEAD_MIN_M, MAX_STEERING_RAD
from ..geometry import get_yaw_from_orientation, planar_distance
from ..types import ControlCommand, Odometry, Pose

logger = logging.getLogger(__name__)


def compute_throttle(distance_to_goal: float, params: TrackerParams) -> float:
    return min(params.max_throttle, distance_to_goal * params.throttle_gain)


def compute_lookahead_distance(odom_robot: Odometry, params: TrackerParams) -> float:
    """Speed-scaled lookahead, floored at LOOKAHEAD_MIN_M.

    The floor keeps the steering division finite at low or negative speed.
    """
    velocity = odom_robot.twist.linear.x
    return max(LOOKAHEAD_MIN_M, velocity * float(params.lookahead_distance))


def fold_alpha(alpha: float) -> float:
    """Fold a single half-turn overshoot back into [-pi/2, pi/2].

    Only one correction is applied; the bounds themselves are left unchanged.
    """
    if alpha > pi / 2:
        alpha -= pi
    elif alpha < -pi / 2:
        alpha += pi
    return alpha


def compute_steering(odom_robot: Odometry, pose_goal: Pose, params: TrackerParams) -> float:
    robot = odom_robot.pose
    yaw_robot = get_yaw_from_orientation(robot.orientation)
    yaw_goal = get_yaw_from_orientation(pose_goal.orientation)

    dx = pose_goal.position.x - robot.position.x
    dy = pose_goal.position.y - robot.position.y
    # unsigned distance to the goal, not a signed lateral offset
    cross_track_error = planar_distance(robot.position, pose_goal.position)

    alpha = fold_alpha(atan2(dy, dx) - yaw_robot)
    lookahead = compute_lookahead_distance(odom_robot, params)

    steering = atan((2.0 * params.robot_length * cross_track_error) / lookahead) + alpha
    steering = min(max(steering, -MAX_STEERING_RAD), MAX_STEERING_RAD)

    logger.debug(
        "yaw_robot=%.4f yaw_goal=%.4f heading_err=%.4f cte=%.4f alpha=%.4f lookahead=%.4f steering=%.4f",
        yaw_robot,
        yaw_goal,
        yaw_goal - yaw_robot,
        cross_track_error,
        alpha,
        lookahead,
        steering,
    )
    return steering


def compute_control_outputs(odom_robot: Odometry, pose_goal: Pose, params: TrackerParams) -> ControlCommand:
    """Throttle + steering for one cycle from a single parameter snapshot."""
    distance_to_goal = planar_distance(odom_robot.pose.position, pose_goal.position)
    throttle = compute_throttle(distance_to_goal, params)
    steering = compute_steering(odom_robot, pose_goal, params)
    logger.debug("distance_to_goal=%.4f throttle=%.4f", distance_to_goal, throttle)
    return ControlCommand(throttle=float(throttle), steering=float(steering))
