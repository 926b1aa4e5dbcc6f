"""Waypoint search along a Path."""

from __future__ import annotations

from math import atan2, pi
from typing import Optional

import numpy as np

from ..errors import InsufficientPathError
from ..geometry import get_yaw_from_orientation, wrap_to_pi
from ..types import Path, Pose


def _check_start(path: Path, id_start: int) -> None:
    if len(path) == 0:
        raise InsufficientPathError("empty path")
    if not (0 <= id_start < len(path)):
        raise IndexError(f"id_start {id_start} outside path of length {len(path)}")


def search_indices(n: int, id_start: int, window: Optional[int] = None, wrap: bool = False) -> np.ndarray:
    """Indices visited by a forward search from id_start.

    window: waypoints past id_start to look at (None: all remaining).
    wrap: continue past the last index into 0, 1, ... (closed paths).
    """
    if wrap:
        m = n if window is None else min(n, int(window) + 1)
        return (id_start + np.arange(m)) % n
    stop = n if window is None else min(n, id_start + int(window) + 1)
    return np.arange(id_start, stop)


def closest_waypoint(
    robot_pose: Pose,
    path: Path,
    id_start: int = 0,
    window: Optional[int] = None,
    wrap: bool = False,
) -> int:
    """Index with minimum planar distance to the robot, searching forward from id_start.

    Ties go to the first index in search order, so at a self-crossing the
    search stays on the branch it is already following.
    """
    _check_start(path, id_start)
    idx = search_indices(len(path), id_start, window, wrap)
    pts = path.xy()[idx]
    p = np.array([robot_pose.position.x, robot_pose.position.y], dtype=float)
    d2 = np.sum((pts - p) ** 2, axis=1)
    return int(idx[int(np.argmin(d2))])


def is_ahead(robot_pose: Pose, waypoint: Pose) -> bool:
    """True if the bearing robot -> waypoint is within +-pi/2 of the robot yaw."""
    dx = waypoint.position.x - robot_pose.position.x
    dy = waypoint.position.y - robot_pose.position.y
    yaw = get_yaw_from_orientation(robot_pose.orientation)
    return abs(wrap_to_pi(atan2(dy, dx) - yaw)) <= pi / 2.0


def next_waypoint(
    robot_pose: Pose,
    path: Path,
    id_start: int = 0,
    window: Optional[int] = None,
    wrap: bool = False,
) -> int:
    """First index at or after the closest waypoint that lies ahead of the robot.

    On an open path returns the last index when every remaining waypoint is
    behind; on a closed path (wrap) it walks at most one lap.
    """
    idx = closest_waypoint(robot_pose, path, id_start, window, wrap)
    n = len(path)
    if wrap:
        for _ in range(n - 1):
            if is_ahead(robot_pose, path[idx]):
                break
            idx = (idx + 1) % n
        return idx
    while idx < n - 1 and not is_ahead(robot_pose, path[idx]):
        idx += 1
    return idx
