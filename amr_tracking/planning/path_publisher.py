"""Global/local reference path publisher.

Holds the global path sampled from the reference curve and, on every timer
tick, extracts the local window around the robot together with the pose
errors against the current goal and the closest waypoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import PublisherConfig
from ..errors import InsufficientPathError
from ..geometry import calculate_pose_error, convert_pose_to_transform
from ..types import Odometry, Path, Pose, PoseError, StampedTransform
from .curve import sample_figure_eight
from .waypoints import closest_waypoint, next_waypoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublisherOutput:
    global_path: Path
    local_path: Path
    goal: Pose
    absolute_error: PoseError  # robot vs goal (next waypoint)
    relative_error: PoseError  # robot vs closest waypoint
    robot_transform: StampedTransform


class PathPublisher:
    """Publishes the global path and the local window the tracker follows.

    Interface:
    - on_odometry(odom): latch robot pose and frame ids
    - publish_global_path(A, B, t_res) -> Path
    - publish_local_path(robot_pose, n_wp_prev, n_wp_post) -> Path
    - tick() -> PublisherOutput | None

    The waypoint search only looks `search_window` poses past the last match.
    On a closed path both the search and the local window run across the lap
    seam, so the window always has n_wp_prev + n_wp_post + 1 poses.
    """

    def __init__(self, config: PublisherConfig | None = None):
        self.config = config or PublisherConfig()
        self.world_frame = self.config.world_frame
        self.robot_frame = self.config.robot_frame
        self.pose_world_robot: Optional[Pose] = None
        self.pose_world_goal: Optional[Pose] = None
        self.global_path = Path(frame_id=self.world_frame)
        self.local_path = Path(frame_id=self.world_frame)
        self.current_id = 0
        c = self.config.curve
        self.publish_global_path(c.A, c.B, c.t_res)

    def on_odometry(self, odom: Odometry) -> None:
        self.world_frame = odom.frame_id
        self.robot_frame = odom.child_frame_id
        self.pose_world_robot = odom.pose

    def publish_global_path(self, A: float, B: float, t_res: int) -> Path:
        """Rebuild the global path in full and restart the waypoint search."""
        self.set_global_path(sample_figure_eight(A, B, t_res, frame_id=self.world_frame))
        logger.info("global path rebuilt: A=%.3f B=%.3f t_res=%d (%d poses)", A, B, t_res, len(self.global_path))
        return self.global_path

    def set_global_path(self, path: Path) -> None:
        """Replace the global path with an externally built one."""
        self.global_path = path
        self.current_id = 0

    def _extract_local(self, robot_pose: Pose, n_wp_prev: int, n_wp_post: int) -> Tuple[Path, Pose]:
        path = self.global_path
        n = len(path)
        if n == 0:
            raise InsufficientPathError("global path is empty")
        window = self.config.local.search_window
        wrap = path.closed
        self.current_id = closest_waypoint(robot_pose, path, min(self.current_id, n - 1), window, wrap)
        id_next = next_waypoint(robot_pose, path, self.current_id, window, wrap)
        count = int(n_wp_prev) + int(n_wp_post) + 1
        if wrap and count <= n:
            local = path.wrapped_window((id_next - int(n_wp_prev)) % n, count)
        else:
            local = path.window(max(0, id_next - int(n_wp_prev)), min(n, id_next + int(n_wp_post) + 1))
        return local, path[id_next]

    def publish_local_path(self, robot_pose: Pose, n_wp_prev: int, n_wp_post: int) -> Path:
        """Window of n_wp_prev poses before and n_wp_post after the next waypoint."""
        self.local_path, self.pose_world_goal = self._extract_local(robot_pose, n_wp_prev, n_wp_post)
        return self.local_path

    def _stamped(self, robot_pose: Pose) -> StampedTransform:
        return StampedTransform(
            parent_frame=self.world_frame,
            child_frame=self.robot_frame,
            transform=convert_pose_to_transform(robot_pose),
        )

    def robot_transform(self) -> Optional[StampedTransform]:
        if self.pose_world_robot is None:
            return None
        return self._stamped(self.pose_world_robot)

    def tick(self) -> Optional[PublisherOutput]:
        """Timer callback. Returns None until the first odometry sample arrives."""
        robot = self.pose_world_robot
        if robot is None:
            return None
        n = self.config.local
        local, goal = self._extract_local(robot, n.n_wp_prev, n.n_wp_post)
        self.local_path, self.pose_world_goal = local, goal
        return PublisherOutput(
            global_path=self.global_path,
            local_path=local,
            goal=goal,
            absolute_error=calculate_pose_error(robot, goal),
            relative_error=calculate_pose_error(robot, self.global_path[self.current_id]),
            robot_transform=self._stamped(robot),
        )
