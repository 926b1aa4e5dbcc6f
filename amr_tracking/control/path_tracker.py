from __future__ import annotations

from typing import Optional

from ..config import ParamStore, TrackerConfig
from ..errors import InsufficientPathError
from ..types import ControlCommand, Odometry, Path, Pose
from .pure_pursuit import compute_control_outputs


class PathTracker:
    """Pure-pursuit tracker over the latest odometry and local-path goal.

    Odometry and local paths may arrive at different rates; each setter only
    latches its input and `compute` combines whatever is latched. The goal is
    the pose at `goal_index` of the most recent local path.
    """

    def __init__(self, config: TrackerConfig | None = None, params: ParamStore | None = None):
        self.config = config or TrackerConfig()
        self.params = params or ParamStore(self.config.params)
        self.odom_world_robot: Optional[Odometry] = None
        self.pose_world_goal: Optional[Pose] = None
        self.world_frame: Optional[str] = None
        self.robot_frame: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.odom_world_robot is not None and self.pose_world_goal is not None

    def on_odometry(self, odom: Odometry) -> None:
        self.world_frame = odom.frame_id
        self.robot_frame = odom.child_frame_id
        self.odom_world_robot = odom

    def set_goal(self, pose: Pose) -> None:
        self.pose_world_goal = pose

    def on_local_path(self, path: Path) -> Optional[ControlCommand]:
        """Latch the goal from a local path and return this cycle's command."""
        idx = self.config.goal_index
        if len(path) <= idx:
            raise InsufficientPathError(f"local path has {len(path)} poses, goal index is {idx}")
        self.set_goal(path[idx])
        return self.compute()

    def compute(self) -> Optional[ControlCommand]:
        """Command from the latched state, or None if odometry/goal are missing."""
        if self.odom_world_robot is None or self.pose_world_goal is None:
            return None
        return compute_control_outputs(self.odom_world_robot, self.pose_world_goal, self.params.snapshot())
