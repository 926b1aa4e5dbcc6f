"""Closed-loop run: publisher -> tracker -> unicycle -> odometry -> ..."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..config import AppConfig, ParamStore
from ..control.path_tracker import PathTracker
from ..errors import TrackingError
from ..geometry import get_yaw_from_orientation
from ..planning.path_publisher import PathPublisher
from ..types import ControlCommand, Path
from .dynamics import UnicycleModel, UnicycleState

logger = logging.getLogger(__name__)


@dataclass
class TrackingLog:
    global_path: Path
    poses: List[Tuple[float, float, float]] = field(default_factory=list)
    commands: List[ControlCommand] = field(default_factory=list)
    position_errors: List[float] = field(default_factory=list)
    heading_errors: List[float] = field(default_factory=list)
    relative_errors: List[float] = field(default_factory=list)
    waypoint_ids: List[int] = field(default_factory=list)
    skipped: int = 0

    def trajectory(self) -> np.ndarray:
        """Robot positions as (N, 2)."""
        if not self.poses:
            return np.zeros((0, 2), dtype=float)
        return np.asarray(self.poses, dtype=float)[:, :2]

    def summary(self) -> dict:
        errs = np.asarray(self.position_errors, dtype=float)
        return {
            "steps": len(self.poses),
            "commands": len(self.commands),
            "skipped": int(self.skipped),
            "mean_position_error": float(errs.mean()) if errs.size else float("nan"),
            "max_position_error": float(errs.max()) if errs.size else float("nan"),
            "mean_path_deviation": float(np.mean(self.relative_errors)) if self.relative_errors else float("nan"),
        }


def initial_state(publisher: PathPublisher) -> UnicycleState:
    """Start on the first waypoint, facing along the path."""
    p0 = publisher.global_path[0]
    return UnicycleState(p0.position.x, p0.position.y, get_yaw_from_orientation(p0.orientation))


def run_closed_loop(
    cfg: AppConfig,
    steps: Optional[int] = None,
    params: Optional[ParamStore] = None,
    start: Optional[UnicycleState] = None,
) -> TrackingLog:
    """Drive the unicycle along the reference path for `steps` ticks.

    Cycles that raise a TrackingError produce no command; the robot keeps its
    last applied velocity and the next tick retries.
    """
    publisher = PathPublisher(cfg.publisher)
    tracker = PathTracker(cfg.tracker, params=params)
    model = UnicycleModel(
        v_max=cfg.sim.v_max,
        w_max=cfg.sim.w_max,
        world_frame=cfg.publisher.world_frame,
        robot_frame=cfg.publisher.robot_frame,
    )
    if start is None:
        start = initial_state(publisher) if cfg.sim.start_at_path else UnicycleState(0.0, 0.0, 0.0)
    model.reset(start)

    log = TrackingLog(global_path=publisher.global_path)
    n_steps = int(cfg.sim.max_steps if steps is None else steps)
    last = ControlCommand(0.0, 0.0)
    for k in range(n_steps):
        odom = model.odometry()
        publisher.on_odometry(odom)
        tracker.on_odometry(odom)
        try:
            out = publisher.tick()
            cmd = tracker.on_local_path(out.local_path) if out is not None else None
        except TrackingError as exc:
            logger.warning("step %d skipped: %s", k, exc)
            log.skipped += 1
            cmd = None
            out = None
        if out is not None:
            log.position_errors.append(out.absolute_error.position)
            log.heading_errors.append(out.absolute_error.heading)
            log.relative_errors.append(out.relative_error.position)
            log.waypoint_ids.append(publisher.current_id)
        if cmd is not None:
            log.commands.append(cmd)
            last = cmd
        model.step(last, cfg.sim.dt)
        log.poses.append(model.as_pose())
    return log
