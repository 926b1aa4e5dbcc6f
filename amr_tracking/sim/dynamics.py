"""Unicycle dynamics used as the plant in closed-loop runs.

Consumes (throttle, steering) as (v, omega), integrates with Euler steps and
reports the result as Odometry, standing in for a ground-truth odometry source.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, sin

from ..constants import ROBOT_FRAME, WORLD_FRAME
from ..geometry import make_pose, wrap_to_pi
from ..types import ControlCommand, Odometry, Twist, Vector3


@dataclass
class UnicycleState:
    """Robot state for unicycle kinematics.

    - x, y: position (meters)
    - theta: heading (radians, wrapped to [-pi, pi))
    - v: applied linear speed (m/s)
    - omega: applied angular speed (rad/s)
    """

    x: float
    y: float
    theta: float
    v: float = 0.0
    omega: float = 0.0


class UnicycleModel:
    """Unicycle model with command limits and Euler integration.

    Interface:
    - reset(state?) -> UnicycleState
    - step(command, dt) -> UnicycleState
    - as_pose() -> (x, y, theta)
    - odometry() -> Odometry
    """

    def __init__(
        self,
        v_max: float,
        w_max: float,
        v_min: float = 0.0,
        w_min: float | None = None,
        world_frame: str = WORLD_FRAME,
        robot_frame: str = ROBOT_FRAME,
    ) -> None:
        self.v_max = float(v_max)
        self.w_max = float(w_max)
        self.v_min = float(v_min)
        self.w_min = float(-w_max if w_min is None else w_min)
        self.world_frame = world_frame
        self.robot_frame = robot_frame
        self._last_state = UnicycleState(0.0, 0.0, 0.0, 0.0, 0.0)

    def clip_action(self, u: tuple[float, float]) -> tuple[float, float]:
        v_cmd, w_cmd = u
        v_applied = min(max(v_cmd, self.v_min), self.v_max)
        w_applied = min(max(w_cmd, self.w_min), self.w_max)
        return v_applied, w_applied

    def reset(self, state: UnicycleState | None = None) -> UnicycleState:
        s = state or UnicycleState(0.0, 0.0, 0.0, 0.0, 0.0)
        theta = wrap_to_pi(s.theta)
        v_applied, w_applied = self.clip_action((s.v, s.omega))
        self._last_state = UnicycleState(s.x, s.y, theta, v_applied, w_applied)
        return self._last_state

    def step(self, command: ControlCommand, dt: float) -> UnicycleState:
        """Apply clipped (throttle, steering) for duration dt."""
        v, w = self.clip_action((command.throttle, command.steering))
        s = self._last_state

        x = s.x + v * cos(s.theta) * dt
        y = s.y + v * sin(s.theta) * dt
        th = wrap_to_pi(s.theta + w * dt)

        self._last_state = UnicycleState(x, y, th, v, w)
        return self._last_state

    def as_pose(self) -> tuple[float, float, float]:
        s = self._last_state
        return (s.x, s.y, s.theta)

    def odometry(self) -> Odometry:
        s = self._last_state
        return Odometry(
            pose=make_pose(s.x, s.y, s.theta),
            twist=Twist(linear=Vector3(s.v, 0.0, 0.0), angular=Vector3(0.0, 0.0, s.omega)),
            frame_id=self.world_frame,
            child_frame_id=self.robot_frame,
        )
