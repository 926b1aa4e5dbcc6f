"""Plain value types passed between the publisher and the tracker.

Mirrors the shape of the usual robotics messages (pose, odometry, path,
transform) without depending on a middleware.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple

import numpy as np

from .constants import ROBOT_FRAME, WORLD_FRAME


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass(frozen=True)
class Pose:
    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)


@dataclass(frozen=True)
class Twist:
    linear: Vector3 = field(default_factory=Vector3)
    angular: Vector3 = field(default_factory=Vector3)


@dataclass(frozen=True)
class Odometry:
    """Robot pose and body-frame velocity expressed in `frame_id`."""

    pose: Pose = field(default_factory=Pose)
    twist: Twist = field(default_factory=Twist)
    frame_id: str = WORLD_FRAME
    child_frame_id: str = ROBOT_FRAME


@dataclass(frozen=True)
class Path:
    """Ordered sequence of poses; index is the only identity of a waypoint.

    closed: the pose after the last one is the first one (a full lap).
    """

    poses: Tuple[Pose, ...] = ()
    frame_id: str = WORLD_FRAME
    closed: bool = False

    def __post_init__(self) -> None:
        # accept any sequence, store as tuple so the order can't be mutated
        object.__setattr__(self, "poses", tuple(self.poses))

    def __len__(self) -> int:
        return len(self.poses)

    def __getitem__(self, idx: int) -> Pose:
        return self.poses[idx]

    def __iter__(self) -> Iterator[Pose]:
        return iter(self.poses)

    def xy(self) -> np.ndarray:
        """Planar positions as a read-only (N, 2) array."""
        cached = self.__dict__.get("_xy")
        if cached is None:
            if self.poses:
                cached = np.array([[p.position.x, p.position.y] for p in self.poses], dtype=float)
            else:
                cached = np.zeros((0, 2), dtype=float)
            cached.setflags(write=False)
            object.__setattr__(self, "_xy", cached)
        return cached

    def window(self, start: int, stop: int) -> "Path":
        """Contiguous sub-path [start, stop); bounds must lie inside the path."""
        n = len(self.poses)
        if not (0 <= start <= stop <= n):
            raise IndexError(f"window [{start}, {stop}) outside path of length {n}")
        return Path(self.poses[start:stop], frame_id=self.frame_id)

    def wrapped_window(self, start: int, count: int) -> "Path":
        """`count` consecutive poses from `start`, continuing past the end into
        the start of the lap. Only valid on closed paths.
        """
        n = len(self.poses)
        if not self.closed:
            raise IndexError("wrapped window requested on an open path")
        if not (0 <= start < n and 0 <= count <= n):
            raise IndexError(f"wrapped window ({start}, {count}) outside path of length {n}")
        return Path(tuple(self.poses[(start + i) % n] for i in range(count)), frame_id=self.frame_id)


@dataclass(frozen=True)
class PoseError:
    position: float
    heading: float


@dataclass(frozen=True)
class ControlCommand:
    throttle: float
    steering: float


@dataclass(frozen=True)
class Transform:
    translation: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)


@dataclass(frozen=True)
class StampedTransform:
    parent_frame: str
    child_frame: str
    transform: Transform
