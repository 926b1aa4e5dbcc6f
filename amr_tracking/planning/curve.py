"""Parametric reference curve sampled into a global path."""

from __future__ import annotations

from math import atan2, pi
from typing import List

import numpy as np

from ..constants import WORLD_FRAME
from ..geometry import make_pose
from ..types import Path


def figure_eight_xy(A: float, B: float, t: np.ndarray) -> np.ndarray:
    """x = A sin(t) cos(t), y = B sin(t); returns (N, 2)."""
    t = np.asarray(t, dtype=float)
    return np.stack([A * np.sin(t) * np.cos(t), B * np.sin(t)], axis=1)


def curve_parameters(t_res: int) -> np.ndarray:
    """t_k = k * pi / t_res for k = 0..2*t_res-1 (one closed lap, t in [0, 2pi)).

    Computed from the integer index rather than accumulated so repeated calls
    give bit-identical values.
    """
    n = int(t_res)
    if n <= 0:
        raise ValueError("t_res must be > 0")
    return np.arange(2 * n, dtype=float) * (pi / n)


def chord_headings(xy: np.ndarray, closed: bool = False) -> List[float]:
    """Heading of the chord to the next sample.

    On a closed path the last sample points back at the first; otherwise it
    repeats the previous heading.
    """
    n = xy.shape[0]
    if n == 0:
        return []
    if n == 1:
        return [0.0]
    if closed:
        d = np.roll(xy, -1, axis=0) - xy
        return [float(atan2(dy, dx)) for dx, dy in d]
    d = xy[1:] - xy[:-1]
    yaws = [float(atan2(dy, dx)) for dx, dy in d]
    yaws.append(yaws[-1])
    return yaws


def sample_figure_eight(A: float, B: float, t_res: int, frame_id: str = WORLD_FRAME) -> Path:
    """Sample one lap of the figure-eight into an ordered Path (increasing t).

    The lap is closed: the successor of the last pose is the first one.
    """
    xy = figure_eight_xy(float(A), float(B), curve_parameters(t_res))
    yaws = chord_headings(xy, closed=True)
    poses = [make_pose(x, y, yaw) for (x, y), yaw in zip(xy.tolist(), yaws)]
    return Path(tuple(poses), frame_id=frame_id, closed=True)
