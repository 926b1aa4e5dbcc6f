from .path_tracker import PathTracker
from .pure_pursuit import (
    compute_control_outputs,
    compute_lookahead_distance,
    compute_steering,
    compute_throttle,
)

__all__ = [
    "PathTracker",
    "compute_control_outputs",
    "compute_lookahead_distance",
    "compute_steering",
    "compute_throttle",
]
