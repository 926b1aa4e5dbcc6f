from .dynamics import UnicycleModel, UnicycleState
from .runner import TrackingLog, run_closed_loop

__all__ = [
    "TrackingLog",
    "UnicycleModel",
    "UnicycleState",
    "run_closed_loop",
]
