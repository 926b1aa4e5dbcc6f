"""Reference-path tracking core: path geometry, pose errors and pure pursuit."""

from .config import AppConfig, ParamStore, TrackerParams
from .control.path_tracker import PathTracker
from .errors import InsufficientPathError, TrackingError
from .planning.path_publisher import PathPublisher, PublisherOutput

__all__ = [
    "AppConfig",
    "InsufficientPathError",
    "ParamStore",
    "PathPublisher",
    "PathTracker",
    "PublisherOutput",
    "TrackerParams",
    "TrackingError",
]
