from .curve import figure_eight_xy, sample_figure_eight
from .path_publisher import PathPublisher, PublisherOutput
from .waypoints import closest_waypoint, next_waypoint

__all__ = [
    "PathPublisher",
    "PublisherOutput",
    "closest_waypoint",
    "figure_eight_xy",
    "next_waypoint",
    "sample_figure_eight",
]
