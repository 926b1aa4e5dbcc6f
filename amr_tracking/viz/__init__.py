from .plotting import draw_tracking, plot_tracking

__all__ = [
    "draw_tracking",
    "plot_tracking",
]
