from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from ..sim.runner import TrackingLog


def draw_tracking(log: TrackingLog, ax) -> None:
    """Reference path (cyan), driven trajectory (blue), start/end markers."""
    ax.clear()
    wp = log.global_path.xy()
    if wp.shape[0]:
        ax.plot(wp[:, 0], wp[:, 1], "c-", linewidth=1.5, alpha=0.9, label="path")
        k = max(1, wp.shape[0] // 30)
        ax.plot(wp[::k, 0], wp[::k, 1], "co", markersize=2, alpha=0.7)

    traj = log.trajectory()
    if traj.shape[0]:
        ax.plot(traj[:, 0], traj[:, 1], "b-", linewidth=1.0, label="robot")
        ax.plot(traj[0, 0], traj[0, 1], "go", markersize=6, label="start")
        x, y, th = log.poses[-1]
        ax.arrow(x, y, 0.5 * np.cos(th), 0.5 * np.sin(th), head_width=0.2, color="b")

    ax.set_aspect("equal")
    ax.set_title("Tracking: path (cyan), robot (blue)")
    ax.legend(loc="upper right")


def plot_tracking(log: TrackingLog, out_path: str | None = None):
    """Two panels: XY trajectory and absolute position error per tick."""
    fig, (ax_xy, ax_err) = plt.subplots(1, 2, figsize=(12, 5))
    draw_tracking(log, ax_xy)
    if log.position_errors:
        ax_err.plot(log.position_errors, "r-", linewidth=1.0, label="position")
        ax_err.plot(np.abs(log.heading_errors), "m-", linewidth=1.0, alpha=0.7, label="|heading|")
    ax_err.set_xlabel("tick")
    ax_err.set_title("Absolute error to goal")
    ax_err.legend(loc="upper right")
    fig.tight_layout()
    if out_path:
        fig.savefig(out_path, dpi=120)
        plt.close(fig)
    return fig
