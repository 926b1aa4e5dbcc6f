"""Closed-loop tracking run using Hydra config composition.

Builds the figure-eight reference path, drives a unicycle along it with the
pure-pursuit tracker and prints an error summary. Saves a resolved config
snapshot (resolved.yaml) in the Hydra run directory alongside the plot.

Example:
    python scripts/run_tracking.py tracker.params.throttle_gain=0.8 sim.max_steps=4000 run.plot=tracking.png
"""

from __future__ import annotations

import logging
import os

from omegaconf import DictConfig, OmegaConf
import hydra

from amr_tracking.config import AppConfig
from amr_tracking.sim.runner import run_closed_loop


@hydra.main(config_path="../configs", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    raw = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(raw, dict):
        raise TypeError(f"Expected mapping config, got {type(raw)}")
    run_cfg = raw.get("run", {}) or {}
    logging.getLogger("amr_tracking").setLevel(str(run_cfg.get("log_level", "INFO")).upper())

    app_cfg = AppConfig.from_dict(raw)

    with open("resolved.yaml", "w", encoding="utf-8") as f:
        f.write(OmegaConf.to_yaml(cfg, resolve=True))
    print(f"[INFO] Run outputs: {os.getcwd()}")

    log = run_closed_loop(app_cfg)
    s = log.summary()
    print(
        f"[INFO] steps={s['steps']} commands={s['commands']} skipped={s['skipped']} "
        f"mean_err={s['mean_position_error']:.3f}m max_err={s['max_position_error']:.3f}m "
        f"path_dev={s['mean_path_deviation']:.3f}m"
    )

    plot_path = run_cfg.get("plot")
    if plot_path:
        from amr_tracking.viz.plotting import plot_tracking

        plot_tracking(log, str(plot_path))
        print(f"[INFO] Saved plot: {os.path.abspath(str(plot_path))}")


if __name__ == "__main__":
    main()
