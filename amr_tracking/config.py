from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict
import threading

from .constants import (
    CURVE_A_M,
    CURVE_B_M,
    CURVE_T_RES,
    DT,
    LOCAL_N_WP_POST,
    LOCAL_N_WP_PREV,
    LOCAL_SEARCH_WINDOW,
    LOOKAHEAD_BY_SPEED,
    MAX_THROTTLE,
    ROBOT_FRAME,
    ROBOT_LENGTH_M,
    ROBOT_V_MAX_MPS,
    ROBOT_W_MAX_RPS,
    SIM_MAX_STEPS,
    THROTTLE_GAIN,
    TRACKER_GOAL_INDEX,
    WORLD_FRAME,
)


@dataclass
class CurveConfig:
    A: float = CURVE_A_M
    B: float = CURVE_B_M
    t_res: int = CURVE_T_RES

    def __post_init__(self) -> None:
        assert self.t_res > 0, "t_res must be > 0"


@dataclass
class LocalPathConfig:
    n_wp_prev: int = LOCAL_N_WP_PREV
    n_wp_post: int = LOCAL_N_WP_POST
    search_window: int = LOCAL_SEARCH_WINDOW  # waypoints past the last match searched each tick

    def __post_init__(self) -> None:
        assert self.n_wp_prev >= 0, "n_wp_prev must be >= 0"
        assert self.n_wp_post >= 0, "n_wp_post must be >= 0"
        assert self.search_window > 0, "search_window must be > 0"


@dataclass
class PublisherConfig:
    curve: CurveConfig = field(default_factory=CurveConfig)
    local: LocalPathConfig = field(default_factory=LocalPathConfig)
    world_frame: str = WORLD_FRAME
    robot_frame: str = ROBOT_FRAME


@dataclass(frozen=True)
class TrackerParams:
    """Runtime-tunable pure-pursuit parameters.

    Frozen: a reconfiguration builds a new instance instead of mutating the
    one a running cycle may be holding.
    """

    max_throttle: float = MAX_THROTTLE
    throttle_gain: float = THROTTLE_GAIN
    robot_length: float = ROBOT_LENGTH_M
    lookahead_distance: bool = LOOKAHEAD_BY_SPEED

    def __post_init__(self) -> None:
        assert self.max_throttle >= 0.0, "max_throttle must be >= 0"
        assert self.throttle_gain >= 0.0, "throttle_gain must be >= 0"
        assert self.robot_length > 0.0, "robot_length must be > 0"


class ParamStore:
    """Holds the active TrackerParams snapshot.

    Writers validate a complete new snapshot and swap the reference; readers
    take one snapshot per cycle. A cycle that overlaps an update sees the
    previous snapshot, never a mix of old and new fields.
    """

    def __init__(self, params: TrackerParams | None = None):
        self._params = params or TrackerParams()
        self._write_lock = threading.Lock()

    def snapshot(self) -> TrackerParams:
        return self._params

    def update(self, **changes: Any) -> TrackerParams:
        with self._write_lock:
            unknown = set(changes) - set(TrackerParams.__dataclass_fields__)
            if unknown:
                raise KeyError(f"unknown tracker parameters: {sorted(unknown)}")
            # replace() re-runs __post_init__, so a bad value leaves _params untouched
            new = replace(self._params, **changes)
            self._params = new
            return new


@dataclass
class TrackerConfig:
    params: TrackerParams = field(default_factory=TrackerParams)
    goal_index: int = TRACKER_GOAL_INDEX

    def __post_init__(self) -> None:
        assert self.goal_index >= 0, "goal_index must be >= 0"


@dataclass
class SimConfig:
    dt: float = DT
    max_steps: int = SIM_MAX_STEPS
    v_max: float = ROBOT_V_MAX_MPS
    w_max: float = ROBOT_W_MAX_RPS
    start_at_path: bool = True

    def __post_init__(self) -> None:
        assert self.dt > 0.0, "dt must be > 0"
        assert self.max_steps > 0, "max_steps must be > 0"
        assert self.v_max > 0.0, "v_max must be > 0"
        assert self.w_max > 0.0, "w_max must be > 0"


@dataclass
class AppConfig:
    publisher: PublisherConfig = field(default_factory=PublisherConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    sim: SimConfig = field(default_factory=SimConfig)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "AppConfig":
        d = cfg or {}
        pub = d.get("publisher", {})
        trk = d.get("tracker", {})
        # Allow tracker params either nested under "params" or flat
        params = dict(trk.get("params", {}))
        for name in TrackerParams.__dataclass_fields__:
            if name in trk:
                params[name] = trk[name]
        return cls(
            publisher=PublisherConfig(
                curve=CurveConfig(**pub.get("curve", {})),
                local=LocalPathConfig(**pub.get("local", {})),
                world_frame=pub.get("world_frame", WORLD_FRAME),
                robot_frame=pub.get("robot_frame", ROBOT_FRAME),
            ),
            tracker=TrackerConfig(
                params=TrackerParams(**params),
                goal_index=trk.get("goal_index", TRACKER_GOAL_INDEX),
            ),
            sim=SimConfig(**d.get("sim", {})),
        )
