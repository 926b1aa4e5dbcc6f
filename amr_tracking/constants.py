from __future__ import annotations

# Reference curve (figure-eight)
CURVE_A_M: float = 12.0
CURVE_B_M: float = 10.0
CURVE_T_RES: int = 200

# Local path window
LOCAL_N_WP_PREV: int = 10
LOCAL_N_WP_POST: int = 50
LOCAL_SEARCH_WINDOW: int = 20
TRACKER_GOAL_INDEX: int = 11

# Pure pursuit
MAX_STEERING_RAD: float = 0.5
LOOKAHEAD_MIN_M: float = 1.0
MAX_THROTTLE: float = 0.5
THROTTLE_GAIN: float = 1.0
ROBOT_LENGTH_M: float = 0.26
LOOKAHEAD_BY_SPEED: bool = False

# Frames
WORLD_FRAME: str = "world"
ROBOT_FRAME: str = "base_link"

# Simulation
DT: float = 0.05
SIM_MAX_STEPS: int = 2000
ROBOT_V_MAX_MPS: float = 1.0
ROBOT_W_MAX_RPS: float = 1.0
