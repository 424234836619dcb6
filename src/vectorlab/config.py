"""
Configuration & Global Constants
================================
This module serves as the central registry for tunable constants shared by the
visualization core and the lesson scenes.

Why is this file needed?
------------------------
1. Consistency: Hit radii, drag sensitivities and zoom limits used to be
   re-derived in every view. Keeping them here makes every lesson behave the
   same way under the mouse.
2. Pacing: Timer intervals for the render loop and for the gradient descent
   stepper live here, so the pedagogical pacing can be tuned in one place.

Exports:
    InteractionSettings: Per-scene interaction parameters.
    log_level_from_env: Resolve the start-up log level.
"""
import logging
import os
from dataclasses import dataclass

# ---- Window ----
WINDOW_WIDTH: int = 1400
WINDOW_HEIGHT: int = 900
PANEL_WIDTH: int = 360

# ---- Camera ----
DEFAULT_SCALE: float = 40.0  # pixels per world unit
MIN_SCALE: float = 10.0
MAX_SCALE: float = 200.0
DEFAULT_PITCH: float = -0.3
DEFAULT_YAW: float = 0.5

# ---- Interaction ----
HANDLE_RADIUS_PX: float = 20.0
ORBIT_SENSITIVITY: float = 0.01  # radians per pixel
ZOOM_IN_FACTOR: float = 1.1
ZOOM_OUT_FACTOR: float = 0.9
WHEEL_NUDGE_STEP: float = 0.5

# ---- Rendering ----
HANDLE_DEPTH_BIAS: float = 100.0

# ---- Timers ----
FRAME_INTERVAL_MS: int = 16
GRADIENT_STEP_INTERVAL_MS: int = 100

# ---- Simulation ----
CONVERGENCE_THRESHOLD: float = 0.001
DIVERGENCE_THRESHOLD: float = 10.0
EIGEN_EPSILON: float = 0.1
COMPOSITION_TICKS_PER_STEP: int = 50
TRANSITION_RATE: float = 0.1
TRANSITION_TOLERANCE: float = 0.005
EIGEN_SWEEP_STEP: float = 0.01
CURL_SPIN_RATE: float = 0.05

LOG_LEVEL_ENV: str = "VECTORLAB_LOG_LEVEL"


@dataclass(frozen=True)
class InteractionSettings:
    """Interaction parameters for one scene."""
    handle_radius: float = HANDLE_RADIUS_PX
    orbit_sensitivity: float = ORBIT_SENSITIVITY
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE


def log_level_from_env(default: int = logging.INFO) -> int:
    """
    Resolve the log level from the VECTORLAB_LOG_LEVEL environment variable.

    Accepts level names ("DEBUG", "info") or numeric values. Unknown values
    fall back to `default`.
    """
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default
