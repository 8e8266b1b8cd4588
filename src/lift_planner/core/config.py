"""
Configuration constants for the workout planning engine.

All adjustable parameters are centralized here for easy tuning.  The CLI
can override a subset of them from ~/.lift-planner/engine.yaml (see
core/engine/config_loader.py); library functions take them as explicit
parameters with these values as defaults.
"""

from pathlib import Path
from typing import Final

# =============================================================================
# SESSION DURATION
# =============================================================================

REST_MINUTES_PER_SET: Final[int] = 5  # Rest after each set (10-rep sets)
WORK_MINUTES_PER_SET: Final[int] = 1  # Time under load per set
WARMUP_MINUTES: Final[int] = 3  # Fixed warmup before the first set

# =============================================================================
# FOCUS ROTATION
# =============================================================================

# Canonical rotation order; also the tie-break order for next_focus().
FOCUS_ROTATION: Final[tuple[str, ...]] = ("Chest", "Arms", "Shoulders", "Back", "Legs")

# Weekday template (Monday=0 ... Saturday=5).  Sunday is a rest day.
WEEKDAY_FOCUS: Final[dict[int, str]] = {
    0: "Chest",
    1: "Arms",
    2: "Shoulders",
    3: "Back",
    4: "Legs",
    5: "Legs",
}
REST_WEEKDAY: Final[int] = 6

# Separator for combined focuses such as "Back & Triceps".
COMBINED_FOCUS_SEPARATOR: Final[str] = "&"

# =============================================================================
# TRAINING STYLE (rep and rest prescription)
# =============================================================================

MIN_TARGET_REPS: Final[int] = 2
MAX_TARGET_REPS: Final[int] = 20

# Rep adjustment keyed by default reps.  Strength lowers reps for heavier
# loads; growth raises them for hypertrophy.
STRENGTH_REP_ADJUSTMENTS: Final[dict[int, int]] = {
    2: 0,
    4: -2,
    6: -2,
    8: -2,
    10: -4,
    12: -4,
    14: -4,
    16: -4,
    18: -4,
    20: -4,
}

GROWTH_REP_ADJUSTMENTS: Final[dict[int, int]] = {
    2: 6,
    4: 6,
    6: 6,
    8: 6,
    10: 6,
    12: 4,
    14: 4,
    16: 4,
    18: 2,
    20: 0,
}

# Rest in minutes by target reps; values between keys are interpolated.
REST_MINUTES_BY_REPS: Final[dict[int, float]] = {
    2: 7.0,
    4: 6.5,
    6: 6.0,
    8: 5.5,
    10: 5.0,
    12: 4.5,
    14: 4.0,
    16: 4.0,
    18: 3.5,
    20: 3.0,
}

# =============================================================================
# STORAGE
# =============================================================================

USER_CONFIG_DIRNAME: Final[str] = ".lift-planner"
SCHEDULE_FILENAME: Final[str] = "schedule.jsonl"


def user_config_dir() -> Path:
    """Return ~/.lift-planner (not created)."""
    return Path.home() / USER_CONFIG_DIRNAME
