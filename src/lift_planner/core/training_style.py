"""
Rep and rest prescription by training style.

Strength: lower reps, longer rest.
Balanced: the exercise's default reps unchanged.
Growth:   higher reps, shorter rest.

Adjustments are looked up by the exercise's default reps; a default not
in the table uses the closest key (lower key on a tie).  Rest is read
from REST_MINUTES_BY_REPS and linearly interpolated between keys.
"""

from .config import (
    GROWTH_REP_ADJUSTMENTS,
    MAX_TARGET_REPS,
    MIN_TARGET_REPS,
    REST_MINUTES_BY_REPS,
    STRENGTH_REP_ADJUSTMENTS,
)
from .errors import InvalidInputError
from .models import TrainingStyle


def _closest_key(value: int, table: dict[int, int]) -> int:
    return min(sorted(table), key=lambda k: abs(value - k))


def target_reps(default_reps: int, style: TrainingStyle = TrainingStyle.BALANCED) -> int:
    """
    Adjust an exercise's default reps for the training style.

    Result is clamped to [MIN_TARGET_REPS, MAX_TARGET_REPS] for strength
    and growth; balanced returns default_reps unchanged.

    Raises:
        InvalidInputError: If default_reps is not a positive integer
    """
    if isinstance(default_reps, bool) or not isinstance(default_reps, int) or default_reps <= 0:
        raise InvalidInputError(f"default_reps must be a positive integer, got {default_reps!r}")

    style = TrainingStyle(style)
    if style is TrainingStyle.BALANCED:
        return default_reps

    table = STRENGTH_REP_ADJUSTMENTS if style is TrainingStyle.STRENGTH else GROWTH_REP_ADJUSTMENTS
    adjustment = table.get(default_reps)
    if adjustment is None:
        adjustment = table[_closest_key(default_reps, table)]

    return max(MIN_TARGET_REPS, min(MAX_TARGET_REPS, default_reps + adjustment))


def rest_minutes(reps: int) -> float:
    """
    Rest between sets for a target rep count.

    Below the lowest key or above the highest the end values apply.
    """
    if reps in REST_MINUTES_BY_REPS:
        return REST_MINUTES_BY_REPS[reps]

    keys = sorted(REST_MINUTES_BY_REPS)
    if reps <= keys[0]:
        return REST_MINUTES_BY_REPS[keys[0]]
    if reps >= keys[-1]:
        return REST_MINUTES_BY_REPS[keys[-1]]

    for lower, upper in zip(keys, keys[1:]):
        if lower <= reps <= upper:
            ratio = (reps - lower) / (upper - lower)
            lo_rest = REST_MINUTES_BY_REPS[lower]
            hi_rest = REST_MINUTES_BY_REPS[upper]
            return lo_rest + (hi_rest - lo_rest) * ratio

    return REST_MINUTES_BY_REPS[keys[-1]]


def prescribe(default_reps: int, style: TrainingStyle = TrainingStyle.BALANCED) -> tuple[int, float]:
    """Return (target_reps, rest_minutes) for one slot."""
    reps = target_reps(default_reps, style)
    return reps, rest_minutes(reps)
