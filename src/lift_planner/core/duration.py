"""
Session duration estimate from total set count.

    duration = rest + work + warmup − final-rest removal
             = sets×5 + sets×1 + 3 − 5
             = sets×6 − 2

No rest follows the final set, so the removal only applies once at least
one set exists; zero sets is a zero-minute session rather than −2.

Examples:
    6 sets (Standard)    → 34 min
    5 sets (Express)     → 28 min
    4 sets (Maintenance) → 22 min
"""

from dataclasses import dataclass

from .config import REST_MINUTES_PER_SET, WARMUP_MINUTES, WORK_MINUTES_PER_SET
from .errors import InvalidInputError


@dataclass(frozen=True)
class DurationBreakdown:
    """Components of a duration estimate, all in minutes."""

    rest_time: int
    workout_time: int
    warmup_time: int
    final_rest_removal: int

    @property
    def total_minutes(self) -> int:
        total = self.rest_time + self.workout_time + self.warmup_time - self.final_rest_removal
        return max(0, total)


def _validate_minutes(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative integer, got {value!r}")


def duration_breakdown(
    total_sets: int,
    rest_minutes: int = REST_MINUTES_PER_SET,
    work_minutes: int = WORK_MINUTES_PER_SET,
    warmup_minutes: int = WARMUP_MINUTES,
) -> DurationBreakdown:
    """
    Split a session's estimated duration into its components.

    Args:
        total_sets: Total sets in the session (≥ 0)
        rest_minutes: Rest after each set
        work_minutes: Working time per set
        warmup_minutes: Fixed warmup

    Returns:
        DurationBreakdown; all zeros when total_sets is 0

    Raises:
        InvalidInputError: If any argument is negative or not an integer
    """
    _validate_minutes(total_sets, "total_sets")
    _validate_minutes(rest_minutes, "rest_minutes")
    _validate_minutes(work_minutes, "work_minutes")
    _validate_minutes(warmup_minutes, "warmup_minutes")

    if total_sets == 0:
        return DurationBreakdown(0, 0, 0, 0)

    return DurationBreakdown(
        rest_time=total_sets * rest_minutes,
        workout_time=total_sets * work_minutes,
        warmup_time=warmup_minutes,
        final_rest_removal=rest_minutes,
    )


def estimate_duration(total_sets: int) -> int:
    """
    Estimated session length in minutes: ``total_sets*6 - 2``, or 0 for no sets.

    Raises:
        InvalidInputError: If total_sets is negative or not an integer
    """
    return duration_breakdown(total_sets).total_minutes
