"""
Data models for lift-planner.

Catalog entries, slot templates, generated plans and schedule entries.
Everything the planner produces is frozen; the only state that changes
over time is the completed flag on a ScheduleEntry, and even that is
done by replacing the entry rather than mutating it.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class RoleCategory(str, Enum):
    """Priority of an exercise within a workout (slot position, not difficulty)."""

    MAJOR = "Major"
    MINOR = "Minor"
    TERTIARY = "Tertiary"


class SessionType(str, Enum):
    """Session volume variant."""

    STANDARD = "Standard"
    EXPRESS = "Express"
    MAINTENANCE = "Maintenance"


class TrainingStyle(str, Enum):
    """Rep/rest bias applied to every slot of a plan."""

    STRENGTH = "strength"
    BALANCED = "balanced"
    GROWTH = "growth"


# Equipment identifiers available to the user for one session.
EquipmentSet = frozenset[str]


def validate_iso_date(date_str: str) -> None:
    """Raise ValueError unless date_str is a real YYYY-MM-DD date."""
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass(frozen=True)
class Exercise:
    """
    One immutable catalog entry.

    ``equipment`` lists every item the exercise requires; an empty set
    means bodyweight.  ``roles`` lists the slot categories the exercise
    may fill.
    """

    exercise_id: str
    display_name: str
    body_parts: frozenset[str]
    equipment: frozenset[str]
    roles: frozenset[RoleCategory]
    default_reps: int = 10
    position: str = ""
    push_pull: str = ""

    def __post_init__(self) -> None:
        if not self.exercise_id:
            raise ValueError("exercise_id must be non-empty")
        if not self.body_parts:
            raise ValueError(f"{self.exercise_id}: body_parts must be non-empty")
        if not self.roles:
            raise ValueError(f"{self.exercise_id}: roles must be non-empty")
        if self.default_reps <= 0:
            raise ValueError(f"{self.exercise_id}: default_reps must be positive")

    @property
    def is_bodyweight(self) -> bool:
        return not self.equipment


@dataclass(frozen=True)
class SlotSpec:
    """One template position: an exercise of ``role`` performed for ``set_count`` sets."""

    role: RoleCategory
    set_count: int

    def __post_init__(self) -> None:
        if self.set_count <= 0:
            raise ValueError("set_count must be positive")


@dataclass(frozen=True)
class PlanSlot:
    """A resolved line of a generated plan."""

    role: RoleCategory
    exercise: Exercise
    set_count: int
    target_reps: int = 10
    rest_minutes: float = 5.0


@dataclass(frozen=True)
class WorkoutPlan:
    """
    An ordered workout for one session.

    ``total_sets`` is the sum of the slot set counts and
    ``estimated_duration_minutes`` is derived from it alone.
    """

    session_type: SessionType
    focus: str
    slots: tuple[PlanSlot, ...]
    total_sets: int
    estimated_duration_minutes: int
    training_style: TrainingStyle = TrainingStyle.BALANCED

    def __post_init__(self) -> None:
        if self.total_sets != sum(s.set_count for s in self.slots):
            raise ValueError("total_sets must equal the sum of slot set counts")

    @property
    def exercise_ids(self) -> tuple[str, ...]:
        """Exercise ids in slot order."""
        return tuple(s.exercise.exercise_id for s in self.slots)

    def sets_for_role(self, role: RoleCategory) -> int:
        """Total sets prescribed for one role category."""
        return sum(s.set_count for s in self.slots if s.role == role)


@dataclass(frozen=True)
class ScheduleEntry:
    """
    A scheduled or completed session in the weekly log.

    ``exercise_ids`` records what the session contained so the next plan
    for the same focus can prefer different exercises.
    """

    date: str  # ISO format: YYYY-MM-DD
    focus: str
    session_type: SessionType
    completed: bool = False
    exercise_ids: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        validate_iso_date(self.date)
        if not self.focus:
            raise ValueError("focus must be non-empty")
        if not isinstance(self.session_type, SessionType):
            raise ValueError(f"Invalid session_type: {self.session_type}")

    def mark_completed(self) -> "ScheduleEntry":
        """Return a copy of this entry with the completed flag set."""
        return replace(self, completed=True)

    @classmethod
    def from_plan(cls, date: str, plan: WorkoutPlan, completed: bool = False) -> "ScheduleEntry":
        """Build the log entry for a generated plan."""
        return cls(
            date=date,
            focus=plan.focus,
            session_type=plan.session_type,
            completed=completed,
            exercise_ids=plan.exercise_ids,
        )
