"""
JSON serialization for schedule entries and generated plans.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
from typing import Any

from ..core.errors import ValidationError
from ..core.models import (
    PlanSlot,
    ScheduleEntry,
    SessionType,
    WorkoutPlan,
    validate_iso_date,
)


def validate_date(date_str: str) -> str:
    """
    Validate an ISO date string.

    Args:
        date_str: Date string to validate

    Returns:
        The same YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    try:
        validate_iso_date(date_str)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return date_str


def validate_session_type(session_type: str) -> SessionType:
    """
    Validate a stored session type value.

    Raises:
        ValidationError: If session type is not one of the SessionType values
    """
    try:
        return SessionType(session_type)
    except ValueError as e:
        valid = tuple(st.value for st in SessionType)
        raise ValidationError(
            f"Invalid session_type: {session_type}. Must be one of {valid}"
        ) from e


def schedule_entry_to_dict(entry: ScheduleEntry) -> dict[str, Any]:
    """
    Convert ScheduleEntry to JSON-compatible dict.

    ``exercise_ids`` is omitted when empty to keep lines short.
    """
    data: dict[str, Any] = {
        "date": entry.date,
        "focus": entry.focus,
        "session_type": entry.session_type.value,
        "completed": entry.completed,
    }
    if entry.exercise_ids:
        data["exercise_ids"] = list(entry.exercise_ids)
    return data


def dict_to_schedule_entry(data: dict[str, Any]) -> ScheduleEntry:
    """
    Convert dict to ScheduleEntry.

    Raises:
        ValidationError: If a field is missing or invalid
    """
    for key in ("date", "focus", "session_type"):
        if key not in data:
            raise ValidationError(f"Schedule entry missing field: {key}")

    date = validate_date(data["date"])
    session_type = validate_session_type(data["session_type"])

    raw_ids = data.get("exercise_ids", [])
    if not isinstance(raw_ids, list) or not all(isinstance(i, str) for i in raw_ids):
        raise ValidationError("exercise_ids must be a list of strings")

    completed = data.get("completed", False)
    if not isinstance(completed, bool):
        raise ValidationError(f"completed must be true or false, got {completed!r}")

    focus = data["focus"]
    if not isinstance(focus, str) or not focus.strip():
        raise ValidationError(f"Invalid focus: {focus!r}")

    return ScheduleEntry(
        date=date,
        focus=focus,
        session_type=session_type,
        completed=completed,
        exercise_ids=tuple(raw_ids),
    )


def schedule_entry_to_json_line(entry: ScheduleEntry) -> str:
    """Serialize one entry as a single compact JSON line (no newline)."""
    return json.dumps(schedule_entry_to_dict(entry), separators=(",", ":"))


def plan_slot_to_dict(slot: PlanSlot) -> dict[str, Any]:
    """Convert PlanSlot to JSON-compatible dict."""
    ex = slot.exercise
    return {
        "role": slot.role.value,
        "exercise_id": ex.exercise_id,
        "display_name": ex.display_name,
        "equipment": sorted(ex.equipment),
        "sets": slot.set_count,
        "target_reps": slot.target_reps,
        "rest_minutes": slot.rest_minutes,
    }


def workout_plan_to_dict(plan: WorkoutPlan) -> dict[str, Any]:
    """
    Convert WorkoutPlan to JSON-compatible dict for machine-readable output.

    Args:
        plan: Plan to convert

    Returns:
        Dict representation
    """
    return {
        "session_type": plan.session_type.value,
        "focus": plan.focus,
        "training_style": plan.training_style.value,
        "total_sets": plan.total_sets,
        "estimated_duration_minutes": plan.estimated_duration_minutes,
        "slots": [plan_slot_to_dict(s) for s in plan.slots],
    }
