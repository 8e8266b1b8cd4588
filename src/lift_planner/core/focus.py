"""
Body-part focus rotation.

next_focus() is a pure function of the schedule history: the focus due
next is the one least recently scheduled, with never-scheduled focuses
first.  Ties fall back to the canonical rotation order, so an empty
history always starts at the first focus of the rotation.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from .config import FOCUS_ROTATION, REST_WEEKDAY, WEEKDAY_FOCUS
from .errors import InvalidInputError
from .models import ScheduleEntry


def last_scheduled_dates(
    history: Sequence[ScheduleEntry],
    rotation: Sequence[str] = FOCUS_ROTATION,
) -> dict[str, str | None]:
    """
    Map each focus in the rotation to the date it was last scheduled.

    Entries for focuses outside the rotation are ignored.  Planned and
    completed entries count alike.

    Returns:
        {focus: ISO date or None if never scheduled}
    """
    last: dict[str, str | None] = {f: None for f in rotation}
    for entry in history:
        if entry.focus not in last:
            continue
        prev = last[entry.focus]
        if prev is None or entry.date > prev:
            last[entry.focus] = entry.date
    return last


def next_focus(
    history: Sequence[ScheduleEntry],
    rotation: Sequence[str] = FOCUS_ROTATION,
) -> str:
    """
    Return the body-part focus that is due next.

    Args:
        history: Schedule entries in any order
        rotation: Canonical focus order (also the tie-break order)

    Returns:
        The focus with no entry at all, or else the one whose latest entry
        is oldest

    Raises:
        InvalidInputError: If rotation is empty
    """
    if not rotation:
        raise InvalidInputError("Focus rotation must contain at least one focus")

    last = last_scheduled_dates(history, rotation)
    order = {f: i for i, f in reversed(list(enumerate(rotation)))}

    # Never-scheduled ("") sorts before any ISO date.
    return min(last, key=lambda f: (last[f] or "", order[f]))


def _weekday(day: date | datetime | int) -> int:
    if isinstance(day, (date, datetime)):
        return day.weekday()
    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        raise InvalidInputError(f"weekday must be 0 (Monday) to 6 (Sunday), got {day!r}")
    return day


def is_rest_day(day: date | datetime | int) -> bool:
    """True for Sunday (weekday 6)."""
    return _weekday(day) == REST_WEEKDAY


def focus_for_weekday(day: date | datetime | int) -> str | None:
    """
    Focus of the fixed weekly template for a day.

    Monday Chest, Tuesday Arms, Wednesday Shoulders, Thursday Back,
    Friday and Saturday Legs.  Sunday is a rest day and returns None.
    """
    wd = _weekday(day)
    if wd == REST_WEEKDAY:
        return None
    return WEEKDAY_FOCUS[wd]
