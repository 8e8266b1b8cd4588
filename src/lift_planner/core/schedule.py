"""
Weekly schedule tracker.

An append-only log of ScheduleEntry records.  Entries are never removed;
the only change allowed after recording is flipping an entry's completed
flag.  Storage is delegated to a ScheduleStore so the same tracker works
in memory (tests, one-off planning) or over the JSONL file store.

The tracker does not serialise concurrent writers; callers sharing one
store across threads or processes must order their appends themselves.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Protocol, Sequence

from .models import ScheduleEntry, validate_iso_date


class ScheduleStore(Protocol):
    """Persistence interface used by ScheduleTracker."""

    def load_entries(self) -> list[ScheduleEntry]:
        ...

    def append_entry(self, entry: ScheduleEntry) -> None:
        ...

    def replace_entries(self, entries: Sequence[ScheduleEntry]) -> None:
        ...


class InMemoryScheduleStore:
    """ScheduleStore kept in a Python list."""

    def __init__(self, entries: Sequence[ScheduleEntry] = ()):
        self._entries: list[ScheduleEntry] = list(entries)

    def load_entries(self) -> list[ScheduleEntry]:
        return list(self._entries)

    def append_entry(self, entry: ScheduleEntry) -> None:
        self._entries.append(entry)

    def replace_entries(self, entries: Sequence[ScheduleEntry]) -> None:
        self._entries = list(entries)


def _iso(day: str | date | datetime) -> str:
    if isinstance(day, datetime):
        return day.strftime("%Y-%m-%d")
    if isinstance(day, date):
        return day.isoformat()
    validate_iso_date(day)
    return day


def week_bounds(day: str | date | datetime) -> tuple[str, str]:
    """Return [Monday, next Monday) of the week containing ``day`` as ISO dates."""
    d = datetime.strptime(_iso(day), "%Y-%m-%d")
    monday = d - timedelta(days=d.weekday())
    return monday.strftime("%Y-%m-%d"), (monday + timedelta(days=7)).strftime("%Y-%m-%d")


class ScheduleTracker:
    """
    Records planned and completed sessions and answers window queries.

    The history it returns is the sole input to next_focus() and the
    variety policy of generate_plan().
    """

    def __init__(self, store: ScheduleStore | None = None):
        self.store: ScheduleStore = store if store is not None else InMemoryScheduleStore()

    def record(self, entry: ScheduleEntry) -> None:
        """Append an entry to the log."""
        self.store.append_entry(entry)

    def mark_completed(self, day: str | date | datetime, focus: str) -> ScheduleEntry:
        """
        Set the completed flag on the entry for (day, focus).

        If several entries match, the earliest-recorded one that is not yet
        completed is marked.

        Returns:
            The updated entry

        Raises:
            KeyError: If no entry matches
        """
        day_str = _iso(day)
        entries = self.store.load_entries()
        matches = [
            i for i, e in enumerate(entries) if e.date == day_str and e.focus == focus
        ]
        if not matches:
            raise KeyError(f"No scheduled session for {focus} on {day_str}")

        idx = next((i for i in matches if not entries[i].completed), matches[0])
        updated = entries[idx].mark_completed()
        if updated != entries[idx]:
            entries[idx] = updated
            self.store.replace_entries(entries)
        return updated

    @property
    def history(self) -> list[ScheduleEntry]:
        """All entries, ascending by date (recording order within a date)."""
        return sorted(self.store.load_entries(), key=lambda e: e.date)

    def entries_in_window(
        self,
        start: str | date | datetime,
        end: str | date | datetime,
    ) -> list[ScheduleEntry]:
        """
        Entries with ``start <= date < end``, ascending by date.

        Args:
            start: First day of the window (inclusive)
            end: Day after the window (exclusive)
        """
        lo, hi = _iso(start), _iso(end)
        return [e for e in self.history if lo <= e.date < hi]

    def entries_for_week(self, day: str | date | datetime) -> list[ScheduleEntry]:
        """Entries of the Monday-based week containing ``day``."""
        return self.entries_in_window(*week_bounds(day))

    def last_completed(self, focus: str) -> ScheduleEntry | None:
        """Most recent completed entry for a focus, or None."""
        return last_completed_entry(self.history, focus)


def last_completed_entry(history: Sequence[ScheduleEntry], focus: str) -> ScheduleEntry | None:
    """
    Most recent completed entry for ``focus`` in ``history``.

    On equal dates the later entry in the sequence wins.
    """
    best: ScheduleEntry | None = None
    for entry in history:
        if entry.completed and entry.focus == focus:
            if best is None or entry.date >= best.date:
                best = entry
    return best
