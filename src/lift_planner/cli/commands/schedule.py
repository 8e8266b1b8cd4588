"""Schedule commands: log, complete, schedule."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.errors import PlannerError
from ...core.models import ScheduleEntry
from ...core.schedule import week_bounds
from ...core.session_rules import parse_session_type
from ...io.serializers import validate_date
from .. import views
from ..app import SchedulePathOption, app, get_tracker


def _today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


def _checked_date(value: str | None) -> str:
    day = value or _today()
    try:
        return validate_date(day)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command()
def log(
    focus: Annotated[str, typer.Option("--focus", "-f", help="Body-part focus of the session")],
    session_type: Annotated[
        str,
        typer.Option("--session-type", "-s", help="Standard (default), Express or Maintenance"),
    ] = "Standard",
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    completed: Annotated[
        bool,
        typer.Option("--completed/--planned", help="Log as already completed (default) or planned"),
    ] = True,
    exercises: Annotated[
        Optional[str],
        typer.Option("--exercises", "-x", help="Comma-separated exercise ids performed"),
    ] = None,
    schedule_path: SchedulePathOption = None,
) -> None:
    """
    Add a session to the schedule log.
    """
    day = _checked_date(date)
    try:
        st = parse_session_type(session_type)
        ids = tuple(x.strip() for x in (exercises or "").split(",") if x.strip())
        entry = ScheduleEntry(
            date=day,
            focus=focus.strip(),
            session_type=st,
            completed=completed,
            exercise_ids=ids,
        )
    except (PlannerError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    get_tracker(schedule_path).record(entry)
    status = "completed" if completed else "planned"
    views.print_success(f"Logged {status} {entry.focus} ({st.value}) on {day}")


@app.command()
def complete(
    focus: Annotated[str, typer.Option("--focus", "-f", help="Focus of the planned session")],
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    schedule_path: SchedulePathOption = None,
) -> None:
    """
    Mark a planned session as completed.
    """
    day = _checked_date(date)
    tracker = get_tracker(schedule_path)
    try:
        entry = tracker.mark_completed(day, focus.strip())
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success(f"Completed {entry.focus} ({entry.session_type.value}) on {entry.date}")


@app.command()
def schedule(
    start: Annotated[
        Optional[str],
        typer.Option("--start", help="First day of the window (YYYY-MM-DD)"),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--end", help="Day after the window (YYYY-MM-DD)"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Show the whole log"),
    ] = False,
    schedule_path: SchedulePathOption = None,
) -> None:
    """
    Show scheduled and completed sessions (default: the current week).
    """
    tracker = get_tracker(schedule_path)
    try:
        if show_all:
            entries = tracker.history
            title = "Schedule"
        elif start or end:
            lo = _checked_date(start) if start else "0001-01-01"
            hi = _checked_date(end) if end else "9999-12-31"
            entries = tracker.entries_in_window(lo, hi)
            title = f"Schedule {start or '…'} → {end or '…'}"
        else:
            lo, hi = week_bounds(_today())
            entries = tracker.entries_in_window(lo, hi)
            title = f"Week of {lo}"
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_schedule(entries, title)
