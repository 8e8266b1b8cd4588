"""Planning commands: plan, explain, duration, next-focus."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.duration import duration_breakdown
from ...core.engine.config_loader import focus_rotation_from
from ...core.equipment import normalize_equipment, unknown_equipment
from ...core.errors import PlannerError
from ...core.focus import focus_for_weekday, next_focus
from ...core.models import ScheduleEntry, SessionType, TrainingStyle
from ...core.planner import explain_plan, generate_plan
from ...core.session_rules import parse_session_type
from ...io.serializers import validate_date, workout_plan_to_dict
from .. import views
from ..app import CatalogOption, SchedulePathOption, app, get_catalog, get_engine_config, get_tracker

SessionTypeOption = Annotated[
    str,
    typer.Option("--session-type", "-s", help="Standard (default), Express or Maintenance"),
]
FocusOption = Annotated[
    Optional[str],
    typer.Option("--focus", "-f", help="Body-part focus (default: next due in rotation)"),
]
EquipmentOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--equipment",
        "-q",
        help="Available equipment id; repeat or comma-separate (default: bodyweight only)",
    ),
]
StyleOption = Annotated[
    TrainingStyle,
    typer.Option("--style", help="Training style: strength, balanced or growth"),
]


def _parse_equipment(values: list[str] | None) -> frozenset[str]:
    """Flatten repeated / comma-separated --equipment values and warn on unknown ids."""
    raw: list[str] = []
    for v in values or []:
        raw.extend(v.split(","))
    equipment = normalize_equipment(raw)
    unknown = unknown_equipment(equipment)
    if unknown:
        views.print_warning(
            f"Unknown equipment ignored by every exercise: {', '.join(unknown)}"
        )
    return equipment


def _resolve_session_type(value: str) -> SessionType:
    try:
        return parse_session_type(value)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _resolve_focus(focus: str | None, history, use_weekday: bool) -> str:
    """Explicit --focus wins; then the weekday template; then the rotation."""
    if focus:
        return focus
    if use_weekday:
        today_focus = focus_for_weekday(datetime.now())
        if today_focus is None:
            views.print_info("Today is a rest day. Recovery is part of progress.")
            raise typer.Exit(0)
        return today_focus
    return next_focus(history, focus_rotation_from(get_engine_config()))


@app.command()
def plan(
    session_type: SessionTypeOption = "Standard",
    focus: FocusOption = None,
    equipment: EquipmentOption = None,
    style: StyleOption = TrainingStyle.BALANCED,
    weekday: Annotated[
        bool,
        typer.Option("--weekday", help="Use the fixed weekday template instead of the rotation"),
    ] = False,
    record: Annotated[
        bool,
        typer.Option("--record", "-r", help="Add the plan to the schedule as a planned session"),
    ] = False,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date to record the plan on (YYYY-MM-DD, default: today)"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    catalog_path: CatalogOption = None,
    schedule_path: SchedulePathOption = None,
) -> None:
    """
    Generate a workout for one session.

    Picks one exercise per slot of the session type, avoiding the
    exercises of your last completed session with the same focus.
    """
    st = _resolve_session_type(session_type)
    equipment_set = _parse_equipment(equipment)
    catalog = get_catalog(catalog_path)
    tracker = get_tracker(schedule_path)

    try:
        history = tracker.history
        target_focus = _resolve_focus(focus, history, weekday)
        workout = generate_plan(st, target_focus, equipment_set, catalog, history, style)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if record:
        day = date or datetime.now().strftime("%Y-%m-%d")
        try:
            validate_date(day)
        except PlannerError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        tracker.record(ScheduleEntry.from_plan(day, workout))

    if json_out:
        typer.echo(json.dumps(workout_plan_to_dict(workout), indent=2))
        return

    views.print_plan(workout, duration_breakdown(workout.total_sets))
    if record:
        views.print_success(f"Recorded {workout.focus} ({st.value}) on {day}")


@app.command()
def explain(
    session_type: SessionTypeOption = "Standard",
    focus: FocusOption = None,
    equipment: EquipmentOption = None,
    style: StyleOption = TrainingStyle.BALANCED,
    catalog_path: CatalogOption = None,
    schedule_path: SchedulePathOption = None,
) -> None:
    """
    Show step by step how each slot of a plan was filled.
    """
    st = _resolve_session_type(session_type)
    equipment_set = _parse_equipment(equipment)
    catalog = get_catalog(catalog_path)
    tracker = get_tracker(schedule_path)

    try:
        history = tracker.history
        target_focus = _resolve_focus(focus, history, False)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.console.print()
    views.console.print(explain_plan(st, target_focus, equipment_set, catalog, history, style))
    views.console.print()


@app.command()
def duration(
    total_sets: Annotated[int, typer.Argument(help="Total sets in the session", min=0)],
) -> None:
    """
    Estimate session duration from total sets.
    """
    try:
        breakdown = duration_breakdown(total_sets)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.console.print(
        f"{total_sets} sets → [bold]{breakdown.total_minutes} min[/bold]"
    )
    if total_sets:
        views.console.print(
            f"[dim]{breakdown.rest_time} rest + {breakdown.workout_time} work + "
            f"{breakdown.warmup_time} warmup − {breakdown.final_rest_removal} final rest[/dim]"
        )


@app.command("next-focus")
def next_focus_cmd(
    schedule_path: SchedulePathOption = None,
) -> None:
    """
    Show which body-part focus is due next.
    """
    tracker = get_tracker(schedule_path)
    rotation = focus_rotation_from(get_engine_config())
    try:
        focus = next_focus(tracker.history, rotation)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.console.print(f"Next focus: [bold cyan]{focus}[/bold cyan]")
