"""Shared Typer app object, shared option types, and loading utilities."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.catalog import ExerciseCatalog, load_catalog
from ..core.engine.config_loader import load_engine_config
from ..core.errors import PlannerError
from ..core.schedule import ScheduleTracker
from ..io.schedule_store import JsonlScheduleStore, get_default_schedule_path
from . import views

# Shared --schedule-path option type used by every command that reads the log
SchedulePathOption = Annotated[
    Optional[Path],
    typer.Option("--schedule-path", "-p", help="Path to schedule JSONL file"),
]

# Shared --catalog option type
CatalogOption = Annotated[
    Optional[Path],
    typer.Option(
        "--catalog",
        "-c",
        help="Exercise catalog YAML/JSON used as-is (default: bundled + ~/.lift-planner/catalog.yaml)",
    ),
]

app = typer.Typer(
    name="lift-planner",
    help="Workout plan generator: pick exercises by session type, focus and equipment.",
    no_args_is_help=True,
)


def get_tracker(schedule_path: Path | None) -> ScheduleTracker:
    """Get a schedule tracker over the JSONL store at path or the default location."""
    if schedule_path is None:
        schedule_path = get_default_schedule_path()
    return ScheduleTracker(JsonlScheduleStore(schedule_path))


def get_catalog(catalog_path: Path | None) -> ExerciseCatalog:
    """Load the catalog or exit with an error message."""
    try:
        return load_catalog(catalog_path)
    except PlannerError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def get_engine_config() -> dict:
    """Load engine.yaml settings (bundled + user override)."""
    return load_engine_config()
