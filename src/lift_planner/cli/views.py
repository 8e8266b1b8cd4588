"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans, schedules and the catalog.
"""

from typing import Sequence

from rich.console import Console
from rich.table import Table

from ..core.catalog import ExerciseCatalog
from ..core.duration import DurationBreakdown
from ..core.equipment import equipment_label
from ..core.models import Exercise, ScheduleEntry, WorkoutPlan

console = Console()


def _fmt_equipment(items) -> str:
    return ", ".join(equipment_label(i) for i in sorted(items)) or "Bodyweight"


def format_plan_table(plan: WorkoutPlan) -> Table:
    """
    Build a Rich table for a generated plan.

    Args:
        plan: Plan to display

    Returns:
        Rich Table object
    """
    table = Table(
        title=f"{plan.session_type.value} · {plan.focus}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Role", style="cyan")
    table.add_column("Exercise")
    table.add_column("Equipment", style="dim")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Rest", justify="right")

    for i, slot in enumerate(plan.slots, 1):
        table.add_row(
            str(i),
            slot.role.value,
            slot.exercise.display_name,
            _fmt_equipment(slot.exercise.equipment),
            str(slot.set_count),
            str(slot.target_reps),
            f"{slot.rest_minutes:g} min",
        )

    return table


def print_plan(plan: WorkoutPlan, breakdown: DurationBreakdown | None = None) -> None:
    """Print a plan table followed by its totals."""
    console.print()
    console.print(format_plan_table(plan))
    console.print(
        f"Total sets: [bold]{plan.total_sets}[/bold]   "
        f"Estimated duration: [bold]{plan.estimated_duration_minutes} min[/bold]   "
        f"Style: {plan.training_style.value}"
    )
    if breakdown is not None:
        console.print(
            f"[dim]({breakdown.rest_time} rest + {breakdown.workout_time} work + "
            f"{breakdown.warmup_time} warmup − {breakdown.final_rest_removal} final rest)[/dim]"
        )
    console.print()


def format_schedule_table(entries: Sequence[ScheduleEntry], title: str = "Schedule") -> Table:
    """Build a Rich table of schedule entries (expected ascending by date)."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Focus", style="cyan")
    table.add_column("Session")
    table.add_column("Status")
    table.add_column("Exercises", style="dim")

    for e in entries:
        status = "[green]done[/green]" if e.completed else "[yellow]planned[/yellow]"
        table.add_row(
            e.date,
            e.focus,
            e.session_type.value,
            status,
            ", ".join(e.exercise_ids),
        )
    return table


def print_schedule(entries: Sequence[ScheduleEntry], title: str = "Schedule") -> None:
    """Print schedule entries or a notice if there are none."""
    if not entries:
        print_info("No sessions in this window.")
        return
    console.print()
    console.print(format_schedule_table(entries, title))
    console.print()


def format_catalog_table(exercises: Sequence[Exercise]) -> Table:
    """Build a Rich table of catalog entries."""
    table = Table(title="Exercise catalog", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Exercise")
    table.add_column("Body parts", style="cyan")
    table.add_column("Roles")
    table.add_column("Equipment", style="dim")

    for ex in exercises:
        table.add_row(
            ex.exercise_id,
            ex.display_name,
            ", ".join(sorted(ex.body_parts)),
            ", ".join(r.value for r in sorted(ex.roles, key=lambda r: r.value)),
            _fmt_equipment(ex.equipment),
        )
    return table


def print_catalog(catalog: ExerciseCatalog, exercises: Sequence[Exercise]) -> None:
    """Print a filtered catalog listing with a count footer."""
    console.print()
    console.print(format_catalog_table(exercises))
    console.print(f"[dim]{len(exercises)} of {len(catalog)} exercises[/dim]")
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
