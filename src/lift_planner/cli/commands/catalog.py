"""Catalog command: list and filter exercises."""

from typing import Annotated, Optional

import typer

from ...core.equipment import filter_by_equipment, normalize_equipment
from ...core.models import RoleCategory
from .. import views
from ..app import CatalogOption, app, get_catalog


@app.command()
def catalog(
    body_part: Annotated[
        Optional[str],
        typer.Option("--body-part", "-b", help="Only exercises tagged with this body part"),
    ] = None,
    role: Annotated[
        Optional[RoleCategory],
        typer.Option("--role", help="Only exercises eligible for this role"),
    ] = None,
    equipment: Annotated[
        Optional[str],
        typer.Option(
            "--equipment",
            "-q",
            help="Comma-separated equipment ids; only exercises usable with them",
        ),
    ] = None,
    catalog_path: CatalogOption = None,
) -> None:
    """
    List exercises in the catalog.
    """
    cat = get_catalog(catalog_path)

    exercises = list(cat)
    if body_part:
        tagged = {ex.exercise_id for ex in cat.by_body_part(body_part)}
        exercises = [ex for ex in exercises if ex.exercise_id in tagged]
    if role is not None:
        eligible = {ex.exercise_id for ex in cat.by_role(role)}
        exercises = [ex for ex in exercises if ex.exercise_id in eligible]
    if equipment is not None:
        exercises = list(filter_by_equipment(exercises, normalize_equipment(equipment.split(","))))

    if not exercises:
        views.print_info("No exercises match these filters.")
        return
    views.print_catalog(cat, exercises)
