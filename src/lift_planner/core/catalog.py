"""
Exercise catalog: YAML → Exercise loader and precomputed lookups.

The bundled dataset lives at ``src/lift_planner/catalog.yaml``.  Each
entry under the top-level ``exercises`` list is a flat mapping:

    - exercise_id: barbell_bench_press
      display_name: Barbell Bench Press
      body_parts: [Chest, Upper Body]
      equipment: [barbell, bench]
      roles: [Major]
      default_reps: 10          # optional

User overrides: ``~/.lift-planner/catalog.yaml`` uses the same format.
An entry whose exercise_id matches a bundled entry replaces it; any
other entry is added.

Unlike engine settings, a malformed catalog is never silently skipped:
every problem raises CatalogLoadError at load time so selection never
sees a half-loaded dataset.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterator, Sequence

import yaml

from .config import USER_CONFIG_DIRNAME
from .errors import CatalogLoadError
from .models import Exercise, RoleCategory

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "display_name",
        "body_parts",
        "roles",
    }
)


def _as_str_list(value: Any, field_name: str, exercise_id: str) -> list[str]:
    """Accept a single string or a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise CatalogLoadError(f"{exercise_id}: '{field_name}' must be a string or list of strings")


def exercise_from_dict(d: dict) -> Exercise:
    """Convert a raw dict (from YAML) to an Exercise.

    ``equipment`` may be omitted for bodyweight exercises.

    Raises CatalogLoadError if any required field is absent or invalid.
    """
    if not isinstance(d, dict):
        raise CatalogLoadError(f"Catalog entry must be a mapping, got {type(d).__name__}")
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        ident = d.get("exercise_id", "<unknown>")
        raise CatalogLoadError(f"Exercise '{ident}' missing fields: {sorted(missing)}")

    exercise_id = str(d["exercise_id"])

    roles: set[RoleCategory] = set()
    for raw_role in _as_str_list(d["roles"], "roles", exercise_id):
        try:
            roles.add(RoleCategory(raw_role.strip().capitalize()))
        except ValueError:
            valid = ", ".join(r.value for r in RoleCategory)
            raise CatalogLoadError(
                f"{exercise_id}: unknown role '{raw_role}'. Valid roles: {valid}"
            ) from None

    body_parts = frozenset(p.strip() for p in _as_str_list(d["body_parts"], "body_parts", exercise_id))
    equipment = frozenset(
        e.strip().lower() for e in _as_str_list(d.get("equipment"), "equipment", exercise_id)
    )

    try:
        return Exercise(
            exercise_id=exercise_id,
            display_name=str(d["display_name"]),
            body_parts=body_parts,
            equipment=equipment,
            roles=frozenset(roles),
            default_reps=int(d.get("default_reps", 10)),
            position=str(d.get("position", "")),
            push_pull=str(d.get("push_pull", "")),
        )
    except (TypeError, ValueError) as exc:
        raise CatalogLoadError(f"Invalid exercise '{exercise_id}': {exc}") from exc


class ExerciseCatalog(Sequence[Exercise]):
    """
    Immutable, indexed view over the loaded exercises.

    Indices by body part, role and equipment item are built once in the
    constructor; lookups are single dict hits and return tuples in
    exercise_id order.
    """

    def __init__(self, exercises: Sequence[Exercise]):
        ordered = sorted(exercises, key=lambda ex: ex.exercise_id)
        by_id: dict[str, Exercise] = {}
        for ex in ordered:
            if ex.exercise_id in by_id:
                raise CatalogLoadError(f"Duplicate exercise_id '{ex.exercise_id}'")
            by_id[ex.exercise_id] = ex

        by_body_part: dict[str, list[Exercise]] = {}
        by_role: dict[RoleCategory, list[Exercise]] = {}
        by_equipment: dict[str, list[Exercise]] = {}
        for ex in ordered:
            for part in ex.body_parts:
                by_body_part.setdefault(part, []).append(ex)
            for role in ex.roles:
                by_role.setdefault(role, []).append(ex)
            for item in ex.equipment:
                by_equipment.setdefault(item, []).append(ex)

        self._exercises: tuple[Exercise, ...] = tuple(ordered)
        self._by_id = by_id
        self._by_body_part = {k: tuple(v) for k, v in by_body_part.items()}
        self._by_role = {k: tuple(v) for k, v in by_role.items()}
        self._by_equipment = {k: tuple(v) for k, v in by_equipment.items()}

    def __getitem__(self, index):  # type: ignore[override]
        return self._exercises[index]

    def __len__(self) -> int:
        return len(self._exercises)

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._exercises)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_id
        return item in self._exercises

    def get(self, exercise_id: str) -> Exercise | None:
        return self._by_id.get(exercise_id)

    def by_body_part(self, tag: str) -> tuple[Exercise, ...]:
        return self._by_body_part.get(tag, ())

    def by_role(self, role: RoleCategory) -> tuple[Exercise, ...]:
        return self._by_role.get(RoleCategory(role), ())

    def by_equipment(self, item: str) -> tuple[Exercise, ...]:
        return self._by_equipment.get(item, ())

    @property
    def body_parts(self) -> tuple[str, ...]:
        return tuple(sorted(self._by_body_part))

    @property
    def equipment_items(self) -> tuple[str, ...]:
        return tuple(sorted(self._by_equipment))


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def get_bundled_catalog_path() -> Path:
    """Return the path to the bundled catalog.yaml."""
    # catalog.py lives at src/lift_planner/core/catalog.py
    return Path(__file__).parent.parent / "catalog.yaml"


def get_user_catalog_path() -> Path | None:
    """Return ~/.lift-planner/catalog.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / USER_CONFIG_DIRNAME / "catalog.yaml"
    return p if p.exists() else None


def _read_entries(path: Path) -> list[dict]:
    """Read the raw ``exercises`` list from a YAML/JSON catalog file."""
    if not path.exists():
        raise CatalogLoadError(f"Catalog file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogLoadError(f"Cannot read catalog {path}: {exc}") from exc

    if isinstance(data, dict):
        entries = data.get("exercises")
    else:
        entries = data
    if not isinstance(entries, list):
        raise CatalogLoadError(f"{path}: expected an 'exercises' list")
    return entries


def catalog_from_entries(entries: list[dict]) -> ExerciseCatalog:
    """Build an ExerciseCatalog from raw dicts, validating each one."""
    return ExerciseCatalog([exercise_from_dict(e) for e in entries])


def load_catalog(path: str | Path | None = None, include_user: bool = True) -> ExerciseCatalog:
    """
    Load the exercise catalog.

    Load order (later overrides earlier, matched by exercise_id):
    1. The bundled catalog.yaml
    2. ~/.lift-planner/catalog.yaml when ``include_user`` and it exists

    An explicit ``path`` replaces both: the file is loaded on its own and
    the user override is never merged into it.

    Args:
        path: Catalog file to load instead of the bundled one
        include_user: Merge the user override file into the bundled catalog

    Returns:
        ExerciseCatalog

    Raises:
        CatalogLoadError: If a source is missing or any entry is malformed
    """
    source = Path(path) if path is not None else get_bundled_catalog_path()
    merged: dict[str, Exercise] = {}
    for ex in (exercise_from_dict(e) for e in _read_entries(source)):
        if ex.exercise_id in merged:
            raise CatalogLoadError(f"{source}: duplicate exercise_id '{ex.exercise_id}'")
        merged[ex.exercise_id] = ex

    user = get_user_catalog_path() if include_user and path is None else None
    if user is not None:
        for ex in (exercise_from_dict(e) for e in _read_entries(user)):
            merged[ex.exercise_id] = ex

    if not merged:
        raise CatalogLoadError(f"{source}: catalog contains no exercises")
    return ExerciseCatalog(list(merged.values()))
