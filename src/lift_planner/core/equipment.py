"""
Equipment-aware exercise filtering.

An exercise is usable iff every item it requires is in the user's
available set.  Bodyweight exercises require nothing and are always
usable.  Equipment identifiers are plain lower-case strings; an id the
catalog never mentions simply never satisfies a requirement.

The known-equipment catalog below is used only for labels and CLI
warnings, never to reject input.
"""

from __future__ import annotations

from typing import Iterable

from .models import EquipmentSet, Exercise


# ---------------------------------------------------------------------------
# Equipment catalog
# Each item: {label, weight_type}
#   weight_type groups items by how they are loaded
# ---------------------------------------------------------------------------

KNOWN_EQUIPMENT: dict[str, dict] = {
    "barbell": {
        "label": "Olympic barbell",
        "weight_type": "Free Weight",
    },
    "dumbbell": {
        "label": "Dumbbells",
        "weight_type": "Free Weight",
    },
    "ez_bar": {
        "label": "EZ curl bar",
        "weight_type": "Free Weight",
    },
    "fixed_barbell": {
        "label": "Fixed-weight barbell",
        "weight_type": "Free Weight",
    },
    "fixed_ez_bar": {
        "label": "Fixed-weight EZ bar",
        "weight_type": "Free Weight",
    },
    "bench": {
        "label": "Adjustable bench",
        "weight_type": "Support",
    },
    "power_rack": {
        "label": "Power rack / squat stand",
        "weight_type": "Support",
    },
    "pull_up_bar": {
        "label": "Pull-up bar",
        "weight_type": "Support",
    },
    "dip_bars": {
        "label": "Parallel dip bars",
        "weight_type": "Support",
    },
    "cable_machine": {
        "label": "Cable machine",
        "weight_type": "Pin-Loaded",
    },
    "pin_machine": {
        "label": "Pin-loaded machine",
        "weight_type": "Pin-Loaded",
    },
    "plate_loaded": {
        "label": "Plate-loaded machine",
        "weight_type": "Plate-Loaded",
    },
    "smith_machine": {
        "label": "Smith machine",
        "weight_type": "Plate-Loaded",
    },
    "resistance_band": {
        "label": "Resistance band",
        "weight_type": "Band",
    },
}


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def normalize_equipment(items: Iterable[str]) -> EquipmentSet:
    """
    Normalise user-supplied equipment ids.

    Strips whitespace, lower-cases and maps spaces/hyphens to underscores
    so "Cable Machine" and "cable-machine" both become "cable_machine".
    Empty strings are dropped.
    """
    result = set()
    for item in items:
        norm = item.strip().lower().replace("-", "_").replace(" ", "_")
        if norm:
            result.add(norm)
    return frozenset(result)


def equipment_label(item_id: str) -> str:
    """Return the display label for an equipment id (the id itself if unknown)."""
    entry = KNOWN_EQUIPMENT.get(item_id)
    return entry["label"] if entry else item_id


def unknown_equipment(available: Iterable[str]) -> list[str]:
    """Return the ids in ``available`` that are not in KNOWN_EQUIPMENT, sorted."""
    return sorted(item for item in set(available) if item not in KNOWN_EQUIPMENT)


def is_usable(exercise: Exercise, available: Iterable[str]) -> bool:
    """True if every item ``exercise`` requires is in ``available``."""
    return exercise.equipment <= frozenset(available)


def filter_by_equipment(
    exercises: Iterable[Exercise],
    available: Iterable[str],
) -> tuple[Exercise, ...]:
    """
    Reduce ``exercises`` to those usable with ``available`` equipment.

    Order is preserved.  An empty result is a normal outcome, not an
    error; the caller decides whether that is fatal.

    Args:
        exercises: Candidate exercises
        available: Equipment ids the user has for this session

    Returns:
        Tuple of usable exercises
    """
    have = frozenset(available)
    return tuple(ex for ex in exercises if ex.equipment <= have)
