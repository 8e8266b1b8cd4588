"""
Workout plan generation for lift-planner.

Turns (session type, body-part focus, available equipment, catalog,
schedule history) into a deterministic ordered WorkoutPlan.  The same
inputs always produce the same plan: candidates are ordered by
exercise_id and history is only consulted through the most recent
completed session for the same focus.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .catalog import ExerciseCatalog
from .config import COMBINED_FOCUS_SEPARATOR
from .duration import duration_breakdown, estimate_duration
from .equipment import filter_by_equipment
from .errors import InsufficientExercisesError
from .models import (
    Exercise,
    PlanSlot,
    RoleCategory,
    ScheduleEntry,
    SessionType,
    SlotSpec,
    TrainingStyle,
    WorkoutPlan,
)
from .schedule import last_completed_entry
from .session_rules import slots_for
from .training_style import prescribe


@dataclass
class _SlotTrace:
    """
    All intermediate values from _plan_core() for one slot.

    Consumed by _format_explain() so the explanation never diverges from
    the plan produced by generate_plan().
    """

    slot: SlotSpec
    pool: tuple[Exercise, ...]          # equipment-filtered, role-eligible, sorted
    already_chosen: tuple[str, ...]     # ids picked by earlier slots
    previous_ids: tuple[str, ...]       # ids from the last completed same-focus session
    variety_relaxed: bool               # True if the pick was also used last session
    chosen: Exercise
    target_reps: int
    rest_minutes: float


def focus_parts(focus: str) -> tuple[str, ...]:
    """
    Split a focus into the body-part tags it targets.

    "Back & Triceps" → ("Back", "Triceps"); a plain focus returns itself.
    """
    parts = tuple(p.strip() for p in focus.split(COMBINED_FOCUS_SEPARATOR) if p.strip())
    return parts or (focus.strip(),)


def candidate_pool(
    catalog: ExerciseCatalog,
    focus: str,
    role: RoleCategory,
    available_equipment: Iterable[str],
) -> tuple[Exercise, ...]:
    """
    Exercises eligible for one slot, ordered by exercise_id.

    Pool = (exercises tagged with any part of the focus) ∩ (eligible for
    role), reduced by the equipment filter.
    """
    role_ids = {ex.exercise_id for ex in catalog.by_role(role)}
    seen: dict[str, Exercise] = {}
    for part in focus_parts(focus):
        for ex in catalog.by_body_part(part):
            if ex.exercise_id in role_ids:
                seen.setdefault(ex.exercise_id, ex)
    usable = filter_by_equipment(seen.values(), available_equipment)
    return tuple(sorted(usable, key=lambda ex: ex.exercise_id))


def _plan_core(
    session_type: SessionType,
    focus: str,
    available_equipment: Iterable[str],
    catalog: ExerciseCatalog,
    history: Sequence[ScheduleEntry],
    training_style: TrainingStyle,
) -> tuple[WorkoutPlan, list[_SlotTrace]]:
    """Shared implementation of generate_plan() and explain_plan()."""
    slots = slots_for(session_type)
    equipment = frozenset(available_equipment)
    style = TrainingStyle(training_style)

    previous = last_completed_entry(history, focus)
    previous_ids = tuple(previous.exercise_ids) if previous is not None else ()

    pools: list[tuple[Exercise, ...]] = []
    for slot in slots:
        pool = candidate_pool(catalog, focus, slot.role, equipment)
        if not pool:
            raise InsufficientExercisesError(
                slot.role.value, focus, equipment, "no eligible exercise in the catalog"
            )
        pools.append(pool)

    # Preference order per slot: candidates not used last session first,
    # then the rest, each by exercise_id.
    ranked = [
        sorted(pool, key=lambda ex: (ex.exercise_id in previous_ids, ex.exercise_id))
        for pool in pools
    ]

    picks = _assign(ranked, 0, [])
    if picks is None:
        stuck = _first_unfillable(ranked)
        raise InsufficientExercisesError(
            slots[stuck].role.value,
            focus,
            equipment,
            f"all {len(pools[stuck])} candidate(s) are needed by other slots of this plan",
        )

    plan_slots: list[PlanSlot] = []
    traces: list[_SlotTrace] = []
    for i, (slot, pick) in enumerate(zip(slots, picks)):
        reps, rest = prescribe(pick.default_reps, style)
        traces.append(
            _SlotTrace(
                slot=slot,
                pool=pools[i],
                already_chosen=tuple(ex.exercise_id for ex in picks[:i]),
                previous_ids=previous_ids,
                variety_relaxed=pick.exercise_id in previous_ids,
                chosen=pick,
                target_reps=reps,
                rest_minutes=rest,
            )
        )
        plan_slots.append(
            PlanSlot(
                role=slot.role,
                exercise=pick,
                set_count=slot.set_count,
                target_reps=reps,
                rest_minutes=rest,
            )
        )

    total_sets = sum(s.set_count for s in plan_slots)
    plan = WorkoutPlan(
        session_type=session_type,
        focus=focus,
        slots=tuple(plan_slots),
        total_sets=total_sets,
        estimated_duration_minutes=estimate_duration(total_sets),
        training_style=style,
    )
    return plan, traces


def _assign(
    ranked: list[list[Exercise]],
    index: int,
    chosen: list[Exercise],
) -> list[Exercise] | None:
    """
    First distinct assignment of one exercise per slot, in preference order.

    Depth-first over at most a handful of slots; returns None if no
    assignment without repeats exists.
    """
    if index == len(ranked):
        return list(chosen)
    taken = {ex.exercise_id for ex in chosen}
    for ex in ranked[index]:
        if ex.exercise_id in taken:
            continue
        chosen.append(ex)
        result = _assign(ranked, index + 1, chosen)
        chosen.pop()
        if result is not None:
            return result
    return None


def _first_unfillable(ranked: list[list[Exercise]]) -> int:
    """Index of the first slot at which no repeat-free prefix can be extended."""
    for end in range(1, len(ranked) + 1):
        if _assign(ranked[:end], 0, []) is None:
            return end - 1
    return len(ranked) - 1


def generate_plan(
    session_type: SessionType,
    focus: str,
    available_equipment: Iterable[str],
    catalog: ExerciseCatalog,
    history: Sequence[ScheduleEntry] = (),
    training_style: TrainingStyle = TrainingStyle.BALANCED,
) -> WorkoutPlan:
    """
    Generate the ordered workout for one session.

    Each slot of the session type's template gets one exercise tagged
    with the focus, eligible for the slot's role and usable with the
    available equipment.  No exercise appears twice in a plan.  Where
    possible, exercises from the most recent completed session with the
    same focus are avoided; that preference is dropped for a slot when it
    would leave nothing to pick.

    Args:
        session_type: Standard, Express or Maintenance
        focus: Body-part focus, e.g. "Chest" or "Back & Triceps"
        available_equipment: Equipment ids the user has (empty = bodyweight only)
        catalog: Loaded exercise catalog
        history: Schedule entries, any order
        training_style: Rep/rest bias for every slot

    Returns:
        WorkoutPlan with total sets and estimated duration

    Raises:
        UnsupportedSessionTypeError: If session_type is not a SessionType
        InsufficientExercisesError: If a slot cannot be filled
    """
    plan, _ = _plan_core(session_type, focus, available_equipment, catalog, history, training_style)
    return plan


def explain_plan(
    session_type: SessionType,
    focus: str,
    available_equipment: Iterable[str],
    catalog: ExerciseCatalog,
    history: Sequence[ScheduleEntry] = (),
    training_style: TrainingStyle = TrainingStyle.BALANCED,
) -> str:
    """
    Generate a step-by-step Rich-markup explanation of a plan.

    Delegates to _plan_core() so the explanation matches generate_plan()
    exactly.  Planning errors are rendered rather than raised.

    Returns:
        Rich-markup string ready for console.print()
    """
    try:
        plan, traces = _plan_core(
            session_type, focus, available_equipment, catalog, history, training_style
        )
    except InsufficientExercisesError as exc:
        return f"[yellow]{exc}[/yellow]"
    return _format_explain(plan, traces, frozenset(available_equipment))


def _format_explain(plan: WorkoutPlan, traces: list[_SlotTrace], equipment: frozenset[str]) -> str:
    """
    Format slot traces into a Rich-markup explanation.

    Pure formatter: all values come from the traces built by _plan_core().
    """
    rule = "─" * 54
    equipment_str = ", ".join(sorted(equipment)) or "bodyweight only"
    L: list[str] = [
        f"[bold]{plan.session_type.value} · {plan.focus}[/bold]  ({plan.training_style.value})",
        f"Equipment: {equipment_str}",
        rule,
    ]

    for n, t in enumerate(traces, 1):
        L.append(
            f"[bold cyan]Slot {n}: {t.slot.role.value} × {t.slot.set_count} sets[/bold cyan]"
        )
        L.append(f"  Candidates ({len(t.pool)}): " + ", ".join(ex.exercise_id for ex in t.pool))
        if t.already_chosen:
            L.append("  Already in plan: " + ", ".join(t.already_chosen))
        if t.previous_ids:
            L.append("  Used last session: " + ", ".join(t.previous_ids))
        if t.variety_relaxed:
            L.append("  [yellow]Every remaining candidate was used last session; repeating.[/yellow]")
        L.append(f"  → [green]{t.chosen.display_name}[/green] ({t.chosen.exercise_id})")
        L.append(f"    {t.target_reps} reps, {t.rest_minutes:g} min rest")

    breakdown = duration_breakdown(plan.total_sets)
    L.append(rule)
    L.append(f"Total sets: {plan.total_sets}")
    L.append(
        f"Duration: {breakdown.rest_time} rest + {breakdown.workout_time} work"
        f" + {breakdown.warmup_time} warmup − {breakdown.final_rest_removal} final rest"
        f" = [bold]{plan.estimated_duration_minutes} min[/bold]"
    )
    return "\n".join(L)
