"""
Formula-focused unit tests for the core planning engine.

Each test verifies one rule of the engine: session templates, the
duration formula, training-style prescriptions, focus rotation and the
equipment filter.  Values are hand-computed so the tests double as worked examples.
"""

from datetime import date

import pytest

from lift_planner.core.config import FOCUS_ROTATION
from lift_planner.core.duration import duration_breakdown, estimate_duration
from lift_planner.core.engine.config_loader import focus_rotation_from, load_engine_config
from lift_planner.core.equipment import (
    filter_by_equipment,
    is_usable,
    normalize_equipment,
    unknown_equipment,
)
from lift_planner.core.errors import InvalidInputError, UnsupportedSessionTypeError
from lift_planner.core.focus import focus_for_weekday, is_rest_day, next_focus
from lift_planner.core.models import (
    Exercise,
    PlanSlot,
    RoleCategory,
    ScheduleEntry,
    SessionType,
    TrainingStyle,
    WorkoutPlan,
)
from lift_planner.core.session_rules import (
    SESSION_SLOTS,
    parse_session_type,
    slots_for,
    total_sets_for,
)
from lift_planner.core.training_style import prescribe, rest_minutes, target_reps

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

MAJOR, MINOR, TERTIARY = RoleCategory.MAJOR, RoleCategory.MINOR, RoleCategory.TERTIARY


def _ex(exercise_id: str, equipment=(), roles=(MAJOR,), body_parts=("Chest",)) -> Exercise:
    return Exercise(
        exercise_id=exercise_id,
        display_name=exercise_id.replace("_", " ").title(),
        body_parts=frozenset(body_parts),
        equipment=frozenset(equipment),
        roles=frozenset(roles),
    )


def _entry(day: str, focus: str, completed: bool = True) -> ScheduleEntry:
    return ScheduleEntry(
        date=day,
        focus=focus,
        session_type=SessionType.STANDARD,
        completed=completed,
    )


# ===========================================================================
# Session type rules
# ===========================================================================

class TestSessionRules:
    """Slot templates: Standard 3+2+1, Express 3+2, Maintenance 2+2."""

    @pytest.mark.parametrize(
        "session_type, expected_total",
        [
            (SessionType.STANDARD, 6),
            (SessionType.EXPRESS, 5),
            (SessionType.MAINTENANCE, 4),
        ],
    )
    def test_total_sets_per_session_type(self, session_type, expected_total):
        assert sum(s.set_count for s in slots_for(session_type)) == expected_total
        assert total_sets_for(session_type) == expected_total

    def test_standard_slot_order(self):
        slots = slots_for(SessionType.STANDARD)
        assert [(s.role, s.set_count) for s in slots] == [
            (MAJOR, 3),
            (MINOR, 2),
            (TERTIARY, 1),
        ]

    def test_express_drops_tertiary(self):
        roles = [s.role for s in slots_for(SessionType.EXPRESS)]
        assert roles == [MAJOR, MINOR]

    def test_maintenance_reduces_major_sets(self):
        slots = slots_for(SessionType.MAINTENANCE)
        assert [(s.role, s.set_count) for s in slots] == [(MAJOR, 2), (MINOR, 2)]

    def test_every_session_type_has_a_template(self):
        assert set(SESSION_SLOTS) == set(SessionType)

    @pytest.mark.parametrize("bad", ["Tabata", None, 3])
    def test_unknown_session_type_rejected(self, bad):
        with pytest.raises(UnsupportedSessionTypeError):
            slots_for(bad)

    def test_unsupported_session_type_is_value_error(self):
        with pytest.raises(ValueError):
            slots_for("HIIT")

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("standard", SessionType.STANDARD),
            ("EXPRESS", SessionType.EXPRESS),
            (" Maintenance ", SessionType.MAINTENANCE),
            (SessionType.EXPRESS, SessionType.EXPRESS),
        ],
    )
    def test_parse_session_type(self, raw, expected):
        assert parse_session_type(raw) is expected

    def test_parse_session_type_unknown(self):
        with pytest.raises(UnsupportedSessionTypeError, match="Valid types"):
            parse_session_type("crossfit")


# ===========================================================================
# Duration
# ===========================================================================

class TestDuration:
    """
    duration = sets×5 + sets×1 + 3 − 5 = sets×6 − 2, clamped to 0 for no sets.
    """

    @pytest.mark.parametrize(
        "total_sets, minutes",
        [
            (6, 34),  # Standard
            (5, 28),  # Express
            (4, 22),  # Maintenance
            (1, 4),
            (10, 58),
        ],
    )
    def test_formula(self, total_sets, minutes):
        assert estimate_duration(total_sets) == minutes
        assert estimate_duration(total_sets) == total_sets * 6 - 2

    def test_zero_sets_is_zero_minutes(self):
        assert estimate_duration(0) == 0

    @pytest.mark.parametrize("bad", [-1, -6, 2.5, "6", True, None])
    def test_invalid_input_rejected(self, bad):
        with pytest.raises(InvalidInputError):
            estimate_duration(bad)

    def test_breakdown_components_for_standard(self):
        """6 sets: rest 30, work 6, warmup 3, final rest 5 → 34."""
        b = duration_breakdown(6)
        assert (b.rest_time, b.workout_time, b.warmup_time, b.final_rest_removal) == (30, 6, 3, 5)
        assert b.total_minutes == 34

    def test_breakdown_zero_sets_has_no_warmup(self):
        b = duration_breakdown(0)
        assert b.total_minutes == 0
        assert b.warmup_time == 0

    def test_breakdown_custom_minutes(self):
        """4 sets, 3 min rest, 2 min work, 5 min warmup: 12 + 8 + 5 − 3 = 22."""
        b = duration_breakdown(4, rest_minutes=3, work_minutes=2, warmup_minutes=5)
        assert b.total_minutes == 22

    def test_breakdown_rejects_negative_settings(self):
        with pytest.raises(InvalidInputError):
            duration_breakdown(4, rest_minutes=-1)


# ===========================================================================
# Training style
# ===========================================================================

class TestTrainingStyle:
    """Strength lowers reps, growth raises them, balanced keeps defaults."""

    def test_balanced_keeps_default(self):
        assert target_reps(10, TrainingStyle.BALANCED) == 10
        assert target_reps(7, TrainingStyle.BALANCED) == 7

    @pytest.mark.parametrize(
        "default, expected",
        [
            (10, 6),   # 10 − 4
            (8, 6),    # 8 − 2
            (2, 2),    # floor
            (11, 7),   # keys 10 and 12 tie; both −4
            (25, 20),  # closest key 20: 25 − 4 = 21 → clamp 20
        ],
    )
    def test_strength(self, default, expected):
        assert target_reps(default, TrainingStyle.STRENGTH) == expected

    @pytest.mark.parametrize(
        "default, expected",
        [
            (10, 16),  # 10 + 6
            (12, 16),  # 12 + 4
            (18, 20),  # 18 + 2
            (20, 20),  # ceiling
            (3, 9),    # keys 2 and 4 tie; both +6
            (1, 7),    # closest key 2: 1 + 6
        ],
    )
    def test_growth(self, default, expected):
        assert target_reps(default, TrainingStyle.GROWTH) == expected

    def test_style_accepts_string_value(self):
        assert target_reps(10, "strength") == 6

    @pytest.mark.parametrize("bad", [0, -3, 2.5])
    def test_invalid_default_reps(self, bad):
        with pytest.raises(InvalidInputError):
            target_reps(bad, TrainingStyle.GROWTH)

    @pytest.mark.parametrize(
        "reps, minutes",
        [
            (10, 5.0),
            (11, 4.75),  # halfway between 5.0 and 4.5
            (15, 4.0),   # 14 and 16 both 4.0
            (1, 7.0),    # below table
            (25, 3.0),   # above table
        ],
    )
    def test_rest_minutes(self, reps, minutes):
        assert rest_minutes(reps) == pytest.approx(minutes)

    def test_prescribe_growth(self):
        assert prescribe(10, TrainingStyle.GROWTH) == (16, 4.0)


# ===========================================================================
# Focus rotation
# ===========================================================================

class TestNextFocus:
    """Least recently scheduled focus; never-scheduled first; canonical tie-break."""

    def test_empty_history_starts_rotation(self):
        assert next_focus([]) == FOCUS_ROTATION[0] == "Chest"

    def test_unscheduled_focus_first(self):
        history = [_entry("2026-01-05", "Chest")]
        assert next_focus(history) == "Arms"

    def test_never_returns_scheduled_while_unscheduled_remains(self):
        history = [
            _entry("2026-01-05", "Chest"),
            _entry("2026-01-06", "Arms"),
            _entry("2026-01-07", "Back"),
        ]
        assert next_focus(history) == "Shoulders"

    def test_full_cycle_returns_oldest(self):
        history = [
            _entry("2026-01-05", "Chest"),
            _entry("2026-01-06", "Arms"),
            _entry("2026-01-07", "Shoulders"),
            _entry("2026-01-08", "Back"),
            _entry("2026-01-09", "Legs"),
        ]
        assert next_focus(history) == "Chest"
        assert next_focus(history + [_entry("2026-01-12", "Chest")]) == "Arms"

    def test_uses_latest_date_per_focus(self):
        """Chest's latest entry (01-20) is newer than Arms (01-10), so Arms is due."""
        history = [
            _entry("2026-01-01", "Chest"),
            _entry("2026-01-20", "Chest"),
            _entry("2026-01-10", "Arms"),
            _entry("2026-01-11", "Shoulders"),
            _entry("2026-01-12", "Back"),
            _entry("2026-01-13", "Legs"),
        ]
        assert next_focus(history) == "Arms"

    def test_history_order_does_not_matter(self):
        history = [
            _entry("2026-01-09", "Legs"),
            _entry("2026-01-05", "Chest"),
            _entry("2026-01-08", "Back"),
            _entry("2026-01-06", "Arms"),
            _entry("2026-01-07", "Shoulders"),
        ]
        assert next_focus(history) == next_focus(list(reversed(history))) == "Chest"

    def test_tie_broken_by_rotation_order(self):
        history = [
            _entry("2026-01-01", "Shoulders"),
            _entry("2026-01-01", "Arms"),
            _entry("2026-01-03", "Chest"),
            _entry("2026-01-03", "Back"),
            _entry("2026-01-03", "Legs"),
        ]
        assert next_focus(history) == "Arms"

    def test_planned_entries_count(self):
        history = [_entry("2026-01-05", "Chest", completed=False)]
        assert next_focus(history) == "Arms"

    def test_focus_outside_rotation_ignored(self):
        history = [_entry("2026-01-05", "Core")]
        assert next_focus(history) == "Chest"

    def test_custom_rotation(self):
        rotation = ("Upper Body", "Lower Body")
        history = [_entry("2026-01-05", "Upper Body")]
        assert next_focus(history, rotation) == "Lower Body"

    def test_empty_rotation_rejected(self):
        with pytest.raises(InvalidInputError):
            next_focus([], ())


class TestWeekdayTemplate:
    """Mon Chest, Tue Arms, Wed Shoulders, Thu Back, Fri/Sat Legs, Sun rest."""

    @pytest.mark.parametrize(
        "weekday, focus",
        [(0, "Chest"), (1, "Arms"), (2, "Shoulders"), (3, "Back"), (4, "Legs"), (5, "Legs")],
    )
    def test_weekday_focus(self, weekday, focus):
        assert focus_for_weekday(weekday) == focus

    def test_sunday_is_rest(self):
        assert focus_for_weekday(6) is None
        assert is_rest_day(6)

    def test_accepts_dates(self):
        assert focus_for_weekday(date(2026, 10, 19)) == "Chest"  # Monday
        assert focus_for_weekday(date(2026, 10, 25)) is None     # Sunday

    @pytest.mark.parametrize("bad", [7, -1])
    def test_out_of_range_weekday(self, bad):
        with pytest.raises(InvalidInputError):
            focus_for_weekday(bad)


# ===========================================================================
# Equipment filter
# ===========================================================================

class TestEquipmentFilter:
    """An exercise passes iff its required equipment ⊆ available."""

    def test_requires_every_item(self):
        bench_press = _ex("bench_press", equipment=("barbell", "bench"))
        assert is_usable(bench_press, {"barbell", "bench", "dumbbell"})
        assert not is_usable(bench_press, {"barbell"})

    def test_bodyweight_always_passes(self):
        push_up = _ex("push_up")
        assert push_up.is_bodyweight
        assert filter_by_equipment([push_up], set()) == (push_up,)

    def test_empty_result_is_not_an_error(self):
        assert filter_by_equipment([_ex("squat", equipment=("barbell",))], set()) == ()

    def test_preserves_order(self):
        a = _ex("a", equipment=("dumbbell",))
        b = _ex("b")
        c = _ex("c", equipment=("cable_machine",))
        d = _ex("d", equipment=("dumbbell",))
        assert filter_by_equipment([d, c, b, a], {"dumbbell"}) == (d, b, a)

    def test_unknown_ids_never_match(self):
        row = _ex("row", equipment=("barbell",))
        assert filter_by_equipment([row], {"rowing_erg"}) == ()
        assert unknown_equipment({"rowing_erg", "barbell"}) == ["rowing_erg"]

    def test_normalize_equipment(self):
        assert normalize_equipment(["Cable Machine", " barbell ", "", "pull-up-bar"]) == {
            "cable_machine",
            "barbell",
            "pull_up_bar",
        }


# ===========================================================================
# Model invariants
# ===========================================================================

class TestModels:
    def test_schedule_entry_rejects_bad_date(self):
        with pytest.raises(ValueError):
            _entry("2026-13-01", "Chest")
        with pytest.raises(ValueError):
            _entry("01/05/2026", "Chest")

    def test_mark_completed_returns_copy(self):
        planned = _entry("2026-01-05", "Chest", completed=False)
        done = planned.mark_completed()
        assert done.completed and not planned.completed
        assert (done.date, done.focus) == (planned.date, planned.focus)

    def test_workout_plan_total_must_match_slots(self):
        slot = PlanSlot(role=MAJOR, exercise=_ex("push_up"), set_count=3)
        with pytest.raises(ValueError):
            WorkoutPlan(
                session_type=SessionType.STANDARD,
                focus="Chest",
                slots=(slot,),
                total_sets=6,
                estimated_duration_minutes=34,
            )

    def test_exercise_requires_roles(self):
        with pytest.raises(ValueError):
            _ex("nothing", roles=())


# ===========================================================================
# Engine config (engine.yaml + user override)
# ===========================================================================

class TestEngineConfig:
    def test_bundled_rotation(self):
        assert focus_rotation_from(load_engine_config()) == FOCUS_ROTATION

    def test_bundled_config_has_no_duration_overrides(self):
        """Duration is the fixed sets×6 − 2 formula; engine.yaml cannot change it."""
        assert "duration" not in load_engine_config()

    def test_user_rotation_override(self, isolated_home):
        user_dir = isolated_home / ".lift-planner"
        user_dir.mkdir()
        (user_dir / "engine.yaml").write_text("focus_rotation: [Upper Body, Lower Body]\n")
        assert focus_rotation_from(load_engine_config()) == ("Upper Body", "Lower Body")

    def test_explicit_user_path(self, tmp_path):
        user = tmp_path / "engine.yaml"
        user.write_text("focus_rotation: [Push, Pull, Legs]\n")
        assert focus_rotation_from(load_engine_config(user)) == ("Push", "Pull", "Legs")

    def test_broken_user_file_warns_and_is_ignored(self, tmp_path):
        user = tmp_path / "engine.yaml"
        user.write_text("- just\n- a list\n")
        with pytest.warns(UserWarning, match="ignoring user config"):
            cfg = load_engine_config(user)
        assert focus_rotation_from(cfg) == FOCUS_ROTATION

    @pytest.mark.parametrize("bad", ["Chest", [], ["Chest", 5], ["Chest", " "], {"a": 1}])
    def test_invalid_rotation_warns_and_falls_back(self, bad):
        with pytest.warns(UserWarning, match="focus_rotation"):
            assert focus_rotation_from({"focus_rotation": bad}) == FOCUS_ROTATION
