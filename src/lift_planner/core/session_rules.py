"""
Session type → slot template rules.

SESSION_SLOTS is the single source of truth for how many sets each
session type prescribes per role.  Each SlotSpec is one exercise of that
role carried for ``set_count`` sets:

    Standard    : Major×3 + Minor×2 + Tertiary×1 = 6 sets
    Express     : Major×3 + Minor×2              = 5 sets
    Maintenance : Major×2 + Minor×2              = 4 sets
"""

from typing import Final

from .errors import UnsupportedSessionTypeError
from .models import RoleCategory, SessionType, SlotSpec

SESSION_SLOTS: Final[dict[SessionType, tuple[SlotSpec, ...]]] = {
    SessionType.STANDARD: (
        SlotSpec(RoleCategory.MAJOR, 3),
        SlotSpec(RoleCategory.MINOR, 2),
        SlotSpec(RoleCategory.TERTIARY, 1),
    ),
    SessionType.EXPRESS: (
        SlotSpec(RoleCategory.MAJOR, 3),
        SlotSpec(RoleCategory.MINOR, 2),
    ),
    SessionType.MAINTENANCE: (
        SlotSpec(RoleCategory.MAJOR, 2),
        SlotSpec(RoleCategory.MINOR, 2),
    ),
}


def parse_session_type(value: str | SessionType) -> SessionType:
    """
    Resolve a session type from user input.

    Accepts a SessionType or its name/value in any case
    ("standard", "EXPRESS", "Maintenance").

    Raises:
        UnsupportedSessionTypeError: If the value names no session type
    """
    if isinstance(value, SessionType):
        return value
    if isinstance(value, str):
        needle = value.strip().lower()
        for st in SessionType:
            if needle in (st.value.lower(), st.name.lower()):
                return st
    valid = ", ".join(st.value for st in SessionType)
    raise UnsupportedSessionTypeError(f"Unknown session type {value!r}. Valid types: {valid}")


def slots_for(session_type: SessionType) -> tuple[SlotSpec, ...]:
    """
    Return the ordered slot template for a session type.

    Raises:
        UnsupportedSessionTypeError: If session_type is not a SessionType
    """
    if not isinstance(session_type, SessionType) or session_type not in SESSION_SLOTS:
        valid = ", ".join(st.value for st in SessionType)
        raise UnsupportedSessionTypeError(
            f"Unsupported session type {session_type!r}. Valid types: {valid}"
        )
    return SESSION_SLOTS[session_type]


def total_sets_for(session_type: SessionType) -> int:
    """Sum of set counts in the session type's template."""
    return sum(slot.set_count for slot in slots_for(session_type))
