"""
Error taxonomy for the planning engine.

Every error is local to the operation that raised it; nothing here is
retried or swallowed by the engine.  Callers that want a single catch-all
can catch PlannerError.
"""


class PlannerError(Exception):
    """Base class for all lift-planner errors."""

    pass


class CatalogLoadError(PlannerError):
    """Raised when the exercise dataset is missing or malformed."""

    pass


class UnsupportedSessionTypeError(PlannerError, ValueError):
    """Raised when a value that is not a known SessionType reaches the engine."""

    pass


class InvalidInputError(PlannerError, ValueError):
    """Raised for negative or malformed numeric input."""

    pass


class InsufficientExercisesError(PlannerError):
    """
    Raised when the filtered candidate pool cannot fill a mandatory slot.

    Carries the role, focus and equipment that produced the empty pool so
    the caller can tell the user which combination is not workable.
    """

    def __init__(self, role: str, focus: str, equipment: frozenset[str], reason: str = ""):
        self.role = role
        self.focus = focus
        self.equipment = frozenset(equipment)
        equipment_str = ", ".join(sorted(self.equipment)) or "bodyweight only"
        message = (
            f"Not enough exercises for a {role} slot with focus '{focus}' "
            f"and equipment ({equipment_str})"
        )
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ValidationError(PlannerError):
    """Raised when stored data fails validation."""

    pass
