"""
CLI entry point using Typer.

Provides commands for workout planning:
- plan: Generate a workout for one session
- explain: Show how each slot of a plan was filled
- duration: Estimate session duration from total sets
- next-focus: Show the body-part focus due next
- log / complete: Record sessions in the schedule log
- schedule: Show the schedule for a window
- catalog: List and filter exercises
"""

from .app import app
from .commands import catalog, planning, schedule  # noqa: F401  (registers commands)

__all__ = ["app"]


def main() -> None:
    app()


if __name__ == "__main__":
    main()
