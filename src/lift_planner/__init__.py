"""Workout plan generation engine: exercise selection, session volume and weekly focus rotation."""

__version__ = "0.1.0"
