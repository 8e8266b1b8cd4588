"""Core planning engine for lift-planner."""
