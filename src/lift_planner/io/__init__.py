"""Local persistence for lift-planner."""
