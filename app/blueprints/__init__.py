"""HTTP blueprints for the runway planner."""
