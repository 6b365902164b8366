"""Engine: reconciliation, the build orchestrator and the read-only planner."""
