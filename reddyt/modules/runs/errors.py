"""Run lifecycle errors."""


class RunError(Exception):
    """Base class for run errors."""


class FrozenStateError(RunError):
    """A run in an absorbing state was asked to transition."""

    def __init__(self, run_id: int, state):
        self.run_id = run_id
        self.state = state
        super().__init__(f"Run {run_id} is frozen in state '{state.value}'")


class RunNotFoundError(RunError):
    """No run exists with the requested id."""

    def __init__(self, run_id: int):
        self.run_id = run_id
        super().__init__(f"Run {run_id} not found")
