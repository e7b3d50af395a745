"""
Run lifecycle state machine.

A run walks a fixed sequence of production stages, one step per advance(),
until it is DONE. fail() moves any non-terminal run to ERROR. DONE and
ERROR are absorbing: nothing leaves them.

Both operations are pure and return a new Run; persisting the result is
the caller's job.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import FrozenStateError


class RunState(str, Enum):
    """Production stage of a run."""

    IDLING = "idling"
    GENERATING_QUESTION = "generating_question"
    GENERATING_ANSWER = "generating_answer"
    RENDERING_VOICE = "rendering_voice"
    RENDERING_SUBTITLES = "rendering_subtitles"
    DOWNLOADING_BACKGROUND = "downloading_background"
    COMPOSING_VIDEO = "composing_video"
    UPLOADING = "uploading"
    DONE = "done"
    ERROR = "error"


# One successor per non-terminal state. ERROR is reachable from any of
# them through fail() and is deliberately absent here.
SUCCESSORS: Dict[RunState, RunState] = {
    RunState.IDLING: RunState.GENERATING_QUESTION,
    RunState.GENERATING_QUESTION: RunState.GENERATING_ANSWER,
    RunState.GENERATING_ANSWER: RunState.RENDERING_VOICE,
    RunState.RENDERING_VOICE: RunState.RENDERING_SUBTITLES,
    RunState.RENDERING_SUBTITLES: RunState.DOWNLOADING_BACKGROUND,
    RunState.DOWNLOADING_BACKGROUND: RunState.COMPOSING_VIDEO,
    RunState.COMPOSING_VIDEO: RunState.UPLOADING,
    RunState.UPLOADING: RunState.DONE,
}

ABSORBING_STATES: FrozenSet[RunState] = frozenset({RunState.DONE, RunState.ERROR})


class Run(BaseModel):
    """A single production run of a profile."""

    model_config = ConfigDict(frozen=True)

    id: int
    profile_id: int
    run_date: datetime
    current_state: RunState = RunState.IDLING
    error: Optional[str] = Field(None, description="Failure message, set only in the error state")

    @property
    def is_terminal(self) -> bool:
        return self.current_state in ABSORBING_STATES


def next_state(state: RunState) -> Optional[RunState]:
    """Successor of state, or None for absorbing states."""
    return SUCCESSORS.get(state)


def advance(run: Run) -> Run:
    """
    Move a run to the next production stage.

    Raises:
        FrozenStateError: If the run is DONE or ERROR
    """
    successor = next_state(run.current_state)
    if successor is None:
        raise FrozenStateError(run.id, run.current_state)
    return run.model_copy(update={"current_state": successor})


def fail(run: Run, message: str) -> Run:
    """
    Move a run to ERROR, recording message.

    The first error wins: a run already in ERROR (or finished) rejects it.

    Raises:
        FrozenStateError: If the run is DONE or ERROR
    """
    if run.is_terminal:
        raise FrozenStateError(run.id, run.current_state)
    return run.model_copy(update={"current_state": RunState.ERROR, "error": message})
