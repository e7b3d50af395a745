"""
Runs Module - Black Box Interface

Purpose: Track production runs through their stages
Interface: advance(), fail(), RunService, RedisRunStore
Hidden: Successor table, storage keys, serialization

The lifecycle functions are pure; RunService commits their results
through any RunStore implementation.
"""

from .errors import FrozenStateError, RunError, RunNotFoundError
from .lifecycle import ABSORBING_STATES, SUCCESSORS, Run, RunState, advance, fail, next_state
from .service import RunService
from .store import RedisRunStore, RunStore

__all__ = [
    "Run",
    "RunState",
    "SUCCESSORS",
    "ABSORBING_STATES",
    "advance",
    "fail",
    "next_state",
    "RunService",
    "RunStore",
    "RedisRunStore",
    "RunError",
    "FrozenStateError",
    "RunNotFoundError",
]
