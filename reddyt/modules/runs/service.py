"""
Run service.

Loads a run, applies one lifecycle transition and commits it. The worker
driving this service must not advance or fail the same run concurrently.
"""

import logging
from typing import List

from .errors import RunNotFoundError
from .lifecycle import Run, advance, fail
from .store import RunStore

logger = logging.getLogger(__name__)


class RunService:
    def __init__(self, store: RunStore):
        self.store = store

    async def start_run(self, profile_id: int) -> Run:
        return await self.store.create_run(profile_id)

    async def get_run(self, run_id: int) -> Run:
        """
        Get a run by id.

        Raises:
            RunNotFoundError: If the run does not exist
        """
        run = await self.store.get_run(run_id)
        if run is None:
            raise RunNotFoundError(run_id)
        return run

    async def list_runs(self, profile_id: int) -> List[Run]:
        return await self.store.list_runs(profile_id)

    async def advance_run(self, run_id: int) -> Run:
        """
        Advance a run one stage and persist it.

        Raises:
            RunNotFoundError: If the run does not exist
            FrozenStateError: If the run is already done or failed
        """
        run = await self.get_run(run_id)
        updated = advance(run)
        await self.store.save_run(updated)

        logger.info(
            f"Run {run_id} advanced: {run.current_state.value} -> {updated.current_state.value}"
        )
        return updated

    async def fail_run(self, run_id: int, message: str) -> Run:
        """
        Mark a run as failed and persist it.

        Raises:
            RunNotFoundError: If the run does not exist
            FrozenStateError: If the run is already done or failed
        """
        run = await self.get_run(run_id)
        updated = fail(run, message)
        await self.store.save_run(updated)

        logger.warning(f"Run {run_id} failed during {run.current_state.value}: {message}")
        return updated
