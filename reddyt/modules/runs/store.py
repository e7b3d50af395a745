"""
Run persistence.

RunStore is the interface the run service consumes; RedisRunStore is the
default backend. Each run is a JSON document, writes are single-key and
therefore atomic per run.
"""

import logging
from datetime import UTC, datetime
from typing import List, Optional, Protocol

from .lifecycle import Run

logger = logging.getLogger(__name__)


class RunStore(Protocol):
    """Protocol for run persistence - allows swappable backends."""

    async def get_run(self, run_id: int) -> Optional[Run]:
        ...

    async def save_run(self, run: Run) -> None:
        ...

    async def create_run(self, profile_id: int, run_date: Optional[datetime] = None) -> Run:
        ...

    async def list_runs(self, profile_id: int) -> List[Run]:
        ...


class RedisRunStore:
    """Redis-backed run store."""

    def __init__(self, redis_client):
        """
        Initialize run store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
        """
        self.redis = redis_client

    @staticmethod
    def _run_key(run_id: int) -> str:
        return f"run:{run_id}"

    @staticmethod
    def _profile_key(profile_id: int) -> str:
        return f"profile:{profile_id}:runs"

    async def get_run(self, run_id: int) -> Optional[Run]:
        """
        Get a run by id.

        Returns:
            Run or None if not found
        """
        data = await self.redis.get(self._run_key(run_id))
        if data:
            return Run.model_validate_json(data)
        return None

    async def save_run(self, run: Run) -> None:
        """Persist the full run document."""
        await self.redis.set(self._run_key(run.id), run.model_dump_json())

    async def create_run(self, profile_id: int, run_date: Optional[datetime] = None) -> Run:
        """
        Create a new idling run for a profile.

        Args:
            profile_id: Owning profile
            run_date: When the run was scheduled (defaults to now)

        Returns:
            The stored run
        """
        run_id = await self.redis.incr("runs:next_id")
        run = Run(
            id=run_id,
            profile_id=profile_id,
            run_date=run_date or datetime.now(UTC),
        )
        await self.save_run(run)
        await self.redis.zadd(self._profile_key(profile_id), {str(run_id): run.run_date.timestamp()})

        logger.info(f"Created run {run_id} for profile {profile_id}")
        return run

    async def list_runs(self, profile_id: int) -> List[Run]:
        """All runs of a profile, oldest first."""
        run_ids = await self.redis.zrange(self._profile_key(profile_id), 0, -1)
        if not run_ids:
            return []

        documents = await self.redis.mget([self._run_key(run_id) for run_id in run_ids])
        return [Run.model_validate_json(doc) for doc in documents if doc]
