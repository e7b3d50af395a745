"""
Storage Module - Black Box Interface

Purpose: Own the Redis connection the run store writes through
Interface: connect(), disconnect()
Hidden: Redis specifics, connection pooling

Can be replaced with any storage backend without affecting other modules.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from ...config.provider import StorageConfig

logger = logging.getLogger(__name__)


class StorageModule:
    """Lazily opened Redis client built from StorageConfig."""

    def __init__(self, config: StorageConfig):
        self.config = config
        self._client: Optional[redis.Redis] = None

    async def connect(self) -> redis.Redis:
        """
        Get the Redis client, opening it on first use.

        Responses are decoded to str, which is what RedisRunStore stores.
        """
        if self._client is None:
            self._client = redis.from_url(self.config.redis_url, decode_responses=True)
            logger.info("Opened Redis connection for run storage")
        return self._client

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Closed Redis connection")


__all__ = ["StorageModule"]
