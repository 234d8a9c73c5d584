"""Identifier allocation for new links.

An allocator hands out the next link identifier. ``count_existing`` is only
called to seed the counter the first time, and returns the store's high-water
mark (every link ever stored, soft-deleted ones included).
"""
import logging
import threading
from typing import Callable

import redis

logger = logging.getLogger(__name__)

CountExisting = Callable[[], int]


class MemoryIdentifierAllocator:
    """In-process counter. Safe across threads, not across processes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last = None

    def allocate(self, count_existing: CountExisting) -> int:
        with self._lock:
            if self._last is None:
                self._last = count_existing()
                logger.info("Identifier counter seeded from store at %d", self._last)
            self._last += 1
            return self._last


class RedisIdentifierAllocator:
    """Counter shared by every process pointed at the same Redis key.

    The key is re-seeded from the store whenever it is missing, not just on
    first use, so a Redis restart or FLUSHDB doesn't rewind identifiers to 1.
    """

    DEFAULT_KEY = "shortlink:last_identifier"

    def __init__(self, client: redis.Redis, key: str = DEFAULT_KEY):
        self._client = client
        self._key = key

    def _seed(self, count_existing: CountExisting):
        if self._client.exists(self._key):
            return
        # NX: among racing processes only the first seed lands
        if self._client.set(self._key, count_existing(), nx=True):
            logger.info("Seeded Redis identifier counter %s", self._key)

    def allocate(self, count_existing: CountExisting) -> int:
        self._seed(count_existing)
        return int(self._client.incr(self._key))
