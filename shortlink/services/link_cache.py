import logging
from typing import Optional

import redis.exceptions

logger = logging.getLogger(__name__)
CACHE_TTL = 86400

# Written over an evicted entry; no source starts with it (sources are http/https URLs)
TOMBSTONE = "-"


class LinkCache:
    """Redis read-through cache of code -> source for the redirect path.

    Fails open: a Redis outage only costs a store lookup. Eviction leaves a
    tombstone and ``put`` only writes unset keys, so a redirect that resolved
    the link before it was deleted cannot re-cache it afterwards.
    """

    def __init__(self, client, ttl: int = CACHE_TTL):
        self.client = client
        self.ttl = ttl

    @staticmethod
    def _key(code: str) -> str:
        return f"link:{code}"

    def get(self, code: str) -> Optional[str]:
        try:
            cached = self.client.get(self._key(code))
        except redis.exceptions.RedisError as e:
            logger.warning(f"Redis lookup failed for {code}: {e}")
            return None

        if cached is None:
            return None
        if isinstance(cached, (bytes, bytearray)):
            cached = cached.decode()
        if cached == TOMBSTONE:
            return None
        logger.info(f"Redirect cache HIT for {code} -> {cached[:50]}")
        return cached

    def put(self, code: str, source: str):
        try:
            if self.client.set(self._key(code), source, ex=self.ttl, nx=True):
                logger.debug(f"Cached {code} -> {source[:50]}")
        except redis.exceptions.RedisError as e:
            logger.warning(f"Failed to cache {code}, Redis unavailable: {e}")

    def evict(self, code: str):
        try:
            self.client.set(self._key(code), TOMBSTONE, ex=self.ttl)
        except redis.exceptions.RedisError as e:
            logger.error(f"Failed to evict {code} from cache, Redis unavailable: {e}")
