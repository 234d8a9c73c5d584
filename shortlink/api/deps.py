from functools import lru_cache
from typing import Optional

from shortlink.core.config import get_settings
from shortlink.db import database
from shortlink.services.link_cache import LinkCache
from shortlink.services.shortener import LinkRegistry, build_registry


@lru_cache()
def get_registry() -> LinkRegistry:
    # One registry per process: the memory allocator's counter lives on it
    return build_registry(get_settings(), database.redis_client)


def get_cache() -> Optional[LinkCache]:
    if database.redis_client is None:
        return None
    return LinkCache(database.redis_client, get_settings().CACHE_TTL)
