from sqlalchemy.orm import Session
from typing import Optional
import logging

from shortlink.db import repository
from shortlink.db.models import Link
from shortlink.services.identifiers import MemoryIdentifierAllocator, RedisIdentifierAllocator
from shortlink.utils.encoding import LinkCodec

logger = logging.getLogger(__name__)


class LinkRegistry:
    """Creates links and resolves codes back to them.

    ``allocator`` of None delegates identifier assignment to the store's
    auto-increment.
    """

    def __init__(self, codec: LinkCodec, allocator=None):
        self.codec = codec
        self.allocator = allocator

    @staticmethod
    def _high_water_mark(db: Session) -> int:
        # Equal to the count when identifiers are contiguous; the max keeps a
        # gap left by a failed insert from handing out a taken id.
        return max(repository.count_links(db), repository.max_identifier(db))

    def create(self, db: Session, source: str) -> Link:
        if self.allocator is None:
            link = repository.create_link_with_store_identifier(db, source, self.codec.encode)
        else:
            identifier = self.allocator.allocate(lambda: self._high_water_mark(db))
            link = repository.create_link(db, identifier, source, self.codec.encode(identifier))
        logger.info("Created link %s (id=%d) for %s", link.code, link.id, source[:50])
        return link

    def _lookup(self, db: Session, code: str) -> Optional[Link]:
        identifier = self.codec.decode(code)
        if identifier is None:
            # Same outcome as an unknown record so callers can't probe code validity
            logger.debug("Code %r does not decode", code)
            return None
        return repository.get_link(db, identifier)

    def resolve(self, db: Session, code: str) -> Optional[Link]:
        link = self._lookup(db, code)
        if link is None:
            logger.info("Resolve miss for code %r", code)
        return link

    def remove(self, db: Session, code: str) -> bool:
        link = self._lookup(db, code)
        if link is None:
            logger.info("Remove miss for code %r", code)
            return False
        repository.soft_delete_link(db, link)
        logger.info("Soft-deleted link %s (id=%d)", link.code, link.id)
        return True


def build_registry(settings, redis_client=None) -> LinkRegistry:
    codec = LinkCodec.from_settings(settings)
    strategy = settings.IDENTIFIER_STRATEGY
    if strategy == "memory":
        allocator = MemoryIdentifierAllocator()
    elif strategy == "redis":
        if redis_client is None:
            raise ValueError("IDENTIFIER_STRATEGY=redis requires REDIS_HOST")
        allocator = RedisIdentifierAllocator(redis_client)
    elif strategy == "database":
        allocator = None
    else:
        raise ValueError(f"Unknown identifier strategy: {strategy}")
    logger.info("Link registry using '%s' identifier strategy", strategy)
    return LinkRegistry(codec, allocator)
