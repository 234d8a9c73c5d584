from typing import Callable, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
import logging

from shortlink.db.models import Link

logger = logging.getLogger(__name__)


def get_link(db: Session, identifier: int, include_deleted: bool = False) -> Optional[Link]:
    query = db.query(Link).filter(Link.id == identifier)
    if not include_deleted:
        query = query.filter(Link.deleted_at.is_(None))
    return query.first()


def get_link_by_code(db: Session, code: str) -> Optional[Link]:
    return db.query(Link).filter(Link.code == code, Link.deleted_at.is_(None)).first()


def count_links(db: Session) -> int:
    """Count every link ever stored, soft-deleted ones included."""
    return db.query(func.count(Link.id)).scalar() or 0


def max_identifier(db: Session) -> int:
    return db.query(func.max(Link.id)).scalar() or 0


def _commit_and_refresh(db: Session, link: Link) -> Link:
    try:
        db.add(link)
        db.commit()
        db.refresh(link)
        return link
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            "IntegrityError creating Link id=%s code=%s: %s",
            link.id, link.code, str(e)
        )
        raise


def create_link(db: Session, identifier: int, source: str, code: str) -> Link:
    return _commit_and_refresh(db, Link(id=identifier, source=source, code=code))


def create_link_with_store_identifier(db: Session, source: str, encode: Callable[[int], str]) -> Link:
    # Flush first so the store assigns the id, then derive the code in the same transaction
    link = Link(source=source)
    try:
        db.add(link)
        db.flush()
        link.code = encode(link.id)
    except Exception:
        db.rollback()
        raise
    return _commit_and_refresh(db, link)


def soft_delete_link(db: Session, link: Link) -> Link:
    link.deleted_at = datetime.utcnow()
    db.commit()
    db.refresh(link)
    return link
