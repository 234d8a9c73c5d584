from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from shortlink.api.deps import get_cache, get_registry
from shortlink.core.config import settings
from shortlink.db import database
from shortlink.db.models import Link
from shortlink.schemas import LinkCreateRequest, LinkEnvelope, LinkResponse
from shortlink.services.link_cache import LinkCache
from shortlink.services.shortener import LinkRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/links", tags=["links"])


def to_envelope(link: Link) -> LinkEnvelope:
    payload = LinkResponse.model_validate(link)
    payload.short_url = f"{settings.BASE_URL}/{link.code}"
    return LinkEnvelope(data=payload)


@router.post(
    "",
    response_model=LinkEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_link_endpoint(
    link_request: LinkCreateRequest,
    db: Session = Depends(database.get_db),
    registry: LinkRegistry = Depends(get_registry),
):
    link = registry.create(db, link_request.source)
    logger.info(f"API success: Shortened {link.source[:50]}... to {link.code}")
    return to_envelope(link)


@router.get("/{code}", response_model=LinkEnvelope, response_model_exclude_none=True)
def show_link_endpoint(
    code: str,
    db: Session = Depends(database.get_db),
    registry: LinkRegistry = Depends(get_registry),
):
    link = registry.resolve(db, code)
    if link is None:
        logger.warning(f"Show 404: Code not found: {code}")
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return to_envelope(link)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_link_endpoint(
    code: str,
    db: Session = Depends(database.get_db),
    registry: LinkRegistry = Depends(get_registry),
    cache: Optional[LinkCache] = Depends(get_cache),
):
    if not registry.remove(db, code):
        logger.warning(f"Delete 404: Code not found: {code}")
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    if cache is not None:
        cache.evict(code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
