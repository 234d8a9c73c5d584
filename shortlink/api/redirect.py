from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from typing import Optional
import logging

from shortlink.api.deps import get_cache, get_registry
from shortlink.db import database
from shortlink.services.link_cache import LinkCache
from shortlink.services.shortener import LinkRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


@router.get("/{code}")
def redirect_to_source_endpoint(
    code: str,
    db: Session = Depends(database.get_db),
    registry: LinkRegistry = Depends(get_registry),
    cache: Optional[LinkCache] = Depends(get_cache),
):
    """
    Follow a short code to the original URL.
    """
    if cache is not None:
        cached_source = cache.get(code)
        if cached_source:
            return RedirectResponse(url=cached_source, status_code=status.HTTP_301_MOVED_PERMANENTLY)

    link = registry.resolve(db, code)
    if link is None:
        logger.warning(f"Redirect 404: Code not found: {code}")
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    if cache is not None:
        cache.put(code, link.source)
    logger.info(f"Redirect DB HIT for {code} -> {link.source[:50]}")
    return RedirectResponse(url=link.source, status_code=status.HTTP_301_MOVED_PERMANENTLY)
