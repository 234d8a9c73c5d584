from fastapi import APIRouter
from shortlink.core.config import settings
from shortlink.db import database

router = APIRouter(tags=["health"])

# simple liveness
@router.get("/health")
def health():
    return {"status": "healthy", "service": "shortlink"}

# readiness: check DB (+ Redis when configured)
@router.get("/ready")
def readiness():
    details = {"db": "ok" if database.verify_database_connection() else "error"}
    if settings.REDIS_HOST:
        details["redis"] = "ok" if database.verify_redis_connection() else "error"
    else:
        details["redis"] = "disabled"

    ready = all(v in ("ok", "disabled") for v in details.values())
    return {"ready": ready, "details": details}
