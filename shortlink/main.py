from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import redis.exceptions
import logging

from shortlink.core.config import settings
from shortlink.core.logging_config import configure_logging
from shortlink.db import database
from shortlink.db.models import Base
from shortlink.api import links, redirect
from shortlink.api.deps import get_registry
from shortlink.routers import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")

    Base.metadata.create_all(bind=database.engine)
    logger.info("Database models initialized/checked.")
    database.verify_redis_connection()
    # Fail fast on a bad identifier strategy instead of on the first request
    get_registry()

    yield

    logger.info("Shutting down gracefully...")
    try:
        database.engine.dispose()
    except SQLAlchemyError:
        logger.debug("Error disposing DB engine")
    if database.redis_client is not None:
        try:
            database.redis_client.close()
        except redis.exceptions.RedisError:
            logger.debug("Error closing Redis client")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Short, salted, reversible links",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["Content-Type"],
)

# health first so /health and /ready aren't swallowed by the /{code} redirect
app.include_router(health.router)
app.include_router(links.router)
app.include_router(redirect.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return JSONResponse(
        status_code=422,
        content={"error": "; ".join(messages)},
    )


@app.exception_handler(SQLAlchemyError)
@app.exception_handler(redis.exceptions.RedisError)
async def store_exception_handler(request: Request, exc: Exception):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
