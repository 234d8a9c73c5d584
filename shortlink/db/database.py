import logging
from typing import Optional

import redis
from redis.connection import ConnectionPool
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from shortlink.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # needed for SQLite + FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    FastAPI dependency: yield a SQLAlchemy session and ensure it's closed.
    Usage: db: Session = Depends(database.get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _build_redis_client() -> Optional[redis.Redis]:
    if not settings.REDIS_HOST:
        logger.info("REDIS_HOST not set, running without Redis")
        return None
    pool = ConnectionPool(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        decode_responses=True,
        max_connections=50,
        socket_connect_timeout=2,
        socket_keepalive=True,
        retry_on_timeout=True,
    )
    return redis.Redis(connection_pool=pool)


redis_client = _build_redis_client()


def verify_redis_connection():
    if redis_client is None:
        return False
    try:
        redis_client.ping()
        logger.info("Redis connection verified")
        return True
    except redis.exceptions.ConnectionError as e:
        logger.warning(f"Redis connection failed: {e}. Service will run with degraded performance.")
        return False
    except Exception as e:
        logger.error(f"Unexpected Redis error: {e}")
        return False


def verify_database_connection():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
