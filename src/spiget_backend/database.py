import os
from functools import lru_cache
from typing import Generator, Callable
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool
import sqlalchemy.exc as sa_exc

POSTGRES_HOST = os.environ.get("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.environ.get("POSTGRES_PORT", "5432")
POSTGRES_USER = os.environ.get("POSTGRES_USER")
POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD")
POSTGRES_DB = os.environ.get("POSTGRES_DB")

DATABASE_URL = os.environ.get(
    "DATABASE_URL",
    f"postgresql+psycopg2://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}",
)

# Optional read replica; single-entity lookups prefer it ("secondary preferred")
DATABASE_REPLICA_URL = os.environ.get("DATABASE_REPLICA_URL")


def _create_engine(url: str) -> Engine:
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,     # 30 min - protects against idle disconnects
        pool_pre_ping=True,    # avoids stale connections
        pool_use_lifo=True,
        future=True
    )


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return _create_engine(DATABASE_URL)


@lru_cache(maxsize=1)
def get_read_engine() -> Engine:
    if not DATABASE_REPLICA_URL:
        return get_engine()
    return _create_engine(DATABASE_REPLICA_URL)


def _session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        expire_on_commit=False,  # more convenient with Pydantic
        autoflush=False,         # prevents "accidental" DB touching
        class_=Session
    )


def _get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Internal database session generator with transaction management.

    Handles:
    - Session creation and cleanup
    - Automatic commit on success
    - Rollback on exceptions
    """
    db = _session_factory(engine)()
    try:
        yield db

        # Only commit if we have an open transaction
        if db.in_transaction():
            db.commit()
    except Exception:
        # Rollback on any exception
        if db.in_transaction():
            db.rollback()
        raise
    finally:
        # Always close the session
        db.close()


def _guard_pool(sessions: Generator[Session, None, None]) -> Generator[Session, None, None]:
    try:
        yield from sessions
    except sa_exc.TimeoutError as e:  # QueuePool acquisition timed out
        # Import here to avoid circular dependency
        from spiget_backend.exceptions import DatabaseConnectionException
        raise DatabaseConnectionException(
            detail="Database is busy. Please retry shortly.",
            headers={"Retry-After": "2"}
        ) from e


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: session on the primary database.

    Used for list queries and for writes (update requests).

    Usage:
        @router.get("/resources")
        async def list_resources(db: Session = Depends(get_db)):
            ...
    """
    yield from _guard_pool(_get_session(get_engine()))


def get_read_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: session for single-entity reads.

    Bound to DATABASE_REPLICA_URL when configured, otherwise identical to
    get_db. Reads through this session may be stale; callers must not assume
    they observe their own writes.
    """
    yield from _guard_pool(_get_session(get_read_engine()))
