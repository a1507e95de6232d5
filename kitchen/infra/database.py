"""Database configuration.

SQLAlchemy engine, session factory, declarative base and the unit-of-work
helper every mutating repository call runs inside. The engine is created on
first use so importing the package never touches the database.
"""
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, Iterator, Optional
import logging

from sqlalchemy import create_engine, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from kitchen.domain.errors import PersistenceFailure
from kitchen.utilities.config import DATABASE_URL, DATA_DIR, SQL_ECHO

logger = logging.getLogger(__name__)

Base = declarative_base()

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite stores datetimes without zone)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_engine() -> Engine:
    """Get or create the SQLAlchemy engine (lazy initialization)."""
    global _engine
    if _engine is None:
        if DATABASE_URL.startswith("sqlite"):
            DATA_DIR.mkdir(parents=True, exist_ok=True)
            _engine = create_engine(
                DATABASE_URL,
                echo=SQL_ECHO,
                connect_args={"check_same_thread": False},
            )
        else:
            _engine = create_engine(DATABASE_URL, echo=SQL_ECHO, pool_pre_ping=True)
        logger.info("Database engine created for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def init_db(engine: Optional[Engine] = None) -> None:
    """Create tables and seed the reference catalog (idempotent)."""
    # tables must be imported so their metadata is registered on Base
    from kitchen.infra import tables  # noqa: F401
    from kitchen.infra.Catalog_Repository import seed_catalog

    bind = engine or get_engine()
    Base.metadata.create_all(bind=bind)
    db = Session(bind=bind)
    try:
        with transaction(db):
            seed_catalog(db)
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Scoped unit of work: commit everything on success, roll back on any failure.

    Storage errors are re-raised as PersistenceFailure; domain errors
    (NotFound, Forbidden, ValidationFailure) propagate unchanged.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Transaction rolled back after storage error: %s", e)
        raise PersistenceFailure("Storage operation failed", detail=str(e)) from e
    except Exception:
        db.rollback()
        raise


__all__ = ["Base", "utcnow", "get_engine", "get_session_factory", "init_db", "get_db", "transaction"]
