"""Engine, session factory and table setup for the roster store."""

import logging
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from .config import DATABASE_URL, SQL_DEBUG

logger = logging.getLogger(__name__)

IS_SQLITE = DATABASE_URL.startswith("sqlite")

# FastAPI runs sync endpoints' sessions on worker threads
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if IS_SQLITE else {},
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=SQL_DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; rolls back whatever a failed request left open."""
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Roster store error, rolling back: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def create_tables():
    """Create the classes and students tables if they are missing."""
    from . import models  # noqa: F401  registers Classroom and Student on Base

    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Roster tables ready: {', '.join(sorted(Base.metadata.tables))}")
    except SQLAlchemyError as e:
        logger.error(f"Could not create roster tables: {e}")
        raise


def check_database_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Roster store unreachable: {e}")
        return False


@event.listens_for(engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only cascades class deletes to students with this pragma on."""
    if IS_SQLITE:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
