"""
Database utility functions for connection management outside the request scope.

Request handlers receive their session from ``api.deps.get_db``; the WebSocket
relay and the startup hook use ``get_db_session`` instead.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import text
from sqlalchemy.orm import Session

from medikey.db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Get a database session with proper cleanup using context manager.

    Usage:
        with get_db_session() as db:
            result = db.query(Model).all()

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()  # Commit successful operations
    except Exception as e:
        db.rollback()  # Rollback on any exception
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()  # Always close the session


def check_database_health() -> bool:
    """Run a trivial query; used by the health endpoint"""
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
