import logging

from sqlalchemy.orm import Session

from medikey import crud, schemas
from medikey.core.config import settings
from medikey.db.base import Base
from medikey.db.session import engine

# Register every model on Base.metadata before create_all
from medikey import models  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables verified")


def seed_default_user(db: Session) -> None:
    """Create the demo account on an empty users table"""
    if crud.user.count(db) > 0:
        return
    user_in = schemas.UserCreate(
        username=settings.DEFAULT_USER_USERNAME,
        password=settings.DEFAULT_USER_PASSWORD,
        full_name=settings.DEFAULT_USER_FULL_NAME,
        email=settings.DEFAULT_USER_EMAIL,
    )
    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Created default user '{user.username}' (id={user.id})")


def init_db(db: Session) -> None:
    if settings.CREATE_TABLES_ON_STARTUP:
        create_tables()
    if settings.SEED_DEFAULT_USER:
        seed_default_user(db)
