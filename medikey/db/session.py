from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from medikey.core.config import settings


def _engine_options(uri: str) -> dict:
    if uri.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live in a single connection
        if uri in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    # PostgreSQL configuration with connection pooling
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 300,     # Recycle connections every 5 minutes
        "pool_pre_ping": True,   # Validate connections before use
        "pool_timeout": 30,
    }


engine = create_engine(settings.SQLALCHEMY_DATABASE_URI, echo=False, **_engine_options(settings.SQLALCHEMY_DATABASE_URI))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
