"""
Database configuration and session management.

Transaction handling:
- get_db() is the only place that commits transactions
- Repositories use db.add() / db.flush() to write inside the transaction
- The get_db() dependency commits at the end of each successful request
  and rolls back on error
"""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool
from songs.config import Settings, settings


def build_engine_args(config: Settings) -> dict[str, Any]:
    """Engine keyword arguments for the configured database URL."""
    engine_args: dict[str, Any] = {
        "echo": config.DB_ECHO,
    }

    # SQLite needs check_same_thread=False for multi-threading
    if config.DATABASE_URL.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        # In-memory databases live as long as their connection, share a single one
        if config.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
            engine_args["poolclass"] = StaticPool
    elif config.DATABASE_URL.startswith("postgresql"):
        engine_args["pool_pre_ping"] = True
        engine_args["pool_size"] = config.DB_POOL_SIZE
        engine_args["max_overflow"] = config.DB_MAX_OVERFLOW
        engine_args["pool_recycle"] = config.DB_POOL_RECYCLE
    else:
        engine_args["pool_pre_ping"] = True

    return engine_args


engine = create_engine(settings.DATABASE_URL, **build_engine_args(settings))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,  # Manual flush for explicit transaction boundaries
    bind=engine,
)


class Base(DeclarativeBase):
    """Base class for all database models"""

    pass


def get_db():
    """
    Dependency that yields a database session.

    Commits on successful completion (harmless for read-only requests)
    and rolls back on error.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Create database tables"""
    Base.metadata.create_all(bind=engine)


def close_db():
    """Dispose database connections"""
    engine.dispose()
