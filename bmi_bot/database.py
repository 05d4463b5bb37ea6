"""SQLAlchemy database connection."""
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from bmi_bot.config import config


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if "sqlite" in url else {}


# Engine for the configured database
engine = create_engine(
    config.DATABASE_URL,
    echo=False,  # True to debug SQL
    connect_args=_connect_args(config.DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def create_session_factory(url: str) -> sessionmaker:
    """Build a separate engine and session factory for the given URL."""
    other_engine = create_engine(url, echo=False, connect_args=_connect_args(url))
    return sessionmaker(autocommit=False, autoflush=False, bind=other_engine)


def init_db(bind=None) -> None:
    """Create all tables.

    Args:
        bind: engine to create tables on, the configured one by default
    """
    # Register models on Base.metadata before creating tables
    import bmi_bot.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def get_db(session_factory=None):
    """Context manager for DB sessions.

    Usage:
        with get_db() as db:
            entry = db.query(StorageEntry).first()
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
