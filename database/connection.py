"""Database connection handling with multi-user support."""

from contextlib import contextmanager
from typing import Optional
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session

from config import get_database_url
from utils.logging_config import get_logger
from .models import Base

logger = get_logger(__name__)

# Global engine and session factory
_engine = None
_SessionFactory = None
_database_url: Optional[str] = None


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode and other pragmas for better concurrent access."""
    cursor = dbapi_conn.cursor()
    # WAL mode allows concurrent reads while writing
    cursor.execute("PRAGMA journal_mode=WAL")
    # Increase busy timeout for multi-user access (30 seconds)
    cursor.execute("PRAGMA busy_timeout=30000")
    # Enable foreign keys
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_database(url: Optional[str] = None):
    """Point the application at a different database.

    Disposes the current engine; the next get_engine() call connects to
    url, or to config.get_database_url() when url is None.
    """
    global _engine, _SessionFactory, _database_url
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None
    _database_url = url


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        url = _database_url or get_database_url()
        _engine = create_engine(
            url,
            echo=False,  # Set to True for SQL debugging
            pool_pre_ping=True,  # Check connection validity
        )
        if _engine.dialect.name == 'sqlite':
            # Set SQLite pragmas on each connection
            event.listen(_engine, "connect", _set_sqlite_pragma)
        logger.debug("Created database engine for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session_factory():
    """Get or create the session factory."""
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _SessionFactory


def init_db():
    """Initialize the database, creating all tables."""
    engine = get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database schema ready")


def get_session() -> Session:
    """Get a new database session."""
    factory = get_session_factory()
    return factory()


@contextmanager
def session_scope():
    """Provide a transactional scope around a series of operations.

    Usage:
        with session_scope() as session:
            session.add(some_object)
            # Commits automatically on success, rolls back on exception
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def check_database_access() -> tuple[bool, str]:
    """Check if database is accessible.

    Returns:
        Tuple of (success, message)
    """
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, "Database connection successful"
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False, f"Database connection failed: {str(e)}"
