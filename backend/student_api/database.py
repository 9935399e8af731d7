"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` and provides small helpers used by the
application, scripts and tests. In development the database is a local
SQLite file `app.db` beside the package directory; other environments
point `DATABASE_URL` at their own server.
"""

from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from .config import settings


def _engine_kwargs(url: str) -> dict:
    """Return driver specific engine arguments for `url`."""
    kwargs = {"echo": settings.DB_ECHO}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory SQLite lives per connection, so every session must share one
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return kwargs


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))


def _sql_lower(value):
    return value.lower() if isinstance(value, str) else value


if settings.is_sqlite:
    @event.listens_for(engine, "connect")
    def _register_unicode_lower(dbapi_conn, connection_record):
        """Replace SQLite's ASCII-only `lower()` with Python case folding.

        The name filter and the unique `lower(email)` index then agree with
        `str.lower()` for non-ASCII letters too.
        """
        dbapi_conn.create_function("lower", 1, _sql_lower, deterministic=True)


def create_db_and_tables():
    """Create database tables using SQLModel metadata.

    Tables and the case-insensitive email index are created when they do
    not exist yet; existing tables are left untouched.
    """
    from . import models  # noqa: F401  registers the table metadata
    SQLModel.metadata.create_all(engine)


def drop_db_and_tables():
    """Drop every table known to the SQLModel metadata. Used by tests and the seed script."""
    SQLModel.metadata.drop_all(engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
