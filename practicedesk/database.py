# practicedesk/database.py
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from practicedesk.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Postgres connection
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=5       : one small pool per worker process
# - pool_pre_ping=True: validate connections before using them
#
# SQLite (local dev / tests) gets check_same_thread=False since
# FastAPI runs sync handlers in a threadpool.
# ---------------------------------------------------------


def build_database_url(url: str, ssl_required: bool) -> str:
    """Append sslmode=require to Postgres URLs that don't set it."""
    if not url.startswith("postgresql") or not ssl_required:
        return url
    if "sslmode=" in url:
        return url
    return url + ("&" if "?" in url else "?") + "sslmode=require"


def make_engine(url: str, ssl_required: bool = True) -> Engine:
    """
    Create the SQLAlchemy engine for the given URL.

    SQLite engines also switch on foreign key enforcement so that
    ON DELETE CASCADE behaves the same as on Postgres.
    """
    if url.startswith("sqlite"):
        # In-memory databases live per connection; share a single one.
        in_memory = url in ("sqlite://", "sqlite:///:memory:")
        sqlite_engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool if in_memory else None,
        )
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_engine(
        build_database_url(url, ssl_required),
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=5,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = make_engine(settings.DATABASE_URL, settings.DATABASE_SSL_REQUIRED)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
