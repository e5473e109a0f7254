from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine for the configured URL.

    SQLite gets WAL + per-connection pragmas; an in-memory URL is pinned to a
    single shared connection so every session sees the same tables.
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}  # Allow SQLite to work with FastAPI's threadpool
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            engine = create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        else:
            engine = create_engine(database_url, connect_args=connect_args)

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA synchronous=NORMAL;")
            cursor.execute("PRAGMA busy_timeout=5000;")
            cursor.close()

        return engine

    # Postgres or others
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    # Import models so they're registered with Base
    from leadintake import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
