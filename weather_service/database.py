"""Database setup and SQLAlchemy models."""

import os

from sqlalchemy import (
    create_engine,
    Column,
    Integer,
    Float,
    String,
    DateTime,
    Index,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Reading(Base):
    """One temperature observation for a city (append-only)."""

    __tablename__ = "reading"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    temperature = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_reading_name_timestamp", "name", "timestamp"),
    )


def create_db_engine(database_url: str, timeout: float = 10.0) -> Engine:
    """Create a database engine.

    ``timeout`` bounds how long a connection attempt (or, for SQLite, a
    lock wait) may block.
    """
    in_memory = database_url in ("sqlite://", "sqlite:///:memory:")

    # Ensure data directory exists
    if database_url.startswith("sqlite:///") and not in_memory:
        db_path = database_url.replace("sqlite:///", "")
        os.makedirs(os.path.dirname(db_path) if os.path.dirname(db_path) else ".", exist_ok=True)

    # SQLite-specific settings
    if "sqlite" in database_url:
        # An in-memory database exists only inside its one connection;
        # file databases get a connection per session from the default pool
        pool_args = {"poolclass": StaticPool} if in_memory else {}
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": timeout},
            **pool_args,
        )

        # Enable WAL mode for better concurrent access
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args={"connect_timeout": int(timeout)},
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Get session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)
