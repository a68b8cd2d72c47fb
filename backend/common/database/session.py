"""
Common database session management with connection pooling.

This module owns every SQLAlchemy engine the backend opens:

    - The metadata store (PostgreSQL) that holds servers, database hosts and
      database records. Connection parameters come from POSTGRES_* environment
      variables; the database name comes from METADATA_DATABASE_NAME.
    - One engine per database host (MySQL) used to run administrative statements
      (create database, create user, grant). Connection parameters come from the
      DatabaseHost record.

Engines are cached so repeated calls share a connection pool.

Usage:
    ```python
    from common.database import get_db_session

    with get_db_session() as session:
        hosts = session.query(DatabaseHost).all()
    ```
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import Session, sessionmaker

from common.config import get_settings

if TYPE_CHECKING:
    from common.models import DatabaseHost

load_dotenv()

# Global engine caches to avoid creating multiple pools for the same target
_engines: dict[str, Engine] = {}
_host_engines: dict[tuple[int, str, int, str], Engine] = {}
_session_makers: dict[str, sessionmaker[Session]] = {}


def create_sqlalchemy_url(database_name: str) -> URL:
    """
    Create the SQLAlchemy URL for the metadata store.

    Args:
        database_name: Name of the database to connect to.

    Returns:
        SQLAlchemy URL object using the ``postgresql+pg8000`` driver and the
        POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST and POSTGRES_PORT
        environment variables.

    Raises:
        ValueError: If database_name is empty.
    """
    if not database_name:
        msg = "database_name is required to build a metadata store URL"
        raise ValueError(msg)

    return URL.create(
        drivername="postgresql+pg8000",
        username=os.getenv("POSTGRES_USER"),
        password=os.getenv("POSTGRES_PASSWORD"),
        host=os.getenv("POSTGRES_HOST"),
        port=int(os.getenv("POSTGRES_PORT", "5432")),
        database=database_name,
    )


def create_host_url(host: DatabaseHost) -> URL:
    """
    Create the SQLAlchemy URL used to administer a database host.

    The connection is made without selecting a database: every statement issued
    against a host is server-level (CREATE DATABASE, CREATE USER, GRANT ...).
    """
    return URL.create(
        drivername="mysql+pymysql",
        username=host.username,
        password=host.password,
        host=host.host,
        port=host.port,
    )


def get_engine(database_name: str | None = None) -> Engine:
    """
    Get (or create) the cached engine for the metadata store.

    Args:
        database_name: Optional override of the configured METADATA_DATABASE_NAME.
    """
    settings = get_settings("database-service")
    name = database_name or settings.METADATA_DATABASE_NAME

    if name not in _engines:
        logger.info(f"Creating metadata store engine for database '{name}'")
        _engines[name] = create_engine(
            create_sqlalchemy_url(name),
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return _engines[name]


def get_session_maker(database_name: str | None = None) -> sessionmaker[Session]:
    """
    Get the cached session factory for the metadata store.

    Sessions do not expire objects on commit so records returned by repositories
    stay readable after their session is closed.
    """
    engine = get_engine(database_name)
    key = str(engine.url)
    if key not in _session_makers:
        _session_makers[key] = sessionmaker(bind=engine, expire_on_commit=False)
    return _session_makers[key]


@contextmanager
def get_db_session(database_name: str | None = None) -> Iterator[Session]:
    """
    Provide a metadata store session that commits on success and rolls back on error.
    """
    session = get_session_maker(database_name)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_host_engine(host: DatabaseHost) -> Engine:
    """
    Get (or create) the cached administrative engine for a database host.

    The cache key includes the connection parameters, so editing a host's address
    or credentials transparently produces a fresh engine.
    """
    key = (host.id, host.host, host.port, host.username)
    if key not in _host_engines:
        settings = get_settings("database-service")
        logger.info(
            f"Creating engine for database host {host.id} ({host.host}:{host.port})"
        )
        _host_engines[key] = create_engine(
            create_host_url(host),
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={"connect_timeout": settings.DATABASE_HOST_CONNECT_TIMEOUT},
        )
    return _host_engines[key]


def check_connection(engine: Engine) -> bool:
    """Return True when a trivial query succeeds on the engine."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Connection check failed for {engine.url.host}: {e}")
        return False


def dispose_engines() -> None:
    """Dispose every cached engine (metadata store and database hosts)."""
    for engine in list(_engines.values()) + list(_host_engines.values()):
        engine.dispose()
    _engines.clear()
    _host_engines.clear()
    _session_makers.clear()
