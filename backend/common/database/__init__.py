"""
Common database utilities and session management.

This module provides the database abstraction layer shared by backend services:
the declarative base for panel records, the metadata store engine/session helpers
and the cached administrative engines used to reach database hosts.

Main Components:
    - Base: SQLAlchemy declarative base class for all ORM models
    - session: Engine caches, session factory and connection URL builders

Usage:
    ```python
    from common.database import get_db_session, get_host_engine

    with get_db_session() as session:
        host = session.get(DatabaseHost, 1)

    engine = get_host_engine(host)
    ```
"""

from .base import Base
from .session import (
    check_connection,
    create_host_url,
    create_sqlalchemy_url,
    dispose_engines,
    get_db_session,
    get_engine,
    get_host_engine,
    get_session_maker,
)

__all__ = [
    "Base",
    "check_connection",
    "create_host_url",
    "create_sqlalchemy_url",
    "dispose_engines",
    "get_db_session",
    "get_engine",
    "get_host_engine",
    "get_session_maker",
]
