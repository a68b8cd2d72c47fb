"""
Pytest configuration and fixtures for database service tests.

The metadata store is an in-memory SQLite database shared through a StaticPool;
database hosts are replaced by a MagicMock gateway so no engine is ever opened.
"""

import os
import tempfile
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing modules
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_PORT", "5432")
os.environ.setdefault("POSTGRES_USER", "postgres")
os.environ.setdefault("POSTGRES_PASSWORD", "postgres")
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="database-service-logs-"))

from common.database import Base  # noqa: E402
from services.database_service.clients import MySqlDatabaseHostClient  # noqa: E402
from services.database_service.database import (  # noqa: E402
    DatabaseHostRepository,
    DatabaseRepository,
    ServerRepository,
)
from services.database_service.services import DatabaseManagementService  # noqa: E402


@pytest.fixture
def session_maker():
    """Return a session factory bound to a fresh in-memory metadata store."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def database_repository(session_maker) -> DatabaseRepository:
    return DatabaseRepository(session_maker)


@pytest.fixture
def host_repository(session_maker) -> DatabaseHostRepository:
    return DatabaseHostRepository(session_maker)


@pytest.fixture
def server_repository(session_maker) -> ServerRepository:
    return ServerRepository(session_maker)


@pytest.fixture
def make_server(server_repository):
    """Factory creating servers on node 1 with an unlimited database quota."""

    def _make_server(**overrides):
        values = {"name": "test-server", "node_id": 1, "database_limit": None}
        values.update(overrides)
        return server_repository.create(values)

    return _make_server


@pytest.fixture
def server(make_server):
    return make_server()


@pytest.fixture
def make_host(host_repository):
    """Factory creating database hosts on node 1."""

    def _make_host(**overrides):
        values = {
            "name": "mysql-01",
            "host": "10.0.0.10",
            "port": 3306,
            "username": "panel",
            "password": "secret",
            "node_id": 1,
        }
        values.update(overrides)
        return host_repository.create(values)

    return _make_host


@pytest.fixture
def host(make_host):
    return make_host()


@pytest.fixture
def gateway() -> MagicMock:
    """Return a mock database host client."""
    return MagicMock(spec=MySqlDatabaseHostClient)


@pytest.fixture
def client_factory(gateway) -> MagicMock:
    return MagicMock(return_value=gateway)


@pytest.fixture
def service(database_repository, host_repository, client_factory) -> DatabaseManagementService:
    return DatabaseManagementService(
        databases=database_repository,
        hosts=host_repository,
        client_factory=client_factory,
        client_databases_enabled=True,
    )


@pytest.fixture
def make_database(database_repository):
    """Factory inserting a database record directly, without touching any host."""

    def _make_database(server, host, name, **overrides):
        values = {
            "server_id": server.id,
            "database_host_id": host.id,
            "database": name,
            "username": f"u{server.id}_abcdefghij",
            "remote": "%",
        }
        values.update(overrides)
        return database_repository.create(values)

    return _make_database
