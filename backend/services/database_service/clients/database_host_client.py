"""
Database Host Client

Administrative client for a single database host. The provisioning services only
depend on the RemoteDatabaseGateway protocol; MySqlDatabaseHostClient is the
implementation used in production and talks to MySQL/MariaDB hosts through a
SQLAlchemy engine.

Statements:
    - create_database: CREATE DATABASE `name`
    - create_user: CREATE USER 'user'@'remote' IDENTIFIED BY '...' [WITH MAX_USER_CONNECTIONS n]
    - assign_user_to_database: GRANT <privileges> ON `name`.* TO 'user'@'remote'
    - update_user_password: ALTER USER 'user'@'remote' IDENTIFIED BY '...'
    - drop_user: DROP USER IF EXISTS 'user'@'remote'
    - drop_database: DROP DATABASE IF EXISTS `name`
    - flush: FLUSH PRIVILEGES

Identifiers cannot be sent as bound parameters, so database names are checked
against a strict pattern before being quoted. Usernames, remote patterns and
passwords are always bound parameters.

Error Handling:
    Every SQLAlchemyError is wrapped in RemoteProvisioningError with the failing
    operation and host id; the driver error is kept as ``__cause__``. Timeouts are
    enforced by the driver (connect_timeout) and surface the same way.
"""

from __future__ import annotations

import re
from typing import Any, Protocol, runtime_checkable

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from services.database_service.exceptions import RemoteProvisioningError

DATABASE_PRIVILEGES = (
    "SELECT, INSERT, UPDATE, DELETE, CREATE, DROP, ALTER, INDEX, EXECUTE, "
    "CREATE TEMPORARY TABLES, CREATE VIEW, SHOW VIEW, CREATE ROUTINE, "
    "ALTER ROUTINE, EVENT, TRIGGER, REFERENCES, LOCK TABLES"
)

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")


@runtime_checkable
class RemoteDatabaseGateway(Protocol):
    """Operations the provisioning core performs against a database host."""

    def create_database(self, database: str) -> None: ...

    def create_user(
        self,
        username: str,
        remote: str,
        password: str,
        max_connections: int | None,
    ) -> None: ...

    def assign_user_to_database(self, database: str, username: str, remote: str) -> None: ...

    def update_user_password(self, username: str, remote: str, password: str) -> None: ...

    def drop_user(self, username: str, remote: str) -> None: ...

    def drop_database(self, database: str) -> None: ...

    def flush(self) -> None: ...


def quote_identifier(name: str) -> str:
    """Backtick-quote a database name after checking it is a plain identifier."""
    if not _IDENTIFIER.match(name):
        msg = f"Refusing to use {name!r} as a database identifier"
        raise ValueError(msg)
    return f"`{name}`"


class MySqlDatabaseHostClient:
    """
    RemoteDatabaseGateway implementation for MySQL and MariaDB hosts.

    Each call runs in its own transaction on the host engine. MySQL commits
    account and schema statements implicitly; flush() is the acknowledgment point
    after which grants are guaranteed to be live, and is safe to call repeatedly.

    Attributes:
        engine: Administrative engine for the host (see common.database.get_host_engine).
        host_id: Id of the DatabaseHost record, used in logs and errors.
    """

    def __init__(self, engine: Engine, host_id: int | None = None) -> None:
        self.engine = engine
        self.host_id = host_id

    def _execute(
        self, operation: str, statement: str, params: dict[str, Any] | None = None
    ) -> None:
        try:
            with self.engine.begin() as connection:
                connection.execute(text(statement), params or {})
        except SQLAlchemyError as e:
            logger.error(f"{operation} failed on database host {self.host_id}: {e}")
            raise RemoteProvisioningError(
                operation, host_id=self.host_id, internal_error=e
            ) from e
        logger.debug(f"{operation} succeeded on database host {self.host_id}")

    def create_database(self, database: str) -> None:
        self._execute("create_database", f"CREATE DATABASE {quote_identifier(database)}")

    def create_user(
        self,
        username: str,
        remote: str,
        password: str,
        max_connections: int | None,
    ) -> None:
        statement = "CREATE USER :username@:remote IDENTIFIED BY :password"
        params: dict[str, Any] = {
            "username": username,
            "remote": remote,
            "password": password,
        }
        if max_connections:
            statement += " WITH MAX_USER_CONNECTIONS :max_connections"
            params["max_connections"] = int(max_connections)
        self._execute("create_user", statement, params)

    def assign_user_to_database(self, database: str, username: str, remote: str) -> None:
        self._execute(
            "assign_user_to_database",
            f"GRANT {DATABASE_PRIVILEGES} ON {quote_identifier(database)}.* "
            "TO :username@:remote",
            {"username": username, "remote": remote},
        )

    def update_user_password(self, username: str, remote: str, password: str) -> None:
        self._execute(
            "update_user_password",
            "ALTER USER :username@:remote IDENTIFIED BY :password",
            {"username": username, "remote": remote, "password": password},
        )

    def drop_user(self, username: str, remote: str) -> None:
        self._execute(
            "drop_user",
            "DROP USER IF EXISTS :username@:remote",
            {"username": username, "remote": remote},
        )

    def drop_database(self, database: str) -> None:
        self._execute("drop_database", f"DROP DATABASE IF EXISTS {quote_identifier(database)}")

    def flush(self) -> None:
        self._execute("flush", "FLUSH PRIVILEGES")
