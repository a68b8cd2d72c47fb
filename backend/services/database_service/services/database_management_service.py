"""
Database Management Service

Core of the database service: creates and deletes per-server databases on the
shared database hosts while keeping the panel's record store consistent with the
physical state of each host.

Create Workflow:
    1. Feature gate: reject when client databases are disabled
    2. Quota: reject when the server is at its database_limit (skippable)
    3. Name validation: the name must be ``s{server_id}_{label}``
    4. Duplicate check: the name must not exist on any host
    5. Remote provisioning: create database, create user, grant, flush
    6. Local persistence: write the Database record

    If any remote step fails (or the call is interrupted), the service tries to
    drop the database and the user it was creating, ignoring failures of that
    cleanup, then re-raises the original error. No record is written.

Delete Workflow:
    Drop the remote user, then the remote database, flush, and only then remove
    the record. A remote failure leaves the record in place so nothing on the
    host becomes untracked.

Concurrency:
    The quota and duplicate checks are read-then-act and are not serialized here.
    The unique constraint on ``databases.database`` is the actual guarantee; a
    violation surfaces as DuplicateDatabaseNameError from the repository.

Known Gap:
    If the record cannot be written after the host committed the database, the
    remote objects are left in place. The failure is logged at error level with
    the names involved and the persistence error propagates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import re
from typing import Any

from loguru import logger

from common.models import DATABASE_NAME_MAX_LENGTH, Database, DatabaseHost, Server
from services.database_service.clients import (
    RemoteDatabaseGateway,
    get_database_host_client,
)
from services.database_service.database import (
    DatabaseHostRepository,
    DatabaseRepository,
)
from services.database_service.exceptions import (
    DatabaseClientFeatureNotEnabledError,
    DatabaseHostNotFoundError,
    DuplicateDatabaseNameError,
    InvalidDatabaseNameError,
    TooManyDatabasesError,
)

from .credentials import CredentialGenerator, generate_unique_database_name

DEFAULT_REMOTE = "%"

GatewayFactory = Callable[[DatabaseHost], RemoteDatabaseGateway]


def attempt(description: str, operation: Callable[..., Any], *args: Any) -> Exception | None:
    """
    Run a best-effort operation.

    Failures are logged and returned instead of raised, so a cleanup step can
    never mask the error that triggered it.

    Returns:
        The exception raised by ``operation``, or None when it succeeded.
    """
    try:
        operation(*args)
    except Exception as e:
        logger.warning(f"Ignoring failure while {description}: {e}")
        return e
    return None


class DatabaseManagementService:
    """
    Creates and deletes server databases.

    Attributes:
        databases: Record store for Database rows.
        hosts: Record store for DatabaseHost rows.
        client_factory: Builds the RemoteDatabaseGateway for a host.
        client_databases_enabled: Feature flag gating create().
        credentials: Username/password generator.

    Example:
        ```python
        service = DatabaseManagementService(client_databases_enabled=True)

        database = service.create(server, {
            "database": DatabaseManagementService.generate_unique_database_name("shop", server.id),
            "database_host_id": 2,
            "remote": "%",
        })
        print(database.username, database.password)

        service.delete(database.id)
        ```
    """

    def __init__(
        self,
        databases: DatabaseRepository | None = None,
        hosts: DatabaseHostRepository | None = None,
        client_factory: GatewayFactory = get_database_host_client,
        client_databases_enabled: bool = True,
        credentials: CredentialGenerator | None = None,
    ) -> None:
        self.databases = databases or DatabaseRepository()
        self.hosts = hosts or DatabaseHostRepository()
        self.client_factory = client_factory
        self.client_databases_enabled = client_databases_enabled
        self.credentials = credentials or CredentialGenerator()

    @staticmethod
    def generate_unique_database_name(label: str, server_id: int) -> str:
        """Deterministic ``s{server_id}_{label}`` name, see credentials module."""
        return generate_unique_database_name(label, server_id)

    @staticmethod
    def is_valid_database_name(name: Any, server_id: int) -> bool:
        """True when ``name`` is ``s{server_id}_`` followed by a non-empty label."""
        if not isinstance(name, str) or not name or len(name) > DATABASE_NAME_MAX_LENGTH:
            return False
        pattern = rf"s{server_id}_[A-Za-z0-9_]+"
        return re.fullmatch(pattern, name) is not None

    def create(
        self,
        server: Server,
        data: Mapping[str, Any],
        validate_database_limit: bool = True,
    ) -> Database:
        """
        Provision a database on a host and record it.

        Args:
            server: Owning server.
            data: Request values:
                - database (str): Name, must be ``s{server.id}_{label}``.
                - database_host_id (int): Target host.
                - remote (str, optional): Remote-access pattern. Default ``%``.
                - max_connections (int, optional): Per-user connection cap.
            validate_database_limit: Internal callers may pass False to bypass
                the server's quota. Never expose this to untrusted callers.

        Returns:
            The persisted Database with its transient ``password`` filled in.

        Raises:
            DatabaseClientFeatureNotEnabledError: Feature flag is off.
            TooManyDatabasesError: Server is at its limit.
            InvalidDatabaseNameError: Name missing or wrongly prefixed.
            DuplicateDatabaseNameError: Name exists on any host.
            DatabaseHostNotFoundError: database_host_id is unknown.
            Exception: Whatever the gateway raised, unchanged, after cleanup.
        """
        if not self.client_databases_enabled:
            logger.warning(f"Rejected database creation for server {server.id}: feature disabled")
            raise DatabaseClientFeatureNotEnabledError()

        if validate_database_limit and server.database_limit is not None:
            count = self.databases.count_for_server(server.id)
            if count >= server.database_limit:
                logger.warning(
                    f"Rejected database creation for server {server.id}: "
                    f"{count}/{server.database_limit} databases in use"
                )
                raise TooManyDatabasesError()

        name = data.get("database")
        if not self.is_valid_database_name(name, server.id):
            logger.warning(f"Rejected database name {name!r} for server {server.id}")
            raise InvalidDatabaseNameError()

        # Fast path only: the unique constraint is the real guard.
        if self.databases.find_first_where(database=name) is not None:
            logger.warning(f"Rejected duplicate database name '{name}' for server {server.id}")
            raise DuplicateDatabaseNameError()

        host = self._get_host(data.get("database_host_id"))
        client = self.client_factory(host)

        remote = data.get("remote") or DEFAULT_REMOTE
        max_connections = data.get("max_connections")
        username = self.credentials.generate_username(server.id)
        password = self.credentials.generate_password()

        try:
            client.create_database(name)
            client.create_user(username, remote, password, max_connections)
            client.assign_user_to_database(name, username, remote)
            client.flush()
        except BaseException as e:
            # BaseException so interrupts still clean up partial remote state.
            logger.error(
                f"Provisioning '{name}' on database host {host.id} failed, cleaning up: {e!r}"
            )
            self._cleanup(client, name, username, remote)
            raise

        try:
            database = self.databases.create(
                {
                    "server_id": server.id,
                    "database_host_id": host.id,
                    "database": name,
                    "username": username,
                    "remote": remote,
                    "max_connections": max_connections,
                }
            )
        except Exception as e:
            logger.error(
                f"Database '{name}' and user '{username}' exist on database host {host.id} "
                f"but the record could not be saved: {e!r}"
            )
            raise

        database.password = password
        logger.info(
            f"Provisioned database '{name}' (id {database.id}) for server {server.id} "
            f"on database host {host.id}"
        )
        return database

    def delete(self, database_id: int) -> bool:
        """
        Remove a database from its host, then its record.

        Deleting an unknown id is a no-op.

        Returns:
            True when a database was deleted, False when none existed.

        Raises:
            Exception: Whatever the gateway raised. The record is kept.
        """
        database = self.databases.get(database_id)
        if database is None:
            logger.info(f"Database {database_id} does not exist, nothing to delete")
            return False

        host = self._get_host(database.database_host_id)
        client = self.client_factory(host)

        client.drop_user(database.username, database.remote)
        client.drop_database(database.database)
        client.flush()

        self.databases.delete(database.id)
        logger.info(
            f"Deleted database '{database.database}' (id {database.id}) "
            f"from database host {host.id}"
        )
        return True

    def _get_host(self, host_id: Any) -> DatabaseHost:
        host = self.hosts.get(host_id) if host_id is not None else None
        if host is None:
            raise DatabaseHostNotFoundError(host_id)
        return host

    def _cleanup(
        self,
        client: RemoteDatabaseGateway,
        name: str,
        username: str,
        remote: str,
    ) -> None:
        attempt(f"dropping database '{name}'", client.drop_database, name)
        attempt(f"dropping user '{username}'", client.drop_user, username, remote)
        attempt("flushing privileges", client.flush)
