"""
Database Password Service

Rotates the password of a provisioned database's user. The new password is
returned to the caller once and is never written to the record store.
"""

from __future__ import annotations

from loguru import logger

from common.models import Database
from services.database_service.clients import get_database_host_client
from services.database_service.database import DatabaseHostRepository
from services.database_service.exceptions import DatabaseHostNotFoundError

from .credentials import CredentialGenerator
from .database_management_service import GatewayFactory


class DatabasePasswordService:
    """Issue a fresh password for an existing database user."""

    def __init__(
        self,
        hosts: DatabaseHostRepository | None = None,
        client_factory: GatewayFactory = get_database_host_client,
        credentials: CredentialGenerator | None = None,
    ) -> None:
        self.hosts = hosts or DatabaseHostRepository()
        self.client_factory = client_factory
        self.credentials = credentials or CredentialGenerator()

    def rotate(self, database: Database) -> str:
        """
        Change the database user's password in place.

        The account is never dropped, so its grant and connection cap are kept
        and a failure never leaves the record without its user on the host.

        Returns:
            The new password.

        Raises:
            DatabaseHostNotFoundError: The record points at an unknown host.
            Exception: Whatever the gateway raised.
        """
        host = self.hosts.get(database.database_host_id)
        if host is None:
            raise DatabaseHostNotFoundError(database.database_host_id)

        client = self.client_factory(host)
        password = self.credentials.generate_password()

        client.update_user_password(database.username, database.remote, password)
        client.flush()

        database.password = password
        logger.info(f"Rotated password for database '{database.database}' (id {database.id})")
        return password
