"""
Deploy Server Database Service

Client-facing entry point for creating a database: the caller supplies only a
label and a remote pattern; this service picks a database host and builds the
``s{server_id}_{label}`` name before delegating to DatabaseManagementService.

Host Selection:
    1. Hosts linked to the server's node are preferred (random among them).
    2. With CLIENT_DATABASES_ALLOW_RANDOM, any host is used when none shares
       the node.
    3. Otherwise NoSuitableDatabaseHostError is raised.
"""

from __future__ import annotations

from collections.abc import Mapping
import random
from typing import Any

from loguru import logger

from common.models import Database, Server
from services.database_service.database import DatabaseHostRepository
from services.database_service.exceptions import (
    DatabaseClientFeatureNotEnabledError,
    InvalidDatabaseNameError,
    NoSuitableDatabaseHostError,
)

from .database_management_service import DatabaseManagementService


class DeployServerDatabaseService:
    def __init__(
        self,
        management_service: DatabaseManagementService,
        hosts: DatabaseHostRepository | None = None,
        allow_random: bool = True,
    ) -> None:
        self.management_service = management_service
        self.hosts = hosts or DatabaseHostRepository()
        self.allow_random = allow_random

    def handle(self, server: Server, data: Mapping[str, Any]) -> Database:
        """
        Create a database for ``server`` on a suitable host.

        Args:
            server: Owning server.
            data: ``database`` (label) and ``remote`` (pattern), both required.

        Raises:
            DatabaseClientFeatureNotEnabledError: Client databases are disabled.
            InvalidDatabaseNameError: Label or remote is empty.
            NoSuitableDatabaseHostError: No host can be used.
            Any error raised by DatabaseManagementService.create.
        """
        if not self.management_service.client_databases_enabled:
            logger.warning(f"Rejected database deploy for server {server.id}: feature disabled")
            raise DatabaseClientFeatureNotEnabledError()

        label = (data.get("database") or "").strip()
        remote = (data.get("remote") or "").strip()
        if not label or not remote:
            raise InvalidDatabaseNameError("A database name and a remote pattern are required.")

        hosts = self.hosts.get_hosts_for_node(server.node_id)
        if not hosts and self.allow_random:
            hosts = self.hosts.find_where()
        if not hosts:
            raise NoSuitableDatabaseHostError()

        host = random.choice(hosts)
        logger.info(f"Deploying database '{label}' for server {server.id} on database host {host.id}")

        return self.management_service.create(
            server,
            {
                "database_host_id": host.id,
                "database": DatabaseManagementService.generate_unique_database_name(
                    label, server.id
                ),
                "remote": remote,
            },
        )
