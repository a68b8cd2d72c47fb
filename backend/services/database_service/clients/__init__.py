"""
Database Service clients for database hosts.

Exports:
    - RemoteDatabaseGateway: Protocol consumed by the provisioning services
    - MySqlDatabaseHostClient: SQLAlchemy based implementation for MySQL/MariaDB
    - get_database_host_client: Factory resolving a client for a DatabaseHost
"""

from .database_host_client import (
    MySqlDatabaseHostClient,
    RemoteDatabaseGateway,
    quote_identifier,
)
from .host_client_factory import get_database_host_client

__all__ = [
    "MySqlDatabaseHostClient",
    "RemoteDatabaseGateway",
    "get_database_host_client",
    "quote_identifier",
]
