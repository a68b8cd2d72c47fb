"""
Database Host Client Factory

Builds the RemoteDatabaseGateway used to administer a given database host. The
provisioning services receive this factory as a callable so tests can substitute
a mock gateway without touching any engine.

Engines are cached per host by common.database.get_host_engine, so calling the
factory for every request reuses the host's connection pool.
"""

from loguru import logger

from common.database import get_host_engine
from common.models import DatabaseHost

from .database_host_client import MySqlDatabaseHostClient, RemoteDatabaseGateway


def get_database_host_client(host: DatabaseHost) -> RemoteDatabaseGateway:
    """
    Return an administrative client for ``host``.

    Args:
        host: The DatabaseHost record (address and administrative credentials).

    Returns:
        A MySqlDatabaseHostClient bound to the host's cached engine.
    """
    logger.debug(f"Resolving client for database host {host.id}")
    return MySqlDatabaseHostClient(get_host_engine(host), host_id=host.id)
