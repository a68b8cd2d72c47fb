"""
Shared API Dependencies for the Database Service

FastAPI dependencies that build the repositories and services used by the
endpoints. Each is cached for the application lifetime; tests replace them
through ``app.dependency_overrides``.

The client database feature flag is read from settings here, once, and handed
to DatabaseManagementService; the service itself never reads configuration.
"""

from functools import lru_cache

from common.config import DatabaseServiceSettings, get_settings
from services.database_service.database import (
    DatabaseHostRepository,
    DatabaseRepository,
    ServerRepository,
)
from services.database_service.services import (
    DatabaseManagementService,
    DatabasePasswordService,
    DeployServerDatabaseService,
)


@lru_cache(maxsize=1)
def get_service_settings() -> DatabaseServiceSettings:
    return get_settings("database-service")


@lru_cache(maxsize=1)
def get_database_repository() -> DatabaseRepository:
    return DatabaseRepository()


@lru_cache(maxsize=1)
def get_host_repository() -> DatabaseHostRepository:
    return DatabaseHostRepository()


@lru_cache(maxsize=1)
def get_server_repository() -> ServerRepository:
    return ServerRepository()


@lru_cache(maxsize=1)
def get_management_service() -> DatabaseManagementService:
    """Singleton DatabaseManagementService wired to the configured feature flag."""
    settings = get_service_settings()
    return DatabaseManagementService(
        databases=get_database_repository(),
        hosts=get_host_repository(),
        client_databases_enabled=settings.CLIENT_DATABASES_ENABLED,
    )


@lru_cache(maxsize=1)
def get_deploy_service() -> DeployServerDatabaseService:
    settings = get_service_settings()
    return DeployServerDatabaseService(
        get_management_service(),
        hosts=get_host_repository(),
        allow_random=settings.CLIENT_DATABASES_ALLOW_RANDOM,
    )


@lru_cache(maxsize=1)
def get_password_service() -> DatabasePasswordService:
    return DatabasePasswordService(hosts=get_host_repository())
