"""
Server Database Endpoints

HTTP surface of the database service. Endpoints are synchronous: FastAPI runs
them in its thread pool, which is the caller-provided execution context the
provisioning services expect.

Endpoints:
    - GET    /servers/{server_id}/databases
    - POST   /servers/{server_id}/databases
    - POST   /servers/{server_id}/databases/{database_id}/rotate-password
    - DELETE /servers/{server_id}/databases/{database_id}

Error Handling:
    Domain errors (quota, duplicate name, feature disabled, not found, host
    failures) are APIError subclasses rendered by the app factory. Record-store
    failures are converted with handle_database_error.
"""

from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from common.exceptions import handle_database_error
from common.models import Database, Server
from services.database_service.api.dependencies import (
    get_database_repository,
    get_deploy_service,
    get_management_service,
    get_password_service,
    get_server_repository,
)
from services.database_service.api.v1.models import (
    CreateDatabaseRequest,
    DatabaseListResponse,
    DatabaseResponse,
)
from services.database_service.database import DatabaseRepository, ServerRepository
from services.database_service.exceptions import (
    DatabaseNotFoundError,
    ServerNotFoundError,
)
from services.database_service.services import (
    DatabaseManagementService,
    DatabasePasswordService,
    DeployServerDatabaseService,
)

router = APIRouter()


def get_server(
    server_id: int,
    servers: ServerRepository = Depends(get_server_repository),
) -> Server:
    try:
        server = servers.get(server_id)
    except SQLAlchemyError as e:
        raise handle_database_error("fetching server", e)
    if server is None:
        raise ServerNotFoundError(server_id)
    return server


def get_server_database(
    database_id: int,
    server: Server = Depends(get_server),
    databases: DatabaseRepository = Depends(get_database_repository),
) -> Database:
    try:
        database = databases.get(database_id)
    except SQLAlchemyError as e:
        raise handle_database_error("fetching database", e)
    # Databases of other servers are reported as missing.
    if database is None or database.server_id != server.id:
        raise DatabaseNotFoundError(database_id)
    return database


@router.get("/servers/{server_id}/databases", response_model=DatabaseListResponse)
def list_databases(
    server: Server = Depends(get_server),
    databases: DatabaseRepository = Depends(get_database_repository),
) -> DatabaseListResponse:
    """List the databases owned by a server."""
    try:
        records = databases.get_databases_for_server(server.id)
    except SQLAlchemyError as e:
        raise handle_database_error("listing databases", e)
    return DatabaseListResponse(
        data=[DatabaseResponse.model_validate(record) for record in records],
        total=len(records),
    )


@router.post(
    "/servers/{server_id}/databases",
    response_model=DatabaseResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_database(
    request: CreateDatabaseRequest,
    server: Server = Depends(get_server),
    deploy: DeployServerDatabaseService = Depends(get_deploy_service),
) -> DatabaseResponse:
    """
    Create a database for a server.

    The response is the only place the generated password is ever returned.
    """
    database = deploy.handle(server, request.model_dump())
    return DatabaseResponse.model_validate(database)


@router.post(
    "/servers/{server_id}/databases/{database_id}/rotate-password",
    response_model=DatabaseResponse,
)
def rotate_password(
    database: Database = Depends(get_server_database),
    passwords: DatabasePasswordService = Depends(get_password_service),
) -> DatabaseResponse:
    passwords.rotate(database)
    return DatabaseResponse.model_validate(database)


@router.delete(
    "/servers/{server_id}/databases/{database_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_database(
    database: Database = Depends(get_server_database),
    management: DatabaseManagementService = Depends(get_management_service),
) -> Response:
    management.delete(database.id)
    logger.info(f"Database {database.id} deleted for server {database.server_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
