"""
Database Service Error Taxonomy

Every error the provisioning core surfaces to its callers lives here. They all
derive from common.exceptions.APIError so the HTTP layer renders them with their
own status code and safe message, while non-HTTP callers (CLI, jobs) can catch
them by type.

Validation errors (feature flag, quota, name, duplicate) are raised before any
remote or local mutation. RemoteProvisioningError is raised by the database host
client; the management service re-raises it unchanged after compensation.
"""

from common.exceptions import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_503_SERVICE_UNAVAILABLE,
    APIError,
)


class DatabaseServiceError(APIError):
    """Base class for all database service errors."""


class DatabaseClientFeatureNotEnabledError(DatabaseServiceError):
    """Client database creation is switched off by configuration."""

    def __init__(self) -> None:
        super().__init__(
            "Client database creation is not enabled in this Panel.",
            status_code=HTTP_403_FORBIDDEN,
        )


class TooManyDatabasesError(DatabaseServiceError):
    """The server already owns as many databases as its limit allows."""

    def __init__(self) -> None:
        super().__init__(
            "Operation aborted: creating a new database would put this server over the defined limit.",
            status_code=HTTP_400_BAD_REQUEST,
        )


class InvalidDatabaseNameError(DatabaseServiceError, ValueError):
    """The requested name is missing or not of the form ``s{server_id}_{label}``."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or 'The database name passed to DatabaseManagementService.create MUST be prefixed with "s{server_id}_".',
            status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        )


class DuplicateDatabaseNameError(DatabaseServiceError):
    """A database with the same name exists, on any host."""

    def __init__(self, internal_error: Exception | None = None) -> None:
        super().__init__(
            "A database with that name already exists for this server.",
            status_code=HTTP_409_CONFLICT,
            internal_error=internal_error,
        )


class RemoteProvisioningError(DatabaseServiceError):
    """
    A statement failed on a database host.

    Attributes:
        operation (str): The gateway operation that failed (e.g. "create_user").
        host_id (int | None): The database host the statement ran against.
    """

    def __init__(
        self,
        operation: str,
        host_id: int | None = None,
        internal_error: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.host_id = host_id
        super().__init__(
            "The database host could not complete the request. Please try again later.",
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            internal_error=internal_error,
        )

    def __str__(self) -> str:
        return f"{self.operation} failed on database host {self.host_id}: {self.internal_error}"


class NotFoundError(DatabaseServiceError):
    """Base class for missing records."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=HTTP_404_NOT_FOUND)


class DatabaseNotFoundError(NotFoundError):
    def __init__(self, database_id: int) -> None:
        super().__init__(f"Database {database_id} was not found.")


class DatabaseHostNotFoundError(NotFoundError):
    def __init__(self, host_id: int | None) -> None:
        super().__init__(f"Database host {host_id} was not found.")


class ServerNotFoundError(NotFoundError):
    def __init__(self, server_id: int) -> None:
        super().__init__(f"Server {server_id} was not found.")


class NoSuitableDatabaseHostError(DatabaseServiceError):
    """No database host can receive a database for this server."""

    def __init__(self) -> None:
        super().__init__(
            "No database host was found that meets the requirements for this server.",
            status_code=HTTP_400_BAD_REQUEST,
        )
