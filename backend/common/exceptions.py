"""
Standardized error handling for API responses.

This module provides the base exception type shared by every service plus helpers
that turn unexpected failures into safe HTTP errors. Internal details (driver
errors, SQL, host names) are logged but never returned to clients.

Architecture:
    The module uses a two-tier error handling approach:
    1. Expected domain errors subclass APIError and carry their own user-facing
       message and status code; the app factory renders them directly.
    2. Unexpected errors are converted with create_api_error and friends, which
       log the full exception and return a generic message.

Example:
    ```python
    from common.exceptions import APIError, handle_database_error

    class QuotaError(APIError):
        def __init__(self) -> None:
            super().__init__("Limit reached.", status_code=400)

    try:
        repo.get(1)
    except SQLAlchemyError as e:
        raise handle_database_error("fetching database", e)
    ```
"""

from fastapi import HTTPException
from loguru import logger

# HTTP Status Code Constants
HTTP_400_BAD_REQUEST = 400
HTTP_403_FORBIDDEN = 403
HTTP_404_NOT_FOUND = 404
HTTP_409_CONFLICT = 409
HTTP_422_UNPROCESSABLE_ENTITY = 422
HTTP_500_INTERNAL_SERVER_ERROR = 500
HTTP_503_SERVICE_UNAVAILABLE = 503


class APIError(Exception):
    """
    Base exception class for errors with user-friendly messages.

    Attributes:
        message (str): User-friendly error message that can be safely exposed to clients.
        status_code (int): HTTP status code to return (default: 500).
        internal_error (Exception | None): The original exception that caused this error,
            stored for logging purposes but not exposed to clients.

    Note:
        - The message should never contain sensitive information
        - Subclasses are rendered as ``{"error": message}`` by the app factory
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        internal_error: Exception | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.internal_error = internal_error
        super().__init__(self.message)


def create_api_error(
    operation: str,
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    internal_error: Exception | None = None,
    user_message: str | None = None,
) -> HTTPException:
    """
    Create a standardized API error response with a safe error message.

    Args:
        operation: Description of the operation that failed (e.g., "deleting database").
            Used for logging context.
        status_code: HTTP status code to return. Defaults to 500.
        internal_error: Optional original exception. Logged with its traceback, never
            included in the response.
        user_message: Optional custom user-friendly message. If None, a generic message
            appropriate for the status code is used.

    Returns:
        HTTPException configured with the status code and safe error message.
    """
    if internal_error:
        logger.exception(f"API error in {operation}: {internal_error}")

    if user_message:
        message = user_message
    elif status_code == HTTP_400_BAD_REQUEST:
        message = "Invalid request. Please check your input and try again."
    elif status_code == HTTP_403_FORBIDDEN:
        message = "Access denied. You don't have permission to perform this action."
    elif status_code == HTTP_404_NOT_FOUND:
        message = "Resource not found."
    elif status_code == HTTP_409_CONFLICT:
        message = "The request conflicts with an existing resource."
    elif status_code == HTTP_422_UNPROCESSABLE_ENTITY:
        message = "Validation error. Please check your request parameters."
    elif status_code == HTTP_503_SERVICE_UNAVAILABLE:
        message = "Service temporarily unavailable. Please try again later."
    else:
        message = (
            "An error occurred while processing your request. Please try again later."
        )

    return HTTPException(status_code=status_code, detail=message)


def handle_database_error(operation: str, error: Exception) -> HTTPException:
    """
    Handle metadata-store errors with a generic, safe error message.

    Args:
        operation: Description of the database operation that failed.
        error: The SQLAlchemy (or driver) exception that occurred.

    Returns:
        HTTPException with status code 500.
    """
    return create_api_error(
        operation=operation,
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        internal_error=error,
        user_message="Failed to access panel records. Please try again later.",
    )

