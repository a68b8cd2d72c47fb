"""
Centralized configuration management for all backend services.

This module defines Pydantic Settings classes for managing configuration across
the backend services. It provides a hierarchical settings system with base settings
shared by all services and service-specific overrides.

Configuration Loading:
    Settings are loaded in the following priority order (highest to lowest):
    1. Environment variables
    2. .env file in the project root
    3. Default values defined in the classes

Validation:
    All settings are validated using Pydantic validators to ensure:
    - Type correctness
    - Value constraints (e.g., positive integers, valid timeouts)
    - Format requirements (e.g., CORS origins parsing)

Service Settings Hierarchy:
    BaseServiceSettings (base class)
    └── DatabaseServiceSettings

Example:
    ```python
    from common.config.settings import DatabaseServiceSettings

    settings = DatabaseServiceSettings()
    print(settings.SERVICE_NAME)  # "database-service"
    print(settings.CLIENT_DATABASES_ENABLED)  # True
    ```

Environment Variables:
    All settings can be overridden via environment variables. For example:
    - LOG_LEVEL=DEBUG
    - CLIENT_DATABASES_ENABLED=false
    - CORS_ORIGINS=http://localhost:3000,https://example.com
"""

from typing import Any

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class BaseServiceSettings(BaseSettings):
    """
    Base settings class providing common configuration for all services.

    Attributes:
        SERVICE_NAME (str): Name identifier for the service. Default: "base-service"
        SERVICE_VERSION (str): Version string for the service. Default: "0.1.0"
        PORT (int): Port number the service listens on. Default: 8000

        ENVIRONMENT (str): Deployment environment. Values: "DEV" or "PROD". Default: "DEV"
        DEBUG (bool): Enable debug mode. Default: False
        LOG_LEVEL (str): Logging level. Default: "INFO"

        API_V1_STR (str): API version prefix for routes. Default: "/api/v1"
        CORS_ORIGINS (list[str]): Allowed CORS origins, comma-separated string or list.

        METADATA_DATABASE_NAME (str): Name of the database holding the panel records.
        DATABASE_POOL_SIZE (int): Connections kept in the metadata store pool. Default: 10
        DATABASE_MAX_OVERFLOW (int): Overflow connections beyond the pool. Default: 5

    Note:
        - Metadata store credentials come from the POSTGRES_* environment variables
          (see common.database.session.create_sqlalchemy_url)
        - Pool sizes are validated to be non-negative integers
    """

    # Service Information (defaults)
    SERVICE_NAME: str = "base-service"
    SERVICE_VERSION: str = "0.1.0"
    PORT: int = 8000

    # Global Configuration
    ENVIRONMENT: str = "DEV"  # Can be "DEV" or "PROD"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_V1_STR: str = "/api/v1"

    # CORS Configuration
    CORS_ORIGINS: Any = ""

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> list[str]:
        """
        Assemble CORS origins from string or list format.

        Accepts a comma-separated string or a list of strings. Anything else
        yields an empty list.
        """
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        return []

    # Metadata Store Configuration
    METADATA_DATABASE_NAME: str = "panel"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 5

    @field_validator("DATABASE_POOL_SIZE", "DATABASE_MAX_OVERFLOW", mode="before")
    @classmethod
    def validate_positive_int(cls, v: Any, info: ValidationInfo) -> int | None:
        """
        Validate that database pool configuration fields are positive integers.

        Args:
            v: Input value to validate. Can be int, str, or None.
            info: Pydantic ValidationInfo object containing field metadata.

        Returns:
            Validated integer value, or None if input is None.

        Raises:
            ValueError: If the value cannot be converted to an integer or is negative.
        """
        if v is None:
            return None
        try:
            int_val = int(v)
            if int_val < 0:
                msg = f"{info.field_name} must be a positive integer"
                raise ValueError(msg)
            return int_val
        except (ValueError, TypeError) as e:
            msg = f"{info.field_name} must be a valid positive integer, got: {v}"
            raise ValueError(
                msg
            ) from e

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class DatabaseServiceSettings(BaseServiceSettings):
    """
    Settings configuration for the database provisioning service.

    Inherited Attributes:
        All attributes from BaseServiceSettings are available with these overrides:
        - SERVICE_NAME: "database-service"
        - PORT: 8004

    Additional Attributes:
        CLIENT_DATABASES_ENABLED (bool): Master switch for client-initiated database
            creation. When False every create request is rejected before any
            validation or side effect. Default: True
        CLIENT_DATABASES_ALLOW_RANDOM (bool): When no database host shares the
            server's node, allow the deploy flow to pick any host. Default: True
        DATABASE_HOST_CONNECT_TIMEOUT (int): Connect timeout, in seconds, used by
            the driver when talking to a database host. Default: 5

    Example:
        ```python
        from common.config.settings import DatabaseServiceSettings

        settings = DatabaseServiceSettings()
        if not settings.CLIENT_DATABASES_ENABLED:
            ...
        ```
    """

    SERVICE_NAME: str = "database-service"
    SERVICE_VERSION: str = "0.1.0"
    PORT: int = 8004

    # Client database feature flags
    CLIENT_DATABASES_ENABLED: bool = True
    CLIENT_DATABASES_ALLOW_RANDOM: bool = True

    # Database host connections
    DATABASE_HOST_CONNECT_TIMEOUT: int = 5

    @field_validator("DATABASE_HOST_CONNECT_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: int, info: ValidationInfo) -> int:
        """Timeouts must be at least one second."""
        if v < 1:
            msg = f"{info.field_name} must be at least 1"
            raise ValueError(msg)
        return v
