"""
Centralized configuration management for all backend services.

This module provides a unified interface for accessing service-specific configuration
settings. It automatically selects the appropriate settings class based on the service
name, ensuring each service gets its correct configuration.

The configuration system uses Pydantic Settings, which automatically loads values from:
    1. Environment variables (highest priority)
    2. .env file in the project root
    3. Default values defined in the settings classes

Service-Specific Settings:
    - DatabaseServiceSettings: Configuration for database-service
    - BaseServiceSettings: Base configuration shared by all services

Example:
    ```python
    from common.config import get_settings

    settings = get_settings("database-service")
    print(settings.SERVICE_NAME)  # "database-service"
    print(settings.CLIENT_DATABASES_ENABLED)  # True
    ```
"""

from common.config.settings import (
    BaseServiceSettings,
    DatabaseServiceSettings,
)


def get_settings(service_name: str | None = None) -> BaseServiceSettings:
    """
    Get settings instance for the specified service.

    Args:
        service_name: Name of the service to get settings for. Any name containing
            "database" (case-insensitive) resolves to DatabaseServiceSettings; None
            or any other value returns BaseServiceSettings.

    Returns:
        Instance of the appropriate settings class.

    Note:
        - Settings are loaded from environment variables and .env file
        - Each call returns a new instance (settings are not cached)
    """
    if service_name and "database" in service_name.lower():
        return DatabaseServiceSettings()
    # Default to base settings
    return BaseServiceSettings()


__all__ = [
    "BaseServiceSettings",
    "DatabaseServiceSettings",
    "get_settings",
]
