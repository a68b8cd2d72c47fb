"""
Database Service business logic.

All services are plain classes receiving their repositories, a host client
factory and configuration values through their constructors.
"""

from .credentials import (
    CredentialGenerator,
    generate_password,
    generate_unique_database_name,
    generate_username,
)
from .database_management_service import DatabaseManagementService
from .database_password_service import DatabasePasswordService
from .deploy_database_service import DeployServerDatabaseService

__all__ = [
    "CredentialGenerator",
    "DatabaseManagementService",
    "DatabasePasswordService",
    "DeployServerDatabaseService",
    "generate_password",
    "generate_unique_database_name",
    "generate_username",
]
