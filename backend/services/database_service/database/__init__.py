"""
Database Service record-store layer.

See Also:
    - services.database_service.database.sqlalchemy_repository: Repository implementations
"""

from .sqlalchemy_repository import (
    DatabaseHostRepository,
    DatabaseRepository,
    ServerRepository,
    SqlAlchemyRepository,
)

__all__ = [
    "DatabaseHostRepository",
    "DatabaseRepository",
    "ServerRepository",
    "SqlAlchemyRepository",
]
