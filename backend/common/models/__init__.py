"""
Common ORM models for all backend services.

Models:
    - Server: Tenant entity owning zero or more databases
    - DatabaseHost: Database engine instance that hosts tenant databases
    - Database: Logical database record (one per provisioned database)

All models inherit from common.database.Base, which provides automatic
created_at and updated_at timestamps.

Usage:
    ```python
    from common.models import Database

    with get_db_session() as session:
        databases = session.query(Database).filter_by(server_id=1).all()
    ```
"""

from .database_hosts import DatabaseHost
from .databases import DATABASE_NAME_MAX_LENGTH, Database
from .servers import Server

__all__ = [
    "DATABASE_NAME_MAX_LENGTH",
    "Database",
    "DatabaseHost",
    "Server",
]
