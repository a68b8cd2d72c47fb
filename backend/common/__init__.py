"""
Common utilities and shared code for the hosting panel backend services.

Modules:
    - config: Centralized configuration management with environment-based settings
    - database: Declarative base, metadata store sessions and database host engines
    - exceptions: Base API error type and safe HTTP error helpers
    - fastapi: FastAPI application factory with common middleware and configuration
    - logging: Centralized logging configuration using loguru
    - models: Shared SQLAlchemy ORM models (servers, database hosts, databases)

Usage:
    ```python
    from common.config import get_settings
    from common.database import get_db_session
    from common.logging import setup_logging
    from common.exceptions import APIError
    ```
"""

__version__ = "0.1.0"
