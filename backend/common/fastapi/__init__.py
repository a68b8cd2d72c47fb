"""
Common FastAPI utilities and middleware.

Main Components:
    - app_factory: FastAPI application factory with standard configuration

Usage:
    ```python
    from common.fastapi import create_fastapi_app
    from services.database_service.api.v1.api import api_router

    app = create_fastapi_app(
        service_name="database-service",
        description="Per-server database provisioning",
        api_router=api_router,
    )
    ```
"""

from .app_factory import create_fastapi_app

__all__ = ["create_fastapi_app"]
