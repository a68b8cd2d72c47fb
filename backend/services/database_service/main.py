"""
Database Service FastAPI Application Entrypoint

Example:
    ```bash
    uvicorn services.database_service.main:app --port 8004 --reload
    ```
"""

from common.fastapi import create_fastapi_app
from services.database_service.api.v1.api import api_router

app = create_fastapi_app(
    service_name="database-service",
    description="Provisioning and decommissioning of per-server databases on shared database hosts",
    api_router=api_router,
    root_path="/databases",
)
