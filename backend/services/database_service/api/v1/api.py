"""
Database Service API v1 Router Configuration

Aggregates all v1 endpoints into a single router. Mounted under /api/v1 by the
application factory.

Router Structure:
    - /servers/{server_id}/databases: Server database management
"""

from fastapi import APIRouter

from services.database_service.api.v1.endpoints import databases

api_router = APIRouter()

api_router.include_router(databases.router, tags=["Databases"])
