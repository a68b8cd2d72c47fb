"""
Database Service API v1 Models Module

Exported Models:
    - CreateDatabaseRequest: Request model for deploying a database
    - DatabaseResponse: Single database representation
    - DatabaseListResponse: List of databases for a server
"""

from .databases import CreateDatabaseRequest, DatabaseListResponse, DatabaseResponse

__all__ = ["CreateDatabaseRequest", "DatabaseListResponse", "DatabaseResponse"]
