"""
Database Service API v1 Module

Module Structure:
    - api: Router aggregation
    - endpoints: HTTP endpoint handlers
    - models: Pydantic request/response schemas
"""
