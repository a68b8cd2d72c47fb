"""
Database Service API Module

Contains the FastAPI dependencies and the versioned (v1) endpoints of the
database service.
"""
