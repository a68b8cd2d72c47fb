"""Database Service API v1 endpoint modules."""
