"""
Database API Models.

Pydantic request/response schemas for the database endpoints. The password field
of DatabaseResponse is only populated by the create and rotate-password endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateDatabaseRequest(BaseModel):
    """
    Request body for deploying a new database for a server.

    Attributes:
        database: Free-form label. Normalized into ``s{server_id}_{label}``.
        remote: Remote-access pattern the generated user is restricted to.
    """

    database: str = Field(min_length=1, max_length=48)
    remote: str = Field(default="%", min_length=1, max_length=48)

    @field_validator("remote")
    @classmethod
    def remote_must_be_pattern(cls, v: str) -> str:
        value = v.strip()
        if not value or any(ch.isspace() or ch in "'\"`\\" for ch in value):
            msg = "remote must be a host, IP or wildcard pattern"
            raise ValueError(msg)
        return value


class DatabaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    server_id: int
    database_host_id: int
    database: str
    username: str
    remote: str
    max_connections: int | None = None
    password: str | None = None
    created_at: datetime | None = None


class DatabaseListResponse(BaseModel):
    data: list[DatabaseResponse]
    total: int
