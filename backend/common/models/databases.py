"""
Database model - the per-server logical database managed by the database service.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from common.database import Base

DATABASE_NAME_MAX_LENGTH = 48


class Database(Base):
    """
    A logical database living on a database host and owned by a server.

    A row exists only once the physical database, its user and the grant have
    been committed on the host. The ``database`` column is unique across every
    host; the constraint is the real guard against concurrent creations using
    the same name.

    Attributes:
        id (int): Primary key.
        server_id (int): Owning server.
        database_host_id (int): Host where the physical database lives.
        database (str): Physical database name, ``s{server_id}_{label}``.
        username (str): Generated user, ``u{server_id}_{10 alphanumerics}``.
        remote (str): Remote-access pattern the user is restricted to.
        max_connections (int | None): Per-user connection cap, if any.
        password (str | None): Not mapped. Only filled on the instance returned
            when the database is created or its password rotated.
    """

    __tablename__ = "databases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server_id: Mapped[int] = mapped_column(
        ForeignKey("servers.id", ondelete="CASCADE"), index=True
    )
    database_host_id: Mapped[int] = mapped_column(
        ForeignKey("database_hosts.id"), index=True
    )
    database: Mapped[str] = mapped_column(
        String(DATABASE_NAME_MAX_LENGTH), unique=True
    )
    username: Mapped[str] = mapped_column(String(191))
    remote: Mapped[str] = mapped_column(String(48), default="%")
    max_connections: Mapped[int | None] = mapped_column(Integer, nullable=True)

    password = None

    def __repr__(self) -> str:
        return f"<Database id={self.id} database={self.database} server_id={self.server_id}>"
