"""
Database host model - a reachable database engine instance.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from common.database import Base


class DatabaseHost(Base):
    """
    A database engine instance able to hold many tenant databases.

    The stored username/password belong to an administrative account that may
    create databases and users and grant privileges on the host.

    Attributes:
        id (int): Primary key.
        name (str): Display name.
        host (str): Hostname or IP address the service connects to.
        port (int): TCP port. Default 3306.
        username (str): Administrative username.
        password (str): Administrative password.
        max_databases (int | None): Informational capacity of the host.
        node_id (int | None): Node the host is linked to. Servers on the same node
            are preferred when deploying a database.
    """

    __tablename__ = "database_hosts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191))
    host: Mapped[str] = mapped_column(String(191))
    port: Mapped[int] = mapped_column(Integer, default=3306)
    username: Mapped[str] = mapped_column(String(191))
    password: Mapped[str] = mapped_column(String(255))
    max_databases: Mapped[int | None] = mapped_column(Integer, nullable=True)
    node_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    def __repr__(self) -> str:
        # Never include the password.
        return f"<DatabaseHost id={self.id} host={self.host}:{self.port}>"
