"""
Server model - the tenant entity that owns databases.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from common.database import Base


class Server(Base):
    """
    A hosted game/application server.

    Only the columns the database service needs are mapped: the node the server
    runs on (used to co-locate database hosts) and its database quota.

    Attributes:
        id (int): Primary key.
        name (str): Display name.
        node_id (int): Node/location the server is deployed on.
        database_limit (int | None): Maximum number of databases. None means
            unlimited; 0 means the server may not own any database.
    """

    __tablename__ = "servers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), default="")
    node_id: Mapped[int] = mapped_column(Integer, index=True)
    database_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Server id={self.id} node_id={self.node_id}>"
