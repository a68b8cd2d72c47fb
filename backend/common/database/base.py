"""
Base declarative class for all ORM models.

Every panel record inherits created_at/updated_at timestamps from this base.
Timestamps use server-side defaults so rows written outside the ORM are stamped too.

Usage:
    ```python
    from common.database import Base
    from sqlalchemy.orm import Mapped, mapped_column
    from sqlalchemy import Integer, String

    class Node(Base):
        __tablename__ = "nodes"

        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        name: Mapped[str] = mapped_column(String(191))
    ```
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import TIMESTAMP, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """
    Base declarative class for all SQLAlchemy ORM models.

    Attributes:
        created_at (Mapped[datetime]): Set by the database when the row is inserted.
        updated_at (Mapped[datetime]): Set on insert and refreshed on ORM updates.

    Note:
        Models that do not declare ``__tablename__`` get the lowercase class name.
    """

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore[override]
        return cls.__name__.lower()
