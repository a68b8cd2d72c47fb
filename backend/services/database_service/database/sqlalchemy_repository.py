"""
SQLAlchemy Repository Implementation for the Database Service

This module provides the record-store layer of the database service. A generic
SqlAlchemyRepository offers the small set of operations the provisioning core
needs (get, find, count, create, delete) over any panel model; thin subclasses
add the queries specific to servers, database hosts and databases.

Every method opens its own short-lived session from the injected session factory,
so repositories can be shared across request threads. No session is held while
the provisioning core talks to a database host.

Error Handling:
    Database errors are logged and propagated. The only translation performed is
    IntegrityError on the unique ``databases.database`` column, which becomes
    DuplicateDatabaseNameError: the unique constraint is the authoritative guard
    against two concurrent creations using the same name.

Example:
    ```python
    repo = DatabaseRepository()

    count = repo.count_for_server(server_id=1)
    record = repo.create({
        "server_id": 1,
        "database_host_id": 2,
        "database": "s1_shop",
        "username": "u1_AbCdEf1234",
        "remote": "%",
    })
    repo.delete(record.id)
    ```
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from common.database import Base, get_session_maker
from common.models import Database, DatabaseHost, Server
from services.database_service.exceptions import DuplicateDatabaseNameError

ModelT = TypeVar("ModelT", bound=Base)


class SqlAlchemyRepository(Generic[ModelT]):
    """
    Generic repository over a single ORM model.

    Attributes:
        model: The mapped class this repository reads and writes.
    """

    model: type[ModelT]

    def __init__(self, session_maker: sessionmaker[Session] | None = None) -> None:
        """
        Args:
            session_maker: Session factory to use. Defaults to the cached metadata
                store factory from common.database.
        """
        self._session_maker = session_maker

    @property
    def session_maker(self) -> sessionmaker[Session]:
        # Resolved lazily so importing a repository never opens a connection pool.
        if self._session_maker is None:
            self._session_maker = get_session_maker()
        return self._session_maker

    def get(self, record_id: int) -> ModelT | None:
        with self.session_maker() as session:
            return session.get(self.model, record_id)

    def find_where(self, **filters: Any) -> list[ModelT]:
        statement = select(self.model).filter_by(**filters).order_by(self.model.id)
        with self.session_maker() as session:
            return list(session.scalars(statement).all())

    def find_first_where(self, **filters: Any) -> ModelT | None:
        statement = select(self.model).filter_by(**filters).limit(1)
        with self.session_maker() as session:
            return session.scalars(statement).first()

    def count_where(self, **filters: Any) -> int:
        statement = select(func.count()).select_from(self.model).filter_by(**filters)
        with self.session_maker() as session:
            return session.scalar(statement) or 0

    def create(self, values: dict[str, Any]) -> ModelT:
        """Insert a record and return it with its generated id."""
        record = self.model(**values)
        with self.session_maker() as session:
            session.add(record)
            try:
                session.commit()
            except Exception:
                session.rollback()
                raise
            session.refresh(record)
        return record

    def delete(self, record_id: int) -> bool:
        """Delete a record by id. Returns False when no row matched."""
        statement = delete(self.model).where(self.model.id == record_id)
        with self.session_maker() as session:
            deleted = session.execute(statement).rowcount
            session.commit()
        return deleted > 0


class DatabaseRepository(SqlAlchemyRepository[Database]):
    """Record store for provisioned databases."""

    model = Database

    def get_databases_for_server(self, server_id: int) -> list[Database]:
        return self.find_where(server_id=server_id)

    def count_for_server(self, server_id: int) -> int:
        return self.count_where(server_id=server_id)

    def create(self, values: dict[str, Any]) -> Database:
        try:
            return super().create(values)
        except IntegrityError as e:
            logger.warning(
                f"Unique constraint rejected database '{values.get('database')}': {e.orig}"
            )
            raise DuplicateDatabaseNameError(internal_error=e) from e


class DatabaseHostRepository(SqlAlchemyRepository[DatabaseHost]):
    """Record store for database hosts."""

    model = DatabaseHost

    def get_hosts_for_node(self, node_id: int) -> list[DatabaseHost]:
        return self.find_where(node_id=node_id)


class ServerRepository(SqlAlchemyRepository[Server]):
    """Read access to servers."""

    model = Server
