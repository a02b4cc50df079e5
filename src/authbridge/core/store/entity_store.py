"""Exact-match query interface over named record collections."""

from collections.abc import Mapping
from typing import Any, Protocol

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from src.authbridge.core.errors import StoreError
from src.authbridge.core.rows import ENTITY_ROWS

Record = Mapping[str, Any]


class EntityStore(Protocol):
    """Read access to entity records by exact field match.

    Implementations raise :class:`StoreError` on any transport or storage
    fault. Records are detached snapshots; mutating them never touches the
    backing store.
    """

    def query_one(self, entity_name: str, **predicate: Any) -> Record | None:
        """Return the first record matching every field of ``predicate``."""
        ...

    def query_list(self, entity_name: str, **predicate: Any) -> list[Record]:
        """Return all records matching every field of ``predicate``, in a stable order."""
        ...

    def current_namespace_key(self) -> str:
        """Return the composite namespace key of the partition being read."""
        ...


class SqlEntityStore:
    """EntityStore backed by a SQLModel session.

    Matches are ordered by primary key so that "first match" is reproducible
    for unchanged data.
    """

    def __init__(
        self,
        session: Session,
        namespace_key: str,
        entities: Mapping[str, type[SQLModel]] = ENTITY_ROWS,
    ) -> None:
        self._session = session
        self._namespace_key = namespace_key
        self._entities = entities

    def current_namespace_key(self) -> str:
        return self._namespace_key

    def query_one(self, entity_name: str, **predicate: Any) -> Record | None:
        statement = self._statement(entity_name, predicate)
        try:
            row = self._session.exec(statement).first()
        except SQLAlchemyError as e:
            logger.error("Query on {} failed: {}", entity_name, e)
            raise StoreError(str(e)) from e
        return None if row is None else row.model_dump()

    def query_list(self, entity_name: str, **predicate: Any) -> list[Record]:
        statement = self._statement(entity_name, predicate)
        try:
            rows = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            logger.error("Query on {} failed: {}", entity_name, e)
            raise StoreError(str(e)) from e
        return [row.model_dump() for row in rows]

    def _statement(self, entity_name: str, predicate: Mapping[str, Any]):
        row_cls = self._entities.get(entity_name)
        if row_cls is None:
            raise StoreError(f"Unknown entity: {entity_name}")

        table = row_cls.__table__
        conditions = []
        for field_name, value in predicate.items():
            if field_name not in table.columns:
                raise StoreError(f"Unknown field '{field_name}' on entity {entity_name}")
            conditions.append(table.columns[field_name] == value)

        statement = select(row_cls)
        if conditions:
            statement = statement.where(*conditions)
        return statement.order_by(*table.primary_key.columns)
