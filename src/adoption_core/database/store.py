"""
Record store for the adoption-core package.

The store is the only component that talks to the database. It exposes a
small set of entity-level operations (find, insert, update, delete) built
as SQLAlchemy Core statements over the model tables and returns plain
dictionaries. Every operation on ``RecordStore`` runs in its own
transaction, so each call is atomic on its own and nothing more; callers
that need several statements to commit together use ``transaction()``.

Failures are translated into the store error taxonomy before they leave
this module, so coordinators only ever see ``StoreException`` subclasses.

Example:
    >>> store = RecordStore(session_manager)
    >>> pet_id = await store.insert(Pet, {"name": "Rex", "category_name": "Dogs"})
    >>> await store.update(Pet, pet_id, {"location": "Riverside Park"})
    1
    >>> await store.find_by_id(Pet, pet_id)
    {'pet_id': 1, 'name': 'Rex', ...}
"""

import logging
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncGenerator,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
)

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement, Executable, Select

from ..exceptions import InvalidRequestException, translate_store_error
from ..models.base import BaseModel
from .session import SessionManager

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
ModelType = Type[BaseModel]


def _rows(result: Result) -> List[Record]:
    return [dict(row) for row in result.mappings().all()]


def _inserted_id(result: Result) -> Any:
    return result.inserted_primary_key[0]


def _rowcount(result: Result) -> int:
    return result.rowcount


class _StoreOperations:
    """Entity operations shared by the auto-commit and transactional stores."""

    async def _run(
        self,
        statement: Executable,
        consume: Callable[[Result], Any],
        entity: Optional[str] = None,
    ) -> Any:
        raise NotImplementedError

    @staticmethod
    def _table(model: ModelType) -> Table:
        return model.__table__

    @staticmethod
    def _check_fields(model: ModelType, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Reject field names that are not writable columns of the model."""
        writable = set(model.get_writable_columns())
        unknown = sorted(name for name in fields if name not in writable)
        if unknown:
            raise InvalidRequestException(
                f"Unknown fields for {model.get_table_name()}: {', '.join(unknown)}",
                field=unknown[0],
            )
        return dict(fields)

    def _equals(self, model: ModelType, filters: Mapping[str, Any]) -> List[ColumnElement]:
        table = self._table(model)
        criteria = []
        for name, value in filters.items():
            if name not in table.c:
                raise InvalidRequestException(
                    f"Unknown filter field for {model.get_table_name()}: {name}",
                    field=name,
                )
            criteria.append(table.c[name] == value)
        return criteria

    def _pk(self, model: ModelType):
        return self._table(model).c[model.get_primary_key_column()]

    async def find_all(
        self, model: ModelType, order_by: Optional[Sequence[Any]] = None
    ) -> List[Record]:
        """Return every record of an entity, ordered by identity by default."""
        statement = select(self._table(model)).order_by(
            *(order_by or [self._pk(model)])
        )
        return await self._run(statement, _rows, model.get_table_name())

    async def find_by_id(self, model: ModelType, record_id: Any) -> Optional[Record]:
        """Return the record with the given identity, or None."""
        statement = select(self._table(model)).where(self._pk(model) == record_id)
        rows = await self._run(statement, _rows, model.get_table_name())
        return rows[0] if rows else None

    async def find_where(
        self,
        model: ModelType,
        *criteria: ColumnElement,
        order_by: Optional[Sequence[Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        """Return records matching all given predicate fragments."""
        statement = (
            select(self._table(model))
            .where(*criteria)
            .order_by(*(order_by or [self._pk(model)]))
        )
        if limit is not None:
            statement = statement.limit(limit)
        return await self._run(statement, _rows, model.get_table_name())

    async def find_by(
        self, model: ModelType, limit: Optional[int] = None, **filters: Any
    ) -> List[Record]:
        """Return records whose columns equal the given values."""
        return await self.find_where(model, *self._equals(model, filters), limit=limit)

    async def find_query(self, statement: Select) -> List[Record]:
        """Run a prepared select statement and return its rows."""
        return await self._run(statement, _rows)

    async def insert(self, model: ModelType, fields: Mapping[str, Any]) -> Any:
        """Insert a record and return its store-assigned identity."""
        values = self._check_fields(model, fields)
        statement = insert(self._table(model)).values(**values)
        record_id = await self._run(statement, _inserted_id, model.get_table_name())
        logger.debug(f"Inserted {model.get_table_name()} record {record_id}")
        return record_id

    async def update(
        self, model: ModelType, record_id: Any, fields: Mapping[str, Any]
    ) -> int:
        """Update one record by identity and return the affected-row count."""
        return await self.update_where(model, [self._pk(model) == record_id], fields)

    async def update_where(
        self,
        model: ModelType,
        criteria: Sequence[ColumnElement],
        fields: Mapping[str, Any],
    ) -> int:
        """Update every record matching the criteria; returns affected rows."""
        values = self._check_fields(model, fields)
        if not values:
            raise InvalidRequestException("No fields to update")
        statement = update(self._table(model)).where(*criteria).values(**values)
        return await self._run(statement, _rowcount, model.get_table_name())

    async def delete(self, model: ModelType, record_id: Any) -> int:
        """Delete one record by identity and return the affected-row count."""
        return await self.delete_where(model, self._pk(model) == record_id)

    async def delete_where(self, model: ModelType, *criteria: ColumnElement) -> int:
        """Delete every record matching the criteria; returns affected rows."""
        statement = delete(self._table(model)).where(*criteria)
        count = await self._run(statement, _rowcount, model.get_table_name())
        logger.debug(f"Deleted {count} {model.get_table_name()} record(s)")
        return count


class RecordStore(_StoreOperations):
    """Record store running each operation in its own transaction."""

    def __init__(self, session_manager: SessionManager):
        """
        Initialize the record store.

        Args:
            session_manager: Session manager owning the database engine
        """
        self.session_manager = session_manager

    async def _run(
        self,
        statement: Executable,
        consume: Callable[[Result], Any],
        entity: Optional[str] = None,
    ) -> Any:
        try:
            async with self.session_manager.get_transaction() as session:
                result = await session.execute(statement)
                return consume(result)
        except (SQLAlchemyError, OSError) as e:
            error = translate_store_error(e, entity=entity)
            logger.error(f"Record store operation on {entity or 'query'} failed: {e}")
            raise error from e

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator["TransactionalRecordStore", None]:
        """
        Open one database transaction spanning several store operations.

        Everything done through the yielded store commits together when the
        block exits, or is rolled back if the block raises.
        """
        try:
            async with self.session_manager.get_transaction() as session:
                yield TransactionalRecordStore(session)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Record store transaction failed: {e}")
            raise translate_store_error(e, step="commit") from e


class TransactionalRecordStore(_StoreOperations):
    """Record store bound to a single open transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _run(
        self,
        statement: Executable,
        consume: Callable[[Result], Any],
        entity: Optional[str] = None,
    ) -> Any:
        try:
            result = await self.session.execute(statement)
            return consume(result)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Transactional operation on {entity or 'query'} failed: {e}")
            raise translate_store_error(e, entity=entity) from e
