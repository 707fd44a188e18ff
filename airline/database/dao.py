"""
Generic data-access object for the record tables.

One EntityDao is created per record type by the Store. Each operation runs in
its own session obtained from the store's session scope: writes are
committed when the operation returns and rolled back if it raises.
"""

import logging
from typing import AsyncContextManager, Awaitable, Callable, Generic, List, Optional, Type

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..models.base import EntityT

logger = logging.getLogger(__name__)

SessionScope = Callable[[], AsyncContextManager[AsyncSession]]
# Runs inside the write session before the row is written
WriteCheck = Callable[[AsyncSession, EntityT], Awaitable[None]]


class EntityDao(Generic[EntityT]):
    """
    Async CRUD access to one table.

    Rows are converted to immutable value objects before leaving the session,
    so callers never hold live ORM instances.
    """

    def __init__(self, session_scope: SessionScope, row_type: type, entity_type: Type[EntityT]):
        """
        Args:
            session_scope: callable returning a transactional session context
            row_type: SQLAlchemy table model
            entity_type: value object class built from each row
        """
        self._session_scope = session_scope
        self.row_type = row_type
        self.entity_type = entity_type
        self.name = entity_type.__name__

    def _to_entity(self, row) -> EntityT:
        return self.entity_type.model_validate(row)

    async def find_all(self) -> List[EntityT]:
        """Return every row ordered by identity; empty list if none."""
        async with self._session_scope() as session:
            result = await session.execute(select(self.row_type).order_by(self.row_type.id))
            return [self._to_entity(row) for row in result.scalars()]

    async def find_by_id(self, entity_id: int) -> Optional[EntityT]:
        """Return the row with the given identity, or None."""
        async with self._session_scope() as session:
            row = await session.get(self.row_type, entity_id)
            return self._to_entity(row) if row is not None else None

    async def find_by(self, **criteria) -> List[EntityT]:
        """Return rows whose attributes equal the given values, ordered by identity."""
        async with self._session_scope() as session:
            result = await session.execute(
                select(self.row_type).filter_by(**criteria).order_by(self.row_type.id)
            )
            return [self._to_entity(row) for row in result.scalars()]

    async def insert(self, entity: EntityT, check: Optional[WriteCheck] = None) -> int:
        """
        Insert a new row.

        Args:
            entity: record without identity
            check: optional coroutine run in the same transaction before the write

        Returns:
            The identity assigned by the database

        Raises:
            ValueError: If the entity already carries an identity
        """
        if entity.id is not None:
            raise ValueError(f"{self.name} already has id {entity.id}; use update instead")

        async with self._session_scope() as session:
            if check is not None:
                await check(session, entity)
            row = self.row_type(**entity.to_record())
            session.add(row)
            await session.flush()
            new_id = row.id

        logger.debug(f"Inserted {self.name} id={new_id}")
        return new_id

    async def update(self, entity: EntityT, check: Optional[WriteCheck] = None) -> None:
        """
        Replace every stored column of the row matching ``entity.id``.

        ``check`` runs in the same transaction, before the row is changed.

        Raises:
            ValueError: If the entity has no identity
            NotFoundError: If no row has that identity
        """
        if entity.id is None:
            raise ValueError(f"Cannot update {self.name}: id is not set")

        async with self._session_scope() as session:
            row = await session.get(self.row_type, entity.id)
            if row is None:
                raise NotFoundError(self.name, entity.id)
            if check is not None:
                await check(session, entity)
            for field, value in entity.to_record().items():
                setattr(row, field, value)

        logger.debug(f"Updated {self.name} id={entity.id}")

    async def delete(self, entity_id: int) -> None:
        """Delete the row with the given identity. Missing rows are ignored."""
        async with self._session_scope() as session:
            result = await session.execute(
                delete(self.row_type).where(self.row_type.id == entity_id)
            )
            deleted = result.rowcount

        if deleted:
            logger.debug(f"Deleted {self.name} id={entity_id}")
        else:
            logger.debug(f"Delete of {self.name} id={entity_id} matched no row")

    async def count(self) -> int:
        """Return the number of rows."""
        async with self._session_scope() as session:
            result = await session.execute(select(func.count()).select_from(self.row_type))
            return result.scalar_one()

    def __repr__(self):
        return f"<EntityDao({self.name})>"
