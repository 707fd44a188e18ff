"""
Generic validated repository over an EntityDao.

Repositories are the only surface the presentation layer talks to. They:
- bind to the store's DAO on first use, initializing the store if needed
- validate records before any write reaches the store
- convert every underlying failure into a StoreError carrying the cause

Callers therefore only distinguish success from RepositoryError.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.config import Store
from ..database.dao import EntityDao
from ..exceptions import RepositoryError, StoreError, ValidationError
from ..models.base import EntityT
from .validators import FieldRule, validate

logger = logging.getLogger(__name__)


class Repository(Generic[EntityT]):
    """
    Validated, error-normalizing facade for one record type.

    Subclasses set ``entity_type`` and ``rules``.
    """

    entity_type: Type[EntityT]
    rules: Sequence[FieldRule] = ()

    def __init__(self, store: Store):
        """
        Args:
            store: Store shared by all repositories of the application
        """
        self.store = store
        self.label = self.entity_type.__name__
        self._dao: Optional[EntityDao[EntityT]] = None

    async def _get_dao(self) -> EntityDao[EntityT]:
        if self._dao is None:
            await self.store.initialize()
            self._dao = self.store.dao(self.entity_type)
        return self._dao

    @asynccontextmanager
    async def _operation(self, action: str):
        """Wrap non-repository failures of one operation into StoreError."""
        try:
            yield
        except RepositoryError:
            raise
        except Exception as e:
            logger.error(f"{self.label} {action} failed: {e}")
            raise StoreError(f"{self.label} {action} operation failed: {e}") from e

    def validate(self, entity: EntityT) -> None:
        """
        Check every field rule of this record type.

        Raises:
            ValidationError: On the first failing rule
        """
        if not isinstance(entity, self.entity_type):
            raise ValidationError(f"Expected {self.label}, got {type(entity).__name__}")
        validate(entity, self.rules)

    def parse(self, data: Mapping[str, Any]) -> EntityT:
        """
        Build a record from raw form input.

        Text values are stripped; numeric fields must parse as integers.

        Raises:
            ValidationError: If a field is missing or has the wrong type
        """
        cleaned: Dict[str, Any] = {
            key: value.strip() if isinstance(value, str) else value
            for key, value in data.items()
        }
        unknown = sorted(set(cleaned) - set(self.entity_type.model_fields))
        if unknown:
            raise ValidationError(f"Unknown {self.label.lower()} field(s): {', '.join(unknown)}")
        try:
            return self.entity_type.model_validate(cleaned)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error.get("loc") else None
            label = self.field_label(field)
            if error["type"] == "missing":
                message = f"{label} is required"
            elif error["type"].startswith("int"):
                message = f"{label} must be a whole number"
            else:
                message = f"{label}: {error['msg']}"
            logger.warning(f"Rejected {self.label} input: {message}")
            raise ValidationError(message, field=field) from e

    @classmethod
    def field_label(cls, field: Optional[str]) -> str:
        """Human readable name of a field, as used in error messages."""
        for rule in cls.rules:
            if rule.field == field:
                return rule.label
        return (field or cls.entity_type.__name__).replace("_", " ").capitalize()

    async def _check_references(self, session: AsyncSession, entity: EntityT) -> None:
        """Hook for records that point at other records; runs inside the write transaction."""

    async def insert(self, entity: EntityT) -> EntityT:
        """
        Validate and insert a new record.

        Returns:
            Copy of the record carrying its assigned identity

        Raises:
            ValidationError: If the record is invalid or already has an identity
            StoreError: If the database operation fails
        """
        self.validate(entity)
        if entity.id is not None:
            raise ValidationError(
                f"Cannot insert {self.label.lower()}: id {entity.id} is already set", field="id"
            )

        async with self._operation("insert"):
            dao = await self._get_dao()
            new_id = await dao.insert(entity, check=self._check_references)

        logger.info(f"Inserted {self.label} id={new_id}")
        return entity.copy_with(id=new_id)

    async def update(self, entity: EntityT) -> None:
        """
        Validate and replace a stored record.

        Raises:
            ValidationError: If the record has no identity or is invalid
            NotFoundError: If no stored record has that identity
            StoreError: If the database operation fails
        """
        if entity.id is None:
            raise ValidationError(f"Cannot update {self.label.lower()}: id is not set", field="id")
        self.validate(entity)

        async with self._operation("update"):
            dao = await self._get_dao()
            await dao.update(entity, check=self._check_references)

        logger.info(f"Updated {self.label} id={entity.id}")

    async def delete(self, entity_id: int) -> None:
        """Delete a record by identity; missing records are ignored."""
        async with self._operation("delete"):
            dao = await self._get_dao()
            await dao.delete(entity_id)

    async def find_all(self) -> List[EntityT]:
        async with self._operation("find all"):
            dao = await self._get_dao()
            return await dao.find_all()

    async def find_by_id(self, entity_id: int) -> Optional[EntityT]:
        """Return the record, or None when it does not exist."""
        async with self._operation("find by id"):
            dao = await self._get_dao()
            return await dao.find_by_id(entity_id)

    async def count(self) -> int:
        async with self._operation("count"):
            dao = await self._get_dao()
            return await dao.count()

    def __repr__(self):
        return f"<{type(self).__name__}(store={self.store.state.value})>"
