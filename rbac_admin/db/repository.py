"""
Repository Contract

This module defines the data-access contract every service depends on, and
a generic SQLModel implementation of it.

Contract (one instance per entity type):
- get_all() -> list of entities
- get_by_id(id) -> entity or None
- create(entity) -> persisted entity with its store-assigned id
- update(entity) -> bool, False when no row was written
- delete(id) -> bool, False when no row was removed

Design Decisions:
- Writes commit immediately: one service call is one unit of work
- A failed write rolls the session back before re-raising, so the
  request's session stays usable for the caller's next operation
- update() is guarded by the row version: the UPDATE only matches when the
  stored version equals the version the entity was read at, and bumps it.
  A concurrent writer therefore makes the second update report False
  instead of silently overwriting the first one.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Optional, TypeVar

from sqlalchemy import update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from rbac_admin.db.models import EntityBase

ModelT = TypeVar("ModelT", bound=EntityBase)

# Columns the repository owns; update() never copies them from the entity.
_MANAGED_COLUMNS = frozenset({"id", "version", "created_at"})


class Repository(ABC, Generic[ModelT]):
    """Abstract data-access contract consumed by the service layer."""

    @abstractmethod
    async def get_all(self) -> list[ModelT]:
        pass

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        pass

    @abstractmethod
    async def create(self, entity: ModelT) -> ModelT:
        pass

    @abstractmethod
    async def update(self, entity: ModelT) -> bool:
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        pass


class SQLModelRepository(Repository[ModelT]):
    """
    Generic repository over an async SQLModel session.

    Subclasses only set `model`; entity-specific lookups are added as extra
    methods on the subclass.
    """

    model: ClassVar[type[EntityBase]]

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            session: Async database session, scoped to the current request
        """
        self.session = session

    async def get_all(self) -> list[ModelT]:
        statement = select(self.model).order_by(self.model.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return await self.session.get(self.model, entity_id)

    async def create(self, entity: ModelT) -> ModelT:
        """
        Insert a new row.

        Returns:
            The same entity, refreshed so `id` holds the store-assigned key
        """
        try:
            self.session.add(entity)
            await self.session.commit()
            await self.session.refresh(entity)
        except Exception:
            await self.session.rollback()
            raise
        return entity

    async def update(self, entity: ModelT) -> bool:
        """
        Write the entity's current field values back to its row.

        The entity is detached from the session first so the explicit,
        version-guarded UPDATE is the only write issued for it.

        Returns:
            True if exactly one row matched id and version, False otherwise
        """
        current_version = entity.version
        values = {
            column.name: getattr(entity, column.name)
            for column in self.model.__table__.columns
            if column.name not in _MANAGED_COLUMNS
        }
        statement = (
            sql_update(self.model)
            .where(self.model.id == entity.id)
            .where(self.model.version == current_version)
            .values(**values, version=current_version + 1)
            .execution_options(synchronize_session=False)
        )

        if entity in self.session:
            self.session.expunge(entity)

        try:
            result = await self.session.execute(statement)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if result.rowcount != 1:
            return False

        entity.version = current_version + 1
        return True

    async def delete(self, entity_id: int) -> bool:
        entity = await self.session.get(self.model, entity_id)
        if entity is None:
            return False

        try:
            await self.session.delete(entity)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return True
