"""Base repository with common read operations."""

from typing import Generic, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.infrastructure.database.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")


class BaseRepository(Generic[ModelType, EntityType]):
    """Base repository providing common read operations.

    Subclasses should set:
    - model_class: The SQLAlchemy model class (must implement ``to_entity``)

    Writes are repository specific; there is no generic update or delete.
    """

    model_class: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _all(self, stmt: Select) -> list[EntityType]:
        result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]
