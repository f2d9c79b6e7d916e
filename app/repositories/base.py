from typing import Any, Generic, TypeVar

from sqlalchemy import Select, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class RepositoryBase(Generic[ModelT]):
    """Shared data access over one entity type.

    Repositories only stage changes on the session; ``UnitOfWork.complete``
    commits them.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def find_all(self) -> Select:
        return select(self.model)

    def find_by_condition(self, *conditions: Any) -> Select:
        return select(self.model).where(*conditions)

    async def first(self, stmt: Select) -> ModelT | None:
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def any(self, entity_id: int) -> bool:
        result = await self.session.execute(
            select(exists().where(self.model.id == entity_id))
        )
        return bool(result.scalar())

    def add(self, entity: ModelT) -> None:
        self.session.add(entity)

    def update(self, entity: ModelT) -> None:
        # Persistent instances are tracked by the session; re-adding attaches detached ones.
        self.session.add(entity)

    async def remove(self, entity: ModelT) -> None:
        await self.session.delete(entity)
