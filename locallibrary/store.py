"""Document-style access to the catalog tables.

Each call opens its own session from the shared pool, so independent reads
can be awaited concurrently. Store errors (``SQLAlchemyError``) are never
caught here.
"""

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from locallibrary.database import Base, async_session

M = TypeVar("M", bound=Base)


class CatalogStore:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def find_by_id(self, model: type[M], entity_id: int) -> M | None:
        async with self._sessionmaker() as session:
            return await session.get(model, entity_id)

    async def find(
        self,
        model: type[M],
        *criteria: Any,
        order_by: Sequence[Any] = (),
        columns: Sequence[Any] | None = None,
    ) -> list[Any]:
        """Return matching entities, or plain dicts when ``columns`` projects a subset."""
        stmt = select(*columns) if columns else select(model)
        stmt = stmt.where(*criteria).order_by(*order_by)
        async with self._sessionmaker() as session:
            result = await session.execute(stmt)
            if columns:
                return [dict(row._mapping) for row in result]
            return list(result.scalars().all())

    async def find_one(self, model: type[M], *criteria: Any) -> M | None:
        async with self._sessionmaker() as session:
            result = await session.execute(select(model).where(*criteria).limit(1))
            return result.scalar_one_or_none()

    async def count(self, model: type[M]) -> int:
        async with self._sessionmaker() as session:
            return (await session.execute(select(func.count()).select_from(model))).scalar_one()

    async def insert(self, entity: M) -> M:
        async with self._sessionmaker() as session:
            session.add(entity)
            await session.commit()
            await session.refresh(entity)
            return entity

    async def update(self, model: type[M], entity_id: int, values: dict[str, Any]) -> M | None:
        async with self._sessionmaker() as session:
            entity = await session.get(model, entity_id)
            if entity is None:
                return None
            for key, value in values.items():
                setattr(entity, key, value)
            await session.commit()
            await session.refresh(entity)
            return entity

    async def delete(self, model: type[M], entity_id: int) -> bool:
        async with self._sessionmaker() as session:
            entity = await session.get(model, entity_id)
            if entity is None:
                return False
            await session.delete(entity)
            await session.commit()
            return True


def get_store() -> CatalogStore:
    return CatalogStore(async_session)
