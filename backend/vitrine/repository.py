"""
Vitrine Backend: Generic Repository
=====================================

What:  The document-store operations every service needs, over one model class.
How:   Thin async wrappers around SQLAlchemy 2.0 statements executed on the
       request's AsyncSession. Writes are flushed immediately so constraint
       violations surface inside the calling service (which can translate
       them), not at commit time in the session dependency.
Who:   Used by the services in vitrine.services; the services own error
       translation into application exceptions.

Operations:
    insert / insert_many   add and flush new rows
    find_all               every row, optionally ordered
    find_by_id             primary-key lookup, None when missing
    find_one_by            first row matching column == value filters
    update_by_id           set the given attributes, return the row or None
    delete_by_id           remove the row, return it (None if it did not exist)
    count                  number of rows
"""

import uuid
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Store operations for a single mapped class."""

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def insert(self, db: AsyncSession, **values: Any) -> ModelT:
        instance = self.model(**values)
        db.add(instance)
        await db.flush()
        return instance

    async def insert_many(self, db: AsyncSession, rows: Sequence[dict]) -> List[ModelT]:
        instances = [self.model(**row) for row in rows]
        db.add_all(instances)
        await db.flush()
        return instances

    async def find_all(self, db: AsyncSession, *order_by: Any) -> List[ModelT]:
        """
        Return every row. `order_by` takes SQLAlchemy ordering clauses, e.g.
        ``desc(Submission.created_at)``.
        """
        query = select(self.model)
        if order_by:
            query = query.order_by(*order_by)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, db: AsyncSession, record_id: uuid.UUID) -> Optional[ModelT]:
        return await db.get(self.model, record_id)

    async def find_one_by(self, db: AsyncSession, **filters: Any) -> Optional[ModelT]:
        query = select(self.model).filter_by(**filters).limit(1)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def update_by_id(
        self, db: AsyncSession, record_id: uuid.UUID, **values: Any
    ) -> Optional[ModelT]:
        """Apply `values` to the row and flush. Attributes not passed are untouched."""
        instance = await self.find_by_id(db, record_id)
        if instance is None:
            return None
        for key, value in values.items():
            setattr(instance, key, value)
        await db.flush()
        return instance

    async def delete_by_id(self, db: AsyncSession, record_id: uuid.UUID) -> Optional[ModelT]:
        instance = await self.find_by_id(db, record_id)
        if instance is None:
            return None
        await db.delete(instance)
        await db.flush()
        return instance

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(self.model))
        return result.scalar() or 0
