"""
Generic table operations shared by the knowledge CRUD classes.

Nothing here commits: callers pass the session of the transaction they
opened with ``transaction_scope`` and decide when it ends.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_rag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Insert and look up rows of one mapped table."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields: Any) -> ModelT:
        """
        Insert one row and return it with server-side values loaded.

        The row is flushed, not committed, so it is visible to later
        statements in the same transaction.
        """
        row = self.model(**fields)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def create_many(
        self,
        session: AsyncSession,
        rows: Sequence[dict[str, Any]],
    ) -> list[ModelT]:
        """
        Insert several rows with a single flush.

        Used for the chunk and embedding batches of one knowledge item and for
        the results of one query. Returns the instances in input order.
        """
        instances = [self.model(**fields) for fields in rows]
        session.add_all(instances)
        await session.flush()
        return instances

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

