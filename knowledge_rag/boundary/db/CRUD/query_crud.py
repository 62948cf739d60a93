"""
Knowledge query and query result CRUD operations.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.models
System role: Search history persistence
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from knowledge_rag.boundary.db.models.query_model import (
    KnowledgeQueryModel,
    KnowledgeQueryResultModel,
)
from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD


class KnowledgeQueryCRUD(BaseCRUD[KnowledgeQueryModel]):
    """CRUD operations for KnowledgeQueryModel."""

    def __init__(self) -> None:
        """Initialize KnowledgeQueryCRUD with KnowledgeQueryModel."""
        super().__init__(KnowledgeQueryModel)

    async def get_with_results(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> KnowledgeQueryModel | None:
        """
        Retrieve a query with its ranked results eagerly loaded.

        Reloads an instance already in the session, so it also works inside
        the transaction that inserted the results.

        Args:
            session: Async database session
            id: Knowledge query UUID

        Returns:
            KnowledgeQueryModel if found, None otherwise
        """
        stmt = (
            select(KnowledgeQueryModel)
            .options(selectinload(KnowledgeQueryModel.results))
            .where(KnowledgeQueryModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class KnowledgeQueryResultCRUD(BaseCRUD[KnowledgeQueryResultModel]):
    """CRUD operations for KnowledgeQueryResultModel."""

    def __init__(self) -> None:
        """Initialize KnowledgeQueryResultCRUD with KnowledgeQueryResultModel."""
        super().__init__(KnowledgeQueryResultModel)


knowledge_query_crud = KnowledgeQueryCRUD()
knowledge_query_result_crud = KnowledgeQueryResultCRUD()
