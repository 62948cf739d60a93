"""
Knowledge item CRUD operations.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.models
System role: Knowledge item persistence and corpus introspection
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_rag.boundary.db.models.knowledge_model import KnowledgeItemModel
from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD


class KnowledgeItemCRUD(BaseCRUD[KnowledgeItemModel]):
    """CRUD operations for KnowledgeItemModel."""

    def __init__(self) -> None:
        """Initialize KnowledgeItemCRUD with KnowledgeItemModel."""
        super().__init__(KnowledgeItemModel)

    async def get_by_job_id(
        self,
        session: AsyncSession,
        job_id: UUID,
    ) -> Sequence[KnowledgeItemModel]:
        """
        Retrieve items produced by a job.

        Args:
            session: Async database session
            job_id: Knowledge job UUID

        Returns:
            Sequence of KnowledgeItemModels (at most one for a completed job)
        """
        stmt = select(KnowledgeItemModel).where(
            KnowledgeItemModel.knowledge_job_id == job_id
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_embedding_models(
        self,
        session: AsyncSession,
    ) -> list[tuple[str, str]]:
        """
        List the distinct (provider, model) pairs the corpus was embedded with.

        Args:
            session: Async database session

        Returns:
            Sorted list of (embedding_provider, embedding_model) tuples
        """
        stmt = (
            select(
                KnowledgeItemModel.embedding_provider,
                KnowledgeItemModel.embedding_model,
            )
            .distinct()
            .order_by(
                KnowledgeItemModel.embedding_provider,
                KnowledgeItemModel.embedding_model,
            )
        )
        result = await session.execute(stmt)
        return [(provider, model) for provider, model in result.all()]


knowledge_item_crud = KnowledgeItemCRUD()
