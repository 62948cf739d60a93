"""
Knowledge job CRUD operations.

Provides job-specific queries and the guarded status transitions the
orchestrator relies on. Each transition is a conditional UPDATE on the
expected current status, so concurrent callers cannot both win.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.models
System role: Job persistence operations for ingestion tracking
"""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from knowledge_rag.boundary.db.models.job_model import JobStatus, KnowledgeJobModel
from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD

# Column is Text, but failure causes are capped to keep rows small.
MAX_ERROR_LENGTH = 2000


class KnowledgeJobCRUD(BaseCRUD[KnowledgeJobModel]):
    """
    CRUD operations for KnowledgeJobModel.

    Extends BaseCRUD with an eager source lookup and compare-and-set transitions.
    """

    def __init__(self) -> None:
        """Initialize KnowledgeJobCRUD with KnowledgeJobModel."""
        super().__init__(KnowledgeJobModel)

    async def get_with_source(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> KnowledgeJobModel | None:
        """
        Retrieve a job with its source eagerly loaded.

        Args:
            session: Async database session
            id: Job UUID

        Returns:
            KnowledgeJobModel if found, None otherwise
        """
        stmt = (
            select(KnowledgeJobModel)
            .options(selectinload(KnowledgeJobModel.source))
            .where(KnowledgeJobModel.id == id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def transition(
        self,
        session: AsyncSession,
        id: UUID,
        expected: JobStatus,
        status: JobStatus,
        error: str | None = None,
    ) -> KnowledgeJobModel | None:
        """
        Move a job to a new status only if it is currently in the expected one.

        Args:
            session: Async database session
            id: Job UUID
            expected: Status the job must currently have
            status: New status
            error: Error message to record (cleared when None)

        Returns:
            Updated KnowledgeJobModel, or None when the job is missing or
            was not in the expected status
        """
        if error is not None and len(error) > MAX_ERROR_LENGTH:
            error = error[:MAX_ERROR_LENGTH]

        stmt = (
            update(KnowledgeJobModel)
            .where(KnowledgeJobModel.id == id)
            .where(KnowledgeJobModel.status == expected)
            .values(status=status, error=error)
            .returning(KnowledgeJobModel)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def claim(self, session: AsyncSession, id: UUID) -> KnowledgeJobModel | None:
        """
        Claim a queued job for processing (QUEUED → PROCESSING).

        Args:
            session: Async database session
            id: Job UUID

        Returns:
            Claimed job, or None if it was not queued
        """
        return await self.transition(session, id, JobStatus.QUEUED, JobStatus.PROCESSING)

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> KnowledgeJobModel | None:
        """
        Mark a processing job as completed.

        Args:
            session: Async database session
            id: Job UUID

        Returns:
            Updated job, or None if it was not processing
        """
        return await self.transition(
            session, id, JobStatus.PROCESSING, JobStatus.COMPLETED
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error: str,
    ) -> KnowledgeJobModel | None:
        """
        Mark a processing job as failed with error message.

        Args:
            session: Async database session
            id: Job UUID
            error: Human-readable failure cause

        Returns:
            Updated job, or None if it was not processing
        """
        return await self.transition(
            session, id, JobStatus.PROCESSING, JobStatus.FAILED, error=error
        )

    async def requeue(self, session: AsyncSession, id: UUID) -> KnowledgeJobModel | None:
        """
        Return a stranded processing job to the queue (PROCESSING → QUEUED).

        Args:
            session: Async database session
            id: Job UUID

        Returns:
            Updated job, or None if it was not processing
        """
        return await self.transition(session, id, JobStatus.PROCESSING, JobStatus.QUEUED)


knowledge_job_crud = KnowledgeJobCRUD()
