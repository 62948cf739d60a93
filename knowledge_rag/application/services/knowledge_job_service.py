"""
Knowledge job service (ingestion orchestrator).

Drives a source through extract → chunk → embed → store and records the
job's state machine:

    queued → processing → completed
    queued → processing → failed

Each status write runs in its own transaction. The claim is a conditional
update on ``status = queued``, so a job can only be processed once.

Dependencies: sqlalchemy, knowledge_rag.boundary.db, knowledge_rag.core
System role: Ingestion orchestration and job status tracking
"""

import logging
import time
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_rag.application.services.knowledge_item_service import (
    KnowledgeItemService,
)
from knowledge_rag.boundary.db.connection import transaction_scope
from knowledge_rag.boundary.db.CRUD.job_crud import knowledge_job_crud
from knowledge_rag.boundary.db.CRUD.knowledge_item_crud import knowledge_item_crud
from knowledge_rag.boundary.db.CRUD.source_crud import source_crud
from knowledge_rag.boundary.db.models.job_model import JobStatus, KnowledgeJobModel
from knowledge_rag.boundary.db.models.source_model import SourceModel
from knowledge_rag.core.document_processing.models import EmbeddedJob, SourceDocument
from knowledge_rag.core.document_processing.tasks import (
    ChunkingTask,
    EmbeddingTask,
    TextExtractor,
)
from knowledge_rag.core.exceptions import (
    InvalidJobStateError,
    JobNotFoundError,
    KnowledgeRagError,
    PersistenceError,
    SourceNotFoundError,
)
from knowledge_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def failure_message(error: Exception) -> str:
    """Human-readable cause recorded on a failed job."""
    if isinstance(error, KnowledgeRagError):
        return error.message
    return str(error) or type(error).__name__


class KnowledgeJobService:
    """
    Ingestion orchestrator.

    Runs the pipeline stages strictly in sequence for one job and owns the
    job's status transitions.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        extractor: TextExtractor,
        chunker: ChunkingTask,
        embedder: EmbeddingTask,
        item_service: KnowledgeItemService,
    ) -> None:
        """
        Initialize knowledge job service.

        Args:
            session_factory: Factory for per-transaction sessions
            extractor: Text extraction stage
            chunker: Chunking stage
            embedder: Embedding stage
            item_service: Persistence coordinator
        """
        self._session_factory = session_factory
        self._extractor = extractor
        self._chunker = chunker
        self._embedder = embedder
        self._item_service = item_service

    async def create_job(self, source: SourceModel | UUID) -> KnowledgeJobModel:
        """
        Create a queued job for a source.

        Args:
            source: Source (or its id) to ingest

        Returns:
            KnowledgeJobModel: Job in QUEUED status

        Raises:
            SourceNotFoundError: Source does not exist
        """
        source_id = source.id if isinstance(source, SourceModel) else source

        async with transaction_scope(self._session_factory) as session:
            if not await source_crud.get_by_id(session, source_id):
                raise SourceNotFoundError(str(source_id))
            job = await knowledge_job_crud.create(
                session,
                source_id=source_id,
                status=JobStatus.QUEUED,
            )

        logger.info(
            f"{__name__}:create_job - Job queued",
            extra={"job_id": str(job.id), "source_id": str(source_id)},
        )
        return job

    async def get_job(self, job_id: UUID) -> KnowledgeJobModel:
        """
        Get a job for status polling, with its source loaded.

        Raises:
            JobNotFoundError: If the job doesn't exist
        """
        async with transaction_scope(self._session_factory) as session:
            job = await knowledge_job_crud.get_with_source(session, job_id)
        if job is None:
            raise JobNotFoundError(str(job_id))
        return job

    async def _claim(self, job_id: UUID) -> SourceDocument:
        async with transaction_scope(self._session_factory) as session:
            claimed = await knowledge_job_crud.claim(session, job_id)
            if claimed is None:
                current = await knowledge_job_crud.get_by_id(session, job_id)
                if current is None:
                    raise JobNotFoundError(str(job_id))
                raise InvalidJobStateError(
                    str(job_id), current.status.value, JobStatus.QUEUED.value
                )

            source = await source_crud.get_by_id(session, claimed.source_id)
            return SourceDocument(
                source_id=source.id,
                source_type=source.source_type,
                location=source.location,
                mime_type=source.mime_type,
                file_name=source.file_name,
            )

    async def _record_failure(self, job_id: UUID, error: Exception) -> None:
        message = failure_message(error)
        try:
            async with transaction_scope(self._session_factory) as session:
                failed = await knowledge_job_crud.mark_failed(session, job_id, message)
        except SQLAlchemyError as write_error:
            log_exception_with_context(
                logger,
                f"{__name__}:process_job - Could not record job failure",
                write_error,
                job_id=str(job_id),
                original_error=message,
            )
            return

        if failed is None:
            logger.warning(
                f"{__name__}:process_job - Job left PROCESSING before failure could be recorded",
                extra={
                    "job_id": str(job_id),
                    "error_type": type(error).__name__,
                    "error_msg": message[:500],
                },
            )
            return

        logger.error(
            f"{__name__}:process_job - Job failed",
            extra={
                "job_id": str(job_id),
                "error_type": type(error).__name__,
                "error_msg": message[:500],
            },
        )

    async def process_job(self, job: KnowledgeJobModel | UUID) -> EmbeddedJob:
        """
        Run a queued job through the pipeline.

        Exactly two status writes happen per run: PROCESSING on claim, then
        COMPLETED or FAILED. A cancelled run leaves the job in PROCESSING
        (see requeue_job). So does a failed COMPLETED write after the item
        has been stored; requeue_job then completes the job instead.

        Args:
            job: Job (or its id) in QUEUED status

        Returns:
            EmbeddedJob: Embedded result carrying the stored knowledge_item_id

        Raises:
            JobNotFoundError: Job does not exist
            InvalidJobStateError: Job is not QUEUED (nothing is written)
            Exception: Any stage failure, re-raised after the job is marked FAILED
        """
        job_id = job.id if isinstance(job, KnowledgeJobModel) else job
        start_time = time.perf_counter()

        source = await self._claim(job_id)
        logger.info(
            f"{__name__}:process_job - Job claimed",
            extra={"job_id": str(job_id), "source_id": str(source.source_id)},
        )

        try:
            parsed = await self._extractor.extract(source)
            chunked = self._chunker.chunk_document(parsed)
            embedded = await self._embedder.embed(chunked, job_id=job_id)
            item = await self._item_service.store_knowledge(embedded)
            embedded.knowledge_item_id = item.id
        except Exception as e:
            await self._record_failure(job_id, e)
            raise

        try:
            async with transaction_scope(self._session_factory) as session:
                completed = await knowledge_job_crud.mark_completed(session, job_id)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to mark job completed: {e}",
                operation="process_job",
                details={"job_id": str(job_id)},
            ) from e

        if completed is None:
            logger.warning(
                f"{__name__}:process_job - Job left PROCESSING before completion",
                extra={"job_id": str(job_id)},
            )

        logger.info(
            f"{__name__}:process_job - Job completed",
            extra={
                "job_id": str(job_id),
                "knowledge_item_id": str(item.id),
                "chunk_count": embedded.chunk_count,
                "total_tokens": embedded.total_tokens,
                "processing_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return embedded

    async def requeue_job(self, job_id: UUID) -> KnowledgeJobModel:
        """
        Return a job stranded in PROCESSING to QUEUED.

        Terminal jobs are never requeued; create a new job for the source.
        A job whose knowledge item was already stored is marked COMPLETED
        instead.

        Returns:
            KnowledgeJobModel: Job in QUEUED status, or COMPLETED when its
            item already exists

        Raises:
            JobNotFoundError: Job does not exist
            InvalidJobStateError: Job is not PROCESSING
        """
        async with transaction_scope(self._session_factory) as session:
            if await knowledge_item_crud.get_by_job_id(session, job_id):
                job = await knowledge_job_crud.mark_completed(session, job_id)
            else:
                job = await knowledge_job_crud.requeue(session, job_id)
            if job is None:
                current = await knowledge_job_crud.get_by_id(session, job_id)
                if current is None:
                    raise JobNotFoundError(str(job_id))
                raise InvalidJobStateError(
                    str(job_id), current.status.value, JobStatus.PROCESSING.value
                )

        logger.info(
            f"{__name__}:requeue_job - Job returned from PROCESSING",
            extra={"job_id": str(job_id), "status": job.status.value},
        )
        return job
