"""
Dependency container.

Wires settings, engine, collaborators and services. One container holds
one embedding limiter, shared by every job it processes.

Dependencies: knowledge_rag.configs, knowledge_rag.application, knowledge_rag.boundary
System role: Composition root
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from knowledge_rag.application.services import (
    KnowledgeItemService,
    KnowledgeJobService,
    RetrievalService,
    SourceService,
)
from knowledge_rag.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
)
from knowledge_rag.boundary.embeddings import EmbeddingClient, create_embedding_client
from knowledge_rag.boundary.storage import FileAccessor, create_file_accessor
from knowledge_rag.configs import Settings, get_settings
from knowledge_rag.core.document_processing import (
    ChunkingConfig,
    ChunkingTask,
    EmbeddingConcurrencyLimiter,
    EmbeddingTask,
    TextExtractor,
)


@dataclass
class KnowledgeContainer:
    """Wired services and the collaborators they share."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    file_accessor: FileAccessor
    embedding_client: EmbeddingClient
    extractor: TextExtractor
    limiter: EmbeddingConcurrencyLimiter
    source_service: SourceService
    item_service: KnowledgeItemService
    job_service: KnowledgeJobService
    retrieval_service: RetrievalService

    async def dispose(self) -> None:
        """Close pooled database connections."""
        await self.engine.dispose()


def build_container(
    settings: Settings | None = None,
    *,
    engine: AsyncEngine | None = None,
    embedding_client: EmbeddingClient | None = None,
    file_accessor: FileAccessor | None = None,
) -> KnowledgeContainer:
    """
    Build the service container.

    Collaborators left as None are built from settings.

    Args:
        settings: Application settings (defaults to get_settings())
        engine: Async engine to use instead of one built from settings
        embedding_client: Embedding client override
        file_accessor: File accessor override

    Returns:
        KnowledgeContainer: Wired services

    Raises:
        ConfigurationError: Invalid pipeline, storage or provider settings
    """
    settings = settings or get_settings()
    engine = engine or get_async_engine(settings.database)
    session_factory = get_async_session_factory(engine)
    file_accessor = file_accessor or create_file_accessor(settings.storage)
    embedding_client = embedding_client or create_embedding_client(settings.embedding)

    extractor = TextExtractor(file_accessor)
    limiter = EmbeddingConcurrencyLimiter(settings.pipeline.max_parallel_embedding_calls)
    chunker = ChunkingTask(
        ChunkingConfig(
            max_size=settings.pipeline.chunk_size,
            overlap=settings.pipeline.chunk_overlap,
        )
    )

    item_service = KnowledgeItemService(session_factory)
    job_service = KnowledgeJobService(
        session_factory=session_factory,
        extractor=extractor,
        chunker=chunker,
        embedder=EmbeddingTask(embedding_client, limiter),
        item_service=item_service,
    )

    return KnowledgeContainer(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        file_accessor=file_accessor,
        embedding_client=embedding_client,
        extractor=extractor,
        limiter=limiter,
        source_service=SourceService(session_factory, file_accessor),
        item_service=item_service,
        job_service=job_service,
        retrieval_service=RetrievalService(
            session_factory,
            embedding_client,
            default_limit=settings.pipeline.default_search_limit,
        ),
    )
