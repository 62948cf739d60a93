"""
Knowledge item service (persistence coordinator).

Writes one KnowledgeItem with all of its chunks and embeddings in a single
transaction: item first, then chunks, then embeddings. A failure anywhere
rolls back the whole set.

Dependencies: sqlalchemy, knowledge_rag.boundary.db
System role: Atomic persistence of ingestion output
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_rag.boundary.db.connection import transaction_scope
from knowledge_rag.boundary.db.CRUD.knowledge_chunk_crud import knowledge_chunk_crud
from knowledge_rag.boundary.db.CRUD.knowledge_embedding_crud import (
    knowledge_embedding_crud,
)
from knowledge_rag.boundary.db.CRUD.knowledge_item_crud import knowledge_item_crud
from knowledge_rag.boundary.db.models.knowledge_model import KnowledgeItemModel
from knowledge_rag.core.document_processing.models import EmbeddedJob
from knowledge_rag.core.exceptions import EmbeddingModelMismatchError, PersistenceError

logger = logging.getLogger(__name__)


async def ensure_corpus_model(
    session: AsyncSession,
    provider_id: str,
    model_id: str,
) -> None:
    """
    Refuse a model that differs from the one the corpus was embedded with.

    An empty corpus accepts any model.

    Raises:
        EmbeddingModelMismatchError: Corpus holds items from another model
    """
    corpus = await knowledge_item_crud.get_embedding_models(session)
    if not corpus:
        return
    if any(pair != (provider_id, model_id) for pair in corpus):
        raise EmbeddingModelMismatchError(
            configured_model=f"{provider_id}/{model_id}",
            corpus_models=[f"{provider}/{model}" for provider, model in corpus],
        )


class KnowledgeItemService:
    """Persist embedded jobs as knowledge items."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize knowledge item service.

        Args:
            session_factory: Factory for per-transaction sessions
        """
        self._session_factory = session_factory

    async def store_knowledge(self, embedded: EmbeddedJob) -> KnowledgeItemModel:
        """
        Write an item, its chunks and their embeddings atomically.

        Args:
            embedded: Output of the embedding stage

        Returns:
            KnowledgeItemModel: Committed knowledge item

        Raises:
            EmbeddingModelMismatchError: Corpus was embedded with another model
            PersistenceError: Any database failure (nothing is written)
        """
        try:
            async with transaction_scope(self._session_factory) as session:
                await ensure_corpus_model(
                    session, embedded.embedding_provider, embedded.embedding_model
                )

                item = await knowledge_item_crud.create(
                    session,
                    source_id=embedded.source_id,
                    knowledge_job_id=embedded.job_id,
                    chunks_count=embedded.chunk_count,
                    chunk_size=embedded.chunk_size,
                    chunk_overlap=embedded.chunk_overlap,
                    splitter=embedded.splitter,
                    embedding_model=embedded.embedding_model,
                    embedding_provider=embedded.embedding_provider,
                    total_tokens=embedded.total_tokens,
                )

                await knowledge_chunk_crud.create_many(
                    session,
                    [
                        {
                            "id": chunk.chunk_id,
                            "knowledge_item_id": item.id,
                            "position": chunk.position,
                            "text": chunk.text,
                        }
                        for chunk in embedded.chunks
                    ],
                )

                await knowledge_embedding_crud.create_many(
                    session,
                    [
                        {
                            "knowledge_chunk_id": chunk.chunk_id,
                            "embedding": chunk.vector,
                            "token_count": chunk.token_count,
                        }
                        for chunk in embedded.chunks
                    ],
                )
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:store_knowledge - Transaction rolled back",
                extra={"source_id": str(embedded.source_id), "error_type": type(e).__name__},
            )
            raise PersistenceError(
                f"Failed to store knowledge: {e}",
                operation="store_knowledge",
                details={"source_id": str(embedded.source_id)},
            ) from e

        logger.info(
            f"{__name__}:store_knowledge - Knowledge item stored",
            extra={
                "knowledge_item_id": str(item.id),
                "chunk_count": embedded.chunk_count,
                "total_tokens": embedded.total_tokens,
            },
        )
        return item
