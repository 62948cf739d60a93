"""
Retrieval service.

Embeds a query with the same client used for ingestion, ranks stored
chunks by cosine distance (lower is closer, ties broken by chunk id) and
records the query with its results in a separate transaction.

Dependencies: sqlalchemy, knowledge_rag.boundary.db, knowledge_rag.boundary.embeddings
System role: Similarity search over the knowledge corpus
"""

import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_rag.application.services.knowledge_item_service import (
    ensure_corpus_model,
)
from knowledge_rag.boundary.db.connection import transaction_scope
from knowledge_rag.boundary.db.CRUD.knowledge_embedding_crud import (
    knowledge_embedding_crud,
)
from knowledge_rag.boundary.db.CRUD.query_crud import (
    knowledge_query_crud,
    knowledge_query_result_crud,
)
from knowledge_rag.boundary.db.models.query_model import KnowledgeQueryModel
from knowledge_rag.boundary.embeddings.base import EmbeddingClient
from knowledge_rag.core.document_processing.models import SearchResult
from knowledge_rag.core.exceptions import (
    ExternalProviderError,
    KnowledgeRagError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class RetrievalService:
    """Semantic search over stored chunks."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_client: EmbeddingClient,
        default_limit: int = 5,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            session_factory: Factory for per-transaction sessions
            embedding_client: Client used for ingestion as well
            default_limit: Results returned when no limit is given
        """
        self._session_factory = session_factory
        self._client = embedding_client
        self._default_limit = default_limit

    async def _embed_query(self, query_text: str) -> list[float]:
        try:
            result = await self._client.embed(query_text)
        except KnowledgeRagError:
            raise
        except Exception as e:
            raise ExternalProviderError(
                f"Query embedding failed: {e}",
                provider=self._client.provider_id,
            ) from e

        if len(result.vector) != self._client.dimensions:
            raise ExternalProviderError(
                f"Query embedding has {len(result.vector)} dimensions, "
                f"expected {self._client.dimensions}",
                provider=self._client.provider_id,
            )
        return result.vector

    async def fetch_chunks(
        self,
        query_text: str,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """
        Rank stored chunks against a query.

        Args:
            query_text: Natural-language query
            limit: Maximum number of results (default from settings)

        Returns:
            list[SearchResult]: Closest chunks first, score is the raw
            cosine distance

        Raises:
            ValidationError: Blank query or limit < 1
            EmbeddingModelMismatchError: Corpus embedded with another model
            ExternalProviderError: Query embedding failed
            PersistenceError: Ranking query failed
        """
        if not query_text or not query_text.strip():
            raise ValidationError("query_text must not be empty", field="query_text")
        if limit is None:
            limit = self._default_limit
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        async with transaction_scope(self._session_factory) as session:
            await ensure_corpus_model(
                session, self._client.provider_id, self._client.model_id
            )

        vector = await self._embed_query(query_text)

        try:
            async with transaction_scope(self._session_factory) as session:
                rows = await knowledge_embedding_crud.find_nearest(session, vector, limit)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to rank chunks: {e}",
                operation="fetch_chunks",
            ) from e

        results = [
            SearchResult(chunk_id=row.chunk_id, text=row.text, score=row.distance, rank=rank)
            for rank, row in enumerate(rows)
        ]
        logger.info(
            f"{__name__}:fetch_chunks - Ranked chunks",
            extra={"limit": limit, "result_count": len(results)},
        )
        return results

    async def save_query(
        self,
        query_text: str,
        principal_id: str,
        results: Sequence[SearchResult],
    ) -> KnowledgeQueryModel:
        """
        Record a query and its ranked results in one transaction.

        Args:
            query_text: Query as issued
            principal_id: Principal that issued it
            results: Output of fetch_chunks

        Returns:
            KnowledgeQueryModel: Committed query row with its results loaded

        Raises:
            PersistenceError: The write failed (never swallowed)
        """
        try:
            async with transaction_scope(self._session_factory) as session:
                query = await knowledge_query_crud.create(
                    session,
                    principal_id=principal_id,
                    query_text=query_text,
                )
                await knowledge_query_result_crud.create_many(
                    session,
                    [
                        {
                            "knowledge_query_id": query.id,
                            "knowledge_chunk_id": result.chunk_id,
                            "rank": result.rank,
                            "score": result.score,
                        }
                        for result in results
                    ],
                )
                query = await knowledge_query_crud.get_with_results(session, query.id)
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to save query: {e}",
                operation="save_query",
            ) from e

        logger.info(
            f"{__name__}:save_query - Query saved",
            extra={"knowledge_query_id": str(query.id), "result_count": len(results)},
        )
        return query

    async def search(
        self,
        query_text: str,
        principal_id: str,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """
        Fetch ranked chunks, then record the query.

        Raises:
            PersistenceError: Recording the query failed
        """
        results = await self.fetch_chunks(query_text, limit)
        await self.save_query(query_text, principal_id, results)
        return results
