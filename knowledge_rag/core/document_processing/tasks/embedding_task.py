"""
Bounded-concurrency embedding task.

Issues one embedding call per chunk concurrently, with the number in
flight capped by the shared limiter. Output keeps input order. The first
failure cancels the remaining calls and fails the whole batch, so a
document is never persisted with missing embeddings.

Dependencies: asyncio
System role: Third stage of document ingestion pipeline
"""

import asyncio
import logging
from uuid import UUID

from knowledge_rag.boundary.embeddings.base import EmbeddingClient
from knowledge_rag.core.exceptions import ExternalProviderError, KnowledgeRagError
from ..limiter import EmbeddingConcurrencyLimiter
from ..models import ChunkedDocument, EmbeddedChunk, EmbeddedJob, TextChunk

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings for document chunks through a shared limiter."""

    def __init__(
        self,
        client: EmbeddingClient,
        limiter: EmbeddingConcurrencyLimiter,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            client: Embedding provider client
            limiter: Process-wide concurrency limiter
        """
        self._client = client
        self._limiter = limiter

    async def _embed_chunk(self, chunk: TextChunk) -> EmbeddedChunk:
        async with self._limiter:
            try:
                result = await self._client.embed(chunk.text)
            except KnowledgeRagError:
                raise
            except Exception as e:
                raise ExternalProviderError(
                    f"Embedding request failed: {e}",
                    provider=self._client.provider_id,
                    details={"chunk_id": str(chunk.id)},
                ) from e

        if len(result.vector) != self._client.dimensions:
            raise ExternalProviderError(
                f"Embedding has {len(result.vector)} dimensions, "
                f"expected {self._client.dimensions}",
                provider=self._client.provider_id,
                details={"chunk_id": str(chunk.id), "model": self._client.model_id},
            )

        return EmbeddedChunk(
            chunk_id=chunk.id,
            position=chunk.position,
            text=chunk.text,
            vector=result.vector,
            token_count=result.tokens_used,
        )

    async def embed(
        self,
        chunked: ChunkedDocument,
        job_id: UUID | None = None,
    ) -> EmbeddedJob:
        """
        Embed every chunk of a document.

        Args:
            chunked: Output of the chunking stage
            job_id: Job the embeddings are produced for

        Returns:
            EmbeddedJob: One embedded chunk per input chunk, in input order,
            with the summed token count and the client's model/provider

        Raises:
            ExternalProviderError: First embedding failure (the rest are cancelled)
        """
        tasks = [
            asyncio.create_task(self._embed_chunk(chunk)) for chunk in chunked.chunks
        ]
        try:
            embedded = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        by_id = {chunk.chunk_id: chunk for chunk in embedded}
        ordered = [by_id[chunk.id] for chunk in chunked.chunks]
        total_tokens = sum(chunk.token_count for chunk in ordered)

        logger.info(
            f"{__name__}:embed - Embedded chunks",
            extra={
                "source_id": str(chunked.source.source_id),
                "chunk_count": len(ordered),
                "total_tokens": total_tokens,
                "model": self._client.model_id,
            },
        )
        return EmbeddedJob(
            source_id=chunked.source.source_id,
            job_id=job_id,
            chunks=ordered,
            chunk_size=chunked.chunk_size,
            chunk_overlap=chunked.chunk_overlap,
            splitter=chunked.splitter,
            embedding_model=self._client.model_id,
            embedding_provider=self._client.provider_id,
            total_tokens=total_tokens,
        )
