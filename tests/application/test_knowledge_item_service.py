"""
Test suite for KnowledgeItemService (persistence coordinator).

System role: Verification of atomic knowledge persistence
"""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from helpers import count_rows
from knowledge_rag.boundary.db.CRUD.knowledge_embedding_crud import (
    knowledge_embedding_crud,
)
from knowledge_rag.boundary.db.models.knowledge_model import (
    KnowledgeChunkModel,
    KnowledgeEmbeddingModel,
    KnowledgeItemModel,
)
from knowledge_rag.core.document_processing.models import EmbeddedChunk, EmbeddedJob
from knowledge_rag.core.exceptions import EmbeddingModelMismatchError, PersistenceError


async def _embedded_job(container, model: str = "fake-embedding-v1", chunks: int = 3) -> EmbeddedJob:
    source = await container.source_service.create_source(
        location="notes.txt",
        principal_id="principal-1",
        mime_type="text/plain",
    )
    return EmbeddedJob(
        source_id=source.id,
        chunks=[
            EmbeddedChunk(
                chunk_id=uuid.uuid4(),
                position=i,
                text=f"chunk {i}",
                vector=[float(i + 1)] + [0.0] * 7,
                token_count=2,
            )
            for i in range(chunks)
        ],
        chunk_size=800,
        chunk_overlap=60,
        splitter="recursive-character",
        embedding_model=model,
        embedding_provider="fake",
        total_tokens=2 * chunks,
    )


class TestStoreKnowledge:
    """Test suite for store_knowledge()."""

    @pytest.mark.asyncio
    async def test_store_should_write_item_chunks_and_embeddings(self, container) -> None:
        # Arrange
        embedded = await _embedded_job(container)

        # Act
        item = await container.item_service.store_knowledge(embedded)

        # Assert
        assert item.chunks_count == 3
        assert item.total_tokens == 6
        assert item.knowledge_job_id is None
        assert await count_rows(container.session_factory, KnowledgeChunkModel) == 3
        assert await count_rows(container.session_factory, KnowledgeEmbeddingModel) == 3

    @pytest.mark.asyncio
    async def test_store_should_keep_chunk_ids_from_chunking(self, container) -> None:
        # Arrange
        embedded = await _embedded_job(container)

        # Act
        await container.item_service.store_knowledge(embedded)

        # Assert
        async with container.session_factory() as session:
            for chunk in embedded.chunks:
                stored = await session.get(KnowledgeChunkModel, chunk.chunk_id)
                assert stored.text == chunk.text
                assert stored.position == chunk.position

    @pytest.mark.asyncio
    async def test_failed_embedding_insert_should_roll_back_everything(self, container) -> None:
        # Arrange
        embedded = await _embedded_job(container)

        # Act
        with patch.object(
            knowledge_embedding_crud,
            "create_many",
            side_effect=SQLAlchemyError("disk full"),
        ):
            with pytest.raises(PersistenceError) as exc_info:
                await container.item_service.store_knowledge(embedded)

        # Assert
        assert exc_info.value.details["operation"] == "store_knowledge"
        assert await count_rows(container.session_factory, KnowledgeItemModel) == 0
        assert await count_rows(container.session_factory, KnowledgeChunkModel) == 0
        assert await count_rows(container.session_factory, KnowledgeEmbeddingModel) == 0

    @pytest.mark.asyncio
    async def test_store_should_reject_second_embedding_model(self, container) -> None:
        # Arrange
        await container.item_service.store_knowledge(await _embedded_job(container))
        other = await _embedded_job(container, model="fake-embedding-v2")

        # Act
        with pytest.raises(EmbeddingModelMismatchError):
            await container.item_service.store_knowledge(other)

        # Assert
        assert await count_rows(container.session_factory, KnowledgeItemModel) == 1

    @pytest.mark.asyncio
    async def test_store_should_accept_document_without_chunks(self, container) -> None:
        embedded = await _embedded_job(container, chunks=0)

        item = await container.item_service.store_knowledge(embedded)

        assert item.chunks_count == 0
        assert await count_rows(container.session_factory, KnowledgeChunkModel) == 0
