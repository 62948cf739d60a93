"""
Test suite for RetrievalService.

Vectors come from the deterministic fake client, or are pinned per text
where a test needs exact distances.

System role: Verification of ranking, validation and query recording
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from helpers import FakeEmbeddingClient, count_rows
from knowledge_rag.application.services import RetrievalService
from knowledge_rag.boundary.db.models.query_model import (
    KnowledgeQueryModel,
    KnowledgeQueryResultModel,
)
from knowledge_rag.core.document_processing.models import (
    EmbeddedChunk,
    EmbeddedJob,
    SearchResult,
)
from knowledge_rag.core.exceptions import (
    EmbeddingModelMismatchError,
    ExternalProviderError,
    PersistenceError,
    ValidationError,
)

UNIT_X = [1.0] + [0.0] * 7
UNIT_Y = [0.0, 1.0] + [0.0] * 6
DIAGONAL = [1.0, 1.0] + [0.0] * 6


async def _store(container, texts_and_vectors, chunk_ids=None) -> list[uuid.UUID]:
    source = await container.source_service.create_source(
        location="notes.txt",
        principal_id="principal-1",
        mime_type="text/plain",
    )
    ids = chunk_ids or [uuid.uuid4() for _ in texts_and_vectors]
    embedded = EmbeddedJob(
        source_id=source.id,
        chunks=[
            EmbeddedChunk(chunk_id=chunk_id, position=i, text=text, vector=vector)
            for i, (chunk_id, (text, vector)) in enumerate(zip(ids, texts_and_vectors))
        ],
        chunk_size=800,
        chunk_overlap=60,
        splitter="recursive-character",
        embedding_model=container.embedding_client.model_id,
        embedding_provider=container.embedding_client.provider_id,
    )
    await container.item_service.store_knowledge(embedded)
    return ids


class TestFetchChunks:
    """Test suite for fetch_chunks()."""

    @pytest.mark.asyncio
    async def test_fetch_should_rank_closest_chunk_first(self, container) -> None:
        # Arrange
        container.embedding_client.vectors["which way is east?"] = UNIT_X
        ids = await _store(
            container,
            [("north", UNIT_Y), ("east", UNIT_X), ("north-east", DIAGONAL)],
        )

        # Act
        results = await container.retrieval_service.fetch_chunks("which way is east?")

        # Assert
        assert [r.chunk_id for r in results] == [ids[1], ids[2], ids[0]]
        assert [r.rank for r in results] == [0, 1, 2]
        assert results[0].text == "east"
        assert results[0].score == pytest.approx(0.0)
        assert results[2].score == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_fetch_should_break_ties_by_chunk_id(self, container) -> None:
        # Arrange
        container.embedding_client.vectors["query"] = UNIT_X
        ids = [uuid.UUID(f"00000000-0000-0000-0000-00000000000{n}") for n in (2, 3, 1)]
        await _store(container, [("b", UNIT_X), ("c", UNIT_X), ("a", UNIT_X)], chunk_ids=ids)

        # Act
        first = await container.retrieval_service.fetch_chunks("query")
        second = await container.retrieval_service.fetch_chunks("query")

        # Assert
        assert [r.chunk_id for r in first] == sorted(ids, key=str)
        assert first == second

    @pytest.mark.asyncio
    async def test_fetch_should_return_identical_chunk_at_distance_zero(
        self,
        container,
        two_thousand_char_text: str,
    ) -> None:
        # Arrange
        source = await container.source_service.create_source_from_upload(
            file_name="notes.txt",
            data=two_thousand_char_text.encode(),
            principal_id="principal-1",
            mime_type="text/plain",
        )
        job = await container.job_service.create_job(source)
        embedded = await container.job_service.process_job(job)
        target = embedded.chunks[1]

        # Act
        results = await container.retrieval_service.fetch_chunks(target.text, limit=1)

        # Assert
        assert len(results) == 1
        assert results[0].chunk_id == target.chunk_id
        assert results[0].score == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.asyncio
    async def test_fetch_should_apply_limit_and_default(self, container) -> None:
        # Arrange
        await _store(container, [(f"chunk {i}", UNIT_X) for i in range(7)])

        # Act
        limited = await container.retrieval_service.fetch_chunks("query", limit=2)
        default = await container.retrieval_service.fetch_chunks("query")

        # Assert
        assert len(limited) == 2
        assert len(default) == 5

    @pytest.mark.asyncio
    async def test_fetch_should_return_empty_list_for_empty_corpus(self, container) -> None:
        assert await container.retrieval_service.fetch_chunks("anything") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query_text", ["", "   "])
    async def test_fetch_should_reject_blank_query(self, container, query_text: str) -> None:
        with pytest.raises(ValidationError):
            await container.retrieval_service.fetch_chunks(query_text)
        assert container.embedding_client.calls == []

    @pytest.mark.asyncio
    async def test_fetch_should_reject_non_positive_limit(self, container) -> None:
        with pytest.raises(ValidationError):
            await container.retrieval_service.fetch_chunks("query", limit=0)

    @pytest.mark.asyncio
    async def test_fetch_should_refuse_query_with_other_model(self, container) -> None:
        # Arrange
        await _store(container, [("east", UNIT_X)])
        other_client = FakeEmbeddingClient(model_id="fake-embedding-v2")
        service = RetrievalService(container.session_factory, other_client)

        # Act
        with pytest.raises(EmbeddingModelMismatchError):
            await service.fetch_chunks("query")

        # Assert
        assert other_client.calls == []

    @pytest.mark.asyncio
    async def test_fetch_should_raise_when_query_embedding_fails(self, container) -> None:
        # Arrange
        await _store(container, [("east", UNIT_X), ("north", UNIT_Y)])
        failing_client = FakeEmbeddingClient(fail_on_call=1)
        service = RetrievalService(container.session_factory, failing_client)

        # Act
        with pytest.raises(ExternalProviderError) as exc_info:
            await service.fetch_chunks("which way is east?")

        # Assert
        assert exc_info.value.message == "Rate limit exceeded"
        assert await count_rows(container.session_factory, KnowledgeQueryModel) == 0

    @pytest.mark.asyncio
    async def test_fetch_should_wrap_unexpected_client_errors(self, container) -> None:
        await _store(container, [("east", UNIT_X)])
        broken_client = FakeEmbeddingClient()
        broken_client.embed = AsyncMock(side_effect=ConnectionError("connection reset"))
        service = RetrievalService(container.session_factory, broken_client)

        with pytest.raises(ExternalProviderError) as exc_info:
            await service.fetch_chunks("query")

        assert exc_info.value.details["provider"] == "fake"


class TestSaveQuery:
    """Test suite for save_query() and search()."""

    @pytest.mark.asyncio
    async def test_save_query_should_persist_query_and_results(self, container) -> None:
        # Arrange
        await _store(container, [("north", UNIT_Y), ("east", UNIT_X)])
        results = await container.retrieval_service.fetch_chunks("query")

        # Act
        query = await container.retrieval_service.save_query("query", "principal-1", results)

        # Assert
        assert query.query_text == "query"
        assert query.principal_id == "principal-1"
        assert [r.knowledge_chunk_id for r in query.results] == [r.chunk_id for r in results]
        assert [r.score for r in query.results] == pytest.approx([r.score for r in results])
        assert await count_rows(container.session_factory, KnowledgeQueryResultModel) == 2

    @pytest.mark.asyncio
    async def test_save_query_should_surface_write_failure(self, container) -> None:
        # Arrange
        dangling = [SearchResult(chunk_id=uuid.uuid4(), text="gone", score=0.1, rank=0)]

        # Act
        with pytest.raises(PersistenceError) as exc_info:
            await container.retrieval_service.save_query("query", "principal-1", dangling)

        # Assert
        assert exc_info.value.details["operation"] == "save_query"
        assert await count_rows(container.session_factory, KnowledgeQueryModel) == 0

    @pytest.mark.asyncio
    async def test_search_should_fetch_then_record(self, container) -> None:
        # Arrange
        await _store(container, [("east", UNIT_X)])

        # Act
        results = await container.retrieval_service.search("query", "principal-1", limit=3)

        # Assert
        assert len(results) == 1
        assert await count_rows(container.session_factory, KnowledgeQueryModel) == 1
        assert await count_rows(container.session_factory, KnowledgeQueryResultModel) == 1
