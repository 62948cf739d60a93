"""
Test suite for the dependency container.

Verifies collaborators are built from settings and that one embedding
limiter is shared by the services of a container.

System role: Verification of the composition root
"""

import pytest

from knowledge_rag.boundary.embeddings import BedrockEmbeddingClient
from knowledge_rag.boundary.storage import LocalFileAccessor
from knowledge_rag.configs import Settings
from knowledge_rag.configs.embedding import EmbeddingSettings
from knowledge_rag.configs.pipeline import PipelineSettings
from knowledge_rag.configs.storage import StorageSettings
from knowledge_rag.core.exceptions import ConfigurationError
from knowledge_rag.dependencies import build_container


def _settings(tmp_path, **overrides) -> Settings:
    fields = {
        "pipeline": PipelineSettings(chunk_size=400, chunk_overlap=40, max_parallel_embedding_calls=3),
        "storage": StorageSettings(backend="local", upload_root=str(tmp_path / "uploads")),
        "embedding": EmbeddingSettings(provider="openai", api_key="sk-test"),
    }
    fields.update(overrides)
    return Settings(**fields)


class TestBuildContainer:
    """Test suite for build_container()."""

    def test_should_wire_collaborators_from_settings(self, tmp_path, async_engine) -> None:
        # Act
        container = build_container(_settings(tmp_path), engine=async_engine)

        # Assert
        assert isinstance(container.file_accessor, LocalFileAccessor)
        assert container.file_accessor.root == (tmp_path / "uploads").resolve()
        assert container.embedding_client.provider_id == "openai"
        assert container.limiter.max_concurrent == 3
        assert container.job_service._chunker.config.max_size == 400
        assert container.job_service._chunker.config.overlap == 40

    def test_services_should_share_one_limiter_and_client(self, tmp_path, async_engine) -> None:
        # Act
        container = build_container(_settings(tmp_path), engine=async_engine)

        # Assert
        assert container.job_service._embedder._limiter is container.limiter
        assert container.retrieval_service._client is container.embedding_client
        assert container.job_service._embedder._client is container.embedding_client

    def test_should_build_bedrock_client_when_selected(self, tmp_path, async_engine) -> None:
        # Arrange
        settings = _settings(
            tmp_path,
            embedding=EmbeddingSettings(
                provider="bedrock",
                model="amazon.titan-embed-text-v2:0",
                dimensions=1024,
                aws_region="us-east-1",
            ),
        )

        # Act
        container = build_container(settings, engine=async_engine)

        # Assert
        assert isinstance(container.embedding_client, BedrockEmbeddingClient)
        assert container.embedding_client.dimensions == 1024

    def test_should_reject_overlap_not_below_chunk_size(self, tmp_path, async_engine) -> None:
        settings = _settings(
            tmp_path,
            pipeline=PipelineSettings(chunk_size=100, chunk_overlap=100),
        )

        with pytest.raises(ConfigurationError):
            build_container(settings, engine=async_engine)

    def test_should_reject_missing_openai_key(self, tmp_path, async_engine, monkeypatch) -> None:
        # Arrange
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        settings = _settings(tmp_path, embedding=EmbeddingSettings(provider="openai", api_key=""))

        # Act / Assert
        with pytest.raises(ConfigurationError):
            build_container(settings, engine=async_engine)

    def test_should_reject_unknown_storage_backend(self, tmp_path, async_engine) -> None:
        settings = _settings(tmp_path, storage=StorageSettings(backend="ftp"))

        with pytest.raises(ConfigurationError):
            build_container(settings, engine=async_engine)

    @pytest.mark.asyncio
    async def test_dispose_should_close_engine(self, tmp_path, file_engine) -> None:
        container = build_container(_settings(tmp_path), engine=file_engine)

        await container.dispose()
