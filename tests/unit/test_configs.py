"""
Test suite for configuration settings.

System role: Verification of defaults and environment mapping
"""

import pydantic
import pytest

from knowledge_rag.boundary.db.connection import get_async_engine
from knowledge_rag.configs.database import DatabaseSettings
from knowledge_rag.configs.embedding import EmbeddingSettings
from knowledge_rag.configs.pipeline import PipelineSettings


class TestPipelineSettings:
    """Test suite for PipelineSettings."""

    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "PIPELINE_CHUNK_SIZE",
            "PIPELINE_CHUNK_OVERLAP",
            "PIPELINE_MAX_PARALLEL_EMBEDDING_CALLS",
            "PIPELINE_DEFAULT_SEARCH_LIMIT",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = PipelineSettings()

        assert settings.chunk_size == 800
        assert settings.chunk_overlap == 60
        assert settings.max_parallel_embedding_calls == 25
        assert settings.default_search_limit == 5

    def test_env_prefix_should_override_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("PIPELINE_MAX_PARALLEL_EMBEDDING_CALLS", "4")

        assert PipelineSettings().max_parallel_embedding_calls == 4


class TestEmbeddingSettings:
    """Test suite for EmbeddingSettings."""

    def test_env_prefix_should_select_provider(self, monkeypatch) -> None:
        monkeypatch.setenv("EMBEDDING_PROVIDER", "bedrock")
        monkeypatch.setenv("EMBEDDING_DIMENSIONS", "1024")

        settings = EmbeddingSettings()

        assert settings.provider == "bedrock"
        assert settings.dimensions == 1024

    @pytest.mark.parametrize(
        ("provider", "model", "dimensions"),
        [
            ("openai", "text-embedding-3-small", 1536),
            ("bedrock", "amazon.titan-embed-text-v2:0", 1024),
        ],
    )
    def test_unset_model_should_follow_provider_defaults(
        self,
        monkeypatch,
        provider: str,
        model: str,
        dimensions: int,
    ) -> None:
        monkeypatch.delenv("EMBEDDING_MODEL", raising=False)
        monkeypatch.delenv("EMBEDDING_DIMENSIONS", raising=False)

        settings = EmbeddingSettings(provider=provider)

        assert settings.model == model
        assert settings.dimensions == dimensions

    def test_explicit_model_should_not_be_replaced(self) -> None:
        settings = EmbeddingSettings(
            provider="bedrock", model="amazon.titan-embed-text-v2:0", dimensions=256
        )

        assert settings.dimensions == 256


class TestDatabaseSettings:
    """Test suite for DatabaseSettings."""

    def test_async_database_url_should_use_asyncpg(self) -> None:
        settings = DatabaseSettings(host="db", port=5433, user="u", password="p", db="k")

        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5433/k"

    def test_async_database_url_should_add_ssl_when_required(self) -> None:
        settings = DatabaseSettings(host="db", user="u", password="p", db="k", sslmode="require")

        assert settings.async_database_url.endswith("?ssl=require")

    def test_url_override_should_take_precedence(self) -> None:
        settings = DatabaseSettings(url_override="sqlite+aiosqlite:///local.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///local.db"

    def test_password_should_be_escaped_in_url(self) -> None:
        settings = DatabaseSettings(host="db", user="u", password="p@ss/word", db="k")

        assert settings.async_database_url == "postgresql+asyncpg://u:p%40ss%2Fword@db:5432/k"


class TestBaseSettings:
    """Test suite for the shared log level option."""

    def test_log_level_should_be_normalised(self) -> None:
        assert PipelineSettings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_should_be_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            PipelineSettings(log_level="LOUD")


class TestGetAsyncEngine:
    """Test suite for get_async_engine() pool selection."""

    def test_postgres_engine_should_use_configured_pool(self) -> None:
        engine = get_async_engine(DatabaseSettings(pool_size=3, max_overflow=1))

        assert engine.dialect.name == "postgresql"
        assert engine.pool.size() == 3

    def test_sqlite_override_should_skip_pool_options(self) -> None:
        engine = get_async_engine(
            DatabaseSettings(url_override="sqlite+aiosqlite:///:memory:", pool_size=3)
        )

        assert engine.dialect.name == "sqlite"
