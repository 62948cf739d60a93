"""
Application settings.

``Settings`` groups the per-concern settings classes; ``get_settings()``
builds it once per process. The composition root and ``create_tables`` read
it, and tests pass their own instance to ``build_container`` instead.

Dependencies: pydantic_settings
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from knowledge_rag.configs.base import BaseSettings
from knowledge_rag.configs.database import DatabaseSettings
from knowledge_rag.configs.embedding import EmbeddingSettings
from knowledge_rag.configs.pipeline import PipelineSettings
from knowledge_rag.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Database, pipeline, embedding and storage settings."""

    database: DatabaseSettings = DatabaseSettings()
    pipeline: PipelineSettings = PipelineSettings()
    embedding: EmbeddingSettings = EmbeddingSettings()
    storage: StorageSettings = StorageSettings()


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment and ``.env`` once."""
    return Settings()
