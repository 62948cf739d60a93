"""
Configuration settings for the ingestion pipeline.

Provides environment-based configuration for chunking, embedding concurrency,
and retrieval defaults.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_rag.configs.base import BaseSettings


class PipelineSettings(BaseSettings):
    """Settings for document ingestion and retrieval."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=800,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=60,
        description="Overlap between consecutive chunks",
    )

    # Embedding concurrency (shared by every job in the process)
    max_parallel_embedding_calls: int = Field(
        default=25,
        description="Maximum embedding requests in flight at once",
    )

    # Retrieval
    default_search_limit: int = Field(
        default=5,
        description="Number of chunks returned when the caller gives no limit",
    )
