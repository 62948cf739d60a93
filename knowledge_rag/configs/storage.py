"""
Stored-file configuration.

Dependencies: pydantic, pydantic_settings
System role: Raw document storage configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from knowledge_rag.configs.base import BaseSettings


class StorageSettings(BaseSettings):
    """Raw document storage configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="local",
        description="Storage backend (local, s3)",
    )
    upload_root: str = Field(
        default="./__uploads__",
        description="Root directory for locally stored uploads",
    )
    bucket: str = Field(
        default="knowledge-rag-dev-documents",
        description="S3 bucket for raw document storage",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for the documents bucket",
    )
