"""
Embedding provider configuration.

Selects the embedding provider and model. The vector dimension configured here
is baked into the knowledge_embeddings column, so it must match the model.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from knowledge_rag.configs.base import BaseSettings

# Model and vector size used when a provider is selected without them.
PROVIDER_DEFAULTS = {
    "openai": ("text-embedding-3-small", 1536),
    "bedrock": ("amazon.titan-embed-text-v2:0", 1024),
}


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Embedding provider (openai, bedrock)",
    )
    model: str | None = Field(
        default=None,
        description="Embedding model identifier (provider default when unset)",
    )
    dimensions: int | None = Field(
        default=None,
        description="Vector dimension produced by the model (provider default when unset)",
    )
    api_key: str = Field(
        default="",
        description="API key for the embedding provider (openai)",
    )
    base_url: str = Field(
        default="",
        description="Optional OpenAI-compatible base URL",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock embeddings",
    )

    @model_validator(mode="after")
    def _apply_provider_defaults(self) -> "EmbeddingSettings":
        """Fill model and dimensions left unset with the provider's defaults."""
        default_model, default_dimensions = PROVIDER_DEFAULTS.get(
            self.provider.lower(), PROVIDER_DEFAULTS["openai"]
        )
        if self.model is None:
            self.model = default_model
        if self.dimensions is None:
            self.dimensions = default_dimensions
        return self
