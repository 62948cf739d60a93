"""
Embedding client factory.

Dependencies: knowledge_rag.configs
System role: Embedding provider selection
"""

from knowledge_rag.boundary.embeddings.base import EmbeddingClient
from knowledge_rag.boundary.embeddings.bedrock_client import BedrockEmbeddingClient
from knowledge_rag.boundary.embeddings.openai_client import OpenAIEmbeddingClient
from knowledge_rag.configs.embedding import EmbeddingSettings
from knowledge_rag.core.exceptions import ConfigurationError


def create_embedding_client(settings: EmbeddingSettings) -> EmbeddingClient:
    """
    Build the embedding client for the configured provider.

    Args:
        settings: Embedding configuration

    Returns:
        EmbeddingClient: Provider-specific client

    Raises:
        ConfigurationError: For an unknown provider or missing credentials
    """
    provider = settings.provider.lower()

    if provider == "openai":
        return OpenAIEmbeddingClient(
            api_key=settings.api_key or None,
            model=settings.model,
            dimensions=settings.dimensions,
            base_url=settings.base_url or None,
        )

    if provider == "bedrock":
        return BedrockEmbeddingClient(
            model=settings.model,
            dimensions=settings.dimensions,
            region=settings.aws_region,
        )

    raise ConfigurationError(
        f"Unknown embedding provider: {settings.provider}",
        {"provider": settings.provider},
    )
