"""
OpenAI embedding client.

Wraps the ``openai`` async client. A custom ``base_url`` points it at an
OpenAI-compatible provider.

Dependencies: openai
System role: Default embedding provider
"""

import logging

import openai

from knowledge_rag.boundary.embeddings.base import EmbeddingResult
from knowledge_rag.core.exceptions import ConfigurationError, ExternalProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"

# Model families whose output length can be shortened with the dimensions parameter.
SHORTENABLE_MODEL_PREFIXES = ("text-embedding-3",)


class OpenAIEmbeddingClient:
    """Embedding client backed by the OpenAI embeddings API."""

    provider_id = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        dimensions: int = 1536,
        base_url: str | None = None,
    ) -> None:
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key (falls back to OPENAI_API_KEY)
            model: Embedding model identifier
            dimensions: Vector dimension; sent to the API for text-embedding-3 models
            base_url: Optional OpenAI-compatible endpoint

        Raises:
            ConfigurationError: When no API key is available
        """
        client_kwargs: dict = {}
        if api_key:
            client_kwargs["api_key"] = api_key
        if base_url:
            client_kwargs["base_url"] = base_url

        try:
            self._client = openai.AsyncOpenAI(**client_kwargs)
        except openai.OpenAIError as e:
            raise ConfigurationError(
                f"OpenAI client could not be created: {e}",
                {"provider": self.provider_id},
            ) from e

        self.model_id = model
        self.dimensions = dimensions
        self._request_options: dict = {}
        if model.startswith(SHORTENABLE_MODEL_PREFIXES):
            self._request_options["dimensions"] = dimensions

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed one text.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult: Vector and billed tokens

        Raises:
            ExternalProviderError: On any API failure (rate limit, auth, network)
        """
        try:
            response = await self._client.embeddings.create(
                input=text,
                model=self.model_id,
                **self._request_options,
            )
        except openai.OpenAIError as e:
            raise ExternalProviderError(
                f"OpenAI embedding request failed: {e}",
                provider=self.provider_id,
                details={"model": self.model_id},
            ) from e

        if not response.data:
            raise ExternalProviderError(
                "OpenAI embedding response contained no data",
                provider=self.provider_id,
                details={"model": self.model_id},
            )

        tokens = response.usage.total_tokens if response.usage else 0
        logger.debug(
            f"{__name__}:embed - Embedded text",
            extra={"model": self.model_id, "tokens": tokens},
        )
        return EmbeddingResult(vector=response.data[0].embedding, tokens_used=tokens)
