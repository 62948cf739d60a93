"""
Amazon Bedrock embedding client using Titan Text Embeddings v2.

Calls ``bedrock-runtime`` directly so the token count Titan reports
(``inputTextTokenCount``) can be recorded per call.

Dependencies: boto3
System role: Alternative embedding provider on AWS
"""

import asyncio
import json
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from knowledge_rag.boundary.embeddings.base import EmbeddingResult
from knowledge_rag.core.exceptions import ConfigurationError, ExternalProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "amazon.titan-embed-text-v2:0"

# Output sizes Titan v2 accepts.
TITAN_V2_DIMENSIONS = (256, 512, 1024)


class BedrockEmbeddingClient:
    """Embedding client backed by Amazon Titan Embeddings on Bedrock."""

    provider_id = "bedrock"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        dimensions: int = 1024,
        region: str = "us-east-1",
        client=None,
    ) -> None:
        """
        Initialize Bedrock client.

        Args:
            model: Bedrock model ID
            dimensions: Output vector size requested from the model
            region: AWS region (us-east-1 has higher quota)
            client: Pre-built bedrock-runtime client (built from region when omitted)

        Raises:
            ConfigurationError: When model is empty or the dimension is unsupported
        """
        if not model:
            raise ConfigurationError("model cannot be empty", {"provider": self.provider_id})
        if model.startswith("amazon.titan-embed-text-v2") and dimensions not in TITAN_V2_DIMENSIONS:
            raise ConfigurationError(
                f"Titan v2 supports dimensions {TITAN_V2_DIMENSIONS}, got {dimensions}",
                {"provider": self.provider_id, "model": model},
            )

        self.model_id = model
        self.dimensions = dimensions
        self._client = client or boto3.client("bedrock-runtime", region_name=region)

    def _invoke(self, text: str) -> dict:
        response = self._client.invoke_model(
            modelId=self.model_id,
            body=json.dumps(
                {"inputText": text, "dimensions": self.dimensions, "normalize": True}
            ),
            contentType="application/json",
            accept="application/json",
        )
        return json.loads(response["body"].read())

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed one text.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult: Vector and input token count

        Raises:
            ExternalProviderError: On any Bedrock failure or malformed response
        """
        try:
            payload = await asyncio.to_thread(self._invoke, text)
        except (ClientError, BotoCoreError) as e:
            raise ExternalProviderError(
                f"Bedrock embedding request failed: {e}",
                provider=self.provider_id,
                details={"model": self.model_id},
            ) from e

        vector = payload.get("embedding")
        if not vector:
            raise ExternalProviderError(
                "Bedrock embedding response contained no embedding",
                provider=self.provider_id,
                details={"model": self.model_id},
            )

        tokens = int(payload.get("inputTextTokenCount", 0))
        logger.debug(
            f"{__name__}:embed - Embedded text",
            extra={"model": self.model_id, "tokens": tokens},
        )
        return EmbeddingResult(vector=vector, tokens_used=tokens)
