"""
Embedding client contract.

One call embeds one text and reports the tokens the provider billed for it.

Dependencies: pydantic
System role: Boundary contract between the pipeline and embedding providers
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field


class EmbeddingResult(BaseModel):
    """Vector for a single text plus the tokens consumed producing it."""

    vector: list[float] = Field(..., description="Embedding vector")
    tokens_used: int = Field(default=0, ge=0, description="Tokens billed for the call")


@runtime_checkable
class EmbeddingClient(Protocol):
    """
    Embedding provider contract.

    Attributes:
        model_id: Model identifier recorded on every knowledge item
        provider_id: Provider identifier recorded alongside the model
        dimensions: Length of every vector the client returns
    """

    model_id: str
    provider_id: str
    dimensions: int

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed one text.

        Raises:
            ExternalProviderError: When the provider call fails
        """
        ...
