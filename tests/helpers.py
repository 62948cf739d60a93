"""
Test helpers shared across the suite.

System role: Deterministic stand-ins for external providers and row counting
"""

import asyncio
import hashlib
import math

from sqlalchemy import func, select

from knowledge_rag.boundary.embeddings.base import EmbeddingResult
from knowledge_rag.core.exceptions import ExternalProviderError

TEST_DIMENSIONS = 8


class FakeEmbeddingClient:
    """
    Deterministic in-process embedding client.

    Vectors are derived from a hash of the text unless an explicit vector is
    registered for it. Calls are numbered from 1 in the order they start.
    """

    def __init__(
        self,
        dimensions: int = TEST_DIMENSIONS,
        model_id: str = "fake-embedding-v1",
        provider_id: str = "fake",
        delay: float = 0.0,
        fail_on_call: int | None = None,
        error_message: str = "Rate limit exceeded",
    ) -> None:
        self.dimensions = dimensions
        self.model_id = model_id
        self.provider_id = provider_id
        self.delay = delay
        self.fail_on_call = fail_on_call
        self.error_message = error_message
        self.vectors: dict[str, list[float]] = {}
        self.calls: list[str] = []
        self.cancelled = 0
        self.in_flight = 0
        self.max_in_flight = 0

    def vector_for(self, text: str) -> list[float]:
        if text in self.vectors:
            return self.vectors[text]
        digest = hashlib.sha256(text.encode()).digest()
        raw = [digest[i] - 127.5 for i in range(self.dimensions)]
        norm = math.sqrt(sum(v * v for v in raw))
        return [v / norm for v in raw]

    async def embed(self, text: str) -> EmbeddingResult:
        self.calls.append(text)
        call_number = len(self.calls)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if call_number == self.fail_on_call:
                raise ExternalProviderError(self.error_message, provider=self.provider_id)
            if self.delay:
                await asyncio.sleep(self.delay)
            return EmbeddingResult(
                vector=self.vector_for(text),
                tokens_used=len(text.split()),
            )
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1


async def count_rows(session_factory, model) -> int:
    """Count committed rows of a model in a fresh session."""
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()
