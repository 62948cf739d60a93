"""
Bounded-concurrency limiter for embedding calls.

One instance is shared by every job in the process, so heavy job
concurrency draws from the same pool of in-flight provider requests.

Dependencies: asyncio
System role: Outbound rate bound for the embedding stage
"""

import asyncio

from knowledge_rag.core.exceptions import ConfigurationError


class EmbeddingConcurrencyLimiter:
    """
    Async context manager admitting at most ``max_concurrent`` holders at once.

    Usage:
        async with limiter:
            await client.embed(text)
    """

    def __init__(self, max_concurrent: int = 25) -> None:
        """
        Initialize limiter.

        Args:
            max_concurrent: Maximum number of concurrent holders

        Raises:
            ConfigurationError: When max_concurrent < 1
        """
        if max_concurrent < 1:
            raise ConfigurationError(
                "max_concurrent must be at least 1",
                {"max_concurrent": max_concurrent},
            )
        self._max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._in_flight = 0
        self._peak = 0

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def peak(self) -> int:
        """Highest number of simultaneous holders observed."""
        return self._peak

    async def __aenter__(self) -> "EmbeddingConcurrencyLimiter":
        await self._semaphore.acquire()
        self._in_flight += 1
        self._peak = max(self._peak, self._in_flight)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._in_flight -= 1
        self._semaphore.release()
