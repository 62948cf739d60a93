"""
Document processing pipeline: extract → chunk → embed.

Exports:
  - EmbeddingConcurrencyLimiter: Process-wide bound on in-flight embedding calls
  - TextExtractor, ChunkingTask, ChunkingConfig, EmbeddingTask: Pipeline stages
"""

from .limiter import EmbeddingConcurrencyLimiter
from .tasks import ChunkingConfig, ChunkingTask, EmbeddingTask, TextExtractor

__all__ = [
    "EmbeddingConcurrencyLimiter",
    "TextExtractor",
    "ChunkingConfig",
    "ChunkingTask",
    "EmbeddingTask",
]
