"""
Pipeline tasks.

Exports: TextExtractor, ChunkingConfig, ChunkingTask, EmbeddingTask
"""

from .extraction_task import TextExtractor
from .chunking_task import ChunkingConfig, ChunkingTask
from .embedding_task import EmbeddingTask

__all__ = [
    "TextExtractor",
    "ChunkingConfig",
    "ChunkingTask",
    "EmbeddingTask",
]
