"""
Models for the document processing pipeline.

Exports: SourceDocument, ParsedDocument, TextChunk, ChunkedDocument,
EmbeddedChunk, EmbeddedJob, SearchResult
"""

from .documents import ChunkedDocument, ParsedDocument, SourceDocument, TextChunk
from .embedded import EmbeddedChunk, EmbeddedJob
from .search_result import SearchResult

__all__ = [
    "SourceDocument",
    "ParsedDocument",
    "TextChunk",
    "ChunkedDocument",
    "EmbeddedChunk",
    "EmbeddedJob",
    "SearchResult",
]
