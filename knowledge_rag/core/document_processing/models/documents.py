"""
Document models for the extraction and chunking stages.

Dependencies: pydantic
System role: Values passed between extract and chunk stages
"""

from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from knowledge_rag.boundary.db.models.source_model import SourceKind


class SourceDocument(BaseModel):
    """Reference to raw input material, as handed to the extractor."""

    source_id: UUID = Field(description="Source identifier")
    source_type: SourceKind = Field(description="Closed source kind")
    location: str = Field(description="Stored-file location")
    mime_type: str | None = Field(default=None, description="Declared media type")
    file_name: str | None = Field(default=None, description="Original file name")


class ParsedDocument(BaseModel):
    """Plain text extracted from a source."""

    source: SourceDocument
    text: str = Field(description="Extracted plain text")
    page_count: int | None = Field(default=None, description="Pages read (paged formats)")


class TextChunk(BaseModel):
    """Bounded-size text segment with an id assigned at chunking time."""

    id: UUID = Field(default_factory=uuid4, description="Chunk identifier")
    position: int = Field(ge=0, description="Ordinal within the document")
    text: str = Field(description="Chunk text")


class ChunkedDocument(BaseModel):
    """Ordered chunks of one document plus the splitter parameters used."""

    source: SourceDocument
    chunks: list[TextChunk] = Field(default_factory=list)
    chunk_size: int = Field(description="Maximum chunk size used")
    chunk_overlap: int = Field(description="Overlap used")
    splitter: str = Field(description="Splitter identifier")
