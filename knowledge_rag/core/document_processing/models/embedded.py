"""
Embedding stage output models.

Dependencies: pydantic
System role: Input to the persistence coordinator
"""

from uuid import UUID

from pydantic import BaseModel, Field


class EmbeddedChunk(BaseModel):
    """Chunk paired with its embedding vector."""

    chunk_id: UUID = Field(description="Chunk identifier assigned at chunking")
    position: int = Field(description="Ordinal within the document")
    text: str = Field(description="Chunk text")
    vector: list[float] = Field(description="Embedding vector")
    token_count: int = Field(default=0, description="Tokens consumed for this chunk")


class EmbeddedJob(BaseModel):
    """
    Fully embedded ingestion result for one source.

    knowledge_item_id is filled in once the result has been persisted.
    """

    source_id: UUID
    job_id: UUID | None = None
    chunks: list[EmbeddedChunk] = Field(default_factory=list)
    chunk_size: int
    chunk_overlap: int
    splitter: str
    embedding_model: str
    embedding_provider: str
    total_tokens: int = 0
    knowledge_item_id: UUID | None = None

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)
