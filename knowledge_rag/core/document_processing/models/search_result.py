"""
Retrieval result model.

Dependencies: pydantic
System role: Return type of RetrievalService.fetch_chunks()
"""

from uuid import UUID

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """A ranked chunk match."""

    chunk_id: UUID = Field(description="Matched chunk identifier")
    text: str = Field(description="Matched chunk text")
    score: float = Field(description="Cosine distance to the query (lower is closer)")
    rank: int = Field(ge=0, description="0-based position in the ranking")
