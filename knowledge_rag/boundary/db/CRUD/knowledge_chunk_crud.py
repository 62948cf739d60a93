"""
Knowledge chunk CRUD operations.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.models
System role: Chunk persistence operations
"""

from knowledge_rag.boundary.db.models.knowledge_model import KnowledgeChunkModel
from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD


class KnowledgeChunkCRUD(BaseCRUD[KnowledgeChunkModel]):
    """CRUD operations for KnowledgeChunkModel."""

    def __init__(self) -> None:
        """Initialize KnowledgeChunkCRUD with KnowledgeChunkModel."""
        super().__init__(KnowledgeChunkModel)


knowledge_chunk_crud = KnowledgeChunkCRUD()
