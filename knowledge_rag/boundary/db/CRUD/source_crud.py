"""
Source CRUD operations.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.models
System role: Source persistence operations
"""

from knowledge_rag.boundary.db.models.source_model import SourceModel
from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD


class SourceCRUD(BaseCRUD[SourceModel]):
    """CRUD operations for SourceModel."""

    def __init__(self) -> None:
        """Initialize SourceCRUD with SourceModel."""
        super().__init__(SourceModel)


source_crud = SourceCRUD()
