"""
Database models package.

Exports:
  - SourceModel, SourceKind: Uploaded document reference
  - KnowledgeJobModel, JobStatus: Ingestion job and its states
  - KnowledgeItemModel, KnowledgeChunkModel, KnowledgeEmbeddingModel: Ingestion output
  - KnowledgeQueryModel, KnowledgeQueryResultModel: Search history

Dependencies: sqlalchemy, knowledge_rag.boundary.db.base
System role: Database model definitions for domain entities
"""

from knowledge_rag.boundary.db.models.source_model import SourceKind, SourceModel
from knowledge_rag.boundary.db.models.job_model import JobStatus, KnowledgeJobModel
from knowledge_rag.boundary.db.models.knowledge_model import (
    KnowledgeChunkModel,
    KnowledgeEmbeddingModel,
    KnowledgeItemModel,
)
from knowledge_rag.boundary.db.models.query_model import (
    KnowledgeQueryModel,
    KnowledgeQueryResultModel,
)

__all__ = [
    "SourceKind",
    "SourceModel",
    "JobStatus",
    "KnowledgeJobModel",
    "KnowledgeItemModel",
    "KnowledgeChunkModel",
    "KnowledgeEmbeddingModel",
    "KnowledgeQueryModel",
    "KnowledgeQueryResultModel",
]
