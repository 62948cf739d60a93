"""
Application services.

Exports:
  - SourceService: Source registration and upload storage
  - KnowledgeJobService: Ingestion job orchestration
  - KnowledgeItemService: Atomic persistence of ingestion output
  - RetrievalService: Similarity search and query bookkeeping
"""

from knowledge_rag.application.services.source_service import SourceService
from knowledge_rag.application.services.knowledge_item_service import KnowledgeItemService
from knowledge_rag.application.services.knowledge_job_service import KnowledgeJobService
from knowledge_rag.application.services.retrieval_service import RetrievalService

__all__ = [
    "SourceService",
    "KnowledgeItemService",
    "KnowledgeJobService",
    "RetrievalService",
]
