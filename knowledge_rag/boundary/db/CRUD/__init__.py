"""
CRUD helpers for the relational store.

Each module exposes a CRUD class and a module-level singleton instance.
Methods take the session explicitly and never commit; transaction
boundaries belong to the caller.
"""

from knowledge_rag.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_rag.boundary.db.CRUD.source_crud import source_crud
from knowledge_rag.boundary.db.CRUD.job_crud import knowledge_job_crud
from knowledge_rag.boundary.db.CRUD.knowledge_item_crud import knowledge_item_crud
from knowledge_rag.boundary.db.CRUD.knowledge_chunk_crud import knowledge_chunk_crud
from knowledge_rag.boundary.db.CRUD.knowledge_embedding_crud import (
    NearestChunk,
    knowledge_embedding_crud,
)
from knowledge_rag.boundary.db.CRUD.query_crud import (
    knowledge_query_crud,
    knowledge_query_result_crud,
)

__all__ = [
    "BaseCRUD",
    "NearestChunk",
    "source_crud",
    "knowledge_job_crud",
    "knowledge_item_crud",
    "knowledge_chunk_crud",
    "knowledge_embedding_crud",
    "knowledge_query_crud",
    "knowledge_query_result_crud",
]
