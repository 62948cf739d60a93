"""
Relational store: ORM models, CRUD helpers and connection management.
"""

from knowledge_rag.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
    transaction_scope,
)

__all__ = ["get_async_engine", "get_async_session_factory", "transaction_scope"]
