"""
Knowledge query and query result ORM models.

Bookkeeping for semantic searches: the query text and the ranked chunks it
matched, written together after ranking completes.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.base
System role: Search history persistence
"""

import uuid

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from knowledge_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin


class KnowledgeQueryModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge query ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        principal_id: Principal that issued the query
        query_text: Raw query text
    """

    __tablename__ = "knowledge_queries"

    principal_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    query_text: Mapped[str] = mapped_column(Text, nullable=False)

    results = relationship(
        "KnowledgeQueryResultModel",
        back_populates="query",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="KnowledgeQueryResultModel.rank",
    )


class KnowledgeQueryResultModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge query result ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        knowledge_query_id: Foreign key to KnowledgeQueryModel (cascade delete)
        knowledge_chunk_id: Matched chunk (cascade delete)
        rank: 0-based position in the returned ranking
        score: Cosine distance between query and chunk (lower is closer)
    """

    __tablename__ = "knowledge_query_results"

    knowledge_query_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("knowledge_queries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    knowledge_chunk_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("knowledge_chunks.id", ondelete="CASCADE"),
        nullable=False,
    )

    rank: Mapped[int] = mapped_column(Integer, nullable=False)

    score: Mapped[float] = mapped_column(Float(precision=53), nullable=False)

    query = relationship("KnowledgeQueryModel", back_populates="results")
