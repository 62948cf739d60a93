"""
Knowledge item, chunk and embedding ORM models.

A knowledge item is the aggregate written once per successful job, together
with its chunks and their embeddings, in a single transaction.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.base, knowledge_rag.boundary.db.vector_type
System role: Persisted ingestion output and similarity-search corpus
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from knowledge_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin
from knowledge_rag.boundary.db.vector_type import Vector
from knowledge_rag.configs import get_settings

EMBEDDING_DIMENSIONS = get_settings().embedding.dimensions


class KnowledgeItemModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge item ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        source_id: Foreign key to SourceModel (cascade delete)
        knowledge_job_id: Originating job; NULL once job history is pruned
        chunks_count: Number of chunks written with the item
        chunk_size: Splitter max chunk size used
        chunk_overlap: Splitter overlap used
        splitter: Splitter identifier
        embedding_model: Model that produced every embedding of the item
        embedding_provider: Provider of that model
        total_tokens: Tokens consumed across all embedding calls
    """

    __tablename__ = "knowledge_items"

    source_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("sources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    knowledge_job_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("knowledge_jobs.id", ondelete="SET NULL"),
        nullable=True,
    )

    chunks_count: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_size: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_overlap: Mapped[int] = mapped_column(Integer, nullable=False)
    splitter: Mapped[str | None] = mapped_column(String(255), nullable=True)
    embedding_model: Mapped[str] = mapped_column(String(255), nullable=False)
    embedding_provider: Mapped[str] = mapped_column(String(255), nullable=False)
    total_tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    chunks = relationship(
        "KnowledgeChunkModel",
        back_populates="knowledge_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="KnowledgeChunkModel.position",
    )


class KnowledgeChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge chunk ORM model.

    The id is assigned when the text is split, before anything is persisted,
    so the embedding stage can correlate results by id.

    Attributes:
        id: UUID primary key (assigned at chunking time)
        knowledge_item_id: Foreign key to KnowledgeItemModel (cascade delete)
        position: Ordinal of the chunk within its document
        text: Chunk text
    """

    __tablename__ = "knowledge_chunks"

    knowledge_item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("knowledge_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    knowledge_item = relationship("KnowledgeItemModel", back_populates="chunks")


class KnowledgeEmbeddingModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge embedding ORM model, one per chunk.

    Attributes:
        id: UUID primary key (auto-generated)
        knowledge_chunk_id: Foreign key to KnowledgeChunkModel (cascade delete, unique)
        embedding: Fixed-dimension vector
        token_count: Tokens consumed producing the vector
    """

    __tablename__ = "knowledge_embeddings"

    knowledge_chunk_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("knowledge_chunks.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    embedding: Mapped[list[float]] = mapped_column(
        Vector(EMBEDDING_DIMENSIONS),
        nullable=False,
    )

    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
