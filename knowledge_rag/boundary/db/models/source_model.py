"""
Source ORM model.

Represents an uploaded document reference. Immutable once created; one
source may be processed by several knowledge jobs.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.base
System role: Raw document registry for ingestion
"""

import enum

from sqlalchemy import String, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from knowledge_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SourceKind(str, enum.Enum):
    """
    Closed set of source kinds the extractor dispatches on.

    FILE: Bytes addressed by a stored-file location, typed by media type
    """

    FILE = "file"


class SourceModel(Base, UUIDMixin, TimestampMixin):
    """
    Source ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        source_type: Source kind (FILE)
        location: Stored-file location (local path or S3 key)
        file_name: Original filename, if known
        mime_type: Declared media type, if the kind has one
        principal_id: Owning principal (API key or user id)
        created_at: Upload timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        jobs: KnowledgeJobModel rows that processed this source
    """

    __tablename__ = "sources"

    source_type: Mapped[SourceKind] = mapped_column(
        Enum(SourceKind, native_enum=False),
        nullable=False,
        default=SourceKind.FILE,
    )

    location: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Stored-file location",
    )

    file_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    mime_type: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    principal_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Owning principal",
    )

    jobs = relationship(
        "KnowledgeJobModel",
        back_populates="source",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
