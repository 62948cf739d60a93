"""
Knowledge job ORM model.

One pipeline run for one source. Status moves
QUEUED → PROCESSING → COMPLETED | FAILED and never leaves a terminal state.

Dependencies: sqlalchemy, knowledge_rag.boundary.db.base
System role: Ingestion job tracking
"""

import enum
import uuid

from sqlalchemy import Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from knowledge_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin


class JobStatus(str, enum.Enum):
    """
    Knowledge job execution states.

    QUEUED: Job created, waiting for a worker to claim it
    PROCESSING: A worker is extracting, chunking and embedding
    COMPLETED: Knowledge item stored; terminal
    FAILED: A stage raised; error column holds the cause; terminal
    """

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class KnowledgeJobModel(Base, UUIDMixin, TimestampMixin):
    """
    Knowledge job ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        source_id: Foreign key to SourceModel (cascade delete)
        status: Current execution state
        error: Null unless FAILED; human-readable cause
        created_at: Job enqueue timestamp (UTC)
        updated_at: Last status change timestamp (UTC)

    Workflow:
        1. Caller creates the job (QUEUED)
        2. Orchestrator claims it atomically (PROCESSING)
        3. Orchestrator records COMPLETED, or FAILED with the error message
    """

    __tablename__ = "knowledge_jobs"

    source_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("sources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, native_enum=False),
        nullable=False,
        default=JobStatus.QUEUED,
    )

    error: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="Error details if processing failed",
    )

    source = relationship("SourceModel", back_populates="jobs")
