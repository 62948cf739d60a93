"""
Source service.

Registers raw input material: stores uploaded bytes through the file
accessor and records the Source row pointing at them.

Dependencies: knowledge_rag.boundary.db, knowledge_rag.boundary.storage
System role: Source registration ahead of ingestion
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_rag.boundary.db.connection import transaction_scope
from knowledge_rag.boundary.db.CRUD.source_crud import source_crud
from knowledge_rag.boundary.db.models.source_model import SourceKind, SourceModel
from knowledge_rag.boundary.storage.base import FileAccessor
from knowledge_rag.core.exceptions import (
    PersistenceError,
    SourceNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SourceService:
    """Create and look up sources."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        file_accessor: FileAccessor,
    ) -> None:
        """
        Initialize source service.

        Args:
            session_factory: Factory for per-transaction sessions
            file_accessor: Where uploaded bytes are stored
        """
        self._session_factory = session_factory
        self._file_accessor = file_accessor

    async def create_source(
        self,
        location: str,
        principal_id: str,
        mime_type: str | None = None,
        file_name: str | None = None,
        source_type: SourceKind = SourceKind.FILE,
    ) -> SourceModel:
        """
        Record a source whose bytes are already stored.

        Args:
            location: Stored-file location
            principal_id: Owning principal
            mime_type: Declared media type
            file_name: Original file name
            source_type: Source kind

        Returns:
            SourceModel: Created source

        Raises:
            ValidationError: Blank location or principal
            PersistenceError: Insert failed
        """
        if not location or not location.strip():
            raise ValidationError("location must not be empty", field="location")
        if not principal_id or not principal_id.strip():
            raise ValidationError("principal_id must not be empty", field="principal_id")

        try:
            async with transaction_scope(self._session_factory) as session:
                source = await source_crud.create(
                    session,
                    source_type=source_type,
                    location=location,
                    mime_type=mime_type,
                    file_name=file_name,
                    principal_id=principal_id,
                )
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to create source: {e}",
                operation="create_source",
            ) from e

        logger.info(
            f"{__name__}:create_source - Source created",
            extra={"source_id": str(source.id), "mime_type": mime_type},
        )
        return source

    async def create_source_from_upload(
        self,
        file_name: str,
        data: bytes,
        principal_id: str,
        mime_type: str | None = None,
    ) -> SourceModel:
        """
        Store uploaded bytes and record a source for them.

        Args:
            file_name: Client-supplied file name
            data: File contents
            principal_id: Owning principal
            mime_type: Declared media type

        Returns:
            SourceModel: Created source

        Raises:
            ValidationError: Empty upload
        """
        if not data:
            raise ValidationError("Uploaded file is empty", field="data")

        location = await self._file_accessor.write(file_name, data)
        return await self.create_source(
            location=location,
            principal_id=principal_id,
            mime_type=mime_type,
            file_name=file_name,
        )

    async def get_source(self, source_id: UUID) -> SourceModel:
        """
        Get a source by id.

        Raises:
            SourceNotFoundError: If the source doesn't exist
        """
        async with transaction_scope(self._session_factory) as session:
            source = await source_crud.get_by_id(session, source_id)
        if source is None:
            raise SourceNotFoundError(str(source_id))
        return source
