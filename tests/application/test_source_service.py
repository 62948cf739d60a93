"""
Test suite for SourceService.

System role: Verification of source registration and upload storage
"""

import uuid

import pytest

from knowledge_rag.boundary.db.models.source_model import SourceKind
from knowledge_rag.core.exceptions import SourceNotFoundError, ValidationError


class TestCreateSource:
    """Test suite for create_source()."""

    @pytest.mark.asyncio
    async def test_create_source_should_persist_fields(self, container) -> None:
        # Act
        source = await container.source_service.create_source(
            location="contracts/a.pdf",
            principal_id="principal-1",
            mime_type="application/pdf",
            file_name="a.pdf",
        )

        # Assert
        fetched = await container.source_service.get_source(source.id)
        assert fetched.location == "contracts/a.pdf"
        assert fetched.source_type == SourceKind.FILE
        assert fetched.mime_type == "application/pdf"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "location,principal_id",
        [("", "principal-1"), ("  ", "principal-1"), ("a.txt", ""), ("a.txt", " ")],
    )
    async def test_create_source_should_reject_blank_fields(
        self,
        container,
        location: str,
        principal_id: str,
    ) -> None:
        with pytest.raises(ValidationError):
            await container.source_service.create_source(location, principal_id)


class TestCreateSourceFromUpload:
    """Test suite for create_source_from_upload()."""

    @pytest.mark.asyncio
    async def test_upload_should_store_bytes_and_record_location(
        self,
        container,
        local_accessor,
    ) -> None:
        # Act
        source = await container.source_service.create_source_from_upload(
            file_name="meeting notes.txt",
            data=b"Agenda",
            principal_id="principal-1",
            mime_type="text/plain",
        )

        # Assert
        assert source.file_name == "meeting notes.txt"
        assert source.location.endswith("meeting_notes.txt")
        assert await local_accessor.read(source.location) == b"Agenda"

    @pytest.mark.asyncio
    async def test_upload_should_reject_empty_file(self, container, local_accessor) -> None:
        # Act
        with pytest.raises(ValidationError):
            await container.source_service.create_source_from_upload(
                file_name="empty.txt",
                data=b"",
                principal_id="principal-1",
            )

        # Assert
        assert list(local_accessor.root.glob("*")) == []


class TestGetSource:
    """Test suite for get_source()."""

    @pytest.mark.asyncio
    async def test_get_source_should_raise_for_unknown_id(self, container) -> None:
        with pytest.raises(SourceNotFoundError):
            await container.source_service.get_source(uuid.uuid4())
