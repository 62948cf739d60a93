"""
Text extraction task.

Turns a stored source into plain text. Dispatch is on the closed source
kind first, then on the declared media type through an open handler
registry. PDFs are read with pypdf; plain text and markdown are decoded
as UTF-8. Parsing is CPU-bound and runs in a worker thread.

Dependencies: pypdf, asyncio
System role: First stage of document ingestion pipeline
"""

import asyncio
import io
import logging
from pathlib import Path
from typing import Callable, NamedTuple

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from knowledge_rag.boundary.db.models.source_model import SourceKind
from knowledge_rag.boundary.storage.base import FileAccessor
from knowledge_rag.core.exceptions import (
    DocumentProcessingError,
    ExtractionError,
    UnsupportedFormatError,
)
from ..models import ParsedDocument, SourceDocument

logger = logging.getLogger(__name__)

PDF = "application/pdf"
PLAIN_TEXT = "text/plain"
MARKDOWN = "text/markdown"

_SUFFIX_MEDIA_TYPES = {
    ".pdf": PDF,
    ".txt": PLAIN_TEXT,
    ".md": MARKDOWN,
    ".markdown": MARKDOWN,
}


class ExtractedText(NamedTuple):
    text: str
    page_count: int | None = None


ExtractHandler = Callable[[bytes], ExtractedText]


def normalize_media_type(mime_type: str | None) -> str | None:
    """Lower-case a media type and drop parameters such as ``; charset=utf-8``."""
    if not mime_type:
        return None
    return mime_type.split(";", 1)[0].strip().lower() or None


def resolve_media_type(source: SourceDocument) -> str | None:
    """Declared media type, or one inferred from the file name suffix."""
    declared = normalize_media_type(source.mime_type)
    if declared:
        return declared
    name = source.file_name or source.location
    return _SUFFIX_MEDIA_TYPES.get(Path(name).suffix.lower())


def extract_pdf(data: bytes) -> ExtractedText:
    """Extract page texts from a PDF, joined with blank lines."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except PdfReadError as e:
        raise ExtractionError(f"Failed to parse PDF: {e}") from e
    return ExtractedText("\n\n".join(page for page in pages if page), len(pages))


def extract_utf8(data: bytes) -> ExtractedText:
    """Decode UTF-8 text (a leading BOM is dropped)."""
    try:
        return ExtractedText(data.decode("utf-8-sig"))
    except UnicodeDecodeError as e:
        raise ExtractionError(f"Document is not valid UTF-8: {e}") from e


class TextExtractor:
    """Extract plain text from stored sources."""

    def __init__(self, file_accessor: FileAccessor) -> None:
        """
        Initialize extractor with built-in handlers.

        Args:
            file_accessor: Accessor the raw bytes are read through
        """
        self._file_accessor = file_accessor
        self._handlers: dict[str, ExtractHandler] = {}
        self.register(PDF, extract_pdf)
        self.register(PLAIN_TEXT, extract_utf8)
        self.register(MARKDOWN, extract_utf8)

    def register(self, mime_type: str, handler: ExtractHandler) -> None:
        """
        Register (or replace) the handler for a media type.

        Args:
            mime_type: Media type the handler accepts
            handler: Synchronous callable turning bytes into ExtractedText
        """
        self._handlers[normalize_media_type(mime_type)] = handler

    def supports(self, mime_type: str | None) -> bool:
        return normalize_media_type(mime_type) in self._handlers

    async def extract(self, source: SourceDocument) -> ParsedDocument:
        """
        Extract plain text from a source.

        Args:
            source: Source to read

        Returns:
            ParsedDocument: Extracted text with the originating source

        Raises:
            UnsupportedFormatError: No handler for the source kind or media type
            StorageNotFoundError: Stored file is missing
            ExtractionError: File could not be parsed or has no text
        """
        source_id = str(source.source_id)

        if source.source_type != SourceKind.FILE:
            raise UnsupportedFormatError(str(source.source_type), source_id=source_id)

        mime_type = resolve_media_type(source)
        handler = self._handlers.get(mime_type) if mime_type else None
        if handler is None:
            raise UnsupportedFormatError(
                source.source_type.value,
                mime_type=mime_type or "unknown",
                source_id=source_id,
            )

        data = await self._file_accessor.read(source.location)

        try:
            extracted = await asyncio.to_thread(handler, data)
        except DocumentProcessingError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Failed to extract text: {e}",
                source_id=source_id,
                details={"mime_type": mime_type},
            ) from e

        if not extracted.text.strip():
            raise ExtractionError(
                "Document contains no extractable text",
                source_id=source_id,
                details={"mime_type": mime_type},
            )

        logger.info(
            f"{__name__}:extract - Extracted text",
            extra={
                "source_id": source_id,
                "mime_type": mime_type,
                "text_length": len(extracted.text),
                "page_count": extracted.page_count,
            },
        )
        return ParsedDocument(
            source=source,
            text=extracted.text,
            page_count=extracted.page_count,
        )
