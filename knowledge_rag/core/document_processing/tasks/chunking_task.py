"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits extracted text into bounded-size chunks, preferring the largest
available boundary (paragraph, line, sentence, word, character) and
carrying overlapping context across split points. Chunk ids are assigned
here so later stages can correlate embeddings by id.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

import logging
from dataclasses import dataclass

from langchain_text_splitters import Language, RecursiveCharacterTextSplitter

from knowledge_rag.boundary.db.models.source_model import SourceKind
from knowledge_rag.core.exceptions import ConfigurationError, UnsupportedFormatError
from ..models import ChunkedDocument, ParsedDocument, TextChunk
from .extraction_task import MARKDOWN, resolve_media_type

logger = logging.getLogger(__name__)

RECURSIVE_SPLITTER = "recursive-character"
MARKDOWN_SPLITTER = "markdown"

# Paragraph, line, sentence, word, character.
DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", "? ", "! ", " ", ""]

# Media types with their own profile; every other file type uses RECURSIVE_SPLITTER.
_SPLITTER_BY_MEDIA_TYPE = {
    MARKDOWN: MARKDOWN_SPLITTER,
}


@dataclass(frozen=True)
class ChunkingConfig:
    """
    Splitter parameters.

    Attributes:
        max_size: Maximum chunk length in characters
        overlap: Characters of context shared by consecutive chunks
    """

    max_size: int = 800
    overlap: int = 60

    def __post_init__(self) -> None:
        if self.max_size <= 0:
            raise ConfigurationError(
                "max_size must be positive",
                {"max_size": self.max_size},
            )
        if self.overlap < 0:
            raise ConfigurationError(
                "overlap must not be negative",
                {"overlap": self.overlap},
            )
        if self.overlap >= self.max_size:
            raise ConfigurationError(
                "overlap must be smaller than max_size",
                {"max_size": self.max_size, "overlap": self.overlap},
            )


class ChunkingTask:
    """Split text into chunks using RecursiveCharacterTextSplitter."""

    def __init__(self, config: ChunkingConfig | None = None) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            config: Validated chunk size and overlap (defaults 800 / 60)
        """
        self._config = config or ChunkingConfig()
        self._splitters = {
            RECURSIVE_SPLITTER: RecursiveCharacterTextSplitter(
                chunk_size=self._config.max_size,
                chunk_overlap=self._config.overlap,
                separators=DEFAULT_SEPARATORS,
                keep_separator="end",
                length_function=len,
            ),
            MARKDOWN_SPLITTER: RecursiveCharacterTextSplitter.from_language(
                Language.MARKDOWN,
                chunk_size=self._config.max_size,
                chunk_overlap=self._config.overlap,
                length_function=len,
            ),
        }

    @property
    def config(self) -> ChunkingConfig:
        return self._config

    def chunk(self, text: str, splitter: str = RECURSIVE_SPLITTER) -> list[TextChunk]:
        """
        Split text into ordered chunks.

        Args:
            text: Text to split
            splitter: Splitter profile identifier

        Returns:
            list[TextChunk]: Chunks with ids and positions; a text no longer
            than max_size comes back as a single chunk equal to the input
        """
        if not text or not text.strip():
            return []

        if len(text) <= self._config.max_size:
            return [TextChunk(position=0, text=text)]

        pieces = self._splitters[splitter].split_text(text)
        return [TextChunk(position=i, text=piece) for i, piece in enumerate(pieces)]

    def splitter_for(self, parsed: ParsedDocument) -> str:
        """
        Pick the splitter profile for a document.

        Any media type the extractor accepted can be chunked: markdown gets
        the heading-aware profile, everything else the recursive one.

        Raises:
            UnsupportedFormatError: Source kind other than FILE
        """
        source = parsed.source
        if source.source_type != SourceKind.FILE:
            raise UnsupportedFormatError(
                str(source.source_type), source_id=str(source.source_id)
            )

        mime_type = resolve_media_type(source)
        return _SPLITTER_BY_MEDIA_TYPE.get(mime_type, RECURSIVE_SPLITTER)

    def chunk_document(self, parsed: ParsedDocument) -> ChunkedDocument:
        """
        Split a parsed document using the splitter for its media type.

        Args:
            parsed: Output of the extraction stage

        Returns:
            ChunkedDocument: Chunks plus the parameters used

        Raises:
            UnsupportedFormatError: Source kind other than FILE
        """
        splitter = self.splitter_for(parsed)
        chunks = self.chunk(parsed.text, splitter=splitter)

        logger.info(
            f"{__name__}:chunk_document - Split document",
            extra={
                "source_id": str(parsed.source.source_id),
                "splitter": splitter,
                "chunk_count": len(chunks),
            },
        )
        return ChunkedDocument(
            source=parsed.source,
            chunks=chunks,
            chunk_size=self._config.max_size,
            chunk_overlap=self._config.overlap,
            splitter=splitter,
        )
