"""
Local filesystem accessor.

Stores uploads under a single root directory. Locations are paths relative
to that root; anything resolving outside it is rejected.

Dependencies: pathlib, asyncio
System role: Raw document storage for development and tests
"""

import asyncio
import logging
import re
import uuid
from pathlib import Path

from knowledge_rag.core.exceptions import StorageNotFoundError, ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_file_name(name: str) -> str:
    """Reduce a client-supplied file name to a safe single path component."""
    base = Path(name).name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "upload"


class LocalFileAccessor:
    """Read and write raw documents below a root directory."""

    def __init__(self, root: str | Path) -> None:
        """
        Initialize accessor.

        Args:
            root: Directory that holds every stored file (created on first write)
        """
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, location: str) -> Path:
        path = (self._root / location).resolve()
        if not path.is_relative_to(self._root):
            raise ValidationError(
                f"Location escapes storage root: {location}",
                field="location",
            )
        return path

    async def read(self, location: str) -> bytes:
        """
        Read a stored file.

        Args:
            location: Path relative to the storage root

        Returns:
            bytes: File contents

        Raises:
            StorageNotFoundError: When the file does not exist
            ValidationError: When the location points outside the root
        """
        path = self._resolve(location)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except (FileNotFoundError, IsADirectoryError) as e:
            raise StorageNotFoundError(location) from e

    async def write(self, name: str, data: bytes) -> str:
        """
        Store bytes under a unique name.

        Args:
            name: Client-supplied file name
            data: File contents

        Returns:
            str: Location relative to the storage root
        """
        location = f"{uuid.uuid4().hex}_{sanitize_file_name(name)}"
        path = self._resolve(location)

        def _write() -> None:
            self._root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        await asyncio.to_thread(_write)
        logger.info(
            f"{__name__}:write - Stored upload",
            extra={"location": location, "size_bytes": len(data)},
        )
        return location
