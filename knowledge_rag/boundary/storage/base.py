"""
Stored-file accessor protocol.

Dependencies: typing
System role: Boundary contract between the pipeline and raw document storage
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAccessor(Protocol):
    """Reads and writes raw document bytes by opaque location."""

    async def read(self, location: str) -> bytes:
        """
        Read the bytes stored at a location.

        Raises:
            StorageNotFoundError: When nothing is stored at the location
        """
        ...

    async def write(self, name: str, data: bytes) -> str:
        """Store bytes under a name and return the location to read them back."""
        ...
