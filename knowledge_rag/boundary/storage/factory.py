"""
File accessor factory.

Dependencies: knowledge_rag.configs
System role: Storage backend selection
"""

from knowledge_rag.boundary.storage.base import FileAccessor
from knowledge_rag.boundary.storage.local_accessor import LocalFileAccessor
from knowledge_rag.boundary.storage.s3_accessor import S3FileAccessor
from knowledge_rag.configs.storage import StorageSettings
from knowledge_rag.core.exceptions import ConfigurationError


def create_file_accessor(settings: StorageSettings) -> FileAccessor:
    """
    Build the accessor for the configured storage backend.

    Raises:
        ConfigurationError: For an unknown backend
    """
    backend = settings.backend.lower()
    if backend == "local":
        return LocalFileAccessor(settings.upload_root)
    if backend == "s3":
        return S3FileAccessor(bucket=settings.bucket, region=settings.region)
    raise ConfigurationError(
        f"Unknown storage backend: {settings.backend}",
        {"backend": settings.backend},
    )
