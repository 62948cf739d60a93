"""
Stored-file accessors for raw uploaded documents.

Exports:
  - FileAccessor: Protocol every accessor implements
  - LocalFileAccessor: Files under a local root directory
  - S3FileAccessor: Objects in an S3 bucket
  - create_file_accessor: Backend selection from StorageSettings
"""

from knowledge_rag.boundary.storage.base import FileAccessor
from knowledge_rag.boundary.storage.local_accessor import LocalFileAccessor
from knowledge_rag.boundary.storage.s3_accessor import S3FileAccessor
from knowledge_rag.boundary.storage.factory import create_file_accessor

__all__ = [
    "FileAccessor",
    "LocalFileAccessor",
    "S3FileAccessor",
    "create_file_accessor",
]
