"""
S3 accessor for raw document storage.

boto3 is synchronous, so every call runs in a worker thread.

Dependencies: boto3
System role: Raw document storage in AWS
"""

import asyncio
import logging
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from knowledge_rag.boundary.storage.local_accessor import sanitize_file_name
from knowledge_rag.core.exceptions import ExternalProviderError, StorageNotFoundError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3FileAccessor:
    """Read and write raw documents as objects in one S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        prefix: str = "uploads",
        client=None,
    ) -> None:
        """
        Initialize S3 accessor.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            prefix: Key prefix new uploads are written under
            client: Pre-built boto3 S3 client (built from region when omitted)
        """
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._s3_client = client or boto3.client("s3", region_name=region)

    async def read(self, location: str) -> bytes:
        """
        Download an object.

        Args:
            location: S3 object key

        Returns:
            bytes: Object body

        Raises:
            StorageNotFoundError: When the key does not exist
            ExternalProviderError: When S3 fails for any other reason
        """

        def _get() -> bytes:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=location)
            return response["Body"].read()

        try:
            return await asyncio.to_thread(_get)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in _NOT_FOUND_CODES:
                raise StorageNotFoundError(location) from e
            raise ExternalProviderError(
                f"Failed to read from S3: {e}",
                provider="s3",
                details={"bucket": self._bucket, "key": location},
            ) from e
        except BotoCoreError as e:
            raise ExternalProviderError(
                f"Failed to read from S3: {e}",
                provider="s3",
                details={"bucket": self._bucket, "key": location},
            ) from e

    async def write(self, name: str, data: bytes) -> str:
        """
        Upload bytes under a unique key.

        Args:
            name: Client-supplied file name
            data: File contents

        Returns:
            str: S3 object key

        Raises:
            ExternalProviderError: When the upload fails
        """
        key = f"{self._prefix}/{uuid.uuid4()}/{sanitize_file_name(name)}"
        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=data,
            )
        except (ClientError, BotoCoreError) as e:
            raise ExternalProviderError(
                f"Failed to write to S3: {e}",
                provider="s3",
                details={"bucket": self._bucket, "key": key},
            ) from e

        logger.info(
            f"{__name__}:write - Uploaded object",
            extra={"bucket": self._bucket, "key": key, "size_bytes": len(data)},
        )
        return key
