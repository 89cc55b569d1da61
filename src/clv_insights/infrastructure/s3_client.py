"""S3 client wrapper for reading uploaded customer files."""

import logging
from typing import Any

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class S3Client:
    """Handles S3 operations."""

    def __init__(self, client: Any):
        """
        Initialize S3 client wrapper.

        Args:
            client: boto3 S3 client instance.
        """
        self._client = client

    def get_object_content(self, bucket: str, key: str) -> str | None:
        """
        Get object content as string.

        Args:
            bucket: S3 bucket name.
            key: S3 object key.

        Returns:
            Object content as string, or None if failed.
        """
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            content = response["Body"].read().decode("utf-8-sig")
            logger.info("Read %d chars from s3://%s/%s", len(content), bucket, key)
            return content
        except ClientError as e:
            logger.error("Failed to get object s3://%s/%s: %s", bucket, key, e)
            return None
