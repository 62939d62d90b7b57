"""
Object storage client for media files.

The database stores storage-relative keys; this module turns them into public
URLs and deletes the underlying objects.
"""

from __future__ import annotations

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from storefront.errors import StorageError

logger = logging.getLogger(__name__)


class S3Storage:
    """Media bucket on S3."""

    def __init__(
        self,
        bucket: str,
        region_name: str,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        self.bucket = bucket
        self.region_name = region_name
        self._aws_access_key_id = aws_access_key_id
        self._aws_secret_access_key = aws_secret_access_key
        self._endpoint_url = endpoint_url
        self._client = None

    @classmethod
    def from_settings(cls, settings) -> "S3Storage":
        return cls(
            bucket=settings.aws_bucket,
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id or None,
            aws_secret_access_key=settings.aws_secret_access_key or None,
        )

    def _get_client(self):
        if self._client is None:
            kwargs = {"region_name": self.region_name or None}
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url
            if self._aws_access_key_id:
                kwargs["aws_access_key_id"] = self._aws_access_key_id
            if self._aws_secret_access_key:
                kwargs["aws_secret_access_key"] = self._aws_secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def build_public_url(self, key: str) -> str:
        if not key:
            raise ValueError("Empty media key")
        if not self.bucket or not self.region_name:
            raise ValueError("Storage bucket/region not configured")
        return f"https://{self.bucket}.s3.{self.region_name}.amazonaws.com/{key.lstrip('/')}"

    def delete(self, key: str) -> None:
        try:
            self._get_client().delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Failed to delete object {key!r}: {exc}") from exc
        logger.info("Deleted object from S3: s3://%s/%s", self.bucket, key)
