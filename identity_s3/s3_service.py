"""Thin boto3 S3 wrapper used by the identity writers."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from identity_s3.config import IdentityConfig
from identity_s3.errors import StorageBackendError, ValidationError

logger = logging.getLogger(__name__)

_DELIMITER = "/"
_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3Service:
    """S3 access for a single bucket.

    The boto3 client is created on first use and reused for the lifetime of
    the instance.
    """

    def __init__(self, bucket: str | None, config: IdentityConfig | None = None) -> None:
        if not bucket:
            raise ValidationError("Invalid S3 Bucket")

        self.bucket = bucket
        self._config = config or IdentityConfig(bucket=bucket)
        self._s3: Any = None

    def list_object_names(self, prefix: str | None = None) -> list[str]:
        """Return every key under ``prefix``, following continuation tokens."""
        params: dict[str, Any] = {"Bucket": self.bucket, "Delimiter": _DELIMITER}
        if prefix:
            params["Prefix"] = prefix
            params["StartAfter"] = prefix

        files: list[str] = []
        try:
            paginator = self._connect().get_paginator("list_objects_v2")
            for page in paginator.paginate(**params):
                files.extend(obj["Key"] for obj in page.get("Contents", []))
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError("listObjectsV2", str(e)) from e
        return files

    def exists(self, key: str, prefix: str | None = None) -> bool:
        full_key = (prefix or "") + key
        try:
            self._connect().head_object(Bucket=self.bucket, Key=full_key)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_CODES:
                return False
            raise StorageBackendError("headObject", str(e)) from e
        except BotoCoreError as e:
            raise StorageBackendError("headObject", str(e)) from e
        return True

    def put_object(
        self,
        key: str,
        body: str,
        acl: str,
        keep_metadata: bool,
        prefix: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        full_key = (prefix or "") + key
        if keep_metadata:
            # TODO: head the existing object and merge its Metadata into ``metadata``.
            logger.info("keep_metadata requested for %s; existing metadata is not merged", full_key)

        try:
            self._connect().put_object(
                Bucket=self.bucket,
                Key=full_key,
                Body=body.encode("utf-8"),
                ACL=acl,
                Metadata=metadata or {},
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageBackendError("putObject", str(e)) from e

    def _connect(self) -> Any:
        if self._s3 is None:
            config = self._config
            try:
                self._s3 = boto3.client(
                    "s3",
                    region_name=config.region,
                    endpoint_url=config.endpoint_url,
                    config=BotoConfig(
                        connect_timeout=config.request_timeout_s,
                        read_timeout=config.request_timeout_s,
                    ),
                )
            except (BotoCoreError, ValueError) as e:
                raise StorageBackendError("createClient", str(e)) from e
        return self._s3
