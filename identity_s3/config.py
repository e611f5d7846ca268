"""Configuration for the identity handlers."""

from __future__ import annotations

import os
from dataclasses import dataclass

from identity_s3.metadata import split_metadata_keys


def _localstack_endpoint() -> str | None:
    host = os.getenv("LOCALSTACK_HOSTNAME") or os.getenv("LOCALSTACK_HOST")
    if not host:
        return None
    return f"http://{host}:4566"


@dataclass
class IdentityConfig:
    """Settings shared by every invocation of the post/put handlers."""

    bucket: str | None = None
    prefix: str = ""
    extension: str | None = None
    acl: str | None = None
    identity_key: str | None = None
    metadata_keys: list[str] | None = None
    region: str | None = None
    endpoint_url: str | None = None
    request_timeout_s: float = 10.0

    @classmethod
    def from_env(cls) -> IdentityConfig:
        return cls(
            bucket=os.getenv("S3_BUCKET") or None,
            prefix=os.getenv("S3_PREFIX", ""),
            extension=os.getenv("S3_EXTENSION") or None,
            acl=os.getenv("S3_OBJECT_ACL") or None,
            identity_key=os.getenv("IDENTITY_KEY") or None,
            metadata_keys=split_metadata_keys(os.getenv("METADATA_KEYS")),
            region=os.getenv("AWS_REGION") or None,
            endpoint_url=os.getenv("S3_ENDPOINT_URL") or _localstack_endpoint(),
            request_timeout_s=float(os.getenv("S3_REQUEST_TIMEOUT_S", "10")),
        )

    @property
    def path_parameter(self) -> str:
        """Name of the path parameter carrying the id on replace."""
        return self.identity_key or "id"
