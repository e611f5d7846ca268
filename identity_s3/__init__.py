"""Numeric-identity JSON entity storage on S3 for Lambda/API Gateway."""

from identity_s3.config import IdentityConfig
from identity_s3.errors import (
    IdentityS3Error,
    KeyNotFoundError,
    StorageBackendError,
    ValidationError,
)
from identity_s3.identity import IdentityS3Post, IdentityS3Put, allocate_next
from identity_s3.metadata import parse_metadata
from identity_s3.s3_service import S3Service

__all__ = [
    "IdentityConfig",
    "IdentityS3Error",
    "IdentityS3Post",
    "IdentityS3Put",
    "KeyNotFoundError",
    "S3Service",
    "StorageBackendError",
    "ValidationError",
    "allocate_next",
    "parse_metadata",
]
