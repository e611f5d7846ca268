"""Error types raised by identity_s3."""

from __future__ import annotations


class IdentityS3Error(Exception):
    """Base error for all identity_s3 errors."""


class ValidationError(IdentityS3Error):
    """Raised when a request or writer is missing something it needs."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class KeyNotFoundError(IdentityS3Error):
    """Raised when a replace targets a key that does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"S3 key [{key}] not found.")


class StorageBackendError(IdentityS3Error):
    """Raised when an S3 call fails."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Error calling {operation} on S3. Error: {detail}")
