"""Shared fakes for identity_s3 tests."""

from __future__ import annotations

from typing import Any

import pytest
from botocore.exceptions import ClientError

from identity_s3.config import IdentityConfig


class FakeS3Service:
    """In-memory stand-in for S3Service that records every call."""

    def __init__(self, keys: list[str] | None = None) -> None:
        self.objects: dict[str, dict[str, Any]] = {key: {} for key in keys or []}
        self.calls: list[tuple[str, Any]] = []

    def list_object_names(self, prefix: str | None = None) -> list[str]:
        self.calls.append(("list", prefix))
        return [k for k in self.objects if k.startswith(prefix or "")]

    def exists(self, key: str, prefix: str | None = None) -> bool:
        self.calls.append(("exists", (prefix or "") + key))
        return (prefix or "") + key in self.objects

    def put_object(self, key, body, acl, keep_metadata, prefix=None, metadata=None) -> None:
        full_key = (prefix or "") + key
        self.calls.append(("put", full_key))
        self.objects[full_key] = {
            "body": body,
            "acl": acl,
            "keep_metadata": keep_metadata,
            "metadata": metadata,
        }

    @property
    def writes(self) -> list[str]:
        return [arg for name, arg in self.calls if name == "put"]


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakePaginator:
    def __init__(self, pages: list[dict[str, Any]], error: Exception | None = None) -> None:
        self.pages = pages
        self.error = error
        self.params: dict[str, Any] | None = None

    def paginate(self, **params: Any):
        self.params = params
        for page in self.pages:
            yield page
        if self.error is not None:
            raise self.error


class FakeBotoClient:
    """Just enough of the boto3 S3 client for S3Service."""

    def __init__(self, pages: list[dict[str, Any]] | None = None) -> None:
        self.paginator = FakePaginator(pages or [])
        self.head_error: Exception | None = None
        self.put_error: Exception | None = None
        self.head_calls: list[dict[str, Any]] = []
        self.put_calls: list[dict[str, Any]] = []

    def get_paginator(self, name: str) -> FakePaginator:
        assert name == "list_objects_v2"
        return self.paginator

    def head_object(self, **params: Any) -> dict[str, Any]:
        self.head_calls.append(params)
        if self.head_error is not None:
            raise self.head_error
        return {"Metadata": {}}

    def put_object(self, **params: Any) -> dict[str, Any]:
        self.put_calls.append(params)
        if self.put_error is not None:
            raise self.put_error
        return {}


@pytest.fixture
def config() -> IdentityConfig:
    return IdentityConfig(
        bucket="entities",
        prefix="p/",
        extension=".json",
        acl="private",
        identity_key="id",
        metadata_keys=["X-A", "X-B"],
    )
