"""Request header to S3 object metadata mapping."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


def split_metadata_keys(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    return raw.split(";")


def parse_metadata(
    keys: Sequence[str] | None, headers: Mapping[str, Any] | None
) -> dict[str, str]:
    """Copy the configured header names present in ``headers`` into a new dict.

    Headers that are not present are left out rather than stored empty.
    """
    metadata: dict[str, str] = {}
    if not keys or not headers:
        return metadata

    for key in keys:
        if headers.get(key):
            metadata[key] = headers[key]
    return metadata
