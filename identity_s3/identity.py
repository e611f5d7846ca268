"""Numeric identity allocation and entity persistence on S3.

Entities are stored as ``<prefix><id><extension>``. New ids are derived from
a full listing of the prefix, so two creates racing on the same prefix can
be handed the same id, in which case the later write replaces the earlier
one. There is no lock or conditional write guarding this.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable

from identity_s3.errors import KeyNotFoundError, ValidationError
from identity_s3.s3_service import S3Service

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"[0-9]+")


def _parse_id(key: str, prefix: str, extension: str | None) -> int | None:
    if not key.startswith(prefix):
        return None
    remainder = key[len(prefix):]
    if extension:
        if not remainder.endswith(extension):
            return None
        remainder = remainder[: -len(extension)]
        match = _NUMERIC.fullmatch(remainder)
    else:
        match = _NUMERIC.match(remainder)
    if not match:
        return None
    value = int(match.group())
    return value if value > 0 else None


def parse_identifier(raw: Any) -> int | None:
    """Parse an id supplied as text, accepting ASCII digits only."""
    if not isinstance(raw, str) or not _NUMERIC.fullmatch(raw):
        return None
    return int(raw)


def allocate_next(
    existing_keys: Iterable[str], prefix: str, extension: str | None = None
) -> int:
    """Return one more than the highest numeric id found in ``existing_keys``.

    Keys outside the prefix, folder markers, and anything else that is not
    ``<prefix><digits><extension>`` are ignored. Without an extension the
    leading digits after the prefix are used, so ``p/3.json`` counts as 3.
    An empty listing yields 1.
    """
    ids = (_parse_id(key, prefix or "", extension) for key in existing_keys)
    return max((i for i in ids if i is not None), default=0) + 1


def _check_common(s3_service: Any, extension: str | None, entity: Any, acl: str | None) -> None:
    if not s3_service:
        raise ValidationError("Invalid s3Service.")
    if not extension:
        raise ValidationError("Invalid extension.")
    if not entity:
        raise ValidationError("Invalid entity.")
    if not acl:
        raise ValidationError("Invalid S3 ACL")


class IdentityS3Post:
    """Create a new entity under the next free numeric key.

    When ``identity_key`` is set the allocated id is written onto the entity
    before it is stored.
    """

    def __init__(
        self,
        entity: dict[str, Any],
        s3_service: S3Service,
        prefix: str,
        extension: str,
        identity_key: str | None,
        acl: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        _check_common(s3_service, extension, entity, acl)

        self._s3_service = s3_service
        self._prefix = prefix or ""
        self._extension = extension
        self._identity_key = identity_key
        self._entity = entity
        self._acl = acl
        self._metadata = metadata
        self.entity_id: int | None = None

    def post(self) -> dict[str, Any]:
        files = self._s3_service.list_object_names(self._prefix)
        next_id = allocate_next(files, self._prefix, self._extension)
        logger.info("nextId:[%s]", next_id)

        if self._identity_key:
            self._entity[self._identity_key] = next_id

        self._s3_service.put_object(
            f"{next_id}{self._extension}",
            json.dumps(self._entity),
            self._acl,
            False,
            self._prefix,
            self._metadata,
        )
        self.entity_id = next_id
        return self._entity


class IdentityS3Put:
    """Replace the entity stored at an existing numeric key."""

    def __init__(
        self,
        entity_id: int,
        entity: dict[str, Any],
        s3_service: S3Service,
        prefix: str,
        extension: str,
        identity_key: str | None,
        acl: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        _check_common(s3_service, extension, entity, acl)
        if isinstance(entity_id, bool) or not isinstance(entity_id, int):
            raise ValidationError(f"Id [{entity_id}] must be an integer.")
        if entity_id <= 1:
            raise ValidationError("Id must be greater than 1.")
        if identity_key and str(entity.get(identity_key)) != str(entity_id):
            raise ValidationError(
                f"Provided Id [{entity_id}] does not match identity key on entity "
                f"[{entity.get(identity_key)}]."
            )

        self._s3_service = s3_service
        self._prefix = prefix or ""
        self._extension = extension
        self._identity_key = identity_key
        self.entity_id = entity_id
        self._entity = entity
        self._acl = acl
        self._metadata = metadata

    def put(self) -> dict[str, Any]:
        s3_key = f"{self.entity_id}{self._extension}"

        if not self._s3_service.exists(s3_key, self._prefix):
            raise KeyNotFoundError(self._prefix + s3_key)

        logger.info("replacing %s%s", self._prefix, s3_key)
        self._s3_service.put_object(
            s3_key,
            json.dumps(self._entity),
            self._acl,
            True,
            self._prefix,
            self._metadata,
        )
        return self._entity
