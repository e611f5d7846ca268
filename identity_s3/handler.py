"""Lambda entry points: ``post`` creates an entity, ``put`` replaces one."""

from __future__ import annotations

import functools
import json
import logging
from typing import Any

from identity_s3.config import IdentityConfig
from identity_s3.errors import IdentityS3Error, ValidationError
from identity_s3.identity import IdentityS3Post, IdentityS3Put, parse_identifier
from identity_s3.metadata import parse_metadata
from identity_s3.s3_service import S3Service
from identity_s3.web import with_context

logger = logging.getLogger()
logger.setLevel(logging.INFO)


@functools.lru_cache(maxsize=1)
def _env_config() -> IdentityConfig:
    return IdentityConfig.from_env()


def _read_entity(event: dict[str, Any]) -> dict[str, Any] | None:
    body = event.get("body")
    if not body:
        return None
    try:
        entity = json.loads(body)
    except (TypeError, json.JSONDecodeError):
        return None
    if not isinstance(entity, dict) or not entity:
        return None
    return entity


def post(event, context, config: IdentityConfig | None = None, s3_service: S3Service | None = None):
    config = config or _env_config()
    web = with_context(event)
    metadata = parse_metadata(config.metadata_keys, event.get("headers"))

    entity = _read_entity(event)
    if entity is None:
        return web.error("Invalid entity passed in", 400)

    try:
        service = s3_service or S3Service(config.bucket, config)
        writer = IdentityS3Post(
            entity,
            service,
            config.prefix,
            config.extension,
            config.identity_key,
            config.acl,
            metadata,
        )
        writer.post()
    except ValidationError as e:
        return web.error(e, 400)
    except IdentityS3Error as e:
        return web.error(e, 500)
    return web.success(writer.entity_id)


def put(event, context, config: IdentityConfig | None = None, s3_service: S3Service | None = None):
    config = config or _env_config()
    web = with_context(event)
    metadata = parse_metadata(config.metadata_keys, event.get("headers"))

    entity = _read_entity(event)
    if entity is None:
        return web.error("Invalid entity passed in", 400)

    path_parameters = event.get("pathParameters") or {}
    raw_id = path_parameters.get(config.path_parameter)
    if not raw_id:
        return web.error(f"Missing identifier: {config.path_parameter}", 400)
    entity_id = parse_identifier(raw_id)
    if entity_id is None:
        return web.error(f"Invalid identifier: {raw_id}", 400)

    if config.identity_key:
        logger.info("id: [%s] - entityId: [%s]", entity_id, entity.get(config.identity_key))
        if str(entity_id) != str(entity.get(config.identity_key)):
            return web.error(
                f"Provided Id [{entity_id}] does not match identity key on entity "
                f"[{entity.get(config.identity_key)}].",
                400,
            )

    try:
        service = s3_service or S3Service(config.bucket, config)
        IdentityS3Put(
            entity_id,
            entity,
            service,
            config.prefix,
            config.extension,
            config.identity_key,
            config.acl,
            metadata,
        ).put()
    except ValidationError as e:
        return web.error(e, 400)
    except IdentityS3Error as e:
        return web.error(e, 500)
    return web.success("OK")
