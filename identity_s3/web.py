"""API Gateway proxy responses."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": True,
}


def generate_response(status_code: int, message: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps({"result": message}),
    }


class RequestContext:
    """Builds responses for one event, logging failures alongside the event."""

    def __init__(self, event: Any) -> None:
        self.event = event

    def error(self, message: Any, status_code: int = 500) -> dict[str, Any]:
        logger.error(
            "Error occurred: %s. Provided event data: %s",
            message,
            json.dumps(self.event, default=str),
        )
        return generate_response(status_code, str(message))

    def success(self, message: Any) -> dict[str, Any]:
        return generate_response(200, message)


def with_context(event: Any) -> RequestContext:
    return RequestContext(event)
