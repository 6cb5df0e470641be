"""Request Guards — body-shape and schema checks that run before a controller.

Invariants:
    - A guard either returns None (forward) or raises a VehicleApiError (short-circuit)
    - The body is decoded once per request (read_json_body is a cached dependency)
    - Only application/json bodies are decoded; anything else reads as {}
    - validate_request_body(rules) reports exactly one violation (fail-fast)

Design Decisions:
    - Guards as FastAPI dependencies listed on the route: the list order is the
      execution order (content-type -> emptiness -> schema -> controller)
    - No Pydantic body models on vehicle routes: FastAPI would parse the body before
      the guards run and the ruleset messages would be lost
"""

import json
import logging
from typing import Any, Callable, Coroutine

from fastapi import Depends, Request

from vehicle_api.core.errors import (
    EmptyRequestBodyError,
    MalformedBodyError,
    RequestBodyNotAllowedError,
    SchemaViolationError,
    UnsupportedMediaTypeError,
)
from vehicle_api.core.vehicle_rules import Ruleset, validate_vehicle

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def media_type(content_type: str | None) -> str | None:
    """Strip parameters (charset, boundary) and normalise case."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None


def is_json_request(request: Request) -> bool:
    return media_type(request.headers.get("content-type")) == JSON_MEDIA_TYPE


async def read_json_body(request: Request) -> Any:
    """Decode a JSON object/array body; {} when absent or not declared as JSON."""
    if not is_json_request(request):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedBodyError(str(e))
    if not isinstance(body, (dict, list)):
        raise MalformedBodyError("top-level JSON value must be an object or array")
    return body


# ─── Body-Shape Guards ───────────────────────────────────────────

async def require_empty_body(
    request: Request, body: Any = Depends(read_json_body),
) -> None:
    """GET / DELETE: reject any body with at least one key."""
    if body:
        raise RequestBodyNotAllowedError(request.method)


async def require_non_empty_body(body: Any = Depends(read_json_body)) -> None:
    """POST / PATCH: reject an absent body or one with zero keys."""
    if not body:
        raise EmptyRequestBodyError()


async def require_json_content_type(request: Request) -> None:
    """POST / PATCH: only application/json is accepted."""
    if not is_json_request(request):
        raise UnsupportedMediaTypeError(request.headers.get("content-type"))


# ─── Schema Guard ────────────────────────────────────────────────

def validate_request_body(
    rules: Ruleset,
) -> Callable[..., Coroutine[Any, Any, None]]:
    """Build a guard that applies rules to the decoded body."""

    async def guard(body: Any = Depends(read_json_body)) -> None:
        violation = validate_vehicle(body, rules)
        if violation is None:
            return
        logger.info(
            f"Vehicle body rejected: {violation.message}",
            extra={"ruleset": rules.name},
        )
        raise SchemaViolationError(
            violation.message, violation.field, violation.constraint,
        )

    guard.__name__ = f"validate_{rules.name}_body"
    return guard
