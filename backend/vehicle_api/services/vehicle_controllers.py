"""Vehicle Controllers — one store call per request, outcome mapped to a status code.

Invariants:
    - Identifier gate (get/update/delete): missing id or len(id) != 24 -> 400, store untouched
    - Failed -> 500 (empty body, cause logged); NotFound -> 404; Found -> 2xx
    - A store call that raises is treated exactly like Failed
    - No retries

Design Decisions:
    - The gate checks length only; hex content is left to the store (NotFound)
"""

import logging
from typing import Any, Awaitable

from starlette.responses import JSONResponse, Response

from vehicle_api.core.domain_types import (
    VEHICLE_ID_LENGTH,
    VEHICLE_PROJECTION,
    Failed,
    NotFound,
    StoreResult,
    VehicleId,
)
from vehicle_api.core.repository_protocols import VehicleStore

logger = logging.getLogger(__name__)


def _empty(status_code: int) -> Response:
    return Response(status_code=status_code)


def check_vehicle_id(vehicle_id: str | None) -> Response | None:
    """Identifier gate. Returns the rejection response, or None to continue."""
    if vehicle_id is None:
        return _empty(400)
    # length only: a non-hex id of the right length is looked up and ends as 404
    if len(vehicle_id) != VEHICLE_ID_LENGTH:
        return _empty(400)
    return None


async def _call_store(
    operation: str, vehicle_id: str | None, call: Awaitable[StoreResult],
) -> StoreResult:
    try:
        result = await call
    except Exception as e:
        result = Failed(e)
    if isinstance(result, Failed):
        cause = result.cause
        logger.error(
            f"Vehicle {operation} failed: {cause!r}",
            exc_info=(type(cause), cause, cause.__traceback__),
            extra={"operation": operation, "vehicle_id": vehicle_id},
        )
    return result


def _failure(result: StoreResult) -> Response | None:
    """500 for Failed, 404 for NotFound, None for Found."""
    if isinstance(result, Failed):
        return _empty(500)
    if isinstance(result, NotFound):
        return _empty(404)
    return None


async def get_vehicle(vehicle_id: str | None, store: VehicleStore) -> Response:
    rejection = check_vehicle_id(vehicle_id)
    if rejection is not None:
        return rejection
    result = await _call_store(
        "find", vehicle_id,
        store.find_by_id(VehicleId(vehicle_id), VEHICLE_PROJECTION),
    )
    return _failure(result) or JSONResponse(
        status_code=200, content={"data": result.record},
    )


async def create_vehicle(body: dict[str, Any], store: VehicleStore) -> Response:
    result = await _call_store("create", None, store.create(body))
    if isinstance(result, Failed):
        return _empty(500)
    if isinstance(result, NotFound):
        # create never matches "nothing"; treat as a store contract breach
        logger.error("Vehicle store returned NotFound for create")
        return _empty(500)
    logger.info(
        "Vehicle created",
        extra={"operation": "create", "vehicle_id": result.record.get("_id")},
    )
    return JSONResponse(status_code=201, content={"data": result.record})


async def update_vehicle(
    vehicle_id: str | None, body: dict[str, Any], store: VehicleStore,
) -> Response:
    rejection = check_vehicle_id(vehicle_id)
    if rejection is not None:
        return rejection
    result = await _call_store(
        "update", vehicle_id, store.update_by_id(VehicleId(vehicle_id), body),
    )
    return _failure(result) or _empty(204)


async def delete_vehicle(vehicle_id: str | None, store: VehicleStore) -> Response:
    rejection = check_vehicle_id(vehicle_id)
    if rejection is not None:
        return rejection
    result = await _call_store(
        "delete", vehicle_id, store.delete_by_id(VehicleId(vehicle_id)),
    )
    return _failure(result) or _empty(204)
