"""Vehicle Routes — guard chains composed in front of the vehicle controllers.

Invariants:
    - GET/DELETE: require_empty_body -> controller
    - POST: json content-type -> non-empty body -> create ruleset -> controller
    - PATCH: json content-type -> non-empty body -> update ruleset -> controller
    - Handlers only unpack path/body/store and delegate
"""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_api.api.guards import (
    read_json_body,
    require_empty_body,
    require_json_content_type,
    require_non_empty_body,
    validate_request_body,
)
from vehicle_api.core.repository_protocols import VehicleStore
from vehicle_api.core.vehicle_rules import VEHICLE_CREATE_RULES, VEHICLE_UPDATE_RULES
from vehicle_api.infrastructure.database import get_db
from vehicle_api.infrastructure.vehicle_store import SqlVehicleStore
from vehicle_api.services import vehicle_controllers

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

validate_vehicle_create_body = validate_request_body(VEHICLE_CREATE_RULES)
validate_vehicle_update_body = validate_request_body(VEHICLE_UPDATE_RULES)

_WRITE_GUARDS = [Depends(require_json_content_type), Depends(require_non_empty_body)]


async def get_vehicle_store(db: AsyncSession = Depends(get_db)) -> VehicleStore:
    """FastAPI dependency for the vehicle store (overridable in tests)."""
    return SqlVehicleStore(db)


@router.get("/{vehicle_id}", dependencies=[Depends(require_empty_body)])
async def get_vehicle(
    vehicle_id: str, store: VehicleStore = Depends(get_vehicle_store),
):
    """Fetch one vehicle."""
    return await vehicle_controllers.get_vehicle(vehicle_id, store)


@router.post(
    "", dependencies=[*_WRITE_GUARDS, Depends(validate_vehicle_create_body)],
)
async def create_vehicle(
    body: Any = Depends(read_json_body),
    store: VehicleStore = Depends(get_vehicle_store),
):
    """Create a vehicle from a full body."""
    return await vehicle_controllers.create_vehicle(body, store)


@router.patch(
    "/{vehicle_id}",
    dependencies=[*_WRITE_GUARDS, Depends(validate_vehicle_update_body)],
)
async def update_vehicle(
    vehicle_id: str,
    body: Any = Depends(read_json_body),
    store: VehicleStore = Depends(get_vehicle_store),
):
    """Apply a partial update."""
    return await vehicle_controllers.update_vehicle(vehicle_id, body, store)


@router.delete("/{vehicle_id}", dependencies=[Depends(require_empty_body)])
async def delete_vehicle(
    vehicle_id: str, store: VehicleStore = Depends(get_vehicle_store),
):
    return await vehicle_controllers.delete_vehicle(vehicle_id, store)
