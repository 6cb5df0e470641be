"""Vehicle Store — SQLAlchemy implementation of the VehicleStore protocol.

Invariants:
    - Exactly one unit of work per call; commit on success, rollback on failure
    - Operational failures are returned as Failed(cause), never raised
    - "Nothing matched" is NotFound, distinct from Failed
    - create stamps createdAt/updatedAt; update touches supplied fields + updatedAt only
"""

import logging
from typing import Any, Awaitable, Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_api.core.domain_types import (
    Failed, Found, NotFound, StoreResult, VehicleId,
)
from vehicle_api.core.errors import DatabaseError
from vehicle_api.models.vehicle import Vehicle

logger = logging.getLogger(__name__)

_STORE_ERRORS = (SQLAlchemyError, DatabaseError, OSError)


class SqlVehicleStore:
    """Vehicle persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(self, data: dict[str, Any]) -> StoreResult:
        async def _create() -> StoreResult:
            vehicle = Vehicle.from_external(data)
            self._db.add(vehicle)
            await self._db.commit()
            return Found(vehicle.to_record())

        return await self._run("create", None, _create)

    async def find_by_id(
        self, vehicle_id: VehicleId, fields: Sequence[str],
    ) -> StoreResult:
        async def _find() -> StoreResult:
            vehicle = await self._db.get(Vehicle, vehicle_id)
            if vehicle is None:
                return NotFound()
            return Found(vehicle.to_record(fields))

        return await self._run("find", vehicle_id, _find)

    async def update_by_id(
        self, vehicle_id: VehicleId, data: dict[str, Any],
    ) -> StoreResult:
        async def _update() -> StoreResult:
            vehicle = await self._db.get(Vehicle, vehicle_id)
            if vehicle is None:
                return NotFound()
            vehicle.apply_external(data)
            await self._db.commit()
            return Found(vehicle.to_record())

        return await self._run("update", vehicle_id, _update)

    async def delete_by_id(self, vehicle_id: VehicleId) -> StoreResult:
        async def _delete() -> StoreResult:
            vehicle = await self._db.get(Vehicle, vehicle_id)
            if vehicle is None:
                return NotFound()
            record = vehicle.to_record()
            await self._db.delete(vehicle)
            await self._db.commit()
            return Found(record)

        return await self._run("delete", vehicle_id, _delete)

    async def _run(
        self,
        operation: str,
        vehicle_id: VehicleId | None,
        work: Callable[[], Awaitable[StoreResult]],
    ) -> StoreResult:
        try:
            return await work()
        except _STORE_ERRORS as e:
            await self._rollback_quietly()
            logger.warning(
                f"Vehicle store {operation} failed: {e}",
                extra={"operation": operation, "vehicle_id": vehicle_id},
            )
            return Failed(e)

    async def _rollback_quietly(self) -> None:
        try:
            await self._db.rollback()
        except _STORE_ERRORS as e:
            logger.error(f"Rollback after store failure also failed: {e}")
