"""Boundary Protocols — contract between the controllers and the vehicle store.

Invariants:
    - Controllers depend on VehicleStore, never on SQLAlchemy
    - Every method returns a StoreResult; implementations do not raise for
      operational failures (they return Failed)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Any, Protocol, Sequence

from vehicle_api.core.domain_types import StoreResult, VehicleId


class VehicleStore(Protocol):
    """Contract for vehicle persistence — implemented by infrastructure."""

    async def create(self, data: dict[str, Any]) -> StoreResult: ...

    async def find_by_id(
        self, vehicle_id: VehicleId, fields: Sequence[str],
    ) -> StoreResult: ...

    async def update_by_id(
        self, vehicle_id: VehicleId, data: dict[str, Any],
    ) -> StoreResult: ...

    async def delete_by_id(self, vehicle_id: VehicleId) -> StoreResult: ...
