"""Domain Types — identifiers, field names and store outcomes for the vehicle resource.

Invariants:
    - VehicleId wraps the external 24-character identifier string
    - Store operations report exactly one of Found / NotFound / Failed
    - VEHICLE_FIELDS order is the validation order and the response field order

Design Decisions:
    - Three-variant result over None-vs-exception: controllers match on the
      outcome instead of guessing what a None or a raise means
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

VehicleId = NewType("VehicleId", str)

VEHICLE_ID_LENGTH = 24


# ─── Field Names ─────────────────────────────────────────────────

class VehicleField(str, Enum):
    """External attribute names, in declaration order."""
    MANUFACTURER = "manufacturer"
    MODEL = "model"
    FUEL = "fuel"
    TYPE = "type"
    COLOR = "color"
    VIN = "VIN"
    VRM = "VRM"
    USED = "used"
    MODEL_YEAR = "modelYear"


VEHICLE_FIELDS: tuple[str, ...] = tuple(f.value for f in VehicleField)

# Fields returned by get-by-id, in response order.
VEHICLE_PROJECTION: tuple[str, ...] = (
    "_id", *VEHICLE_FIELDS, "createdAt", "updatedAt",
)


# ─── Store Outcomes ──────────────────────────────────────────────

@dataclass(frozen=True)
class Found:
    """The store matched a record (for delete: the removed record)."""
    record: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    """The store operation succeeded but nothing matched the identifier."""


@dataclass(frozen=True)
class Failed:
    """The store operation raised; cause is kept for logging only."""
    cause: BaseException


StoreResult = Union[Found, NotFound, Failed]
