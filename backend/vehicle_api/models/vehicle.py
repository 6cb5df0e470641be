"""Vehicle ORM — one row per vehicle document.

Invariants:
    - id is a 24-char hex string assigned on insert (never by the client)
    - Columns are nullable: admission rules live in core/vehicle_rules.py, not here
    - to_record() speaks the external field names (_id, VIN, modelYear, createdAt...)

Design Decisions:
    - snake_case columns with an explicit external-name map: SQL stays conventional,
      the JSON contract stays camelCase
"""

from datetime import datetime, timezone
from typing import Any, Iterable

from sqlalchemy import Boolean, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_api.db.base import Base
from vehicle_api.infrastructure.object_id import new_object_id

# External name -> ORM attribute
EXTERNAL_TO_ATTRIBUTE: dict[str, str] = {
    "_id": "id",
    "manufacturer": "manufacturer",
    "model": "model",
    "fuel": "fuel",
    "type": "vehicle_type",
    "color": "color",
    "VIN": "vin",
    "VRM": "vrm",
    "used": "used",
    "modelYear": "model_year",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Vehicle(Base):
    """Vehicle document."""
    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=new_object_id,
    )
    manufacturer: Mapped[str | None] = mapped_column(String(30))
    model: Mapped[str | None] = mapped_column(String(30))
    fuel: Mapped[str | None] = mapped_column(String(20))
    vehicle_type: Mapped[str | None] = mapped_column("type", String(30))
    color: Mapped[str | None] = mapped_column(String(25))
    vin: Mapped[str | None] = mapped_column(String(17))
    vrm: Mapped[str | None] = mapped_column(String(7))
    used: Mapped[bool | None] = mapped_column(Boolean)
    model_year: Mapped[float | None] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    @classmethod
    def from_external(cls, data: dict[str, Any]) -> "Vehicle":
        """Build a row from a validated create body."""
        return cls(**{
            EXTERNAL_TO_ATTRIBUTE[key]: value
            for key, value in data.items()
            if key in EXTERNAL_TO_ATTRIBUTE and key not in ("_id", "createdAt", "updatedAt")
        })

    def apply_external(self, data: dict[str, Any]) -> None:
        """Overwrite the supplied fields only (partial update)."""
        for key, value in data.items():
            if key in EXTERNAL_TO_ATTRIBUTE and key not in ("_id", "createdAt", "updatedAt"):
                setattr(self, EXTERNAL_TO_ATTRIBUTE[key], value)
        self.updated_at = _utcnow()

    def to_record(self, fields: Iterable[str] | None = None) -> dict[str, Any]:
        """Serialise to the external shape, restricted to fields when given."""
        names = EXTERNAL_TO_ATTRIBUTE.keys() if fields is None else fields
        record: dict[str, Any] = {}
        for name in names:
            attribute = EXTERNAL_TO_ATTRIBUTE.get(name)
            if attribute is None:
                continue
            value = getattr(self, attribute)
            if isinstance(value, datetime):
                # SQLite drops the offset; stored values are always UTC
                if value.tzinfo is None:
                    value = value.replace(tzinfo=timezone.utc)
                value = value.isoformat()
            elif name == "modelYear" and isinstance(value, float) and value.is_integer():
                value = int(value)
            record[name] = value
        return record
