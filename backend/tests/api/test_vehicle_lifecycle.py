"""Vehicle Lifecycle — full pipeline against the SQLite-backed store.

Invariants checked:
    - POST assigns a 24-char id and both timestamps
    - GET returns exactly the projected fields
    - PATCH changes only supplied fields; DELETE removes the row
    - A non-finite modelYear is rejected before anything is written
"""

import json

import pytest
from sqlalchemy import func, select

from vehicle_api.core.domain_types import VEHICLE_PROJECTION
from vehicle_api.core.vehicle_rules import max_model_year
from vehicle_api.models.vehicle import Vehicle

VEHICLE_URL = "/api/v1/vehicles"


def _valid_body() -> dict:
    return {
        "manufacturer": "toyota",
        "model": "camry",
        "fuel": "gas",
        "type": "sedan",
        "color": "white",
        "VIN": "TNRU392EESIR93ERF",
        "VRM": "ETHR382",
        "used": True,
        "modelYear": max_model_year() - 1,
    }


async def _create(db_client) -> dict:
    res = await db_client.post(VEHICLE_URL, json=_valid_body())
    assert res.status_code == 201
    return res.json()["data"]


async def test_create_assigns_identifier_and_timestamps(db_client):
    created = await _create(db_client)
    assert len(created["_id"]) == 24
    int(created["_id"], 16)
    assert created["createdAt"]
    assert created["updatedAt"]
    assert created["VIN"] == "TNRU392EESIR93ERF"
    assert created["modelYear"] == max_model_year() - 1


async def test_get_returns_projected_fields(db_client):
    created = await _create(db_client)
    res = await db_client.get(f"{VEHICLE_URL}/{created['_id']}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert tuple(data.keys()) == VEHICLE_PROJECTION
    assert data["manufacturer"] == "toyota"
    assert data["used"] is True


async def test_get_unknown_identifier_returns_404(db_client):
    res = await db_client.get(f"{VEHICLE_URL}/{'a' * 24}")
    assert res.status_code == 404


async def test_patch_updates_only_supplied_fields(db_client):
    created = await _create(db_client)
    res = await db_client.patch(
        f"{VEHICLE_URL}/{created['_id']}", json={"color": "red", "used": False},
    )
    assert res.status_code == 204

    data = (await db_client.get(f"{VEHICLE_URL}/{created['_id']}")).json()["data"]
    assert data["color"] == "red"
    assert data["used"] is False
    assert data["model"] == "camry"
    assert data["createdAt"] == created["createdAt"]


async def test_delete_removes_vehicle(db_client):
    created = await _create(db_client)
    res = await db_client.delete(f"{VEHICLE_URL}/{created['_id']}")
    assert res.status_code == 204

    res = await db_client.get(f"{VEHICLE_URL}/{created['_id']}")
    assert res.status_code == 404

    res = await db_client.delete(f"{VEHICLE_URL}/{created['_id']}")
    assert res.status_code == 404


async def test_readiness_reports_database_healthy(db_client):
    res = await db_client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_liveness_probe(db_client):
    res = await db_client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


NON_FINITE_YEARS = ["-Infinity", "-1e400", "Infinity", "NaN"]


def _raw_body(model_year_literal: str, **overrides) -> bytes:
    body = {**_valid_body(), **overrides}
    body.pop("modelYear")
    encoded = json.dumps(body)[:-1]
    return f'{encoded}, "modelYear": {model_year_literal}}}'.encode()


@pytest.mark.parametrize("literal", NON_FINITE_YEARS)
async def test_post_non_finite_model_year_is_rejected_and_not_stored(
    db_client, test_db, literal,
):
    res = await db_client.post(
        VEHICLE_URL, content=_raw_body(literal),
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 422
    assert res.json()["error"].startswith("modelYear must be a `number` type")

    count = await test_db.scalar(select(func.count()).select_from(Vehicle))
    assert count == 0


@pytest.mark.parametrize("literal", NON_FINITE_YEARS)
async def test_patch_non_finite_model_year_leaves_vehicle_readable(
    db_client, literal,
):
    created = await _create(db_client)
    res = await db_client.patch(
        f"{VEHICLE_URL}/{created['_id']}",
        content=f'{{"modelYear": {literal}}}'.encode(),
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 422

    res = await db_client.get(f"{VEHICLE_URL}/{created['_id']}")
    assert res.status_code == 200
    assert res.json()["data"]["modelYear"] == created["modelYear"]
