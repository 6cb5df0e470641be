"""Vehicle Routes — end-to-end pipeline scenarios against a fake store.

Tests cover:
    - GET: 404 empty / 200 {"data": ...} / 400 on short id / 500 on failure
    - POST: valid body reaches the store and returns 201; schema violations -> 422
    - PATCH: 404 / 204 empty; update ruleset accepts partial bodies
    - DELETE: 204 / 404 / 500 when the store raises
"""

import pytest

from vehicle_api.core.domain_types import Failed, Found, NotFound
from vehicle_api.core.vehicle_rules import max_model_year

VEHICLE_URL = "/api/v1/vehicles"
VALID_ID = "507f1f77bcf86cd799439011"


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


# ─── GET ─────────────────────────────────────────────────────────

async def test_get_unknown_vehicle_returns_404(client, fake_store):
    fake_store.results["find"] = NotFound()
    res = await client.get(f"{VEHICLE_URL}/{VALID_ID}")
    assert res.status_code == 404
    assert res.content == b""


async def test_get_vehicle_returns_data_envelope(client, fake_store):
    fake_store.results["find"] = Found({"k": "v"})
    res = await client.get(f"{VEHICLE_URL}/{VALID_ID}")
    assert res.status_code == 200
    assert res.json() == {"data": {"k": "v"}}


@pytest.mark.parametrize("vehicle_id", ["1", "507f1f77bcf86cd79943901", "507f1f77bcf86cd7994390111"])
async def test_get_with_wrong_length_id_returns_400(client, fake_store, vehicle_id):
    res = await client.get(f"{VEHICLE_URL}/{vehicle_id}")
    assert res.status_code == 400
    assert fake_store.calls == []


async def test_get_store_failure_returns_500(client, fake_store):
    fake_store.results["find"] = Failed(RuntimeError("down"))
    res = await client.get(f"{VEHICLE_URL}/{VALID_ID}")
    assert res.status_code == 500
    assert res.content == b""


# ─── POST ────────────────────────────────────────────────────────

async def test_post_valid_body_creates_vehicle(client, fake_store):
    body = _valid_body()
    created = {"_id": VALID_ID, **body}
    fake_store.results["create"] = Found(created)
    res = await client.post(VEHICLE_URL, json=body)
    assert res.status_code == 201
    assert res.json() == {"data": created}
    assert fake_store.calls == [("create", body)]


async def test_post_with_wrong_content_type_never_reaches_store(client, fake_store):
    res = await client.post(
        VEHICLE_URL, content=b"{}", headers={"content-type": "text/plain"},
    )
    assert res.status_code == 415
    assert res.content == b""
    assert fake_store.calls == []


async def test_post_missing_field_returns_422(client, fake_store):
    body = _valid_body()
    del body["VRM"]
    res = await client.post(VEHICLE_URL, json=body)
    assert res.status_code == 422
    assert res.json() == {"error": "VRM is a required field"}
    assert fake_store.calls == []


async def test_post_unknown_property_returns_422(client):
    res = await client.post(VEHICLE_URL, json={**_valid_body(), "owner": "me"})
    assert res.status_code == 422
    assert res.json() == {"error": "unknown property: owner"}


async def test_post_year_after_next_returns_422(client):
    res = await client.post(
        VEHICLE_URL, json={**_valid_body(), "modelYear": max_model_year() + 1},
    )
    assert res.status_code == 422
    assert res.json() == {
        "error": f"modelYear must be less than or equal to {max_model_year()}",
    }


async def test_post_store_failure_returns_500(client, fake_store):
    fake_store.results["create"] = Failed(RuntimeError("down"))
    res = await client.post(VEHICLE_URL, json=_valid_body())
    assert res.status_code == 500
    assert res.content == b""


# ─── PATCH ───────────────────────────────────────────────────────

async def test_patch_unknown_vehicle_returns_404(client, fake_store):
    fake_store.results["update"] = NotFound()
    res = await client.patch(f"{VEHICLE_URL}/{VALID_ID}", json={"used": False})
    assert res.status_code == 404


async def test_patch_existing_vehicle_returns_204(client, fake_store):
    fake_store.results["update"] = Found({"_id": VALID_ID})
    res = await client.patch(f"{VEHICLE_URL}/{VALID_ID}", json={"used": False})
    assert res.status_code == 204
    assert res.content == b""
    assert fake_store.calls == [("update", VALID_ID, {"used": False})]


async def test_patch_invalid_field_returns_422(client, fake_store):
    res = await client.patch(f"{VEHICLE_URL}/{VALID_ID}", json={"VIN": "abc"})
    assert res.status_code == 422
    assert res.json() == {"error": "VIN must be exactly 17 characters"}
    assert fake_store.calls == []


async def test_patch_with_wrong_length_id_returns_400(client, fake_store):
    res = await client.patch(f"{VEHICLE_URL}/{VALID_ID}0", json={"used": False})
    assert res.status_code == 400
    assert fake_store.calls == []


# ─── DELETE ──────────────────────────────────────────────────────

async def test_delete_existing_vehicle_returns_204(client, fake_store):
    fake_store.results["delete"] = Found({"_id": VALID_ID})
    res = await client.delete(f"{VEHICLE_URL}/{VALID_ID}")
    assert res.status_code == 204
    assert res.content == b""


async def test_delete_unknown_vehicle_returns_404(client, fake_store):
    fake_store.results["delete"] = NotFound()
    res = await client.delete(f"{VEHICLE_URL}/{VALID_ID}")
    assert res.status_code == 404


async def test_delete_store_raising_returns_500(client, fake_store):
    fake_store.results["delete"] = RuntimeError("connection reset")
    res = await client.delete(f"{VEHICLE_URL}/{VALID_ID}")
    assert res.status_code == 500
    assert res.content == b""
