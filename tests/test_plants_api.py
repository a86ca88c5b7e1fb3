from __future__ import annotations

from app.schemas import ErrorResponse, SuccessResponse


def test_create_list_and_get_plant(client):
    response = client.post(
        "/api/v1/plants",
        json={"name": "Northern Lights", "stage": "vegetative", "planted_date": "2026-02-09T00:00:00Z"},
    )
    assert response.status_code == 201
    plant = response.get_json()["data"]
    assert plant["name"] == "Northern Lights"
    assert plant["planted_date"] == "2026-02-09T00:00:00+00:00"

    listing = client.get("/api/v1/plants").get_json()["data"]
    assert listing["count"] == 1
    assert listing["plants"][0]["active"] is True
    assert listing["plants"][0]["grow_week"] >= 3

    fetched = client.get(f"/api/v1/plants/{plant['plant_id']}").get_json()
    assert fetched["ok"] is True
    assert fetched["data"]["plant_id"] == plant["plant_id"]


def test_create_plant_defaults(client):
    plant = client.post("/api/v1/plants", json={"name": "Blueberry"}).get_json()["data"]
    assert plant["stage"] == "seedling"
    assert plant["planted_date"] is None


def test_create_plant_validation(client):
    assert client.post("/api/v1/plants", json={"name": "   "}).status_code == 400
    assert client.post("/api/v1/plants", json={"name": "X", "stage": "sprouting"}).status_code == 400
    assert client.post("/api/v1/plants", json={"name": "X", "planted_date": "soon"}).status_code == 400
    assert client.post("/api/v1/plants", json={}).status_code == 400


def test_update_stage(client):
    plant = client.post("/api/v1/plants", json={"name": "Skunk", "stage": "flowering"}).get_json()["data"]

    response = client.put(f"/api/v1/plants/{plant['plant_id']}/stage", json={"stage": "harvested"})
    assert response.status_code == 200
    assert response.get_json()["data"]["stage"] == "harvested"

    listing = client.get("/api/v1/plants").get_json()["data"]
    assert listing["plants"][0]["active"] is False


def test_update_stage_validation(client):
    plant = client.post("/api/v1/plants", json={"name": "Skunk"}).get_json()["data"]
    assert client.put(f"/api/v1/plants/{plant['plant_id']}/stage", json={"stage": "nope"}).status_code == 400
    assert client.put("/api/v1/plants/999/stage", json={"stage": "flowering"}).status_code == 404


def test_missing_plant(client):
    response = client.get("/api/v1/plants/999")
    assert response.status_code == 404
    assert response.get_json()["ok"] is False


def test_health(client):
    ping = client.get("/api/v1/health/ping").get_json()
    assert ping["ok"] is True
    assert ping["data"]["status"] == "ok"

    assert client.get("/api/v1/health/database").status_code == 200
    assert client.get("/api/health/ping").status_code == 200


def test_response_envelopes_match_schemas(client):
    ok = client.get("/api/v1/plants").get_json()
    assert SuccessResponse[dict].model_validate(ok).ok is True

    error = client.get("/api/v1/plants/999").get_json()
    parsed = ErrorResponse.model_validate(error)
    assert parsed.ok is False
    assert parsed.error["message"] == "Plant 999 not found"
