from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest


def _data(response):
    payload = response.get_json()
    assert payload["ok"] is True, payload
    return payload["data"]


def _add_plant(client, *, days_ago: int, stage: str = "vegetative", harvest_in: int | None = None) -> dict:
    now = datetime.now(timezone.utc)
    body = {"name": f"Plant {days_ago}", "stage": stage, "planted_date": (now - timedelta(days=days_ago)).isoformat()}
    if harvest_in is not None:
        body["harvest_date"] = (now + timedelta(days=harvest_in)).isoformat()
    response = client.post("/api/v1/plants", json=body)
    assert response.status_code == 201
    return _data(response)


# ── Catalogue ────────────────────────────────────────────────────────


def test_products_in_catalogue_order(client):
    data = _data(client.get("/api/v1/nutrients/products"))

    assert data["count"] == 9
    assert data["products"][0]["id"] == "bio-grow"
    assert data["products"][-1]["id"] == "calmag"
    assert data["bottle_sizes_ml"] == [250, 500, 1000, 5000]


def test_schedule_and_phases(client):
    schedule = _data(client.get("/api/v1/nutrients/schedule"))
    phases = _data(client.get("/api/v1/nutrients/phases"))

    assert schedule["count"] == 16
    assert [p["id"] for p in phases["phases"]][0] == "seedling"


@pytest.mark.parametrize("week,resolved", [(6, 6), (0, 1), (-2, 1), (42, 16)])
def test_schedule_week_is_clamped(client, week, resolved):
    data = _data(client.get(f"/api/v1/nutrients/schedule/{week}"))
    assert data["requested_week"] == week
    assert data["schedule"]["week"] == resolved


def test_substrates(client):
    data = _data(client.get("/api/v1/nutrients/substrates"))
    assert data["default"] == "lightMix"
    assert {s["key"]: s["modifier"] for s in data["substrates"]} == {"lightMix": 1.0, "allMix": 0.75, "cocoMix": 1.1}


def test_context_without_plants(client):
    data = _data(client.get("/api/v1/nutrients/context"))
    assert data["current_week"] == 1
    assert data["active_plants"] == 0


def test_context_follows_oldest_active_plant(client):
    _add_plant(client, days_ago=20)
    _add_plant(client, days_ago=3, stage="seedling")

    data = _data(client.get("/api/v1/nutrients/context"))
    assert data["current_week"] == 3
    assert data["phase"]["id"] == "earlyVeg"


def test_legacy_prefix_is_rewritten(client):
    response = client.get("/api/nutrients/products")
    assert response.status_code == 200


# ── Dosage & status ──────────────────────────────────────────────────


def test_dosage(client):
    data = _data(client.get("/api/v1/nutrients/dosage?liters=10&week=3&substrate=cocoMix"))

    assert data["total_ml"] == 121.0
    assert data["modifier"] == 1.1
    assert data["phase"]["id"] == "earlyVeg"


def test_dosage_defaults_to_current_week(client):
    data = _data(client.get("/api/v1/nutrients/dosage?liters=10"))
    assert data["week"] == 1
    assert data["total_ml"] == 30.0


@pytest.mark.parametrize("query", ["", "liters=0", "liters=101", "liters=abc", "liters=10&week=x"])
def test_dosage_rejects_bad_input(client, query):
    response = client.get(f"/api/v1/nutrients/dosage?{query}")
    assert response.status_code == 400
    assert response.get_json()["ok"] is False


def test_status(client):
    data = _data(client.get("/api/v1/nutrients/status?ec=1.4&ph=6.3&tank=20&week=6"))

    assert data["status"]["ec"]["status"] == "optimal"
    assert data["status"]["ph"]["status"] == "optimal"
    assert data["status"]["tank_level"]["status"] == "medium"
    assert data["status"]["temp"]["status"] == "unknown"
    assert data["status"]["soil_moisture"]["label"] == "No data"


def test_recommendations(client):
    response = client.post(
        "/api/v1/nutrients/recommendations",
        json={
            "telemetry": {"ec": 3.2, "ph": 5.5, "reservoirLevel_percent": 12, "soil": [20, 0, 24]},
            "plants": [],
            "week": 6,
        },
    )
    data = _data(response)

    ids = [rec["id"] for rec in data["recommendations"]]
    assert ids == ["ec-high", "ph-low", "tank-low", "soil-dry"]
    assert data["recommendations"][0]["priority"] == "critical"
    assert data["readings"]["soil_moisture"] == 22
    assert data["count"] == 4


def test_recommendations_flush_window_from_stored_plants(client):
    _add_plant(client, days_ago=80, stage="flowering", harvest_in=7)

    data = _data(client.post("/api/v1/nutrients/recommendations", json={"telemetry": {}}))
    assert [rec["id"] for rec in data["recommendations"]] == ["flush-soon"]


@pytest.mark.parametrize(
    "body,field",
    [
        ({"telemetry": {"ec": "abc"}}, ["telemetry", "ec"]),
        ({"telemetry": {"soil": 42}}, ["telemetry", "soil"]),
        ({"telemetry": {"soil": [20, "wet"]}}, ["telemetry", "soil", 1]),
        ({"telemetry": {"pumpRunning": "maybe"}}, ["telemetry", "pumpRunning"]),
        ({"reservoir": {"main": {"ph": "acidic"}}}, ["reservoir", "main", "ph"]),
        ({"telemetry": []}, ["telemetry"]),
    ],
)
def test_recommendations_reject_malformed_telemetry(client, body, field):
    response = client.post("/api/v1/nutrients/recommendations", json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["ok"] is False
    assert [err["loc"] for err in payload["details"]["errors"]] == [field]


def test_recommendations_fall_back_to_reservoir_readings(client):
    data = _data(
        client.post(
            "/api/v1/nutrients/recommendations",
            json={
                "telemetry": {"tankLevel": 4095, "extra": "ignored"},
                "reservoir": {"main": {"ec": 0.2, "ph": 6.3}},
                "week": 6,
            },
        )
    )

    assert data["readings"]["ec"] == 0.2
    assert data["readings"]["ph"] == 6.3
    assert data["readings"]["tank_level"] == 100
    assert [rec["id"] for rec in data["recommendations"]] == ["ec-low"]


# ── Inventory ────────────────────────────────────────────────────────


def test_inventory_lists_every_product(client):
    data = _data(client.get("/api/v1/nutrients/inventory"))

    assert data["count"] == 9
    first = data["items"][0]
    assert first["product_id"] == "bio-grow"
    assert first["owned"] is False
    assert first["product"]["name"] == "Bio-Grow"
    assert "weeks_left" in first["usage"]


def test_inventory_patch_toggle_refill(client):
    data = _data(client.patch("/api/v1/nutrients/inventory/bio-grow", json={"owned": True}))
    assert data["current_ml"] == 1000

    data = _data(client.patch("/api/v1/nutrients/inventory/bio-grow", json={"current_ml": 100}))
    assert data["low"] is True

    shopping = _data(client.get("/api/v1/nutrients/inventory/shopping-list"))
    assert [item["product_id"] for item in shopping["items"]] == ["bio-grow"]

    data = _data(client.post("/api/v1/nutrients/inventory/bio-grow/refill"))
    assert data["current_ml"] == 1000

    data = _data(client.post("/api/v1/nutrients/inventory/bio-grow/toggle"))
    assert data["owned"] is False
    assert data["current_ml"] == 0

    assert _data(client.get("/api/v1/nutrients/inventory/bio-grow"))["owned"] is False


def test_inventory_bottle_size_clamps_volume(client):
    client.patch("/api/v1/nutrients/inventory/calmag", json={"owned": True})
    data = _data(client.patch("/api/v1/nutrients/inventory/calmag", json={"bottle_size": 250}))
    assert data["current_ml"] == 250


def test_inventory_volume_above_bottle_is_capped(client):
    data = _data(client.patch("/api/v1/nutrients/inventory/top-max", json={"owned": True, "current_ml": 2500}))
    assert data["current_ml"] == 1000
    assert data["fill_percent"] == 100.0


@pytest.mark.parametrize(
    "body",
    [{}, {"bottle_size": 0}, {"current_ml": -10}, {"owned": True, "colour": "green"}],
)
def test_inventory_patch_rejects_bad_body(client, body):
    response = client.patch("/api/v1/nutrients/inventory/bio-grow", json=body)
    assert response.status_code == 400


def test_inventory_unknown_product(client):
    assert client.get("/api/v1/nutrients/inventory/miracle-gro").status_code == 404
    assert client.post("/api/v1/nutrients/inventory/miracle-gro/refill").status_code == 404


# ── Dosing log ───────────────────────────────────────────────────────


def test_log_dose_consumes_inventory(client):
    client.patch("/api/v1/nutrients/inventory/root-juice", json={"owned": True})

    response = client.post(
        "/api/v1/nutrients/logs",
        json={"water_liters": 10, "week": 1, "ec_before": 0.2, "ec_after": 0.5, "notes": "first feed"},
    )
    assert response.status_code == 201
    entry = _data(response)
    assert entry["total_ml"] == 30.0
    assert entry["notes"] == "first feed"

    assert _data(client.get(f"/api/v1/nutrients/logs/{entry['log_id']}"))["log_id"] == entry["log_id"]
    assert _data(client.get("/api/v1/nutrients/inventory/root-juice"))["current_ml"] == 990


def test_log_dose_validation(client):
    assert client.post("/api/v1/nutrients/logs", json={"water_liters": 500}).status_code == 400
    assert client.post("/api/v1/nutrients/logs", json={"water_liters": 10, "status": "exploded"}).status_code == 400
    assert client.post("/api/v1/nutrients/logs", json={"water_liters": 10, "ph_before": 15}).status_code == 400


def test_logs_pagination_and_stats(client):
    for _ in range(3):
        client.post("/api/v1/nutrients/logs", json={"water_liters": 10, "week": 1})
    client.post("/api/v1/nutrients/logs", json={"water_liters": 10, "week": 1, "status": "failed"})

    page = _data(client.get("/api/v1/nutrients/logs?limit=2&page=1"))
    assert len(page["items"]) == 2
    assert page["pagination"]["total"] == 4
    assert page["pagination"]["has_next"] is True

    stats = _data(client.get("/api/v1/nutrients/stats"))
    assert stats["total_dosages"] == 3
    assert stats["total_volume_ml"] == 90.0
    assert stats["avg_concentration_ml_per_liter"] == 3.0


def test_logs_bad_query(client):
    assert client.get("/api/v1/nutrients/logs?limit=0").status_code == 400
    assert client.get("/api/v1/nutrients/logs?start=yesterday").status_code == 400


def test_stats_start_after_end(client):
    response = client.get("/api/v1/nutrients/stats?start=2026-03-02T00:00:00Z&end=2026-03-01T00:00:00Z")
    assert response.status_code == 400


def test_missing_log(client):
    assert client.get("/api/v1/nutrients/logs/999").status_code == 404


def test_unknown_route_is_json(client):
    response = client.get("/api/v1/nutrients/does-not-exist")
    assert response.status_code == 404
    assert response.get_json()["ok"] is False
