from __future__ import annotations

import pytest
from httpx import AsyncClient

from agrisync.services.weather_service import ADVICE_HEAVY_RAIN


@pytest.mark.asyncio
async def test_health_and_request_id(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"x-request-id": "req-123"})

    assert response.status_code == 200
    assert response.json()["service"] == "agrisync"
    assert response.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(client: AsyncClient) -> None:
    response = await client.get("/api/v1/crops")

    assert response.status_code == 200
    assert response.headers["x-request-id"]
    assert "Wheat" in response.json()["items"]


@pytest.mark.asyncio
async def test_crop_detail_and_unknown_crop(client: AsyncClient) -> None:
    found = await client.get("/api/v1/crops/tomato")
    missing = await client.get("/api/v1/crops/dragonfruit")

    assert found.status_code == 200
    assert found.json()["crop"]["harvest_type"] == "continuous"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_timeline_endpoints(client: AsyncClient) -> None:
    timeline = await client.get("/api/v1/crops/Wheat/timeline", params={"sowing_date": "2024-01-01"})
    bad_date = await client.get("/api/v1/crops/Wheat/timeline", params={"sowing_date": "01/01/2024"})
    bad_limit = await client.get("/api/v1/crops/Wheat/upcoming", params={"sowing_date": "2024-01-01", "limit": -1})

    assert timeline.status_code == 200
    body = timeline.json()
    assert body["crop_name"] == "Wheat"
    assert [item["day_offset"] for item in body["items"]][:3] == [0, 15, 21]
    assert bad_date.status_code == 400
    assert bad_limit.status_code == 400


@pytest.mark.asyncio
async def test_harvest_and_stage_endpoints(client: AsyncClient) -> None:
    harvest = await client.get("/api/v1/crops/Tomato/harvest", params={"sowing_date": "2024-01-01"})
    stage = await client.get("/api/v1/crops/Tomato/stage", params={"sowing_date": "2024-01-01"})

    assert harvest.status_code == 200
    assert harvest.json()["harvest"]["harvest_type"] == "continuous"
    assert harvest.json()["harvest"]["first_harvest_date"] == "2024-03-01"
    assert stage.status_code == 200
    assert stage.json()["stage"]["stage_name"] == "Ripening"


@pytest.mark.asyncio
async def test_region_resolution_and_manual_override(client: AsyncClient) -> None:
    default = await client.get("/api/v1/region")
    assert default.json()["source"] == "default"

    gps = await client.get("/api/v1/region", params={"latitude": 30.9, "longitude": 75.85, "district": "Ludhiana"})
    assert gps.json()["state"] == "Punjab"
    assert gps.json()["district"] == "Ludhiana"
    assert gps.json()["source"] == "gps"

    cached = await client.get("/api/v1/region/source")
    assert cached.json()["source"] == "cached"

    stored = await client.put("/api/v1/region/manual", json={"state": "Karnataka", "district": "Mysore"})
    assert stored.json() == {"ok": True}
    manual = await client.get("/api/v1/region")
    assert (manual.json()["state"], manual.json()["source"]) == ("Karnataka", "manual")

    cleared = await client.delete("/api/v1/region/manual")
    assert cleared.json() == {"ok": True}
    assert (await client.get("/api/v1/region")).json()["source"] == "cached"


@pytest.mark.asyncio
async def test_manual_location_rejects_whitespace_and_strips_names(client: AsyncClient) -> None:
    blank_state = await client.put("/api/v1/region/manual", json={"state": "   ", "district": "Mysore"})
    blank_district = await client.put("/api/v1/region/manual", json={"state": "Karnataka", "district": "\t"})
    assert blank_state.status_code == 422
    assert blank_district.status_code == 422

    padded = await client.put("/api/v1/region/manual", json={"state": " Karnataka ", "district": " Mysore"})
    assert padded.status_code == 200
    region = (await client.get("/api/v1/region")).json()
    assert (region["state"], region["district"]) == ("Karnataka", "Mysore")


@pytest.mark.asyncio
async def test_soil_endpoints(client: AsyncClient) -> None:
    profile = await client.get("/api/v1/soil", params={"state": "Maharashtra", "district": "Pune", "crop": "Sugarcane"})
    types = await client.get("/api/v1/soil/types")
    suitability = await client.get("/api/v1/soil/types/Red Soil/suitability", params={"crop": "Cotton"})

    assert profile.json()["profile"]["soil_type_name"] == "Alluvial Soil"
    assert profile.json()["profile"]["moisture_floor_percent"] == 40.0
    assert profile.json()["region"]["source"] == "manual"
    assert len(types.json()["items"]) == 6
    assert suitability.json()["suitable"] is True


@pytest.mark.asyncio
async def test_weather_endpoints(client: AsyncClient) -> None:
    current = await client.get("/api/v1/weather/current", params={"state": "Punjab"})
    forecast = await client.get("/api/v1/weather/forecast", params={"state": "Punjab", "days": 3})
    bad_days = await client.get("/api/v1/weather/forecast", params={"state": "Punjab", "days": 0})
    advice = await client.post(
        "/api/v1/weather/advice",
        json={"temperature_c": 20, "humidity_percent": 50, "rainfall_mm": 60},
    )

    assert current.status_code == 200
    assert current.json()["weather"]["zone"] == "north"
    assert current.json()["region"]["district"] == "Punjab"
    assert len(forecast.json()["days"]) == 3
    assert bad_days.status_code == 400
    assert advice.json()["advice"] == ADVICE_HEAVY_RAIN


@pytest.mark.asyncio
async def test_diagnosis_endpoints(client: AsyncClient) -> None:
    diagnosis = await client.post(
        "/api/v1/diagnosis/wheat",
        json={"symptoms": ["orange pustules", "leaf yellowing"]},
    )
    empty = await client.post("/api/v1/diagnosis/wheat", json={"symptoms": []})
    unknown = await client.post("/api/v1/diagnosis/dragonfruit", json={"symptoms": ["wilting"]})
    symptoms = await client.get("/api/v1/diagnosis/wheat/symptoms")
    pests = await client.get("/api/v1/diagnosis/wheat/diseases", params={"type": "pest"})
    disease = await client.get("/api/v1/diagnosis/diseases/wheat-rust")
    no_disease = await client.get("/api/v1/diagnosis/diseases/nope")
    contacts = await client.get("/api/v1/diagnosis/contacts")
    tips = await client.get("/api/v1/diagnosis/maize/tips")

    top = diagnosis.json()["results"][0]
    assert (top["id"], top["match_count"], top["match_percentage"]) == ("wheat-rust", 2, 100)
    assert empty.json()["results"] == []
    assert unknown.status_code == 404
    assert "Orange pustules on leaves" in symptoms.json()["items"]
    assert {item["type"] for item in pests.json()["items"]} == {"pest"}
    assert disease.json()["name"] == "Rust"
    assert no_disease.status_code == 404
    assert contacts.json()["items"]
    assert tips.json()["items"]


@pytest.mark.asyncio
async def test_advisory_endpoints(client: AsyncClient) -> None:
    single = await client.post(
        "/api/v1/advisory/Wheat",
        params={"sowing_date": "2024-01-01", "state": "Rajasthan", "district": "Jaipur"},
    )
    unknown = await client.post("/api/v1/advisory/Dragonfruit", params={"sowing_date": "2024-01-01"})
    insights = await client.post(
        "/api/v1/advisory/insights",
        json={
            "crops": [{"name": "Wheat", "sowing_date": "2024-01-01"}],
            "coordinates": {"latitude": 26.9, "longitude": 75.8},
            "district": "Jaipur",
        },
    )
    district_only = await client.post("/api/v1/advisory/insights", json={"crops": [], "district": "Jaipur"})

    assert single.status_code == 200
    assert single.json()["soil"]["soil_type_name"] == "Sandy Soil"
    assert unknown.status_code == 404
    assert insights.status_code == 200
    assert insights.json()["region"]["state"] == "Rajasthan"
    assert insights.json()["region"]["district"] == "Jaipur"
    assert district_only.status_code == 422


@pytest.mark.asyncio
async def test_ask_endpoints(client: AsyncClient) -> None:
    answer = await client.post("/api/v1/ask", json={"question": "Wheat sowing", "language": "hi"})
    blank = await client.post("/api/v1/ask", json={"question": "   "})
    unsupported = await client.post("/api/v1/ask", json={"question": "Wheat sowing", "language": "fr"})
    actions = await client.get("/api/v1/ask/quick-actions", params={"language": "hi"})

    assert answer.status_code == 200
    assert answer.json()["crop_name"] == "Wheat"
    assert answer.json()["answer"].startswith("गेहूं की बुवाई नवंबर में करें")
    assert blank.status_code == 422
    assert unsupported.status_code == 422
    assert [item["query"] for item in actions.json()["items"]] == ["Wheat sowing", "Rice water", "Wheat fertilizer"]

    schema = (await client.get("/openapi.json")).json()
    assert "/api/v1/ask" in schema["paths"]
    assert "answered" in schema["components"]["schemas"]["AskResponse"]["required"]
