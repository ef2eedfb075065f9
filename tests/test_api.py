"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from nutrition_advisor.api.app import create_app
from nutrition_advisor.domain.errors import ProviderRateLimited, ProviderUnauthorized
from nutrition_advisor.services.dates import today
from tests.conftest import RICE_BOWL, FakeLlmProvider

IMAGE = "data:image/jpeg;base64,ZmFrZQ=="


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_endpoint(container, llm_provider: FakeLlmProvider) -> None:
    client = TestClient(create_app(container))
    llm_provider.queue(RICE_BOWL)

    response = client.post("/api/analyze", json={"image": IMAGE})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["food_name"] == "Rice bowl"
    assert body["data"]["source"] == "image"


def test_analyze_endpoint_validates_image(container) -> None:
    client = TestClient(create_app(container))

    missing = client.post("/api/analyze", json={})
    wrong_type = client.post("/api/analyze", json={"image": "data:image/gif;base64,A"})

    assert missing.status_code == 400
    assert missing.json() == {
        "success": False,
        "error": "Missing image in request body.",
    }
    assert wrong_type.status_code == 400
    assert wrong_type.json()["error"].startswith("Invalid image format")


def test_analyze_text_endpoint(container, llm_provider: FakeLlmProvider) -> None:
    client = TestClient(create_app(container))
    llm_provider.queue({"items": [{"food_name": "Egg"}, {"food_name": "Banana"}]})

    response = client.post("/api/analyze-text", json={"text": "eggs and a banana"})

    assert response.status_code == 200
    assert [item["food_name"] for item in response.json()["data"]] == [
        "Egg",
        "Banana",
    ]


def test_provider_errors_map_to_500(container, llm_provider: FakeLlmProvider) -> None:
    client = TestClient(create_app(container))
    llm_provider.queue(ProviderUnauthorized(status_code=401))
    llm_provider.queue(ProviderRateLimited(status_code=429))

    unauthorized = client.post("/api/analyze-text", json={"text": "toast"})
    limited = client.post("/api/analyze-text", json={"text": "toast"})

    assert unauthorized.status_code == 500
    assert unauthorized.json()["error"] == "API key is invalid or unauthorized."
    assert limited.status_code == 500
    assert limited.json()["error"] == "Quota exceeded or rate limit reached."


def test_invalid_model_json_maps_to_502(
    container, llm_provider: FakeLlmProvider
) -> None:
    client = TestClient(create_app(container))
    llm_provider.queue("not json")

    response = client.post("/api/analyze-text", json={"text": "toast"})

    assert response.status_code == 502
    assert response.json() == {
        "success": False,
        "error": "Model returned invalid JSON.",
    }


def test_save_and_list_records(container) -> None:
    client = TestClient(create_app(container))

    single = client.post("/api/records", json={"record": RICE_BOWL})
    backdated = client.post(
        "/api/records",
        json={
            "record": [{"food_name": "Egg"}, {"food_name": "Toast"}],
            "record_date": "2024-03-04",
        },
    )
    today_records = client.get("/api/records/today")
    day_records = client.get("/api/records", params={"date": "2024-03-04"})

    assert single.json() == {"success": True, "ids": [1]}
    assert backdated.json()["ids"] == [2, 3]
    assert [row["id"] for row in today_records.json()["data"]] == [1]
    assert today_records.json()["data"][0]["created_at"].startswith(today())
    assert {row["food_name"] for row in day_records.json()["data"]} == {"Egg", "Toast"}


def test_save_records_requires_record(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/records", json={"record_date": "2024-03-04"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_list_records_requires_valid_date(container) -> None:
    client = TestClient(create_app(container))

    missing = client.get("/api/records")
    invalid = client.get("/api/records", params={"date": "2024-02-30"})

    assert missing.status_code == 400
    assert invalid.status_code == 400


def test_summary_endpoints(container) -> None:
    client = TestClient(create_app(container))
    client.post("/api/records", json={"record": [RICE_BOWL, RICE_BOWL]})
    client.post(
        "/api/records", json={"record": RICE_BOWL, "record_date": "2024-03-05"}
    )

    today_summary = client.get("/api/summary/today").json()["data"]
    range_summary = client.get(
        "/api/summary/range", params={"start": "2024-03-04", "end": "2024-03-10"}
    ).json()["data"]

    assert today_summary["calories"] == 1040
    assert "day" not in today_summary
    assert range_summary == [
        {
            "day": "2024-03-05",
            "calories": 520,
            "protein_g": 18,
            "carbs_g": 80,
            "fat_g": 12,
            "sugar_g": 4,
            "sodium_mg": 640,
            "fiber_g": 3,
        }
    ]


def test_advice_requires_complete_profile(container) -> None:
    client = TestClient(create_app(container))
    client.put("/api/profile", json={"weight": 70})

    response = client.get("/api/advice/today")

    assert response.status_code == 400
    assert "Profile is incomplete" in response.json()["error"]


def test_advice_endpoint(container, llm_provider: FakeLlmProvider) -> None:
    client = TestClient(create_app(container))
    llm_provider.queue({"advice": "Eat a salad."})

    response = client.get("/api/advice/today")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"advice": "Eat a salad."}}


def test_profile_roundtrip(container) -> None:
    client = TestClient(create_app(container))

    saved = client.put(
        "/api/profile",
        json={"weight": 70.5, "target_type": "gain", "theme_mode": "dark"},
    )
    fetched = client.get("/api/profile").json()["data"]

    assert saved.json() == {"success": True}
    assert fetched["weight"] == 70.5
    assert fetched["target_type"] == "gain"
    assert fetched["daily_calorie_goal"] is None
    assert set(fetched) == {
        "weight",
        "height",
        "activity_level",
        "ai_provider",
        "openai_key",
        "gemini_key",
        "theme_mode",
        "font_scale",
        "target_type",
        "daily_calorie_goal",
    }


def test_weekly_report_endpoint(container, llm_provider: FakeLlmProvider) -> None:
    client = TestClient(create_app(container))
    client.post(
        "/api/records",
        json={"record": {"calories": 2000}, "record_date": "2024-03-04"},
    )
    llm_provider.queue({"summary": "Solid week.", "highlights": ["On target"]})

    response = client.get("/api/report/weekly", params={"date": "2024-03-06"})

    assert response.status_code == 200
    assert response.json()["data"] == {
        "summary": "Solid week.",
        "highlights": ["On target"],
        "total_days": 1,
        "days_met": 1,
        "days_over": 0,
        "days_under": 0,
    }
