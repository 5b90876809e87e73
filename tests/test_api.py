"""Tests for the HTTP API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from food_scoring.api.app import create_app
from tests.conftest import (
    FakeEnrichmentClient,
    InMemoryFoodLogRepository,
    InMemoryNutritionVault,
)


def test_health(container) -> None:
    client = TestClient(create_app(container))
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_score_whole_food(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/score",
        json={
            "food": {
                "source": "photo_item",
                "name": "asparagus",
                "generic_slug": "asparagus",
            },
            "nutrients": {"fiber_g": 2, "sugar_g": 2, "sodium_mg": 2},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "whole_food"
    assert body["curve"] == "whole_food"
    assert body["score"] == 92
    assert body["score_ten"] == 9.2
    assert body["stars"] == 4.5
    assert body["flags"][0]["id"] == "low_sodium"


def test_score_rejects_unknown_source(container) -> None:
    client = TestClient(create_app(container))
    response = client.post("/score", json={"food": {"source": "fax"}})
    assert response.status_code == 422


def test_normalize_with_portion(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/normalize",
        params={"grams": 50},
        json={"perServing": {"calories": 190, "sugars": 12}, "servingGrams": 40},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["basis"] == "perServing"
    assert body["serving_grams"] == 40
    assert body["per_gram"]["calories"] == pytest.approx(4.75)
    assert body["portion"]["calories"] == 238
    assert body["portion"]["sugar_g"] == 15.0


def test_enrich_returns_provider_result(
    container, nutrition_vault: InMemoryNutritionVault
) -> None:
    with TestClient(create_app(container)) as client:
        response = client.post("/enrich", json={"query": "rolled oats"})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "FDC"
    assert body["per100g"]["calories"] == 379
    assert ("FDC", "173904") in nutrition_vault.rows


def test_enrich_returns_404_when_unresolved(
    container, enrichment_client: FakeEnrichmentClient
) -> None:
    enrichment_client.payload = None
    client = TestClient(create_app(container))

    response = client.post("/enrich", json={"query": "lasagna"})

    assert response.status_code == 404


def test_enrich_generic_candidate(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/enrich",
        json={
            "query": "pizza",
            "candidate": {"name": "Pizza", "slug": "pizza_slice", "is_generic": True},
        },
    )

    assert response.status_code == 200
    assert response.json()["source"] == "GENERIC"


def test_create_food_log(
    container, food_log_repository: InMemoryFoodLogRepository
) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()

    response = client.post(
        "/food-logs",
        json={
            "user_id": str(user_id),
            "item": {
                "name": "Apple",
                "grams": 182,
                "source": "photo",
                "nutrition": {"per100g": {"calories": 52, "sugar": 10.4}},
            },
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Apple"
    assert body["curve"] == "whole_food"
    assert body["nutrients"]["calories"] == 95
    row = next(iter(food_log_repository.rows.values()))
    assert row["user_id"] == user_id
    assert row["health_score_v2"] == body["score"]


def test_create_barcode_food_log(
    container, food_log_repository: InMemoryFoodLogRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/food-logs/barcode",
        json={
            "user_id": str(uuid4()),
            "barcode": "3017620422003",
            "product": {
                "product": {
                    "product_name": "Choco Bar",
                    "serving_size": "40 g",
                    "ingredients_text_en": "sugar, cocoa butter, milk",
                    "nutriments": {"energy_100g": 2092, "sugars_100g": 55},
                    "additives_tags": ["en:e322"],
                    "allergens_tags": ["en:milk"],
                }
            },
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Choco Bar"
    assert body["grams"] == 40
    assert body["kind"] == "packaged"
    assert body["nutrients"]["calories"] == 200
    assert body["score"] == 45
    row = next(iter(food_log_repository.rows.values()))
    assert row["nutrition_json"]["upc"] == "3017620422003"
    assert row["nutrition_json"]["additives"] == ["e322"]
    assert row["nutrition_json"]["allergens"] == ["milk"]


def test_barcode_food_log_uses_requested_grams(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/food-logs/barcode",
        json={
            "user_id": str(uuid4()),
            "barcode": "111",
            "grams": 20,
            "product": {"product_name": "Crackers", "nutriments": {}},
        },
    )

    assert response.status_code == 201
    assert response.json()["grams"] == 20
