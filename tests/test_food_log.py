"""Tests for the food log service."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from food_scoring.domain.classification import FoodSource
from food_scoring.domain.food_items import LoggableFoodItem
from food_scoring.domain.nutrients import (
    NormalizedNutrients,
    NutrientBasis,
    NutrientProfile,
)
from food_scoring.domain.scoring import ScoreCurve, ScoringFlags
from food_scoring.services.food_log import FoodLogService
from food_scoring.services.scoring import HealthScoreService
from tests.conftest import InMemoryFoodLogRepository


def _granola_bar() -> LoggableFoodItem:
    return LoggableFoodItem(
        id="bar-1",
        name="Granola bar",
        grams=40,
        nutrients=NormalizedNutrients(
            basis=NutrientBasis.PER_SERVING,
            per_gram=NutrientProfile(
                calories=4.75,
                protein_g=0.1,
                carbs_g=0.65,
                fat_g=0.175,
                fiber_g=0.1,
                sugar_g=0.3,
                sodium_mg=3.75,
            ),
            serving_grams=40,
        ),
        source=FoodSource.BARCODE,
        upc="0123456789",
        ingredients=["oats", "honey"],
    )


def test_preview_scores_portion_nutrients() -> None:
    service = FoodLogService(
        scoring=HealthScoreService(), repository=InMemoryFoodLogRepository()
    )

    portion, result = service.preview(_granola_bar())

    assert portion.calories == 190
    assert portion.sugar_g == 12.0
    assert portion.fiber_g == 4.0
    assert portion.saturated_fat_g is None
    assert result.curve == ScoreCurve.PACKAGED
    assert result.score == 64


def test_log_item_writes_legacy_row() -> None:
    repository = InMemoryFoodLogRepository()
    service = FoodLogService(scoring=HealthScoreService(), repository=repository)
    user_id = uuid4()

    entry = service.log_item(user_id, _granola_bar())

    row = repository.rows[entry.id]
    assert row["user_id"] == user_id
    assert row["food_name"] == "Granola bar"
    assert row["calories"] == 190
    assert row["sodium"] == 150.0
    assert row["health_score"] == 6.4
    assert row["source"] == "barcode"
    assert "health_score_v2" not in row
    assert "nutrition_json" not in row
    assert entry.score.score == 64


def test_log_item_writes_split_row() -> None:
    repository = InMemoryFoodLogRepository()
    service = FoodLogService(
        scoring=HealthScoreService(), repository=repository, save_split=True
    )

    entry = service.log_item(uuid4(), _granola_bar())

    row = repository.rows[entry.id]
    assert row["health_score_v2"] == 64
    assert row["food_kind"] == "packaged"
    assert row["score_curve"] == "packaged"
    assert row["saturated_fat"] == 0.0
    assert "health_score" not in row
    blob = row["nutrition_json"]
    assert blob["basis"] == "perServing"
    assert blob["serving_grams"] == 40
    assert blob["upc"] == "0123456789"
    assert blob["additives"] == []
    assert blob["per_gram"]["sugar_g"] == pytest.approx(0.3)


def test_legacy_flag_row_keeps_ten_point_score() -> None:
    service = FoodLogService(
        scoring=HealthScoreService(ScoringFlags(health_score_v2=False)),
        repository=InMemoryFoodLogRepository(),
    )
    item = _granola_bar()
    portion, result = service.preview(item)

    row = service.build_row(
        item, portion, result, logged_at=datetime(2024, 5, 1, tzinfo=UTC)
    )

    assert result.curve == ScoreCurve.LEGACY
    assert row["health_score"] == result.score_ten
    assert row["logged_at"] == "2024-05-01T00:00:00+00:00"
