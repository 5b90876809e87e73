"""Tests for settings and feature flags."""

import pytest

from food_scoring.config import Settings, parse_override_sources
from food_scoring.domain.classification import FoodSource


def _settings(**overrides) -> Settings:  # type: ignore[no-untyped-def]
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        **overrides,
    )


def test_scoring_flags_defaults() -> None:
    flags = _settings().scoring_flags()

    assert flags.health_score_v2 is True
    assert flags.generic_override_sources == frozenset({FoodSource.PHOTO_ITEM})


def test_vite_flag_overrides_health_score_v2() -> None:
    flags = _settings(health_score_v2=True, vite_health_score_v2=False).scoring_flags()
    assert flags.health_score_v2 is False


def test_flags_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEALTH_SCORE_V2", "false")
    monkeypatch.setenv("SAVE_SPLIT", "true")

    settings = _settings()

    assert settings.scoring_flags().health_score_v2 is False
    assert settings.save_split is True


def test_parse_override_sources() -> None:
    assert parse_override_sources(None) == frozenset({FoodSource.PHOTO_ITEM})
    assert parse_override_sources("photo_item, VOICE,unknown,") == frozenset(
        {FoodSource.PHOTO_ITEM, FoodSource.VOICE}
    )
    assert parse_override_sources("*") == frozenset(FoodSource)
    assert parse_override_sources("") == frozenset()
