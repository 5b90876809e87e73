"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_scoring.domain.classification import FoodSource
from food_scoring.domain.scoring import ScoringFlags

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    fdc_api_key: str = "DEMO_KEY"
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_timeout_seconds: float = 15.0
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    health_score_v2: bool = True
    vite_health_score_v2: bool | None = None
    nv_write_through: bool = False
    save_split: bool = False
    enrichment_enabled: bool = True
    enrichment_provider: str = "fdc"
    enrichment_locale: str = "auto"
    generic_override_sources: str = "photo_item"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def scoring_flags(self) -> ScoringFlags:
        """Build the scoring toggles passed into the score orchestrator."""
        v2 = (
            self.vite_health_score_v2
            if self.vite_health_score_v2 is not None
            else self.health_score_v2
        )
        return ScoringFlags(
            health_score_v2=v2,
            generic_override_sources=parse_override_sources(
                self.generic_override_sources
            ),
        )


def parse_override_sources(raw: str | None) -> frozenset[FoodSource]:
    """Parse the comma-separated sources allowed to use the generic override."""
    if raw is None:
        return frozenset({FoodSource.PHOTO_ITEM})
    sources: set[FoodSource] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if not value:
            continue
        if value == "*":
            return frozenset(FoodSource)
        for source in FoodSource:
            if source.value == value:
                sources.add(source)
    return frozenset(sources)
