"""Supabase-backed shared nutrition vault."""

from dataclasses import dataclass

from supabase import Client

from food_scoring.domain.enrichment import EnrichedFood
from food_scoring.services.enrichment import NutritionVault


@dataclass
class SupabaseNutritionVault(NutritionVault):
    """Upserts paid-provider enrichment results keyed by provider and reference."""

    client: Client
    table_name: str = "nutrition_vault"

    def save(self, provider: str, reference: str, food: EnrichedFood) -> None:
        """Insert or refresh a vault row."""
        self.client.table(self.table_name).upsert(
            {
                "provider": provider,
                "provider_ref": reference,
                "name": food.name,
                "aliases": food.aliases,
                "locale": food.locale,
                "per100g": food.per100g.model_dump(),
                "per_serving": (
                    food.per_serving.model_dump() if food.per_serving else None
                ),
                "serving_grams": food.serving_grams,
                "confidence": food.confidence,
                "payload": food.model_dump(mode="json"),
            },
            on_conflict="provider,provider_ref",
        ).execute()
