"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_scoring.adapters.fdc_client import HttpxFdcClient
from food_scoring.adapters.fdc_enrichment_client import FdcEnrichmentClient
from food_scoring.adapters.openai_enrichment_client import OpenAIEnrichmentClient
from food_scoring.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from food_scoring.adapters.supabase_nutrition_vault import SupabaseNutritionVault
from food_scoring.config import Settings
from food_scoring.services.cache import InMemoryCache
from food_scoring.services.enrichment import EnrichmentClient, EnrichmentResolver
from food_scoring.services.food_log import FoodLogService
from food_scoring.services.scoring import HealthScoreService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    scoring_service: HealthScoreService
    enrichment_resolver: EnrichmentResolver
    food_log_service: FoodLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    enrichment_client: EnrichmentClient
    close_client: Callable[[], Awaitable[None]]
    if (
        resolved_settings.enrichment_provider == "openai"
        and resolved_settings.openai_api_key
    ):
        openai_client = OpenAIEnrichmentClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
        )
        enrichment_client = openai_client
        close_client = openai_client.close
    else:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
            timeout_seconds=resolved_settings.fdc_timeout_seconds,
        )
        enrichment_client = FdcEnrichmentClient(
            fdc_client=fdc_client, cache=InMemoryCache()
        )
        close_client = fdc_client.close
    enrichment_resolver = EnrichmentResolver(
        client=enrichment_client,
        vault=SupabaseNutritionVault(supabase_client),
        enrichment_enabled=resolved_settings.enrichment_enabled,
        write_through=resolved_settings.nv_write_through,
        locale=resolved_settings.enrichment_locale,
        debug=resolved_settings.debug,
    )
    scoring_service = HealthScoreService(resolved_settings.scoring_flags())
    food_log_service = FoodLogService(
        scoring=scoring_service,
        repository=SupabaseFoodLogRepository(supabase_client),
        save_split=resolved_settings.save_split,
    )

    async def close_resources() -> None:
        await enrichment_resolver.drain()
        await close_client()

    return AppContainer(
        settings=resolved_settings,
        scoring_service=scoring_service,
        enrichment_resolver=enrichment_resolver,
        food_log_service=food_log_service,
        close_resources=close_resources,
    )
