"""Enrichment provider backed by USDA FoodData Central search."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from food_scoring.adapters.fdc_client import FdcClient
from food_scoring.domain.enrichment import EnrichmentSource
from food_scoring.services.cache import Cache
from food_scoring.services.enrichment import EnrichmentClient

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

FDC_CONFIDENCE = 0.85

# FDC nutrient ids and legacy nutrient numbers mapped to provider keys.
_NUTRIENT_IDS = {
    1008: "calories",
    1003: "protein",
    1004: "fat",
    1005: "carbs",
    1079: "fiber",
    2000: "sugar",
    1093: "sodium",
    1258: "saturated_fat",
}
_NUTRIENT_NUMBERS = {
    "208": "calories",
    "203": "protein",
    "204": "fat",
    "205": "carbs",
    "291": "fiber",
    "269": "sugar",
    "307": "sodium",
    "606": "saturated_fat",
}

_logger = logging.getLogger(__name__)


@dataclass
class FdcEnrichmentClient(EnrichmentClient):
    """Resolves the best FDC search hit into an enriched food payload."""

    fdc_client: FdcClient
    cache: Cache
    ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def enrich(self, query: str, locale: str) -> dict[str, object] | None:
        """Search FDC and convert the top hit, caching by query."""
        cache_key = f"fdc:enrich:{query.strip().lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query), action="search"
        )
        foods = payload.get("foods") or []
        if not foods:
            return None
        result = _to_enriched_payload(foods[0], query, locale)
        self.cache.set(cache_key, result, ttl_seconds=self.ttl_seconds)
        return result

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _to_enriched_payload(
    food: dict[str, object], query: str, locale: str
) -> dict[str, object]:
    description = str(food.get("description") or query)
    per100g: dict[str, float] = {
        "calories": 0.0,
        "protein": 0.0,
        "fat": 0.0,
        "carbs": 0.0,
    }
    for nutrient in food.get("foodNutrients") or []:
        key = _NUTRIENT_IDS.get(nutrient.get("nutrientId")) or _NUTRIENT_NUMBERS.get(
            str(nutrient.get("nutrientNumber"))
        )
        amount = nutrient.get("value", nutrient.get("amount"))
        if key and isinstance(amount, int | float):
            per100g[key] = float(amount)

    aliases = [
        str(value)
        for value in (food.get("description"), food.get("brandName"))
        if value
    ]
    fdc_id = food.get("fdcId")
    return {
        "name": description,
        "aliases": aliases,
        "locale": locale,
        "ingredients": [{"name": description}],
        "per100g": per100g,
        "source": EnrichmentSource.FDC.value,
        "source_id": str(fdc_id) if fdc_id is not None else None,
        "confidence": FDC_CONFIDENCE,
    }


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
