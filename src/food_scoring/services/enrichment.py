"""Nutrition enrichment with generic, external, and estimated fallbacks."""

import asyncio
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from food_scoring.domain.enrichment import (
    PAID_SOURCES,
    EnrichedFood,
    EnrichmentSource,
    GenericCandidate,
    Ingredient,
    Nutrients,
)
from food_scoring.domain.nutrients import NutrientProfile
from food_scoring.services.canonical import (
    canonical_food,
    canonical_key_for,
    estimate_per_gram_for_class,
    find_generic_food,
    find_whole_food_per100g,
)
from food_scoring.services.normalizer import round_half_up

GENERIC_CONFIDENCE = 0.8
ESTIMATED_CONFIDENCE = 0.7
CLASS_ESTIMATE_CONFIDENCE = 0.4
DEFAULT_ESTIMATE_GRAMS = 100.0
ENERGY_TOLERANCE = 0.08

_logger = logging.getLogger(__name__)


class EnrichmentClient(Protocol):
    """Interface for external nutrition enrichment providers."""

    async def enrich(self, query: str, locale: str) -> dict[str, object] | None:
        """Return an enriched food payload for a query, if any."""


class NutritionVault(Protocol):
    """Shared cache of paid-provider enrichment results."""

    def save(self, provider: str, reference: str, food: EnrichedFood) -> None:
        """Store an enrichment result keyed by provider and reference."""


@dataclass
class EnrichmentResolver:
    """Resolves standardized nutrient profiles for food queries."""

    client: EnrichmentClient | None = None
    vault: NutritionVault | None = None
    enrichment_enabled: bool = True
    write_through: bool = False
    locale: str = "auto"
    debug: bool = False
    _pending: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    async def enrich(
        self, query: str, candidate: GenericCandidate | None = None
    ) -> EnrichedFood | None:
        """Resolve a food from a generic candidate or the external provider."""
        if candidate is not None and _is_generic(candidate):
            generic = self.from_generic(candidate)
            if generic is not None:
                return generic

        if not self.enrichment_enabled or self.client is None:
            return None

        try:
            payload = await self.client.enrich(query, self.locale)
        except Exception as exc:
            _logger.warning("Enrichment failed: query=%s error=%s", query, exc)
            return None
        if not payload:
            if self.debug:
                _logger.info("Enrichment miss: query=%s", query)
            return None
        try:
            food = EnrichedFood.model_validate(payload)
        except ValidationError as exc:
            _logger.warning("Enrichment returned invalid data: query=%s %s", query, exc)
            return None

        food = food.model_copy(update={"per100g": check_energy(food.per100g)})
        if self.debug:
            _logger.info(
                "Enrichment hit: query=%s source=%s confidence=%s",
                query,
                food.source,
                food.confidence,
            )
        self._schedule_write_through(query, food)
        return food

    async def resolve_with_fallbacks(
        self,
        query: str,
        candidate: GenericCandidate | None = None,
        grams: float | None = None,
    ) -> EnrichedFood | None:
        """Resolve a food, falling back to whole-food and class estimates."""
        food = await self.enrich(query, candidate)
        if food is not None:
            return self.fill_missing_per100g(food)
        estimate = self.estimate_whole_food(query, grams)
        if estimate is None and candidate is not None and candidate.class_id:
            estimate = self.estimate_for_class(query, candidate.class_id, grams)
        return estimate

    def from_generic(self, candidate: GenericCandidate) -> EnrichedFood | None:
        """Build an enriched food from the curated generic table."""
        key = canonical_key_for(
            title=candidate.name,
            canonical_key=candidate.canonical_key,
            class_id=candidate.class_id,
        )
        canonical = canonical_food(key)
        match = find_generic_food(candidate.slug or candidate.canonical_key)
        if match is None:
            match = find_generic_food(candidate.name)

        if match is not None:
            slug, generic = match
            canonical = canonical_food(generic.canonical_key) or canonical
            per100g = generic.per100g
            serving_grams: float | None = generic.serving_grams
            aliases = list(generic.aliases)
            name = generic.name
        elif canonical is not None:
            slug = str(key)
            per100g = canonical.per_gram.scaled(100)
            serving_grams = None
            aliases = []
            name = candidate.name
        else:
            return None

        if self.debug:
            _logger.info("Enrichment generic hit: slug=%s key=%s", slug, key)
        return EnrichedFood(
            name=name,
            aliases=aliases,
            locale=self.locale,
            ingredients=[
                Ingredient(name=item)
                for item in (canonical.ingredients if canonical else ())
            ],
            per100g=Nutrients.from_profile(per100g),
            per_serving=(
                Nutrients.from_profile(per100g.scaled(serving_grams / 100))
                if serving_grams
                else None
            ),
            serving_grams=serving_grams,
            source=EnrichmentSource.GENERIC,
            source_id=slug,
            confidence=GENERIC_CONFIDENCE,
        )

    def estimate_whole_food(
        self, name: str, grams: float | None = None
    ) -> EnrichedFood | None:
        """Estimate nutrition for a recognized whole food by name."""
        match = find_whole_food_per100g(name)
        if match is None:
            return None
        key, per100g = match
        portion = grams if grams and grams > 0 else DEFAULT_ESTIMATE_GRAMS
        if self.debug:
            _logger.info(
                "Enrichment estimate: name=%s match=%s grams=%s", name, key, portion
            )
        return EnrichedFood(
            name=name,
            aliases=[key],
            locale=self.locale,
            ingredients=[Ingredient(name=key, grams=portion)],
            per100g=Nutrients.from_profile(per100g),
            per_serving=Nutrients.from_profile(per100g.scaled(portion / 100)),
            serving_grams=portion,
            source=EnrichmentSource.ESTIMATED,
            confidence=ESTIMATED_CONFIDENCE,
        )

    def estimate_for_class(
        self, name: str, class_id: str, grams: float | None = None
    ) -> EnrichedFood:
        """Estimate nutrition from per-gram heuristics for a detected food class."""
        per100g = estimate_per_gram_for_class(class_id).scaled(100)
        portion = grams if grams and grams > 0 else DEFAULT_ESTIMATE_GRAMS
        return EnrichedFood(
            name=name,
            locale=self.locale,
            per100g=Nutrients.from_profile(per100g),
            per_serving=Nutrients.from_profile(per100g.scaled(portion / 100)),
            serving_grams=portion,
            source=EnrichmentSource.ESTIMATED,
            source_id=class_id,
            confidence=CLASS_ESTIMATE_CONFIDENCE,
        )

    def fill_missing_per100g(self, food: EnrichedFood) -> EnrichedFood:
        """Fill missing per-100g values from the whole-food table when it matches."""
        match = find_whole_food_per100g(food.name)
        if match is None:
            return food
        _, fallback = match
        current = food.per100g.to_profile()
        has_macros = any(
            value for value in (current.protein_g, current.carbs_g, current.fat_g)
        )
        filled = NutrientProfile(
            calories=current.calories if has_macros else fallback.calories,
            protein_g=current.protein_g if has_macros else fallback.protein_g,
            carbs_g=current.carbs_g if has_macros else fallback.carbs_g,
            fat_g=current.fat_g if has_macros else fallback.fat_g,
            fiber_g=_first_known(current.fiber_g, fallback.fiber_g),
            sugar_g=_first_known(current.sugar_g, fallback.sugar_g),
            sodium_mg=_first_known(current.sodium_mg, fallback.sodium_mg),
            saturated_fat_g=_first_known(
                current.saturated_fat_g, fallback.saturated_fat_g
            ),
        )
        if filled == current:
            return food
        return food.model_copy(update={"per100g": Nutrients.from_profile(filled)})

    async def drain(self) -> None:
        """Wait for pending write-through tasks to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _schedule_write_through(self, query: str, food: EnrichedFood) -> None:
        if not self.write_through or self.vault is None:
            return
        if food.source not in PAID_SOURCES:
            return
        reference = food.source_id or _query_reference(query)
        task = asyncio.create_task(self._write_through(reference, food))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write_through(self, reference: str, food: EnrichedFood) -> None:
        try:
            await asyncio.to_thread(self.vault.save, str(food.source), reference, food)
        except Exception:
            _logger.exception(
                "Nutrition vault write failed: provider=%s ref=%s",
                food.source,
                reference,
            )


def check_energy(per100g: Nutrients) -> Nutrients:
    """Replace calories that disagree with macro energy by more than 8%."""
    calculated = per100g.protein * 4 + per100g.carbs * 4 + per100g.fat * 9
    if calculated <= 0:
        return per100g
    if abs(per100g.calories - calculated) / calculated > ENERGY_TOLERANCE:
        _logger.info(
            "Energy sanity check failed: calories=%s calculated=%s",
            per100g.calories,
            calculated,
        )
        return per100g.model_copy(update={"calories": round_half_up(calculated)})
    return per100g


def _is_generic(candidate: GenericCandidate) -> bool:
    if candidate.is_generic:
        return True
    return bool(
        candidate.canonical_key and candidate.canonical_key.startswith("generic_")
    )


def _query_reference(query: str) -> str:
    return hashlib.sha256(query.strip().lower().encode("utf-8")).hexdigest()


def _first_known(*values: float | None) -> float | None:
    for value in values:
        if value is not None:
            return value
    return None
