"""Shared test fixtures."""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from food_scoring.adapters.fdc_client import DEFAULT_DATA_TYPES, FdcClient
from food_scoring.config import Settings
from food_scoring.containers import AppContainer
from food_scoring.domain.classification import (
    FoodClassificationInput,
    FoodSource,
    ScoreContext,
)
from food_scoring.domain.enrichment import EnrichedFood
from food_scoring.domain.nutrients import NutrientProfile
from food_scoring.services.enrichment import (
    EnrichmentClient,
    EnrichmentResolver,
    NutritionVault,
)
from food_scoring.services.food_log import FoodLogRepository, FoodLogService
from food_scoring.services.scoring import HealthScoreService


def make_context(  # noqa: PLR0913
    name: str = "",
    source: FoodSource = FoodSource.MANUAL,
    generic_slug: str | None = None,
    upc: str | None = None,
    ingredients: str | None = None,
    categories: tuple[str, ...] = (),
    **nutrients: float,
) -> ScoreContext:
    """Build a score context from keyword nutrient values."""
    return ScoreContext(
        food=FoodClassificationInput(
            source=source,
            name=name,
            generic_slug=generic_slug,
            upc=upc,
            ingredients=ingredients,
            categories=categories,
        ),
        nutrients=NutrientProfile(**nutrients),
    )


@dataclass
class FakeEnrichmentClient(EnrichmentClient):
    """Fake enrichment provider returning a fixed payload."""

    payload: dict[str, object] | None = field(
        default_factory=lambda: {
            "name": "Rolled oats",
            "aliases": ["oats"],
            "per100g": {
                "calories": 379,
                "protein": 13.2,
                "carbs": 67.7,
                "fat": 6.5,
                "fiber": 10.1,
                "sugar": 1.0,
                "sodium": 6,
            },
            "serving_grams": 40,
            "source": "FDC",
            "source_id": "173904",
            "confidence": 0.85,
        }
    )
    error: Exception | None = None
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def enrich(self, query: str, locale: str) -> dict[str, object] | None:
        self.calls.append((query, locale))
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class InMemoryNutritionVault(NutritionVault):
    """In-memory nutrition vault for tests."""

    rows: dict[tuple[str, str], EnrichedFood] = field(default_factory=dict)
    error: Exception | None = None

    def save(self, provider: str, reference: str, food: EnrichedFood) -> None:
        if self.error is not None:
            raise self.error
        self.rows[(provider, reference)] = food


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def create_food_log(self, user_id: UUID, row: dict[str, object]) -> UUID:
        entry_id = uuid4()
        self.rows[entry_id] = {"user_id": user_id, **row}
        return entry_id


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with an in-memory search response."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171077,
                    "description": "Chicken, broiler, breast, meat only, cooked",
                    "dataType": "SR Legacy",
                    "foodNutrients": [
                        {"nutrientId": 1008, "value": 165},
                        {"nutrientId": 1003, "value": 31.0},
                        {"nutrientId": 1004, "value": 3.57},
                        {"nutrientId": 1005, "value": 0},
                        {"nutrientNumber": "307", "value": 74},
                    ],
                }
            ]
        }
    )
    queries: list[str] = field(default_factory=list)
    failures: int = 0

    async def search_foods(
        self,
        query: str,
        page_size: int = 5,
        data_types: tuple[str, ...] = DEFAULT_DATA_TYPES,
    ) -> dict[str, object]:
        self.queries.append(query)
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("FDC unavailable")
        return self.search_payload


class RecordingHandler(logging.Handler):
    """Collects log records emitted on a single logger."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def record_logs() -> Iterator[Callable[..., RecordingHandler]]:
    """Attach recording handlers to loggers for the duration of a test."""
    attached: list[tuple[logging.Logger, RecordingHandler, int]] = []

    def _attach(name: str, level: int = logging.INFO) -> RecordingHandler:
        logger = logging.getLogger(name)
        handler = RecordingHandler()
        attached.append((logger, handler, logger.level))
        logger.addHandler(handler)
        logger.setLevel(level)
        return handler

    yield _attach
    for logger, handler, level in reversed(attached):
        logger.removeHandler(handler)
        logger.setLevel(level)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        fdc_api_key="fdc-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def enrichment_client() -> FakeEnrichmentClient:
    return FakeEnrichmentClient()


@pytest.fixture
def nutrition_vault() -> InMemoryNutritionVault:
    return InMemoryNutritionVault()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    enrichment_client: FakeEnrichmentClient,
    nutrition_vault: InMemoryNutritionVault,
    food_log_repository: InMemoryFoodLogRepository,
) -> AppContainer:
    scoring_service = HealthScoreService(settings.scoring_flags())
    enrichment_resolver = EnrichmentResolver(
        client=enrichment_client,
        vault=nutrition_vault,
        write_through=True,
    )
    food_log_service = FoodLogService(
        scoring=scoring_service,
        repository=food_log_repository,
        save_split=True,
    )

    async def close_resources() -> None:
        await enrichment_resolver.drain()

    return AppContainer(
        settings=settings,
        scoring_service=scoring_service,
        enrichment_resolver=enrichment_resolver,
        food_log_service=food_log_service,
        close_resources=close_resources,
    )
