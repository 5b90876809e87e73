"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict, replace
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status

from food_scoring.api.models import (
    BarcodeLogRequest,
    EnrichRequest,
    FoodLogRequest,
    ScoreRequest,
)
from food_scoring.app_logging import configure_logging
from food_scoring.containers import AppContainer
from food_scoring.domain.classification import ScoreContext
from food_scoring.domain.food_log import FoodLogEntry
from food_scoring.domain.scoring import ScoreResult
from food_scoring.services.health_flags import compute_health_flags
from food_scoring.services.normalizer import (
    normalize_nutrients,
    normalize_off_product,
    scale_to_portion,
    to_food_item,
)
from food_scoring.services.scoring import score_to_stars


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/score")
    async def score(body: ScoreRequest, request: Request) -> dict[str, object]:
        """Classify and score a food item."""
        state_container: AppContainer = request.app.state.container
        food = body.food.to_domain()
        nutrients = body.nutrients.to_domain()
        result = state_container.scoring_service.score(
            ScoreContext(food=food, nutrients=nutrients)
        )
        flags = compute_health_flags(food.ingredients, nutrients)
        return {
            **_score_payload(result),
            "flags": [asdict(flag) for flag in flags],
        }

    @app.post("/normalize")
    async def normalize(
        payload: dict[str, Any], grams: float | None = None
    ) -> dict[str, object]:
        """Normalize a raw nutrition payload to a per-gram basis."""
        normalized = normalize_nutrients(payload)
        response: dict[str, object] = {
            "basis": str(normalized.basis),
            "serving_grams": normalized.serving_grams,
            "per_gram": normalized.per_gram.as_dict(),
        }
        if grams is not None and grams > 0:
            portion = scale_to_portion(normalized.per_gram, grams)
            response["portion"] = portion.as_dict()
        return response

    @app.post("/enrich")
    async def enrich(body: EnrichRequest, request: Request) -> dict[str, object]:
        """Resolve a nutrient profile for a food query."""
        state_container: AppContainer = request.app.state.container
        food = await state_container.enrichment_resolver.resolve_with_fallbacks(
            body.query, body.candidate, body.grams
        )
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Nutrition unavailable",
            )
        return food.model_dump(mode="json")

    @app.post("/food-logs", status_code=status.HTTP_201_CREATED)
    async def create_food_log(
        body: FoodLogRequest, request: Request
    ) -> dict[str, object]:
        """Normalize, score and persist a captured food item."""
        state_container: AppContainer = request.app.state.container
        item = to_food_item(body.item, 0)
        entry = state_container.food_log_service.log_item(body.user_id, item)
        logger.info("Food logged: id=%s name=%s", entry.id, entry.name)
        return _entry_payload(entry)

    @app.post("/food-logs/barcode", status_code=status.HTTP_201_CREATED)
    async def create_barcode_food_log(
        body: BarcodeLogRequest, request: Request
    ) -> dict[str, object]:
        """Normalize, score and persist an Open Food Facts product."""
        state_container: AppContainer = request.app.state.container
        item = normalize_off_product(body.product, barcode=body.barcode)
        if body.grams is not None:
            item = replace(item, grams=body.grams)
        entry = state_container.food_log_service.log_item(body.user_id, item)
        logger.info("Barcode food logged: id=%s barcode=%s", entry.id, body.barcode)
        return _entry_payload(entry)

    return app


def _score_payload(result: ScoreResult) -> dict[str, object]:
    return {
        "kind": str(result.kind),
        "curve": str(result.curve),
        "score": result.score,
        "score_ten": result.score_ten,
        "stars": score_to_stars(result.score),
    }


def _entry_payload(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "name": entry.name,
        "grams": entry.grams,
        "nutrients": entry.nutrients.as_dict(),
        **_score_payload(entry.score),
    }
