"""OpenAI Responses API client for nutrition enrichment."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from food_scoring.services.enrichment import EnrichmentClient

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}
_NUTRIENTS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "fiber": _NULLABLE_NUMBER,
        "sugar": _NULLABLE_NUMBER,
        "sodium": _NULLABLE_NUMBER,
        "saturated_fat": _NULLABLE_NUMBER,
    },
    "required": [
        "calories",
        "protein",
        "carbs",
        "fat",
        "fiber",
        "sugar",
        "sodium",
        "saturated_fat",
    ],
    "additionalProperties": False,
}

ENRICHMENT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "aliases": {"type": "array", "items": {"type": "string"}},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "grams": _NULLABLE_NUMBER,
                },
                "required": ["name", "grams"],
                "additionalProperties": False,
            },
        },
        "per100g": _NUTRIENTS_SCHEMA,
        "serving_grams": {
            "anyOf": [{"type": "number", "exclusiveMinimum": 0}, {"type": "null"}]
        },
        "source": {"type": "string", "enum": ["CURATED", "ESTIMATED"]},
        "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
    },
    "required": [
        "name",
        "aliases",
        "ingredients",
        "per100g",
        "serving_grams",
        "source",
        "confidence",
    ],
    "additionalProperties": False,
}


@dataclass
class OpenAIEnrichmentClient(EnrichmentClient):
    """Enrichment client that asks an LLM for a structured nutrition profile."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None

    @classmethod
    def create(
        cls, api_key: str, model: str, reasoning_effort: str | None = None
    ) -> "OpenAIEnrichmentClient":
        """Create an OpenAI enrichment client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
        )

    async def enrich(self, query: str, locale: str) -> dict[str, object] | None:
        """Call the Responses API with structured outputs."""
        prompt = (
            "Estimate the nutrition of the food described below. "
            "Return per-100g values (sodium in mg), a typical serving size in "
            "grams, the main ingredients, and your confidence (0-1). "
            f"Locale: {locale}. Food: {query}"
        )
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {"role": "user", "content": [{"type": "input_text", "text": prompt}]}
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "enriched_food",
                    "strict": True,
                    "schema": ENRICHMENT_SCHEMA,
                }
            },
            "store": False,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        payload = json.loads(output_text)
        payload["locale"] = locale
        return payload

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()
