"""Normalization of raw provider output into canonical nutrition records."""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from nutrition_advisor.domain.errors import ModelResponseInvalid
from nutrition_advisor.domain.nutrition import (
    SOURCE_IMAGE,
    SOURCE_TEXT,
    DailyAdvice,
    NutritionItem,
)
from nutrition_advisor.services.advice_text import normalize_advice
from nutrition_advisor.services.coercion import (
    to_number,
    to_string_array,
    to_trimmed_string,
)
from nutrition_advisor.services.languages import LanguagePack, get_language

UNKNOWN_MEAL = "Unknown meal"

# Flat field -> key inside the older nested "nutrients" object.
_NESTED_FALLBACKS = {
    "calories": "calories",
    "protein_g": "protein",
    "carbs_g": "carbs",
    "fat_g": "fat",
}
_FLAT_ONLY = ("sugar_g", "sodium_mg", "fiber_g")


@dataclass(frozen=True)
class NonFoodDetector:
    """Keyword matcher for model answers that found no food."""

    keywords: tuple[str, ...]

    def is_non_food(self, name: object) -> bool:
        """Return True when name contains a non-food keyword."""
        if not name:
            return False
        normalized = str(name).lower()
        return any(keyword in normalized for keyword in self.keywords)


@dataclass(frozen=True)
class ItemNormalizer:
    """Maps an arbitrary provider object to a NutritionItem."""

    detector: NonFoodDetector
    non_food_message: str

    @classmethod
    def for_language(cls, language: LanguagePack) -> "ItemNormalizer":
        return cls(
            detector=NonFoodDetector(language.all_non_food_keywords),
            non_food_message=language.non_food_message,
        )

    def normalize(self, raw: object, source: str | None = None) -> NutritionItem:
        """Normalize one item. Malformed fields fall back to defaults."""
        data: Mapping[str, object] = raw if isinstance(raw, Mapping) else {}
        nested = data.get("nutrients")
        nutrients: Mapping[str, object] = nested if isinstance(nested, Mapping) else {}

        food_name = to_trimmed_string(
            data.get("food_name") or data.get("food_item"), UNKNOWN_MEAL
        )
        if not food_name:
            food_name = UNKNOWN_MEAL
        is_non_food = self.detector.is_non_food(food_name)

        numbers: dict[str, float] = {}
        for name, nested_key in _NESTED_FALLBACKS.items():
            value = data.get(name)
            if value is None:
                value = nutrients.get(nested_key)
            numbers[name] = to_number(value, 0.0)
        for name in _FLAT_ONLY:
            numbers[name] = to_number(data.get(name), 0.0)

        if is_non_food:
            advice = self.non_food_message
        else:
            advice = normalize_advice(to_trimmed_string(data.get("dietary_advice")))

        return NutritionItem(
            food_name=food_name,
            is_non_food=is_non_food,
            top_benefits=to_string_array(data.get("top_benefits")),
            health_warnings=to_string_array(data.get("health_warnings")),
            dietary_advice=advice,
            source=_resolve_source(data.get("source") if source is None else source),
            **numbers,
        )

    def normalize_many(
        self, raw_items: Iterable[object], source: str | None = None
    ) -> list[NutritionItem]:
        return [self.normalize(raw, source=source) for raw in raw_items]


@dataclass(frozen=True)
class ResponseParser:
    """Parsers for the four kinds of model answers."""

    normalizer: ItemNormalizer

    @classmethod
    def for_language(cls, code: str | None) -> "ResponseParser":
        return cls(ItemNormalizer.for_language(get_language(code)))

    def parse_item(self, content: str | None) -> NutritionItem:
        """Parse a single-item image analysis answer."""
        return self.normalizer.normalize(_load_json(content), source=SOURCE_IMAGE)

    def parse_items(self, content: str | None) -> list[NutritionItem]:
        """Parse a text analysis answer into one item per food."""
        parsed = _load_json(content)
        if isinstance(parsed, Mapping) and isinstance(parsed.get("items"), list):
            raw_items = parsed["items"]
        elif isinstance(parsed, list):
            raw_items = parsed
        else:
            raw_items = [parsed]
        return self.normalizer.normalize_many(raw_items, source=SOURCE_TEXT)

    def parse_advice(self, content: str | None) -> DailyAdvice:
        parsed = _load_json(content)
        return DailyAdvice(advice=normalize_advice(_field_text(parsed, "advice")))

    def parse_weekly(self, content: str | None) -> tuple[str, list[str]]:
        """Return the normalized summary and highlight list of a weekly report."""
        parsed = _load_json(content)
        summary = normalize_advice(_field_text(parsed, "summary"))
        raw = parsed.get("highlights") if isinstance(parsed, Mapping) else None
        highlights = [normalize_advice(item) for item in to_string_array(raw)]
        return summary, [item for item in highlights if item]


def _load_json(content: str | None) -> object:
    try:
        return json.loads(content or "{}")
    except (TypeError, ValueError) as exc:
        raise ModelResponseInvalid() from exc


def _field_text(parsed: object, key: str) -> str:
    if not isinstance(parsed, Mapping):
        return ""
    return to_trimmed_string(parsed.get(key), "")


def _resolve_source(value: object) -> str:
    return SOURCE_TEXT if value == SOURCE_TEXT else SOURCE_IMAGE
