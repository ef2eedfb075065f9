"""Tests for item normalization and response parsing."""

import json
import math

import pytest

from nutrition_advisor.domain.errors import ModelResponseInvalid
from nutrition_advisor.domain.nutrition import NUTRIENT_FIELDS
from nutrition_advisor.services.languages import get_language
from nutrition_advisor.services.normalization import (
    UNKNOWN_MEAL,
    ItemNormalizer,
    ResponseParser,
)
from tests.conftest import RICE_BOWL


@pytest.fixture
def normalizer() -> ItemNormalizer:
    return ItemNormalizer.for_language(get_language("en"))


@pytest.fixture
def parser(normalizer: ItemNormalizer) -> ResponseParser:
    return ResponseParser(normalizer)


def test_normalize_full_item(normalizer: ItemNormalizer) -> None:
    item = normalizer.normalize(RICE_BOWL)

    assert item.food_name == "Rice bowl"
    assert item.calories == 520
    assert item.sodium_mg == 640
    assert item.top_benefits == ["Energy"]
    assert item.dietary_advice == "Add some greens."
    assert item.is_non_food is False
    assert item.source == "image"


def test_normalize_defaults_for_garbage(normalizer: ItemNormalizer) -> None:
    item = normalizer.normalize("not a mapping")

    assert item.food_name == UNKNOWN_MEAL
    assert item.calories == 0.0
    assert item.top_benefits == []
    assert item.dietary_advice == ""


def test_normalize_uses_food_item_and_nested_nutrients(
    normalizer: ItemNormalizer,
) -> None:
    item = normalizer.normalize(
        {
            "food_item": "Apple",
            "protein_g": "1g",
            "nutrients": {"calories": 95, "protein": 9, "carbs": "25", "fat": 0.3},
        }
    )

    assert item.food_name == "Apple"
    assert item.calories == 95
    assert item.protein_g == 1.0
    assert item.carbs_g == 25.0
    assert item.fat_g == 0.3


def test_non_food_overrides_advice(normalizer: ItemNormalizer) -> None:
    item = normalizer.normalize(
        {"food_name": "Not food: a keyboard", "dietary_advice": "Eat it slowly."}
    )

    assert item.is_non_food is True
    assert item.dietary_advice == "No food detected. Please retake the photo."


def test_chinese_keywords_detect_non_food() -> None:
    normalizer = ItemNormalizer.for_language(get_language("zh"))

    assert normalizer.normalize({"food_name": "这不是食物"}).is_non_food is True
    assert normalizer.normalize({"food_name": "no food here"}).is_non_food is True


def test_source_argument_wins_over_payload(normalizer: ItemNormalizer) -> None:
    assert normalizer.normalize({"source": "text"}).source == "text"
    assert normalizer.normalize({"source": "TEXT"}).source == "image"
    assert normalizer.normalize({"source": "text"}, source="image").source == "image"


def test_parse_item_marks_image_source(parser: ResponseParser) -> None:
    item = parser.parse_item(json.dumps({**RICE_BOWL, "source": "text"}))

    assert item.source == "image"


def test_parse_items_accepts_items_list_and_object(parser: ResponseParser) -> None:
    wrapped = parser.parse_items(
        json.dumps({"items": [{"food_name": "Egg"}, {"food_name": "Banana"}]})
    )
    bare_list = parser.parse_items(json.dumps([{"food_name": "Egg"}]))
    single = parser.parse_items(json.dumps({"food_name": "Toast"}))

    assert [item.food_name for item in wrapped] == ["Egg", "Banana"]
    assert all(item.source == "text" for item in wrapped)
    assert [item.food_name for item in bare_list] == ["Egg"]
    assert [item.food_name for item in single] == ["Toast"]


def test_parse_empty_content_yields_defaults(parser: ResponseParser) -> None:
    assert parser.parse_item("").food_name == UNKNOWN_MEAL
    assert parser.parse_advice(None).advice == ""


def test_parse_invalid_json_raises(parser: ResponseParser) -> None:
    with pytest.raises(ModelResponseInvalid):
        parser.parse_item("not json")
    with pytest.raises(ModelResponseInvalid):
        parser.parse_weekly("{broken")


def test_parse_advice_normalizes_text(parser: ResponseParser) -> None:
    advice = parser.parse_advice(json.dumps({"advice": "• Eat   more greens"}))

    assert advice.advice == "- Eat more greens"


def test_parse_weekly_drops_empty_highlights(parser: ResponseParser) -> None:
    summary, highlights = parser.parse_weekly(
        json.dumps(
            {"summary": "Good week.", "highlights": ["Hit protein", "", "\ufffd"]}
        )
    )

    assert summary == "Good week."
    assert highlights == ["Hit protein"]


@pytest.mark.parametrize(
    "raw",
    [
        {},
        None,
        [1, 2],
        {"calories": "n/a", "protein_g": float("nan"), "fat_g": [], "fiber_g": True},
        {"nutrients": "broken", "top_benefits": 5, "health_warnings": None},
    ],
)
def test_normalize_is_total(normalizer: ItemNormalizer, raw: object) -> None:
    item = normalizer.normalize(raw)

    for name in NUTRIENT_FIELDS:
        value = getattr(item, name)
        assert isinstance(value, int | float)
        assert math.isfinite(value)
    assert isinstance(item.top_benefits, list)
    assert isinstance(item.health_warnings, list)
    assert item.food_name
