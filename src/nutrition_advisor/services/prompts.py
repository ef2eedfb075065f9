"""Prompt templates for analysis, daily advice and weekly reports."""

import json
import math
from dataclasses import dataclass

from nutrition_advisor.domain.nutrition import DailySummary, WeeklyAdherence
from nutrition_advisor.domain.profile import UserProfile
from nutrition_advisor.services.coercion import to_number
from nutrition_advisor.services.languages import LanguagePack
from nutrition_advisor.services.stats import ADHERENCE_TOLERANCE

IMAGE_INSTRUCTION = "Return JSON following the rules."


@dataclass(frozen=True)
class ChatPrompt:
    """A prompt with an optional system turn and one user turn."""

    user: str
    system: str | None = None

    def flatten(self) -> str:
        """Join both turns for providers without a system role."""
        if not self.system:
            return self.user
        return f"{self.system}\n{self.user}"


def build_image_prompt(language: LanguagePack) -> ChatPrompt:
    return ChatPrompt(system=language.system_prompt, user=IMAGE_INSTRUCTION)


def build_text_prompt(language: LanguagePack, description: str) -> ChatPrompt:
    """Prompt for a free-text meal description, one item per food."""
    system = "\n".join([language.system_prompt, *language.text_notes])
    return ChatPrompt(system=system, user=f"User food description: {description}")


def build_advice_prompt(
    profile: UserProfile, summary: DailySummary, language: LanguagePack
) -> ChatPrompt:
    """Prompt for today's advice given the goal and today's intake."""
    goal = to_number(profile.daily_calorie_goal)
    calories = to_number(summary.calories)
    low, high = target_band(goal)
    lines = [
        "You are a nutritionist. Provide advice based on the user's goal "
        "and today's intake.",
        'Return strict JSON: {"advice":"..."}',
        f"User goal: {profile.target_type or 'maintain'}",
        f"Today intake: {_plain(calories)} kcal",
        f"Target calories: {_plain(goal)} kcal",
        f"Remaining calories: {_plain(goal - calories)} kcal",
        f"Macros (g): protein {_plain(summary.protein_g)}, "
        f"carbs {_plain(summary.carbs_g)}, fat {_plain(summary.fat_g)}",
        f"Sugar {_plain(summary.sugar_g)}g, sodium {_plain(summary.sodium_mg)}mg, "
        f"fiber {_plain(summary.fiber_g)}g",
        f"Target range: {low}-{high} kcal",
        f"Write the advice in {language.reply_language}.",
    ]
    return ChatPrompt(user="\n".join(lines))


def build_weekly_prompt(
    profile: UserProfile,
    week: list[DailySummary],
    adherence: WeeklyAdherence,
    language: LanguagePack,
) -> ChatPrompt:
    """Prompt for the weekly report over up to seven daily summaries."""
    serialized = json.dumps(
        [_plain_dict(summary.to_dict()) for summary in week],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    goal = profile.daily_calorie_goal
    lines = [
        "Generate a weekly report from the past 7 days of intake data.",
        'Return strict JSON: {"summary":"...","highlights":["...","..."]}',
        f"User goal: {profile.target_type or 'unknown'}",
        f"Daily calorie goal: {_plain(goal) if goal else 'unknown'}",
        f"Days met: {adherence.days_met}, days over: {adherence.days_over}, "
        f"days under: {adherence.days_under}",
        f"7-day summary: {serialized}",
        f"Write the summary and highlights in {language.reply_language}.",
    ]
    return ChatPrompt(user="\n".join(lines))


def target_band(goal: float) -> tuple[int, int]:
    """Return the rounded +/-10% calorie band around goal."""
    return (
        _round_half_up(goal * (1 - ADHERENCE_TOLERANCE)),
        _round_half_up(goal * (1 + ADHERENCE_TOLERANCE)),
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _plain(value: object) -> object:
    """Render integral floats without a trailing .0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _plain_dict(payload: dict[str, object]) -> dict[str, object]:
    return {key: _plain(value) for key, value in payload.items()}
