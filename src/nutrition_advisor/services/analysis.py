"""Meal analysis, daily advice and weekly report orchestration."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from nutrition_advisor.domain.errors import (
    InvalidInput,
    ModelResponseInvalid,
    ProfileIncomplete,
    ProviderError,
)
from nutrition_advisor.domain.nutrition import (
    DailyAdvice,
    DailySummary,
    NutritionItem,
    WeeklyReport,
)
from nutrition_advisor.domain.profile import UserProfile
from nutrition_advisor.services.coercion import to_number
from nutrition_advisor.services.languages import LanguagePack
from nutrition_advisor.services.normalization import ResponseParser
from nutrition_advisor.services.profile import ProfileService
from nutrition_advisor.services.prompts import (
    ChatPrompt,
    build_advice_prompt,
    build_image_prompt,
    build_text_prompt,
    build_weekly_prompt,
)
from nutrition_advisor.services.providers import (
    ImageData,
    ProviderFactory,
    parse_image_data_uri,
)
from nutrition_advisor.services.records import RecordService
from nutrition_advisor.services.stats import classify_adherence

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AnalysisService:
    """Runs one LLM call per request and normalizes its answer."""

    providers: ProviderFactory
    parser: ResponseParser
    language: LanguagePack
    profile_service: ProfileService
    record_service: RecordService

    async def analyze_image(self, image: str | None) -> NutritionItem:
        """Analyze a base64 data URI photo into one nutrition item."""
        if not image:
            raise InvalidInput("Missing image in request body.")
        image_data = parse_image_data_uri(image)
        profile = self.profile_service.get_profile()
        item = await self._run(
            profile,
            build_image_prompt(self.language),
            self.parser.parse_item,
            image=image_data,
            action="analyze",
        )
        _logger.info("food_name: %s", item.food_name)
        return item

    async def analyze_text(self, description: str | None) -> list[NutritionItem]:
        """Analyze a free-text meal description into one item per food."""
        text = (description or "").strip()
        if not text:
            raise InvalidInput("Missing text in request body.")
        profile = self.profile_service.get_profile()
        items = await self._run(
            profile,
            build_text_prompt(self.language, text),
            self.parser.parse_items,
            action="analyze-text",
        )
        if items:
            _logger.info("food_name: %s", items[0].food_name)
        return items

    async def compute_daily_advice(
        self, profile: UserProfile, today_summary: DailySummary
    ) -> DailyAdvice:
        """Ask for advice on today's intake relative to the profile goal."""
        if not profile.target_type or not profile.daily_calorie_goal:
            raise ProfileIncomplete()
        return await self._run(
            profile,
            build_advice_prompt(profile, today_summary, self.language),
            self.parser.parse_advice,
            action="advice",
        )

    async def daily_advice(self) -> DailyAdvice:
        profile = self.profile_service.get_profile()
        return await self.compute_daily_advice(
            profile, self.record_service.summary_today()
        )

    async def compute_weekly_report(
        self,
        profile: UserProfile,
        week_summaries: list[DailySummary],
        goal: float | None,
    ) -> WeeklyReport:
        """Classify adherence and ask for a written weekly report."""
        adherence = classify_adherence(week_summaries, goal)
        summary, highlights = await self._run(
            profile,
            build_weekly_prompt(profile, week_summaries, adherence, self.language),
            self.parser.parse_weekly,
            action="weekly-report",
        )
        return WeeklyReport(
            summary=summary,
            highlights=highlights,
            total_days=adherence.total_days,
            days_met=adherence.days_met,
            days_over=adherence.days_over,
            days_under=adherence.days_under,
        )

    async def weekly_report(self, date: str | None = None) -> WeeklyReport:
        """Build the report for the Monday-start week containing date."""
        profile = self.profile_service.get_profile()
        week, summaries = self.record_service.week_summaries(date)
        _logger.info(
            "Weekly report range %s..%s days=%s", week.start, week.end, len(summaries)
        )
        goal = to_number(profile.daily_calorie_goal)
        return await self.compute_weekly_report(profile, summaries, goal)

    async def _run(
        self,
        profile: UserProfile,
        prompt: ChatPrompt,
        parse: Callable[[str], T],
        *,
        action: str,
        image: ImageData | None = None,
    ) -> T:
        provider = self.providers.for_profile(profile)
        started_at = time.monotonic()
        try:
            content = await provider.complete(prompt, image)
            return parse(content)
        except ProviderError as exc:
            _logger.warning(
                "AI request failed (%s) action=%s status=%s: %s",
                provider.name,
                action,
                exc.status_code,
                exc.detail or exc.message,
            )
            raise
        except ModelResponseInvalid:
            _logger.error("Model returned invalid JSON. action=%s", action)
            raise
        finally:
            elapsed_ms = int((time.monotonic() - started_at) * 1000)
            _logger.info(
                "request_time_ms: %s provider=%s action=%s",
                elapsed_ms,
                provider.name,
                action,
            )
