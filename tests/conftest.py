"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from nutrition_advisor.adapters.in_memory_repository import (
    InMemoryProfileRepository,
    InMemoryRecordRepository,
)
from nutrition_advisor.config import Settings
from nutrition_advisor.containers import AppContainer
from nutrition_advisor.domain.profile import UserProfile
from nutrition_advisor.services.analysis import AnalysisService
from nutrition_advisor.services.languages import get_language
from nutrition_advisor.services.normalization import ItemNormalizer, ResponseParser
from nutrition_advisor.services.profile import ProfileService
from nutrition_advisor.services.prompts import ChatPrompt
from nutrition_advisor.services.providers import (
    ImageData,
    LlmProvider,
    ProviderFactory,
)
from nutrition_advisor.services.records import RecordService

RICE_BOWL = {
    "food_name": "Rice bowl",
    "calories": 520,
    "protein_g": 18,
    "carbs_g": 80,
    "fat_g": 12,
    "sugar_g": 4,
    "sodium_mg": 640,
    "fiber_g": 3,
    "top_benefits": ["Energy"],
    "health_warnings": [],
    "dietary_advice": "Add some greens.",
}


@dataclass
class FakeLlmProvider(LlmProvider):
    """Fake provider that records prompts and replays queued answers."""

    responses: list[str | Exception] = field(default_factory=list)
    calls: list[tuple[ChatPrompt, ImageData | None]] = field(default_factory=list)
    name: str = "fake"

    def queue(self, payload: object) -> None:
        if isinstance(payload, str | Exception):
            self.responses.append(payload)
        else:
            self.responses.append(json.dumps(payload))

    async def complete(self, prompt: ChatPrompt, image: ImageData | None = None) -> str:
        self.calls.append((prompt, image))
        response = self.responses.pop(0) if self.responses else "{}"
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class ProviderBuilderSpy:
    """Builder that hands out the fake provider and remembers the keys used."""

    provider: FakeLlmProvider
    api_keys: list[str] = field(default_factory=list)

    def __call__(self, api_key: str) -> LlmProvider:
        self.api_keys.append(api_key)
        return self.provider


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        gemini_api_key=None,
        supabase_url=None,
        supabase_service_key=None,
    )


@pytest.fixture
def llm_provider() -> FakeLlmProvider:
    return FakeLlmProvider()


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository(
        profile=UserProfile(target_type="lose", daily_calorie_goal=2000)
    )


def build_analysis_service(
    settings: Settings,
    provider: FakeLlmProvider,
    record_repository: InMemoryRecordRepository,
    profile_repository: InMemoryProfileRepository,
) -> AnalysisService:
    language = get_language(settings.response_language)
    normalizer = ItemNormalizer.for_language(language)
    providers = ProviderFactory(
        default_provider=settings.ai_provider,
        openai_api_key=settings.openai_api_key,
        gemini_api_key=settings.gemini_api_key,
        openai_builder=ProviderBuilderSpy(provider),
        gemini_builder=ProviderBuilderSpy(provider),
    )
    return AnalysisService(
        providers=providers,
        parser=ResponseParser(normalizer),
        language=language,
        profile_service=ProfileService(profile_repository),
        record_service=RecordService(record_repository, normalizer),
    )


@pytest.fixture
def analysis_service(
    settings: Settings,
    llm_provider: FakeLlmProvider,
    record_repository: InMemoryRecordRepository,
    profile_repository: InMemoryProfileRepository,
) -> AnalysisService:
    return build_analysis_service(
        settings, llm_provider, record_repository, profile_repository
    )


@pytest.fixture
def container(settings: Settings, analysis_service: AnalysisService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        record_service=analysis_service.record_service,
        profile_service=analysis_service.profile_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
