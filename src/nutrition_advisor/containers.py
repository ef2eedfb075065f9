"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
from supabase import create_client

from nutrition_advisor.adapters.gemini_client import (
    GeminiModelResolver,
    GeminiProvider,
)
from nutrition_advisor.adapters.in_memory_repository import (
    InMemoryProfileRepository,
    InMemoryRecordRepository,
)
from nutrition_advisor.adapters.openai_chat_client import OpenAIChatProvider
from nutrition_advisor.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_advisor.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from nutrition_advisor.config import Settings
from nutrition_advisor.services.analysis import AnalysisService
from nutrition_advisor.services.cache import InMemoryCache
from nutrition_advisor.services.languages import get_language
from nutrition_advisor.services.normalization import ItemNormalizer, ResponseParser
from nutrition_advisor.services.profile import ProfileRepository, ProfileService
from nutrition_advisor.services.providers import LlmProvider, ProviderFactory
from nutrition_advisor.services.records import RecordRepository, RecordService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    record_service: RecordService
    profile_service: ProfileService
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    language = get_language(resolved_settings.response_language)
    normalizer = ItemNormalizer.for_language(language)

    record_repository: RecordRepository
    profile_repository: ProfileRepository
    if resolved_settings.use_supabase:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        record_repository = SupabaseRecordRepository(supabase_client)
        profile_repository = SupabaseProfileRepository(supabase_client)
    else:
        record_repository = InMemoryRecordRepository()
        profile_repository = InMemoryProfileRepository()

    record_service = RecordService(record_repository, normalizer)
    profile_service = ProfileService(profile_repository)

    http_client = httpx.AsyncClient()
    gemini_resolver = GeminiModelResolver(
        http_client=http_client,
        base_url=resolved_settings.gemini_base_url,
        cache=InMemoryCache(),
        pinned_model=resolved_settings.gemini_model,
        ttl_seconds=resolved_settings.gemini_model_ttl_seconds,
    )

    def build_openai(api_key: str) -> LlmProvider:
        return OpenAIChatProvider.create(
            api_key,
            model=resolved_settings.openai_model,
            timeout_seconds=resolved_settings.ai_timeout_seconds,
            http_client=http_client,
        )

    def build_gemini(api_key: str) -> LlmProvider:
        return GeminiProvider(
            api_key=api_key,
            base_url=resolved_settings.gemini_base_url,
            http_client=http_client,
            resolver=gemini_resolver,
            timeout_seconds=resolved_settings.ai_timeout_seconds,
        )

    providers = ProviderFactory(
        default_provider=resolved_settings.ai_provider,
        openai_api_key=resolved_settings.openai_api_key,
        gemini_api_key=resolved_settings.gemini_api_key,
        openai_builder=build_openai,
        gemini_builder=build_gemini,
    )
    analysis_service = AnalysisService(
        providers=providers,
        parser=ResponseParser(normalizer),
        language=language,
        profile_service=profile_service,
        record_service=record_service,
    )

    async def close_resources() -> None:
        await http_client.aclose()

    return AppContainer(
        settings=resolved_settings,
        record_service=record_service,
        profile_service=profile_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
