"""LLM provider interface and per-request provider selection."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from nutrition_advisor.domain.errors import InvalidImageFormat, ProviderNotConfigured
from nutrition_advisor.domain.profile import UserProfile
from nutrition_advisor.services.prompts import ChatPrompt

OPENAI = "openai"
GEMINI = "gemini"

_DATA_URI = re.compile(
    r"^data:(image/(?:jpeg|jpg|png));base64,(.+)$", re.IGNORECASE | re.DOTALL
)


@dataclass(frozen=True)
class ImageData:
    """A base64 encoded JPEG or PNG image."""

    mime_type: str
    base64_data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


def parse_image_data_uri(value: object) -> ImageData:
    """Parse a data:image/{jpeg,png};base64 URI or raise InvalidImageFormat."""
    match = _DATA_URI.match(str(value or ""))
    if not match:
        raise InvalidImageFormat()
    return ImageData(mime_type=match.group(1), base64_data=match.group(2))


class LlmProvider(Protocol):
    """A chat model that answers with raw JSON text."""

    name: str

    async def complete(self, prompt: ChatPrompt, image: ImageData | None = None) -> str:
        """Send the prompt (and image) and return the raw response text."""


@dataclass
class ProviderFactory:
    """Resolves the provider and API key for a request."""

    default_provider: str
    openai_api_key: str | None
    gemini_api_key: str | None
    openai_builder: Callable[[str], LlmProvider]
    gemini_builder: Callable[[str], LlmProvider]

    def provider_name(self, profile: UserProfile) -> str:
        name = (profile.ai_provider or self.default_provider or OPENAI).strip().lower()
        return GEMINI if name == GEMINI else OPENAI

    def for_profile(self, profile: UserProfile) -> LlmProvider:
        """Return a provider; environment keys take precedence over profile keys."""
        if self.provider_name(profile) == GEMINI:
            api_key = self.gemini_api_key or profile.gemini_key
            if not api_key:
                raise ProviderNotConfigured("GEMINI_API_KEY is not configured.")
            return self.gemini_builder(api_key)
        api_key = self.openai_api_key or profile.openai_key
        if not api_key:
            raise ProviderNotConfigured("OPENAI_API_KEY is not configured.")
        return self.openai_builder(api_key)
