"""Gemini generateContent provider with model auto-discovery."""

import logging
from dataclasses import dataclass

import httpx

from nutrition_advisor.domain.errors import (
    ProviderUnavailable,
    provider_error_for_status,
)
from nutrition_advisor.services.cache import Cache
from nutrition_advisor.services.prompts import ChatPrompt
from nutrition_advisor.services.providers import GEMINI, ImageData, LlmProvider

PREFERRED_MODELS = ("gemini-1.5-flash", "gemini-1.5-pro", "gemini-1.0-pro")
FALLBACK_MODEL = "gemini-1.5-pro"
MODEL_CACHE_KEY = "gemini:model"

_logger = logging.getLogger(__name__)


@dataclass
class GeminiModelResolver:
    """Picks the Gemini model, caching the discovered name for a short TTL."""

    http_client: httpx.AsyncClient
    base_url: str
    cache: Cache
    pinned_model: str | None = None
    ttl_seconds: int = 300

    async def resolve(self, api_key: str) -> str:
        """Return the pinned, cached or discovered model name."""
        if self.pinned_model:
            return self.pinned_model
        cached = self.cache.get(MODEL_CACHE_KEY)
        if isinstance(cached, str):
            return cached

        try:
            response = await self.http_client.get(
                f"{self.base_url}/models", params={"key": api_key}, timeout=15
            )
        except httpx.HTTPError as exc:
            _logger.warning("Gemini model list failed: %s", exc)
            return FALLBACK_MODEL
        if response.is_error:
            _logger.warning("Gemini model list failed: status=%s", response.status_code)
            return FALLBACK_MODEL

        try:
            payload = response.json()
        except ValueError:
            _logger.warning("Gemini model list returned a non-JSON body")
            return FALLBACK_MODEL
        selected = _select_model(payload) or FALLBACK_MODEL
        self.cache.set(MODEL_CACHE_KEY, selected, ttl_seconds=self.ttl_seconds)
        return selected


@dataclass
class GeminiProvider(LlmProvider):
    """Provider backed by the Gemini REST API."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    resolver: GeminiModelResolver
    temperature: float = 0.2
    timeout_seconds: float = 60.0
    name: str = GEMINI

    async def complete(self, prompt: ChatPrompt, image: ImageData | None = None) -> str:
        """Call generateContent in JSON mode and join the text parts."""
        model = await self.resolver.resolve(self.api_key)
        parts: list[dict[str, object]] = [{"text": prompt.flatten()}]
        if image is not None:
            parts.append(
                {
                    "inlineData": {
                        "mimeType": image.mime_type,
                        "data": image.base64_data,
                    }
                }
            )
        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
            },
        }
        try:
            response = await self.http_client.post(
                f"{self.base_url}/models/{model}:generateContent",
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise ProviderUnavailable(detail=str(exc)) from exc
        if response.is_error:
            raise provider_error_for_status(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as exc:
            raise ProviderUnavailable(
                status_code=response.status_code, detail="non-JSON response body"
            ) from exc
        return _extract_text(body) or "{}"


def _select_model(payload: object) -> str | None:
    models = payload.get("models", []) if isinstance(payload, dict) else []
    names = [
        str(model.get("name", ""))
        for model in models
        if isinstance(model, dict)
        and "generateContent" in (model.get("supportedGenerationMethods") or [])
    ]
    for preferred in PREFERRED_MODELS:
        if f"models/{preferred}" in names:
            return preferred
    if names and names[0]:
        return names[0].removeprefix("models/")
    return None


def _extract_text(payload: object) -> str:
    candidates = payload.get("candidates", []) if isinstance(payload, dict) else []
    texts: list[str] = []
    for candidate in candidates or []:
        content = candidate.get("content") or {}
        for part in content.get("parts") or []:
            texts.append(str(part.get("text") or ""))
    return "".join(texts)
