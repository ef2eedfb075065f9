"""OpenAI Chat Completions provider."""

from dataclasses import dataclass

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI

from nutrition_advisor.domain.errors import (
    ProviderUnavailable,
    provider_error_for_status,
)
from nutrition_advisor.services.prompts import ChatPrompt
from nutrition_advisor.services.providers import OPENAI, ImageData, LlmProvider


@dataclass
class OpenAIChatProvider(LlmProvider):
    """Provider backed by OpenAI chat completions in JSON mode."""

    client: AsyncOpenAI
    model: str
    name: str = OPENAI

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        timeout_seconds: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> "OpenAIChatProvider":
        """Create a provider; pass http_client to reuse a shared connection pool."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, http_client=http_client
            ),
            model=model,
        )

    async def complete(self, prompt: ChatPrompt, image: ImageData | None = None) -> str:
        """Call chat completions and return the message content."""
        messages: list[dict[str, object]] = []
        if prompt.system:
            messages.append({"role": "system", "content": prompt.system})
        if image is not None:
            messages.append(
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt.user},
                        {"type": "image_url", "image_url": {"url": image.data_url}},
                    ],
                }
            )
        else:
            messages.append({"role": "user", "content": prompt.user})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                response_format={"type": "json_object"},
                messages=messages,
            )
        except APIStatusError as exc:
            raise provider_error_for_status(exc.status_code, exc.message) from exc
        except APIError as exc:
            raise ProviderUnavailable(detail=str(exc)) from exc

        choices = response.choices or []
        content = choices[0].message.content if choices else None
        return content or "{}"
